from __future__ import annotations

from .interface import ElevatorSnapshot, PendingCall

DISQUALIFIED = 1000


def is_moving_toward(elevator: ElevatorSnapshot, floor: int) -> bool:
    return (elevator.direction == "up" and floor >= elevator.floor) or (
        elevator.direction == "down" and floor <= elevator.floor
    )


def is_compatible(elevator: ElevatorSnapshot, call: PendingCall) -> bool:
    """Whether the elevator can take the call without breaking its sweep.

    Car calls are always compatible. Hall calls need an idle car, or one
    heading toward the floor in the caller's direction.
    """

    if not call.is_hall_call:
        return True
    if elevator.is_idle:
        return True
    return is_moving_toward(elevator, call.floor) and elevator.direction == call.direction


def dispatch_cost(elevator: ElevatorSnapshot, call: PendingCall, mode: str) -> int:
    """Distance-based cost with the operating mode's direction adjustment."""

    cost = abs(elevator.floor - call.floor)
    if not call.is_hall_call or elevator.is_idle:
        return cost
    if is_compatible(elevator, call):
        return cost - (50 if mode == "eco" else 1)
    return cost + DISQUALIFIED
