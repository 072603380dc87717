from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable

from .completion import can_serve
from .config import DOOR_POWER, IDLE_POWER, BuildingConfig
from .model import Elevator, Request

logger = logging.getLogger(__name__)


def has_call_here(
    elevator: Elevator,
    active: Iterable[Request],
    pending: Iterable[Request] = (),
    since_tick: int = 0,
) -> bool:
    """Whether a rider this car can serve is waiting at its floor.

    Active requests must be assigned to this car. Pending ones count only
    if they arrived at or after ``since_tick``, i.e. someone just pressed
    the button.
    """

    floor = elevator.current_floor
    others = [t for t in elevator.target_floors if t != floor]
    for request in active:
        if (
            request.assigned_elevator_id == elevator.elevator_id
            and request.floor == floor
            and can_serve(elevator, request, others)
        ):
            return True
    for request in pending:
        if (
            request.floor == floor
            and request.created_at_tick >= since_tick
            and request.assigned_elevator_id in (None, elevator.elevator_id)
            and can_serve(elevator, request, others)
        ):
            return True
    return False


def _without_floor(elevator: Elevator) -> tuple:
    return tuple(t for t in elevator.target_floors if t != elevator.current_floor)


def step_doors(
    elevator: Elevator,
    config: BuildingConfig,
    pending: Iterable[Request],
    active: Iterable[Request],
    since_tick: int,
) -> Elevator:
    """Advance the door state machine by one tick.

    A car left ``closed`` by this step is free to move this tick; any other
    outcome means the doors used the tick.
    """

    state = elevator.door_state
    door_power = DOOR_POWER[config.mode]
    pending = tuple(pending)
    active = tuple(active)

    if state == "closed":
        targets = elevator.target_floors
        arrived = bool(targets) and targets[0] == elevator.current_floor
        if arrived or has_call_here(elevator, active):
            logger.debug("%s opening at floor %d", elevator.elevator_id, elevator.current_floor)
            return replace(elevator, door_state="opening").add_stats(1, door_power)
        return elevator

    if state == "opening":
        return replace(
            elevator,
            door_state="open",
            door_open_ticks_remaining=config.door_open_ticks,
            target_floors=_without_floor(elevator),
        ).add_stats(1, door_power)

    if state == "open":
        if elevator.is_hovered:
            return elevator.add_stats(1, IDLE_POWER)
        if elevator.door_open_ticks_remaining > 0:
            return replace(
                elevator, door_open_ticks_remaining=elevator.door_open_ticks_remaining - 1
            ).add_stats(1, IDLE_POWER)
        if has_call_here(elevator, active, pending, since_tick):
            logger.debug("%s holding doors for a new call at floor %d", elevator.elevator_id, elevator.current_floor)
            return replace(
                elevator,
                door_open_ticks_remaining=config.door_open_ticks,
                target_floors=_without_floor(elevator),
            ).add_stats(1, IDLE_POWER)
        return replace(elevator, door_state="closing").add_stats(1, door_power)

    # closing
    if has_call_here(elevator, active, pending, since_tick):
        logger.debug("%s re-opening at floor %d", elevator.elevator_id, elevator.current_floor)
        return replace(elevator, door_state="opening").add_stats(1, door_power)
    return replace(elevator, door_state="closed").add_stats(1, door_power)
