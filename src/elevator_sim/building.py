from __future__ import annotations

import logging
from dataclasses import replace
from typing import Dict, List, Tuple

from dispatch import ElevatorSnapshot, PendingCall, Scheduler

from .completion import can_serve
from .model import Elevator, Request, SimulationState
from .movement import sort_target_floors

logger = logging.getLogger(__name__)

DispatchResult = Tuple[Tuple[Elevator, ...], Tuple[Request, ...], Tuple[Request, ...]]


def dispatch_requests(state: SimulationState, scheduler: Scheduler) -> DispatchResult:
    """Bind pending requests to elevators for this tick.

    Returns ``(elevators, pending, active)``. Targets are first refreshed
    from the requests each car already owns, then the scheduler places the
    unassigned ones.
    """

    active: List[Request] = []
    unassigned: List[Request] = []
    for request in state.active_requests:
        if state.get_elevator(request.assigned_elevator_id) is None:
            logger.debug("request %s lost elevator %s, back to pending", request.request_id, request.assigned_elevator_id)
            unassigned.append(replace(request, assigned_elevator_id=None))
        else:
            active.append(request)
    for request in state.pending_requests:
        if request.assigned_elevator_id is not None:
            if state.get_elevator(request.assigned_elevator_id) is not None:
                active.append(request)
                continue
            request = replace(request, assigned_elevator_id=None)
        unassigned.append(request)

    floors: Dict[str, List[int]] = {
        elevator.elevator_id: _owned_floors(elevator, active) for elevator in state.elevators
    }

    snapshots = [
        ElevatorSnapshot(
            elevator_id=elevator.elevator_id,
            floor=elevator.current_floor,
            direction=elevator.direction,
            targets=tuple(floors[elevator.elevator_id]),
        )
        for elevator in state.elevators
    ]
    calls = [
        PendingCall(
            request_id=request.request_id,
            floor=request.floor,
            created_at=request.created_at_tick,
            direction=request.direction,
        )
        for request in unassigned
    ]
    assignments = scheduler.select_calls(snapshots, calls)

    pending: List[Request] = []
    for request in unassigned:
        elevator_id = assignments.get(request.request_id)
        if elevator_id is None:
            pending.append(request)
            continue
        active.append(replace(request, assigned_elevator_id=elevator_id))
        floors[elevator_id].append(request.floor)

    elevators = tuple(
        replace(
            elevator,
            target_floors=sort_target_floors(
                elevator.current_floor, elevator.direction, floors[elevator.elevator_id]
            ),
        )
        for elevator in state.elevators
    )
    return elevators, tuple(pending), tuple(active)


def _owned_floors(elevator: Elevator, active: List[Request]) -> List[int]:
    """Current targets plus every floor the car's active requests need.

    A request at the car's own floor that it cannot serve in its current
    direction is skipped, so the car can leave and return for it.
    """

    owned = [r for r in active if r.assigned_elevator_id == elevator.elevator_id]
    floors = list(elevator.target_floors)
    floors.extend(r.floor for r in owned if r.floor != elevator.current_floor)
    away = [f for f in floors if f != elevator.current_floor]
    if any(
        r.floor == elevator.current_floor and can_serve(elevator, r, away) for r in owned
    ):
        floors.append(elevator.current_floor)
    return floors
