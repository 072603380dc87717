from __future__ import annotations

import logging
from dataclasses import replace
from typing import Dict, Iterable, List, Sequence, Tuple

from .model import Elevator, Metrics, Request

logger = logging.getLogger(__name__)


def has_targets_ahead(elevator: Elevator, targets: Iterable[int]) -> bool:
    floor = elevator.current_floor
    if elevator.direction == "up":
        return any(t > floor for t in targets)
    if elevator.direction == "down":
        return any(t < floor for t in targets)
    return False


def can_serve(elevator: Elevator, request: Request, other_targets: Iterable[int]) -> bool:
    """Direction side of the completion rule, ignoring position and doors.

    Car calls and idle cars always qualify, as does a car travelling the
    caller's way. An opposite call only qualifies at the end of the run.
    """

    if request.direction is None:
        return True
    if elevator.direction == "idle" or elevator.direction == request.direction:
        return True
    return not has_targets_ahead(elevator, other_targets)


def is_satisfied(elevator: Elevator, request: Request) -> bool:
    if elevator.current_floor != request.floor or elevator.door_state != "open":
        return False
    others = [t for t in elevator.target_floors if t != elevator.current_floor]
    return can_serve(elevator, request, others)


def complete_requests(
    elevators: Sequence[Elevator],
    active: Iterable[Request],
    clock_tick: int,
) -> Tuple[Tuple[Elevator, ...], Tuple[Request, ...], Tuple[Request, ...]]:
    """Split active requests into still-active and newly completed ones.

    Returns ``(elevators, still_active, completed)``. Served floors are
    cleared from each car's targets unless another of its requests still
    waits there.
    """

    by_id = {e.elevator_id: e for e in elevators}
    still_active: List[Request] = []
    completed: List[Request] = []
    served: Dict[str, List[Request]] = {}

    for request in active:
        elevator = by_id.get(request.assigned_elevator_id)
        if elevator is None or not is_satisfied(elevator, request):
            still_active.append(request)
            continue
        done = replace(request, completed_at_tick=clock_tick)
        completed.append(done)
        served.setdefault(elevator.elevator_id, []).append(done)
        logger.debug(
            "request %s completed by %s at floor %d (waited %d ticks)",
            done.request_id,
            elevator.elevator_id,
            done.floor,
            done.wait_time,
        )

    updated: List[Elevator] = []
    for elevator in elevators:
        requests = served.get(elevator.elevator_id)
        if not requests:
            updated.append(elevator)
            continue
        waiting_here = any(
            r.assigned_elevator_id == elevator.elevator_id and r.floor == elevator.current_floor
            for r in still_active
        )
        targets = elevator.target_floors
        if not waiting_here:
            targets = tuple(t for t in targets if t != elevator.current_floor)
        last_direction = elevator.last_direction
        for request in requests:
            if request.direction is not None:
                last_direction = request.direction
        updated.append(replace(elevator, target_floors=targets, last_direction=last_direction))

    return tuple(updated), tuple(still_active), tuple(completed)


def compute_metrics(completed: Iterable[Request]) -> Metrics:
    waits = [r.wait_time for r in completed if r.wait_time is not None]
    if not waits:
        return Metrics()
    return Metrics(
        avg_wait_time=sum(waits) / len(waits),
        max_wait_time=max(waits),
        total_requests=len(waits),
    )
