from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Dict, Iterable, List, Sequence, Tuple

from .config import DEFAULT_CONFIG
from .model import (
    MAX_SYSTEM_LOGS,
    DoorLogDetails,
    Elevator,
    LogDetails,
    MovementLogDetails,
    Request,
    RequestLogDetails,
    SystemLogEntry,
)
from .randomness import RandomSource

# Tick 0 of every run.
SIMULATION_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def simulated_timestamp(tick: int, tick_duration_ms: int) -> str:
    return (SIMULATION_EPOCH + timedelta(milliseconds=tick * tick_duration_ms)).isoformat()


def make_entry(
    tick: int,
    summary: str,
    details: LogDetails,
    rng: RandomSource,
    tick_duration_ms: int = DEFAULT_CONFIG.tick_duration_ms,
) -> SystemLogEntry:
    if isinstance(details, RequestLogDetails):
        kind = "request"
    elif isinstance(details, DoorLogDetails):
        kind = "door"
    else:
        kind = "movement"
    return SystemLogEntry(
        entry_id=rng.next_id(),
        tick=tick,
        kind=kind,
        summary=summary,
        details=details,
        timestamp=simulated_timestamp(tick, tick_duration_ms),
    )


def prepend_logs(
    logs: Tuple[SystemLogEntry, ...], entries: Iterable[SystemLogEntry]
) -> Tuple[SystemLogEntry, ...]:
    return (tuple(entries) + logs)[:MAX_SYSTEM_LOGS]


def request_entry(
    request: Request,
    tick: int,
    rng: RandomSource,
    tick_duration_ms: int = DEFAULT_CONFIG.tick_duration_ms,
) -> SystemLogEntry:
    if request.kind == "car":
        summary = f"Car call in {request.assigned_elevator_id} to floor {request.floor}"
    else:
        summary = f"Hall call at floor {request.floor} ({request.direction})"
    details = RequestLogDetails(
        request_id=request.request_id,
        kind=request.kind,
        floor=request.floor,
        direction=request.direction,
        elevator_id=request.assigned_elevator_id,
    )
    return make_entry(tick, summary, details, rng, tick_duration_ms)


def diff_elevators(
    previous: Sequence[Elevator],
    current: Sequence[Elevator],
    tick: int,
    rng: RandomSource,
    tick_duration_ms: int = DEFAULT_CONFIG.tick_duration_ms,
) -> List[SystemLogEntry]:
    """Describe what changed for each car between two snapshots."""

    before = {e.elevator_id: e for e in previous}
    entries: List[SystemLogEntry] = []
    for elevator in current:
        prev = before.get(elevator.elevator_id)
        if prev is None:
            continue
        name = elevator.elevator_id
        if prev.current_floor != elevator.current_floor:
            details = MovementLogDetails(
                elevator_id=name,
                from_floor=prev.current_floor,
                to_floor=elevator.current_floor,
                direction=elevator.direction,
            )
            summary = f"{name} moved {elevator.direction} from {prev.current_floor} to {elevator.current_floor}"
            entries.append(make_entry(tick, summary, details, rng, tick_duration_ms))
        elif prev.direction != "idle" and elevator.direction == "idle":
            details = MovementLogDetails(
                elevator_id=name,
                from_floor=prev.current_floor,
                to_floor=elevator.current_floor,
                direction="idle",
                stopped=True,
            )
            summary = f"{name} stopped at floor {elevator.current_floor}"
            entries.append(make_entry(tick, summary, details, rng, tick_duration_ms))

        if prev.door_state != elevator.door_state:
            details = DoorLogDetails(
                elevator_id=name,
                floor=elevator.current_floor,
                from_state=prev.door_state,
                to_state=elevator.door_state,
            )
            summary = f"{name} door {prev.door_state} -> {elevator.door_state} at floor {elevator.current_floor}"
            entries.append(make_entry(tick, summary, details, rng, tick_duration_ms))
    return entries


def append_travel_log(
    travel_log: Dict[str, Tuple[int, ...]],
    previous: Sequence[Elevator],
    current: Sequence[Elevator],
) -> Dict[str, Tuple[int, ...]]:
    before = {e.elevator_id: e.current_floor for e in previous}
    updated = dict(travel_log)
    for elevator in current:
        start = before.get(elevator.elevator_id)
        if start is None or start == elevator.current_floor:
            continue
        visited = updated.get(elevator.elevator_id, (start,))
        if visited[-1] != elevator.current_floor:
            updated[elevator.elevator_id] = visited + (elevator.current_floor,)
    return updated
