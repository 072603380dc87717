"""Immutable value types for the simulated building.

Every engine takes these values and returns new ones via
``dataclasses.replace``; nothing here is mutated after construction.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Dict, Literal, Optional, Tuple, Union

Direction = Literal["up", "down", "idle"]
TravelDirection = Literal["up", "down"]
DoorState = Literal["closed", "opening", "open", "closing"]
RequestKind = Literal["hall", "car"]

MAX_SYSTEM_LOGS = 500


@dataclass(frozen=True)
class ElevatorStats:
    total_travel_time: int = 0
    power_consumed: float = 0.0


@dataclass(frozen=True)
class Elevator:
    """One car. ``direction`` drives movement and may go idle at a stop;
    ``last_direction`` is only for display and keeps the last heading."""

    elevator_id: str
    current_floor: int = 1
    direction: Direction = "idle"
    last_direction: Direction = "idle"
    door_state: DoorState = "closed"
    door_open_ticks_remaining: int = 0
    is_hovered: bool = False
    target_floors: Tuple[int, ...] = ()
    stats: ElevatorStats = field(default_factory=ElevatorStats)

    def add_stats(self, time: int, power: float) -> "Elevator":
        return replace(
            self,
            stats=ElevatorStats(
                total_travel_time=self.stats.total_travel_time + time,
                power_consumed=self.stats.power_consumed + power,
            ),
        )


@dataclass(frozen=True)
class Request:
    """A hall call (with direction) or a car call (without)."""

    request_id: str
    kind: RequestKind
    floor: int
    created_at_tick: int
    direction: Optional[TravelDirection] = None
    assigned_elevator_id: Optional[str] = None
    completed_at_tick: Optional[int] = None

    @property
    def wait_time(self) -> Optional[int]:
        if self.completed_at_tick is None:
            return None
        return self.completed_at_tick - self.created_at_tick


@dataclass(frozen=True)
class Metrics:
    avg_wait_time: float = 0.0
    max_wait_time: int = 0
    total_requests: int = 0


@dataclass(frozen=True)
class RequestLogDetails:
    request_id: str
    kind: RequestKind
    floor: int
    direction: Optional[TravelDirection] = None
    elevator_id: Optional[str] = None


@dataclass(frozen=True)
class MovementLogDetails:
    elevator_id: str
    from_floor: int
    to_floor: int
    direction: Direction
    stopped: bool = False


@dataclass(frozen=True)
class DoorLogDetails:
    elevator_id: str
    floor: int
    from_state: DoorState
    to_state: DoorState


LogDetails = Union[RequestLogDetails, MovementLogDetails, DoorLogDetails]


@dataclass(frozen=True)
class SystemLogEntry:
    entry_id: str
    tick: int
    kind: Literal["request", "movement", "door"]
    summary: str
    details: LogDetails
    timestamp: str


@dataclass(frozen=True)
class SimulationState:
    clock_tick: int = 0
    elevators: Tuple[Elevator, ...] = ()
    pending_requests: Tuple[Request, ...] = ()
    active_requests: Tuple[Request, ...] = ()
    completed_requests: Tuple[Request, ...] = ()
    metrics: Metrics = field(default_factory=Metrics)
    # Floors visited per elevator, oldest first.
    travel_log: Dict[str, Tuple[int, ...]] = field(default_factory=dict)
    # Most recent first, capped at MAX_SYSTEM_LOGS.
    system_logs: Tuple[SystemLogEntry, ...] = ()
    running: bool = False

    def get_elevator(self, elevator_id: Optional[str]) -> Optional[Elevator]:
        for elevator in self.elevators:
            if elevator.elevator_id == elevator_id:
                return elevator
        return None
