from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Protocol, Tuple


@dataclass(frozen=True)
class ElevatorSnapshot:
    """Lightweight view of an elevator for dispatch decisions."""

    elevator_id: str
    floor: int
    direction: str
    targets: Tuple[int, ...] = ()

    @property
    def is_idle(self) -> bool:
        return self.direction == "idle"

    @property
    def is_free(self) -> bool:
        """Idle with nothing queued."""
        return self.is_idle and not self.targets


@dataclass(frozen=True)
class PendingCall:
    """Representation of an unassigned request for schedulers."""

    request_id: str
    floor: int
    created_at: int
    direction: Optional[str] = None

    @property
    def is_hall_call(self) -> bool:
        return self.direction is not None


class Scheduler(Protocol):
    """Strategy interface for binding pending calls to elevators."""

    mode: str

    def select_calls(
        self,
        elevator_state: Iterable[ElevatorSnapshot],
        pending_calls: Iterable[PendingCall],
    ) -> Dict[str, str]:
        """
        Return mapping of request_id -> elevator_id for this tick.

        Calls missing from the mapping stay pending; that is a normal
        outcome, not an error.
        """
        ...
