from __future__ import annotations

import logging
from typing import Collection, Dict, Iterable, List, Optional

from .interface import ElevatorSnapshot, PendingCall
from .utils import DISQUALIFIED, dispatch_cost

logger = logging.getLogger(__name__)


class CostScheduler:
    """Assigns each pending call to the cheapest elevator under one mode.

    Ties go to the first elevator in iteration order. A best cost at or
    above ``DISQUALIFIED`` leaves the call pending.
    """

    mode = "normal"

    def select_calls(
        self,
        elevator_state: Iterable[ElevatorSnapshot],
        pending_calls: Iterable[PendingCall],
    ) -> Dict[str, str]:
        elevators = list(elevator_state)
        calls = list(pending_calls)
        assignments = self._pre_assign(elevators, calls)
        for call in calls:
            if call.request_id in assignments:
                continue
            candidate = self._choose_elevator(elevators, call)
            if candidate is None:
                continue
            assignments[call.request_id] = candidate.elevator_id
            logger.debug(
                "%s dispatch: request %s (floor %d) -> %s",
                self.mode,
                call.request_id,
                call.floor,
                candidate.elevator_id,
            )
        return assignments

    def _pre_assign(
        self, elevators: List[ElevatorSnapshot], calls: List[PendingCall]
    ) -> Dict[str, str]:
        return {}

    def _choose_elevator(
        self,
        elevators: List[ElevatorSnapshot],
        call: PendingCall,
        exclude: Collection[str] = (),
    ) -> Optional[ElevatorSnapshot]:
        best: Optional[ElevatorSnapshot] = None
        best_cost = 0
        for elevator in elevators:
            if elevator.elevator_id in exclude:
                continue
            cost = dispatch_cost(elevator, call, self.mode)
            if best is None or cost < best_cost:
                best, best_cost = elevator, cost
        if best is None or best_cost >= DISQUALIFIED:
            return None
        return best
