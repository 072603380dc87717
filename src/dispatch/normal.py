from __future__ import annotations

import logging
from collections import defaultdict
from typing import Dict, List, Optional, Tuple

from .base import CostScheduler
from .interface import ElevatorSnapshot, PendingCall

logger = logging.getLogger(__name__)


class NormalScheduler(CostScheduler):
    """Nearest-car dispatch with a split for opposite calls on one floor.

    When a floor holds both an UP and a DOWN hall call and at least two
    cars are free, the two calls go to different cars. One floor is split
    per dispatch cycle; the oldest pair wins.
    """

    mode = "normal"

    def _pre_assign(
        self, elevators: List[ElevatorSnapshot], calls: List[PendingCall]
    ) -> Dict[str, str]:
        if sum(1 for e in elevators if e.is_free) < 2:
            return {}
        pair = self._oldest_opposite_pair(calls)
        if pair is None:
            return {}
        up_call, down_call = pair

        up_elevator = self._choose_elevator(elevators, up_call)
        if up_elevator is None:
            return {}
        assignments = {up_call.request_id: up_elevator.elevator_id}
        down_elevator = self._choose_elevator(
            elevators, down_call, exclude={up_elevator.elevator_id}
        )
        if down_elevator is not None:
            assignments[down_call.request_id] = down_elevator.elevator_id
        logger.debug(
            "normal dispatch: split floor %d between %s (up) and %s (down)",
            up_call.floor,
            up_elevator.elevator_id,
            down_elevator.elevator_id if down_elevator else "nobody",
        )
        return assignments

    def _oldest_opposite_pair(
        self, calls: List[PendingCall]
    ) -> Optional[Tuple[PendingCall, PendingCall]]:
        by_floor: Dict[int, Dict[str, PendingCall]] = defaultdict(dict)
        for call in sorted(calls, key=lambda c: c.created_at):
            if call.is_hall_call:
                by_floor[call.floor].setdefault(call.direction, call)

        pairs = [
            (calls_at["up"], calls_at["down"])
            for calls_at in by_floor.values()
            if "up" in calls_at and "down" in calls_at
        ]
        if not pairs:
            return None
        return min(pairs, key=lambda p: (p[0].created_at + p[1].created_at, p[0].floor))
