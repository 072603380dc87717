from __future__ import annotations

import logging
from typing import Collection, List, Optional

from .base import CostScheduler
from .interface import ElevatorSnapshot, PendingCall

logger = logging.getLogger(__name__)


class EcoScheduler(CostScheduler):
    """Collective control that piggybacks calls onto cars already running.

    An idle car is only woken when every car is idle; otherwise the call
    waits for a compatible moving car.
    """

    mode = "eco"

    def _choose_elevator(
        self,
        elevators: List[ElevatorSnapshot],
        call: PendingCall,
        exclude: Collection[str] = (),
    ) -> Optional[ElevatorSnapshot]:
        candidate = super()._choose_elevator(elevators, call, exclude)
        if candidate is None or not candidate.is_idle:
            return candidate
        if any(not e.is_idle for e in elevators if e.elevator_id != candidate.elevator_id):
            logger.debug(
                "eco dispatch: keeping %s idle, request %s stays pending",
                candidate.elevator_id,
                call.request_id,
            )
            return None
        return candidate
