from __future__ import annotations

from typing import Dict, Type

from .base import CostScheduler
from .eco import EcoScheduler
from .interface import ElevatorSnapshot, PendingCall, Scheduler
from .normal import NormalScheduler
from .power import PowerScheduler
from .utils import DISQUALIFIED, dispatch_cost, is_compatible, is_moving_toward

__all__ = [
    "CostScheduler",
    "DISQUALIFIED",
    "EcoScheduler",
    "ElevatorSnapshot",
    "NormalScheduler",
    "PendingCall",
    "PowerScheduler",
    "Scheduler",
    "dispatch_cost",
    "get_scheduler",
    "is_compatible",
    "is_moving_toward",
]


SCHEDULER_REGISTRY: Dict[str, Type[CostScheduler]] = {
    "eco": EcoScheduler,
    "normal": NormalScheduler,
    "power": PowerScheduler,
}


def get_scheduler(mode: str) -> Scheduler:
    cls = SCHEDULER_REGISTRY.get(mode.lower())
    if cls is None:
        raise ValueError(f"Unknown operating mode '{mode}'. Available: {', '.join(SCHEDULER_REGISTRY)}")
    return cls()
