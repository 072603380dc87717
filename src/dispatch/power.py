from __future__ import annotations

from .base import CostScheduler


class PowerScheduler(CostScheduler):
    """Dispatches the nearest car immediately, idle or compatible."""

    mode = "power"
