"""Tick-driven multi-elevator building simulation."""

from .config import DEFAULT_CONFIG, BuildingConfig, BuildingConfigModel, load_building_config
from .model import (
    Elevator,
    ElevatorStats,
    Metrics,
    Request,
    SimulationState,
    SystemLogEntry,
)
from .randomness import RandomSource, SeededRandom
from .serialize import state_to_dict
from .simulation import (
    add_request,
    create_initial_state,
    pause_simulation,
    reset_simulation,
    run_ticks,
    set_elevator_hover,
    start_simulation,
    tick_simulation,
    toggle_car_request,
)

__all__ = [
    "BuildingConfig",
    "BuildingConfigModel",
    "DEFAULT_CONFIG",
    "Elevator",
    "ElevatorStats",
    "Metrics",
    "RandomSource",
    "Request",
    "SeededRandom",
    "SimulationState",
    "SystemLogEntry",
    "add_request",
    "create_initial_state",
    "load_building_config",
    "pause_simulation",
    "reset_simulation",
    "run_ticks",
    "set_elevator_hover",
    "start_simulation",
    "state_to_dict",
    "tick_simulation",
    "toggle_car_request",
]
