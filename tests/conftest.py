"""
Shared pytest fixtures for the elevator simulation tests.
"""

from dataclasses import replace

import pytest

from elevator_sim import BuildingConfig, SeededRandom


class FixedRandom:
    """RandomSource that always answers the same coin flip."""

    def __init__(self, value: bool = True) -> None:
        self.value = value
        self.counter = 0

    def next_bool(self) -> bool:
        return self.value

    def next_float(self) -> float:
        return 0.0 if self.value else 0.99

    def next_id(self) -> str:
        self.counter += 1
        return f"id-{self.counter}"


@pytest.fixture
def normal_config() -> BuildingConfig:
    return BuildingConfig(floors=10, elevators=3, tick_duration_ms=100, door_open_ticks=2, mode="normal")


@pytest.fixture
def eco_config(normal_config) -> BuildingConfig:
    return replace(normal_config, mode="eco")


@pytest.fixture
def power_config(normal_config) -> BuildingConfig:
    return replace(normal_config, mode="power")


@pytest.fixture
def rng() -> SeededRandom:
    return SeededRandom(42)


@pytest.fixture
def fixed_rng() -> FixedRandom:
    return FixedRandom(True)
