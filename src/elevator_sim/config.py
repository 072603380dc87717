from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Literal, Mapping

from pydantic import BaseModel, ConfigDict, Field

OperatingMode = Literal["eco", "normal", "power"]

# Power units per floor travelled and per door transition.
POWER_PER_FLOOR: Dict[str, float] = {"eco": 0.5, "normal": 1.0, "power": 2.0}
DOOR_POWER: Dict[str, float] = {"eco": 0.5, "normal": 1.0, "power": 2.0}
IDLE_POWER = 0.0


@dataclass(frozen=True)
class BuildingConfig:
    """Building layout and operating policy for one simulation run."""

    floors: int = 10
    elevators: int = 3
    tick_duration_ms: int = 500
    door_open_ticks: int = 2
    mode: OperatingMode = "normal"


DEFAULT_CONFIG = BuildingConfig()


class BuildingConfigModel(BaseModel):
    """Validated wire form of ``BuildingConfig``."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    floors: int = Field(DEFAULT_CONFIG.floors, ge=2)
    elevators: int = Field(DEFAULT_CONFIG.elevators, ge=1)
    tick_duration_ms: int = Field(DEFAULT_CONFIG.tick_duration_ms, gt=0, alias="tickDurationMs")
    door_open_ticks: int = Field(DEFAULT_CONFIG.door_open_ticks, ge=1, alias="doorOpenTicks")
    mode: OperatingMode = DEFAULT_CONFIG.mode

    def to_config(self) -> BuildingConfig:
        return BuildingConfig(
            floors=self.floors,
            elevators=self.elevators,
            tick_duration_ms=self.tick_duration_ms,
            door_open_ticks=self.door_open_ticks,
            mode=self.mode,
        )

    @classmethod
    def from_config(cls, config: BuildingConfig) -> "BuildingConfigModel":
        return cls(
            floors=config.floors,
            elevators=config.elevators,
            tick_duration_ms=config.tick_duration_ms,
            door_open_ticks=config.door_open_ticks,
            mode=config.mode,
        )


def load_building_config(raw: Mapping[str, Any]) -> BuildingConfig:
    """Validate a plain mapping (snake_case or camelCase keys) into a config.

    Raises ``pydantic.ValidationError`` on bad values.
    """

    return BuildingConfigModel.model_validate(dict(raw)).to_config()
