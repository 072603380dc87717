import pytest
from pydantic import ValidationError

from elevator_sim import DEFAULT_CONFIG, BuildingConfig, BuildingConfigModel, load_building_config


def test_defaults_match_standard_building():
    assert DEFAULT_CONFIG == BuildingConfig(
        floors=10, elevators=3, tick_duration_ms=500, door_open_ticks=2, mode="normal"
    )


def test_accepts_wire_names():
    config = load_building_config(
        {"floors": 6, "elevators": 2, "tickDurationMs": 250, "doorOpenTicks": 3, "mode": "eco"}
    )
    assert config == BuildingConfig(floors=6, elevators=2, tick_duration_ms=250, door_open_ticks=3, mode="eco")


def test_accepts_python_names():
    config = load_building_config({"floors": 4, "door_open_ticks": 1, "mode": "power"})
    assert config.floors == 4
    assert config.door_open_ticks == 1
    assert config.elevators == DEFAULT_CONFIG.elevators


@pytest.mark.parametrize(
    "raw",
    [
        {"floors": 1},
        {"elevators": 0},
        {"doorOpenTicks": 0},
        {"tickDurationMs": 0},
        {"mode": "turbo"},
        {"basement": True},
    ],
)
def test_rejects_invalid_values(raw):
    with pytest.raises(ValidationError):
        load_building_config(raw)


def test_round_trips_through_wire_form():
    model = BuildingConfigModel.from_config(DEFAULT_CONFIG)
    assert model.model_dump(by_alias=True)["doorOpenTicks"] == 2
    assert model.to_config() == DEFAULT_CONFIG
