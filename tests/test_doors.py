from dataclasses import replace

import pytest

from elevator_sim.doors import has_call_here, step_doors
from elevator_sim.model import Elevator, Request


def car_call(floor, elevator_id="E1", created=0):
    return Request(
        request_id=f"car-{floor}",
        kind="car",
        floor=floor,
        created_at_tick=created,
        assigned_elevator_id=elevator_id,
    )


def hall_call(floor, direction, elevator_id=None, created=0):
    return Request(
        request_id=f"hall-{floor}-{direction}",
        kind="hall",
        floor=floor,
        direction=direction,
        created_at_tick=created,
        assigned_elevator_id=elevator_id,
    )


def test_closed_opens_when_head_target_is_here(normal_config):
    elevator = Elevator("E1", current_floor=4, target_floors=(4, 7))
    stepped = step_doors(elevator, normal_config, (), (), since_tick=0)
    assert stepped.door_state == "opening"
    assert stepped.stats.power_consumed == 1.0
    assert stepped.stats.total_travel_time == 1


def test_closed_opens_for_own_active_request_here(normal_config):
    elevator = Elevator("E1", current_floor=4, target_floors=(7,))
    stepped = step_doors(elevator, normal_config, (), (car_call(4),), since_tick=0)
    assert stepped.door_state == "opening"


def test_closed_ignores_other_elevators_requests(normal_config):
    elevator = Elevator("E1", current_floor=4, target_floors=(7,))
    stepped = step_doors(elevator, normal_config, (), (car_call(4, "E2"),), since_tick=0)
    assert stepped is elevator


def test_opening_becomes_open_and_clears_this_floor(normal_config):
    elevator = Elevator("E1", current_floor=4, door_state="opening", target_floors=(4, 7))
    stepped = step_doors(elevator, normal_config, (), (), since_tick=0)
    assert stepped.door_state == "open"
    assert stepped.door_open_ticks_remaining == normal_config.door_open_ticks
    assert stepped.target_floors == (7,)


def test_open_counts_down_at_no_power_cost(normal_config):
    elevator = Elevator("E1", door_state="open", door_open_ticks_remaining=2)
    stepped = step_doors(elevator, normal_config, (), (), since_tick=0)
    assert stepped.door_state == "open"
    assert stepped.door_open_ticks_remaining == 1
    assert stepped.stats.power_consumed == 0.0


def test_hover_freezes_the_timer(normal_config):
    elevator = Elevator("E1", door_state="open", door_open_ticks_remaining=2, is_hovered=True)
    for _ in range(5):
        elevator = step_doors(elevator, normal_config, (), (), since_tick=0)
    assert elevator.door_state == "open"
    assert elevator.door_open_ticks_remaining == 2
    assert elevator.stats.power_consumed == 0.0


def test_open_starts_closing_when_timer_runs_out(eco_config):
    elevator = Elevator("E1", door_state="open", door_open_ticks_remaining=0)
    stepped = step_doors(elevator, eco_config, (), (), since_tick=0)
    assert stepped.door_state == "closing"
    assert stepped.stats.power_consumed == 0.5


def test_open_holds_for_a_new_request_here(normal_config):
    elevator = Elevator("E1", current_floor=3, door_state="open", door_open_ticks_remaining=0)
    stepped = step_doors(elevator, normal_config, (), (car_call(3),), since_tick=5)
    assert stepped.door_state == "open"
    assert stepped.door_open_ticks_remaining == normal_config.door_open_ticks


def test_closing_reopens_for_a_fresh_hall_call(normal_config):
    elevator = Elevator("E1", current_floor=1, door_state="closing")
    stepped = step_doors(elevator, normal_config, (hall_call(1, "up", created=6),), (), since_tick=6)
    assert stepped.door_state == "opening"


def test_closing_ignores_stale_unassigned_calls(normal_config):
    elevator = Elevator("E1", current_floor=1, door_state="closing")
    stepped = step_doors(elevator, normal_config, (hall_call(1, "up", created=2),), (), since_tick=6)
    assert stepped.door_state == "closed"


def test_closing_ignores_incompatible_call_with_stops_ahead(normal_config):
    elevator = Elevator("E1", current_floor=5, direction="up", door_state="closing", target_floors=(8,))
    active = (hall_call(5, "down", elevator_id="E1"),)
    stepped = step_doors(elevator, normal_config, (), active, since_tick=0)
    assert stepped.door_state == "closed"


def test_closing_finishes(power_config):
    elevator = Elevator("E1", door_state="closing")
    stepped = step_doors(elevator, power_config, (), (), since_tick=0)
    assert stepped.door_state == "closed"
    assert stepped.stats.power_consumed == 2.0


def test_has_call_here_accepts_turnaround():
    elevator = Elevator("E1", current_floor=5, direction="up", target_floors=())
    assert has_call_here(elevator, (hall_call(5, "down", elevator_id="E1"),))


@pytest.mark.parametrize("door_open_ticks", [1, 2, 4])
def test_open_lasts_one_tick_longer_than_the_timer(normal_config, door_open_ticks):
    config = replace(normal_config, door_open_ticks=door_open_ticks)
    elevator = step_doors(
        Elevator("E1", current_floor=4, door_state="opening", target_floors=(4,)),
        config,
        (),
        (),
        since_tick=0,
    )
    open_ticks = 0
    while elevator.door_state == "open":
        open_ticks += 1
        elevator = step_doors(elevator, config, (), (), since_tick=0)
    assert open_ticks == door_open_ticks + 1
    assert elevator.door_state == "closing"
