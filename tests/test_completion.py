from elevator_sim.completion import can_serve, complete_requests, compute_metrics
from elevator_sim.model import Elevator, Metrics, Request


def request(request_id, floor, direction=None, elevator_id="E1", created=0, completed=None):
    return Request(
        request_id=request_id,
        kind="hall" if direction else "car",
        floor=floor,
        direction=direction,
        created_at_tick=created,
        assigned_elevator_id=elevator_id,
        completed_at_tick=completed,
    )


def open_car(floor=5, direction="idle", targets=()):
    return Elevator(
        "E1",
        current_floor=floor,
        direction=direction,
        door_state="open",
        door_open_ticks_remaining=2,
        target_floors=targets,
    )


def test_car_call_completes_whenever_doors_are_open_here():
    elevators, active, done = complete_requests([open_car(direction="down", targets=(1,))], [request("c", 5)], 9)
    assert active == ()
    assert done[0].completed_at_tick == 9
    assert done[0].direction is None


def test_nothing_completes_with_doors_closed():
    closed = Elevator("E1", current_floor=5)
    _, active, done = complete_requests([closed], [request("c", 5)], 3)
    assert len(active) == 1
    assert done == ()


def test_nothing_completes_on_another_floor():
    _, active, done = complete_requests([open_car(floor=4)], [request("c", 5)], 3)
    assert done == ()


def test_same_direction_hall_call_completes_mid_sweep():
    _, _, done = complete_requests([open_car(direction="up", targets=(9,))], [request("h", 5, "up")], 3)
    assert [r.request_id for r in done] == ["h"]


def test_opposite_call_waits_while_stops_remain_ahead():
    _, active, done = complete_requests([open_car(direction="up", targets=(9,))], [request("h", 5, "down")], 3)
    assert done == ()
    assert [r.request_id for r in active] == ["h"]


def test_opposite_call_completes_at_end_of_run():
    _, _, done = complete_requests([open_car(direction="up", targets=(2,))], [request("h", 5, "down")], 3)
    assert [r.request_id for r in done] == ["h"]


def test_can_serve_rules():
    busy_up = Elevator("E1", current_floor=5, direction="up")
    assert can_serve(busy_up, request("c", 5), [9])
    assert can_serve(busy_up, request("h", 5, "up"), [9])
    assert not can_serve(busy_up, request("h", 5, "down"), [9])
    assert can_serve(busy_up, request("h", 5, "down"), [1, 3])
    assert can_serve(Elevator("E1", current_floor=5), request("h", 5, "down"), [9])


def test_completion_clears_floor_and_pins_display_direction():
    elevator = open_car(direction="idle", targets=(5, 8))
    elevators, _, done = complete_requests([elevator], [request("h", 5, "down")], 4)
    assert len(done) == 1
    assert elevators[0].target_floors == (8,)
    assert elevators[0].last_direction == "down"


def test_floor_kept_while_another_request_still_waits_there():
    elevator = open_car(direction="up", targets=(5, 9))
    elevators, active, done = complete_requests(
        [elevator], [request("up", 5, "up"), request("down", 5, "down")], 4
    )
    assert [r.request_id for r in done] == ["up"]
    assert [r.request_id for r in active] == ["down"]
    assert elevators[0].target_floors == (5, 9)


def test_request_for_unknown_elevator_stays_active():
    _, active, done = complete_requests([open_car()], [request("c", 5, elevator_id="E7")], 4)
    assert done == ()
    assert len(active) == 1


def test_metrics_are_zero_without_completions():
    assert compute_metrics([]) == Metrics(avg_wait_time=0.0, max_wait_time=0, total_requests=0)


def test_metrics_from_completed_requests():
    completed = [request("a", 3, created=0, completed=4), request("b", 3, created=2, completed=4)]
    metrics = compute_metrics(completed)
    assert metrics.total_requests == 2
    assert metrics.avg_wait_time == 3.0
    assert metrics.max_wait_time == 4
