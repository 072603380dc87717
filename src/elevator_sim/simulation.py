"""Public entry points: build a state, feed it commands, advance it.

Every function returns a new ``SimulationState``; the input is never
modified, so independent runs can share nothing but the config.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Optional, Sequence

from dispatch import get_scheduler

from .building import dispatch_requests
from .completion import complete_requests, compute_metrics
from .config import DEFAULT_CONFIG, BuildingConfig
from .doors import step_doors
from .journal import append_travel_log, diff_elevators, prepend_logs, request_entry
from .model import Elevator, Request, SimulationState, TravelDirection
from .movement import sort_target_floors, step_movement
from .randomness import RandomSource, SeededRandom


def create_initial_state(config: BuildingConfig = DEFAULT_CONFIG) -> SimulationState:
    elevators = tuple(Elevator(elevator_id=f"E{i + 1}") for i in range(config.elevators))
    return SimulationState(
        elevators=elevators,
        travel_log={e.elevator_id: (e.current_floor,) for e in elevators},
    )


def reset_simulation(config: BuildingConfig = DEFAULT_CONFIG) -> SimulationState:
    return create_initial_state(config)


def start_simulation(state: SimulationState) -> SimulationState:
    return replace(state, running=True)


def pause_simulation(state: SimulationState) -> SimulationState:
    return replace(state, running=False)


def add_request(
    state: SimulationState,
    floor: int,
    direction: TravelDirection,
    rng: Optional[RandomSource] = None,
    tick_duration_ms: int = DEFAULT_CONFIG.tick_duration_ms,
) -> SimulationState:
    """Queue a hall call at ``floor`` for riders heading ``direction``."""

    rng = rng or SeededRandom()
    request = Request(
        request_id=rng.next_id(),
        kind="hall",
        floor=floor,
        direction=direction,
        created_at_tick=state.clock_tick,
    )
    return replace(
        state,
        pending_requests=state.pending_requests + (request,),
        system_logs=prepend_logs(
            state.system_logs, [request_entry(request, state.clock_tick, rng, tick_duration_ms)]
        ),
    )


def toggle_car_request(
    state: SimulationState,
    elevator_id: str,
    floor: int,
    rng: Optional[RandomSource] = None,
    tick_duration_ms: int = DEFAULT_CONFIG.tick_duration_ms,
) -> SimulationState:
    """Press a car button: select ``floor`` or, if already selected, cancel it."""

    elevator = state.get_elevator(elevator_id)
    if elevator is None:
        return state

    if floor in elevator.target_floors:
        def is_this_call(request: Request) -> bool:
            return (
                request.kind == "car"
                and request.assigned_elevator_id == elevator_id
                and request.floor == floor
            )

        cancelled = replace(
            elevator, target_floors=tuple(t for t in elevator.target_floors if t != floor)
        )
        return replace(
            state,
            elevators=tuple(cancelled if e is elevator else e for e in state.elevators),
            active_requests=tuple(r for r in state.active_requests if not is_this_call(r)),
            pending_requests=tuple(r for r in state.pending_requests if not is_this_call(r)),
        )

    rng = rng or SeededRandom()
    request = Request(
        request_id=rng.next_id(),
        kind="car",
        floor=floor,
        created_at_tick=state.clock_tick,
        assigned_elevator_id=elevator_id,
    )
    selected = replace(
        elevator,
        target_floors=sort_target_floors(
            elevator.current_floor, elevator.direction, elevator.target_floors + (floor,)
        ),
    )
    return replace(
        state,
        elevators=tuple(selected if e is elevator else e for e in state.elevators),
        active_requests=state.active_requests + (request,),
        system_logs=prepend_logs(
            state.system_logs, [request_entry(request, state.clock_tick, rng, tick_duration_ms)]
        ),
    )


def set_elevator_hover(state: SimulationState, elevator_id: str, is_hovered: bool) -> SimulationState:
    if state.get_elevator(elevator_id) is None:
        return state
    return replace(
        state,
        elevators=tuple(
            replace(e, is_hovered=is_hovered) if e.elevator_id == elevator_id else e
            for e in state.elevators
        ),
    )


def _step_elevator(
    elevator: Elevator,
    config: BuildingConfig,
    state: SimulationState,
    pending: Sequence[Request],
    active: Sequence[Request],
    rng: RandomSource,
) -> Elevator:
    stepped = step_doors(elevator, config, pending, active, since_tick=state.clock_tick)
    if elevator.door_state == "closed" and stepped.door_state == "closed":
        return step_movement(stepped, config, rng)
    return stepped


def tick_simulation(
    state: SimulationState,
    config: BuildingConfig,
    rng: Optional[RandomSource] = None,
) -> SimulationState:
    """Advance the building by exactly one tick.

    Order: dispatch, then per car doors followed by movement when the doors
    stayed shut, then completion and metrics, then the travel and event logs.
    """

    rng = rng or SeededRandom()
    clock_tick = state.clock_tick + 1

    elevators, pending, active = dispatch_requests(state, get_scheduler(config.mode))
    elevators = tuple(
        _step_elevator(elevator, config, state, pending, active, rng) for elevator in elevators
    )
    elevators, active, completed = complete_requests(elevators, active, clock_tick)
    completed_requests = state.completed_requests + completed

    return replace(
        state,
        clock_tick=clock_tick,
        elevators=elevators,
        pending_requests=pending,
        active_requests=active,
        completed_requests=completed_requests,
        metrics=compute_metrics(completed_requests),
        travel_log=append_travel_log(state.travel_log, state.elevators, elevators),
        system_logs=prepend_logs(
            state.system_logs,
            diff_elevators(state.elevators, elevators, clock_tick, rng, config.tick_duration_ms),
        ),
    )


def run_ticks(
    state: SimulationState,
    config: BuildingConfig,
    ticks: int,
    rng: Optional[RandomSource] = None,
) -> SimulationState:
    rng = rng or SeededRandom()
    for _ in range(ticks):
        state = tick_simulation(state, config, rng)
    return state
