from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Tuple

from .config import POWER_PER_FLOOR, BuildingConfig
from .model import Direction, Elevator
from .randomness import RandomSource


def sort_target_floors(current_floor: int, direction: Direction, targets: Iterable[int]) -> Tuple[int, ...]:
    """Order stops LOOK-style: finish the current sweep, then come back.

    Idle cars just take the nearest stop first.
    """

    unique = list(dict.fromkeys(targets))
    if direction == "idle":
        return tuple(sorted(unique, key=lambda floor: abs(floor - current_floor)))
    if direction == "up":
        ahead = sorted(f for f in unique if f >= current_floor)
        behind = sorted((f for f in unique if f < current_floor), reverse=True)
    else:
        ahead = sorted((f for f in unique if f <= current_floor), reverse=True)
        behind = sorted(f for f in unique if f > current_floor)
    return tuple(ahead + behind)


def next_direction(current_floor: int, direction: Direction, sorted_targets: Tuple[int, ...]) -> Direction:
    if not sorted_targets:
        return "idle"
    head = sorted_targets[0]
    if head > current_floor:
        return "up"
    if head < current_floor:
        return "down"
    rest = sorted_targets[1:]
    if direction == "up" and any(f > current_floor for f in rest):
        return "up"
    if direction == "down" and any(f < current_floor for f in rest):
        return "down"
    return "idle"


def floors_to_move(mode: str, distance: int, rng: RandomSource) -> int:
    if mode == "power":
        return 2 if distance > 1 else 1
    if mode == "eco":
        # Half speed on average.
        return 1 if rng.next_bool() else 0
    return 1


def step_movement(elevator: Elevator, config: BuildingConfig, rng: RandomSource) -> Elevator:
    """Advance a car with closed doors by one tick toward its head target."""

    current = elevator.current_floor
    targets = sort_target_floors(current, elevator.direction, elevator.target_floors)
    direction = next_direction(current, elevator.direction, targets)
    updated = replace(
        elevator,
        target_floors=targets,
        direction=direction,
        last_direction=direction if direction != "idle" else elevator.last_direction,
    )
    if not targets or targets[0] == current:
        return updated

    head = targets[0]
    step = floors_to_move(config.mode, abs(head - current), rng)
    if head > current:
        new_floor = min(current + step, head, config.floors)
    else:
        new_floor = max(current - step, head, 1)

    travelled = abs(new_floor - current)
    return replace(updated, current_floor=new_floor).add_stats(
        1, travelled * POWER_PER_FLOOR[config.mode]
    )
