"""CLI for replaying elevator scenarios defined in JSON configs."""
from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from elevator_sim import (
    BuildingConfig,
    SeededRandom,
    SimulationState,
    add_request,
    create_initial_state,
    load_building_config,
    state_to_dict,
    tick_simulation,
    toggle_car_request,
)

logger = logging.getLogger(__name__)


def _apply_scheduled_calls(
    state: SimulationState, calls: Iterable[Dict], rng: SeededRandom, tick_duration_ms: int
) -> SimulationState:
    for call in calls:
        if call.get("tick", 0) != state.clock_tick:
            continue
        if call.get("kind", "hall") == "car":
            state = toggle_car_request(
                state, call["elevator_id"], call["floor"], rng, tick_duration_ms
            )
        else:
            state = add_request(state, call["floor"], call["direction"], rng, tick_duration_ms)
    return state


def run_simulation(config: BuildingConfig, scenario: Dict) -> SimulationState:
    duration = scenario.get("duration", 100)
    calls = scenario.get("calls", [])
    rng = SeededRandom(scenario.get("random_seed"))

    state = create_initial_state(config)
    for _ in range(duration):
        state = _apply_scheduled_calls(state, calls, rng, config.tick_duration_ms)
        state = tick_simulation(state, config, rng)
    return state


def summarize(scenario: Dict, config: BuildingConfig, state: SimulationState) -> Dict:
    snapshot = state_to_dict(state)
    return {
        "scenario": scenario.get("name"),
        "description": scenario.get("description"),
        "mode": config.mode,
        "duration": state.clock_tick,
        "final_metrics": snapshot["metrics"],
        "unserved": len(state.pending_requests) + len(state.active_requests),
        "elevators": [
            {"id": e["id"], "floor": e["currentFloor"], **e["stats"]} for e in snapshot["elevators"]
        ],
        "travel_log": snapshot["travelLog"],
    }


def save_results(output_path: Optional[Path], data: Dict) -> None:
    if not output_path:
        return
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(data, indent=2))


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("config", type=Path, help="Path to a JSON scenario configuration file")
    parser.add_argument(
        "--output",
        type=Path,
        help="Optional file path to write the run summary as JSON",
    )
    parser.add_argument("--verbose", action="store_true", help="Log dispatch and door decisions")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    scenario = json.loads(args.config.read_text())
    scenario.setdefault("name", args.config.stem)
    config = load_building_config(scenario.get("building", {}))
    logger.info("running scenario %s in %s mode", scenario["name"], config.mode)

    state = run_simulation(config, scenario)
    results = summarize(scenario, config, state)
    save_results(args.output, results)

    print(f"Scenario: {results['scenario']}")
    if results["description"]:
        print(results["description"])
    print(f"Mode: {results['mode']}")
    print(f"Duration: {results['duration']} ticks")
    print("Final metrics:")
    for key, value in results["final_metrics"].items():
        print(f"  {key}: {value}")
    print(f"Unserved requests: {results['unserved']}")
    for elevator in results["elevators"]:
        print(
            f"  {elevator['id']}: floor {elevator['floor']}, "
            f"travel {elevator['totalTravelTime']} ticks, power {elevator['powerConsumed']}"
        )
    if args.output:
        print(f"Saved summary to {args.output}")


if __name__ == "__main__":
    main()
