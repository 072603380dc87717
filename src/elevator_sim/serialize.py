from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, Optional

from .model import Elevator, Metrics, Request, SimulationState, SystemLogEntry


def elevator_to_dict(elevator: Elevator) -> Dict[str, Any]:
    return {
        "id": elevator.elevator_id,
        "currentFloor": elevator.current_floor,
        "direction": elevator.direction,
        "lastDirection": elevator.last_direction,
        "doorState": elevator.door_state,
        "doorOpenTicksRemaining": elevator.door_open_ticks_remaining,
        "isHovered": elevator.is_hovered,
        "targetFloors": list(elevator.target_floors),
        "stats": {
            "totalTravelTime": elevator.stats.total_travel_time,
            "powerConsumed": elevator.stats.power_consumed,
        },
    }


def request_to_dict(request: Request) -> Dict[str, Any]:
    data: Dict[str, Optional[Any]] = {
        "id": request.request_id,
        "type": request.kind,
        "floor": request.floor,
        "direction": request.direction,
        "createdAtTick": request.created_at_tick,
        "assignedElevatorId": request.assigned_elevator_id,
        "completedAtTick": request.completed_at_tick,
    }
    return {key: value for key, value in data.items() if value is not None}


def metrics_to_dict(metrics: Metrics) -> Dict[str, Any]:
    return {
        "avgWaitTime": metrics.avg_wait_time,
        "maxWaitTime": metrics.max_wait_time,
        "totalRequests": metrics.total_requests,
    }


def log_entry_to_dict(entry: SystemLogEntry) -> Dict[str, Any]:
    return {
        "id": entry.entry_id,
        "tick": entry.tick,
        "type": entry.kind,
        "summary": entry.summary,
        "details": asdict(entry.details),
        "timestamp": entry.timestamp,
    }


def state_to_dict(state: SimulationState) -> Dict[str, Any]:
    """JSON-safe view of a state, keyed the way UI clients expect."""

    return {
        "clockTick": state.clock_tick,
        "elevators": [elevator_to_dict(e) for e in state.elevators],
        "pendingRequests": [request_to_dict(r) for r in state.pending_requests],
        "activeRequests": [request_to_dict(r) for r in state.active_requests],
        "completedRequests": [request_to_dict(r) for r in state.completed_requests],
        "metrics": metrics_to_dict(state.metrics),
        "travelLog": {key: list(floors) for key, floors in state.travel_log.items()},
        "systemLogs": [log_entry_to_dict(entry) for entry in state.system_logs],
        "running": state.running,
    }
