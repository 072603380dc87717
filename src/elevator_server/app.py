from __future__ import annotations

import asyncio
import contextlib
import json
import logging
from typing import Literal, Optional, Set

from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ConfigDict, Field

from elevator_sim import (
    DEFAULT_CONFIG,
    BuildingConfig,
    BuildingConfigModel,
    SeededRandom,
    add_request,
    create_initial_state,
    pause_simulation,
    set_elevator_hover,
    start_simulation,
    state_to_dict,
    tick_simulation,
    toggle_car_request,
)

logger = logging.getLogger(__name__)


class HallCallRequest(BaseModel):
    floor: int
    direction: Literal["up", "down"]


class CarCallRequest(BaseModel):
    floor: int


class HoverUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    is_hovered: bool = Field(alias="isHovered")


class SimulationManager:
    """Owns one simulation run and ticks it on a timer while running."""

    def __init__(self, config: BuildingConfig = DEFAULT_CONFIG, seed: Optional[int] = None) -> None:
        self.config = config
        self.rng = SeededRandom(seed)
        self.state = create_initial_state(config)
        self.clients: Set[WebSocket] = set()
        self._task: Optional[asyncio.Task] = None
        self._lock = asyncio.Lock()

    async def start(self) -> None:
        if self._task is None:
            logger.info("tick driver started (%d ms per tick)", self.config.tick_duration_ms)
            self._task = asyncio.create_task(self._run())

    async def stop(self) -> None:
        if self._task:
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
            self._task = None
            logger.info("tick driver stopped at tick %d", self.state.clock_tick)

    async def _run(self) -> None:
        while True:
            payload = await self.tick_once()
            if payload is not None:
                await self.broadcast(payload)
            await asyncio.sleep(self.config.tick_duration_ms / 1000)

    async def tick_once(self) -> Optional[dict]:
        async with self._lock:
            if not self.state.running:
                return None
            self.state = tick_simulation(self.state, self.config, self.rng)
            return self.current_state()

    async def broadcast(self, payload: dict) -> None:
        message = json.dumps(payload)
        disconnected: Set[WebSocket] = set()
        for client in set(self.clients):
            try:
                await client.send_text(message)
            except WebSocketDisconnect:
                disconnected.add(client)
        for client in disconnected:
            await self.unregister(client)

    async def register(self, websocket: WebSocket) -> None:
        await websocket.accept()
        self.clients.add(websocket)
        await websocket.send_text(json.dumps(self.current_state()))

    async def unregister(self, websocket: WebSocket) -> None:
        if websocket in self.clients:
            self.clients.remove(websocket)
        with contextlib.suppress(Exception):
            await websocket.close()

    def current_state(self) -> dict:
        payload = state_to_dict(self.state)
        payload["config"] = BuildingConfigModel.from_config(self.config).model_dump(by_alias=True)
        return payload

    async def set_running(self, running: bool) -> dict:
        async with self._lock:
            self.state = start_simulation(self.state) if running else pause_simulation(self.state)
            return self.current_state()

    async def reset(self, config: Optional[BuildingConfig] = None) -> dict:
        async with self._lock:
            if config is not None:
                self.config = config
            self.state = create_initial_state(self.config)
            logger.info(
                "simulation reset: %d floors, %d elevators, %s mode",
                self.config.floors,
                self.config.elevators,
                self.config.mode,
            )
            return self.current_state()

    async def add_hall_call(self, floor: int, direction: str) -> dict:
        async with self._lock:
            self._check_floor(floor)
            self.state = add_request(
                self.state, floor, direction, self.rng, self.config.tick_duration_ms
            )
            return self.current_state()

    async def toggle_car_call(self, elevator_id: str, floor: int) -> dict:
        async with self._lock:
            self._check_elevator(elevator_id)
            self._check_floor(floor)
            self.state = toggle_car_request(
                self.state, elevator_id, floor, self.rng, self.config.tick_duration_ms
            )
            return self.current_state()

    async def set_hover(self, elevator_id: str, is_hovered: bool) -> dict:
        async with self._lock:
            self._check_elevator(elevator_id)
            self.state = set_elevator_hover(self.state, elevator_id, is_hovered)
            return self.current_state()

    def _check_floor(self, floor: int) -> None:
        if not 1 <= floor <= self.config.floors:
            raise ValueError(f"Floor {floor} is outside 1..{self.config.floors}")

    def _check_elevator(self, elevator_id: str) -> None:
        if self.state.get_elevator(elevator_id) is None:
            raise KeyError(elevator_id)


manager = SimulationManager()
app = FastAPI(title="Elevator Dispatch Simulation API")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def on_startup() -> None:
    await manager.start()


@app.on_event("shutdown")
async def on_shutdown() -> None:
    await manager.stop()


@app.get("/state")
async def get_state() -> dict:
    return manager.current_state()


@app.post("/start")
async def start() -> dict:
    return await manager.set_running(True)


@app.post("/pause")
async def pause() -> dict:
    return await manager.set_running(False)


@app.post("/reset")
async def reset(config: Optional[BuildingConfigModel] = None) -> dict:
    return await manager.reset(config.to_config() if config is not None else None)


@app.post("/requests")
async def hall_call(request: HallCallRequest) -> dict:
    try:
        return await manager.add_hall_call(request.floor, request.direction)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


@app.post("/elevators/{elevator_id}/car-calls")
async def car_call(elevator_id: str, request: CarCallRequest) -> dict:
    try:
        return await manager.toggle_car_call(elevator_id, request.floor)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Unknown elevator '{elevator_id}'")
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


@app.post("/elevators/{elevator_id}/hover")
async def hover(elevator_id: str, update: HoverUpdate) -> dict:
    try:
        return await manager.set_hover(elevator_id, update.is_hovered)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Unknown elevator '{elevator_id}'")


@app.websocket("/ws/stream")
async def websocket_endpoint(websocket: WebSocket) -> None:
    await manager.register(websocket)
    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        await manager.unregister(websocket)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("elevator_server.app:app", host="0.0.0.0", port=8000, reload=False)
