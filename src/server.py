"""Main FastAPI server for the classroom board."""

from __future__ import annotations

import logging
from typing import Any
from contextlib import asynccontextmanager

from fastapi import FastAPI, WebSocket
from fastapi.responses import ORJSONResponse

from src.state.runtime import RuntimeDeps
from src.runtime.logging import configure_logging
from src.runtime.dependencies import build_runtime_deps
from src.config.websocket import AGENT_ENDPOINT_PATH, DISPLAY_ENDPOINT_PATH
from src.handlers.display.feed import handle_display_connection
from src.handlers.websocket.manager import handle_agent_connection

logger = logging.getLogger(__name__)

configure_logging()


@asynccontextmanager
async def _lifespan(app: FastAPI):
    runtime_deps = await build_runtime_deps()
    app.state.runtime_deps = runtime_deps
    logger.info("runtime: ready")
    try:
        yield
    finally:
        deps = getattr(app.state, "runtime_deps", None)
        if deps is not None:
            await deps.shutdown()


app = FastAPI(default_response_class=ORJSONResponse, lifespan=_lifespan)


def _runtime_deps() -> RuntimeDeps:
    runtime_deps = getattr(app.state, "runtime_deps", None)
    if runtime_deps is None:
        raise RuntimeError("Runtime dependencies are not initialized")
    return runtime_deps


@app.get("/")
async def root() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/board")
async def board() -> dict[str, Any]:
    return _runtime_deps().board.snapshot()


@app.websocket(AGENT_ENDPOINT_PATH)
async def agent_endpoint(websocket: WebSocket) -> None:
    await handle_agent_connection(websocket, _runtime_deps())


@app.websocket(DISPLAY_ENDPOINT_PATH)
async def display_endpoint(websocket: WebSocket) -> None:
    await handle_display_connection(websocket, _runtime_deps())
