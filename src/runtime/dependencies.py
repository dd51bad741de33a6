"""Runtime dependency construction (board, display hub, admission control)."""

from __future__ import annotations

import logging

from src.state import RuntimeDeps
from src.board.service import BoardService
from src.state.settings import AppSettings
from src.handlers.display.hub import DisplayHub
from src.handlers.connections import ConnectionManager

from .settings import load_settings

logger = logging.getLogger(__name__)


async def build_runtime_deps(settings: AppSettings | None = None) -> RuntimeDeps:
    settings = settings or load_settings()
    if not settings.auth.api_key:
        logger.warning("BOARD_API_KEY is not set; agent connections will be rejected")

    hub = DisplayHub(queue_max=settings.limits.display_queue_max)
    board = BoardService(
        focus_clear_delay_s=settings.board.focus_clear_delay_s,
        audio=settings.audio,
        publish=hub.publish,
    )
    connections = ConnectionManager(max_connections=settings.limits.max_agent_connections)

    return RuntimeDeps(
        connections=connections,
        board=board,
        hub=hub,
        settings=settings,
    )


__all__ = ["RuntimeDeps", "build_runtime_deps"]
