"""Typed runtime state objects for dependency wiring."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from src.board.service import BoardService
    from src.state.settings import AppSettings
    from src.handlers.display.hub import DisplayHub
    from src.handlers.connections import ConnectionManager


@dataclass(slots=True)
class RuntimeDeps:
    connections: ConnectionManager
    board: BoardService
    hub: DisplayHub
    settings: AppSettings

    async def shutdown(self) -> None:
        try:
            await self.board.shutdown()
        except Exception:
            logger.exception("runtime shutdown failed")
        self.hub.close()


__all__ = ["RuntimeDeps"]
