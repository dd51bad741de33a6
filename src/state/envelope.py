"""Per-connection state for the agent JSON envelope."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING
from dataclasses import field, dataclass

from src.config.websocket import WS_UNKNOWN_REQUEST_ID, WS_UNKNOWN_SESSION_ID

if TYPE_CHECKING:
    from src.rpc.session import RpcSession


@dataclass(slots=True)
class EnvelopeState:
    session: RpcSession
    session_id: str = WS_UNKNOWN_SESSION_ID
    request_id: str = WS_UNKNOWN_REQUEST_ID
    audio_bytes_received: int = 0
    inflight: set[asyncio.Task] = field(default_factory=set)

    def is_busy(self) -> bool:
        return bool(self.inflight)

    def track(self, task: asyncio.Task) -> None:
        self.inflight.add(task)
        task.add_done_callback(self.inflight.discard)

    async def cancel_inflight(self) -> None:
        tasks = list(self.inflight)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self.inflight.clear()


__all__ = ["EnvelopeState"]
