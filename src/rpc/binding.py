"""Registration records (dataclasses only)."""

from __future__ import annotations

from typing import Any
from dataclasses import dataclass
from collections.abc import Callable, Awaitable

Handler = Callable[[Any], Awaitable[Any]]


@dataclass(slots=True)
class HandlerCell:
    """Mutable indirection between a stable registration and the latest handler."""

    handler: Handler


@dataclass(slots=True)
class ProcedureBinding:
    method: str
    cell: HandlerCell
    registered: bool = False
    unregister: Callable[[], None] | None = None


__all__ = ["Handler", "HandlerCell", "ProcedureBinding"]
