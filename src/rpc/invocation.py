"""Invocation record handed to registered transport methods."""

from __future__ import annotations

from typing import Any
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RpcInvocationData:
    request_id: str
    caller_identity: str
    payload: Any
    response_timeout_s: float | None = None


__all__ = ["RpcInvocationData"]
