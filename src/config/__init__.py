"""Configuration module exports (env-resolved constants only)."""

from .limits import (
    MAX_AGENT_CONNECTIONS,
)

__all__ = [
    "MAX_AGENT_CONNECTIONS",
]
