"""Secrets and authentication configuration."""

from __future__ import annotations

import os

ENV_BOARD_API_KEY = "BOARD_API_KEY"


def get_board_api_key() -> str:
    return (os.getenv(ENV_BOARD_API_KEY) or "").strip()


BOARD_API_KEY: str = get_board_api_key()

__all__ = ["BOARD_API_KEY", "ENV_BOARD_API_KEY", "get_board_api_key"]
