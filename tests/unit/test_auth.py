from __future__ import annotations

from src.handlers.websocket.auth import get_api_key, validate_api_key


class _FakeWebSocket:
    def __init__(self, *, query: dict[str, str] | None = None, headers: dict[str, str] | None = None) -> None:
        self.query_params = query or {}
        self.headers = headers or {}


def test_validate_api_key_unset_key_locks_down() -> None:
    assert validate_api_key("anything", "") is False
    assert validate_api_key("", "") is False


def test_validate_api_key_matches() -> None:
    assert validate_api_key("secret", "secret") is True
    assert validate_api_key("wrong", "secret") is False
    assert validate_api_key("", "secret") is False


def test_get_api_key_prefers_query_param() -> None:
    ws = _FakeWebSocket(query={"api_key": " q-key "}, headers={"x-api-key": "h-key"})
    assert get_api_key(ws) == "q-key"


def test_get_api_key_falls_back_to_header() -> None:
    ws = _FakeWebSocket(headers={"x-api-key": "h-key"})
    assert get_api_key(ws) == "h-key"
