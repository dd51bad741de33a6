from __future__ import annotations

import json

import pytest

from src.handlers.websocket.parser import parse_agent_message


def test_parse_agent_message_ok() -> None:
    raw = json.dumps({
        "type": " rpc.invoke ",
        "session_id": "s1",
        "request_id": "r1",
        "payload": {"method": "clear_board"},
    })
    msg = parse_agent_message(raw)
    assert msg["type"] == "rpc.invoke"
    assert msg["session_id"] == "s1"
    assert msg["request_id"] == "r1"
    assert msg["payload"]["method"] == "clear_board"


def test_parse_agent_message_null_payload_becomes_empty() -> None:
    raw = json.dumps({"type": "ping", "session_id": "s", "request_id": "r", "payload": None})
    assert parse_agent_message(raw)["payload"] == {}


@pytest.mark.parametrize(
    "raw",
    [
        "not json",
        json.dumps([]),
        json.dumps({"session_id": "s", "request_id": "r", "payload": {}}),
        json.dumps({"type": "  ", "session_id": "s", "request_id": "r"}),
        json.dumps({"type": "ping", "request_id": "r", "payload": {}}),
        json.dumps({"type": "ping", "session_id": "s", "payload": {}}),
        json.dumps({"type": "ping", "session_id": "s", "request_id": "r", "payload": []}),
        "[" * 100000,
    ],
)
def test_parse_agent_message_invalid(raw: str) -> None:
    with pytest.raises(ValueError):
        parse_agent_message(raw)
