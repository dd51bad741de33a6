from __future__ import annotations

import pytest

from src.board import TranscriptLog, build_snapshot
from src.state.display import DisplayState
from src.state.highlight import HighlightTerm
from src.board.seating import find_seat, is_focused, seating_snapshot


def test_seat_lookup_by_name_or_number() -> None:
    assert find_seat("meera") == ("8", "Meera")
    assert find_seat("3") == ("3", "Ananya")
    assert find_seat("Nobody") is None
    assert find_seat(None) is None
    assert is_focused("7", "Karan", " KARAN ")


def test_seating_snapshot_flags_focused_seat() -> None:
    seats = seating_snapshot("Priya")
    assert len(seats) == 9
    assert [s["name"] for s in seats if s["focused"]] == ["Priya"]
    assert seats[0] == {"seat_number": "7", "name": "Karan", "row": 0, "col": 0, "focused": False}


def test_transcript_live_segments_are_replaced() -> None:
    log = TranscriptLog()
    assert log.ingest("user", "hel", final=False)
    assert log.ingest("user", "hello", final=False)
    assert not log.ingest("user", "hello", final=False)
    assert log.live_text("user") == "hello"

    assert log.ingest("user", "hello there", final=True)
    assert log.live_text("user") is None
    assert [(e.id, e.text) for e in log.entries] == [("user-0", "hello there")]


def test_transcript_ignores_empty_and_rejects_unknown_sender() -> None:
    log = TranscriptLog()
    assert not log.ingest("agent", "", final=True)
    with pytest.raises(ValueError):
        log.ingest("narrator", "hi", final=True)


def test_transcript_keeps_most_recent_entries() -> None:
    log = TranscriptLog(max_entries=2)
    for i in range(3):
        log.ingest("agent", f"line {i}", final=True)
    assert [e.id for e in log.entries] == ["agent-1", "agent-2"]
    assert log.snapshot()["entries"][0] == {"text": "line 1", "sender": "agent", "id": "agent-1"}


def test_build_snapshot_renders_highlighted_content() -> None:
    state = DisplayState(content="The cat sat", highlights=[HighlightTerm(word="cat", category="noun")])
    state.focused_student = "9"
    snapshot = build_snapshot(state, version=4, transcript=TranscriptLog())

    assert snapshot["version"] == 4
    assert snapshot["highlights"] == [{"word": "cat", "type": "noun", "positions": []}]
    assert snapshot["focused_seat"] == "9"
    paragraph = snapshot["rendered"]["children"][0]
    assert paragraph["children"][0][1]["text"] == "cat"
    assert snapshot["transcript"] == {"entries": [], "live": {"agent": None, "user": None}}
