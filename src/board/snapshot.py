"""Serializable view of the board for display clients."""

from __future__ import annotations

from typing import Any
from dataclasses import asdict

from src.state.display import DisplayState
from src.highlight import HighlightMatcher, render_plain, to_mapping

from .transcript import TranscriptLog
from .seating import find_seat, seating_snapshot


def render_content(state: DisplayState) -> Any:
    matcher = HighlightMatcher(state.highlights)
    return to_mapping(matcher.apply(render_plain(state.content)))


def build_snapshot(state: DisplayState, *, version: int = 0, transcript: TranscriptLog | None = None) -> dict[str, Any]:
    seat = find_seat(state.focused_student)
    return {
        "version": version,
        "view_mode": state.view_mode,
        "content": state.content,
        "rendered": render_content(state),
        "highlights": [h.to_dict() for h in state.highlights],
        "focused_student": state.focused_student,
        "focused_seat": seat[0] if seat is not None else None,
        "seating": seating_snapshot(state.focused_student),
        "question": state.question,
        "answers": [asdict(a) for a in state.answers],
        "team_scores": dict(state.team_scores),
        "transcript": transcript.snapshot() if transcript is not None else None,
    }


__all__ = ["build_snapshot", "render_content"]
