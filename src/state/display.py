"""Shared board display state (dataclasses only).

Only the board reconciler writes these fields; everything else reads
snapshots.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from src.config.board import DEFAULT_CONTENT, DEFAULT_TEAM_SCORES, VIEW_CONTENT

from .highlight import HighlightTerm


@dataclass(slots=True)
class CognitiveAnswer:
    text: str
    percentage: float
    revealed: bool = False


@dataclass(slots=True)
class DisplayState:
    content: str = DEFAULT_CONTENT
    highlights: list[HighlightTerm] = field(default_factory=list)
    focused_student: str | None = None
    view_mode: str = VIEW_CONTENT
    question: str = ""
    answers: list[CognitiveAnswer] = field(default_factory=list)
    team_scores: dict[str, float] = field(default_factory=lambda: dict(DEFAULT_TEAM_SCORES))


__all__ = ["CognitiveAnswer", "DisplayState"]
