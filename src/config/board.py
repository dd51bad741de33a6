"""Board defaults and RPC method names (env-resolved constants only)."""

from __future__ import annotations

import os

# Remote procedures the agent may invoke on the board.
METHOD_UPDATE_CONTENT = "update_content"
METHOD_HIGHLIGHT_TEXT = "highlight_text"
METHOD_CLEAR_BOARD = "clear_board"
METHOD_SHOW_STUDENT_FOCUS = "show_student_focus"
METHOD_START_COGNITIVE_TEST = "start_cognitive_test"
METHOD_REVEAL_ANSWER = "reveal_answer"
METHOD_UPDATE_SCORES = "update_scores"
METHOD_SHOW_ERROR_BUZZER = "show_error_buzzer"

BOARD_METHODS: tuple[str, ...] = (
    METHOD_UPDATE_CONTENT,
    METHOD_HIGHLIGHT_TEXT,
    METHOD_CLEAR_BOARD,
    METHOD_SHOW_STUDENT_FOCUS,
    METHOD_START_COGNITIVE_TEST,
    METHOD_REVEAL_ANSWER,
    METHOD_UPDATE_SCORES,
    METHOD_SHOW_ERROR_BUZZER,
)

VIEW_CONTENT = "content"
VIEW_COGNITIVE_TEST = "cognitive_test"

CUE_REVEAL = "reveal"
CUE_BUZZER = "buzzer"

DEFAULT_CONTENT = (
    "The quick brown fox jumps over the lazy dog. Programming is fun, and Artificial Intelligence helps us learn"
    " faster."
)

DEFAULT_TEAM_SCORES: dict[str, float] = {
    "Team Alpha": 0,
    "Team Beta": 0,
    "Team Gamma": 0,
}

# (seat number, name), back row first.
SEATING_LAYOUT: tuple[tuple[tuple[str, str], ...], ...] = (
    (("7", "Karan"), ("8", "Meera"), ("9", "Zaid")),
    (("4", "Aarav"), ("5", "Siddharth"), ("6", "Priya")),
    (("1", "Nikhil"), ("2", "Sneha"), ("3", "Ananya")),
)

_FOCUS_CLEAR_DELAY_RAW = (os.getenv("FOCUS_CLEAR_DELAY_S") or "").strip()
try:
    FOCUS_CLEAR_DELAY_S: float = float(_FOCUS_CLEAR_DELAY_RAW) if _FOCUS_CLEAR_DELAY_RAW else 5.0
except Exception:
    FOCUS_CLEAR_DELAY_S = 5.0
if FOCUS_CLEAR_DELAY_S <= 0:
    FOCUS_CLEAR_DELAY_S = 5.0

__all__ = [
    "BOARD_METHODS",
    "CUE_BUZZER",
    "CUE_REVEAL",
    "DEFAULT_CONTENT",
    "DEFAULT_TEAM_SCORES",
    "FOCUS_CLEAR_DELAY_S",
    "METHOD_CLEAR_BOARD",
    "METHOD_HIGHLIGHT_TEXT",
    "METHOD_REVEAL_ANSWER",
    "METHOD_SHOW_ERROR_BUZZER",
    "METHOD_SHOW_STUDENT_FOCUS",
    "METHOD_START_COGNITIVE_TEST",
    "METHOD_UPDATE_CONTENT",
    "METHOD_UPDATE_SCORES",
    "SEATING_LAYOUT",
    "VIEW_COGNITIVE_TEST",
    "VIEW_CONTENT",
]
