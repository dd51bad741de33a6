"""State-transition rules, one per board method.

Each rule takes the current `DisplayState` and its decoded payload, performs
at most one transition, and reports what happened. Rules never raise on
missing fields.
"""

from __future__ import annotations

from typing import Any
from dataclasses import dataclass
from collections.abc import Callable

from src.state.display import DisplayState, CognitiveAnswer
from src.config.board import (
    CUE_BUZZER,
    CUE_REVEAL,
    VIEW_CONTENT,
    METHOD_CLEAR_BOARD,
    VIEW_COGNITIVE_TEST,
    METHOD_REVEAL_ANSWER,
    METHOD_UPDATE_SCORES,
    METHOD_HIGHLIGHT_TEXT,
    METHOD_UPDATE_CONTENT,
    METHOD_SHOW_ERROR_BUZZER,
    METHOD_SHOW_STUDENT_FOCUS,
    METHOD_START_COGNITIVE_TEST,
)

from .payloads import (
    ClearBoard,
    RevealAnswer,
    UpdateScores,
    HighlightText,
    UpdateContent,
    ShowErrorBuzzer,
    ShowStudentFocus,
    StartCognitiveTest,
)


@dataclass(frozen=True, slots=True)
class RuleOutcome:
    changed: bool = False
    cue: str | None = None
    # Student whose focus should auto-clear after the configured delay.
    focus_target: str | None = None


UNCHANGED = RuleOutcome()

Rule = Callable[[DisplayState, Any], RuleOutcome]


def apply_update_content(state: DisplayState, payload: UpdateContent) -> RuleOutcome:
    if payload.text is None:
        return UNCHANGED
    state.content = payload.text
    # Highlights belong to the text they were computed for.
    state.highlights = []
    state.view_mode = VIEW_CONTENT
    return RuleOutcome(changed=True)


def apply_highlight_text(state: DisplayState, payload: HighlightText) -> RuleOutcome:
    if payload.words is None:
        return UNCHANGED
    state.highlights = list(payload.words)
    return RuleOutcome(changed=True)


def apply_clear_board(state: DisplayState, _payload: ClearBoard) -> RuleOutcome:
    changed = bool(state.content or state.highlights)
    state.content = ""
    state.highlights = []
    return RuleOutcome(changed=changed)


def apply_show_student_focus(state: DisplayState, payload: ShowStudentFocus) -> RuleOutcome:
    if payload.student_name is None:
        return UNCHANGED
    state.focused_student = payload.student_name
    return RuleOutcome(changed=True, focus_target=payload.student_name)


def apply_start_cognitive_test(state: DisplayState, payload: StartCognitiveTest) -> RuleOutcome:
    if payload.question is None or payload.answers is None:
        return UNCHANGED
    state.question = payload.question
    state.answers = [CognitiveAnswer(text=a.text, percentage=a.percentage, revealed=False) for a in payload.answers]
    state.view_mode = VIEW_COGNITIVE_TEST
    return RuleOutcome(changed=True)


def apply_reveal_answer(state: DisplayState, payload: RevealAnswer) -> RuleOutcome:
    index = payload.index
    if index is None or index < 0 or index >= len(state.answers):
        return UNCHANGED
    answer = state.answers[index]
    changed = not answer.revealed
    answer.revealed = True
    return RuleOutcome(changed=changed, cue=CUE_REVEAL)


def apply_update_scores(state: DisplayState, payload: UpdateScores) -> RuleOutcome:
    if payload.scores is None:
        return UNCHANGED
    state.team_scores = dict(payload.scores)
    return RuleOutcome(changed=True)


def apply_show_error_buzzer(_state: DisplayState, _payload: ShowErrorBuzzer) -> RuleOutcome:
    return RuleOutcome(cue=CUE_BUZZER)


RULES: dict[str, Rule] = {
    METHOD_UPDATE_CONTENT: apply_update_content,
    METHOD_HIGHLIGHT_TEXT: apply_highlight_text,
    METHOD_CLEAR_BOARD: apply_clear_board,
    METHOD_SHOW_STUDENT_FOCUS: apply_show_student_focus,
    METHOD_START_COGNITIVE_TEST: apply_start_cognitive_test,
    METHOD_REVEAL_ANSWER: apply_reveal_answer,
    METHOD_UPDATE_SCORES: apply_update_scores,
    METHOD_SHOW_ERROR_BUZZER: apply_show_error_buzzer,
}

__all__ = ["RULES", "UNCHANGED", "Rule", "RuleOutcome"]
