"""Typed payloads for board methods (dataclasses only).

Each method has one record type. Every field is optional: a field that is
absent or has the wrong shape decodes to None, and the matching rule leaves
the board untouched.
"""

from __future__ import annotations

from typing import Any, Union
from dataclasses import dataclass
from collections.abc import Mapping, Callable

from src.errors import UnsupportedMethodError
from src.state.highlight import HighlightTerm
from src.config.board import (
    METHOD_CLEAR_BOARD,
    METHOD_REVEAL_ANSWER,
    METHOD_UPDATE_SCORES,
    METHOD_HIGHLIGHT_TEXT,
    METHOD_UPDATE_CONTENT,
    METHOD_SHOW_ERROR_BUZZER,
    METHOD_SHOW_STUDENT_FOCUS,
    METHOD_START_COGNITIVE_TEST,
)


@dataclass(frozen=True, slots=True)
class UpdateContent:
    text: str | None = None


@dataclass(frozen=True, slots=True)
class HighlightText:
    words: tuple[HighlightTerm, ...] | None = None


@dataclass(frozen=True, slots=True)
class ClearBoard:
    pass


@dataclass(frozen=True, slots=True)
class ShowStudentFocus:
    student_name: str | None = None


@dataclass(frozen=True, slots=True)
class AnswerSpec:
    text: str
    percentage: float


@dataclass(frozen=True, slots=True)
class StartCognitiveTest:
    question: str | None = None
    answers: tuple[AnswerSpec, ...] | None = None


@dataclass(frozen=True, slots=True)
class RevealAnswer:
    index: int | None = None


@dataclass(frozen=True, slots=True)
class UpdateScores:
    scores: dict[str, float] | None = None


@dataclass(frozen=True, slots=True)
class ShowErrorBuzzer:
    pass


BoardPayload = Union[
    UpdateContent,
    HighlightText,
    ClearBoard,
    ShowStudentFocus,
    StartCognitiveTest,
    RevealAnswer,
    UpdateScores,
    ShowErrorBuzzer,
]


def _get(value: Any, key: str) -> Any:
    if isinstance(value, Mapping):
        return value.get(key)
    return None


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _as_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def _decode_term(item: Any) -> HighlightTerm | None:
    word = _get(item, "word")
    if not isinstance(word, str) or not word.strip():
        return None
    category = _get(item, "type")
    positions = _get(item, "positions")
    return HighlightTerm(
        word=word,
        category=category if isinstance(category, str) else "",
        positions=tuple(int(p) for p in positions if _as_int(p) is not None) if isinstance(positions, list) else (),
    )


def _decode_answer(item: Any) -> AnswerSpec:
    if isinstance(item, str):
        return AnswerSpec(text=item, percentage=0)
    text = _get(item, "text")
    percentage = _get(item, "percentage")
    return AnswerSpec(
        text=text if isinstance(text, str) else ("" if text is None else str(text)),
        percentage=percentage if _is_number(percentage) else 0,
    )


def decode_update_content(value: Any) -> UpdateContent:
    # A bare string payload is the text itself.
    if isinstance(value, str):
        return UpdateContent(text=value)
    text = _get(value, "text")
    return UpdateContent(text=text if isinstance(text, str) else None)


def decode_highlight_text(value: Any) -> HighlightText:
    words = _get(value, "words")
    if not isinstance(words, list):
        return HighlightText(words=None)
    terms = (_decode_term(item) for item in words)
    return HighlightText(words=tuple(t for t in terms if t is not None))


def decode_clear_board(_value: Any) -> ClearBoard:
    return ClearBoard()


def decode_show_student_focus(value: Any) -> ShowStudentFocus:
    name = value if isinstance(value, str) else _get(value, "studentName")
    if _as_int(name) is not None:
        name = str(_as_int(name))
    if not isinstance(name, str) or not name.strip():
        return ShowStudentFocus(student_name=None)
    return ShowStudentFocus(student_name=name.strip())


def decode_start_cognitive_test(value: Any) -> StartCognitiveTest:
    question = _get(value, "question")
    answers = _get(value, "answers")
    return StartCognitiveTest(
        question=question if isinstance(question, str) and question.strip() else None,
        answers=tuple(_decode_answer(a) for a in answers) if isinstance(answers, list) else None,
    )


def decode_reveal_answer(value: Any) -> RevealAnswer:
    return RevealAnswer(index=_as_int(_get(value, "index")))


def decode_update_scores(value: Any) -> UpdateScores:
    scores = _get(value, "scores")
    if not isinstance(scores, Mapping):
        return UpdateScores(scores=None)
    return UpdateScores(scores={str(k): v for k, v in scores.items() if _is_number(v)})


def decode_show_error_buzzer(_value: Any) -> ShowErrorBuzzer:
    return ShowErrorBuzzer()


DECODERS: dict[str, Callable[[Any], BoardPayload]] = {
    METHOD_UPDATE_CONTENT: decode_update_content,
    METHOD_HIGHLIGHT_TEXT: decode_highlight_text,
    METHOD_CLEAR_BOARD: decode_clear_board,
    METHOD_SHOW_STUDENT_FOCUS: decode_show_student_focus,
    METHOD_START_COGNITIVE_TEST: decode_start_cognitive_test,
    METHOD_REVEAL_ANSWER: decode_reveal_answer,
    METHOD_UPDATE_SCORES: decode_update_scores,
    METHOD_SHOW_ERROR_BUZZER: decode_show_error_buzzer,
}


def decode_call(method: str, value: Any) -> BoardPayload:
    decoder = DECODERS.get(method)
    if decoder is None:
        raise UnsupportedMethodError(f"method '{method}' is not supported", method=method)
    return decoder(value)


__all__ = [
    "DECODERS",
    "AnswerSpec",
    "BoardPayload",
    "ClearBoard",
    "HighlightText",
    "RevealAnswer",
    "ShowErrorBuzzer",
    "ShowStudentFocus",
    "StartCognitiveTest",
    "UpdateContent",
    "UpdateScores",
    "decode_call",
]
