from __future__ import annotations

import pytest

from src.errors import UnsupportedMethodError
from src.state.highlight import HighlightTerm
from src.board.payloads import (
    AnswerSpec,
    RevealAnswer,
    UpdateScores,
    HighlightText,
    UpdateContent,
    ShowStudentFocus,
    StartCognitiveTest,
    decode_call,
)


def test_update_content_accepts_object_or_bare_string() -> None:
    assert decode_call("update_content", {"text": "Hello"}) == UpdateContent(text="Hello")
    assert decode_call("update_content", "Hello") == UpdateContent(text="Hello")
    assert decode_call("update_content", {"text": ""}) == UpdateContent(text="")
    assert decode_call("update_content", {"text": 5}) == UpdateContent(text=None)
    assert decode_call("update_content", None) == UpdateContent(text=None)


def test_highlight_text_decodes_terms() -> None:
    payload = decode_call(
        "highlight_text",
        {"words": [{"word": "cat", "type": "noun", "positions": [1, "x", 2.0]}, {"word": "  "}, "bad"]},
    )
    assert payload == HighlightText(words=(HighlightTerm(word="cat", category="noun", positions=(1, 2)),))


def test_highlight_text_missing_words_is_none_empty_list_is_empty() -> None:
    assert decode_call("highlight_text", {}).words is None
    assert decode_call("highlight_text", {"words": "cat"}).words is None
    assert decode_call("highlight_text", {"words": []}).words == ()


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ({"studentName": "Karan"}, "Karan"),
        ("  Meera ", "Meera"),
        ({"studentName": 7}, "7"),
        ({"studentName": ""}, None),
        ({"studentName": True}, None),
        ({}, None),
    ],
)
def test_show_student_focus(value: object, expected: str | None) -> None:
    assert decode_call("show_student_focus", value) == ShowStudentFocus(student_name=expected)


def test_start_cognitive_test_decodes_answers() -> None:
    payload = decode_call(
        "start_cognitive_test",
        {"question": "2+2?", "answers": [{"text": "4", "percentage": 80}, "5", {"text": "3", "percentage": "x"}]},
    )
    assert payload == StartCognitiveTest(
        question="2+2?",
        answers=(AnswerSpec("4", 80), AnswerSpec("5", 0), AnswerSpec("3", 0)),
    )


def test_start_cognitive_test_missing_parts() -> None:
    assert decode_call("start_cognitive_test", {"answers": []}).question is None
    assert decode_call("start_cognitive_test", {"question": "q"}).answers is None


@pytest.mark.parametrize(
    ("value", "expected"),
    [({"index": 1}, 1), ({"index": 2.0}, 2), ({"index": 1.5}, None), ({"index": True}, None), ({}, None)],
)
def test_reveal_answer_index(value: object, expected: int | None) -> None:
    assert decode_call("reveal_answer", value) == RevealAnswer(index=expected)


def test_update_scores_keeps_numeric_entries() -> None:
    payload = decode_call("update_scores", {"scores": {"Team Alpha": 3, "Team Beta": "x", "Team Gamma": 1.5}})
    assert payload == UpdateScores(scores={"Team Alpha": 3, "Team Gamma": 1.5})
    assert decode_call("update_scores", {"scores": [1]}).scores is None


def test_unknown_method_is_rejected() -> None:
    with pytest.raises(UnsupportedMethodError):
        decode_call("draw_circle", {})
