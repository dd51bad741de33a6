from .runtime import RuntimeDeps
from .settings import AppSettings
from .envelope import EnvelopeState
from .highlight import HighlightRule, HighlightTerm
from .display import CognitiveAnswer, DisplayState

__all__ = [
    "AppSettings",
    "CognitiveAnswer",
    "DisplayState",
    "EnvelopeState",
    "HighlightRule",
    "HighlightTerm",
    "RuntimeDeps",
]
