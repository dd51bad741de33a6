"""Highlight style lookup table."""

from __future__ import annotations

from src.state.highlight import HighlightRule

DEFAULT_RED = "#DC2626"
SECONDARY_BLUE = "#0364CE"
FALLBACK_YELLOW = "#facc15"

STYLE_HIGHLIGHT = "highlight"
STYLE_UNDERLINE = "underline"

# Keys are lower-case category names.
STYLE_MAP: dict[str, HighlightRule] = {
    # Primary (red)
    "highlight": HighlightRule(color=DEFAULT_RED, style=STYLE_HIGHLIGHT),
    "underline": HighlightRule(color=DEFAULT_RED, style=STYLE_UNDERLINE),
    "noun": HighlightRule(color=DEFAULT_RED, style=STYLE_HIGHLIGHT),
    "verb": HighlightRule(color=DEFAULT_RED, style=STYLE_UNDERLINE),
    # Secondary (blue)
    "secondary": HighlightRule(color=SECONDARY_BLUE, style=STYLE_HIGHLIGHT),
    "secondary-underline": HighlightRule(color=SECONDARY_BLUE, style=STYLE_UNDERLINE),
    "concept": HighlightRule(color=SECONDARY_BLUE, style=STYLE_HIGHLIGHT),
    "blue": HighlightRule(color=SECONDARY_BLUE, style=STYLE_HIGHLIGHT),
}

FALLBACK_STYLE = HighlightRule(color=FALLBACK_YELLOW, style=STYLE_HIGHLIGHT)

__all__ = [
    "DEFAULT_RED",
    "FALLBACK_STYLE",
    "FALLBACK_YELLOW",
    "SECONDARY_BLUE",
    "STYLE_HIGHLIGHT",
    "STYLE_MAP",
    "STYLE_UNDERLINE",
]
