"""Category to style lookup."""

from __future__ import annotations

from src.state.highlight import HighlightRule
from src.config.highlight import STYLE_MAP, FALLBACK_STYLE


def resolve_style(category: str | None) -> HighlightRule:
    if not category:
        return FALLBACK_STYLE
    return STYLE_MAP.get(category.strip().lower(), FALLBACK_STYLE)


__all__ = ["resolve_style"]
