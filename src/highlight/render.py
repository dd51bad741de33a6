"""Minimal plain-text renderer producing a content tree."""

from __future__ import annotations

import re

from .nodes import Text, Container

_PARAGRAPH_SPLIT = re.compile(r"\n\s*\n")


def render_plain(text: str) -> Container:
    paragraphs = [p.strip("\n") for p in _PARAGRAPH_SPLIT.split(text or "")]
    return Container(
        tag="document",
        children=tuple(Container(tag="paragraph", children=(Text(p),)) for p in paragraphs if p.strip()),
    )


__all__ = ["render_plain"]
