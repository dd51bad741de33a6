"""Locate highlight terms inside rendered content trees."""

from __future__ import annotations

import re
import logging
from typing import Any
from collections.abc import Mapping, Iterable

from src.state.highlight import HighlightTerm

from .styles import resolve_style
from .nodes import Node, Text, Match, Fragment, Container, to_mapping

logger = logging.getLogger(__name__)


class HighlightMatcher:
    """Split every text leaf on the configured terms and annotate the matches.

    All terms go into one case-insensitive alternation of escaped literals.
    When one term is a prefix of another at the same position, the term
    listed first wins. Terms with an empty or whitespace-only word are
    dropped since they would match everywhere. With no usable terms the
    matcher is the identity.
    """

    def __init__(self, terms: Iterable[HighlightTerm]) -> None:
        usable: list[HighlightTerm] = []
        for term in terms:
            if not term.word or not term.word.strip():
                logger.debug("ignoring empty highlight term category=%s", term.category)
                continue
            usable.append(term)
        self._terms = tuple(usable)
        self._by_word: dict[str, HighlightTerm] = {}
        for term in self._terms:
            self._by_word.setdefault(term.word.casefold(), term)
        self._pattern: re.Pattern[str] | None = None
        if self._terms:
            alternation = "|".join(re.escape(t.word) for t in self._terms)
            self._pattern = re.compile(f"({alternation})", re.IGNORECASE)

    @property
    def terms(self) -> tuple[HighlightTerm, ...]:
        return self._terms

    def is_identity(self) -> bool:
        return self._pattern is None

    def term_for(self, fragment: str) -> HighlightTerm | None:
        term = self._by_word.get(fragment.casefold())
        if term is not None:
            return term
        for candidate in self._terms:
            if re.fullmatch(re.escape(candidate.word), fragment, re.IGNORECASE):
                return candidate
        return None

    def split_text(self, text: str) -> Text | Fragment:
        if self._pattern is None or not text:
            return Text(text)
        pieces = self._pattern.split(text)
        if len(pieces) == 1:
            return Text(text)

        parts: list[Text | Match] = []
        for i, piece in enumerate(pieces):
            if not piece:
                continue
            # re.split puts captured separators at odd indexes.
            term = self.term_for(piece) if i % 2 == 1 else None
            if term is None:
                parts.append(Text(piece))
            else:
                parts.append(Match(text=piece, term=term, rule=resolve_style(term.category)))
        return Fragment(tuple(parts))

    def apply(self, node: Node) -> Node:
        if self._pattern is None:
            return node
        if isinstance(node, Text):
            return self.split_text(node.value)
        if isinstance(node, Container):
            return node.map_children(self.apply)
        return node

    def apply_mapping(self, value: Any) -> Any:
        """Transform a renderer's mapping tree in place of its own shape.

        Strings are split, sequences are mapped element-wise and mappings with
        `children` are rebuilt with transformed children. Other values are
        returned unchanged.
        """
        if self._pattern is None:
            return value
        if isinstance(value, str):
            return to_mapping(self.split_text(value))
        if isinstance(value, (list, tuple)):
            return [self.apply_mapping(v) for v in value]
        if isinstance(value, Mapping) and value.get("children") is not None:
            return {**value, "children": self.apply_mapping(value["children"])}
        return value


__all__ = ["HighlightMatcher"]
