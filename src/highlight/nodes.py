"""Rendered content tree (dataclasses only).

A closed set of node variants: `Text` leaves, `Container` nodes with
children, and the matcher's output variants `Fragment` (a leaf split into
parts) and `Match` (one annotated part). The matcher only relies on
`Container.map_children`.
"""

from __future__ import annotations

from typing import Any, Union
from collections.abc import Mapping, Callable
from dataclasses import field, replace, dataclass

from src.state.highlight import HighlightRule, HighlightTerm

TEXT_KEYS = ("text", "raw", "value")


@dataclass(frozen=True, slots=True)
class Text:
    value: str


@dataclass(frozen=True, slots=True)
class Match:
    text: str
    term: HighlightTerm
    rule: HighlightRule


@dataclass(frozen=True, slots=True)
class Fragment:
    parts: tuple[Text | Match, ...]


@dataclass(frozen=True, slots=True)
class Container:
    tag: str
    children: tuple[Node, ...] = ()
    attrs: Mapping[str, Any] = field(default_factory=dict)

    def map_children(self, fn: Callable[[Node], Node]) -> Container:
        return replace(self, children=tuple(fn(child) for child in self.children))


Node = Union[Text, Match, Fragment, Container]


def plain_text(node: Node) -> str:
    if isinstance(node, Text):
        return node.value
    if isinstance(node, Match):
        return node.text
    if isinstance(node, Fragment):
        return "".join(plain_text(p) for p in node.parts)
    return "".join(plain_text(c) for c in node.children)


def _match_mapping(node: Match) -> dict[str, Any]:
    return {
        "type": "match",
        "text": node.text,
        "category": node.term.category,
        "color": node.rule.color,
        "style": node.rule.style,
        "css": node.rule.css(),
    }


def to_mapping(node: Node) -> Any:
    """Serialize a tree: text leaves become strings, fragments become lists."""
    if isinstance(node, Text):
        return node.value
    if isinstance(node, Match):
        return _match_mapping(node)
    if isinstance(node, Fragment):
        return [to_mapping(p) for p in node.parts]
    data: dict[str, Any] = {"type": node.tag, "children": [to_mapping(c) for c in node.children]}
    if node.attrs:
        data["attrs"] = dict(node.attrs)
    return data


def from_mapping(value: Any) -> Node:
    """Build a tree from a renderer's mapping output.

    Strings are text leaves, sequences are anonymous containers, mappings with
    `children` are containers and mappings holding only text are leaves.
    Anything else is kept as an empty container so the tree stays intact.
    """
    if isinstance(value, str):
        return Text(value)
    if isinstance(value, (list, tuple)):
        return Container(tag="fragment", children=tuple(from_mapping(v) for v in value))
    if isinstance(value, Mapping):
        tag = value.get("type")
        tag = tag if isinstance(tag, str) else "node"
        children = value.get("children")
        if isinstance(children, (list, tuple)):
            attrs = {k: v for k, v in value.items() if k not in {"type", "children"}}
            return Container(tag=tag, children=tuple(from_mapping(c) for c in children), attrs=attrs)
        if isinstance(children, (str, Mapping)):
            return Container(tag=tag, children=(from_mapping(children),))
        for key in TEXT_KEYS:
            text = value.get(key)
            if isinstance(text, str):
                return Text(text)
        return Container(tag=tag, attrs=dict(value))
    return Container(tag="unknown")


__all__ = [
    "Container",
    "Fragment",
    "Match",
    "Node",
    "Text",
    "from_mapping",
    "plain_text",
    "to_mapping",
]
