from .styles import resolve_style
from .render import render_plain
from .matcher import HighlightMatcher
from .nodes import Node, Text, Match, Fragment, Container, to_mapping, from_mapping

__all__ = [
    "Container",
    "Fragment",
    "HighlightMatcher",
    "Match",
    "Node",
    "Text",
    "from_mapping",
    "render_plain",
    "resolve_style",
    "to_mapping",
]
