"""Highlight records (dataclasses only)."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class HighlightTerm:
    """An agent-specified word to mark on the board.

    `word` is matched case-insensitively; `category` selects the style rule.
    `positions` is carried through for the display but not used for matching.
    """

    word: str
    category: str
    positions: tuple[int, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, object]:
        return {"word": self.word, "type": self.category, "positions": list(self.positions)}


@dataclass(frozen=True, slots=True)
class HighlightRule:
    color: str
    style: str

    def css(self) -> dict[str, str]:
        if self.style == "underline":
            return {
                "textDecoration": "underline",
                "textDecorationColor": self.color,
                "textDecorationThickness": "2px",
            }
        return {
            # ~16% opacity hex alpha suffix.
            "backgroundColor": f"{self.color}28",
            "borderBottom": f"2px solid {self.color}",
        }


__all__ = ["HighlightRule", "HighlightTerm"]
