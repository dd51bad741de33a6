"""Classroom seating lookup for the focused student."""

from __future__ import annotations

from typing import Any

from src.config.board import SEATING_LAYOUT


def is_focused(seat_number: str, name: str, focused_id: str | None) -> bool:
    if focused_id is None:
        return False
    focused = focused_id.strip()
    return focused.lower() == name.lower() or focused == seat_number


def find_seat(focused_id: str | None) -> tuple[str, str] | None:
    for row in SEATING_LAYOUT:
        for seat_number, name in row:
            if is_focused(seat_number, name, focused_id):
                return seat_number, name
    return None


def seating_snapshot(focused_id: str | None) -> list[dict[str, Any]]:
    seats: list[dict[str, Any]] = []
    for row_index, row in enumerate(SEATING_LAYOUT):
        for col_index, (seat_number, name) in enumerate(row):
            seats.append({
                "seat_number": seat_number,
                "name": name,
                "row": row_index,
                "col": col_index,
                "focused": is_focused(seat_number, name, focused_id),
            })
    return seats


__all__ = ["find_seat", "is_focused", "seating_snapshot"]
