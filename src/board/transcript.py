"""Running transcript of agent and student speech."""

from __future__ import annotations

from typing import Any
from dataclasses import asdict, dataclass

SENDERS = ("agent", "user")


@dataclass(frozen=True, slots=True)
class TranscriptEntry:
    text: str
    sender: str
    id: str


class TranscriptLog:
    """Finalized segments are appended; the live segment per sender is replaced."""

    def __init__(self, *, max_entries: int = 500) -> None:
        self._entries: list[TranscriptEntry] = []
        self._live: dict[str, str | None] = {sender: None for sender in SENDERS}
        self._counter = 0
        self._max_entries = max(1, int(max_entries))

    @property
    def entries(self) -> list[TranscriptEntry]:
        return list(self._entries)

    def live_text(self, sender: str) -> str | None:
        return self._live.get(sender)

    def ingest(self, sender: str, text: str, *, final: bool) -> bool:
        if sender not in self._live:
            raise ValueError(f"unknown transcript sender {sender!r}")
        if not text:
            return False
        if not final:
            if self._live[sender] == text:
                return False
            self._live[sender] = text
            return True

        self._live[sender] = None
        self._entries.append(TranscriptEntry(text=text, sender=sender, id=f"{sender}-{self._counter}"))
        self._counter += 1
        if len(self._entries) > self._max_entries:
            del self._entries[: len(self._entries) - self._max_entries]
        return True

    def snapshot(self) -> dict[str, Any]:
        return {
            "entries": [asdict(e) for e in self._entries],
            "live": {"agent": self._live["agent"], "user": self._live["user"]},
        }


__all__ = ["SENDERS", "TranscriptEntry", "TranscriptLog"]
