"""Resolve a raw media track from the shapes the audio layer hands out.

Accepted shapes, checked structurally:
  - track reference:  source.publication.track.media_stream_track
  - publication:      source.track.media_stream_track
  - raw track:        anything with an awaitable `recv()`
Attributes and mapping keys are both accepted, in snake or camel case.
"""

from __future__ import annotations

from typing import Any
from collections.abc import Mapping

_TRACK_KEYS = ("media_stream_track", "mediaStreamTrack")

_WRAPPER_PATHS: tuple[tuple[str, ...], ...] = (
    ("publication", "track"),
    ("track",),
)


def _lookup(obj: Any, name: str) -> Any:
    if obj is None:
        return None
    if isinstance(obj, Mapping):
        return obj.get(name)
    return getattr(obj, name, None)


def _is_raw_track(obj: Any) -> bool:
    if obj is None or isinstance(obj, Mapping):
        return False
    if not callable(getattr(obj, "recv", None)):
        return False
    kind = getattr(obj, "kind", None)
    return kind is None or kind == "audio"


def _follow(source: Any, path: tuple[str, ...]) -> Any:
    node = source
    for key in path:
        node = _lookup(node, key)
        if node is None:
            return None
    for key in _TRACK_KEYS:
        track = _lookup(node, key)
        if track is not None:
            return track
    return None


def resolve_media_track(source: Any) -> Any | None:
    if source is None:
        return None
    for path in _WRAPPER_PATHS:
        track = _follow(source, path)
        if _is_raw_track(track):
            return track
    if _is_raw_track(source):
        return source
    return None


__all__ = ["resolve_media_track"]
