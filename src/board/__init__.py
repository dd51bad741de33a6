from .service import BoardService
from .focus import FocusTimer
from .transcript import TranscriptLog
from .snapshot import build_snapshot
from .reconciler import BoardReconciler
from .payloads import decode_call

__all__ = [
    "BoardReconciler",
    "BoardService",
    "FocusTimer",
    "TranscriptLog",
    "build_snapshot",
    "decode_call",
]
