from .track import PcmTrack
from .context import AudioContext
from .analyser import AnalyserNode
from .extractor import SignalExtractor
from .sources import resolve_media_track
from .stream_source import MediaStreamSource

__all__ = [
    "AnalyserNode",
    "AudioContext",
    "MediaStreamSource",
    "PcmTrack",
    "SignalExtractor",
    "resolve_media_track",
]
