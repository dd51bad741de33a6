"""Board service: registry, reconciler, transcript and per-session audio."""

from __future__ import annotations

import logging
from typing import Any
from collections.abc import Callable

from src.rpc import RpcSession, ProcedureRegistry
from src.state.display import DisplayState
from src.state.settings import AudioSettings
from src.audio import PcmTrack, AudioContext, SignalExtractor
from src.audio.extractor import ContextFactory
from src.config.board import BOARD_METHODS, FOCUS_CLEAR_DELAY_S
from src.config.audio import AUDIO_FFT_SIZE, AUDIO_SMOOTHING, AUDIO_REFRESH_HZ, AUDIO_SAMPLE_RATE_HZ

from .transcript import TranscriptLog
from .snapshot import build_snapshot
from .reconciler import BoardReconciler

logger = logging.getLogger(__name__)

Publisher = Callable[[str, dict[str, Any]], None]

MSG_BOARD_STATE = "board.state"
MSG_BOARD_CUE = "board.cue"
MSG_AUDIO_LEVELS = "audio.levels"

_DEFAULT_AUDIO = AudioSettings(
    fft_size=AUDIO_FFT_SIZE,
    smoothing=AUDIO_SMOOTHING,
    sample_rate_hz=AUDIO_SAMPLE_RATE_HZ,
    refresh_hz=AUDIO_REFRESH_HZ,
)


def _discard(_msg_type: str, _payload: dict[str, Any]) -> None:
    return None


class BoardService:
    def __init__(
        self,
        *,
        focus_clear_delay_s: float = FOCUS_CLEAR_DELAY_S,
        audio: AudioSettings | None = None,
        publish: Publisher | None = None,
        registry: ProcedureRegistry | None = None,
        context_factory: ContextFactory | None = AudioContext,
    ) -> None:
        self.reconciler = BoardReconciler(focus_clear_delay_s=focus_clear_delay_s)
        self.registry = registry if registry is not None else ProcedureRegistry()
        self.transcript = TranscriptLog()
        self._audio = audio or _DEFAULT_AUDIO
        self._publish = publish or _discard
        self._context_factory = context_factory
        self._tracks: dict[RpcSession, PcmTrack] = {}
        self._extractors: dict[RpcSession, SignalExtractor] = {}
        self.reconciler.add_state_listener(self._on_state)
        self.reconciler.add_cue_listener(self._on_cue)

    @property
    def state(self) -> DisplayState:
        return self.reconciler.state

    def snapshot(self) -> dict[str, Any]:
        return build_snapshot(self.state, version=self.reconciler.version, transcript=self.transcript)

    def attach_session(self, session: RpcSession) -> None:
        for method in BOARD_METHODS:
            self.registry.register(session, method, self.reconciler.handler_for(method))

    async def detach_session(self, session: RpcSession) -> None:
        self.registry.teardown(session)
        await self.end_audio(session)

    def record_transcript(self, sender: str, text: str, *, final: bool) -> bool:
        changed = self.transcript.ingest(sender, text, final=final)
        if changed:
            self._on_state(self.state)
        return changed

    async def feed_audio(self, session: RpcSession, pcm: bytes) -> int:
        track = self._tracks.get(session)
        if track is None or track.ended:
            track = PcmTrack(sample_rate=self._audio.sample_rate_hz)
            self._tracks[session] = track
            extractor = self._extractors.get(session)
            if extractor is None:
                extractor = self._new_extractor(session)
                self._extractors[session] = extractor
            await extractor.attach(track)
        return track.push_pcm16(pcm)

    async def end_audio(self, session: RpcSession) -> None:
        track = self._tracks.pop(session, None)
        extractor = self._extractors.pop(session, None)
        if track is not None:
            track.stop()
        if extractor is not None:
            await extractor.detach()

    async def shutdown(self) -> None:
        for session in list(self._extractors.keys() | self._tracks.keys()):
            await self.end_audio(session)
        await self.reconciler.aclose()

    def _new_extractor(self, session: RpcSession) -> SignalExtractor:
        def _on_sample(levels: list[float]) -> None:
            self._publish(MSG_AUDIO_LEVELS, {"session_id": session.session_id, "levels": levels})

        return SignalExtractor(
            fft_size=self._audio.fft_size,
            smoothing=self._audio.smoothing,
            refresh_hz=self._audio.refresh_hz,
            context_factory=self._context_factory,
            on_sample=_on_sample,
        )

    def _on_state(self, _state: DisplayState) -> None:
        self._publish(MSG_BOARD_STATE, self.snapshot())

    def _on_cue(self, cue: str) -> None:
        self._publish(MSG_BOARD_CUE, {"name": cue})


__all__ = ["MSG_AUDIO_LEVELS", "MSG_BOARD_CUE", "MSG_BOARD_STATE", "BoardService", "Publisher"]
