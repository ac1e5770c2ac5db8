"""Speech playback control as an explicit state machine.

The insight reply is read aloud by some speech engine (browser speech
synthesis, a TTS service...).  :class:`PlaybackController` owns the
``idle → playing ⇄ paused → idle`` lifecycle and rejects transitions the
current state does not allow, so the engine only ever sees valid calls.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Protocol

logger = logging.getLogger(__name__)


class PlaybackState(str, Enum):
    IDLE = "idle"
    PLAYING = "playing"
    PAUSED = "paused"


class PlaybackError(RuntimeError):
    """Raised when a transition is not valid from the current state."""


@dataclass(frozen=True)
class Voice:
    voice_uri: str
    name: str
    lang: str


@dataclass(frozen=True)
class VoiceSettings:
    voice_uri: Optional[str] = None
    pitch: float = 1.3
    rate: float = 1.2
    lang: str = "en-US"
    volume: float = 1.0


class SpeechEngine(Protocol):
    def speak(self, text: str, voice: VoiceSettings) -> None:
        ...

    def pause(self) -> None:
        ...

    def resume(self) -> None:
        ...

    def cancel(self) -> None:
        ...


def english_voices(voices: Iterable[Voice]) -> List[Voice]:
    """Return the voices whose language tag starts with ``en``."""
    return [v for v in voices if v.lang.startswith("en")]


class PlaybackController:
    """Drive a :class:`SpeechEngine` through guarded play/pause/resume/stop."""

    def __init__(self, engine: SpeechEngine, voice: Optional[VoiceSettings] = None) -> None:
        self._engine = engine
        self.voice = voice or VoiceSettings()
        self.state = PlaybackState.IDLE
        self.text: Optional[str] = None

    def _require(self, action: str, *allowed: PlaybackState) -> None:
        if self.state not in allowed:
            raise PlaybackError(f"Cannot {action} while {self.state.value}")

    def play(self, text: str) -> None:
        self._require("play", PlaybackState.IDLE)
        if not text or not text.strip():
            raise PlaybackError("Nothing to play")
        self._engine.speak(text, self.voice)
        self.text = text
        self.state = PlaybackState.PLAYING
        logger.debug("Playback started (%d chars)", len(text))

    def pause(self) -> None:
        self._require("pause", PlaybackState.PLAYING)
        self._engine.pause()
        self.state = PlaybackState.PAUSED

    def resume(self) -> None:
        self._require("resume", PlaybackState.PAUSED)
        self._engine.resume()
        self.state = PlaybackState.PLAYING

    def stop(self) -> None:
        self._require("stop", PlaybackState.PLAYING, PlaybackState.PAUSED)
        self._engine.cancel()
        self._reset()

    def finished(self) -> None:
        """Engine callback for end-of-speech or a speech error."""
        self._reset()

    def _reset(self) -> None:
        self.state = PlaybackState.IDLE
        self.text = None
