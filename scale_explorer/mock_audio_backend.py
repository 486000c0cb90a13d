"""Silent audio backend that records triggered notes instead of sounding them."""

from dataclasses import dataclass
from typing import List

from .core.interfaces import IAudioBackend
from .note_utils import normalize


@dataclass(frozen=True)
class TriggeredNote:
    note: str
    octave: int
    duration_seconds: float
    velocity: float
    start_offset_seconds: float


class RecordingAudioBackend(IAudioBackend):
    """A silent backend that records every trigger. Used for tests and dry runs."""

    def __init__(self):
        self.triggered: List[TriggeredNote] = []
        self.closed = False

    def trigger(
        self,
        note: str,
        octave: int,
        duration_seconds: float,
        velocity: float,
        start_offset_seconds: float = 0.0,
    ) -> None:
        normalize(note)
        self.triggered.append(
            TriggeredNote(note, octave, duration_seconds, velocity, start_offset_seconds)
        )

    def close(self) -> None:
        self.closed = True
