"""Sums overlapping note buffers into one output signal."""

import threading
from dataclasses import dataclass
from typing import List

import numpy as np

from ..logger import get_logger

logger = get_logger(__name__)


@dataclass
class _Voice:
    buffer: np.ndarray
    position: int  # Next buffer frame to play; negative while still delayed


class VoiceMixer:
    """Mixes any number of scheduled voices.

    ``add`` is called from the playback thread and ``render`` from the audio
    device callback, so the voice list is guarded by a lock. Voices are never
    cut short: notes that outlast the tick interval simply overlap.
    """

    def __init__(self) -> None:
        self._voices: List[_Voice] = []
        self._lock = threading.Lock()

    @property
    def active_voices(self) -> int:
        with self._lock:
            return len(self._voices)

    def add(self, buffer: np.ndarray, delay_frames: int = 0) -> None:
        if len(buffer) == 0:
            return
        voice = _Voice(np.asarray(buffer, dtype=np.float32), -max(int(delay_frames), 0))
        with self._lock:
            self._voices.append(voice)

    def render(self, frames: int) -> np.ndarray:
        """Produce the next ``frames`` samples of the mix, clipped to [-1, 1]."""
        out = np.zeros(frames, dtype=np.float32)
        with self._lock:
            remaining = []
            for voice in self._voices:
                out_start = max(0, -voice.position)
                buf_start = max(0, voice.position)
                count = min(frames - out_start, len(voice.buffer) - buf_start)
                if count > 0:
                    out[out_start : out_start + count] += voice.buffer[
                        buf_start : buf_start + count
                    ]
                voice.position += frames
                if voice.position < len(voice.buffer):
                    remaining.append(voice)
            self._voices = remaining
        np.clip(out, -1.0, 1.0, out=out)
        return out

    def clear(self) -> None:
        with self._lock:
            self._voices = []
