"""Defines the core interfaces for the Scale Explorer application."""

from __future__ import annotations
from abc import ABC, abstractmethod

import numpy as np


class IAudioBackend(ABC):
    """Interface for anything that can sound a note.

    The music-theory core only ever calls ``trigger``; which instrument
    answers it is decided once, when the backend is created.
    """

    @abstractmethod
    def trigger(
        self,
        note: str,
        octave: int,
        duration_seconds: float,
        velocity: float,
        start_offset_seconds: float = 0.0,
    ) -> None:
        """Start a note without waiting for it to finish."""
        pass

    def close(self) -> None:
        """Release any audio resources."""
        pass


class IAudioOutput(ABC):
    """Interface for a sink that plays rendered sample buffers."""

    @property
    @abstractmethod
    def sample_rate(self) -> int:
        """The sample rate of the output stream."""
        pass

    @abstractmethod
    def schedule(self, buffer: np.ndarray, start_offset_seconds: float = 0.0) -> None:
        """Queue a mono float32 buffer to start after the given delay."""
        pass

    @abstractmethod
    def close(self) -> None:
        """Stop the output stream."""
        pass
