"""Interchangeable guitar instruments behind the IAudioBackend contract."""

from __future__ import annotations
from abc import abstractmethod
from typing import Dict, Iterable, Optional

import numpy as np

from ..core.interfaces import IAudioBackend, IAudioOutput
from ..logger import get_logger
from ..note_types import AbsolutePitch
from ..note_utils import normalize, pitch_frequency
from .synthesis import (
    DEFAULT_SAMPLE_PITCHES,
    load_samples,
    nearest_sample,
    render_synth_voice,
    shape_sample_voice,
)

logger = get_logger(__name__)


class RenderingBackend(IAudioBackend):
    """Backend that renders each note to a buffer and hands it to an output."""

    def __init__(self, output: IAudioOutput, volume_db: float = -12.0) -> None:
        self._output = output
        self.volume_db = volume_db

    @property
    def output(self) -> IAudioOutput:
        return self._output

    @property
    def sample_rate(self) -> int:
        return self._output.sample_rate

    @abstractmethod
    def render(
        self, pitch: AbsolutePitch, duration_seconds: float, velocity: float
    ) -> np.ndarray:
        """Render one note as a mono float32 buffer."""
        pass

    def trigger(
        self,
        note: str,
        octave: int,
        duration_seconds: float,
        velocity: float,
        start_offset_seconds: float = 0.0,
    ) -> None:
        """Render a note and schedule it without waiting for playback.

        Raises:
            InvalidNoteError: If the note name is not recognized
        """
        pitch = AbsolutePitch(normalize(note), octave)
        buffer = self.render(pitch, duration_seconds, velocity)
        self._output.schedule(buffer, start_offset_seconds)
        logger.debug(
            f"Triggered {pitch} for {duration_seconds:.2f}s "
            f"(velocity {velocity:.2f}, offset {start_offset_seconds:.3f}s)"
        )

    def close(self) -> None:
        self._output.close()


class SynthGuitarBackend(RenderingBackend):
    """Synthesized guitar-like voice, used when no samples are available."""

    def render(
        self, pitch: AbsolutePitch, duration_seconds: float, velocity: float
    ) -> np.ndarray:
        return render_synth_voice(
            pitch_frequency(pitch),
            duration_seconds,
            velocity,
            self.sample_rate,
            self.volume_db,
        )


class SampledGuitarBackend(RenderingBackend):
    """Recorded open-string guitar notes, repitched to the requested pitch."""

    def __init__(
        self,
        output: IAudioOutput,
        sample_dir: Optional[str],
        volume_db: float = -12.0,
        sample_pitches: Iterable[str] = DEFAULT_SAMPLE_PITCHES,
    ) -> None:
        """Load the samples.

        Raises:
            FileNotFoundError: If no sample directory is given or samples are missing
        """
        super().__init__(output, volume_db)
        if not sample_dir:
            raise FileNotFoundError("No guitar sample directory configured")
        self._samples: Dict[AbsolutePitch, np.ndarray] = load_samples(
            sample_dir, output.sample_rate, sample_pitches
        )

    @property
    def sample_pitches(self):
        return sorted(self._samples, key=lambda p: p.midi_number)

    def render(
        self, pitch: AbsolutePitch, duration_seconds: float, velocity: float
    ) -> np.ndarray:
        source, shift = nearest_sample(self._samples, pitch)
        return shape_sample_voice(
            self._samples[source],
            shift,
            duration_seconds,
            velocity,
            self.sample_rate,
            self.volume_db,
        )
