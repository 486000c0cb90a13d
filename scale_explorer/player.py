"""Timer-driven scale playback."""

import random
import time
from typing import Callable, Optional

from .core.events import PlaybackEvents
from .core.interfaces import IAudioBackend
from .fretboard import pitch_at
from .logger import get_logger
from .note_types import FINISHED, AbsolutePitch
from .sequencer import PlaybackSequencer

logger = get_logger(__name__)

DEFAULT_INTERVAL_SECONDS = 0.5
DEFAULT_OCTAVE = 4


class ScalePlayer:
    """Ticks a sequencer on a fixed interval and sounds each note.

    Every tick runs synchronously on the calling thread. Notes are handed to
    the backend fire-and-forget, so a slow or failing backend never delays or
    stops the sequence.
    """

    def __init__(
        self,
        sequencer: PlaybackSequencer,
        backend: IAudioBackend,
        interval_seconds: float = DEFAULT_INTERVAL_SECONDS,
        octave: int = DEFAULT_OCTAVE,
        rng: Optional[random.Random] = None,
        events: Optional[PlaybackEvents] = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if interval_seconds <= 0:
            raise ValueError(f"interval_seconds must be positive, got {interval_seconds}")
        self.sequencer = sequencer
        self.backend = backend
        self.interval_seconds = interval_seconds
        self.octave = octave
        self.events = events or PlaybackEvents()
        self._rng = rng or random.Random()
        self._clock = clock
        self._sleep = sleep

    def _play(self, note: str, octave: int) -> None:
        duration = 1.2 + self._rng.random() * 0.4
        velocity = 0.5 + self._rng.random() * 0.3
        start_offset = self._rng.random() * 0.01
        try:
            self.backend.trigger(note, octave, duration, velocity, start_offset)
        except Exception as e:
            logger.error(f"Error playing note {note}{octave}: {e}")
            return
        self.events.emit_note_played(note, octave)

    def start(self) -> None:
        if self.sequencer.is_running:
            return
        self.sequencer.start()
        self.events.emit_started()

    def stop(self) -> None:
        """Halt playback. Notes already triggered keep ringing."""
        was_running = self.sequencer.is_running
        self.sequencer.stop()
        if was_running:
            self.events.emit_stopped()

    def step(self) -> Optional[str]:
        """Run one timer tick.

        Returns:
            The note that was played, or None once the sequence has finished
        """
        was_running = self.sequencer.is_running
        note = self.sequencer.tick()
        if note is FINISHED:
            if was_running:
                self.events.emit_finished()
            return None
        self._play(note, self.octave)
        return note

    def run(self, max_ticks: Optional[int] = None) -> int:
        """Play until the sequencer stops or ``max_ticks`` notes have sounded.

        Starts the sequencer if it is not already running and stops it on
        the way out.

        Returns:
            Number of notes played
        """
        if not self.sequencer.is_running:
            self.start()

        played = 0
        next_tick = self._clock()
        try:
            while self.sequencer.is_running:
                if max_ticks is not None and played >= max_ticks:
                    break
                if self.step() is not None:
                    played += 1
                next_tick += self.interval_seconds
                delay = next_tick - self._clock()
                if delay > 0 and self.sequencer.is_running:
                    self._sleep(delay)
        finally:
            self.stop()
        logger.info(f"Playback ended after {played} notes")
        return played

    def play_position(self, string_index: int, fret: int) -> AbsolutePitch:
        """Sound the note under a fretboard position.

        Raises:
            FretRangeError: If the position is off the fretboard
        """
        pitch = pitch_at(string_index, fret)
        self._play(pitch.note, pitch.octave)
        return pitch
