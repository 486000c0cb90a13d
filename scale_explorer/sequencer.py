"""Cursor over a scale for timed playback."""

from typing import Union

from .logger import get_logger
from .note_types import FINISHED, Direction, SequencerState, _Finished
from .scales import Scale

logger = get_logger(__name__)


class PlaybackSequencer:
    """Walks a scale one note per tick.

    The sequencer is owned by whatever drives a playback session; it holds
    the only mutable state in the music-theory core. ``start()`` and
    ``stop()`` may be called any number of times. ``tick()`` is only
    meaningful while running and never raises.

    A pass always starts on the root. Ascending it continues up the scale,
    descending it wraps to the seventh degree and walks down. A pass ends on
    the tick whose advance would bring the cursor back to the root. With
    looping enabled that tick returns its note and the next pass begins
    silently. Otherwise that tick returns FINISHED and stops the sequencer.
    """

    def __init__(
        self,
        scale: Scale,
        loop: bool = False,
        direction: Direction = Direction.ASCENDING,
    ) -> None:
        self._scale = scale
        self.loop = loop
        self.direction = direction
        self._state = SequencerState.STOPPED
        self._cursor = 0

    @property
    def scale(self) -> Scale:
        return self._scale

    @property
    def state(self) -> SequencerState:
        return self._state

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def is_running(self) -> bool:
        return self._state is SequencerState.RUNNING

    def start(self) -> None:
        """Begin a pass from the root. No-op if already running."""
        if self.is_running:
            logger.debug("Sequencer already running")
            return
        self._state = SequencerState.RUNNING
        self._cursor = 0
        logger.info(
            "Sequencer started (%s, loop=%s)", self.direction.value, self.loop
        )

    def stop(self) -> None:
        """Stop and rewind to the root. Safe to call when already stopped."""
        was_running = self.is_running
        self._state = SequencerState.STOPPED
        self._cursor = 0
        if was_running:
            logger.info("Sequencer stopped")

    def _next_cursor(self) -> int:
        step = 1 if self.direction is Direction.ASCENDING else -1
        return (self._cursor + step) % len(self._scale)

    def tick(self) -> Union[str, _Finished]:
        """Return the note under the cursor and advance.

        Returns:
            The sharp note name, or FINISHED when stopped or when a
            non-looping pass ends on this tick.
        """
        if not self.is_running:
            return FINISHED

        next_cursor = self._next_cursor()
        if next_cursor == 0 and not self.loop:
            logger.info("Sequencer reached the end of the scale")
            self.stop()
            return FINISHED

        note = self._scale[self._cursor]
        self._cursor = next_cursor
        return note
