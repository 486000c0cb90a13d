"""Event system for Scale Explorer playback."""

from typing import Dict, List, Callable, Any
from enum import Enum, auto

from ..logger import get_logger

logger = get_logger(__name__)


class PlaybackEventType(Enum):
    """Event types for scale playback."""

    STARTED = auto()
    NOTE_PLAYED = auto()
    FINISHED = auto()
    STOPPED = auto()


class EventEmitter:
    """Event emitter for Scale Explorer components."""

    def __init__(self):
        """Initialize the event emitter."""
        self._listeners: Dict[Any, List[Callable]] = {}

    def on(self, event_type: Any, callback: Callable) -> None:
        """Register a callback for an event type.

        Args:
            event_type: Event type to listen for
            callback: Function to call when the event occurs
        """
        if event_type not in self._listeners:
            self._listeners[event_type] = []

        if callback not in self._listeners[event_type]:
            self._listeners[event_type].append(callback)
            logger.debug(f"Added listener for event {event_type}")

    def emit(self, event_type: Any, *args, **kwargs) -> None:
        """Emit an event.

        A failing listener is logged and does not prevent the others from
        being called.
        """
        if event_type not in self._listeners:
            return

        for callback in self._listeners[event_type]:
            try:
                callback(*args, **kwargs)
            except Exception as e:
                logger.error(f"Error in event listener for {event_type}: {e}")

    def clear(self) -> None:
        """Remove all event listeners."""
        self._listeners = {}
        logger.debug("Cleared all event listeners")


class PlaybackEvents:
    """Event emitter specifically for playback events."""

    def __init__(self):
        self._emitter = EventEmitter()

    def on_started(self, callback: Callable[[], None]) -> None:
        self._emitter.on(PlaybackEventType.STARTED, callback)

    def on_note_played(self, callback: Callable[[str, int], None]) -> None:
        """Register a callback receiving (note, octave) for every triggered note."""
        self._emitter.on(PlaybackEventType.NOTE_PLAYED, callback)

    def on_finished(self, callback: Callable[[], None]) -> None:
        self._emitter.on(PlaybackEventType.FINISHED, callback)

    def on_stopped(self, callback: Callable[[], None]) -> None:
        self._emitter.on(PlaybackEventType.STOPPED, callback)

    def emit_started(self) -> None:
        self._emitter.emit(PlaybackEventType.STARTED)

    def emit_note_played(self, note: str, octave: int) -> None:
        self._emitter.emit(PlaybackEventType.NOTE_PLAYED, note, octave)

    def emit_finished(self) -> None:
        self._emitter.emit(PlaybackEventType.FINISHED)

    def emit_stopped(self) -> None:
        self._emitter.emit(PlaybackEventType.STOPPED)

    def clear(self) -> None:
        """Remove all event listeners."""
        self._emitter.clear()
