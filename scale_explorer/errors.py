"""Exceptions raised by the Scale Explorer music-theory core."""


class ScaleExplorerError(Exception):
    """Base class for all Scale Explorer errors."""


class InvalidNoteError(ScaleExplorerError, ValueError):
    """Raised when a note spelling is not one of the recognized names."""

    def __init__(self, note: str, message: str = "") -> None:
        self.note = note
        super().__init__(message or f"Invalid note name: {note!r}")


class FretRangeError(ScaleExplorerError, IndexError):
    """Raised when a string index or fret number is off the fretboard."""

    def __init__(self, string_index: int, fret: int, message: str = "") -> None:
        self.string_index = string_index
        self.fret = fret
        super().__init__(
            message
            or f"Position out of range: string {string_index}, fret {fret} "
            f"(strings 0-5, frets 0-12)"
        )
