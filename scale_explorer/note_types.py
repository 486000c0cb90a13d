"""Type definitions for the Scale Explorer project."""

from dataclasses import dataclass
from enum import Enum, auto


class StringId(Enum):
    """Identity of each of the six guitar strings."""

    HIGH_E = "highE"
    B = "B"
    G = "G"
    D = "D"
    A = "A"
    LOW_E = "lowE"


class Role(Enum):
    """How a note relates to the selected scale."""

    ROOT = "root"
    FIFTH = "fifth"
    MEMBER = "member"
    NONMEMBER = "nonmember"


class Direction(Enum):
    """Order in which the sequencer walks the scale."""

    ASCENDING = "ascending"
    DESCENDING = "descending"


class SequencerState(Enum):
    STOPPED = auto()
    RUNNING = auto()


class _Finished:
    """Sentinel returned by the sequencer once a non-looping pass is over."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return "FINISHED"

    def __bool__(self):
        return False


FINISHED = _Finished()


@dataclass(frozen=True)
class FretPosition:
    """Represents a position on the guitar fretboard."""

    string_index: int  # 0 is the high E string, 5 the low E string
    fret: int  # Fret number (0 for open string)

    def __str__(self):
        return f"S{self.string_index}F{self.fret}"


@dataclass(frozen=True)
class StringDefinition:
    """A tuned string: where it sits and what it sounds when open."""

    index: int  # Physical top-to-bottom position, high E first
    open_pitch_class: int  # 0-11, C = 0
    open_octave: int  # Scientific pitch notation octave of the open string
    identity: StringId


@dataclass(frozen=True)
class AbsolutePitch:
    """A pitch class together with its octave (e.g. E4)."""

    pitch_class: int  # 0-11, C = 0
    octave: int

    @property
    def note(self) -> str:
        """Sharp spelling of the pitch class (e.g. 'C#')."""
        from .note_utils import note_name

        return note_name(self.pitch_class)

    @property
    def midi_number(self) -> int:
        # C4 is MIDI 60
        return (self.octave + 1) * 12 + self.pitch_class

    def __str__(self):
        return f"{self.note}{self.octave}"
