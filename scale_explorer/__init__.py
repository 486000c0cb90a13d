"""Scale Explorer: major scales mapped onto a six-string guitar fretboard."""

from .errors import FretRangeError, InvalidNoteError, ScaleExplorerError
from .fretboard import STRINGS, build_fretboard, pitch_at
from .note_types import (
    FINISHED,
    AbsolutePitch,
    Direction,
    FretPosition,
    Role,
    SequencerState,
    StringDefinition,
    StringId,
)
from .note_utils import display, normalize
from .scale_classifier import is_member, role
from .scales import Scale, major_scale
from .sequencer import PlaybackSequencer

__all__ = [
    "FINISHED",
    "STRINGS",
    "AbsolutePitch",
    "Direction",
    "FretPosition",
    "FretRangeError",
    "InvalidNoteError",
    "PlaybackSequencer",
    "Role",
    "Scale",
    "ScaleExplorerError",
    "SequencerState",
    "StringDefinition",
    "StringId",
    "build_fretboard",
    "display",
    "is_member",
    "major_scale",
    "normalize",
    "pitch_at",
    "role",
]
