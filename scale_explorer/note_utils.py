"""Utility functions for working with note names, pitch classes and frequencies."""

import re
from typing import Dict, Tuple

import numpy as np

from .errors import InvalidNoteError
from .logger import get_logger
from .note_types import AbsolutePitch

# Get logger for this module
logger = get_logger(__name__)

# Every valid spelling for each pitch class, sharp first
NOTE_ENHARMONICS: Tuple[Tuple[str, ...], ...] = (
    ("C",),
    ("C#", "Db"),
    ("D",),
    ("D#", "Eb"),
    ("E",),
    ("F",),
    ("F#", "Gb"),
    ("G",),
    ("G#", "Ab"),
    ("A",),
    ("A#", "Bb"),
    ("B",),
)

# Sharp spellings, used for all internal calculations
NOTES: Tuple[str, ...] = tuple(group[0] for group in NOTE_ENHARMONICS)

SHARP_TO_FLAT: Dict[str, str] = {
    group[0]: group[1] for group in NOTE_ENHARMONICS if len(group) > 1
}
FLAT_TO_SHARP: Dict[str, str] = {flat: sharp for sharp, flat in SHARP_TO_FLAT.items()}

# Note name followed by an optional (possibly negative) octave number
PITCH_PATTERN = re.compile(r"^([A-G][#b]?)(-?[0-9]+)$")


def _build_name_lookup() -> Dict[str, int]:
    """Map every recognized spelling, including "X/Y" display forms, to its pitch class."""
    lookup: Dict[str, int] = {}
    for pitch_class, group in enumerate(NOTE_ENHARMONICS):
        for name in group:
            lookup[name] = pitch_class
        if len(group) > 1:
            lookup["/".join(group)] = pitch_class
    return lookup


_NAME_LOOKUP = _build_name_lookup()


def normalize(name: str) -> int:
    """Resolve a note spelling to its pitch class.

    Args:
        name: A note name such as 'C', 'F#', 'Bb' or the display form 'A#/Bb'

    Returns:
        int: The pitch class (0-11, C = 0)

    Raises:
        InvalidNoteError: If the name is not a recognized spelling
    """
    if not isinstance(name, str):
        raise InvalidNoteError(str(name))

    pitch_class = _NAME_LOOKUP.get(name.strip())
    if pitch_class is None:
        raise InvalidNoteError(name)
    return pitch_class


def _check_pitch_class(pitch_class: int) -> int:
    if not isinstance(pitch_class, int) or not 0 <= pitch_class < len(NOTES):
        raise InvalidNoteError(str(pitch_class), f"Invalid pitch class: {pitch_class!r}")
    return pitch_class


def note_name(pitch_class: int, use_flats: bool = False) -> str:
    """Single spelling for a pitch class ('C#' or, with use_flats, 'Db')."""
    group = NOTE_ENHARMONICS[_check_pitch_class(pitch_class)]
    if use_flats and len(group) > 1:
        return group[1]
    return group[0]


def display(pitch_class: int) -> str:
    """Display notation for a pitch class.

    Naturals have a single name ('C'); the other five pitch classes are shown
    with both spellings, sharp first ('C#/Db').
    """
    return "/".join(NOTE_ENHARMONICS[_check_pitch_class(pitch_class)])


def format_pitch(pitch_class: int, octave: int, use_flats: bool = False) -> str:
    """Format a pitch in scientific pitch notation (e.g. 'C#4')."""
    return f"{note_name(pitch_class, use_flats)}{octave}"


def parse_pitch(text: str) -> AbsolutePitch:
    """Parse scientific pitch notation such as 'E2' or 'Bb3'.

    Raises:
        InvalidNoteError: If the text is not a note name followed by an octave
    """
    match = PITCH_PATTERN.match(text.strip()) if isinstance(text, str) else None
    if not match:
        raise InvalidNoteError(str(text), f"Invalid pitch: {text!r}")
    return AbsolutePitch(normalize(match.group(1)), int(match.group(2)))


def pitch_frequency(pitch: AbsolutePitch, a4: float = 440.0) -> float:
    """Frequency in Hz of a pitch in twelve-tone equal temperament.

    Note:
        - A4 is 440 Hz (MIDI 69)
        - Middle C is C4 (261.63 Hz)
    """
    half_steps = pitch.midi_number - 69
    return float(a4 * np.power(2.0, half_steps / 12.0))


def convert_note_notation(note: str, to_flats: bool = False) -> str:
    """Convert a note name between sharp and flat notation.

    Args:
        note: The note name to convert (e.g., 'F#2' or 'Gb2')
        to_flats: If True, convert to flats (e.g., 'Gb2'), otherwise to sharps (e.g., 'F#2')

    Returns:
        str: The converted note name; naturals are returned unchanged

    Raises:
        InvalidNoteError: If the note part is not a recognized spelling

    Examples:
        >>> convert_note_notation('F#2', to_flats=True)
        'Gb2'
        >>> convert_note_notation('Gb2', to_flats=False)
        'F#2'
    """
    stripped = note.strip()
    note_part = stripped.rstrip("-0123456789")
    octave_part = stripped[len(note_part) :]
    pitch_class = normalize(note_part)
    return f"{note_name(pitch_class, use_flats=to_flats)}{octave_part}"
