"""Fretboard model: string tuning, pitch lookup and scale highlighting.

Strings are indexed in physical top-to-bottom order as seen by the player
looking down at the neck: index 0 is the high E string, index 5 the low E
string. Frets run from 0 (open) to 12.

The octave reported for a fretted note comes from a per-string rule table
rather than from counting semitones. Each rule states from which fret, and
for which pitch classes, the note is reported one octave above the open
string. At fret 12 every string is exactly one octave up.
"""

from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Tuple

from .errors import FretRangeError
from .logger import get_logger
from .note_types import AbsolutePitch, FretPosition, Role, StringDefinition, StringId
from .note_utils import NOTES, display, normalize
from .scale_classifier import ScaleClassifier
from .scales import Scale

logger = get_logger(__name__)

FRETS = 12  # Highest fret; positions run 0..FRETS
FRET_MARKERS: Tuple[int, ...] = (3, 5, 7, 9, 12)
DOUBLE_MARKER_FRET = 12

STRINGS: Tuple[StringDefinition, ...] = (
    StringDefinition(0, NOTES.index("E"), 4, StringId.HIGH_E),
    StringDefinition(1, NOTES.index("B"), 3, StringId.B),
    StringDefinition(2, NOTES.index("G"), 3, StringId.G),
    StringDefinition(3, NOTES.index("D"), 3, StringId.D),
    StringDefinition(4, NOTES.index("A"), 2, StringId.A),
    StringDefinition(5, NOTES.index("E"), 2, StringId.LOW_E),
)


@dataclass(frozen=True)
class OctaveRule:
    """When a fretted note on one string is reported an octave up.

    The note moves up an octave at ``octave_fret`` and beyond. Below that,
    it moves up from ``from_fret`` onward, but only when its pitch class is
    below ``below_pitch_class`` (or equal to it, when ``inclusive``). A
    ``below_pitch_class`` of None means every pitch class qualifies.
    """

    from_fret: int
    below_pitch_class: Optional[int] = None
    inclusive: bool = False
    octave_fret: int = FRETS

    def bump(self, fret: int, pitch_class: int) -> int:
        if fret >= self.octave_fret:
            return 1
        if fret < self.from_fret:
            return 0
        if self.below_pitch_class is None:
            return 1
        if self.inclusive:
            return int(pitch_class <= self.below_pitch_class)
        return int(pitch_class < self.below_pitch_class)


OCTAVE_RULES: Dict[StringId, OctaveRule] = {
    StringId.HIGH_E: OctaveRule(from_fret=8, below_pitch_class=NOTES.index("E")),
    StringId.B: OctaveRule(from_fret=1),
    StringId.G: OctaveRule(from_fret=5),
    StringId.D: OctaveRule(
        from_fret=7, below_pitch_class=NOTES.index("C#"), inclusive=True
    ),
    StringId.A: OctaveRule(from_fret=3, below_pitch_class=NOTES.index("A")),
    StringId.LOW_E: OctaveRule(from_fret=8, below_pitch_class=NOTES.index("E")),
}


def _check_position(string_index: int, fret: int) -> None:
    valid = (
        isinstance(string_index, int)
        and isinstance(fret, int)
        and 0 <= string_index < len(STRINGS)
        and 0 <= fret <= FRETS
    )
    if not valid:
        raise FretRangeError(string_index, fret)


def string_at(string_index: int) -> StringDefinition:
    _check_position(string_index, 0)
    return STRINGS[string_index]


def transition_bump(string_index: int, fret: int, pitch_class: int) -> int:
    """Octave offset (0 or 1) above the open string for a fretted note."""
    _check_position(string_index, fret)
    return OCTAVE_RULES[STRINGS[string_index].identity].bump(fret, pitch_class)


def pitch_at(string_index: int, fret: int) -> AbsolutePitch:
    """Resolve a fretboard position to a note and octave.

    Args:
        string_index: 0 (high E) to 5 (low E)
        fret: 0 (open) to 12

    Returns:
        AbsolutePitch: The pitch class and octave sounded at that position

    Raises:
        FretRangeError: If the string index or fret is off the fretboard
    """
    _check_position(string_index, fret)
    string = STRINGS[string_index]
    pitch_class = (string.open_pitch_class + fret) % 12
    octave = string.open_octave + transition_bump(string_index, fret, pitch_class)
    logger.debug(
        "String %s (index %d), fret %d -> %s%d",
        string.identity.value,
        string_index,
        fret,
        NOTES[pitch_class],
        octave,
    )
    return AbsolutePitch(pitch_class, octave)


def iter_positions() -> Iterator[FretPosition]:
    """Yield every position on the neck, string by string, fret by fret."""
    for string in STRINGS:
        for fret in range(FRETS + 1):
            yield FretPosition(string.index, fret)


def positions_of(note: str) -> List[FretPosition]:
    """All positions on the neck that sound the given note, in any octave."""
    pitch_class = normalize(note)
    return [
        pos
        for pos in iter_positions()
        if (STRINGS[pos.string_index].open_pitch_class + pos.fret) % 12 == pitch_class
    ]


@dataclass(frozen=True)
class FretCell:
    """Everything a fretboard view needs to draw and sound one position."""

    position: FretPosition
    pitch: AbsolutePitch
    label: str  # Open strings show the string name, fretted notes the display name
    role: Role
    has_marker: bool  # Inlay dot drawn under this fret

    @property
    def in_scale(self) -> bool:
        return self.role is not Role.NONMEMBER


def build_fretboard(scale: Scale) -> List[List[FretCell]]:
    """Lay out the whole neck with each position classified against a scale.

    Returns:
        One row per string in string-index order (high E first), each holding
        FRETS + 1 cells from the open string upward.
    """
    classifier = ScaleClassifier(scale)
    rows: List[List[FretCell]] = []
    for string in STRINGS:
        row = []
        for fret in range(FRETS + 1):
            pitch = pitch_at(string.index, fret)
            label = NOTES[string.open_pitch_class] if fret == 0 else display(pitch.pitch_class)
            row.append(
                FretCell(
                    position=FretPosition(string.index, fret),
                    pitch=pitch,
                    label=label,
                    role=classifier.classify(pitch.pitch_class),
                    has_marker=fret in FRET_MARKERS,
                )
            )
        rows.append(row)
    return rows
