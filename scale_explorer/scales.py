"""Diatonic major scale calculation."""

from dataclasses import dataclass
from typing import Iterator, List, Tuple

from .logger import get_logger
from .note_utils import NOTES, display, normalize

logger = get_logger(__name__)

# Whole, Whole, Half, Whole, Whole, Whole, Half
MAJOR_SCALE_PATTERN: Tuple[int, ...] = (0, 2, 4, 5, 7, 9, 11)

# Selectable roots, in circle-of-fifths order with the flat keys spelled as flats
SCALE_ROOTS: Tuple[str, ...] = (
    "C", "G", "D", "A", "E", "B", "F#", "F", "Bb", "Eb", "Ab", "Db",
)

ROOT_DEGREE = 0
FIFTH_DEGREE = 4


@dataclass(frozen=True)
class Scale:
    """A major scale: seven pitch classes, root first.

    Iterating or indexing a scale yields sharp note names, so
    ``list(major_scale("C")) == ["C", "D", "E", "F", "G", "A", "B"]``.
    """

    root: int
    pitch_classes: Tuple[int, ...]

    def __post_init__(self):
        expected = tuple((self.root + step) % 12 for step in MAJOR_SCALE_PATTERN)
        if tuple(self.pitch_classes) != expected:
            raise ValueError(
                f"Pitch classes {self.pitch_classes} do not form a major scale "
                f"on {NOTES[self.root % 12]}"
            )

    @property
    def notes(self) -> List[str]:
        return [NOTES[pc] for pc in self.pitch_classes]

    @property
    def display_notes(self) -> List[str]:
        return [display(pc) for pc in self.pitch_classes]

    @property
    def fifth(self) -> int:
        return self.pitch_classes[FIFTH_DEGREE]

    def degree_of(self, pitch_class: int) -> int:
        """Zero-based scale degree of a pitch class, or -1 if it is not in the scale."""
        try:
            return self.pitch_classes.index(pitch_class)
        except ValueError:
            return -1

    def __len__(self) -> int:
        return len(self.pitch_classes)

    def __getitem__(self, index: int) -> str:
        return NOTES[self.pitch_classes[index]]

    def __iter__(self) -> Iterator[str]:
        return iter(self.notes)

    def __str__(self):
        return " ".join(self.display_notes)


def major_scale(root: str) -> Scale:
    """Build the major scale on a root note.

    Args:
        root: Root note name (e.g., 'C', 'F#', 'Bb')

    Returns:
        Scale: Seven pitch classes, root first

    Raises:
        InvalidNoteError: If the root is not a recognized spelling
    """
    root_index = normalize(root)
    pitch_classes = tuple((root_index + step) % 12 for step in MAJOR_SCALE_PATTERN)
    scale = Scale(root=root_index, pitch_classes=pitch_classes)
    logger.debug("Major scale on %s: %s", root, scale)
    return scale
