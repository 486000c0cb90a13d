"""Classifies notes as root, fifth, member or non-member of a scale."""

from .logger import get_logger
from .note_types import Role
from .note_utils import normalize
from .scales import FIFTH_DEGREE, ROOT_DEGREE, Scale

logger = get_logger(__name__)


class ScaleClassifier:
    """
    Encapsulates highlighting logic for one scale: which pitch classes are
    the root, the fifth, or any other member.
    """

    def __init__(self, scale: Scale) -> None:
        self._scale = scale
        self._members = frozenset(scale.pitch_classes)

    @property
    def scale(self) -> Scale:
        return self._scale

    def classify(self, pitch_class: int) -> Role:
        if pitch_class == self._scale.pitch_classes[ROOT_DEGREE]:
            return Role.ROOT
        if pitch_class == self._scale.pitch_classes[FIFTH_DEGREE]:
            return Role.FIFTH
        if pitch_class in self._members:
            return Role.MEMBER
        return Role.NONMEMBER

    def role(self, note: str) -> Role:
        return self.classify(normalize(note))

    def is_root(self, note: str) -> bool:
        return self.role(note) is Role.ROOT

    def is_member(self, note: str) -> bool:
        return self.role(note) is not Role.NONMEMBER


def role(note: str, scale: Scale) -> Role:
    """Role of a note relative to a scale.

    Args:
        note: Any recognized spelling (e.g., 'G', 'D#', 'Eb')
        scale: The scale to classify against

    Returns:
        Role: ROOT, FIFTH, MEMBER or NONMEMBER

    Raises:
        InvalidNoteError: If the note is not a recognized spelling
    """
    result = ScaleClassifier(scale).role(note)
    logger.debug("%s in %s scale: %s", note, scale[ROOT_DEGREE], result.value)
    return result


def is_member(note: str, scale: Scale) -> bool:
    """True if the note belongs to the scale (root and fifth included)."""
    return role(note, scale) is not Role.NONMEMBER
