import unittest

from scale_explorer.errors import InvalidNoteError
from scale_explorer.note_utils import NOTES, normalize
from scale_explorer.scales import MAJOR_SCALE_PATTERN, SCALE_ROOTS, Scale, major_scale


class TestMajorScale(unittest.TestCase):
    def test_c_major(self):
        self.assertEqual(major_scale("C").notes, ["C", "D", "E", "F", "G", "A", "B"])
        self.assertEqual(list(major_scale("C")), ["C", "D", "E", "F", "G", "A", "B"])

    def test_interval_pattern_for_every_root(self):
        for root in NOTES:
            scale = major_scale(root)
            root_pc = normalize(root)
            self.assertEqual(len(scale), 7)
            self.assertEqual(len(set(scale.pitch_classes)), 7)
            offsets = sorted((pc - root_pc) % 12 for pc in scale.pitch_classes)
            self.assertEqual(tuple(offsets), MAJOR_SCALE_PATTERN)
            self.assertEqual(scale[0], NOTES[root_pc])

    def test_flat_root_uses_sharp_names(self):
        self.assertEqual(major_scale("Bb").notes, ["A#", "C", "D", "D#", "F", "G", "A"])
        self.assertEqual(major_scale("Bb"), major_scale("A#"))

    def test_display_notes(self):
        self.assertEqual(
            major_scale("D").display_notes,
            ["D", "E", "F#/Gb", "G", "A", "B", "C#/Db"],
        )

    def test_fifth_and_degrees(self):
        scale = major_scale("G")
        self.assertEqual(NOTES[scale.fifth], "D")
        self.assertEqual(scale.degree_of(normalize("F#")), 6)
        self.assertEqual(scale.degree_of(normalize("F")), -1)

    def test_invalid_root(self):
        with self.assertRaises(InvalidNoteError):
            major_scale("H")

    def test_scale_rejects_wrong_pattern(self):
        with self.assertRaises(ValueError):
            Scale(root=0, pitch_classes=(0, 2, 3, 5, 7, 8, 10))

    def test_selectable_roots(self):
        self.assertEqual(len(SCALE_ROOTS), 12)
        self.assertEqual(len({normalize(r) for r in SCALE_ROOTS}), 12)


if __name__ == "__main__":
    unittest.main()
