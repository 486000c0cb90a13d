import unittest

from scale_explorer.note_types import FINISHED, Direction, SequencerState
from scale_explorer.scales import major_scale
from scale_explorer.sequencer import PlaybackSequencer

C_MAJOR = ["C", "D", "E", "F", "G", "A", "B"]


class TestPlaybackSequencer(unittest.TestCase):
    def test_starts_stopped(self):
        seq = PlaybackSequencer(major_scale("C"))
        self.assertIs(seq.state, SequencerState.STOPPED)
        self.assertIs(seq.tick(), FINISHED)

    def test_loop_returns_to_start_after_seven_ticks(self):
        seq = PlaybackSequencer(major_scale("C"), loop=True)
        seq.start()
        notes = [seq.tick() for _ in range(7)]
        self.assertEqual(notes, C_MAJOR)
        self.assertEqual(seq.cursor, 0)
        self.assertTrue(seq.is_running)
        self.assertEqual(seq.tick(), "C")

    def test_no_loop_stops_at_end(self):
        seq = PlaybackSequencer(major_scale("C"), loop=False)
        seq.start()
        notes = [seq.tick() for _ in range(6)]
        self.assertEqual(notes, C_MAJOR[:6])
        self.assertTrue(seq.is_running)
        self.assertIs(seq.tick(), FINISHED)
        self.assertIs(seq.state, SequencerState.STOPPED)
        self.assertIs(seq.tick(), FINISHED)
        self.assertFalse(FINISHED)

    def test_descending(self):
        seq = PlaybackSequencer(major_scale("C"), direction=Direction.DESCENDING)
        seq.start()
        notes = [seq.tick() for _ in range(6)]
        self.assertEqual(notes, ["C", "B", "A", "G", "F", "E"])
        self.assertIs(seq.tick(), FINISHED)
        self.assertIs(seq.state, SequencerState.STOPPED)

    def test_descending_loop(self):
        seq = PlaybackSequencer(
            major_scale("G"), loop=True, direction=Direction.DESCENDING
        )
        seq.start()
        notes = [seq.tick() for _ in range(9)]
        self.assertEqual(notes, ["G", "F#", "E", "D", "C", "B", "A", "G", "F#"])

    def test_stop_resets_cursor(self):
        seq = PlaybackSequencer(major_scale("C"), loop=True)
        seq.start()
        seq.tick()
        seq.tick()
        self.assertEqual(seq.cursor, 2)
        seq.stop()
        self.assertEqual(seq.cursor, 0)
        self.assertIs(seq.tick(), FINISHED)
        seq.start()
        self.assertEqual(seq.tick(), "C")

    def test_start_and_stop_are_idempotent(self):
        seq = PlaybackSequencer(major_scale("C"))
        seq.stop()
        seq.stop()
        seq.start()
        for _ in range(3):
            seq.tick()
        seq.start()
        self.assertEqual(seq.cursor, 3)
        self.assertTrue(seq.is_running)
        self.assertEqual(seq.tick(), "F")

    def test_enabling_loop_mid_session(self):
        seq = PlaybackSequencer(major_scale("C"))
        seq.start()
        for _ in range(3):
            seq.tick()
        seq.loop = True
        notes = [seq.tick() for _ in range(5)]
        self.assertEqual(notes, ["F", "G", "A", "B", "C"])
        self.assertTrue(seq.is_running)

    def test_sessions_do_not_share_state(self):
        first = PlaybackSequencer(major_scale("C"), loop=True)
        second = PlaybackSequencer(major_scale("C"), loop=True)
        first.start()
        second.start()
        first.tick()
        first.tick()
        self.assertEqual(second.tick(), "C")


if __name__ == "__main__":
    unittest.main()
