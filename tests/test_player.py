import random
import unittest

from scale_explorer.core.interfaces import IAudioBackend
from scale_explorer.errors import FretRangeError
from scale_explorer.mock_audio_backend import RecordingAudioBackend
from scale_explorer.note_types import AbsolutePitch, Direction
from scale_explorer.player import ScalePlayer
from scale_explorer.scales import major_scale
from scale_explorer.sequencer import PlaybackSequencer


class FakeClock:
    def __init__(self):
        self.now = 100.0
        self.sleeps = []

    def __call__(self):
        return self.now

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds


class FailingBackend(IAudioBackend):
    def __init__(self):
        self.calls = 0

    def trigger(self, note, octave, duration_seconds, velocity, start_offset_seconds=0.0):
        self.calls += 1
        raise RuntimeError("audio device went away")


def make_player(backend=None, loop=False, direction=Direction.ASCENDING, **kwargs):
    clock = FakeClock()
    sequencer = PlaybackSequencer(major_scale("C"), loop=loop, direction=direction)
    player = ScalePlayer(
        sequencer,
        backend or RecordingAudioBackend(),
        rng=random.Random(1),
        clock=clock,
        sleep=clock.sleep,
        **kwargs,
    )
    return player, clock


class TestScalePlayer(unittest.TestCase):
    def test_run_plays_scale_once(self):
        backend = RecordingAudioBackend()
        player, clock = make_player(backend, interval_seconds=0.5)
        finished = []
        player.events.on_finished(lambda: finished.append(True))

        played = player.run()

        self.assertEqual(played, 6)
        self.assertEqual(
            [t.note for t in backend.triggered], ["C", "D", "E", "F", "G", "A"]
        )
        self.assertTrue(all(t.octave == 4 for t in backend.triggered))
        self.assertEqual(finished, [True])
        self.assertFalse(player.sequencer.is_running)
        self.assertEqual(len(clock.sleeps), 6)
        for seconds in clock.sleeps:
            self.assertAlmostEqual(seconds, 0.5)

    def test_trigger_jitter_ranges(self):
        backend = RecordingAudioBackend()
        player, _ = make_player(backend)
        player.run()
        for t in backend.triggered:
            self.assertTrue(1.2 <= t.duration_seconds <= 1.6)
            self.assertTrue(0.5 <= t.velocity <= 0.8)
            self.assertTrue(0.0 <= t.start_offset_seconds <= 0.01)

    def test_loop_runs_until_max_ticks(self):
        backend = RecordingAudioBackend()
        player, _ = make_player(backend, loop=True, octave=3)
        stopped = []
        player.events.on_stopped(lambda: stopped.append(True))

        played = player.run(max_ticks=10)

        self.assertEqual(played, 10)
        self.assertEqual(backend.triggered[7].note, "C")
        self.assertEqual(backend.triggered[0].octave, 3)
        self.assertEqual(stopped, [True])
        self.assertEqual(player.sequencer.cursor, 0)

    def test_backend_errors_do_not_stop_playback(self):
        backend = FailingBackend()
        player, _ = make_player(backend)
        notes = []
        player.events.on_note_played(lambda note, octave: notes.append(note))

        played = player.run()

        self.assertEqual(played, 6)
        self.assertEqual(backend.calls, 6)
        self.assertEqual(notes, [])

    def test_step_after_finish(self):
        player, _ = make_player()
        finished = []
        player.events.on_finished(lambda: finished.append(True))
        player.start()
        for _ in range(6):
            self.assertIsNotNone(player.step())
        self.assertEqual(finished, [])
        self.assertIsNone(player.step())
        self.assertEqual(finished, [True])
        self.assertIsNone(player.step())
        self.assertEqual(finished, [True])

    def test_redundant_start_keeps_position(self):
        player, _ = make_player()
        started = []
        player.events.on_started(lambda: started.append(True))
        player.start()
        player.step()
        player.step()
        player.start()
        self.assertEqual(started, [True])
        self.assertEqual(player.step(), "E")

    def test_note_played_events(self):
        player, _ = make_player(direction=Direction.DESCENDING)
        notes = []
        player.events.on_note_played(lambda note, octave: notes.append(f"{note}{octave}"))
        player.run()
        self.assertEqual(notes, ["C4", "B4", "A4", "G4", "F4", "E4"])

    def test_play_position(self):
        backend = RecordingAudioBackend()
        player, _ = make_player(backend)
        self.assertEqual(player.play_position(1, 1), AbsolutePitch(0, 4))
        self.assertEqual(backend.triggered[-1].note, "C")
        self.assertEqual(backend.triggered[-1].octave, 4)
        with self.assertRaises(FretRangeError):
            player.play_position(6, 0)

    def test_rejects_non_positive_interval(self):
        with self.assertRaises(ValueError):
            make_player(interval_seconds=0)


if __name__ == "__main__":
    unittest.main()
