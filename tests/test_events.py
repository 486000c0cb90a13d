import unittest

from scale_explorer.core.events import EventEmitter, PlaybackEvents


class TestEventEmitter(unittest.TestCase):
    def test_listener_registered_once(self):
        emitter = EventEmitter()
        calls = []
        listener = calls.append
        emitter.on("tick", listener)
        emitter.on("tick", listener)
        emitter.emit("tick", 1)
        self.assertEqual(calls, [1])

    def test_failing_listener_does_not_block_others(self):
        emitter = EventEmitter()
        calls = []

        def broken(value):
            raise RuntimeError("boom")

        emitter.on("tick", broken)
        emitter.on("tick", calls.append)
        emitter.emit("tick", 2)
        self.assertEqual(calls, [2])

    def test_clear(self):
        events = PlaybackEvents()
        notes = []
        events.on_note_played(lambda note, octave: notes.append((note, octave)))
        events.emit_note_played("C", 4)
        events.clear()
        events.emit_note_played("D", 4)
        self.assertEqual(notes, [("C", 4)])


if __name__ == "__main__":
    unittest.main()
