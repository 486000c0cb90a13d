import shutil
import tempfile
import unittest
from unittest import mock

from click.testing import CliRunner

from scale_explorer.cli.main import cli, main

from tests.audio_helpers import unusable_device_module


class TestCli(unittest.TestCase):
    def setUp(self):
        self.config_dir = tempfile.mkdtemp()
        self.runner = CliRunner()
        patcher = mock.patch("scale_explorer.cli.main.setup_logging")
        patcher.start()
        self.addCleanup(patcher.stop)

    def tearDown(self):
        shutil.rmtree(self.config_dir)

    def invoke(self, *args):
        return self.runner.invoke(cli, ["--config-dir", self.config_dir, *args])

    def test_roots(self):
        result = self.invoke("roots")
        self.assertEqual(result.exit_code, 0)
        self.assertEqual(len(result.output.split()), 12)

    def test_scale(self):
        result = self.invoke("scale", "C")
        self.assertEqual(result.exit_code, 0)
        self.assertEqual(result.output.strip(), "[C] D E F (G) A B")

    def test_scale_with_flats(self):
        result = self.invoke("scale", "Bb", "--flats")
        self.assertEqual(result.output.strip(), "[Bb] C D Eb (F) G A")

    def test_scale_invalid_root(self):
        result = self.invoke("scale", "H")
        self.assertEqual(result.exit_code, 2)
        self.assertIn("Invalid note name", result.output)

    def test_pitch(self):
        result = self.invoke("pitch", "1", "1")
        self.assertEqual(result.exit_code, 0)
        self.assertEqual(result.output.strip(), "C4")

    def test_pitch_out_of_range(self):
        result = self.invoke("pitch", "6", "0")
        self.assertEqual(result.exit_code, 1)
        self.assertIn("out of range", result.output)

    def test_fretboard(self):
        result = self.invoke("fretboard", "C")
        self.assertEqual(result.exit_code, 0)
        lines = result.output.rstrip("\n").split("\n")
        self.assertEqual(len(lines), 8)
        self.assertIn("[C]", lines[2])  # B string, first fret
        self.assertIn("(G)", lines[1])  # high E string, third fret
        self.assertIn("**", lines[-1])

    def test_play_silent(self):
        result = self.invoke("play", "C", "--backend", "none", "--interval", "0.001")
        self.assertEqual(result.exit_code, 0)
        self.assertEqual(
            result.output.split(), ["C4", "D4", "E4", "F4", "G4", "A4"]
        )

    def test_play_loop_descending_with_tick_limit(self):
        result = self.invoke(
            "play", "G", "--backend", "none", "--interval", "0.001",
            "--loop", "--descending", "--ticks", "9", "--octave", "3",
        )
        self.assertEqual(result.exit_code, 0)
        self.assertEqual(
            result.output.split(),
            ["G3", "F#3", "E3", "D3", "C3", "B3", "A3", "G3", "F#3"],
        )

    def test_play_bpm(self):
        result = self.invoke(
            "play", "D", "--backend", "none", "--bpm", "208", "--ticks", "1"
        )
        self.assertEqual(result.exit_code, 0)
        self.assertIn("Prestissimo", result.output)
        self.assertIn("D4", result.output)

    def test_play_without_output_device(self):
        with mock.patch.dict("sys.modules", {"scale_explorer.audio.output": unusable_device_module()}):
            result = self.invoke("play", "C", "--backend", "synth")
        self.assertEqual(result.exit_code, 1)
        self.assertIn("Could not open audio backend", result.output)

    def test_play_invalid_root(self):
        result = self.invoke("play", "X", "--backend", "none")
        self.assertEqual(result.exit_code, 2)

    def test_main_exit_codes(self):
        self.assertEqual(main(["--config-dir", self.config_dir, "pitch", "0", "12"]), 0)
        self.assertEqual(main(["--config-dir", self.config_dir, "pitch", "0", "13"]), 1)


if __name__ == "__main__":
    unittest.main()
