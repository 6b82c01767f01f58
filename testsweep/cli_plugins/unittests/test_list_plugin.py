import io
import unittest
from contextlib import redirect_stdout
from unittest.mock import patch

from testsweep.cli_plugins.list_plugin import ListPlugin


class TestListPlugin(unittest.TestCase):
    def setUp(self):
        self.plugin = ListPlugin()

    def test_get_name(self):
        self.assertEqual(self.plugin.get_name(), "list")

    def test_presets_populated(self):
        self.assertIn("correct", self.plugin.presets)
        self.assertIn("jump", self.plugin.presets)

    def test_list_all_presets(self):
        with redirect_stdout(io.StringIO()) as buf:
            self.plugin.list_runs()
        output = buf.getvalue()
        self.assertIn("Available presets:", output)
        self.assertIn("correct: 600 repetitions x 24 combinations = 14400 runs", output)
        self.assertIn("jump: 1 repetitions x 12 combinations = 12 runs", output)

    def test_list_one_preset(self):
        with redirect_stdout(io.StringIO()) as buf:
            self.plugin.list_runs("jump")
        combos = [line for line in buf.getvalue().splitlines() if line.startswith("  - ")]
        self.assertEqual(len(combos), 12)
        self.assertEqual(combos[0], "  - jump spec jump")
        self.assertEqual(combos[-1], "  - jump def alloff")

    @patch("testsweep.cli_plugins.list_plugin.sys.exit", side_effect=SystemExit(1))
    def test_list_unknown_preset(self, mock_exit):
        with redirect_stdout(io.StringIO()) as buf:
            with self.assertRaises(SystemExit):
                self.plugin.list_runs("nope")
        self.assertIn("Error: Unknown preset or config file 'nope'", buf.getvalue())
        mock_exit.assert_called_once_with(1)


if __name__ == "__main__":
    unittest.main()
