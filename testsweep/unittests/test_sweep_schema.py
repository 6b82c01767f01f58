import json
import os
import tempfile
import unittest

from testsweep.input.presets import PRESET_DIR, find_preset, list_presets, resolve_config
from testsweep.lib.errors import ConfigError
from testsweep.schema.sweep import SweepConfig, load_sweep_config, parse_sweep_config


def _minimal(**kwargs):
    data = {"categories": ["correct"], "modes": ["undef", "def"], "flags": ["jump", "pop"]}
    data.update(kwargs)
    return data


class TestSweepConfig(unittest.TestCase):
    def test_defaults(self):
        config = SweepConfig.model_validate(_minimal())
        self.assertEqual(config.executable, "./run_test")
        self.assertEqual(config.output_dir, "../test_out")
        self.assertEqual(config.repetitions, 1)
        self.assertIsNone(config.seed)
        self.assertEqual(config.seed_env_var, "RAND_SEED")
        self.assertEqual(config.naming, "indexed")
        self.assertEqual(config.timestamp_format, "%b%d_%H_%M_%S")
        self.assertEqual(config.total_runs, 4)

    def test_total_runs_with_extra_dimension(self):
        config = SweepConfig.model_validate(_minimal(repetitions=3, extra_dimensions={"size": ["s", "m", "l"]}))
        self.assertEqual(config.total_runs, 3 * 1 * 2 * 2 * 3)

    def test_invalid_values(self):
        invalid = [
            _minimal(repetitions=0),
            _minimal(categories=[]),
            _minimal(modes=[""]),
            _minimal(flags=["../escape"]),
            _minimal(categories=["ok", "bad\x00x"]),
            _minimal(extra_dimensions={"size": ["s\x00"]}),
            _minimal(timestamp_format="%H\x00"),
            _minimal(seed=-1),
            _minimal(naming="uuid"),
            _minimal(seed_env_var="1BAD"),
            _minimal(executable=" "),
            _minimal(extra_dimensions={"mode": ["x"]}),
            _minimal(extra_dimensions={"size": []}),
            _minimal(timestamp_format="%Y/%m"),
            _minimal(unknown_key=1),
        ]
        for data in invalid:
            with self.subTest(data=data):
                with self.assertRaises(ConfigError):
                    parse_sweep_config(data)

    def test_missing_dimension(self):
        data = _minimal()
        del data["flags"]
        with self.assertRaises(ConfigError):
            parse_sweep_config(data)


class TestLoadSweepConfig(unittest.TestCase):
    def test_overrides_replace_file_values(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, "sweep.json")
            with open(path, "w") as f:
                json.dump(_minimal(repetitions=5), f)
            config = load_sweep_config(path, {"repetitions": 2, "seed": None, "flags": ["call"]})
            self.assertEqual(config.repetitions, 2)
            self.assertIsNone(config.seed)
            self.assertEqual(config.flags, ["call"])
            self.assertEqual(config.modes, ["undef", "def"])

    def test_missing_file(self):
        with self.assertRaises(ConfigError):
            load_sweep_config("/nonexistent/sweep.json")

    def test_bad_json(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, "sweep.json")
            with open(path, "w") as f:
                f.write("{not json")
            with self.assertRaises(ConfigError):
                load_sweep_config(path)

    def test_non_object_json(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, "sweep.json")
            with open(path, "w") as f:
                f.write("[1, 2]")
            with self.assertRaises(ConfigError):
                load_sweep_config(path)


class TestPresets(unittest.TestCase):
    def test_bundled_presets(self):
        self.assertEqual(list_presets(), ["correct", "jump"])

    def test_correct_preset(self):
        config = load_sweep_config(find_preset("correct"))
        self.assertEqual(config.repetitions, 600)
        self.assertEqual(config.categories, ["correct"])
        self.assertEqual(config.modes, ["undef", "def", "spec"])
        self.assertEqual(config.flags, ["jump", "jump1", "jump2", "push", "pop", "call", "targets", "alloff"])
        self.assertEqual(config.total_runs, 600 * 24)

    def test_jump_preset(self):
        config = load_sweep_config(find_preset("jump"))
        self.assertEqual(config.repetitions, 1)
        self.assertEqual(config.modes, ["spec", "undef", "def"])
        self.assertEqual(config.flags, ["jump", "jump1", "jump2", "alloff"])

    def test_resolve_config(self):
        self.assertEqual(resolve_config("jump"), os.path.join(PRESET_DIR, "jump.json"))
        self.assertIsNone(resolve_config("no_such_preset"))
        path = os.path.join(PRESET_DIR, "correct.json")
        self.assertEqual(resolve_config(path), path)

    def test_missing_preset_dir(self):
        self.assertEqual(list_presets("/nonexistent/presets"), [])


if __name__ == "__main__":
    unittest.main()
