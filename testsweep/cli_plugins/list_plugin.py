import sys

from .base import SubcommandPlugin
from testsweep.input.presets import list_presets, resolve_config
from testsweep.lib.dimensions import build_dimensions, cross_product
from testsweep.lib.errors import ConfigError
from testsweep.schema.sweep import load_sweep_config


class ListPlugin(SubcommandPlugin):
    def __init__(self):
        self.presets = list_presets()

    def _load_config(self, name_or_path, overrides=None):
        """Resolve a preset name or config path and load it. Exits on error."""
        path = resolve_config(name_or_path)
        if not path:
            print(f"Error: Unknown preset or config file '{name_or_path}'")
            print("Use 'testsweep list' to see available presets.")
            sys.exit(1)
        try:
            return load_sweep_config(path, overrides)
        except ConfigError as e:
            print(f"Error: {e}")
            sys.exit(1)

    @staticmethod
    def describe(config):
        combos = config.total_runs // config.repetitions
        return f"{config.repetitions} repetitions x {combos} combinations = {config.total_runs} runs"

    def list_runs(self, name=None):
        if name:
            config = self._load_config(name)
            dimensions = build_dimensions(config.categories, config.modes, config.flags, config.extra_dimensions)
            print(f"\nRuns in {name} ({self.describe(config)}):")
            print(f"  executable: {config.executable}")
            print(f"  output_dir: {config.output_dir}")
            for params in cross_product(dimensions):
                print("  - " + " ".join(value for _, value in params))
        else:
            print("Available presets:")
            for preset in self.presets:
                config = self._load_config(preset)
                print(f"  - {preset}: {self.describe(config)}")

    def get_name(self):
        return "list"

    def get_parser(self, subparsers):
        parser = self.add_subparser(subparsers, help="List bundled sweep presets")
        parser.add_argument("preset", nargs="?", help="Optional: preset name or config file to list combinations from")
        return parser

    def get_epilog(self):
        return """
List Commands:
  testsweep list                     List all bundled presets
  testsweep list correct             List the combinations run by the correct preset"""

    def run(self, args):
        self.list_runs(args.preset)
