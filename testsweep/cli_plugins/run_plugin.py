import logging
import sys

from .list_plugin import ListPlugin
from testsweep.lib.errors import ConfigError, DirectoryCreationError
from testsweep.runners._base_runner import RunStatus
from testsweep.runners.sweep_runner import runner_from_config
from testsweep.schema.sweep import parse_sweep_config

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class RunPlugin(ListPlugin):
    def get_name(self):
        return "run"

    def get_parser(self, subparsers):
        parser = self.add_subparser(subparsers, help="Run a test sweep")
        parser.add_argument("preset", nargs="?", help="Preset name or path to a sweep config JSON file")
        parser.add_argument("--executable", help="Test executable to invoke (default: ./run_test)")
        parser.add_argument("--output-dir", help="Directory for run artifacts (created if missing)")
        parser.add_argument("--working-dir", help="Working directory for the test executable")
        parser.add_argument("--repetitions", type=int, help="Number of times to repeat the full cross-product")
        parser.add_argument(
            "--category", dest="categories", action="append", help="Test category (repeat for several)"
        )
        parser.add_argument("--mode", dest="modes", action="append", help="Receiver mode (repeat for several)")
        parser.add_argument("--flag", dest="flags", action="append", help="Flag (repeat for several)")
        parser.add_argument("--seed", type=int, help="Pin the sweep seed instead of drawing a random one")
        parser.add_argument("--seed-env-var", help="Environment variable holding the seed (default: RAND_SEED)")
        parser.add_argument(
            "--naming",
            choices=["indexed", "timestamp"],
            help="Artifact naming: 'indexed' adds the repetition index, 'timestamp' keeps the legacy names",
        )
        parser.add_argument("--dry-run", action="store_true", help="Print the runs without executing anything")
        parser.add_argument("--strict", action="store_true", help="Exit with status 1 if any run did not succeed")
        parser.add_argument(
            "--log-level",
            default="WARNING",
            choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
            help="Level of driver log messages written to stderr (default: WARNING)",
        )
        return parser

    def get_epilog(self):
        return """
Run Commands:
  testsweep run correct                                  Run the correct preset
  testsweep run jump --seed 1234                         Replay the jump preset with a pinned seed
  testsweep run my_sweep.json --output-dir /tmp/out      Run a sweep config file
  testsweep run --category correct --mode undef --mode def --flag jump --repetitions 2
  testsweep run correct --dry-run                        Show the runs without executing them"""

    @staticmethod
    def build_overrides(args):
        return {
            "executable": args.executable,
            "output_dir": args.output_dir,
            "working_dir": args.working_dir,
            "repetitions": args.repetitions,
            "categories": args.categories,
            "modes": args.modes,
            "flags": args.flags,
            "seed": args.seed,
            "seed_env_var": args.seed_env_var,
            "naming": args.naming,
        }

    def load_config(self, args):
        overrides = self.build_overrides(args)
        if args.preset:
            return self._load_config(args.preset, overrides)
        try:
            return parse_sweep_config({k: v for k, v in overrides.items() if v is not None}, source="from command line")
        except ConfigError as e:
            print(f"Error: {e}")
            sys.exit(1)

    def run(self, args):
        logging.basicConfig(level=getattr(logging, args.log_level), format=LOG_FORMAT)
        config = self.load_config(args)
        exit_code = self.run_sweep(config, dry_run=args.dry_run, strict=args.strict)
        sys.exit(exit_code)

    def run_sweep(self, config, dry_run=False, strict=False):
        runner = runner_from_config(config)

        if dry_run:
            seed = "<random>" if config.seed is None else config.seed
            print(f"Dry run: {self.describe(config)}, {config.seed_env_var}={seed}")
            print(f"Command: {config.executable} <{'> <'.join(d.name for d in runner.dimensions)}>")
            for descriptor in runner.plan():
                print(f"  [{descriptor.repetition}] {descriptor.label}")
            return 0

        try:
            result = runner.execute()
        except DirectoryCreationError as e:
            print(f"Error: {e}")
            return 1

        summary = result.summary()
        print(
            f"\nSweep complete: {config.seed_env_var}={result.seed}, {summary['total']} runs, "
            f"{summary['completed']} completed, {summary['non_zero_exit']} non-zero exit, "
            f"{summary['launch_failed']} launch failed, {summary['write_failed']} write failed "
            f"({result.duration_seconds:.1f}s)"
        )
        print(f"Artifacts in {result.output_dir}")
        if strict and not result.all_succeeded:
            self.print_failed_runs(result)
            return 1
        return 0

    @staticmethod
    def print_failed_runs(result):
        print("Failed runs:")
        for run in result.failed_runs():
            detail = f"exit {run.exit_code}" if run.status == RunStatus.NON_ZERO_EXIT else run.error_message
            print(f"  [{run.descriptor.repetition}] {run.descriptor.label}: {run.status.value} ({detail})")
