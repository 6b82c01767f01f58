#!/usr/bin/env python3
import argparse
import json
import sys
from jinja2 import Template
from importlib import resources
from testsweep.input.generate.base import GeneratorPlugin
from testsweep.lib.artifacts import DEFAULT_TIMESTAMP_FORMAT
from testsweep.lib.errors import ConfigError
from testsweep.lib.seed import DEFAULT_SEED_ENV_VAR
from testsweep.schema.sweep import parse_sweep_config


class SweepJsonGenerator(GeneratorPlugin):
    """Generator plugin for creating sweep JSON configuration files"""

    def get_name(self):
        return "sweep_json"

    def get_description(self):
        return "Generate sweep JSON configuration file from dimension lists"

    def get_parser(self):
        parser = argparse.ArgumentParser(description="Generate sweep json file")
        parser.add_argument("--output_json_file", required=True, help="Output sweep file in JSON format")
        parser.add_argument("--categories", nargs="+", required=True, help="Test categories, comma or space separated")
        parser.add_argument("--modes", nargs="+", required=True, help="Receiver modes, comma or space separated")
        parser.add_argument("--flags", nargs="+", required=True, help="Flags, comma or space separated")
        parser.add_argument("--name", help="Sweep name (defaults to the first category)")
        parser.add_argument("--executable", default="./run_test", help="Test executable (default: ./run_test)")
        parser.add_argument("--output_dir", default="../test_out", help="Artifact directory (default: ../test_out)")
        parser.add_argument("--working_dir", help="Working directory for the test executable")
        parser.add_argument("--repetitions", type=int, default=1, help="Number of repetitions (default: 1)")
        parser.add_argument("--seed", type=int, help="Pinned sweep seed (default: random per sweep)")
        parser.add_argument("--seed_env_var", default=DEFAULT_SEED_ENV_VAR, help="Seed environment variable")
        parser.add_argument("--naming", choices=["indexed", "timestamp"], default="indexed", help="Artifact naming")
        return parser

    @staticmethod
    def split_values(values):
        """
        Flatten ['a,b', 'c'] into ['a', 'b', 'c']
        """
        result = []
        for value in values:
            result.extend(v.strip() for v in value.split(",") if v.strip())
        return result

    def render(self, args):
        categories = self.split_values(args.categories)
        template_content = (
            resources.files('testsweep.input.templates.config_file').joinpath('sweep_json.template').read_text()
        )
        template = Template(template_content)
        return template.render(
            name=args.name or (categories[0] if categories else None),
            executable=args.executable,
            working_dir=args.working_dir,
            output_dir=args.output_dir,
            repetitions=args.repetitions,
            categories=categories,
            modes=self.split_values(args.modes),
            flags=self.split_values(args.flags),
            seed=args.seed,
            seed_env_var=args.seed_env_var,
            naming=args.naming,
            timestamp_format=DEFAULT_TIMESTAMP_FORMAT,
        )

    def generate(self, args):
        rendered_json = self.render(args)

        # Refuse to write a file the run command would reject
        try:
            config = parse_sweep_config(json.loads(rendered_json), source=args.output_json_file)
        except ConfigError as e:
            print(f"ERROR !! {e}")
            sys.exit(1)

        with open(args.output_json_file, "w") as fp:
            fp.write(rendered_json)

        print(f"Generated sweep JSON file: {args.output_json_file}")
        print(f"Total runs: {config.total_runs}")


def main():
    generator = SweepJsonGenerator()
    parser = generator.get_parser()
    args = parser.parse_args()
    generator.generate(args)


if __name__ == "__main__":
    main()
