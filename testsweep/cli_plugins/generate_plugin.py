from .base import SubcommandPlugin
import argparse
from testsweep.input.generate.base import _discover_generators, _run_generator


class GeneratePlugin(SubcommandPlugin):
    def get_name(self):
        return "generate"

    def get_parser(self, subparsers):
        parser = self.add_subparser(subparsers, help="Generate sweep configuration files")
        parser.add_argument("generator", nargs="?", help="Name of the generator to use")
        parser.add_argument("generator_args", nargs=argparse.REMAINDER, help="Arguments for the generator")
        return parser

    def get_epilog(self):
        return """
Generate Commands:
  testsweep generate                       List available generators
  testsweep generate sweep_json --help     Show help for sweep_json generator"""

    def run(self, args):
        generators = _discover_generators()
        if args.generator is None:
            if generators:
                print("Available generators:")
                for name, plugin in sorted(generators.items()):
                    print(f"  {name} - {plugin.get_description()}")
            else:
                print("No generators found in testsweep/input/generate/ directory.")
        elif args.generator_args and args.generator_args[0] in ["-h", "--help"]:
            _run_generator(args.generator, ["-h"])
        else:
            _run_generator(args.generator, args.generator_args)
