#!/usr/bin/env python3
import sys
import os
import pkgutil
import importlib
import inspect
from abc import ABC, abstractmethod


class GeneratorPlugin(ABC):
    """A file generator reachable as ``testsweep generate <name>``."""

    @abstractmethod
    def get_name(self):
        """Name used on the command line"""

    @abstractmethod
    def get_description(self):
        """One line shown by a bare ``testsweep generate``"""

    @abstractmethod
    def get_parser(self):
        """Standalone argparse parser; its prog is rewritten when run through the CLI"""

    @abstractmethod
    def generate(self, args):
        """Write the output file. Invalid input ends with sys.exit(1)."""


def _discover_generators():
    """
    Import every module next to this one and instantiate its concrete
    GeneratorPlugin subclasses. Returns {generator name: plugin}.
    """
    generators = {}
    for module_info in pkgutil.iter_modules([os.path.dirname(__file__)]):
        if module_info.ispkg:
            continue
        try:
            module = importlib.import_module(f"testsweep.input.generate.{module_info.name}")
        except Exception as e:
            print(f"Warning: Failed to load generator {module_info.name}: {e}", file=sys.stderr)
            continue
        for _, cls in inspect.getmembers(module, inspect.isclass):
            if issubclass(cls, GeneratorPlugin) and not inspect.isabstract(cls):
                plugin = cls()
                generators[plugin.get_name()] = plugin
    return generators


def _run_generator(generator_name, args):
    """
    Run a generator plugin with the provided arguments.
    """
    generators = _discover_generators()

    if generator_name not in generators:
        print(f"Error: Generator '{generator_name}' not found.")
        sys.exit(1)

    plugin = generators[generator_name]

    parser = plugin.get_parser()
    # Set the program name to include the full command context
    parser.prog = f"testsweep generate {generator_name}"
    # argparse exits with SystemExit on help or error, which propagates as-is
    parsed_args = parser.parse_args(args)
    plugin.generate(parsed_args)
