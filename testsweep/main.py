#!/usr/bin/env python3
import argparse
import sys
import os
import importlib
import inspect
import pkgutil
import importlib.metadata as metadata
from testsweep.cli_plugins.base import SubcommandPlugin

PLUGIN_DIR = os.path.join(os.path.dirname(__file__), "cli_plugins")


def get_version():
    """``testsweep: <version>`` from the installed metadata, or version.txt in a source checkout."""
    try:
        version = metadata.version("testsweep")
    except metadata.PackageNotFoundError:
        version_file = os.path.join(os.path.dirname(__file__), "..", "version.txt")
        version = "unknown"
        if os.path.exists(version_file):
            with open(version_file) as f:
                version = f.read().strip()
    return f"testsweep: {version}"


def _plugin_classes(mod):
    # Classes imported into a plugin module (RunPlugin's ListPlugin base) belong to their own module
    for _, obj in inspect.getmembers(mod, inspect.isclass):
        if issubclass(obj, SubcommandPlugin) and not inspect.isabstract(obj) and obj.__module__ == mod.__name__:
            yield obj


def discover_plugins():
    """Instantiate every subcommand plugin under cli_plugins/, ordered by get_order() then name.

    A module that fails to import is reported on stderr and skipped so the
    remaining subcommands stay usable.
    """
    plugins = []
    for _, name, ispkg in pkgutil.iter_modules([PLUGIN_DIR]):
        if ispkg:
            continue
        try:
            mod = importlib.import_module(f"testsweep.cli_plugins.{name}")
            plugins.extend(cls() for cls in _plugin_classes(mod))
        except Exception as e:
            print(f"Warning: Failed to load plugin {name}: {e}", file=sys.stderr)

    return sorted(plugins, key=lambda p: (p.get_order(), p.get_name()))


def build_arg_parser(plugins):
    """Build the main argument parser, one subparser per plugin.

    Plugin epilogs (usage examples) are concatenated into the main parser's epilog.
    """
    epilogs = [plugin.get_epilog() for plugin in plugins if plugin.get_epilog().strip()]
    epilog = "\n".join(epilogs) if epilogs else ""

    parser = argparse.ArgumentParser(
        prog="testsweep",
        description="Parameterized test sweep driver",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=epilog,
    )
    parser.add_argument("--version", action="version", version=get_version())
    subparsers = parser.add_subparsers(dest="command", help="Available commands")
    for plugin in plugins:
        plugin.get_parser(subparsers)
    return parser


def main(plugins=None, argv=None):
    if plugins is None:
        plugins = discover_plugins()
    parser = build_arg_parser(plugins)
    args = parser.parse_args(argv)

    # Dispatch to plugin
    if hasattr(args, "_plugin"):
        args._plugin.run(args)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
