from abc import ABC, abstractmethod


class SubcommandPlugin(ABC):
    """
    One ``testsweep`` subcommand.

    Modules under ``testsweep/cli_plugins`` are scanned at startup and every
    concrete subclass defined there becomes a subcommand named by get_name().
    The parsed namespace carries the plugin as ``args._plugin`` so that
    ``main()`` can hand control back to it.
    """

    @abstractmethod
    def get_name(self):
        """Subcommand name as typed on the command line."""

    @abstractmethod
    def get_parser(self, subparsers):
        """Add this subcommand's parser to ``subparsers`` and return it."""

    @abstractmethod
    def run(self, args):
        """Carry out the subcommand. Exit status is set with sys.exit()."""

    def add_subparser(self, subparsers, help):
        """Create the subparser for get_name() and route parsed args back to this plugin."""
        parser = subparsers.add_parser(self.get_name(), help=help)
        parser.set_defaults(_plugin=self)
        return parser

    def get_epilog(self):
        """Usage examples appended to ``testsweep --help``."""
        return ""

    def get_order(self):
        # Subcommands with equal order are listed alphabetically
        return 0
