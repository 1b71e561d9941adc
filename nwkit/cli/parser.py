"""
nwkit CLI argument parser.

This module implements the command-line interface for nwkit using argparse.
"""

import argparse
import importlib
import logging
import math
import sys
from pathlib import Path
from typing import List, Optional

from nwkit import __version__
from nwkit.binary.models import FLAVORS
from nwkit.core.exceptions import NwKitError
from nwkit.core.platform import SUPPORTED_ARCHITECTURES, SUPPORTED_PLATFORMS

logger = logging.getLogger(__name__)


def positive_float(value: str) -> float:
    """argparse type for a finite number of seconds greater than zero."""
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: '{value}'")
    if not math.isfinite(number) or number <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive number: '{value}'")
    return number


class CLI:
    """nwkit command-line interface."""

    def __init__(self):
        """Initialize CLI with argument parser."""
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """
        Create argument parser with all subcommands.

        Returns:
            Configured ArgumentParser instance
        """
        parser = argparse.ArgumentParser(
            prog="nwkit",
            description="nwkit - NW.js runtime binary downloader",
            epilog='Use "nwkit COMMAND --help" for command-specific help',
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        # Global options
        parser.add_argument(
            "--version", action="version", version=f"nwkit {__version__}"
        )
        parser.add_argument(
            "--verbose", "-v", action="store_true", help="Enable verbose output"
        )
        parser.add_argument(
            "--quiet",
            "-q",
            action="store_true",
            help="Enable minimal output (errors only)",
        )
        parser.add_argument(
            "--config",
            type=Path,
            metavar="PATH",
            help="Path to configuration file (default: ./nwkit.yaml)",
        )

        # Subcommands
        subparsers = parser.add_subparsers(
            dest="command", help="Available commands", metavar="COMMAND"
        )

        self._add_fetch_command(subparsers)
        self._add_resolve_command(subparsers)
        self._add_cache_command(subparsers)

        return parser

    def _add_binary_options(self, parser: argparse.ArgumentParser):
        """Options that select a binary (shared by fetch and resolve)."""
        parser.add_argument(
            "--version",
            dest="nw_version",
            metavar="VERSION",
            help="NW.js version or alias: latest, stable, lts (default: latest)",
        )
        parser.add_argument(
            "--flavor",
            choices=FLAVORS,
            help="Build flavor (normal|sdk) [default: normal]",
        )
        parser.add_argument(
            "--platform",
            choices=SUPPORTED_PLATFORMS,
            help="Target platform (linux|osx|win) [default: host]",
        )
        parser.add_argument(
            "--arch",
            dest="architecture",
            choices=SUPPORTED_ARCHITECTURES,
            help="Target architecture (x64|ia32) [default: host]",
        )
        parser.add_argument(
            "--base-url",
            metavar="URL",
            help="Release server root (default: https://dl.nwjs.io)",
        )
        parser.add_argument(
            "--manifest-url",
            metavar="URL",
            help="Version manifest used to resolve aliases",
        )
        parser.add_argument(
            "--timeout",
            type=positive_float,
            metavar="SECONDS",
            help="Network timeout per request (default: 60)",
        )

    def _add_fetch_command(self, subparsers):
        """Add 'fetch' subcommand."""
        parser = subparsers.add_parser(
            "fetch",
            help="Download and extract an NW.js binary",
            description="Download and extract an NW.js binary into the cache "
            "and print the extracted directory",
        )
        self._add_binary_options(parser)
        parser.add_argument(
            "--cache-dir",
            type=Path,
            metavar="DIR",
            help="Cache directory (default: ~/.nwkit/cache)",
        )
        parser.add_argument(
            "--force",
            action="store_true",
            help="Download again even if the binary is cached",
        )
        parser.add_argument(
            "--lock-timeout",
            type=positive_float,
            metavar="SECONDS",
            help="Wait limit when another process downloads the same binary",
        )

    def _add_resolve_command(self, subparsers):
        """Add 'resolve' subcommand."""
        parser = subparsers.add_parser(
            "resolve",
            help="Show the archive a version resolves to",
            description="Resolve a version and print archive name and URL "
            "without downloading",
        )
        self._add_binary_options(parser)

    def _add_cache_command(self, subparsers):
        """Add 'cache' subcommand."""
        parser = subparsers.add_parser(
            "cache",
            help="List cached binaries",
            description="List complete NW.js binaries in the cache directory",
        )
        parser.add_argument(
            "--cache-dir",
            type=Path,
            metavar="DIR",
            help="Cache directory (default: ~/.nwkit/cache)",
        )

    def parse_args(self, args: Optional[List[str]] = None):
        """
        Parse command-line arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Parsed arguments namespace
        """
        return self.parser.parse_args(args)

    def run(self, args: Optional[List[str]] = None) -> int:
        """
        Run CLI with given arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Exit code (0 for success, non-zero for error)
        """
        parsed_args = self.parse_args(args)

        self._configure_logging(parsed_args)

        if not parsed_args.command:
            self.parser.print_help()
            return 1

        try:
            return self._dispatch_command(parsed_args)
        except KeyboardInterrupt:
            logger.info("Operation cancelled by user")
            return 130  # Standard exit code for SIGINT
        except NwKitError as e:
            logger.error(f"Error: {e}")
            if parsed_args.verbose:
                import traceback

                traceback.print_exc()
            return 1

    def _configure_logging(self, args):
        """
        Configure logging based on verbose/quiet flags.

        Args:
            args: Parsed arguments with verbose/quiet flags
        """
        if args.verbose:
            level = logging.DEBUG
            format_str = "%(levelname)s [%(name)s] %(message)s"
        elif args.quiet:
            level = logging.ERROR
            format_str = "%(levelname)s: %(message)s"
        else:
            level = logging.INFO
            format_str = "%(message)s"

        logging.basicConfig(
            level=level,
            format=format_str,
            stream=sys.stderr,
            force=True,  # Reconfigure if already configured
        )

    def _dispatch_command(self, args) -> int:
        """
        Dispatch to appropriate command handler.

        Args:
            args: Parsed arguments with command field

        Returns:
            Exit code from command handler
        """
        command_map = {
            "fetch": "nwkit.cli.commands.fetch",
            "resolve": "nwkit.cli.commands.resolve",
            "cache": "nwkit.cli.commands.cache",
        }

        module_name = command_map.get(args.command)
        if not module_name:
            logger.error(f"Unknown command: {args.command}")
            return 1

        module = importlib.import_module(module_name)
        return module.run(args)


def main():
    """Main entry point for CLI."""
    cli = CLI()
    sys.exit(cli.run())


if __name__ == "__main__":
    main()
