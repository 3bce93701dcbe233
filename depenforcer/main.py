"""Main CLI entry point for depenforcer.

Provides commands: check, describe, reactor
"""

import argparse
import logging
import sys
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler

from depenforcer import __version__
from depenforcer.cli.check import check_command, describe_command, reactor_command

logger = logging.getLogger("depenforcer.cli")

_FLAG_CHOICES = ["true", "false"]


def setup_logging(verbose: bool = False, console: Optional[Console] = None) -> None:
    """Setup logging configuration with Rich integration.

    Args:
        verbose: Enable verbose logging.
        console: Rich Console instance for coordinated output (optional).
    """
    if verbose:
        level = logging.DEBUG
    else:
        level = logging.WARNING

    handler = RichHandler(
        console=console,
        show_time=True,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
        tracebacks_show_locals=verbose,
        log_time_format="[%H:%M:%S]",
    )

    logging.basicConfig(
        level=level,
        format="[%(name)s] [%(levelname)s] %(message)s",
        handlers=[handler],
        force=True,
    )


def _add_rule_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-i",
        "--include",
        action="append",
        metavar="SELECTOR",
        help=(
            "Include projects by [groupId:]artifactId[:packaging]; '*' is a "
            "wildcard. Repeatable. Default: all projects."
        ),
    )
    parser.add_argument(
        "-e",
        "--exclude",
        action="append",
        metavar="SELECTOR",
        help="Exclude projects, evaluated after includes. Repeatable.",
    )
    parser.add_argument(
        "--error-if-unknown-project",
        choices=_FLAG_CHOICES,
        help="Fail when a selector without '*' names no project in the build",
    )
    parser.add_argument(
        "--include-root-project",
        choices=_FLAG_CHOICES,
        help="Require a dependency on the top-level project too",
    )
    parser.add_argument(
        "-c",
        "--config",
        help=(
            "Optional rule configuration. Can be a path to a TOML/JSON file "
            "or an inline TOML/JSON string. Command-line options override it."
        ),
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="depenforcer",
        description=(
            "Depenforcer - verify that a module depends on every project "
            "of its multi-module build"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    check_parser = subparsers.add_parser(
        "check",
        help="Check that a project depends on all projects in the build",
    )
    check_parser.add_argument(
        "project",
        help="Directory containing the top-level pom.xml",
    )
    check_parser.add_argument(
        "--current",
        metavar="SELECTOR",
        help=(
            "Project to check, as artifactId, groupId:artifactId or "
            "groupId:artifactId:packaging. Default: the top-level project."
        ),
    )
    _add_rule_arguments(check_parser)

    describe_parser = subparsers.add_parser(
        "describe",
        help="Print the resolved rule configuration",
    )
    describe_parser.add_argument(
        "project",
        nargs="?",
        help="Optional build directory used to validate selectors",
    )
    _add_rule_arguments(describe_parser)

    reactor_parser = subparsers.add_parser(
        "reactor",
        help="List the projects of the build in build order",
    )
    reactor_parser.add_argument(
        "project",
        help="Directory containing the top-level pom.xml",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point.

    Returns:
        int: Exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    if args.command == "check":
        return check_command(args)
    elif args.command == "describe":
        return describe_command(args)
    elif args.command == "reactor":
        return reactor_command(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
