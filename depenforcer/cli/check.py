"""CLI commands that run the rule against a Maven build.

``check`` evaluates the rule for one module and maps the outcome onto
exit codes so CI pipelines can enforce it:

* 0 - the current module depends on every included project
* 1 - dependencies are missing
* 2 - the parameters or the build itself are invalid
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from depenforcer.config.schema import RuleParameters
from depenforcer.errors import EnforcerError
from depenforcer.parsers.maven.reactor import load_reactor
from depenforcer.rules.depend_on_all import KIND_CONFIGURATION, DependOnAllProjects
from depenforcer.runtime.config_loader import load_rule_parameters

logger = logging.getLogger("depenforcer.cli.check")

EXIT_OK = 0
EXIT_VIOLATION = 1
EXIT_ERROR = 2


def build_parameters(args) -> RuleParameters:
    """Merge ``--config`` with command-line overrides.

    Values given on the command line replace the ones from the
    configuration source; lists are replaced, not appended.

    Raises:
        ConfigurationError: If the configuration source is invalid.
    """
    params = load_rule_parameters(getattr(args, "config", None))
    overrides: Dict[str, Any] = {}
    includes: Optional[List[str]] = getattr(args, "include", None)
    excludes: Optional[List[str]] = getattr(args, "exclude", None)
    if includes:
        overrides["includes"] = includes
    if excludes:
        overrides["excludes"] = excludes
    error_if_unknown = getattr(args, "error_if_unknown_project", None)
    if error_if_unknown is not None:
        overrides["error_if_unknown_project"] = error_if_unknown
    include_root = getattr(args, "include_root_project", None)
    if include_root is not None:
        overrides["include_root_project"] = include_root
    if overrides:
        logger.debug("Command-line overrides: %s", overrides)
        params = params.model_copy(update=overrides)
    return params


def check_command(args, console: Optional[Console] = None) -> int:
    """Execute the dependOnAllProjects check.

    Args:
        args: Parsed command-line arguments.
        console: Rich console for output (stdout when omitted).

    Returns:
        int: Exit code.
    """
    console = console or Console()
    try:
        params = build_parameters(args)
        session = load_reactor(Path(args.project), current=getattr(args, "current", None))
    except EnforcerError as exc:
        console.print(Panel(Text(str(exc)), title="Configuration error", border_style="red"))
        return EXIT_ERROR

    rule = DependOnAllProjects(params)
    result = rule.evaluate(session)
    current = session.current_module()
    if result.passed:
        console.print(
            Text(
                f"✓ {current.coordinates} depends on all "
                f"{len(result.scoped)} included project(s)",
                style="green",
            )
        )
        return EXIT_OK

    if result.kind == KIND_CONFIGURATION:
        console.print(Panel(Text(result.message), title="Configuration error", border_style="red"))
        return EXIT_ERROR

    logger.debug("Rule %s failed for %s", result.config, current.coordinates)
    console.print(
        Text(f"✗ dependOnAllProjects failed for {current.coordinates}", style="bold red")
    )
    # Printed raw so the <dependency> snippets can be pasted as-is
    console.print(result.message, markup=False, highlight=False, soft_wrap=True)
    return EXIT_VIOLATION


def describe_command(args, console: Optional[Console] = None) -> int:
    """Print the resolved rule configuration."""
    console = console or Console()
    try:
        params = build_parameters(args)
        reactor = None
        if getattr(args, "project", None):
            reactor = load_reactor(Path(args.project)).reactor_modules()
        description = DependOnAllProjects(params).describe(reactor)
    except EnforcerError as exc:
        console.print(Text(str(exc), style="red"))
        return EXIT_ERROR
    console.print(description, markup=False, highlight=False)
    return EXIT_OK


def reactor_command(args, console: Optional[Console] = None) -> int:
    """List the projects of the build in build order."""
    console = console or Console()
    try:
        session = load_reactor(Path(args.project))
    except EnforcerError as exc:
        console.print(Text(str(exc), style="red"))
        return EXIT_ERROR

    table = Table(title=f"Reactor build order ({len(session.reactor)} projects)")
    table.add_column("#", justify="right")
    table.add_column("groupId")
    table.add_column("artifactId")
    table.add_column("version")
    table.add_column("packaging")
    table.add_column("dependencies", justify="right")
    for idx, module in enumerate(session.reactor_modules(), start=1):
        name = module.artifact
        if module == session.top_level_module():
            name = f"{name} (root)"
        table.add_row(
            str(idx),
            module.group,
            name,
            module.version,
            module.packaging,
            str(len(module.dependencies)),
        )
    console.print(table)
    return EXIT_OK


__all__ = [
    "EXIT_OK",
    "EXIT_VIOLATION",
    "EXIT_ERROR",
    "build_parameters",
    "check_command",
    "describe_command",
    "reactor_command",
]
