"""Missing dependency detection and the failure report."""

from __future__ import annotations

import logging
from typing import Iterable, List, Sequence

from depenforcer.model import DEFAULT_PACKAGING, DependencyRecord, Module
from depenforcer.rules.identity import dependencies_contain

logger = logging.getLogger("depenforcer.rules.report")

INDENT_DEPENDENCY = "    "
NEWLINE = "\n"
BEGIN_MARKER = "<!--     Created by Maven Enforcer rule dependOnAllProjects     --->"
END_MARKER = "<!--     / Created by Maven Enforcer rule dependOnAllProjects     --->"


def find_missing(
    scoped: Iterable[Module], dependencies: Sequence[DependencyRecord]
) -> List[Module]:
    """Modules in ``scoped`` that ``dependencies`` does not reference.

    Scan order is kept and duplicates are not collapsed.
    """
    return [m for m in scoped if not dependencies_contain(dependencies, m)]


def format_dependency(dependency: DependencyRecord, indent: str = INDENT_DEPENDENCY) -> str:
    """Render a ``<dependency>`` element ready to paste into a POM.

    The ``<type>`` line is left out for ``jar``, Maven's default.
    """
    lines = [
        "<dependency>",
        f"{indent}<groupId>{dependency.group}</groupId>",
        f"{indent}<artifactId>{dependency.artifact}</artifactId>",
    ]
    if dependency.type != DEFAULT_PACKAGING:
        lines.append(f"{indent}<type>{dependency.type}</type>")
    lines.append("</dependency>")
    return NEWLINE.join(lines)


def missing_dependency_line(current: Module, missing: Module) -> str:
    return (
        f"Project '{current.group}:{current.artifact}' is missing dependency "
        f"'{missing.group}:{missing.artifact}:{missing.packaging}'."
    )


def build_failure_message(current: Module, missing: Sequence[Module]) -> str:
    """One line per missing project followed by the combined snippet block."""
    errors = [missing_dependency_line(current, m) for m in missing]

    block = [
        f"Missing definitions from the project '{current.group}:{current.artifact}':",
        BEGIN_MARKER,
    ]
    block.extend(
        format_dependency(m.to_dependency(), INDENT_DEPENDENCY) for m in missing
    )
    block.append(END_MARKER)
    errors.append(NEWLINE.join(block))
    return NEWLINE.join(errors)


__all__ = [
    "INDENT_DEPENDENCY",
    "BEGIN_MARKER",
    "END_MARKER",
    "find_missing",
    "format_dependency",
    "missing_dependency_line",
    "build_failure_message",
]
