"""Strict identity comparisons between modules and dependency records."""

from __future__ import annotations

from typing import Iterable, Optional

from depenforcer.model import DependencyRecord, Module
from depenforcer.rules.selectors import split_selector


def modules_equal(a: Module, b: Module) -> bool:
    """GroupId, artifactId, version and packaging must all match exactly."""
    return (
        a.group == b.group
        and a.artifact == b.artifact
        and a.version == b.version
        and a.packaging == b.packaging
    )


def dependencies_equal(a: DependencyRecord, b: DependencyRecord) -> bool:
    """GroupId, artifactId, version and type must all match exactly."""
    return (
        a.group == b.group
        and a.artifact == b.artifact
        and a.version == b.version
        and a.type == b.type
    )


def dependencies_contain(dependencies: Iterable[DependencyRecord], module: Module) -> bool:
    """Does the dependency list reference ``module``?"""
    wanted = module.to_dependency()
    return any(dependencies_equal(dep, wanted) for dep in dependencies)


def reactor_find(modules: Iterable[Module], selector: str) -> Optional[Module]:
    """First reactor module carrying exactly the names in ``selector``.

    Segments are compared as plain strings: ``artifact``,
    ``group:artifact`` or ``group:artifact:packaging``. The selector must
    not contain a wildcard; one that does never matches.

    Raises:
        ValueError: If the selector has more than three segments.
    """
    ids = split_selector(selector)
    if len(ids) > 3:
        raise ValueError(f"Selector has more than three segments: {selector!r}")
    for module in modules:
        if len(ids) == 1:
            if module.artifact == ids[0]:
                return module
        elif len(ids) == 2:
            if module.group == ids[0] and module.artifact == ids[1]:
                return module
        elif (
            module.group == ids[0]
            and module.artifact == ids[1]
            and module.packaging == ids[2]
        ):
            return module
    return None


def reactor_contains(modules: Iterable[Module], selector: str) -> bool:
    """Does any reactor module carry exactly the names in ``selector``?"""
    return reactor_find(modules, selector) is not None


__all__ = [
    "modules_equal",
    "dependencies_equal",
    "dependencies_contain",
    "reactor_find",
    "reactor_contains",
]
