"""Include / exclude composition for a single module."""

from __future__ import annotations

import logging
from typing import Iterable

from depenforcer.model import Module
from depenforcer.rules.selectors import selector_matches

logger = logging.getLogger("depenforcer.rules.inclusion")


def is_included(includes: Iterable[str], excludes: Iterable[str], module: Module) -> bool:
    """Decide whether ``module`` is in scope.

    A module is in scope when at least one include selector matches its
    canonical id and no exclude selector does. Excludes win on overlap.

    Args:
        includes: Include selectors, ``["*"]`` for everything.
        excludes: Exclude selectors, possibly empty.
        module: Module to test.

    Returns:
        bool: True if the module is in scope.
    """
    project_id = module.canonical_id
    included = any(selector_matches(s, project_id) for s in includes)
    excluded = any(selector_matches(s, project_id) for s in excludes)
    result = included and not excluded
    logger.debug(
        "isIncluded(%s:%s:%s:%s): %s",
        module.group,
        module.artifact,
        module.version,
        module.packaging,
        str(result).lower(),
    )
    return result


__all__ = ["is_included"]
