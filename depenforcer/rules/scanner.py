"""Reactor scan: which projects of the build must the current one depend on."""

from __future__ import annotations

import logging
from typing import Iterable, List

from depenforcer.config.schema import ScopeConfig
from depenforcer.model import Module
from depenforcer.rules.identity import modules_equal
from depenforcer.rules.inclusion import is_included

logger = logging.getLogger("depenforcer.rules.scanner")


def scope(
    modules: Iterable[Module],
    config: ScopeConfig,
    current: Module,
    top_level: Module,
) -> List[Module]:
    """Filter the reactor down to the modules in scope.

    Build order is preserved. The current module is always removed; the
    top-level module is removed too unless ``include_root_module`` is set.

    Args:
        modules: Reactor modules in build order.
        config: Resolved scope configuration.
        current: Module whose dependencies will be checked.
        top_level: Root module of the build.

    Returns:
        List[Module]: Modules the current module has to depend on.
    """
    included: List[Module] = []
    logger.debug("Iterate through all projects in the build")
    for module in modules:
        logger.debug("    %s:%s:%s", module.group, module.artifact, module.version)
        if not is_included(config.includes, config.excludes, module):
            continue
        if modules_equal(module, current):
            logger.debug("Filter out current project: %s", module.coordinates)
            continue
        if not config.include_root_module and modules_equal(module, top_level):
            logger.debug("Filter out root project: %s", module.coordinates)
            continue
        included.append(module)
    logger.debug("includedProjects=%s", [str(m) for m in included])
    return included


__all__ = ["scope"]
