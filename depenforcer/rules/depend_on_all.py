"""The "depend on all projects" rule.

Evaluation is a single pass over an immutable build snapshot:

    validate parameters -> scan reactor -> detect gaps -> pass | fail

Configuration errors abort before the reactor is scanned. A missing
dependency is the rule's finding and is returned as a failed result
carrying the full report.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from depenforcer.config.schema import RuleParameters, ScopeConfig, resolve_scope_config
from depenforcer.errors import ConfigurationError, RuleViolation
from depenforcer.model import BuildSession, Module
from depenforcer.rules.report import build_failure_message, find_missing
from depenforcer.rules.scanner import scope

logger = logging.getLogger("depenforcer.rules.depend_on_all")

KIND_PASSED = "passed"
KIND_CONFIGURATION = "configuration"
KIND_MISSING = "missing"


@dataclass(frozen=True)
class RuleResult:
    """Outcome of one evaluation.

    Attributes:
        passed: True when the current module depends on every project in scope.
        kind: ``passed``, ``configuration`` or ``missing``.
        message: Failure text; empty on success.
        config: Resolved configuration, None if validation failed.
        scoped: Projects the current module was checked against.
        missing: Projects the current module does not depend on.
    """

    passed: bool
    kind: str = KIND_PASSED
    message: str = ""
    config: Optional[ScopeConfig] = None
    scoped: List[Module] = field(default_factory=list)
    missing: List[Module] = field(default_factory=list)

    def raise_for_status(self) -> None:
        """Raise the matching error when the rule failed."""
        if self.passed:
            return
        if self.kind == KIND_CONFIGURATION:
            raise ConfigurationError(self.message)
        raise RuleViolation(self.message, missing=self.missing)


def evaluate(session: BuildSession, params: Optional[RuleParameters] = None) -> RuleResult:
    """Check that the session's current module depends on every included project.

    Args:
        session: Build snapshot (reactor, current and top-level module).
        params: Raw rule parameters; defaults include every project.

    Returns:
        RuleResult: The outcome; never raises for rule or configuration failures.
    """
    current = session.current_module()
    top_level = session.top_level_module()
    reactor = session.reactor_modules()
    logger.debug("Current Project: %s", current.coordinates)
    logger.debug("Top Level Project: %s", top_level.coordinates)
    logger.debug("reactorProjects=%s", [str(m) for m in reactor])

    try:
        config = resolve_scope_config(params, reactor)
    except ConfigurationError as exc:
        logger.debug("Parameter validation failed: %s", exc)
        return RuleResult(passed=False, kind=KIND_CONFIGURATION, message=str(exc))

    scoped = scope(reactor, config, current, top_level)
    missing = find_missing(scoped, current.dependencies)
    if not missing:
        logger.debug("All %d included projects are dependencies of %s",
                     len(scoped), current.coordinates)
        return RuleResult(passed=True, config=config, scoped=scoped)

    message = build_failure_message(current, missing)
    return RuleResult(
        passed=False,
        kind=KIND_MISSING,
        message=message,
        config=config,
        scoped=scoped,
        missing=missing,
    )


class DependOnAllProjects:
    """Object facade over :func:`evaluate` for callers that keep a rule around.

    The instance only holds the raw parameters; nothing is mutated between
    executions, so one rule can check many modules.
    """

    def __init__(self, params: Optional[RuleParameters] = None) -> None:
        self._params = params or RuleParameters()

    @property
    def params(self) -> RuleParameters:
        return self._params

    def evaluate(self, session: BuildSession) -> RuleResult:
        return evaluate(session, self._params)

    def execute(self, session: BuildSession) -> None:
        """Evaluate and raise on failure.

        Raises:
            ConfigurationError: If the parameters are invalid.
            RuleViolation: If dependencies are missing.
        """
        self.evaluate(session).raise_for_status()

    def describe(self, reactor: Optional[List[Module]] = None) -> str:
        """Render the resolved configuration.

        Without a reactor, selectors are only checked for syntax.

        Raises:
            ConfigurationError: If the parameters are invalid.
        """
        return resolve_scope_config(self._params, reactor).describe()

    def __repr__(self) -> str:
        return f"DependOnAllProjects({self._params!r})"


__all__ = [
    "KIND_PASSED",
    "KIND_CONFIGURATION",
    "KIND_MISSING",
    "RuleResult",
    "evaluate",
    "DependOnAllProjects",
]
