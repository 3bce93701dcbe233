"""Configuration schema definitions using Pydantic for validation.

Two layers are modelled here:

* ``RuleParameters`` holds the raw values as a host build tool hands
  them over: nullable lists that may contain nulls or blanks, and boolean
  flags encoded as the strings ``"true"`` / ``"false"``.
* ``ScopeConfig`` is the resolved, frozen configuration the rule engine
  runs with. It is produced once per evaluation by
  :func:`resolve_scope_config`, which is also where every configuration
  error is raised.
"""

from __future__ import annotations

import logging
import re
from typing import Any, List, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from depenforcer.errors import ConfigurationError
from depenforcer.model import Module
from depenforcer.rules.identity import reactor_contains
from depenforcer.rules.selectors import (
    MAX_SEGMENTS,
    has_wildcard,
    selector_pattern,
    split_selector,
)

logger = logging.getLogger("depenforcer.config.schema")

TRUE = "true"
FALSE = "false"


class RuleParameters(BaseModel):
    """Raw rule parameters.

    Attributes:
        includes: Include selectors; ``None`` or ``[""]`` means "not set".
        excludes: Exclude selectors; ``None`` or ``[""]`` means "not set".
        error_if_unknown_project: ``"true"``/``"false"``; empty means false.
        include_root_project: ``"true"``/``"false"``; empty means false.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    includes: Optional[List[Optional[str]]] = None
    excludes: Optional[List[Optional[str]]] = None
    error_if_unknown_project: Optional[str] = Field(
        default=None, alias="errorIfUnknownProject"
    )
    include_root_project: Optional[str] = Field(
        default=None, alias="includeRootProject"
    )

    @field_validator("includes", "excludes", mode="before")
    @classmethod
    def split_comma_list(cls, v: Any) -> Any:
        """Accept ``"a,b"`` as shorthand for ``["a", "b"]``."""
        if isinstance(v, str):
            return v.split(",")
        return v

    @field_validator("error_if_unknown_project", "include_root_project", mode="before")
    @classmethod
    def coerce_flag(cls, v: Any) -> Any:
        """TOML/JSON booleans are carried as their string spelling."""
        if isinstance(v, bool):
            return TRUE if v else FALSE
        return v


class ScopeConfig(BaseModel):
    """Resolved include/exclude/flag bundle for one evaluation.

    Attributes:
        includes: Include selectors, never empty (defaults to ``("*",)``).
        excludes: Exclude selectors, possibly empty.
        error_if_unknown_selector: Reject non-wildcard selectors that name
            no project in the build.
        include_root_module: Keep the top-level project in scope.
    """

    model_config = ConfigDict(frozen=True)

    includes: Tuple[str, ...] = ("*",)
    excludes: Tuple[str, ...] = ()
    error_if_unknown_selector: bool = False
    include_root_module: bool = False

    @field_validator("includes")
    @classmethod
    def validate_includes(cls, v: Tuple[str, ...]) -> Tuple[str, ...]:
        if not v:
            raise ValueError("includes must contain at least one selector")
        return v

    def describe(self) -> str:
        """Stable one-line rendering used in verbose logs."""
        return (
            "DependOnAllProjects["
            f"includes=[{', '.join(self.includes)}];"
            f"excludes=[{', '.join(self.excludes)}];"
            f"includeRootProject={str(self.include_root_module).lower()};"
            f"errorIfUnknownProject={str(self.error_if_unknown_selector).lower()}"
            "]"
        )

    def __str__(self) -> str:
        return self.describe()


def parse_flag(name: str, value: Optional[str]) -> bool:
    """Interpret a string flag; ``None`` and ``""`` are false.

    Raises:
        ConfigurationError: If the value is anything but ``true``/``false``.
    """
    if value is None or value == "":
        return False
    if value == TRUE:
        return True
    if value == FALSE:
        return False
    raise ConfigurationError(
        f"Failure in parameter '{name}'. Must be 'true' or 'false': '{value}'"
    )


def _normalize_list(values: Optional[Sequence[Optional[str]]]) -> List[Optional[str]]:
    # Injection layers report an unset list parameter as [""]
    if values is None:
        return []
    if len(values) == 1 and values[0] == "":
        return []
    return list(values)


def _validate_selectors(
    name: str,
    selectors: Sequence[Optional[str]],
    reactor: Optional[Sequence[Module]],
    error_if_unknown: bool,
) -> Tuple[str, ...]:
    logger.debug("Parameter %s.size: %d", name, len(selectors))
    checked: List[str] = []
    for selector in selectors:
        logger.debug("Check %s '%s'", name.rstrip("s"), selector)
        if selector is None:
            raise ConfigurationError(f"Failure in parameter '{name}'. String is null")
        if selector == "":
            raise ConfigurationError(f"Failure in parameter '{name}'. String is empty")
        if not selector.strip():
            raise ConfigurationError(
                f"Failure in parameter '{name}'. "
                f"String contains only whitespace: '{selector}'"
            )
        if len(split_selector(selector)) > MAX_SEGMENTS:
            raise ConfigurationError(f"Failure in parameter '{name}'. String is invalid")
        try:
            selector_pattern(selector)
        except re.error as exc:
            logger.debug("Selector %r does not compile: %s", selector, exc)
            raise ConfigurationError(
                f"Failure in parameter '{name}'. String is invalid"
            ) from exc
        # A wildcard selector cannot be checked against the build
        if error_if_unknown and reactor is not None and not has_wildcard(selector):
            if not reactor_contains(reactor, selector):
                raise ConfigurationError(
                    f"Failure in parameter '{name}'. "
                    f"Project '{selector}' not found in build"
                )
        checked.append(selector)
    return tuple(checked)


def resolve_scope_config(
    params: Optional[RuleParameters], reactor: Optional[Sequence[Module]] = None
) -> ScopeConfig:
    """Validate raw parameters against the reactor and freeze them.

    Args:
        params: Raw parameters; ``None`` behaves like all-defaults.
        reactor: Modules of the build, used by the unknown-project check.
            When None the check is skipped and only the syntax is validated.

    Returns:
        ScopeConfig: The resolved configuration.

    Raises:
        ConfigurationError: On the first invalid parameter found.
    """
    params = params or RuleParameters()
    logger.debug("includes=%s", params.includes)
    logger.debug("excludes=%s", params.excludes)
    logger.debug("errorIfUnknownProject=%s", params.error_if_unknown_project)
    logger.debug("includeRootProject=%s", params.include_root_project)

    error_if_unknown = parse_flag("errorIfUnknownProject", params.error_if_unknown_project)
    include_root = parse_flag("includeRootProject", params.include_root_project)

    includes = _validate_selectors(
        "includes", _normalize_list(params.includes), reactor, error_if_unknown
    )
    excludes = _validate_selectors(
        "excludes", _normalize_list(params.excludes), reactor, error_if_unknown
    )

    config = ScopeConfig(
        includes=includes or ("*",),
        excludes=excludes,
        error_if_unknown_selector=error_if_unknown,
        include_root_module=include_root,
    )
    logger.debug("Resolved configuration: %s", config.describe())
    return config


__all__ = [
    "TRUE",
    "FALSE",
    "RuleParameters",
    "ScopeConfig",
    "parse_flag",
    "resolve_scope_config",
]
