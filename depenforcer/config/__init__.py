"""Configuration schema and validation for depenforcer."""

from .schema import (
    RuleParameters,
    ScopeConfig,
    resolve_scope_config,
    parse_flag,
)

__all__ = [
    "RuleParameters",
    "ScopeConfig",
    "resolve_scope_config",
    "parse_flag",
]
