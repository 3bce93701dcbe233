"""Helpers for loading rule parameters from TOML/JSON sources.

This module provides a single entry point `load_rule_parameters`
that accepts various configuration sources:

* None -> default RuleParameters
* dict -> RuleParameters.model_validate
* Path / path-like string -> load .toml/.json from filesystem
* Inline JSON/TOML strings

Parameters may sit at the top level of the document or inside a
``[rule]`` / ``[dependOnAllProjects]`` table.
"""

from __future__ import annotations

import json
import logging
import tomllib
from pathlib import Path
from typing import Any, Dict, Optional, Union

from pydantic import ValidationError

from depenforcer.config.schema import RuleParameters
from depenforcer.errors import ConfigurationError

logger = logging.getLogger("depenforcer.runtime.config_loader")

ConfigSource = Union[str, Path, Dict[str, Any], None]

_SECTION_KEYS = ("dependOnAllProjects", "rule")


def _select_section(data: Dict[str, Any]) -> Dict[str, Any]:
    for key in _SECTION_KEYS:
        section = data.get(key)
        if isinstance(section, dict):
            logger.debug("Using [%s] table for rule parameters", key)
            return section
    return data


def _is_file(path: Path) -> bool:
    try:
        return path.is_file()
    except OSError:
        # Inline documents can exceed the file name length limit
        return False


def _guess_format(text: str) -> str:
    stripped = text.lstrip()
    return "json" if stripped.startswith(("{", "[")) else "toml"


def _from_mapping(data: Dict[str, Any]) -> RuleParameters:
    try:
        return RuleParameters.model_validate(_select_section(data))
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid rule parameters: {exc}") from exc


def load_rule_parameters(source: ConfigSource) -> RuleParameters:
    """Load RuleParameters from various configuration sources.

    Args:
        source: One of:
            * None: returns an all-defaults RuleParameters
            * dict: treated as already-parsed configuration mapping
            * str/Path: either a filesystem path to a .toml/.json file,
              or an inline TOML/JSON string (auto-detected)

    Returns:
        RuleParameters instance.

    Raises:
        ConfigurationError: If the source cannot be parsed or validated.
    """
    if source is None:
        logger.debug("No config source provided; using default RuleParameters")
        return RuleParameters()

    if isinstance(source, dict):
        logger.debug("Loading RuleParameters from provided dict")
        return _from_mapping(source)

    if isinstance(source, (str, Path)):
        path = Path(source)
        if _is_file(path):
            text = path.read_text(encoding="utf-8")
            suffix = path.suffix.lower()
            if suffix in {".toml", ".tml"}:
                fmt = "toml"
            elif suffix == ".json":
                fmt = "json"
            else:
                fmt = _guess_format(text)
            logger.info("Loading configuration from file: %s (fmt=%s)", path, fmt)
        else:
            text = str(source)
            fmt = _guess_format(text)
            logger.info("Loading configuration from inline %s string", fmt)

        try:
            data = json.loads(text) if fmt == "json" else tomllib.loads(text)
        except (json.JSONDecodeError, tomllib.TOMLDecodeError) as exc:
            raise ConfigurationError(f"Cannot parse {fmt} configuration: {exc}") from exc

        if not isinstance(data, dict):
            raise ConfigurationError("Top-level configuration must be a mapping/dict")

        return _from_mapping(data)

    raise TypeError(f"Unsupported config source type: {type(source)!r}")


__all__ = ["load_rule_parameters"]
