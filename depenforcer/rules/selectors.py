"""Project selectors: ``[groupId:]artifactId[:packaging]`` with ``*`` wildcards.

A selector is turned into a regular expression by plain text substitution
and matched against the canonical id ``group:artifact:packaging`` of a
module. Only ``.`` is escaped; ``*`` expands to ``.*``.
"""

from __future__ import annotations

import functools
import logging
import re
from typing import List

logger = logging.getLogger("depenforcer.rules.selectors")

WILDCARD = "*"
SEPARATOR = ":"
MAX_SEGMENTS = 3
_ANY = ".*"


def split_selector(selector: str) -> List[str]:
    """Split a selector on ``:``, dropping trailing empty segments.

    ``"a:b:"`` yields ``["a", "b"]``. An empty string, and a string made only
    of separators such as ``"::::"``, yields ``[""]``, i.e. one empty
    segment rather than none. A separator-only selector therefore passes the
    segment-count check; its pattern needs more separators than a canonical
    id has, so it matches no module.
    """
    parts = selector.split(SEPARATOR)
    while len(parts) > 1 and parts[-1] == "":
        parts.pop()
    return parts


def has_wildcard(selector: str) -> bool:
    return WILDCARD in selector


def compile_selector(selector: str) -> str:
    """Convert a selector into a pattern over ``group:artifact:packaging``.

    Args:
        selector: e.g. ``"apache"``, ``"org.apache.*:*"``,
            ``"org.apache.maven:core:jar"``.

    Returns:
        str: Regular expression source, e.g. ``".*:apache:.*"`` or
        ``"org\\.apache\\..*:.*:.*"``.
    """
    pattern = selector.replace(".", "\\.")
    pattern = pattern.replace(WILDCARD, _ANY)
    if SEPARATOR not in pattern:
        # A bare token names the artifact only
        pattern = f"{_ANY}{SEPARATOR}{pattern}{SEPARATOR}{_ANY}"
    while len(split_selector(pattern)) < MAX_SEGMENTS:
        pattern = f"{pattern}{SEPARATOR}{_ANY}"
    return pattern


@functools.lru_cache(maxsize=512)
def selector_pattern(selector: str) -> "re.Pattern[str]":
    """Compiled, cached form of :func:`compile_selector`."""
    source = compile_selector(selector)
    logger.debug("Selector %r compiled to %r", selector, source)
    return re.compile(source)


def selector_matches(selector: str, canonical_id: str) -> bool:
    """Whole-string match of ``selector`` against a canonical id."""
    return selector_pattern(selector).fullmatch(canonical_id) is not None


__all__ = [
    "WILDCARD",
    "SEPARATOR",
    "MAX_SEGMENTS",
    "split_selector",
    "has_wildcard",
    "compile_selector",
    "selector_pattern",
    "selector_matches",
]
