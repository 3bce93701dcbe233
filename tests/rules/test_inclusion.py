"""Include/exclude composition tests."""

from __future__ import annotations

from depenforcer.model import Module
from depenforcer.rules.inclusion import is_included


def test_star_includes_everything() -> None:
    """The default include selects every module."""
    module = Module("com.github.mikkoi", "test-artifact")
    assert is_included(["*"], [], module)


def test_exclude_wins_over_include() -> None:
    """A module matched by both an include and an exclude is out of scope."""
    includes = ["*", "com.github.mikkoi:*"]
    excludes = ["com.github.mikkoi:test-artifact"]

    assert not is_included(includes, excludes, Module("com.github.mikkoi", "test-artifact"))
    assert is_included(includes, excludes, Module("com.github.mikkoi", "test-artifact-2"))


def test_excludes_accumulate() -> None:
    """Each exclude selector removes its own matches."""
    includes = ["*", "com.github.mikkoi:*"]
    excludes = [
        "com.github.mikkoi:test-artifact",
        "com.gitlab.other:other-artifact",
        "com.gitlab.second:*-other-artifact",
    ]

    assert is_included(includes, excludes, Module("com.github.mikkoi", "other-artifact"))
    assert not is_included(includes, excludes, Module("com.gitlab.other", "other-artifact"))
    assert not is_included(
        includes, excludes, Module("com.gitlab.second", "diff-other-artifact")
    )
    assert is_included(includes, excludes, Module("com.gitlab.second", "artifact-something"))


def test_non_matching_include_excludes_module() -> None:
    """Group prefixes must match on a whole segment."""
    module = Module("com.github.mikkoi", "test-artifact-a", "0.1.0")
    assert not is_included(["com.github:*"], [], module)
    assert is_included(["com.github.*:*"], [], module)


def test_packaging_segment_is_matched() -> None:
    """The third selector segment matches the packaging."""
    war = Module("com.example", "web", "1.0", "war")
    assert is_included(["*:*:war"], [], war)
    assert not is_included(["*:*:jar"], [], war)
    assert not is_included(["*"], ["*:*:war"], war)


def test_empty_includes_select_nothing() -> None:
    """Defaults are applied by the configuration layer, not here."""
    assert not is_included([], [], Module("g", "a"))
