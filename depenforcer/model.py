"""Value types shared by the rule engine and the Maven reactor reader."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

DEFAULT_PACKAGING = "jar"


@dataclass(frozen=True)
class DependencyRecord:
    """One declared dependency edge of a module.

    Attributes:
        group: groupId of the dependency.
        artifact: artifactId of the dependency.
        version: Declared (interpolated) version, may be empty.
        type: Dependency type; Maven defaults this to ``jar``.
        scope: Dependency scope; informational only, never compared.
    """

    group: str
    artifact: str
    version: str = ""
    type: str = DEFAULT_PACKAGING
    scope: str = "compile"

    @property
    def key(self) -> Tuple[str, str, str, str]:
        return (self.group, self.artifact, self.version, self.type)

    def __str__(self) -> str:
        return f"{self.group}:{self.artifact}:{self.type}:{self.version}"


@dataclass(frozen=True)
class Module:
    """One participant of the reactor build.

    Identity is ``(group, artifact, version, packaging)``; the declared
    dependencies and the location on disk are carried along but never
    take part in comparisons.
    """

    group: str
    artifact: str
    version: str = ""
    packaging: str = DEFAULT_PACKAGING
    dependencies: Tuple[DependencyRecord, ...] = field(default=(), compare=False)
    path: Optional[Path] = field(default=None, compare=False)

    @property
    def key(self) -> Tuple[str, str, str, str]:
        return (self.group, self.artifact, self.version, self.packaging)

    @property
    def coordinates(self) -> str:
        """``group:artifact`` as used in report lines."""
        return f"{self.group}:{self.artifact}"

    @property
    def canonical_id(self) -> str:
        """``group:artifact:packaging``, the string selectors are matched against."""
        return f"{self.group}:{self.artifact}:{self.packaging}"

    def to_dependency(self) -> DependencyRecord:
        """Project this module into the dependency that would reference it."""
        return DependencyRecord(
            group=self.group,
            artifact=self.artifact,
            version=self.version,
            type=self.packaging,
        )

    def __str__(self) -> str:
        return f"{self.group}:{self.artifact}:{self.packaging}:{self.version}"


@dataclass(frozen=True)
class BuildSession:
    """Snapshot of a build as seen by the rule.

    Attributes:
        reactor: Modules in build (topologically sorted) order.
        current: The module whose dependencies are checked.
        top_level: The root / aggregator module of the build.
    """

    reactor: Tuple[Module, ...]
    current: Module
    top_level: Module

    def reactor_modules(self) -> List[Module]:
        return list(self.reactor)

    def current_module(self) -> Module:
        return self.current

    def top_level_module(self) -> Module:
        return self.top_level

    def with_current(self, module: Module) -> "BuildSession":
        """Return a copy of this session checking ``module`` instead."""
        return BuildSession(reactor=self.reactor, current=module, top_level=self.top_level)


__all__ = ["DEFAULT_PACKAGING", "DependencyRecord", "Module", "BuildSession"]
