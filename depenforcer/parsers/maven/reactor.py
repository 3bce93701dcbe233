"""Load a multi-module Maven build into an ordered BuildSession.

The reactor is built in three steps:

1. ``MavenDetector`` reads the top-level POM and every module it lists.
2. Each record is interpolated: ``${...}`` references are resolved from
   the built-in ``project.*`` values and from ``<properties>`` inherited
   along the in-reactor parent chain, and versions missing from
   ``<dependencies>`` are taken from inherited ``<dependencyManagement>``.
3. Modules are ordered with a networkx DiGraph (parent -> child,
   dependency -> dependent), ties broken by discovery order.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import networkx as nx

from depenforcer.errors import ReactorError
from depenforcer.model import BuildSession, DependencyRecord, Module
from depenforcer.parsers.maven.detector import MavenDetector
from depenforcer.parsers.maven.pom_reader import PomRecord, RawDependency
from depenforcer.rules.identity import reactor_find
from depenforcer.rules.selectors import has_wildcard

logger = logging.getLogger("depenforcer.parsers.maven.reactor")

_PROPERTY_REF = re.compile(r"\$\{([^}]+)\}")
_MAX_INTERPOLATION_DEPTH = 10

ManagedKey = Tuple[str, str, str]


def interpolate(text: Optional[str], props: Dict[str, str]) -> Optional[str]:
    """Replace ``${name}`` references found in ``props``; unknown ones stay."""
    if text is None or "${" not in text:
        return text
    for _ in range(_MAX_INTERPOLATION_DEPTH):
        replaced = _PROPERTY_REF.sub(lambda m: props.get(m.group(1), m.group(0)), text)
        if replaced == text:
            break
        text = replaced
    return text


class ReactorLoader:
    """Turn detected POM records into Modules in build order."""

    def __init__(self, records: List[PomRecord]) -> None:
        self.records = records
        self._by_coordinates: Dict[Tuple[str, str], PomRecord] = {}
        for record in records:
            key = (record.group, record.artifact)
            if key in self._by_coordinates:
                raise ReactorError(
                    f"Project '{record.coordinates}' is duplicated in the reactor "
                    f"({self._by_coordinates[key].path} and {record.path})"
                )
            self._by_coordinates[key] = record
        self._props_cache: Dict[Path, Dict[str, str]] = {}
        self._managed_cache: Dict[Path, Dict[ManagedKey, str]] = {}

    def _parent_record(self, record: PomRecord) -> Optional[PomRecord]:
        if record.parent is None:
            return None
        return self._by_coordinates.get((record.parent.group, record.parent.artifact))

    def properties(self, record: PomRecord, _seen: Tuple[Path, ...] = ()) -> Dict[str, str]:
        """Effective properties of ``record`` including inherited ones."""
        if record.path in self._props_cache:
            return self._props_cache[record.path]
        if record.path in _seen:
            raise ReactorError(f"Parent cycle involving {record.path}")

        props: Dict[str, str] = {}
        parent = self._parent_record(record)
        if parent is not None:
            props.update(self.properties(parent, _seen + (record.path,)))
        props.update(record.properties)

        if record.parent is not None:
            props["project.parent.groupId"] = record.parent.group
            props["project.parent.artifactId"] = record.parent.artifact
            props["project.parent.version"] = record.parent.version
        builtins = {
            "groupId": record.group,
            "artifactId": record.artifact,
            "version": record.version,
            "packaging": record.packaging,
        }
        for name, value in builtins.items():
            props[f"project.{name}"] = value
            props[f"pom.{name}"] = value
        props["version"] = record.version
        props["project.basedir"] = str(record.path.parent)
        props["basedir"] = str(record.path.parent)

        # Coordinates themselves may reference properties, e.g. ${revision}
        for name in ("project.groupId", "project.version"):
            props[name] = interpolate(props[name], props) or ""
        props["pom.groupId"] = props["project.groupId"]
        props["pom.version"] = props["version"] = props["project.version"]

        self._props_cache[record.path] = props
        return props

    def managed_versions(self, record: PomRecord) -> Dict[ManagedKey, str]:
        """``(group, artifact, type) -> version`` from dependencyManagement."""
        if record.path in self._managed_cache:
            return self._managed_cache[record.path]
        managed: Dict[ManagedKey, str] = {}
        parent = self._parent_record(record)
        if parent is not None:
            managed.update(self.managed_versions(parent))
        props = self.properties(record)
        for dep in record.managed:
            key = (
                interpolate(dep.group, props) or "",
                interpolate(dep.artifact, props) or "",
                interpolate(dep.type, props) or "",
            )
            if dep.version:
                managed[key] = interpolate(dep.version, props) or ""
        self._managed_cache[record.path] = managed
        return managed

    def _dependency(self, record: PomRecord, dep: RawDependency) -> DependencyRecord:
        props = self.properties(record)
        group = interpolate(dep.group, props) or ""
        artifact = interpolate(dep.artifact, props) or ""
        dep_type = interpolate(dep.type, props) or ""
        version = interpolate(dep.version, props)
        if not version:
            managed = self.managed_versions(record)
            version = managed.get((group, artifact, dep_type), "")
            if not version:
                logger.debug(
                    "No version for dependency %s:%s in %s", group, artifact, record.path
                )
        return DependencyRecord(
            group=group,
            artifact=artifact,
            version=version,
            type=dep_type,
            scope=dep.scope or "compile",
        )

    def module(self, record: PomRecord) -> Module:
        props = self.properties(record)
        return Module(
            group=props["project.groupId"],
            artifact=record.artifact,
            version=props["project.version"],
            packaging=record.packaging,
            dependencies=tuple(self._dependency(record, d) for d in record.dependencies),
            path=record.path,
        )

    def build_graph(self, modules: List[Module]) -> "nx.DiGraph":
        """Build-order graph over module indexes."""
        index: Dict[Tuple[str, str], int] = {
            (m.group, m.artifact): i for i, m in enumerate(modules)
        }
        by_path = {r.path: i for i, r in enumerate(self.records)}
        graph = nx.DiGraph()
        graph.add_nodes_from(range(len(modules)))
        for i, (record, module) in enumerate(zip(self.records, modules)):
            parent = self._parent_record(record)
            if parent is not None:
                graph.add_edge(by_path[parent.path], i, kind="parent")
            for dep in module.dependencies:
                j = index.get((dep.group, dep.artifact))
                if j is not None and j != i:
                    graph.add_edge(j, i, kind="dependency")
        return graph

    def load(self) -> List[Module]:
        """Modules in build order.

        Raises:
            ReactorError: If the modules form a cycle.
        """
        modules = [self.module(r) for r in self.records]
        graph = self.build_graph(modules)
        try:
            order = list(nx.lexicographical_topological_sort(graph))
        except nx.NetworkXUnfeasible as exc:
            cycle = nx.find_cycle(graph)
            pretty = " -> ".join(modules[u].coordinates for u, _v in cycle)
            raise ReactorError(f"The projects in the reactor contain a cycle: {pretty}") from exc
        ordered = [modules[i] for i in order]
        logger.debug("Reactor build order: %s", [m.coordinates for m in ordered])
        return ordered


def select_module(modules: List[Module], selector: str) -> Module:
    """Find the module named by an exact (non-wildcard) selector.

    Raises:
        ReactorError: If the selector is wildcarded, malformed or unknown.
    """
    if has_wildcard(selector):
        raise ReactorError(f"Current project selector must not contain '*': '{selector}'")
    try:
        module = reactor_find(modules, selector)
    except ValueError as exc:
        raise ReactorError(str(exc)) from exc
    if module is None:
        raise ReactorError(f"Project '{selector}' not found in build")
    return module


def load_reactor(root: Path, current: Optional[str] = None) -> BuildSession:
    """Read the Maven build rooted at ``root``.

    Args:
        root: Directory containing the top-level pom.xml, or the file itself.
        current: Selector of the module to check; the top-level module
            when omitted.

    Returns:
        BuildSession: Reactor in build order with current and top-level module.

    Raises:
        ReactorError: If the build cannot be read or ordered.
    """
    records = MavenDetector(root).detect()
    loader = ReactorLoader(records)
    modules = loader.load()
    top_path = records[0].path
    top_level = next(m for m in modules if m.path == top_path)
    current_module = select_module(modules, current) if current else top_level
    logger.info(
        "Loaded reactor of %d projects (top-level %s, current %s)",
        len(modules),
        top_level.coordinates,
        current_module.coordinates,
    )
    return BuildSession(reactor=tuple(modules), current=current_module, top_level=top_level)


__all__ = ["interpolate", "ReactorLoader", "select_module", "load_reactor"]
