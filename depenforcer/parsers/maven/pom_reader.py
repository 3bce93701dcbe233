"""Maven POM reader producing raw, uninterpolated module records."""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from depenforcer.errors import ReactorError
from depenforcer.model import DEFAULT_PACKAGING

logger = logging.getLogger("depenforcer.parsers.maven.pom_reader")


@dataclass
class RawDependency:
    """A ``<dependency>`` element as written in the POM."""

    group: str
    artifact: str
    version: Optional[str] = None
    type: str = DEFAULT_PACKAGING
    scope: Optional[str] = None


@dataclass
class ParentRef:
    """The ``<parent>`` element of a POM."""

    group: str
    artifact: str
    version: str
    relative_path: str = "../pom.xml"


@dataclass
class PomRecord:
    """Everything the reactor loader needs from one pom.xml."""

    path: Path
    group: str
    artifact: str
    version: str
    packaging: str = DEFAULT_PACKAGING
    parent: Optional[ParentRef] = None
    properties: Dict[str, str] = field(default_factory=dict)
    modules: List[str] = field(default_factory=list)
    dependencies: List[RawDependency] = field(default_factory=list)
    managed: List[RawDependency] = field(default_factory=list)

    @property
    def coordinates(self) -> str:
        return f"{self.group}:{self.artifact}"


def read_pom(path: Path) -> PomRecord:
    """Parse a pom.xml file.

    groupId and version fall back to the ``<parent>`` values, as Maven
    inherits them. Property references are kept verbatim.

    Args:
        path: Path to a pom.xml file.

    Returns:
        PomRecord: The parsed record.

    Raises:
        ReactorError: If the file cannot be read or is not a valid POM.
    """
    try:
        tree = ET.parse(path)
    except (OSError, ET.ParseError) as exc:
        raise ReactorError(f"Failed to parse {path}: {exc}") from exc

    root = tree.getroot()
    ns = _detect_namespace(root)
    if _local_name(root.tag) != "project":
        raise ReactorError(f"{path} is not a Maven POM (root element <{root.tag}>)")

    parent = _read_parent(root, ns)
    artifact = _child_text(root, "artifactId", ns)
    if not artifact:
        raise ReactorError(f"{path} does not declare an artifactId")
    group = _child_text(root, "groupId", ns) or (parent.group if parent else None)
    if not group:
        raise ReactorError(f"{path} does not declare a groupId and has no parent")
    version = _child_text(root, "version", ns) or (parent.version if parent else "")

    record = PomRecord(
        path=path.resolve(),
        group=group,
        artifact=artifact,
        version=version,
        packaging=_child_text(root, "packaging", ns) or DEFAULT_PACKAGING,
        parent=parent,
        properties=_read_properties(root, ns),
        modules=[
            m.text.strip()
            for m in root.findall(_path("modules/module", ns))
            if m.text and m.text.strip()
        ],
        dependencies=_read_dependencies(root.find(_path("dependencies", ns)), ns),
        managed=_read_dependencies(
            root.find(_path("dependencyManagement/dependencies", ns)), ns
        ),
    )
    logger.debug(
        "Read %s:%s:%s:%s from %s (%d dependencies, %d modules)",
        record.group,
        record.artifact,
        record.packaging,
        record.version,
        path,
        len(record.dependencies),
        len(record.modules),
    )
    return record


def _read_parent(root: ET.Element, ns: str) -> Optional[ParentRef]:
    elem = root.find(_path("parent", ns))
    if elem is None:
        return None
    return ParentRef(
        group=_child_text(elem, "groupId", ns) or "",
        artifact=_child_text(elem, "artifactId", ns) or "",
        version=_child_text(elem, "version", ns) or "",
        relative_path=_child_text(elem, "relativePath", ns) or "../pom.xml",
    )


def _read_properties(root: ET.Element, ns: str) -> Dict[str, str]:
    elem = root.find(_path("properties", ns))
    if elem is None:
        return {}
    props: Dict[str, str] = {}
    for child in elem:
        if not isinstance(child.tag, str):
            continue  # comments
        props[_local_name(child.tag)] = (child.text or "").strip()
    return props


def _read_dependencies(elem: Optional[ET.Element], ns: str) -> List[RawDependency]:
    if elem is None:
        return []
    deps: List[RawDependency] = []
    for dep in elem.findall(_path("dependency", ns)):
        artifact = _child_text(dep, "artifactId", ns)
        if not artifact:
            logger.debug("Skipping dependency without artifactId")
            continue
        deps.append(
            RawDependency(
                group=_child_text(dep, "groupId", ns) or "",
                artifact=artifact,
                version=_child_text(dep, "version", ns),
                type=_child_text(dep, "type", ns) or DEFAULT_PACKAGING,
                scope=_child_text(dep, "scope", ns),
            )
        )
    return deps


def _path(tag: str, ns: str) -> str:
    # Direct children only; dependency elements nest groupId/version too
    if not ns:
        return tag
    return "/".join(f"{{{ns}}}{p}" for p in tag.split("/"))


def _child_text(elem: ET.Element, tag: str, ns: str) -> Optional[str]:
    target = elem.find(_path(tag, ns))
    if target is not None and target.text:
        return target.text.strip()
    return None


def _detect_namespace(root: ET.Element) -> str:
    if root.tag.startswith("{"):
        return root.tag.split("}")[0][1:]
    return ""


def _local_name(tag: str) -> str:
    return tag.split("}", 1)[1] if tag.startswith("{") else tag


__all__ = ["RawDependency", "ParentRef", "PomRecord", "read_pom"]
