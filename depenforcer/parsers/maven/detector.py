"""Maven reactor detector following ``<modules>`` from the top-level pom.xml."""

import logging
from pathlib import Path
from typing import List, Set

from depenforcer.errors import ReactorError
from depenforcer.parsers.maven.pom_reader import PomRecord, read_pom

logger = logging.getLogger("depenforcer.parsers.maven.detector")


class MavenDetector:
    """Collect the POMs that take part in a multi-module build.

    Discovery starts at ``<root>/pom.xml`` and walks ``<modules>``
    depth first, so an aggregator always precedes the modules it lists.
    """

    TARGET_NAME = "pom.xml"
    IGNORED_DIRS = {"target"}

    def __init__(self, root: Path) -> None:
        self.root = Path(root)

    def _pom_for(self, location: Path) -> Path:
        if location.is_dir():
            return location / self.TARGET_NAME
        return location

    def detect(self) -> List[PomRecord]:
        """Read the top-level POM and every module reachable from it.

        Returns:
            List[PomRecord]: Records in discovery order, top-level first.

        Raises:
            ReactorError: If the top-level POM is missing or unreadable.
        """
        top = self._pom_for(self.root)
        if not top.is_file():
            raise ReactorError(f"No {self.TARGET_NAME} found at {self.root}")

        records: List[PomRecord] = []
        visited: Set[Path] = set()
        self._walk(top.resolve(), records, visited)
        logger.info("MavenDetector found %d pom.xml files", len(records))
        return records

    def _walk(self, pom: Path, records: List[PomRecord], visited: Set[Path]) -> None:
        if pom in visited:
            return
        visited.add(pom)
        record = read_pom(pom)
        records.append(record)
        logger.debug("Detected Maven POM: %s", pom)

        for module in record.modules:
            if any(part in self.IGNORED_DIRS for part in Path(module).parts):
                logger.debug("Ignoring module in build output directory: %s", module)
                continue
            child = self._pom_for(pom.parent / module).resolve()
            if not child.is_file():
                logger.warning(
                    "Module '%s' declared in %s has no %s; skipping",
                    module,
                    pom,
                    self.TARGET_NAME,
                )
                continue
            self._walk(child, records, visited)


__all__ = ["MavenDetector"]
