# src/batch/scanner.py — v2
"""Test file discovery.

Lists every file under the test root matching one of the configured glob
patterns. Paths are returned project-relative, POSIX-style and sorted so
that every consumer sees the same deterministic order.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from autodocumentator.config.settings import Settings

logger = logging.getLogger(__name__)

DEFAULT_PATTERNS = ("*.spec.js", "*.test.js")


class TestFileScanner:
    """Discover test files below a root directory."""

    __test__ = False  # not a pytest test class

    def __init__(
        self,
        project_root: Path,
        test_dir: Path = Path("tests"),
        patterns: list[str] | tuple[str, ...] = DEFAULT_PATTERNS,
    ) -> None:
        self._project_root = Path(project_root)
        self._test_dir = Path(test_dir)
        self._patterns = tuple(patterns)

    @classmethod
    def from_settings(cls, settings: Settings) -> TestFileScanner:
        return cls(
            project_root=settings.project_root,
            test_dir=settings.test_dir,
            patterns=settings.test_patterns_list,
        )

    @property
    def project_root(self) -> Path:
        return self._project_root

    def discover(self) -> list[str]:
        """Return sorted project-relative paths of all matching files."""
        root = self._project_root / self._test_dir
        if not root.is_dir():
            logger.warning("Test directory not found: %s", root)
            return []

        found: set[str] = set()
        for pattern in self._patterns:
            for path in root.rglob(pattern):
                if path.is_file():
                    found.add(path.relative_to(self._project_root).as_posix())

        paths = sorted(found)
        logger.info(
            "Discovered %d test file(s) under %s (patterns: %s)",
            len(paths), root, ", ".join(self._patterns),
        )
        return paths

    def resolve(self, path: str) -> Path:
        """Absolute location of a project-relative path."""
        return self._project_root / path


def index_by_basename(paths: list[str]) -> dict[str, list[str]]:
    """Group project-relative paths by file basename."""
    index: dict[str, list[str]] = defaultdict(list)
    for path in paths:
        index[Path(path).name].append(path)
    return dict(index)
