# src/batch/work_list.py — v1
"""Work list I/O: newline-separated project-relative paths.

The work list decouples detection from execution; any number of worker
processes may read it concurrently. Blank lines and surrounding
whitespace are ignored on read.
"""

from __future__ import annotations

from pathlib import Path


def write_work_list(path: Path, paths: list[str]) -> None:
    """Overwrite ``path`` with one entry per line (no trailing newline)."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join(paths), encoding="utf-8")


def read_work_list(path: Path) -> list[str] | None:
    """Return the entries of ``path``, or None if the file does not exist."""
    if not path.exists():
        return None
    lines = path.read_text(encoding="utf-8").splitlines()
    return [line.strip() for line in lines if line.strip()]


def scheduled_basenames(paths: list[str]) -> set[str]:
    """Reduce scheduled paths to the basename join key."""
    return {Path(p).name for p in paths}
