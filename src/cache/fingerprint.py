# src/cache/fingerprint.py — v3
"""Content fingerprinting for change detection.

A fingerprint is the SHA-256 hex digest of a file's raw bytes. No
normalization is applied: a whitespace-only edit yields a new digest.
The modification time is captured alongside for bookkeeping only and is
never used to decide whether a file changed.
"""

from __future__ import annotations

import hashlib
from pathlib import Path

from autodocumentator.cache.models import FileFingerprint

DIGEST_LENGTH = 64


def compute_fingerprint(content: bytes | str) -> str:
    """Return the SHA-256 hex digest of ``content``.

    Text is encoded as UTF-8 first, so hashing a file's text and its raw
    bytes agree for UTF-8 sources.
    """
    if isinstance(content, str):
        content = content.encode("utf-8")
    return hashlib.sha256(content).hexdigest()


def fingerprint_file(path: Path) -> FileFingerprint:
    """Read ``path`` once and fingerprint it.

    Raises:
        OSError: If the file vanished or cannot be read.
    """
    raw_bytes = path.read_bytes()
    stat = path.stat()
    return FileFingerprint(
        hash=compute_fingerprint(raw_bytes),
        timestamp=stat.st_mtime * 1000.0,
    )
