# src/cache/models.py — v2
"""Cache domain models: FileFingerprint, FileRecord.

FileRecord is persisted in the metadata store under the file's
project-relative path. Field aliases keep the on-disk JSON shape
(``hash``, ``timestamp``, ``lastProcessed``, ``source``).
"""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field


class FileFingerprint(BaseModel):
    """Content digest plus modification time (epoch milliseconds)."""

    hash: str
    timestamp: float


class FileRecord(BaseModel):
    """Last successfully processed state of one file."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    hash: str
    timestamp: float
    last_processed: str = Field(alias="lastProcessed")
    source: str | None = None

    @classmethod
    def from_fingerprint(
        cls,
        fingerprint: FileFingerprint,
        source: str | None = None,
        processed_at: datetime | None = None,
    ) -> FileRecord:
        """Build a record stamped with the processing time (UTC, ISO-8601)."""
        when = processed_at or datetime.now(timezone.utc)
        return cls(
            hash=fingerprint.hash,
            timestamp=fingerprint.timestamp,
            last_processed=when.isoformat().replace("+00:00", "Z"),
            source=source,
        )

    def to_json_dict(self) -> dict:
        """Serialize with on-disk aliases, omitting an unset provenance tag."""
        return self.model_dump(by_alias=True, exclude_none=True)
