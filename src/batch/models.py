# src/batch/models.py — v2
"""Batch preparation models: WorkItem, ChangeReport, step summaries."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

ChangeStatus = Literal["new", "changed", "unchanged"]


class WorkItem(BaseModel):
    """A discovered file and its change classification."""

    path: str
    status: ChangeStatus


class ChangeReport(BaseModel):
    """Outcome of one change-detection run."""

    mode: Literal["incremental", "full"]
    items: list[WorkItem] = Field(default_factory=list)
    skipped: list[str] = Field(default_factory=list)

    def _with_status(self, status: ChangeStatus) -> list[str]:
        return [item.path for item in self.items if item.status == status]

    @property
    def new(self) -> list[str]:
        return self._with_status("new")

    @property
    def changed(self) -> list[str]:
        return self._with_status("changed")

    @property
    def unchanged(self) -> list[str]:
        return self._with_status("unchanged")

    @property
    def work_list(self) -> list[str]:
        """Files to (re)process: new files first, then changed ones."""
        return self.new + self.changed

    @property
    def total(self) -> int:
        return len(self.items) + len(self.skipped)


class MetadataUpdateResult(BaseModel):
    """Summary of a metadata update after processing."""

    updated: list[str] = Field(default_factory=list)
    failed: list[str] = Field(default_factory=list)
    excluded: list[str] = Field(default_factory=list)
    total_records: int = 0


class MetadataSyncResult(BaseModel):
    """Summary of seeding metadata from existing documentation."""

    documented: int = 0
    added: list[str] = Field(default_factory=list)
    already_tracked: list[str] = Field(default_factory=list)
    unresolved: list[str] = Field(default_factory=list)
    total_records: int = 0
