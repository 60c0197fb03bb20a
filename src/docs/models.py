# src/docs/models.py — v1
"""Documentation models: DocumentationEntry, BatchResult, parsed sections, merge results."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class DocumentationEntry(BaseModel):
    """One file's generated documentation as written by a batch worker.

    ``markdown`` is the opaque rendered section. Any structured payload
    the worker attached (test name, tags, endpoints, UI element ids, raw
    AI result) is preserved as extra fields.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    file_name: str = Field(alias="fileName")
    markdown: str | None = None
    file_path: str | None = Field(default=None, alias="filePath")

    @property
    def basename(self) -> str:
        """Cross-batch join key; workers do not always keep directories."""
        return Path(self.file_name).name

    @property
    def has_markdown(self) -> bool:
        """Only entries with non-blank markdown count as documented."""
        return bool(self.markdown and self.markdown.strip())

    def to_json_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class BatchResult(BaseModel):
    """Entries produced by one batch. Immutable once written."""

    batch_id: str
    source: str | None = None
    entries: list[DocumentationEntry] = Field(default_factory=list)

    @property
    def documented_entries(self) -> list[DocumentationEntry]:
        return [entry for entry in self.entries if entry.has_markdown]

    @property
    def is_working(self) -> bool:
        """A batch that documented anything had a functioning provider."""
        return len(self.documented_entries) > 0

    @property
    def basenames(self) -> set[str]:
        """Basenames this batch actually documented."""
        return {entry.basename for entry in self.documented_entries}


class DocumentSection(BaseModel):
    """One delimited per-file section of a consolidated document."""

    key: str
    test_name: str | None = None
    text: str


class ParsedDocument(BaseModel):
    """A consolidated document split into preamble, sections and footer."""

    preamble: str = ""
    sections: list[DocumentSection] = Field(default_factory=list)
    footer: str = ""

    def entries(self) -> dict[str, str]:
        """Map basename → section text; a later duplicate wins."""
        return {section.key: section.text for section in self.sections}


class MergeResult(BaseModel):
    """Outcome of reconciling existing and newly generated documentation."""

    entries: dict[str, str] = Field(default_factory=dict)
    content: str = ""
    kept: list[str] = Field(default_factory=list)
    updated: list[str] = Field(default_factory=list)
    added: list[str] = Field(default_factory=list)
    retired: list[str] = Field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.entries)
