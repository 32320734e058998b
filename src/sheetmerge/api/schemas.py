"""Response models for the HTTP front end."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from sheetmerge.ingest.filtering import format_size
from sheetmerge.models.file_entry import FileEntry, FileStatus


class EntrySummary(BaseModel):
    """Row-free view of an entry for listings."""

    id: str
    name: str
    path: str
    size_bytes: int
    size_label: str
    status: FileStatus
    row_count: int = 0
    headers: list[str] = Field(default_factory=list)
    error_message: Optional[str] = None

    @classmethod
    def from_entry(cls, entry: FileEntry) -> EntrySummary:
        table = entry.table
        return cls(
            id=entry.id,
            name=entry.name,
            path=entry.path,
            size_bytes=entry.size_bytes,
            size_label=format_size(entry.size_bytes),
            status=entry.status,
            row_count=table.row_count if table is not None else 0,
            headers=entry.headers,
            error_message=entry.error_message,
        )
