"""File entry, per-file processing state, and decoded table models."""

from __future__ import annotations

import uuid
from enum import StrEnum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from sheetmerge.core.types import Row


class FileStatus(StrEnum):
    PENDING = "pending"
    PROCESSING = "processing"
    DONE = "done"
    ERROR = "error"


class RawFile(BaseModel):
    """A user-selected file before registration."""

    content: bytes = Field(repr=False)
    name: str
    path: str = ""
    size_bytes: int = Field(default=-1)

    @model_validator(mode="after")
    def _fill_defaults(self) -> RawFile:
        # No folder structure selected: the path is just the name.
        if not self.path:
            self.path = self.name
        if self.size_bytes < 0:
            self.size_bytes = len(self.content)
        return self


class Table(BaseModel):
    """Decoded sheet: rows keyed by column name plus ordered headers."""

    rows: list[Row] = Field(default_factory=list)
    headers: list[str] = Field(default_factory=list)

    @property
    def row_count(self) -> int:
        return len(self.rows)


class Pending(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal[FileStatus.PENDING] = FileStatus.PENDING


class Processing(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal[FileStatus.PROCESSING] = FileStatus.PROCESSING


class Done(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal[FileStatus.DONE] = FileStatus.DONE
    table: Table


class Failed(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal[FileStatus.ERROR] = FileStatus.ERROR
    error_message: str


EntryState = Annotated[
    Union[Pending, Processing, Done, Failed],
    Field(discriminator="status"),
]


def new_entry_id() -> str:
    return uuid.uuid4().hex


class FileEntry(BaseModel):
    """One registered file and its processing state.

    Entries are frozen; a status transition produces a new entry via
    ``with_state`` which the registry swaps in under its lock.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_entry_id)
    name: str
    path: str
    size_bytes: int = Field(ge=0)
    source: bytes = Field(default=b"", repr=False, exclude=True)
    state: EntryState = Field(default_factory=Pending)

    @classmethod
    def register(cls, raw: RawFile) -> FileEntry:
        return cls(
            name=raw.name,
            path=raw.path,
            size_bytes=raw.size_bytes,
            source=raw.content,
        )

    def with_state(self, state: Pending | Processing | Done | Failed) -> FileEntry:
        return self.model_copy(update={"state": state})

    @property
    def status(self) -> FileStatus:
        return self.state.status

    @property
    def table(self) -> Optional[Table]:
        return self.state.table if isinstance(self.state, Done) else None

    @property
    def headers(self) -> list[str]:
        table = self.table
        return list(table.headers) if table is not None else []

    @property
    def error_message(self) -> Optional[str]:
        return self.state.error_message if isinstance(self.state, Failed) else None
