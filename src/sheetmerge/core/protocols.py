"""Protocol interfaces for SheetMerge abstractions.

Components depend on these structural Protocols rather than on concrete
classes.
"""

from __future__ import annotations

from typing import Any, Callable, Optional, Protocol, TypeVar, runtime_checkable

from sheetmerge.models.file_entry import FileEntry, Table

T = TypeVar("T")

RegistryListener = Callable[[Optional[FileEntry]], None]


# ---------------------------------------------------------------------------
# Model Provider
# ---------------------------------------------------------------------------

@runtime_checkable
class IModelProvider(Protocol):
    """Abstraction over LLM providers (mock, Gemini)."""

    def chat(self, messages: list[dict[str, str]], **kwargs: Any) -> str: ...

    def structured_output(
        self, messages: list[dict[str, str]], response_model: type[T], **kwargs: Any
    ) -> T: ...


# ---------------------------------------------------------------------------
# Spreadsheet Decoder
# ---------------------------------------------------------------------------

@runtime_checkable
class ISpreadsheetDecoder(Protocol):
    """Turns one file's bytes into a table, or raises DecodeError."""

    def decode(self, data: bytes, sheet_index: int = 0, name: str = "") -> Table: ...


# ---------------------------------------------------------------------------
# File Registry
# ---------------------------------------------------------------------------

@runtime_checkable
class IFileRegistry(Protocol):
    """Ordered, session-scoped collection of file entries."""

    def append(self, entry: FileEntry) -> FileEntry: ...

    def get(self, entry_id: str) -> FileEntry: ...

    def replace(self, entry: FileEntry) -> FileEntry: ...

    def remove(self, entry_id: str) -> FileEntry: ...

    def clear(self) -> None: ...

    def snapshot(self) -> tuple[FileEntry, ...]: ...

    def subscribe(self, listener: RegistryListener) -> None: ...
