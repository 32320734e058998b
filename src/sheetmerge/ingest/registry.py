"""FileRegistry: Session-scoped, ordered store of file entries."""

from __future__ import annotations

import logging
import threading
from typing import Optional

from sheetmerge.core.exceptions import EntryNotFoundError
from sheetmerge.core.protocols import RegistryListener
from sheetmerge.core.types import EntryId
from sheetmerge.models.file_entry import FileEntry

logger = logging.getLogger(__name__)


class FileRegistry:
    """Dict-backed IFileRegistry guarded by a single lock.

    Every mutation happens under the lock and swaps whole (frozen) entries,
    so a reader holding a snapshot never sees a half-updated entry.
    Listeners are called after the lock is released.
    """

    def __init__(self) -> None:
        self._entries: dict[str, FileEntry] = {}
        self._lock = threading.Lock()
        self._listeners: list[RegistryListener] = []

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, entry_id: object) -> bool:
        with self._lock:
            return entry_id in self._entries

    def subscribe(self, listener: RegistryListener) -> None:
        self._listeners.append(listener)

    def append(self, entry: FileEntry) -> FileEntry:
        with self._lock:
            if entry.id in self._entries:
                raise ValueError(f"Duplicate file entry id {entry.id!r}")
            self._entries[entry.id] = entry
        self._notify(entry)
        return entry

    def get(self, entry_id: EntryId) -> FileEntry:
        with self._lock:
            try:
                return self._entries[entry_id]
            except KeyError:
                raise EntryNotFoundError(entry_id) from None

    def replace(self, entry: FileEntry) -> FileEntry:
        """Swap in a new version of an existing entry, keeping its position."""
        with self._lock:
            if entry.id not in self._entries:
                raise EntryNotFoundError(entry.id)
            self._entries[entry.id] = entry
        self._notify(entry)
        return entry

    def remove(self, entry_id: EntryId) -> FileEntry:
        with self._lock:
            try:
                entry = self._entries.pop(entry_id)
            except KeyError:
                raise EntryNotFoundError(entry_id) from None
        logger.info("Removed %s (%s)", entry.path, entry.id)
        self._notify(entry)
        return entry

    def clear(self) -> None:
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
        logger.info("Cleared %d file entries", count)
        self._notify(None)

    def snapshot(self) -> tuple[FileEntry, ...]:
        with self._lock:
            return tuple(self._entries.values())

    def _notify(self, entry: Optional[FileEntry]) -> None:
        for listener in list(self._listeners):
            listener(entry)
