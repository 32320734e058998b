"""IngestionController: Registers selected files and decodes them one by one."""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from sheetmerge.core.exceptions import DecodeError, EntryNotFoundError
from sheetmerge.core.protocols import IFileRegistry, ISpreadsheetDecoder
from sheetmerge.models.file_entry import Done, Failed, FileEntry, Processing, RawFile

logger = logging.getLogger(__name__)

ACCEPTED_EXTENSIONS: tuple[str, ...] = (".xlsx", ".xls", ".csv")


def is_accepted(name: str, extensions: Sequence[str] = ACCEPTED_EXTENSIONS) -> bool:
    """Case-sensitive suffix check against the accepted extensions."""
    return name.endswith(tuple(extensions))


class IngestionController:
    """Feeds a batch of raw files through the decoder into the registry.

    Decoding is strictly sequential in registration order; each status
    transition is written to the registry before the next file starts.
    """

    def __init__(
        self,
        registry: IFileRegistry,
        decoder: ISpreadsheetDecoder,
        *,
        extensions: Sequence[str] = ACCEPTED_EXTENSIONS,
    ) -> None:
        self._registry = registry
        self._decoder = decoder
        self._extensions = tuple(extensions)

    def register(self, raw_files: Iterable[RawFile]) -> list[FileEntry]:
        """Append accepted files as pending entries; others are dropped."""
        registered: list[FileEntry] = []
        for raw in raw_files:
            if not is_accepted(raw.name, self._extensions):
                logger.debug("Ignoring unsupported file %s", raw.path)
                continue
            entry = self._registry.append(FileEntry.register(raw))
            logger.info("Registered %s as %s", entry.path, entry.id)
            registered.append(entry)
        return registered

    def process(self, entries: Sequence[FileEntry], sheet_index: int = 0) -> list[FileEntry]:
        """Decode ``entries`` in order, returning their final versions."""
        finished: list[FileEntry] = []
        for entry in entries:
            try:
                finished.append(self._process_one(entry, sheet_index))
            except EntryNotFoundError:
                logger.info("Entry %s was removed before it finished processing", entry.id)
        return finished

    def ingest(self, raw_files: Iterable[RawFile], sheet_index: int = 0) -> list[FileEntry]:
        """Register then decode a newly selected batch."""
        entries = self.register(raw_files)
        results = self.process(entries, sheet_index)
        failed = sum(1 for entry in results if entry.error_message is not None)
        logger.info("Ingested %d files (%d failed)", len(results), failed)
        return results

    def _process_one(self, entry: FileEntry, sheet_index: int) -> FileEntry:
        current = self._registry.replace(entry.with_state(Processing()))
        try:
            table = self._decoder.decode(current.source, sheet_index, name=current.name)
        except DecodeError as exc:
            logger.warning("Failed to decode %s: %s", entry.path, exc)
            return self._registry.replace(current.with_state(Failed(error_message=str(exc))))
        logger.info("Decoded %s: %d rows", entry.path, table.row_count)
        return self._registry.replace(current.with_state(Done(table=table)))
