"""MergeEngine: Concatenates decoded tables into one MergedData workbook."""

from __future__ import annotations

import io
import logging
from typing import Sequence

import pandas as pd
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE

from sheetmerge.core.exceptions import MergeError, NoDataError
from sheetmerge.core.types import Row
from sheetmerge.models.file_entry import FileEntry, FileStatus
from sheetmerge.models.merge import MergeConfiguration

logger = logging.getLogger(__name__)

OUTPUT_SHEET_NAME = "MergedData"


def participants(entries: Sequence[FileEntry]) -> list[FileEntry]:
    """Entries that finished decoding and carry a table."""
    return [
        entry for entry in entries
        if entry.status == FileStatus.DONE and entry.table is not None
    ]


class MergeEngine:
    """Row-wise concatenation with an optional source-path column.

    Columns are the union of keys over all emitted rows in first-seen
    order; a row missing a column is written with an empty cell.
    """

    def __init__(self, sheet_name: str = OUTPUT_SHEET_NAME) -> None:
        self._sheet_name = sheet_name

    def merge_rows(
        self, entries: Sequence[FileEntry], config: MergeConfiguration
    ) -> list[Row]:
        """Output rows in entry order, then row order within each entry.

        Raises:
            NoDataError: no entry is done with a table.
        """
        ready = participants(entries)
        if not ready:
            raise NoDataError()

        merged: list[Row] = []
        for entry in ready:
            for row in entry.table.rows:
                out = dict(row)
                if config.add_source_column:
                    out[config.source_column_name] = entry.path
                merged.append(out)
        if not merged:
            raise NoDataError()

        logger.info("Merged %d rows from %d files", len(merged), len(ready))
        return merged

    def merge_frame(
        self, entries: Sequence[FileEntry], config: MergeConfiguration
    ) -> pd.DataFrame:
        rows = self.merge_rows(entries, config)
        frame = pd.DataFrame(rows)
        frame = frame.astype(object).where(frame.notna(), "")
        frame.columns = [_worksheet_safe(column) for column in frame.columns]
        return frame.map(_worksheet_safe)

    def merge(self, entries: Sequence[FileEntry], config: MergeConfiguration) -> bytes:
        """Serialize the merged table as a single-sheet xlsx buffer."""
        frame = self.merge_frame(entries, config)
        buffer = io.BytesIO()
        try:
            with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
                frame.to_excel(writer, sheet_name=self._sheet_name, index=False)
        except Exception as exc:
            raise MergeError(f"Could not write the merged workbook: {exc}") from exc
        data = buffer.getvalue()
        logger.debug("Wrote %d bytes (%d rows x %d columns)", len(data), *frame.shape)
        return data


def _worksheet_safe(value):
    # Control characters other than tab, newline and carriage return are
    # rejected by the xlsx writer.
    if isinstance(value, str):
        return ILLEGAL_CHARACTERS_RE.sub("", value)
    return value
