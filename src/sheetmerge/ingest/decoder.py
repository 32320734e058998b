"""SpreadsheetDecoder: Turns workbook or delimited-text bytes into a Table."""

from __future__ import annotations

import io
import logging

import pandas as pd

from sheetmerge.core.exceptions import SheetNotFoundError, UnreadableFileError
from sheetmerge.core.types import Row
from sheetmerge.models.file_entry import Table

logger = logging.getLogger(__name__)

ZIP_MAGIC = b"PK\x03\x04"  # .xlsx (Office Open XML)
OLE_MAGIC = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1"  # legacy .xls (BIFF in OLE2)

CSV_SHEET_NAME = "Sheet1"
CSV_SUFFIX = ".csv"


def sniff_format(data: bytes, name: str = "") -> str:
    """Return ``xlsx``, ``xls`` or ``csv`` from the leading bytes.

    Bytes without a workbook signature are only read as delimited text
    when ``name`` is blank or ends in ``.csv``.

    Raises:
        UnreadableFileError: a workbook-named file has no workbook signature.
    """
    if data.startswith(ZIP_MAGIC):
        return "xlsx"
    if data.startswith(OLE_MAGIC):
        return "xls"
    if name and not name.lower().endswith(CSV_SUFFIX):
        raise UnreadableFileError(f"{name} is not a valid workbook")
    return "csv"


def frame_to_table(frame: pd.DataFrame) -> Table:
    """Convert a sheet frame into rows with an empty string for absent cells."""
    frame = frame.dropna(how="all")
    frame = frame.astype(object).where(frame.notna(), "")
    rows: list[Row] = [
        {str(column): value for column, value in record.items()}
        for record in frame.to_dict(orient="records")
    ]
    headers = list(rows[0].keys()) if rows else []
    return Table(rows=rows, headers=headers)


class SpreadsheetDecoder:
    """ISpreadsheetDecoder backed by pandas (openpyxl / xlrd engines)."""

    def sheet_names(self, data: bytes, name: str = "") -> list[str]:
        fmt = sniff_format(data, name)
        if fmt == "csv":
            return [CSV_SHEET_NAME]
        try:
            with pd.ExcelFile(io.BytesIO(data), engine=_engine_for(fmt)) as workbook:
                return [str(sheet) for sheet in workbook.sheet_names]
        except Exception as exc:
            raise UnreadableFileError(str(exc)) from exc

    def decode(self, data: bytes, sheet_index: int = 0, name: str = "") -> Table:
        """Decode the sheet at ``sheet_index`` (zero-based, by position).

        ``name`` is the file name, used to tell delimited text from a
        damaged workbook.

        Raises:
            SheetNotFoundError: the index is past the last sheet.
            UnreadableFileError: the codec could not parse the bytes.
        """
        fmt = sniff_format(data, name)
        if fmt == "csv":
            if sheet_index != 0:
                raise SheetNotFoundError(sheet_index, [CSV_SHEET_NAME])
            return frame_to_table(self._read_csv(data))

        try:
            workbook = pd.ExcelFile(io.BytesIO(data), engine=_engine_for(fmt))
        except Exception as exc:
            raise UnreadableFileError(str(exc)) from exc

        with workbook:
            names = [str(sheet) for sheet in workbook.sheet_names]
            if sheet_index >= len(names) or sheet_index < 0:
                raise SheetNotFoundError(sheet_index, names)
            try:
                frame = workbook.parse(sheet_name=workbook.sheet_names[sheet_index], dtype=object)
            except Exception as exc:
                raise UnreadableFileError(str(exc)) from exc

        logger.debug("Decoded %s sheet %r: %d rows", fmt, names[sheet_index], len(frame))
        return frame_to_table(frame)

    @staticmethod
    def _read_csv(data: bytes) -> pd.DataFrame:
        try:
            return pd.read_csv(
                io.BytesIO(data),
                encoding="utf-8-sig",
                encoding_errors="replace",
                keep_default_na=False,
                index_col=False,
                skip_blank_lines=True,
            )
        except Exception as exc:
            raise UnreadableFileError(str(exc)) from exc


def _engine_for(fmt: str) -> str:
    return "openpyxl" if fmt == "xlsx" else "xlrd"
