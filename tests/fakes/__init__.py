"""Shared test doubles and in-memory workbook builders."""

from __future__ import annotations

import io
from typing import Any, Sequence

from openpyxl import Workbook

from sheetmerge.model_providers.mock_provider import MockModelProvider
from sheetmerge.models.file_entry import Done, FileEntry, Table


def make_xlsx(sheets: dict[str, Sequence[Sequence[Any]]]) -> bytes:
    """Workbook bytes with one sheet per key; the first row is the header."""
    workbook = Workbook()
    workbook.remove(workbook.active)
    for title, rows in sheets.items():
        sheet = workbook.create_sheet(title)
        for row in rows:
            sheet.append(list(row))
    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


def make_csv(rows: Sequence[Sequence[Any]]) -> bytes:
    lines = [",".join("" if v is None else str(v) for v in row) for row in rows]
    return ("\n".join(lines) + "\n").encode("utf-8")


def done_entry(path: str, rows: list[dict[str, Any]], headers: list[str] | None = None) -> FileEntry:
    """A FileEntry already in the done state."""
    name = path.rsplit("/", 1)[-1]
    table = Table(rows=rows, headers=headers if headers is not None else (list(rows[0]) if rows else []))
    entry = FileEntry(name=name, path=path, size_bytes=0)
    return entry.with_state(Done(table=table))


__all__ = ["MockModelProvider", "done_entry", "make_csv", "make_xlsx"]
