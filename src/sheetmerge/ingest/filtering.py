"""Pure projections over registry snapshots."""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from sheetmerge.models.file_entry import FileEntry

SIZE_UNITS = ("B", "KB", "MB", "GB")


def filter_by_keyword(entries: Sequence[FileEntry], keyword: str) -> list[FileEntry]:
    """Entries whose name contains ``keyword``, case-insensitively.

    A blank keyword keeps every entry. Order is preserved.
    """
    if not keyword or not keyword.strip():
        return list(entries)
    needle = keyword.lower()
    return [entry for entry in entries if needle in entry.name.lower()]


def group_by_name(entries: Sequence[FileEntry]) -> dict[str, list[FileEntry]]:
    """Group entries sharing a base name, in first-seen order."""
    groups: dict[str, list[FileEntry]] = {}
    for entry in entries:
        groups.setdefault(entry.name, []).append(entry)
    return groups


def format_size(size_bytes: int) -> str:
    """Human-readable size, e.g. ``1.5 KB``."""
    if size_bytes <= 0:
        return "0 B"
    exponent = 0
    while size_bytes >= 1024 ** (exponent + 1) and exponent < len(SIZE_UNITS) - 1:
        exponent += 1
    value = round(size_bytes / 1024**exponent, 2)
    return f"{value:g} {SIZE_UNITS[exponent]}"
