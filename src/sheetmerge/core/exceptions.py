"""SheetMerge exception hierarchy."""

from __future__ import annotations


class SheetMergeError(Exception):
    """Base exception for all SheetMerge errors."""


class DecodeError(SheetMergeError):
    """A spreadsheet file could not be turned into a table."""


class SheetNotFoundError(DecodeError):
    """The requested sheet index is outside the workbook's sheet list."""

    def __init__(self, sheet_index: int, available: list[str]) -> None:
        self.sheet_index = sheet_index
        self.available = list(available)
        super().__init__(
            f"Sheet at index {sheet_index} not found. "
            f"Available sheets: {', '.join(self.available)}"
        )


class UnreadableFileError(DecodeError):
    """The codec rejected the byte stream (corrupt or unsupported file)."""


class EntryNotFoundError(SheetMergeError):
    """No registry entry exists for the given id."""

    def __init__(self, entry_id: str) -> None:
        self.entry_id = entry_id
        super().__init__(f"No file entry with id {entry_id!r}")


class MergeError(SheetMergeError):
    """Error while merging decoded tables."""


class NoDataError(MergeError):
    """None of the selected entries has decoded data to merge."""

    def __init__(self, message: str = "No data to merge.") -> None:
        super().__init__(message)


class SuggestionError(SheetMergeError):
    """Remote schema suggestion failed. Never leaves the suggestion service."""
