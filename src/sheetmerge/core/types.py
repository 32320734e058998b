"""Type aliases used across SheetMerge."""

from __future__ import annotations

from typing import Any

Row = dict[str, Any]
HeaderSets = list[list[str]]
EntryId = str
