"""Build RawFile batches from paths on disk (single files or whole folders)."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from sheetmerge.models.file_entry import RawFile

logger = logging.getLogger(__name__)

IGNORED_FOLDERS = {"__pycache__", ".git", "$recycle.bin", "system volume information"}


def read_file(path: str | Path) -> RawFile:
    """A single selected file; its path is just its name."""
    path = Path(path)
    content = path.read_bytes()
    return RawFile(content=content, name=path.name, path=path.name, size_bytes=len(content))


def read_files(paths: Iterable[str | Path]) -> list[RawFile]:
    return [read_file(path) for path in paths]


def scan_folder(root: str | Path) -> list[RawFile]:
    """Every file under ``root``, sorted by relative path.

    Paths are relative to the folder's parent, so they start with the
    selected folder's own name (``reports/2024/jan.xlsx``). Extension
    filtering is left to the ingestion controller.
    """
    root = Path(root).resolve()
    if not root.is_dir():
        raise NotADirectoryError(f"Not a folder: {root}")

    raw_files: list[RawFile] = []
    for file_path in sorted(root.rglob("*")):
        if not file_path.is_file():
            continue
        relative = file_path.relative_to(root.parent)
        if any(part.lower() in IGNORED_FOLDERS for part in relative.parts[:-1]):
            continue
        content = file_path.read_bytes()
        raw_files.append(RawFile(
            content=content,
            name=file_path.name,
            path=relative.as_posix(),
            size_bytes=len(content),
        ))
    logger.info("Scanned %s: %d files", root, len(raw_files))
    return raw_files


def collect(paths: Iterable[str | Path]) -> list[RawFile]:
    """Mix of files and folders, as a command line would pass them."""
    raw_files: list[RawFile] = []
    for path in paths:
        path = Path(path)
        if path.is_dir():
            raw_files.extend(scan_folder(path))
        else:
            raw_files.append(read_file(path))
    return raw_files
