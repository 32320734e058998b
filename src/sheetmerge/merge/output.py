"""Write merged workbook buffers to the local filesystem."""

from __future__ import annotations

import logging
from pathlib import Path

from sheetmerge.models.merge import MergeConfiguration

logger = logging.getLogger(__name__)

XLSX_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def write_output(data: bytes, directory: str | Path, config: MergeConfiguration) -> Path:
    """Save ``data`` under the configured output name and return its path."""
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    target = directory / config.resolved_output_file_name()
    target.write_bytes(data)
    logger.info("Saved merged workbook to %s (%d bytes)", target, len(data))
    return target
