"""Merge configuration and merge result models."""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_OUTPUT_STEM = "merged_result"
XLSX_SUFFIX = ".xlsx"


def _default_output_name() -> str:
    return f"合并结果_{date.today().isoformat()}"


class MergeConfiguration(BaseModel):
    """User-supplied options for one merge run. Immutable once built."""

    model_config = ConfigDict(frozen=True)

    add_source_column: bool = True
    source_column_name: str = "来源路径"
    sheet_index: int = Field(default=0, ge=0)
    output_file_name: str = Field(default_factory=_default_output_name)
    filter_keyword: str = ""
    use_smart_mapping: bool = True

    def resolved_output_file_name(self) -> str:
        """Output name with ``.xlsx`` appended when it is missing."""
        name = self.output_file_name.strip() or DEFAULT_OUTPUT_STEM
        return name if name.endswith(XLSX_SUFFIX) else f"{name}{XLSX_SUFFIX}"
