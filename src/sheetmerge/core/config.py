"""Application configuration using pydantic-settings with grouped env prefixes."""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings


class LLMConfig(BaseSettings):
    """LLM provider configuration for the schema suggestion call."""

    model_config = {"env_prefix": "SHEETMERGE_LLM_"}

    provider: Literal["mock", "gemini"] = "mock"
    api_key: str | None = None
    model: str = "gemini-3-pro-preview"
    temperature: float = 0.0


class MergeDefaults(BaseSettings):
    """Defaults applied to ingestion and merge runs."""

    model_config = {"env_prefix": "SHEETMERGE_MERGE_"}

    accepted_extensions: tuple[str, ...] = (".xlsx", ".xls", ".csv")
    sheet_index: int = Field(default=0, ge=0)
    source_column_name: str = "来源路径"
    output_sheet_name: str = "MergedData"
    output_dir: str = "."


class AppSettings(BaseSettings):
    """Root application settings aggregating all sub-configs."""

    model_config = {"env_prefix": "SHEETMERGE_"}

    environment: Literal["dev", "prod"] = "dev"
    log_level: str = "INFO"

    llm: LLMConfig = LLMConfig()
    merge: MergeDefaults = MergeDefaults()
