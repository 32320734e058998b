"""MergeSession: One user's ephemeral workspace wiring all components."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional

from sheetmerge.core.config import AppSettings
from sheetmerge.core.protocols import IFileRegistry, IModelProvider, ISpreadsheetDecoder
from sheetmerge.core.types import HeaderSets
from sheetmerge.ingest.controller import IngestionController
from sheetmerge.ingest.decoder import SpreadsheetDecoder
from sheetmerge.ingest.filtering import filter_by_keyword
from sheetmerge.ingest.registry import FileRegistry
from sheetmerge.ingest.scanner import read_files, scan_folder
from sheetmerge.merge.engine import MergeEngine, participants
from sheetmerge.merge.output import write_output
from sheetmerge.model_providers import create_model_provider
from sheetmerge.models.file_entry import FileEntry, RawFile
from sheetmerge.models.merge import MergeConfiguration
from sheetmerge.models.schema_mapping import HeaderSuggestion
from sheetmerge.suggest.service import SchemaSuggestionService


class MergeSession:
    """Holds the registry for one session and exposes its operations.

    Dependencies are injected at construction time; anything omitted is
    built from ``settings``.
    """

    def __init__(
        self,
        *,
        settings: AppSettings | None = None,
        registry: IFileRegistry | None = None,
        decoder: ISpreadsheetDecoder | None = None,
        model: IModelProvider | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self.registry = registry if registry is not None else FileRegistry()
        self.controller = IngestionController(
            self.registry,
            decoder or SpreadsheetDecoder(),
            extensions=self._settings.merge.accepted_extensions,
        )
        self.engine = MergeEngine(sheet_name=self._settings.merge.output_sheet_name)
        self.suggestions = SchemaSuggestionService(
            model if model is not None else create_model_provider(self._settings)
        )

    @property
    def settings(self) -> AppSettings:
        return self._settings

    def default_configuration(self, **overrides) -> MergeConfiguration:
        defaults = {
            "sheet_index": self._settings.merge.sheet_index,
            "source_column_name": self._settings.merge.source_column_name,
        }
        defaults.update(overrides)
        return MergeConfiguration(**defaults)

    # -- selection -----------------------------------------------------

    def add_files(self, raw_files: Iterable[RawFile], sheet_index: int = 0) -> list[FileEntry]:
        return self.controller.ingest(raw_files, sheet_index)

    def add_paths(self, paths: Iterable[str | Path], sheet_index: int = 0) -> list[FileEntry]:
        return self.add_files(read_files(paths), sheet_index)

    def add_folder(self, root: str | Path, sheet_index: int = 0) -> list[FileEntry]:
        return self.add_files(scan_folder(root), sheet_index)

    def remove(self, entry_id: str) -> FileEntry:
        return self.registry.remove(entry_id)

    def clear(self) -> None:
        self.registry.clear()

    # -- views -----------------------------------------------------------

    def entries(self) -> tuple[FileEntry, ...]:
        return self.registry.snapshot()

    def visible_entries(self, keyword: str = "") -> list[FileEntry]:
        return filter_by_keyword(self.registry.snapshot(), keyword)

    # -- merge -----------------------------------------------------------

    def merge(self, config: MergeConfiguration) -> bytes:
        return self.engine.merge(self.visible_entries(config.filter_keyword), config)

    def merge_to_disk(
        self, config: MergeConfiguration, directory: Optional[str | Path] = None
    ) -> Path:
        data = self.merge(config)
        return write_output(data, directory or self._settings.merge.output_dir, config)

    def suggest_headers(self, config: MergeConfiguration) -> HeaderSuggestion:
        if not config.use_smart_mapping:
            return HeaderSuggestion(headers=[], source="none")
        header_sets: HeaderSets = [
            entry.headers for entry in participants(self.visible_entries(config.filter_keyword))
        ]
        return self.suggestions.suggest_detailed(header_sets)
