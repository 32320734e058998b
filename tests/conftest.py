"""Shared fixtures."""

from __future__ import annotations

import pytest

from sheetmerge.core.config import AppSettings
from sheetmerge.ingest.controller import IngestionController
from sheetmerge.ingest.decoder import SpreadsheetDecoder
from sheetmerge.ingest.registry import FileRegistry
from sheetmerge.session import MergeSession
from tests.fakes import MockModelProvider


@pytest.fixture
def settings(monkeypatch):
    for name in ("SHEETMERGE_LLM_PROVIDER", "SHEETMERGE_LLM_API_KEY", "SHEETMERGE_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    return AppSettings()


@pytest.fixture
def registry():
    return FileRegistry()


@pytest.fixture
def decoder():
    return SpreadsheetDecoder()


@pytest.fixture
def controller(registry, decoder):
    return IngestionController(registry, decoder)


@pytest.fixture
def model():
    return MockModelProvider()


@pytest.fixture
def session(settings, model):
    return MergeSession(settings=settings, model=model)
