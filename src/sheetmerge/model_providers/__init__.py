"""LLM providers behind the IModelProvider protocol."""

from __future__ import annotations

from sheetmerge.core.config import AppSettings
from sheetmerge.core.protocols import IModelProvider
from sheetmerge.model_providers.gemini_provider import GeminiModelProvider
from sheetmerge.model_providers.mock_provider import MockModelProvider


def create_model_provider(settings: AppSettings | None = None) -> IModelProvider:
    """Select the provider named by ``settings.llm.provider``."""
    if settings is None:
        settings = AppSettings()

    if settings.llm.provider == "gemini":
        return GeminiModelProvider(
            api_key=settings.llm.api_key,
            model=settings.llm.model,
            temperature=settings.llm.temperature,
        )
    return MockModelProvider()


__all__ = ["GeminiModelProvider", "MockModelProvider", "create_model_provider"]
