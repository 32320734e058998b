"""Structured response models for the schema suggestion call."""

from __future__ import annotations

from pydantic import BaseModel, Field


class UnifiedHeaders(BaseModel):
    """Unified column list proposed for a set of per-file header lists.

    The field name is part of the JSON contract with the remote model.
    """

    unifiedHeaders: list[str]


class HeaderSuggestion(BaseModel):
    """Suggested headers plus where they came from."""

    headers: list[str] = Field(default_factory=list)
    source: str = "none"  # remote, fallback, none
