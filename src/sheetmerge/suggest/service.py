"""SchemaSuggestionService: Proposes one unified header list for many files.

The remote model is asked first; any failure there (transport, missing
credentials, unparseable reply) is logged and answered with the plain
union of the input headers instead. Nothing here raises to the caller.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from sheetmerge.core.exceptions import SuggestionError
from sheetmerge.core.protocols import IModelProvider
from sheetmerge.models.schema_mapping import HeaderSuggestion, UnifiedHeaders

logger = logging.getLogger(__name__)

PROMPT_TEMPLATE = """\
I have multiple Excel files with varying headers.
Analyze these header sets and suggest a single unified header list (schema) that best represents the combination of all data.
Try to group similar concepts (e.g., 'User ID' and 'Member ID' should probably be mapped to one column).

Input headers:
{listing}

Return a unified list of unique column names."""


def build_prompt(header_sets: Sequence[Sequence[str]]) -> str:
    listing = "\n".join(
        f"File {i}: {', '.join(headers)}" for i, headers in enumerate(header_sets, start=1)
    )
    return PROMPT_TEMPLATE.format(listing=listing)


def union_headers(header_sets: Sequence[Sequence[str]]) -> list[str]:
    """Deduplicated union of all headers, first-seen order."""
    return list(dict.fromkeys(h for headers in header_sets for h in headers))


class SchemaSuggestionService:
    """Best-effort remote schema inference with a local fallback."""

    def __init__(self, model: IModelProvider) -> None:
        self._model = model

    def suggest(self, header_sets: Sequence[Sequence[str]]) -> list[str]:
        return self.suggest_detailed(header_sets).headers

    def suggest_detailed(self, header_sets: Sequence[Sequence[str]]) -> HeaderSuggestion:
        if not header_sets:
            return HeaderSuggestion(headers=[], source="none")

        remote = self._request_unified_headers(header_sets)
        if remote is not None:
            return HeaderSuggestion(headers=remote, source="remote")
        return HeaderSuggestion(headers=union_headers(header_sets), source="fallback")

    def _request_unified_headers(
        self, header_sets: Sequence[Sequence[str]]
    ) -> Optional[list[str]]:
        """Remote headers, or ``None`` when the call or its reply is unusable."""
        messages = [{"role": "user", "content": build_prompt(header_sets)}]
        try:
            result = self._model.structured_output(messages, UnifiedHeaders)
            if not isinstance(result, UnifiedHeaders):
                raise SuggestionError(f"Unexpected response type {type(result).__name__}")
        except Exception as exc:
            logger.warning("Schema suggestion failed, using header union: %s", exc)
            return None
        return list(result.unifiedHeaders)
