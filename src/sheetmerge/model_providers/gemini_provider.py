"""Gemini model provider via the google-genai SDK.

Used by the schema suggestion service. Structured calls request
``application/json`` with a response schema so the reply parses as JSON.
"""

from __future__ import annotations

from typing import Any, TypeVar

from google import genai
from google.genai import types
from pydantic import BaseModel

from sheetmerge.core.exceptions import SuggestionError

T = TypeVar("T")


def _to_contents(messages: list[dict[str, str]]) -> str:
    return "\n\n".join(m.get("content", "") for m in messages)


class GeminiModelProvider:
    """Production IModelProvider backed by the Gemini API."""

    def __init__(
        self,
        api_key: str | None,
        model: str = "gemini-3-pro-preview",
        temperature: float = 0.0,
        client: Any = None,
    ) -> None:
        self._model = model
        self._temperature = temperature
        self._api_key = api_key
        self._client = client

    def _get_client(self) -> Any:
        if self._client is not None:
            return self._client
        if not self._api_key:
            raise SuggestionError("No Gemini API key configured")
        return genai.Client(api_key=self._api_key)

    def chat(self, messages: list[dict[str, str]], **kwargs: Any) -> str:
        response = self._get_client().models.generate_content(
            model=self._model,
            contents=_to_contents(messages),
            config=types.GenerateContentConfig(temperature=self._temperature),
        )
        return response.text or ""

    def structured_output(
        self, messages: list[dict[str, str]], response_model: type[T], **kwargs: Any
    ) -> T:
        if not issubclass(response_model, BaseModel):
            raise TypeError("response_model must be a pydantic model")
        response = self._get_client().models.generate_content(
            model=self._model,
            contents=_to_contents(messages),
            config=types.GenerateContentConfig(
                temperature=self._temperature,
                response_mime_type="application/json",
                response_schema=response_model,
            ),
        )
        return response_model.model_validate_json(response.text or "{}")  # type: ignore[return-value]
