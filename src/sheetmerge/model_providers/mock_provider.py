"""Mock model provider for local development and testing.

Returns canned responses. No real LLM calls.
"""

from __future__ import annotations

import json
from typing import Any, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class MockModelProvider:
    """IModelProvider implementation that returns deterministic mock responses."""

    def __init__(self, default_response: str = "Mock LLM response") -> None:
        self._default_response = default_response
        self._canned_responses: dict[str, str] = {}
        self._failure: Exception | None = None
        self.calls: list[list[dict[str, str]]] = []

    def set_response(self, prompt_contains: str, response: str) -> None:
        """Register a canned response for prompts containing a keyword."""
        self._canned_responses[prompt_contains] = response

    def fail_with(self, error: Exception | None) -> None:
        """Make every subsequent call raise ``error`` (``None`` to stop)."""
        self._failure = error

    def chat(self, messages: list[dict[str, str]], **kwargs: Any) -> str:
        self.calls.append(messages)
        if self._failure is not None:
            raise self._failure
        last_content = messages[-1].get("content", "") if messages else ""
        for keyword, response in self._canned_responses.items():
            if keyword in last_content:
                return response
        return self._default_response

    def structured_output(
        self, messages: list[dict[str, str]], response_model: type[T], **kwargs: Any
    ) -> T:
        """Parse the matching canned response as JSON into ``response_model``.

        Falls back to a default instance when no canned response matches.
        """
        text = self.chat(messages, **kwargs)
        if text == self._default_response:
            return response_model()  # type: ignore[call-arg]
        if issubclass(response_model, BaseModel):
            return response_model.model_validate_json(text)  # type: ignore[return-value]
        return response_model(**json.loads(text))  # type: ignore[call-arg]
