"""Abstract base class for LLM providers and shared response handling."""

import json
import re
from abc import ABC, abstractmethod
from typing import Any


def strip_code_fence(raw_text: str) -> str:
    """Remove a markdown ```json fence wrapped around a response, if any."""
    cleaned = re.sub(r"^```(?:json)?\s*\n?", "", raw_text.strip())
    return re.sub(r"\n?```\s*$", "", cleaned)


def parse_json_response(raw_text: str) -> Any:
    """Parse an LLM response text as JSON.

    Handles markdown-wrapped JSON (```json ... ```) and plain JSON.

    Raises:
        ValueError: If the text is not valid JSON.
    """
    try:
        return json.loads(strip_code_fence(raw_text))
    except json.JSONDecodeError as e:
        msg = f"Failed to parse LLM response as JSON: {e}"
        raise ValueError(msg) from e


class LLMProvider(ABC):
    """Base class that every LLM provider must implement."""

    @property
    @abstractmethod
    def provider_id(self) -> str:
        """Unique identifier for this provider (e.g. 'anthropic')."""

    @abstractmethod
    async def complete(
        self,
        prompt: str,
        model: str | None = None,
        *,
        system: str | None = None,
    ) -> str:
        """Send a prompt to the LLM and return the raw response text.

        Args:
            prompt: User message.
            model: Override the provider's default model. None uses default.
            system: Optional system prompt.

        Returns:
            Raw text response from the LLM (expected to be JSON).
        """

    @property
    @abstractmethod
    def default_model(self) -> str:
        """The default model ID used when no override is specified."""

    @property
    @abstractmethod
    def env_var(self) -> str | None:
        """Environment variable name for the API key, or None if not needed."""
