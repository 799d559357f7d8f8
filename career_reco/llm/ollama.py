"""Ollama local LLM provider (OpenAI-compatible API)."""

import logging
import os

from career_reco.llm.base import LLMProvider
from career_reco.llm.openai import chat_messages

logger = logging.getLogger(__name__)

_OLLAMA_BASE_URL = "http://localhost:11434/v1"


class OllamaProvider(LLMProvider):
    """LLM provider using a local Ollama instance via OpenAI-compatible API."""

    @property
    def provider_id(self) -> str:
        return "ollama"

    @property
    def default_model(self) -> str:
        return "llama3"

    @property
    def env_var(self) -> None:
        return None

    async def complete(
        self,
        prompt: str,
        model: str | None = None,
        *,
        system: str | None = None,
    ) -> str:
        try:
            import openai
        except ImportError:
            msg = (
                "openai is required for Ollama (OpenAI-compatible API). "
                "Install with: pip install 'career-reco[openai]'"
            )
            raise ImportError(msg) from None

        base_url = os.environ.get("OLLAMA_BASE_URL", _OLLAMA_BASE_URL)
        client = openai.AsyncOpenAI(base_url=base_url, api_key="ollama")
        use_model = model or self.default_model

        logger.info("Sending prompt to Ollama (%s)...", use_model)
        response = await client.chat.completions.create(
            model=use_model,
            messages=chat_messages(prompt, system),  # type: ignore[arg-type]
        )

        return response.choices[0].message.content or ""
