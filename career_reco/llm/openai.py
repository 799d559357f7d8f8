"""OpenAI LLM provider."""

import logging
import os

from career_reco.llm.base import LLMProvider

logger = logging.getLogger(__name__)


def chat_messages(prompt: str, system: str | None) -> list[dict[str, str]]:
    """Chat-completions message list with an optional system turn."""
    messages = []
    if system is not None:
        messages.append({"role": "system", "content": system})
    messages.append({"role": "user", "content": prompt})
    return messages


class OpenAIProvider(LLMProvider):
    """LLM provider using the OpenAI API (async client)."""

    @property
    def provider_id(self) -> str:
        return "openai"

    @property
    def default_model(self) -> str:
        return "gpt-4o-mini"

    @property
    def env_var(self) -> str:
        return "OPENAI_API_KEY"

    async def complete(
        self,
        prompt: str,
        model: str | None = None,
        *,
        system: str | None = None,
    ) -> str:
        api_key = os.environ.get("OPENAI_API_KEY")
        if not api_key:
            msg = "OPENAI_API_KEY environment variable is required"
            raise ValueError(msg)

        try:
            import openai
        except ImportError:
            msg = (
                "openai is required for semantic scoring. "
                "Install with: pip install 'career-reco[openai]'"
            )
            raise ImportError(msg) from None

        client = openai.AsyncOpenAI(api_key=api_key)
        use_model = model or self.default_model

        logger.info("Sending prompt to OpenAI API (%s)...", use_model)
        response = await client.chat.completions.create(
            model=use_model,
            messages=chat_messages(prompt, system),  # type: ignore[arg-type]
        )

        return response.choices[0].message.content or ""
