"""Anthropic Claude LLM provider."""

import logging
import os

from career_reco.llm.base import LLMProvider

logger = logging.getLogger(__name__)


class AnthropicProvider(LLMProvider):
    """LLM provider using the Anthropic Claude API (async client)."""

    @property
    def provider_id(self) -> str:
        return "anthropic"

    @property
    def default_model(self) -> str:
        return "claude-sonnet-4-20250514"

    @property
    def env_var(self) -> str:
        return "ANTHROPIC_API_KEY"

    async def complete(
        self,
        prompt: str,
        model: str | None = None,
        *,
        system: str | None = None,
    ) -> str:
        api_key = os.environ.get("ANTHROPIC_API_KEY")
        if not api_key:
            msg = "ANTHROPIC_API_KEY environment variable is required"
            raise ValueError(msg)

        try:
            import anthropic
        except ImportError:
            msg = (
                "anthropic is required for semantic scoring. "
                "Install with: pip install 'career-reco[anthropic]'"
            )
            raise ImportError(msg) from None

        client = anthropic.AsyncAnthropic(api_key=api_key)
        use_model = model or self.default_model

        logger.info("Sending prompt to Anthropic API (%s)...", use_model)
        kwargs = {"system": system} if system is not None else {}
        message = await client.messages.create(
            model=use_model,
            max_tokens=2048,
            messages=[{"role": "user", "content": prompt}],
            **kwargs,
        )

        return message.content[0].text  # type: ignore[union-attr]
