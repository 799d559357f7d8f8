"""Google Gemini LLM provider (google-genai SDK)."""

import logging
import os

from career_reco.llm.base import LLMProvider

logger = logging.getLogger(__name__)


class GeminiProvider(LLMProvider):
    """LLM provider using the Google Gemini API (google-genai async client)."""

    @property
    def provider_id(self) -> str:
        return "gemini"

    @property
    def default_model(self) -> str:
        return "gemini-2.5-flash"

    @property
    def env_var(self) -> str:
        return "GOOGLE_API_KEY"

    async def complete(
        self,
        prompt: str,
        model: str | None = None,
        *,
        system: str | None = None,
    ) -> str:
        api_key = os.environ.get("GOOGLE_API_KEY")
        if not api_key:
            msg = "GOOGLE_API_KEY environment variable is required"
            raise ValueError(msg)

        try:
            from google import genai
            from google.genai import types as genai_types
        except ImportError:
            msg = (
                "google-genai is required for semantic scoring. "
                "Install with: pip install 'career-reco[gemini]'"
            )
            raise ImportError(msg) from None

        use_model = model or self.default_model

        logger.info("Sending prompt to Gemini API (%s)...", use_model)
        client = genai.Client(api_key=api_key)
        response = await client.aio.models.generate_content(
            model=use_model,
            contents=prompt,
            config=genai_types.GenerateContentConfig(
                system_instruction=system,
                response_mime_type="application/json",
            ),
        )

        return response.text or ""
