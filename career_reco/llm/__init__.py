"""LLM provider registry with lazy loading.

Usage:
    from career_reco.llm import get_provider

    provider = get_provider("gemini")
    raw = await provider.complete(prompt, system=SYSTEM_PROMPT)
"""

import importlib

from career_reco.llm.base import LLMProvider, parse_json_response

__all__ = ["LLMProvider", "available_providers", "get_provider", "parse_json_response"]

# Lazy registry: maps provider name → (module_path, class_name)
_REGISTRY: dict[str, tuple[str, str]] = {
    "anthropic": ("career_reco.llm.anthropic", "AnthropicProvider"),
    "openai": ("career_reco.llm.openai", "OpenAIProvider"),
    "gemini": ("career_reco.llm.gemini", "GeminiProvider"),
    "ollama": ("career_reco.llm.ollama", "OllamaProvider"),
}


def get_provider(name: str) -> LLMProvider:
    """Instantiate and return an LLM provider by name.

    Args:
        name: Provider identifier (anthropic, openai, gemini, ollama).

    Returns:
        An LLMProvider instance.

    Raises:
        ValueError: If the provider name is unknown.
    """
    if name not in _REGISTRY:
        valid = ", ".join(sorted(_REGISTRY))
        msg = f"Unknown LLM provider '{name}'. Available: {valid}"
        raise ValueError(msg)

    module_path, class_name = _REGISTRY[name]
    module = importlib.import_module(module_path)
    cls = getattr(module, class_name)
    return cls()  # type: ignore[no-any-return]


def available_providers() -> list[str]:
    """Return sorted list of registered provider names."""
    return sorted(_REGISTRY)
