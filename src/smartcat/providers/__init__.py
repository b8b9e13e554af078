"""Provider registry exports."""

from __future__ import annotations

from typing import Dict

from ..errors import UnsupportedProvider
from ..models import Api
from .anthropic import AnthropicAdapter
from .base import ProviderAdapter, ProviderRequest
from .openai import OllamaAdapter, OpenAICompatibleAdapter

ADAPTERS: Dict[Api, ProviderAdapter] = {
    Api.OPENAI: OpenAICompatibleAdapter(Api.OPENAI),
    Api.MISTRAL: OpenAICompatibleAdapter(Api.MISTRAL),
    Api.GROQ: OpenAICompatibleAdapter(Api.GROQ),
    Api.OLLAMA: OllamaAdapter(),
    Api.ANTHROPIC: AnthropicAdapter(),
}


def adapter_for(api: Api) -> ProviderAdapter:
    """Return the adapter for ``api``; the test-only tag has none."""
    try:
        return ADAPTERS[api]
    except KeyError:
        raise UnsupportedProvider(str(api)) from None


__all__ = [
    "ADAPTERS",
    "AnthropicAdapter",
    "OllamaAdapter",
    "OpenAICompatibleAdapter",
    "ProviderAdapter",
    "ProviderRequest",
    "adapter_for",
]
