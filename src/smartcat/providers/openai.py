"""Adapters for the OpenAI chat completions wire format.

OpenAI, Mistral and Groq share request and response shapes. Ollama accepts
the same request body but answers with a single top-level ``message``.
"""

from __future__ import annotations

from typing import Dict

from ..models import Api, ApiConfig, Prompt
from .base import (
    JSON_CONTENT_TYPE,
    ProviderAdapter,
    ProviderRequest,
    chat_payload,
    dig_text,
    load_body,
    resolve_api_key,
)


class OpenAICompatibleAdapter(ProviderAdapter):
    """Adapter for OpenAI-style ``/chat/completions`` endpoints."""

    def __init__(self, api: Api) -> None:
        self.api = api
        self.name = api.value

    def build_request(self, prompt: Prompt, api_config: ApiConfig) -> ProviderRequest:
        headers: Dict[str, str] = {
            "Content-Type": JSON_CONTENT_TYPE,
            "Authorization": f"Bearer {resolve_api_key(api_config, self.api)}",
        }
        return ProviderRequest(payload=chat_payload(prompt), headers=headers)

    def parse_response(self, body: str) -> str:
        data = load_body(self.name, body)
        return dig_text(self.name, data, ["choices", 0, "message", "content"])


class OllamaAdapter(ProviderAdapter):
    """Local Ollama daemon; no credentials are sent."""

    name = Api.OLLAMA.value

    def build_request(self, prompt: Prompt, api_config: ApiConfig) -> ProviderRequest:
        return ProviderRequest(
            payload=chat_payload(prompt),
            headers={"Content-Type": JSON_CONTENT_TYPE},
        )

    def parse_response(self, body: str) -> str:
        data = load_body(self.name, body)
        return dig_text(self.name, data, ["message", "content"])
