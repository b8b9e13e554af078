"""Anthropic messages API adapter."""

from __future__ import annotations

import logging

from ..errors import DeserializationError, MissingRequiredConfig
from ..models import Api, ApiConfig, Prompt, Role
from .base import (
    JSON_CONTENT_TYPE,
    ProviderAdapter,
    ProviderRequest,
    chat_payload,
    dig,
    dig_text,
    load_body,
    resolve_api_key,
)

LOGGER = logging.getLogger("smartcat.providers.anthropic")


class AnthropicAdapter(ProviderAdapter):
    name = Api.ANTHROPIC.value

    def build_request(self, prompt: Prompt, api_config: ApiConfig) -> ProviderRequest:
        if not api_config.version:
            raise MissingRequiredConfig(
                "version",
                self.name,
                "please add a version key to your api config",
            )
        if any(message.role is Role.SYSTEM for message in prompt.messages):
            # Forwarded as-is; the messages API may reject system-role turns.
            LOGGER.warning("Prompt for %s contains system messages, sending them unchanged", self.name)
        headers = {
            "Content-Type": JSON_CONTENT_TYPE,
            "x-api-key": resolve_api_key(api_config, Api.ANTHROPIC),
            "anthropic-version": api_config.version,
        }
        return ProviderRequest(payload=chat_payload(prompt), headers=headers)

    def parse_response(self, body: str) -> str:
        data = load_body(self.name, body)
        blocks = dig(self.name, data, ["content"])
        if not isinstance(blocks, list):
            raise DeserializationError(self.name, "content")
        return "".join(
            dig_text(self.name, data, ["content", index, "text"])
            for index in range(len(blocks))
        )
