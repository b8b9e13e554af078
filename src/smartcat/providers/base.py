"""Provider adapter abstractions."""

from __future__ import annotations

import json
import subprocess
from dataclasses import dataclass, field
from typing import Any, Dict, List, Protocol

from ..errors import DeserializationError, MissingRequiredConfig
from ..models import ApiConfig, Api, Prompt

JSON_CONTENT_TYPE = "application/json"


@dataclass(frozen=True)
class ProviderRequest:
    """Serializable payload plus the headers one provider expects."""

    payload: Dict[str, Any]
    headers: Dict[str, str] = field(default_factory=dict)


class ProviderAdapter(Protocol):
    """Two-way translation between the canonical model and one wire format."""

    name: str

    def build_request(self, prompt: Prompt, api_config: ApiConfig) -> ProviderRequest:
        """Build the request payload and headers for ``prompt``."""

    def parse_response(self, body: str) -> str:
        """Extract the completion text from a raw response body."""


def chat_payload(prompt: Prompt) -> Dict[str, Any]:
    """``{model, messages, stream}`` body shared by every provider family."""
    return {
        "model": prompt.model,
        "messages": [message.to_dict() for message in prompt.messages],
        "stream": bool(prompt.stream),
    }


def resolve_api_key(api_config: ApiConfig, api: Api) -> str:
    """Return the configured key, running ``api_key_command`` when needed."""
    if api_config.api_key:
        return api_config.api_key
    if api_config.api_key_command:
        try:
            completed = subprocess.run(
                api_config.api_key_command,
                shell=True,
                check=True,
                capture_output=True,
                text=True,
            )
        except (OSError, subprocess.CalledProcessError) as exc:
            raise MissingRequiredConfig(
                "api_key",
                api.value,
                f"api_key_command failed: {exc}",
            ) from exc
        key = completed.stdout.strip()
        if key:
            return key
    raise MissingRequiredConfig(
        "api_key",
        api.value,
        "please set api_key or api_key_command in your api config",
    )


def load_body(provider: str, body: str) -> Any:
    try:
        return json.loads(body)
    except ValueError as exc:
        raise DeserializationError(provider, "<body>") from exc


def dig(provider: str, data: Any, path: List[Any]) -> Any:
    """Walk ``path`` (keys and list indexes) into ``data``.

    Raises DeserializationError naming the dotted path up to the first
    missing or mistyped step.
    """
    current = data
    for depth, step in enumerate(path, start=1):
        expected = list if isinstance(step, int) else dict
        if not isinstance(current, expected):
            raise DeserializationError(provider, field_path(path[:depth]))
        try:
            current = current[step]
        except (KeyError, IndexError) as exc:
            raise DeserializationError(provider, field_path(path[:depth])) from exc
    return current


def dig_text(provider: str, data: Any, path: List[Any]) -> str:
    value = dig(provider, data, path)
    if not isinstance(value, str):
        raise DeserializationError(provider, field_path(path))
    return value


def field_path(path: List[Any]) -> str:
    """``["choices", 0, "message"]`` -> ``choices[0].message``."""
    out = ""
    for step in path:
        if isinstance(step, int):
            out += f"[{step}]"
        elif out:
            out += f".{step}"
        else:
            out = step
    return out
