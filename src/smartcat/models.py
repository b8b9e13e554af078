"""Canonical conversation model shared by every provider adapter."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple


def _optional_str(value: Any) -> Optional[str]:
    # YAML may hand back dates or numbers for unquoted scalars
    return None if value is None else str(value)


class Api(str, Enum):
    """Supported provider backends."""

    OPENAI = "openai"
    MISTRAL = "mistral"
    GROQ = "groq"
    OLLAMA = "ollama"
    ANTHROPIC = "anthropic"
    ANOTHER_API_FOR_TESTS = "another-api-for-tests"

    def __str__(self) -> str:
        return self.value


class Role(str, Enum):
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Message:
    """A single conversation turn."""

    role: Role
    content: str

    @classmethod
    def system(cls, content: str) -> "Message":
        return cls(role=Role.SYSTEM, content=content)

    @classmethod
    def user(cls, content: str) -> "Message":
        return cls(role=Role.USER, content=content)

    @classmethod
    def assistant(cls, content: str) -> "Message":
        return cls(role=Role.ASSISTANT, content=content)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Message":
        return cls(role=Role(data["role"]), content=str(data["content"]))

    def to_dict(self) -> Dict[str, str]:
        return {"role": self.role.value, "content": self.content}


@dataclass(frozen=True)
class Prompt:
    """Provider-agnostic prompt: target api, model and ordered messages."""

    api: Api
    model: Optional[str] = None
    messages: Tuple[Message, ...] = field(default_factory=tuple)
    stream: Optional[bool] = None
    char_limit: Optional[int] = None

    def __post_init__(self) -> None:
        if not isinstance(self.messages, tuple):
            object.__setattr__(self, "messages", tuple(self.messages))
        if self.char_limit is not None and self.char_limit < 0:
            raise ValueError("char_limit must be >= 0")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Prompt":
        messages: Iterable[Mapping[str, Any]] = data.get("messages") or ()
        char_limit = data.get("char_limit")
        return cls(
            api=Api(data["api"]),
            model=_optional_str(data.get("model")),
            messages=tuple(Message.from_dict(item) for item in messages),
            stream=data.get("stream"),
            char_limit=int(char_limit) if char_limit is not None else None,
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"api": self.api.value}
        if self.model is not None:
            data["model"] = self.model
        if self.stream is not None:
            data["stream"] = self.stream
        if self.char_limit is not None:
            data["char_limit"] = self.char_limit
        data["messages"] = [message.to_dict() for message in self.messages]
        return data

    def content_length(self) -> int:
        """Total UTF-8 byte length of all message contents."""
        return sum(len(message.content.encode("utf-8")) for message in self.messages)


@dataclass(frozen=True)
class ApiConfig:
    """Connection settings for one provider."""

    url: str
    api_key: Optional[str] = None
    api_key_command: Optional[str] = None
    default_model: Optional[str] = None
    version: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ApiConfig":
        return cls(
            url=str(data["url"]),
            api_key=_optional_str(data.get("api_key")),
            api_key_command=_optional_str(data.get("api_key_command")),
            default_model=_optional_str(data.get("default_model")),
            version=_optional_str(data.get("version")),
        )

    def to_dict(self) -> Dict[str, str]:
        data = {"url": self.url}
        for name in ("api_key", "api_key_command", "default_model", "version"):
            value = getattr(self, name)
            if value is not None:
                data[name] = value
        return data

    @classmethod
    def openai(cls) -> "ApiConfig":
        return cls(
            url="https://api.openai.com/v1/chat/completions",
            default_model="gpt-4o",
        )

    @classmethod
    def mistral(cls) -> "ApiConfig":
        return cls(
            url="https://api.mistral.ai/v1/chat/completions",
            default_model="mistral-medium",
        )

    @classmethod
    def groq(cls) -> "ApiConfig":
        return cls(
            url="https://api.groq.com/openai/v1/chat/completions",
            default_model="llama3-70b-8192",
        )

    @classmethod
    def ollama(cls) -> "ApiConfig":
        return cls(url="http://localhost:11434/api/chat", default_model="phi3")

    @classmethod
    def anthropic(cls) -> "ApiConfig":
        return cls(
            url="https://api.anthropic.com/v1/messages",
            default_model="claude-3-opus-20240229",
            version="2023-06-01",
        )
