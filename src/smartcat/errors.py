"""Errors raised while dispatching a prompt to a provider."""

from __future__ import annotations

from typing import Any, Dict, Optional


class DispatchError(Exception):
    """Base error for every failure between a prompt and its completion."""

    code = "dispatch_error"

    def __init__(self, message: str, *, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class SizeLimitExceeded(DispatchError):
    """Prompt content is over its char_limit outside interactive mode."""

    code = "size_limit_exceeded"

    def __init__(self, total: int, limit: int):
        super().__init__(
            f"Input {total} larger than limit {limit} in non-interactive mode",
            details={"total": total, "limit": limit},
        )
        self.total = total
        self.limit = limit


class MissingRequiredConfig(DispatchError):
    code = "missing_required_config"

    def __init__(self, field: str, api: str, hint: str = ""):
        message = f"{field} required for {api}"
        if hint:
            message = f"{message}, {hint}"
        super().__init__(message, details={"field": field, "api": api})
        self.field = field
        self.api = api


class UnsupportedProvider(DispatchError):
    code = "unsupported_provider"

    def __init__(self, api: str):
        super().__init__(f"The {api} api is not made for actual use", details={"api": api})
        self.api = api


class TransportError(DispatchError):
    """The HTTP round trip failed."""

    code = "transport_error"


class NetworkError(TransportError):
    """Failure below the HTTP layer (DNS, TCP, TLS)."""

    code = "network_error"

    def __init__(self, cause: BaseException):
        super().__init__(
            f"API call failed: {cause}",
            details={"exception_type": type(cause).__name__},
        )
        self.cause = cause


class StatusError(TransportError):
    code = "status_error"

    def __init__(self, status_code: int, body: str):
        super().__init__(
            f"API call failed with status code {status_code} and body: {body}",
            details={"status_code": status_code},
        )
        self.status_code = status_code
        self.body = body


class DeserializationError(DispatchError):
    """Provider response did not have the expected shape."""

    code = "deserialization_error"

    def __init__(self, provider: str, field: str):
        super().__init__(
            f"Could not read {provider} response: missing or invalid field '{field}'",
            details={"provider": provider, "field": field},
        )
        self.provider = provider
        self.field = field


class UserAborted(Exception):
    """The user declined to send an oversized prompt.

    Not a failure: callers should stop without an error status.
    """

    def __init__(self, total: int, limit: int):
        super().__init__(f"Aborted by user: input {total} over limit {limit}")
        self.total = total
        self.limit = limit
