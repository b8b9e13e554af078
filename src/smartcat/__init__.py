"""smartcat - pipe text through a prompt template and an LLM provider."""

from .config import ConfigError, Settings  # noqa: F401
from .dispatch import Dispatcher, make_api_request  # noqa: F401
from .models import Api, ApiConfig, Message, Prompt  # noqa: F401

__all__ = [
    "Api",
    "ApiConfig",
    "ConfigError",
    "Dispatcher",
    "Message",
    "Prompt",
    "Settings",
    "make_api_request",
    "__version__",
]

__version__ = "0.1.0"
