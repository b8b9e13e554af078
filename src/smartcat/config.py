"""Configuration: environment settings and the on-disk config files."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional

import yaml
from dotenv import load_dotenv

from .models import Api, ApiConfig, Message, Prompt

# Load secrets from home directory first, then fall back to local lookups.
load_dotenv(Path.home() / ".env", override=False)
load_dotenv(override=False)

LOGGER = logging.getLogger("smartcat.config")

PLACEHOLDER_TOKEN = "#[<input>]"

CUSTOM_CONFIG_ENV_VAR = "SMARTCAT_CONFIG_PATH"
NONINTERACTIVE_ENV_VAR = "SMARTCAT_NONINTERACTIVE"
LOG_LEVEL_ENV_VAR = "SMARTCAT_LOG_LEVEL"
DEFAULT_CONFIG_PATH = Path(".config") / "smartcat"

API_KEYS_FILE = ".api_configs.yaml"
PROMPTS_FILE = "prompts.yaml"

DEFAULT_PROMPT_NAME = "default"
DEFAULT_CHAR_LIMIT = 50000

DEFAULT_SYSTEM_MESSAGE = (
    "You are an extremely skilled programmer with a keen eye for detail and an emphasis on "
    "readable code. You have been tasked with acting as a smart version of the cat unix "
    "program. You take text and a prompt in and write text out. It is crucial that you only "
    "write the desired output: what you write is piped into other programs or inserted "
    "directly into the user's editor. Never write comments about your answer, and never "
    "wrap code in markdown delimiters."
)


class ConfigError(ValueError):
    """Raised when configuration values are invalid or missing."""


def _as_bool(value: str) -> bool:
    return value.lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    """Process-level settings read from the environment."""

    config_path: Path
    non_interactive: bool
    log_level: str

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from environment variables."""
        env = env if env is not None else os.environ

        custom_path = env.get(CUSTOM_CONFIG_ENV_VAR)
        home = env.get("HOME")
        if custom_path:
            config_path = Path(custom_path)
        elif home:
            config_path = Path(home) / DEFAULT_CONFIG_PATH
        else:
            raise ConfigError(
                f"Could not determine default config path. Set either ${CUSTOM_CONFIG_ENV_VAR} or $HOME"
            )

        return cls(
            config_path=config_path,
            non_interactive=_as_bool(env.get(NONINTERACTIVE_ENV_VAR, "false")),
            log_level=env.get(LOG_LEVEL_ENV_VAR, "WARNING").upper(),
        )

    @property
    def api_keys_path(self) -> Path:
        return self.config_path / API_KEYS_FILE

    @property
    def prompts_path(self) -> Path:
        return self.config_path / PROMPTS_FILE


def default_api_configs() -> Dict[Api, ApiConfig]:
    return {
        Api.OPENAI: ApiConfig.openai(),
        Api.MISTRAL: ApiConfig.mistral(),
        Api.GROQ: ApiConfig.groq(),
        Api.OLLAMA: ApiConfig.ollama(),
        Api.ANTHROPIC: ApiConfig.anthropic(),
    }


def default_prompts() -> Dict[str, Prompt]:
    return {
        DEFAULT_PROMPT_NAME: Prompt(
            api=Api.OPENAI,
            char_limit=DEFAULT_CHAR_LIMIT,
            messages=(
                Message.system(DEFAULT_SYSTEM_MESSAGE),
                Message.user(PLACEHOLDER_TOKEN),
            ),
        ),
        "empty": Prompt(api=Api.OPENAI),
    }


def _read_yaml(path: Path) -> Dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(f"Could not read {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a mapping at top level")
    return data


def _write_yaml(path: Path, data: Dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.safe_dump(data, sort_keys=False, allow_unicode=True), encoding="utf-8")


def generate_api_keys_file(path: Path, openai_api_key: Optional[str] = None) -> None:
    configs = default_api_configs()
    if openai_api_key:
        configs[Api.OPENAI] = ApiConfig.from_dict(
            {**configs[Api.OPENAI].to_dict(), "api_key": openai_api_key}
        )
    _write_yaml(path, {api.value: config.to_dict() for api, config in configs.items()})


def generate_prompts_file(path: Path) -> None:
    _write_yaml(path, {name: prompt.to_dict() for name, prompt in default_prompts().items()})


def load_api_configs(path: Path) -> Dict[Api, ApiConfig]:
    """Read the provider connection settings keyed by api."""
    configs: Dict[Api, ApiConfig] = {}
    for name, raw in _read_yaml(path).items():
        try:
            api = Api(name)
        except ValueError as exc:
            raise ConfigError(f"Unknown api '{name}' in {path}") from exc
        if not isinstance(raw, dict):
            raise ConfigError(f"Api config '{name}' in {path} must be a mapping")
        try:
            configs[api] = ApiConfig.from_dict(raw)
        except KeyError as exc:
            raise ConfigError(f"Api config '{name}' in {path} is missing {exc}") from exc
    return configs


def load_prompts(path: Path) -> Dict[str, Prompt]:
    """Read the prompt templates keyed by name."""
    prompts: Dict[str, Prompt] = {}
    for name, raw in _read_yaml(path).items():
        if not isinstance(raw, dict):
            raise ConfigError(f"Prompt '{name}' in {path} must be a mapping")
        try:
            prompts[str(name)] = Prompt.from_dict(raw)
        except KeyError as exc:
            raise ConfigError(f"Prompt '{name}' in {path} is missing {exc}") from exc
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"Prompt '{name}' in {path} is invalid: {exc}") from exc
    return prompts


def get_api_config(configs: Mapping[Api, ApiConfig], api: Api, path: Path) -> ApiConfig:
    try:
        return configs[api]
    except KeyError:
        raise ConfigError(f"No api config for '{api}' in {path}") from None


def ensure_config_files(
    settings: Settings,
    *,
    interactive: bool,
    read_line: Optional[Callable[[str], str]] = None,
    echo: Callable[[str], None] = print,
) -> bool:
    """Generate missing config files.

    Returns False when the user skipped entering an api key interactively,
    in which case there is nothing usable to dispatch with yet.
    """
    config_was_generated = False
    config_available = True

    if not settings.prompts_path.exists():
        if interactive:
            echo(f"Prompt config file not found at {settings.prompts_path}, generating one.\n...")
        generate_prompts_file(settings.prompts_path)
        LOGGER.info("Generated prompts file at %s", settings.prompts_path)

    if not settings.api_keys_path.exists():
        openai_api_key: Optional[str] = None
        if interactive and read_line is not None:
            echo(f"API config file not found at {settings.api_keys_path}, generating one.\n...")
            answer = read_line(
                "Please paste your openai API key, it can be found at\n"
                "https://platform.openai.com/api-keys\n"
                "Press [ENTER] to skip"
            ).strip()
            if answer:
                openai_api_key = answer
            else:
                echo(
                    f"Please edit the file at {settings.api_keys_path}, "
                    "more config options are available this way."
                )
                config_available = False
        config_was_generated = True
        generate_api_keys_file(settings.api_keys_path, openai_api_key)
        LOGGER.info("Generated api config file at %s", settings.api_keys_path)

    if interactive and config_was_generated and config_available:
        echo("All set!\n========")
    elif interactive and not config_available:
        echo("Come back when you've set your api keys!\n========")
        return False
    return True
