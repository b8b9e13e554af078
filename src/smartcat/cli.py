"""CLI entry point for smartcat."""

from __future__ import annotations

import logging
from typing import List, Optional

import typer

from .config import (
    DEFAULT_PROMPT_NAME,
    ConfigError,
    Settings,
    ensure_config_files,
    get_api_config,
    load_api_configs,
    load_prompts,
)
from .dispatch import make_api_request
from .errors import DispatchError, UserAborted
from .input_processing import (
    customize_prompt,
    is_interactive,
    read_context_files,
    read_stdin,
    read_user_input,
)
from .models import Api

app = typer.Typer(help="Put a brain behind `cat`: pipe text through an LLM.", add_completion=False)

LOGGER = logging.getLogger("smartcat.cli")


def _level_for(name: str) -> int:
    level = getattr(logging, name.upper(), logging.WARNING)
    if isinstance(level, int):
        return level
    return logging.WARNING


def _load_settings() -> Settings:
    try:
        return Settings.from_env()
    except ConfigError as exc:
        typer.secho(f"Configuration error: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=2) from exc


def _echo_err(message: str) -> None:
    typer.echo(message, err=True)


@app.command()
def run(
    input_or_template: Optional[str] = typer.Argument(
        None, help="Prompt template name, or the input itself when no template matches."
    ),
    input_if_template: Optional[str] = typer.Argument(
        None, help="Input text when the first argument names a prompt template."
    ),
    api: Optional[Api] = typer.Option(None, "--api", help="Override the prompt's api."),
    model: Optional[str] = typer.Option(None, "--model", "-m", help="Override the model."),
    char_limit: Optional[int] = typer.Option(
        None, "--char-limit", min=0, help="Override the prompt's char limit, 0 disables it."
    ),
    context: Optional[List[str]] = typer.Option(
        None, "--context", "-c", help="Glob of files added to the prompt as context."
    ),
    repeat_input: bool = typer.Option(
        False, "--repeat-input", "-r", help="Print the input before the completion."
    ),
) -> None:
    """Send the input through a prompt template and print the completion."""
    settings = _load_settings()
    logging.basicConfig(level=_level_for(settings.log_level))
    interactive = is_interactive(settings)

    try:
        if not ensure_config_files(
            settings,
            interactive=interactive,
            read_line=read_user_input,
            echo=_echo_err,
        ):
            raise typer.Exit(code=0)

        prompts = load_prompts(settings.prompts_path)
        if input_or_template is not None and input_or_template in prompts:
            template_name = input_or_template
            input_text = input_if_template or ""
        else:
            template_name = DEFAULT_PROMPT_NAME
            input_text = " ".join(part for part in (input_or_template, input_if_template) if part)
        if template_name not in prompts:
            raise ConfigError(f"Prompt '{template_name}' not found in {settings.prompts_path}")

        piped = read_stdin()
        if piped:
            input_text = f"{input_text}\n{piped}" if input_text else piped

        prompt = customize_prompt(
            prompts[template_name],
            input_text,
            api=api,
            model=model,
            char_limit=char_limit,
            context_text=read_context_files(context or []),
        )
        api_config = get_api_config(
            load_api_configs(settings.api_keys_path),
            prompt.api,
            settings.api_keys_path,
        )
    except ConfigError as exc:
        typer.secho(f"Configuration error: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=2) from exc

    LOGGER.debug("Using prompt '%s' with api %s", template_name, prompt.api)
    try:
        response = make_api_request(
            api_config,
            prompt,
            interactive=interactive,
            read_line=read_user_input,
        )
    except UserAborted:
        _echo_err("exiting...")
        raise typer.Exit(code=0)
    except DispatchError as exc:
        typer.secho(f"Error ({exc.code}): {exc.message}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc

    if repeat_input:
        typer.echo(input_text)
    typer.echo(response.content)


def main() -> None:
    """Entry point for console script."""
    app()


if __name__ == "__main__":
    main()
