"""User input: terminal detection, reading, and prompt customization."""

from __future__ import annotations

import dataclasses
import glob
import sys
from pathlib import Path
from typing import Iterable, List, Optional, TextIO

from .config import PLACEHOLDER_TOKEN, ConfigError, Settings
from .models import Api, Message, Prompt, Role

TTY_PATH = "/dev/tty"


def is_interactive(settings: Settings, stdin: Optional[TextIO] = None) -> bool:
    stdin = stdin or sys.stdin
    if settings.non_interactive:
        return False
    try:
        return stdin.isatty()
    except (AttributeError, ValueError):
        return False


def read_user_input(message: str) -> str:
    """Show ``message`` on stderr and read one line from the terminal.

    stdin may carry piped input, so the answer is read from the controlling
    terminal when there is one.
    """
    sys.stderr.write(f"{message}\n")
    sys.stderr.flush()
    try:
        with open(TTY_PATH, encoding="utf-8") as tty:
            return tty.readline()
    except OSError:
        return sys.stdin.readline()


def read_stdin(stream: Optional[TextIO] = None) -> str:
    stream = stream or sys.stdin
    if stream.isatty():
        return ""
    return stream.read()


def read_context_files(patterns: Iterable[str]) -> str:
    """Concatenate every file matched by ``patterns`` into one context block."""
    blocks: List[str] = []
    for pattern in patterns:
        matches = sorted(glob.glob(pattern, recursive=True)) or [pattern]
        for match in matches:
            path = Path(match)
            if path.is_dir():
                continue
            try:
                content = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                raise ConfigError(f"Could not read context file {path}: {exc}") from exc
            blocks.append(f"```{path}\n{content}\n```")
    return "\n".join(blocks)


def customize_prompt(
    prompt: Prompt,
    input_text: str,
    *,
    api: Optional[Api] = None,
    model: Optional[str] = None,
    char_limit: Optional[int] = None,
    context_text: str = "",
) -> Prompt:
    """Return a copy of ``prompt`` filled with the user's input and overrides."""
    messages = list(prompt.messages)

    for index, message in enumerate(messages):
        if PLACEHOLDER_TOKEN in message.content:
            messages[index] = Message(
                role=message.role,
                content=message.content.replace(PLACEHOLDER_TOKEN, input_text),
            )
            break
    else:
        if input_text:
            messages.append(Message.user(input_text))

    if context_text:
        for index in range(len(messages) - 1, -1, -1):
            if messages[index].role is Role.USER:
                messages[index] = Message.user(
                    f"Context:\n{context_text}\n\n{messages[index].content}"
                )
                break
        else:
            messages.append(Message.user(f"Context:\n{context_text}"))

    return dataclasses.replace(
        prompt,
        api=api if api is not None else prompt.api,
        model=model if model is not None else prompt.model,
        char_limit=char_limit if char_limit is not None else prompt.char_limit,
        messages=tuple(messages),
    )
