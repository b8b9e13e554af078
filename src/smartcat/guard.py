"""Pre-flight size policy for prompts."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Optional

from .errors import SizeLimitExceeded
from .models import Prompt

LOGGER = logging.getLogger("smartcat.guard")

CONFIRMATION_TOKEN = "Y"

ReadLineFn = Callable[[str], str]


class Outcome(Enum):
    PROCEED = "proceed"
    ABORT = "abort"


class SizeGuard:
    """Check a prompt's total content length against its char_limit.

    ``interactive`` selects between asking the user (through ``read_line``)
    and failing outright when the limit is exceeded.
    """

    def __init__(self, *, interactive: bool, read_line: Optional[ReadLineFn] = None) -> None:
        if interactive and read_line is None:
            raise ValueError("interactive SizeGuard requires a read_line callable")
        self._interactive = interactive
        self._read_line = read_line

    @property
    def interactive(self) -> bool:
        return self._interactive

    def check(self, prompt: Prompt) -> Outcome:
        limit = prompt.char_limit or 0
        if limit == 0:
            return Outcome.PROCEED

        total = prompt.content_length()
        LOGGER.debug("Number of chars in prompt: %s (limit %s)", total, limit)
        if total <= limit:
            return Outcome.PROCEED

        if not self._interactive or self._read_line is None:
            raise SizeLimitExceeded(total, limit)

        answer = self._read_line(
            f"The number of chars in the input {total} is greater than the set limit {limit}\n"
            "Do you want to continue? High costs may ensue.\n[Y/n]"
        )
        if answer.strip() == CONFIRMATION_TOKEN:
            return Outcome.PROCEED
        return Outcome.ABORT
