"""Prompt dispatch: size guard, provider request, completion message."""

from __future__ import annotations

import dataclasses
import logging
from typing import Optional

import httpx

from .errors import MissingRequiredConfig, UserAborted
from .guard import Outcome, ReadLineFn, SizeGuard
from .models import ApiConfig, Message, Prompt
from .providers import adapter_for
from .transport import send

LOGGER = logging.getLogger("smartcat.dispatch")


class Dispatcher:
    """Turn one canonical prompt into one assistant message."""

    def __init__(
        self,
        *,
        size_guard: SizeGuard,
        http_client: Optional[httpx.Client] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._size_guard = size_guard
        self._http_client = http_client
        self._logger = logger or LOGGER

    def dispatch(self, api_config: ApiConfig, prompt: Prompt) -> Message:
        """Send ``prompt`` to its provider and return the completion.

        Raises UserAborted when the user declines an oversized prompt, and a
        DispatchError subclass for every other failure. Nothing is sent on the
        network before the size guard and the provider checks pass.
        """
        self._logger.debug("Trying to reach %s for api %s", api_config.url, prompt.api)

        if self._size_guard.check(prompt) is Outcome.ABORT:
            raise UserAborted(prompt.content_length(), prompt.char_limit or 0)

        # streamed responses are not supported by the adapters
        prompt = dataclasses.replace(
            prompt,
            model=prompt.model if prompt.model is not None else api_config.default_model,
            stream=False,
        )

        adapter = adapter_for(prompt.api)
        if not prompt.model:
            raise MissingRequiredConfig(
                "model",
                prompt.api.value,
                "set model in the prompt or default_model in the api config",
            )
        request = adapter.build_request(prompt, api_config)
        self._logger.debug(
            "Sending %s messages to %s with model %s",
            len(prompt.messages),
            adapter.name,
            prompt.model,
        )

        body = send(api_config.url, request.payload, request.headers, client=self._http_client)
        return Message.assistant(adapter.parse_response(body))


def make_api_request(
    api_config: ApiConfig,
    prompt: Prompt,
    *,
    interactive: bool,
    read_line: Optional[ReadLineFn] = None,
    http_client: Optional[httpx.Client] = None,
) -> Message:
    """Dispatch ``prompt`` once with a fresh size guard."""
    dispatcher = Dispatcher(
        size_guard=SizeGuard(interactive=interactive, read_line=read_line),
        http_client=http_client,
    )
    return dispatcher.dispatch(api_config, prompt)
