"""Single blocking HTTP POST with failure classification."""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

import httpx

from .errors import NetworkError, StatusError

LOGGER = logging.getLogger("smartcat.transport")

NON_TEXT_BODY = "(non-UTF-8 response)"


def _body_text(response: httpx.Response) -> str:
    try:
        return response.content.decode("utf-8")
    except UnicodeDecodeError:
        return NON_TEXT_BODY


def send(
    url: str,
    payload: Dict[str, Any],
    headers: Mapping[str, str],
    *,
    client: Optional[httpx.Client] = None,
) -> str:
    """POST ``payload`` as JSON to ``url`` and return the raw response body.

    No timeout and no retries: a failed attempt is surfaced immediately as
    ``StatusError`` (non-2xx) or ``NetworkError`` (below HTTP, including
    undecodable bodies).
    A client created here follows redirects.
    """
    owns_client = client is None
    if client is None:
        client = httpx.Client(timeout=None, follow_redirects=True)
    try:
        response = client.post(url, json=payload, headers=dict(headers))
    except httpx.RequestError as exc:
        raise NetworkError(exc) from exc
    finally:
        if owns_client:
            client.close()

    LOGGER.debug("POST %s returned %s", url, response.status_code)
    if not response.is_success:
        raise StatusError(response.status_code, _body_text(response))
    return _body_text(response)
