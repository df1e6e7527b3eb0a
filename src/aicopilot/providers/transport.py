"""Shared JSON-over-HTTPS POST with provider error mapping."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from aicopilot.exceptions import ProviderConnectionError, ProviderTimeoutError, UpstreamError

log = logging.getLogger(__name__)

JSON_HEADERS = {"Content-Type": "application/json"}


async def post_json(
    client: httpx.AsyncClient,
    url: str,
    *,
    headers: dict[str, str],
    payload: dict[str, Any],
    timeout: float,
    provider: str,
) -> str:
    """POST ``payload`` as JSON and return the body of a 200 response.

    The JSON encoder escapes quotes, backslashes and control characters in
    the prompt.

    Raises:
        ProviderTimeoutError: the exchange exceeded ``timeout`` seconds.
        ProviderConnectionError: transport failure.
        UpstreamError: any status other than 200.
    """
    try:
        response = await client.post(
            url,
            headers={**JSON_HEADERS, **headers},
            json=payload,
            timeout=httpx.Timeout(timeout),
        )
    except httpx.TimeoutException as e:
        raise ProviderTimeoutError(f"{provider} request timed out after {timeout:.1f}s") from e
    except httpx.HTTPError as e:
        raise ProviderConnectionError(f"{provider} request failed: {e}") from e

    log.debug("%s response status=%d length=%d", provider, response.status_code, len(response.text))
    if response.status_code != 200:
        log.warning(
            "%s API error: %d - %s", provider, response.status_code, response.text[:200]
        )
        raise UpstreamError(response.status_code, response.text)
    return response.text
