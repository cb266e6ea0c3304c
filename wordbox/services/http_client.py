"""Shared HTTP plumbing for the upstream dictionary APIs."""

import logging
from typing import Any

import httpx

from wordbox.core.config import Settings

logger = logging.getLogger(__name__)


class UpstreamError(Exception):
    """An upstream dictionary or translation API call failed."""

    def __init__(self, service: str, message: str, status_code: int | None = None):
        self.service = service
        self.status_code = status_code
        super().__init__(f"{service}: {message}")


class WordNotFoundError(UpstreamError):
    """The dictionary has no entry for the word; it may offer suggestions."""

    def __init__(self, service: str, text: str, suggestions: list[str]):
        self.text = text
        self.suggestions = suggestions
        super().__init__(service, f"no entry for {text!r}, suggestions: {suggestions}")


def create_http_client(settings: Settings) -> httpx.AsyncClient:
    """Create the pooled client shared by every upstream API wrapper."""
    return httpx.AsyncClient(
        timeout=settings.http_timeout,
        limits=httpx.Limits(
            max_keepalive_connections=10,
            max_connections=20,
            keepalive_expiry=settings.http_timeout,
        ),
    )


async def request_json(
    client: httpx.AsyncClient,
    service: str,
    method: str,
    url: str,
    **kwargs: Any,
) -> Any:
    """Send one request and decode its JSON body.

    Transport failures, non-200 responses and undecodable bodies all raise
    UpstreamError. There is no retry.
    """
    try:
        response = await client.request(method, url, **kwargs)
    except httpx.HTTPError as e:
        logger.error("%s request failed: %s", service, e)
        raise UpstreamError(service, f"request failed: {e}") from e

    if response.status_code != httpx.codes.OK:
        logger.error("%s returned status %s", service, response.status_code)
        raise UpstreamError(
            service, f"unexpected status {response.status_code}", response.status_code
        )

    logger.debug("read %d bytes from %s", len(response.content), service)
    try:
        return response.json()
    except ValueError as e:
        logger.debug("%s body is not JSON: %r", service, response.text[:200])
        raise UpstreamError(service, f"failed to parse json: {e}") from e
