"""HTTP channel posting board messages to a host endpoint."""

from __future__ import annotations

import logging
import time
from typing import Any
from urllib.parse import quote

import httpx

from .protocol import SubscriberRegistry

logger = logging.getLogger(__name__)


class ChannelError(Exception):
    """Base exception for channel errors."""

    pass


class ChannelConnectionError(ChannelError):
    """The host could not be reached."""

    pass


class ChannelRejectedError(ChannelError):
    """The host answered with an error status."""

    pass


class HttpChannel(SubscriberRegistry):
    """Channel that POSTs outbound messages as JSON.

    Each message goes to ``{base_url}/inputs/{key}``. Inbound host pushes
    arrive through whatever server fronts the board, which hands them to
    ``dispatch``.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the channel.

        Args:
            base_url: Host endpoint (e.g., "http://localhost:8000")
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used in tests)
        """
        super().__init__()
        self.base_url = base_url.rstrip("/")
        self._client = httpx.Client(
            base_url=self.base_url,
            headers={"Content-Type": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()

    def __enter__(self) -> HttpChannel:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def send(self, key: str, payload: dict[str, Any]) -> None:
        """POST a message to the host.

        Raises:
            ChannelConnectionError: Request could not be sent
            ChannelRejectedError: Host responded with HTTP 4xx/5xx
        """
        path = f"/inputs/{quote(key, safe='')}"

        start_time = time.monotonic()
        try:
            response = self._client.post(path, json=payload)
        except httpx.RequestError as e:
            elapsed_ms = (time.monotonic() - start_time) * 1000
            logger.error("POST %s failed after %.0fms: %s", path, elapsed_ms, e)
            raise ChannelConnectionError(f"Request failed: {e}") from e

        elapsed_ms = (time.monotonic() - start_time) * 1000

        if response.status_code >= 400:
            logger.error("POST %s: HTTP %d (%.0fms)", path, response.status_code, elapsed_ms)
            raise ChannelRejectedError(f"HTTP {response.status_code}: {response.text}")

        logger.debug("POST %s: %d (%.0fms)", path, response.status_code, elapsed_ms)
