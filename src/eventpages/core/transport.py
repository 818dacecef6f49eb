"""
Transports for auxiliary content loads.

Views depend on the `Transport` protocol only. `HttpxTransport` is the
production implementation; tests substitute their own.

Cancellation is cooperative: views cancel the asyncio task awaiting
`fetch_text`, which aborts the underlying request.
"""

import logging
from typing import Any, Protocol, runtime_checkable

import httpx

from eventpages.core.config import TransportConfig
from eventpages.core.errors import FetchError

logger = logging.getLogger(__name__)


@runtime_checkable
class Transport(Protocol):
    """Protocol for loading a resource by URL."""

    async def fetch_text(self, url: str) -> str:
        """
        Load `url` and return the response body as text.

        Raises:
            FetchError: on any transport-level or HTTP status failure.
        """
        ...


class HttpxTransport:
    """Transport backed by a shared `httpx.AsyncClient`."""

    def __init__(self, config: TransportConfig | None = None):
        self.config = config or TransportConfig()
        self._client: httpx.AsyncClient | None = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.config.timeout_seconds),
                follow_redirects=self.config.follow_redirects,
                headers={"User-Agent": self.config.user_agent},
            )
        return self._client

    async def fetch_text(self, url: str) -> str:
        client = self._get_client()
        try:
            response = await client.get(url)
            response.raise_for_status()
        except httpx.TimeoutException as e:
            logger.warning(f"Request timed out: {url}")
            raise FetchError(
                f"Request timed out after {self.config.timeout_seconds} seconds", url=url
            ) from e
        except httpx.HTTPStatusError as e:
            logger.warning(f"Request failed with status {e.response.status_code}: {url}")
            raise FetchError(
                f"HTTP {e.response.status_code} loading {url}",
                url=url,
                status_code=e.response.status_code,
            ) from e
        except httpx.RequestError as e:
            logger.warning(f"Request error for {url}: {e}")
            raise FetchError(f"HTTP request failed: {e}", url=url) from e

        logger.debug(f"Fetched {len(response.content)} bytes from {url}")
        return response.text

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "HttpxTransport":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> bool:
        await self.aclose()
        return False


# Global transport instance
_transport: Transport | None = None


def get_transport() -> Transport:
    """Get the process-wide default transport, creating it on first use."""
    global _transport
    if _transport is None:
        _transport = HttpxTransport()
    return _transport


def set_transport(transport: Transport) -> None:
    global _transport
    _transport = transport


def reset_transport() -> None:
    global _transport
    _transport = None
