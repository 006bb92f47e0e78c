# ABOUTME: Async HTTP client abstraction for catalog source API calls.
# ABOUTME: Provides retry with backoff for transient statuses and an injectable transport.

import asyncio
import logging
from typing import Any, Protocol, runtime_checkable

import httpx

from booklookup import __version__

logger = logging.getLogger(__name__)

_RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}

USER_AGENT = f"booklookup/{__version__}"


class MetadataFetchError(Exception):
    """Raised when an HTTP request to a catalog source fails."""


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for async HTTP GET operations against catalog APIs."""

    async def get_json(self, url: str, params: dict[str, str] | None = None) -> Any: ...

    async def get_text(self, url: str, params: dict[str, str] | None = None) -> str: ...


class AsyncHttpClient:
    """HTTP client with retry for catalog API calls.

    Wraps httpx.AsyncClient with retry logic for transient failures
    (429, 5xx). The per-request timeout here is a transport ceiling; the
    orchestrators apply each source's own, usually shorter, timeout.
    """

    def __init__(
        self,
        *,
        max_retries: int = 2,
        retry_delay: float = 0.5,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        client_kwargs: dict[str, Any] = {
            "headers": {"User-Agent": USER_AGENT, **(headers or {})},
            "timeout": timeout,
            "follow_redirects": True,
        }
        if transport is not None:
            client_kwargs["transport"] = transport
        self._client = httpx.AsyncClient(**client_kwargs)
        self._max_retries = max_retries
        self._retry_delay = retry_delay

    async def get_json(self, url: str, params: dict[str, str] | None = None) -> Any:
        """Send a GET request and decode the JSON body.

        Raises:
            MetadataFetchError: On transport errors, non-retryable statuses,
                exhausted retries, or a body that is not JSON.
        """
        response = await self._get(url, params)
        try:
            return response.json()
        except ValueError as exc:
            raise MetadataFetchError(f"Invalid JSON from {url}: {exc}") from exc

    async def get_text(self, url: str, params: dict[str, str] | None = None) -> str:
        """Send a GET request and return the decoded body text."""
        response = await self._get(url, params)
        return response.text

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "AsyncHttpClient":
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.aclose()

    async def _get(self, url: str, params: dict[str, str] | None) -> httpx.Response:
        attempts = 1 + self._max_retries
        last_status = 0
        for attempt in range(attempts):
            try:
                response = await self._client.get(url, params=params)
                last_status = response.status_code
            except httpx.HTTPError as exc:
                raise MetadataFetchError(f"Request failed: {url}: {exc}") from exc

            if response.status_code == 200:
                return response

            if response.status_code not in _RETRYABLE_STATUS_CODES:
                raise MetadataFetchError(f"HTTP {response.status_code} from {url}")

            if attempt < attempts - 1:
                delay = self._retry_delay * (2**attempt)
                logger.warning(
                    "HTTP %d from %s, retrying in %.1fs (attempt %d of %d)",
                    response.status_code,
                    url,
                    delay,
                    attempt + 1,
                    attempts,
                )
                await asyncio.sleep(delay)

        raise MetadataFetchError(f"HTTP {last_status} from {url} after {attempts} attempts")
