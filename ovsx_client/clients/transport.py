"""
Registry HTTP Transport

The three request shapes the registry client needs (text GET, JSON GET,
JSON POST), each expecting HTTP 200.

Patterns Applied:
- Connection pooling (reuse one httpx.AsyncClient)
- Retry with exponential backoff (connection errors, timeouts, 5xx)
- Custom namespaced exceptions
- FakeRegistryTransport implementing the same protocol for tests
"""

from __future__ import annotations

import asyncio
from typing import Any, Final

import httpx

from ovsx_client.core.exceptions import RegistryTransportError
from ovsx_client.core.logging import get_logger

logger = get_logger(__name__)

# =============================================================================
# Module Constants
# =============================================================================

DEFAULT_TIMEOUT: Final[float] = 30.0
DEFAULT_MAX_RETRIES: Final[int] = 1
DEFAULT_RETRY_DELAY: Final[float] = 1.0

JSON_MEDIA_TYPE: Final[str] = "application/json"
ACCEPT_JSON: Final[dict[str, str]] = {"Accept": JSON_MEDIA_TYPE}
POST_JSON_HEADERS: Final[dict[str, str]] = {
    "Content-Type": JSON_MEDIA_TYPE,
    "Accept": JSON_MEDIA_TYPE,
}

EXPECTED_STATUS: Final[int] = 200


# =============================================================================
# HttpRegistryTransport Implementation
# =============================================================================


class HttpRegistryTransport:
    """httpx-backed transport for registry requests.

    Attributes:
        timeout: Request timeout in seconds (default: 30)
        max_retries: Total attempts per request (default: 1, no retry)
        retry_delay: Initial delay between retries in seconds (default: 1.0)
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        max_retries: int = DEFAULT_MAX_RETRIES,
        retry_delay: float = DEFAULT_RETRY_DELAY,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the transport.

        Args:
            timeout: Request timeout in seconds
            max_retries: Total attempts per request (at least 1)
            retry_delay: Initial delay between retries
            client: Existing AsyncClient to reuse; it is not closed by close()
        """
        self.timeout = timeout
        self.max_retries = max(1, max_retries)
        self.retry_delay = retry_delay

        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=httpx.Timeout(timeout))

    async def __aenter__(self) -> HttpRegistryTransport:
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the HTTP connection pool if this transport created it."""
        if self._owns_client:
            await self._client.aclose()

    async def fetch_text(self, url: str) -> str:
        response = await self._execute_request("GET", url)
        return response.text

    async def fetch_json(self, url: str) -> Any:
        response = await self._execute_request("GET", url, headers=ACCEPT_JSON)
        return self._decode_json(response, url)

    async def post_json(self, url: str, payload: Any) -> Any:
        response = await self._execute_request(
            "POST",
            url,
            headers=POST_JSON_HEADERS,
            json=payload,
        )
        return self._decode_json(response, url)

    async def _execute_request(
        self,
        method: str,
        url: str,
        **kwargs: Any,
    ) -> httpx.Response:
        """Execute HTTP request with retry logic.

        Args:
            method: HTTP method
            url: Absolute request URL
            **kwargs: Passed through to httpx.AsyncClient.request

        Returns:
            The 200 response

        Raises:
            RegistryTransportError: On non-200 status or network failure
                once attempts are exhausted (4xx is never retried)
        """
        last_error = RegistryTransportError(f"{method} {url} was not attempted", url=url)

        for attempt in range(self.max_retries):
            try:
                response = await self._client.request(method, url, **kwargs)
                if response.status_code == EXPECTED_STATUS:
                    return response
                error = RegistryTransportError(
                    f"{method} {url} returned HTTP {response.status_code}",
                    status_code=response.status_code,
                    url=url,
                )
                if not self._is_retryable(response.status_code):
                    logger.error(
                        "transport_request_failed",
                        method=method,
                        url=url,
                        status_code=response.status_code,
                    )
                    raise error
                last_error = error
            except httpx.TimeoutException as e:
                last_error = RegistryTransportError(
                    f"{method} {url} timed out: {e}", url=url
                )
                last_error.__cause__ = e
            except httpx.TransportError as e:
                last_error = RegistryTransportError(
                    f"{method} {url} failed: {e}", url=url
                )
                last_error.__cause__ = e

            if attempt < self.max_retries - 1:
                delay = self.retry_delay * (2**attempt)
                logger.warning(
                    "transport_retry",
                    method=method,
                    url=url,
                    attempt=attempt + 1,
                    delay=delay,
                    error=str(last_error),
                )
                await asyncio.sleep(delay)

        logger.error(
            "transport_request_failed",
            method=method,
            url=url,
            attempts=self.max_retries,
            error=str(last_error),
        )
        raise RegistryTransportError(
            f"{method} {url} failed after {self.max_retries} attempt(s): {last_error}",
            status_code=last_error.status_code,
            url=url,
        ) from last_error.__cause__

    def _is_retryable(self, status_code: int) -> bool:
        """Only server errors are worth another attempt."""
        return status_code >= 500

    def _decode_json(self, response: httpx.Response, url: str) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise RegistryTransportError(
                f"Malformed JSON from {url}: {e}",
                status_code=response.status_code,
                url=url,
            ) from e


# =============================================================================
# FakeRegistryTransport for Testing
# =============================================================================


class FakeRegistryTransport:
    """Fake transport for unit testing without real HTTP.

    Implements RegistryTransportProtocol. Responses are registered per URL;
    every call is recorded in ``requests`` as ``(method, url, payload)``.
    An unregistered URL behaves like an HTTP 404.
    """

    def __init__(self) -> None:
        self._responses: dict[tuple[str, str], Any] = {}
        self.requests: list[tuple[str, str, Any]] = []
        self.closed = False

    def set_text(self, url: str, text: str) -> None:
        self._responses[("TEXT", url)] = text

    def set_json(self, url: str, data: Any) -> None:
        self._responses[("GET", url)] = data

    def set_post_json(self, url: str, data: Any) -> None:
        self._responses[("POST", url)] = data

    def set_error(self, method: str, url: str, error: Exception) -> None:
        """Make requests of ``method`` (TEXT, GET or POST) to ``url`` raise."""
        self._responses[(method, url)] = error

    async def fetch_text(self, url: str) -> str:
        return await self._respond("TEXT", url, None)

    async def fetch_json(self, url: str) -> Any:
        return await self._respond("GET", url, None)

    async def post_json(self, url: str, payload: Any) -> Any:
        return await self._respond("POST", url, payload)

    async def close(self) -> None:
        self.closed = True

    async def _respond(self, method: str, url: str, payload: Any) -> Any:
        await asyncio.sleep(0)
        self.requests.append((method, url, payload))
        key = (method, url)
        if key not in self._responses:
            raise RegistryTransportError(
                f"{method} {url} returned HTTP 404", status_code=404, url=url
            )
        response = self._responses[key]
        if isinstance(response, Exception):
            raise response
        return response
