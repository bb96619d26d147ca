# ABOUTME: Async HTTP client abstraction for metadata provider API calls.
# ABOUTME: Maps HTTP outcomes onto the error taxonomy and retries rate-limited requests with backoff.

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any, Protocol, runtime_checkable

import httpx

from folio._version import __version__
from folio.metadata.rate_limit import RateLimitGate

logger = logging.getLogger(__name__)

_DEFAULT_RATE_LIMIT_STATUSES = frozenset({429})


class MetadataFetchError(Exception):
    """Raised when an HTTP request to a metadata provider fails."""

    def __init__(self, message: str, *, url: str | None = None, status_code: int | None = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class InvalidRequestError(MetadataFetchError):
    """The query itself is malformed. Never retried."""


class NotFoundError(MetadataFetchError):
    """Valid query, no match. Providers turn this into an empty result."""


class RateLimitedError(MetadataFetchError):
    """The provider throttled us and the retry budget is spent."""


class ServerError(MetadataFetchError):
    """The provider failed (5xx or unreadable body). Surfaced without retry."""


class NetworkError(MetadataFetchError):
    """Transport failure or unexpected status. Surfaced without retry."""


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for async HTTP GET operations against metadata APIs."""

    async def get(self, url: str, params: dict[str, str] | None = None) -> dict[str, Any]: ...


class FolioHttpClient:
    """Rate-limited async HTTP client for one metadata provider.

    Wraps httpx.AsyncClient. Every attempt passes through the provider's
    RateLimitGate before going out. Rate-limit statuses are retried up to
    max_attempts with exponential backoff (retry_delay * 2**attempt) and
    widen the gate's interval for later requests; all other failures are
    raised immediately as a MetadataFetchError subclass. Only a 2xx or 404
    answer resets the adaptive interval.
    """

    def __init__(
        self,
        *,
        min_request_interval: float = 1.0,
        max_attempts: int = 3,
        retry_delay: float = 1.0,
        rate_limit_statuses: frozenset[int] = _DEFAULT_RATE_LIMIT_STATUSES,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
        gate: RateLimitGate | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        if max_attempts < 1:
            msg = f"max_attempts must be at least 1, got {max_attempts}"
            raise ValueError(msg)
        client_kwargs: dict[str, Any] = {
            "headers": {"User-Agent": f"folio/{__version__}"},
            "timeout": timeout,
        }
        if transport is not None:
            client_kwargs["transport"] = transport
        self._client = httpx.AsyncClient(**client_kwargs)
        self._gate = gate if gate is not None else RateLimitGate(min_request_interval)
        self._max_attempts = max_attempts
        self._retry_delay = retry_delay
        self._rate_limit_statuses = rate_limit_statuses
        self._sleep = sleep

    @property
    def gate(self) -> RateLimitGate:
        return self._gate

    async def get(self, url: str, params: dict[str, str] | None = None) -> dict[str, Any]:
        """Send a GET request with rate limiting and rate-limit retry.

        Args:
            url: The URL to request.
            params: Optional query parameters.

        Returns:
            Parsed JSON response body.

        Raises:
            MetadataFetchError: A subclass naming the failure kind.
        """
        for attempt in range(self._max_attempts):
            await self._gate.wait()
            try:
                return await self._send(url, params)
            except RateLimitedError as exc:
                count = await self._gate.record_rate_limited()
                if attempt == self._max_attempts - 1:
                    raise RateLimitedError(
                        f"HTTP {exc.status_code} from {url} after {self._max_attempts} attempts",
                        url=url,
                        status_code=exc.status_code,
                    ) from exc
                delay = self._retry_delay * (2**attempt)
                logger.warning(
                    "HTTP %d from %s, retrying in %.1fs (attempt %d/%d, %d consecutive)",
                    exc.status_code,
                    url,
                    delay,
                    attempt + 1,
                    self._max_attempts,
                    count,
                )
                await self._sleep(delay)

        # The loop either returns or raises on its final attempt.
        raise AssertionError("unreachable")

    async def _send(self, url: str, params: dict[str, str] | None) -> dict[str, Any]:
        logger.debug("GET %s params=%s", url, params)
        try:
            response = await self._client.get(url, params=params)
        except httpx.HTTPError as exc:
            raise NetworkError(f"Request failed: {url}: {exc}", url=url) from exc

        status = response.status_code
        if status in self._rate_limit_statuses:
            raise RateLimitedError(f"HTTP {status} from {url}", url=url, status_code=status)
        if 200 <= status < 300:
            await self._gate.record_success()
            try:
                data = response.json()
            except ValueError as exc:
                raise ServerError(f"Invalid JSON from {url}", url=url, status_code=status) from exc
            if not isinstance(data, dict):
                raise ServerError(
                    f"Unexpected JSON shape from {url}: {type(data).__name__}",
                    url=url,
                    status_code=status,
                )
            return data
        if status == 400:
            raise InvalidRequestError(f"HTTP 400 from {url}", url=url, status_code=status)
        if status == 404:
            await self._gate.record_success()
            raise NotFoundError(f"HTTP 404 from {url}", url=url, status_code=status)
        if 500 <= status < 600:
            raise ServerError(f"HTTP {status} from {url}", url=url, status_code=status)
        raise NetworkError(f"HTTP {status} from {url}", url=url, status_code=status)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "FolioHttpClient":
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()
