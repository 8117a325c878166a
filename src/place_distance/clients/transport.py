"""HTTP transport abstraction: one GET in, decoded JSON out."""

from __future__ import annotations

import abc
import asyncio
import logging
import time
from typing import Any

import httpx

from place_distance.errors import (
    TransportDecodeError,
    TransportHTTPError,
    TransportNetworkError,
)

logger = logging.getLogger(__name__)


class RateLimiter:
    """Simple token-bucket rate limiter, safe for concurrent coroutines."""

    def __init__(self, rpm: int):
        self.min_interval = 60.0 / max(rpm, 1)
        self._last_call = 0.0
        self._lock = asyncio.Lock()

    async def acquire(self) -> None:
        async with self._lock:
            now = time.monotonic()
            elapsed = now - self._last_call
            if elapsed < self.min_interval:
                await asyncio.sleep(self.min_interval - elapsed)
            self._last_call = time.monotonic()


class Transport(abc.ABC):
    """Performs a single HTTP GET and returns the decoded JSON body.

    Implementations raise TransportHTTPError for non-2xx responses,
    TransportNetworkError when no response arrived, and TransportDecodeError
    for bodies that are not JSON.
    """

    @abc.abstractmethod
    async def get_json(self, url: str, params: dict[str, str], headers: dict[str, str]) -> Any:
        ...

    async def close(self) -> None:
        return None


class HttpxTransport(Transport):
    """Transport backed by a lazily created `httpx.AsyncClient`."""

    def __init__(self, timeout_seconds: float = 10.0, rate_limit_rpm: int | None = None):
        self.timeout_seconds = timeout_seconds
        self._rate_limiter = RateLimiter(rate_limit_rpm) if rate_limit_rpm else None
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self.timeout_seconds)
        return self._client

    async def close(self) -> None:
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    async def get_json(self, url: str, params: dict[str, str], headers: dict[str, str]) -> Any:
        client = await self._get_client()
        if self._rate_limiter is not None:
            await self._rate_limiter.acquire()

        try:
            resp = await client.get(url, params=params, headers=headers)
        except httpx.RequestError as exc:
            raise TransportNetworkError(f"{type(exc).__name__}: {exc}") from exc

        if not resp.is_success:
            raise TransportHTTPError(resp.status_code, f"HTTP {resp.status_code} from {url}")

        try:
            return resp.json()
        except ValueError as exc:
            raise TransportDecodeError(f"response from {url} is not JSON") from exc
