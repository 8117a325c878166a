"""Async geocoding client with region fallback and exponential-backoff retry."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional

from place_distance.clients.transport import HttpxTransport, Transport
from place_distance.errors import (
    GeocodeError,
    InvalidQueryError,
    TransportDecodeError,
    TransportHTTPError,
    TransportNetworkError,
)
from place_distance.models import ErrorKind, GeoResult
from place_distance.parsers import PARSER_MAP, ParseError, ResultParser
from place_distance.providers import PROVIDERS, ProviderConfig, resolve_region

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[Any]]


@dataclass(frozen=True)
class LookupStrategy:
    """One way of asking the provider about a query."""

    name: str                   # "region" or "plain"
    text: str
    country_code: Optional[str] = None


class GeocodeClient:
    """Resolves free-text place names to a GeoResult.

    Tries a region-scoped lookup first and falls back to the plain query text.
    Rate limiting (429) and network failures are retried with exponential
    backoff; 403 and other HTTP errors fail immediately. Any GeocodeError
    stops the remaining strategies, while an empty result list moves on to
    the next one.
    """

    def __init__(
        self,
        config: ProviderConfig | None = None,
        transport: Transport | None = None,
        parser: ResultParser | None = None,
        sleep: Sleep = asyncio.sleep,
    ):
        self.config = config or PROVIDERS["nominatim"]
        self._owns_transport = transport is None
        self.transport = transport or HttpxTransport(
            timeout_seconds=self.config.timeout_seconds,
            rate_limit_rpm=self.config.rate_limit_rpm,
        )
        self.parser = parser or PARSER_MAP[self.config.name]
        self._sleep = sleep

        if self.config.uses_placeholder_contact:
            logger.warning(
                "%s: contact identifier is unset or the placeholder %r; set "
                "PLACE_DISTANCE_CONTACT_EMAIL to comply with the provider usage policy",
                self.config.name, self.config.contact,
            )

    async def close(self) -> None:
        if self._owns_transport:
            await self.transport.close()

    async def __aenter__(self) -> GeocodeClient:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    def strategies(self, query: str, region_hint: str | None = None) -> list[LookupStrategy]:
        """Ordered lookup strategies for a query: region-scoped, then plain."""
        hint = region_hint if region_hint is not None else self.config.default_region
        region = resolve_region(hint)

        strategies: list[LookupStrategy] = []
        if region is not None:
            strategies.append(
                LookupStrategy("region", f"{query}, {region.name}", country_code=region.code)
            )
        strategies.append(LookupStrategy("plain", query))
        return strategies

    async def geocode(self, query: str, region_hint: str | None = None) -> GeoResult | None:
        """Resolve a place name to its best match.

        Args:
            query: Free-text place name; surrounding whitespace is ignored.
            region_hint: Region code for the scoped lookup ("in", "us", ...),
                "none" to skip it. Defaults to the provider's default region.

        Returns:
            The first match, or None when no strategy found anything.

        Raises:
            InvalidQueryError: The query is empty.
            GeocodeError: Lookup failed (rate limited, blocked, network, HTTP).
        """
        query = query.strip()
        if not query:
            raise InvalidQueryError("query")

        strategies = self.strategies(query, region_hint)
        try:
            return await asyncio.wait_for(
                self._run_strategies(query, strategies),
                timeout=self.config.call_timeout_seconds,
            )
        except asyncio.TimeoutError:
            raise GeocodeError(
                ErrorKind.NETWORK_ERROR,
                f"{self.config.name}: lookup for {query!r} timed out after "
                f"{self.config.call_timeout_seconds:.0f}s",
            ) from None

    async def _run_strategies(
        self, query: str, strategies: list[LookupStrategy],
    ) -> GeoResult | None:
        for strategy in strategies:
            payload = await self._request_with_retry(self._params(strategy))
            try:
                result = self.parser.parse_first(payload)
            except ParseError as exc:
                raise GeocodeError(ErrorKind.INVALID_RESPONSE, str(exc)) from exc

            if result is not None:
                logger.info(
                    "Geocoded %r via %s lookup -> (%.6f, %.6f) %s",
                    query, strategy.name, result.latitude, result.longitude,
                    result.display_name,
                )
                return result
            logger.debug("%s lookup for %r returned no match", strategy.name, query)

        logger.info("No match for %r after %d strategies", query, len(strategies))
        return None

    def _params(self, strategy: LookupStrategy) -> dict[str, str]:
        params = {
            "format": "json",
            "limit": "1",
            "addressdetails": "1",
            "q": strategy.text,
            "email": self.config.contact,
        }
        if strategy.country_code:
            params["countrycodes"] = strategy.country_code
        return params

    async def _request_with_retry(self, params: dict[str, str]) -> Any:
        """Make HTTP request with exponential backoff retry."""
        headers = {"User-Agent": self.config.user_agent}
        attempts = self.config.max_retries + 1
        last_error: GeocodeError | None = None
        last_exc: Exception | None = None

        for attempt in range(attempts):
            try:
                return await self.transport.get_json(self.config.base_url, params, headers)
            except TransportHTTPError as exc:
                if exc.status_code == 429:
                    last_exc = exc
                    last_error = GeocodeError(
                        ErrorKind.RATE_LIMITED,
                        f"{self.config.name}: rate limited (HTTP 429) after {attempts} attempts",
                        status_code=429,
                    )
                elif exc.status_code == 403:
                    raise GeocodeError(
                        ErrorKind.BLOCKED,
                        f"{self.config.name}: request blocked (HTTP 403)",
                        status_code=403,
                    ) from exc
                else:
                    raise GeocodeError(
                        ErrorKind.HTTP_ERROR,
                        f"{self.config.name}: geocoding failed with HTTP {exc.status_code}",
                        status_code=exc.status_code,
                    ) from exc
            except TransportNetworkError as exc:
                last_exc = exc
                last_error = GeocodeError(
                    ErrorKind.NETWORK_ERROR,
                    f"{self.config.name}: network error after {attempts} attempts ({exc})",
                )
            except TransportDecodeError as exc:
                raise GeocodeError(ErrorKind.INVALID_RESPONSE, str(exc)) from exc

            if attempt < self.config.max_retries:
                backoff = self.config.initial_backoff_seconds * 2 ** attempt
                logger.warning(
                    "%s: attempt %d/%d failed (%s), retrying in %.1fs",
                    self.config.name, attempt + 1, attempts, last_exc, backoff,
                )
                await self._sleep(backoff)

        raise last_error from last_exc
