"""Shared stubs for geocoding tests. No network access."""

from __future__ import annotations

import asyncio
import dataclasses
from typing import Any, Callable

import pytest

from place_distance.clients.transport import Transport
from place_distance.errors import GeocodeError
from place_distance.models import ErrorKind, GeoResult
from place_distance.providers import PROVIDERS, ProviderConfig


def nominatim_entry(lat: float, lon: float, name: str) -> dict:
    """A single Nominatim search hit, coordinates as strings like the real API."""
    return {
        "place_id": 1,
        "lat": str(lat),
        "lon": str(lon),
        "display_name": name,
        "address": {"country": "India", "country_code": "in"},
    }


DELHI = nominatim_entry(28.6139, 77.2090, "New Delhi, Delhi, India")
MUMBAI = nominatim_entry(19.0760, 72.8777, "Mumbai, Maharashtra, India")


class StubTransport(Transport):
    """Replays scripted responses; exceptions in the script are raised.

    With a list, items are consumed in order and the last one repeats.
    With a handler, each call's params decide the response.
    """

    def __init__(self, responses: list | None = None,
                 handler: Callable[[dict], Any] | None = None):
        self.responses = list(responses or [])
        self.handler = handler
        self.calls: list[dict] = []
        self.headers: list[dict] = []

    async def get_json(self, url: str, params: dict[str, str], headers: dict[str, str]) -> Any:
        self.calls.append(dict(params))
        self.headers.append(dict(headers))
        if self.handler is not None:
            item = self.handler(params)
        elif len(self.responses) > 1:
            item = self.responses.pop(0)
        else:
            item = self.responses[0]
        if isinstance(item, Exception):
            raise item
        return item


class SleepRecorder:
    """Stands in for asyncio.sleep and records the requested delays."""

    def __init__(self):
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


class StubGeocoder:
    """Geocoder double: maps query → GeoResult, None, or an exception.

    `delays` holds per-query sleeps to control completion order.
    """

    def __init__(self, results: dict[str, Any], delays: dict[str, float] | None = None):
        self.results = results
        self.delays = delays or {}
        self.calls: list[str] = []

    async def geocode(self, query: str, region_hint: str | None = None) -> GeoResult | None:
        self.calls.append(query)
        await asyncio.sleep(self.delays.get(query, 0))
        value = self.results[query]
        if isinstance(value, BaseException):
            raise value
        return value


def make_config(**overrides) -> ProviderConfig:
    defaults = dict(
        contact="maps-team@example.org",
        default_region="in",
        rate_limit_rpm=0,
    )
    defaults.update(overrides)
    return dataclasses.replace(PROVIDERS["nominatim"], **defaults)


@pytest.fixture
def config() -> ProviderConfig:
    return make_config()


@pytest.fixture
def sleep() -> SleepRecorder:
    return SleepRecorder()


DELHI_RESULT = GeoResult(28.6139, 77.2090, "New Delhi, Delhi, India")
MUMBAI_RESULT = GeoResult(19.0760, 72.8777, "Mumbai, Maharashtra, India")


def rate_limited() -> GeocodeError:
    return GeocodeError(ErrorKind.RATE_LIMITED, "rate limited", status_code=429)
