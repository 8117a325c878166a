"""Two-place search: concurrent geocoding, outcome classification, distance."""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Optional, Protocol

from place_distance.errors import GeocodeError, InvalidQueryError
from place_distance.geo import haversine_km
from place_distance.models import (
    Failure,
    GeoResult,
    Missing,
    NotFound,
    SearchOutcome,
    Success,
)

logger = logging.getLogger(__name__)


class Geocoder(Protocol):
    async def geocode(self, query: str, region_hint: str | None = None) -> GeoResult | None:
        ...


class SearchPhase(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    REJECTED_INPUT = "rejected_input"
    VALIDATED = "validated"
    AWAITING_GEOCODES = "awaiting_geocodes"
    SUCCESS = "success"
    NOT_FOUND = "not_found"
    FAILURE = "failure"


def validate_queries(query_a: str, query_b: str) -> tuple[str, str]:
    """Trim both queries; raise InvalidQueryError naming the first empty one."""
    a, b = query_a.strip(), query_b.strip()
    if not a:
        raise InvalidQueryError("first")
    if not b:
        raise InvalidQueryError("second")
    return a, b


class SearchOrchestrator:
    """Coordinates one two-place lookup. Holds no state between searches."""

    def __init__(self, geocoder: Geocoder, region_hint: Optional[str] = None):
        self.geocoder = geocoder
        self.region_hint = region_hint

    async def search(self, query_a: str, query_b: str) -> SearchOutcome:
        """Geocode both queries concurrently and classify the result.

        When both lookups fail the first query's error is reported,
        whichever finished first.

        Raises:
            InvalidQueryError: Either query is empty after trimming; no
                request is made.
        """
        self._transition(SearchPhase.IDLE, SearchPhase.VALIDATING)
        try:
            a, b = validate_queries(query_a, query_b)
        except InvalidQueryError:
            self._transition(SearchPhase.VALIDATING, SearchPhase.REJECTED_INPUT)
            raise
        self._transition(SearchPhase.VALIDATING, SearchPhase.VALIDATED)

        self._transition(SearchPhase.VALIDATED, SearchPhase.AWAITING_GEOCODES)
        settled = await asyncio.gather(
            self.geocoder.geocode(a, self.region_hint),
            self.geocoder.geocode(b, self.region_hint),
            return_exceptions=True,
        )

        # Query order, not completion order, decides which error is reported
        for result in settled:
            if isinstance(result, GeocodeError):
                self._transition(SearchPhase.AWAITING_GEOCODES, SearchPhase.FAILURE)
                return Failure(kind=result.kind, message=result.message,
                               status_code=result.status_code)
            if isinstance(result, BaseException):
                raise result

        result_a, result_b = settled
        if result_a is None or result_b is None:
            if result_a is None and result_b is None:
                missing = Missing.BOTH
            elif result_a is None:
                missing = Missing.FIRST
            else:
                missing = Missing.SECOND
            self._transition(SearchPhase.AWAITING_GEOCODES, SearchPhase.NOT_FOUND)
            return NotFound(which_missing=missing)

        distance = haversine_km(
            result_a.latitude, result_a.longitude,
            result_b.latitude, result_b.longitude,
        )
        self._transition(SearchPhase.AWAITING_GEOCODES, SearchPhase.SUCCESS)
        return Success(a=result_a, b=result_b, distance_km=distance)

    @staticmethod
    def _transition(source: SearchPhase, target: SearchPhase) -> None:
        logger.debug("search %s -> %s", source.value, target.value)
