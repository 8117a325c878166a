"""Abstract base parser with validation logic."""

from __future__ import annotations

import abc
from typing import Any, Optional

from place_distance.models import GeoResult


class ParseError(Exception):
    """Raised when a provider payload cannot be turned into a GeoResult."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__(f"Unusable geocoder response: {'; '.join(errors)}")


class ResultParser(abc.ABC):
    """Abstract parser that converts a decoded provider response → GeoResult."""

    @abc.abstractmethod
    def parse_first(self, payload: Any) -> Optional[GeoResult]:
        """Return the first (highest-confidence) match, or None when there is none.

        Args:
            payload: The decoded JSON body of the provider response.

        Raises:
            ParseError: The payload is not a result list, or its first entry
                is malformed.
        """

    @staticmethod
    def validate(result: GeoResult) -> list[str]:
        """Validate a GeoResult. Returns list of error messages (empty = valid)."""
        errors: list[str] = []

        if not -90 <= result.latitude <= 90:
            errors.append(f"latitude {result.latitude} out of range [-90, 90]")

        if not -180 <= result.longitude <= 180:
            errors.append(f"longitude {result.longitude} out of range [-180, 180]")

        return errors
