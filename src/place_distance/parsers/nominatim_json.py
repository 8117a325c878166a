"""Parser for Nominatim `/search?format=json` responses."""

from __future__ import annotations

from typing import Any, Optional

from place_distance.models import GeoResult
from place_distance.parsers.base import ParseError, ResultParser


class NominatimJSONParser(ResultParser):
    """Parse a Nominatim result list → GeoResult of its first entry."""

    def parse_first(self, payload: Any) -> Optional[GeoResult]:
        if not isinstance(payload, list):
            raise ParseError([f"expected a JSON list, got {type(payload).__name__}"])
        if not payload:
            return None

        entry = payload[0]
        try:
            result = self._parse_entry(entry)
        except (KeyError, TypeError, ValueError) as exc:
            raise ParseError([f"malformed result entry: {exc!r}"]) from exc

        errors = self.validate(result)
        if errors:
            raise ParseError(errors)
        return result

    @staticmethod
    def _parse_entry(entry: dict) -> GeoResult:
        # Nominatim sends coordinates as decimal strings
        latitude = float(entry["lat"])
        longitude = float(entry["lon"])
        display_name = entry.get("display_name") or _label_from_address(entry.get("address"))

        return GeoResult(
            latitude=latitude,
            longitude=longitude,
            display_name=display_name or f"{latitude:.5f}, {longitude:.5f}",
        )


def _label_from_address(address: dict | None) -> str | None:
    if not address:
        return None
    parts = [
        address.get(key)
        for key in ("city", "town", "village", "state", "country")
        if address.get(key)
    ]
    return ", ".join(parts) if parts else None
