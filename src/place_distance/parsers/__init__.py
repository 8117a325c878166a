"""Parsers for converting provider responses to GeoResult."""

from place_distance.parsers.base import ParseError, ResultParser
from place_distance.parsers.nominatim_json import NominatimJSONParser

PARSER_MAP = {
    "nominatim": NominatimJSONParser(),
}

__all__ = ["PARSER_MAP", "ParseError", "ResultParser", "NominatimJSONParser"]
