"""Tests for provider response parsing and result models."""

from __future__ import annotations

import json

import pytest

from conftest import DELHI, MUMBAI, nominatim_entry
from place_distance.models import ErrorKind, Failure, GeoResult, Missing, NotFound, Success
from place_distance.parsers import PARSER_MAP, ParseError, ResultParser
from place_distance.parsers.nominatim_json import NominatimJSONParser


class TestNominatimParser:
    def test_first_entry_wins(self):
        result = NominatimJSONParser().parse_first([DELHI, MUMBAI])
        assert result == GeoResult(28.6139, 77.2090, "New Delhi, Delhi, India")

    def test_empty_list_is_no_match(self):
        assert NominatimJSONParser().parse_first([]) is None

    def test_not_a_list(self):
        with pytest.raises(ParseError):
            NominatimJSONParser().parse_first({"error": "Unable to geocode"})

    def test_missing_coordinates(self):
        with pytest.raises(ParseError):
            NominatimJSONParser().parse_first([{"display_name": "Somewhere"}])

    def test_non_numeric_coordinates(self):
        with pytest.raises(ParseError):
            NominatimJSONParser().parse_first([{"lat": "north", "lon": "1", "display_name": "x"}])

    def test_out_of_range(self):
        with pytest.raises(ParseError) as excinfo:
            NominatimJSONParser().parse_first([nominatim_entry(95.0, 10.0, "Bad")])
        assert any("latitude" in e for e in excinfo.value.errors)

    def test_label_from_address_when_display_name_missing(self):
        entry = {"lat": "18.52", "lon": "73.85", "address": {"city": "Pune", "country": "India"}}
        assert NominatimJSONParser().parse_first([entry]).display_name == "Pune, India"

    def test_registered(self):
        assert isinstance(PARSER_MAP["nominatim"], NominatimJSONParser)


class TestValidation:
    def test_valid(self):
        assert ResultParser.validate(GeoResult(0.0, 0.0, "Null Island")) == []

    def test_invalid_longitude(self):
        errors = ResultParser.validate(GeoResult(0.0, 200.0, "x"))
        assert any("longitude" in e for e in errors)


class TestOutcomeModels:
    def test_geo_result_json_roundtrip(self):
        result = GeoResult(28.6139, 77.2090, "New Delhi")
        assert GeoResult.from_json(result.to_json()) == result

    def test_geo_result_is_immutable(self):
        result = GeoResult(28.6139, 77.2090, "New Delhi")
        with pytest.raises(AttributeError):
            result.latitude = 0.0

    def test_success_json(self):
        outcome = Success(GeoResult(1.0, 2.0, "a"), GeoResult(3.0, 4.0, "b"), 314.0)
        data = json.loads(outcome.to_json())
        assert data["outcome"] == "success"
        assert data["a"]["display_name"] == "a"
        assert data["distance_km"] == 314.0

    def test_not_found_json(self):
        assert json.loads(NotFound(Missing.BOTH).to_json()) == {
            "outcome": "not_found", "which_missing": "both",
        }

    def test_failure_json(self):
        data = json.loads(Failure(ErrorKind.HTTP_ERROR, "boom", 500).to_json())
        assert data == {
            "outcome": "failure", "kind": "http_error", "message": "boom", "status_code": 500,
        }
