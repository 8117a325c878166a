"""User-facing text for search outcomes."""

from __future__ import annotations

from place_distance.geo import format_distance
from place_distance.models import ErrorKind, Failure, Missing, NotFound, SearchOutcome, Success

MISSING_INPUT_MESSAGE = "Please enter both places."
GENERIC_ERROR_MESSAGE = "An error occurred while finding places. Try again later."

NOT_FOUND_MESSAGES = {
    Missing.BOTH: "Neither place was found. Try different keywords.",
    Missing.FIRST: "First place not found.",
    Missing.SECOND: "Second place not found.",
}

FAILURE_MESSAGES = {
    ErrorKind.RATE_LIMITED: "The geocoding service is busy (rate limited). Wait a moment and try again.",
    ErrorKind.BLOCKED: (
        "The geocoding service refused the request (HTTP 403). "
        "Check that a valid contact email is configured."
    ),
    ErrorKind.NETWORK_ERROR: (
        "Could not reach the geocoding service. Check your connection and try again."
    ),
}


def describe_outcome(outcome: SearchOutcome, unit: str = "km") -> str:
    if isinstance(outcome, Success):
        return format_distance(outcome.distance_km, unit)
    if isinstance(outcome, NotFound):
        return NOT_FOUND_MESSAGES[outcome.which_missing]
    if isinstance(outcome, Failure):
        return describe_failure(outcome)
    raise TypeError(f"not a search outcome: {outcome!r}")


def describe_failure(failure: Failure) -> str:
    if failure.kind in FAILURE_MESSAGES:
        return FAILURE_MESSAGES[failure.kind]
    if failure.kind is ErrorKind.HTTP_ERROR and failure.status_code is not None:
        return f"The geocoding service returned an error (HTTP {failure.status_code}). Try again later."
    return GENERIC_ERROR_MESSAGE
