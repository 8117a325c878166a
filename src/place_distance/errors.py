"""Exception types raised by the geocoding pipeline."""

from __future__ import annotations

from typing import Optional

from place_distance.models import ErrorKind


class InvalidQueryError(ValueError):
    """Raised when a place query is empty after trimming."""

    def __init__(self, position: str):
        self.position = position
        super().__init__(f"{position} place is empty")


class GeocodeError(Exception):
    """Unrecoverable geocoding failure, classified by `kind`."""

    def __init__(self, kind: ErrorKind, message: str, status_code: Optional[int] = None):
        self.kind = kind
        self.status_code = status_code
        super().__init__(message)

    @property
    def message(self) -> str:
        return str(self)


class TransportError(Exception):
    """Base class for errors raised by a Transport."""


class TransportHTTPError(TransportError):
    """Server answered with a non-success HTTP status."""

    def __init__(self, status_code: int, message: str = ""):
        self.status_code = status_code
        super().__init__(message or f"HTTP {status_code}")


class TransportNetworkError(TransportError):
    """The request never produced an HTTP response (DNS, connect, timeout...)."""


class TransportDecodeError(TransportError):
    """The response body was not valid JSON."""
