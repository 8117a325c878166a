"""Data models for geocoded places and search outcomes."""

from __future__ import annotations

import json
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Optional, Union


class ErrorKind(str, Enum):
    """Classified geocoding failures."""

    RATE_LIMITED = "rate_limited"      # HTTP 429, retries exhausted
    BLOCKED = "blocked"                # HTTP 403
    NETWORK_ERROR = "network_error"    # connect/DNS/timeout, retries exhausted
    HTTP_ERROR = "http_error"          # any other non-2xx status
    INVALID_RESPONSE = "invalid_response"


class Missing(str, Enum):
    """Which of the two queries produced no match."""

    FIRST = "first"
    SECOND = "second"
    BOTH = "both"


@dataclass(frozen=True)
class GeoResult:
    """First (best) match returned by the geocoder for one query."""

    latitude: float             # WGS84, [-90, 90]
    longitude: float            # WGS84, [-180, 180]
    display_name: str

    def to_json(self) -> str:
        return json.dumps(asdict(self))

    @classmethod
    def from_json(cls, raw: str) -> GeoResult:
        return cls(**json.loads(raw))


@dataclass(frozen=True)
class Success:
    """Both places resolved; distance computed from exactly these results."""

    a: GeoResult
    b: GeoResult
    distance_km: float

    def to_dict(self) -> dict:
        return {"outcome": "success", **asdict(self)}

    def to_json(self) -> str:
        return json.dumps(self.to_dict())


@dataclass(frozen=True)
class NotFound:
    """The service was reached but one or both queries had no match."""

    which_missing: Missing

    def to_dict(self) -> dict:
        return {"outcome": "not_found", "which_missing": self.which_missing.value}

    def to_json(self) -> str:
        return json.dumps(self.to_dict())


@dataclass(frozen=True)
class Failure:
    """A geocoding lookup failed; carries enough detail for a specific message."""

    kind: ErrorKind
    message: str
    status_code: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            "outcome": "failure",
            "kind": self.kind.value,
            "message": self.message,
            "status_code": self.status_code,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict())


SearchOutcome = Union[Success, NotFound, Failure]
