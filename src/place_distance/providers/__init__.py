"""Provider and region registry for geocoding lookups."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from place_distance import __version__

PLACEHOLDER_CONTACT = "your-email@example.com"

CONTACT_EMAIL = os.getenv("PLACE_DISTANCE_CONTACT_EMAIL", PLACEHOLDER_CONTACT)
USER_AGENT = os.getenv("PLACE_DISTANCE_USER_AGENT", f"place-distance/{__version__}")
BASE_URL = os.getenv(
    "PLACE_DISTANCE_BASE_URL",
    "https://nominatim.openstreetmap.org/search",
)
# "none" disables region-scoped lookups entirely
DEFAULT_REGION = os.getenv("PLACE_DISTANCE_REGION", "in")


@dataclass(frozen=True)
class Region:
    """Regional qualifier used by the region-scoped lookup strategy."""

    code: str                   # ISO 3166-1 alpha-2, lowercase
    name: str                   # appended to the query text


REGIONS: dict[str, Region] = {
    "in": Region(code="in", name="India"),
    "us": Region(code="us", name="United States"),
    "gb": Region(code="gb", name="United Kingdom"),
    "ca": Region(code="ca", name="Canada"),
    "au": Region(code="au", name="Australia"),
    "de": Region(code="de", name="Germany"),
    "fr": Region(code="fr", name="France"),
}


def resolve_region(hint: Optional[str]) -> Optional[Region]:
    """Look up a region by code; empty or "none" means no region scoping."""
    if hint is None:
        return None
    code = hint.strip().lower()
    if not code or code == "none":
        return None
    try:
        return REGIONS[code]
    except KeyError:
        raise ValueError(
            f"unknown region {hint!r}, expected one of {sorted(REGIONS)} or 'none'"
        ) from None


@dataclass
class ProviderConfig:
    """Configuration for a single geocoding provider."""

    name: str
    base_url: str
    contact: str                # sent as `email=`, required by usage policy
    user_agent: str
    max_retries: int            # retries after the first attempt
    initial_backoff_seconds: float
    rate_limit_rpm: int
    timeout_seconds: float      # per HTTP attempt
    call_timeout_seconds: float  # wall clock for one geocode() call
    default_region: Optional[str]

    @property
    def uses_placeholder_contact(self) -> bool:
        return not self.contact.strip() or self.contact.strip() == PLACEHOLDER_CONTACT

    @property
    def retry_budget_seconds(self) -> float:
        """Worst case for one strategy: every attempt times out, plus all backoff sleeps."""
        attempts = self.max_retries + 1
        backoff = sum(self.initial_backoff_seconds * 2 ** n for n in range(self.max_retries))
        return attempts * self.timeout_seconds + backoff


PROVIDERS: dict[str, ProviderConfig] = {
    "nominatim": ProviderConfig(
        name="nominatim",
        base_url=BASE_URL,
        contact=CONTACT_EMAIL,
        user_agent=USER_AGENT,
        max_retries=3,
        initial_backoff_seconds=0.7,
        rate_limit_rpm=60,
        timeout_seconds=10.0,
        call_timeout_seconds=60.0,
        default_region=DEFAULT_REGION,
    ),
}
