"""Interactive map of a search result, rendered with pydeck."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

import pydeck as pdk
from pydeck.data_utils import compute_view

from place_distance.models import GeoResult

logger = logging.getLogger(__name__)

# Default view: centre of India, as the calculator opens
DEFAULT_LATITUDE = 20.5937
DEFAULT_LONGITUDE = 78.9629
DEFAULT_ZOOM = 5
BOUNDS_PADDING = 0.25

MARKER_COLOR = [230, 57, 70, 220]
LINE_COLOR = [43, 121, 255, 217]
LINE_WIDTH = 4


@dataclass(frozen=True)
class MapPoint:
    """A marker: position plus the query label and the geocoder's description."""

    latitude: float
    longitude: float
    label: str
    detail: str = ""

    @classmethod
    def from_result(cls, label: str, result: GeoResult) -> MapPoint:
        return cls(result.latitude, result.longitude, label, result.display_name)


def default_view() -> pdk.ViewState:
    return pdk.ViewState(
        latitude=DEFAULT_LATITUDE,
        longitude=DEFAULT_LONGITUDE,
        zoom=DEFAULT_ZOOM,
        pitch=0,
    )


@dataclass
class MapSession:
    """Everything currently drawn on one map. Owned by the UI controller."""

    markers: list[MapPoint] = field(default_factory=list)
    line: Optional[tuple[MapPoint, MapPoint]] = None
    view_state: pdk.ViewState = field(default_factory=default_view)

    @property
    def is_empty(self) -> bool:
        return not self.markers and self.line is None


def fit_view(points: list[MapPoint], padding: float = BOUNDS_PADDING) -> pdk.ViewState:
    """View state covering all points, with the bounding box padded on every side."""
    lats = [p.latitude for p in points]
    lons = [p.longitude for p in points]
    pad_lat = (max(lats) - min(lats)) * padding
    pad_lon = (max(lons) - min(lons)) * padding

    corners = [
        [max(min(lons) - pad_lon, -180.0), max(min(lats) - pad_lat, -90.0)],
        [min(max(lons) + pad_lon, 180.0), min(max(lats) + pad_lat, 90.0)],
    ]
    view = compute_view(corners)
    view.pitch = 0
    return view


class DeckMapPresenter:
    """Draws two markers and the straight line between them."""

    def __init__(self, map_style: str = "light"):
        self.map_style = map_style

    def plot(self, session: MapSession, point_a: MapPoint, point_b: MapPoint) -> None:
        session.markers = [point_a, point_b]
        session.line = (point_a, point_b)
        session.view_state = fit_view([point_a, point_b])
        logger.debug(
            "Plotted %s -> %s, view centre (%.4f, %.4f) zoom %s",
            point_a.label, point_b.label,
            session.view_state.latitude, session.view_state.longitude,
            session.view_state.zoom,
        )

    def clear(self, session: MapSession) -> None:
        session.markers = []
        session.line = None
        session.view_state = default_view()

    def build_deck(self, session: MapSession) -> pdk.Deck:
        layers = []
        if session.markers:
            layers.append(pdk.Layer(
                "ScatterplotLayer",
                id="markers",
                data=[
                    {
                        "position": [p.longitude, p.latitude],
                        "label": p.label,
                        "detail": p.detail,
                    }
                    for p in session.markers
                ],
                get_position="position",
                get_fill_color=MARKER_COLOR,
                get_radius=2000,
                radius_min_pixels=6,
                pickable=True,
                auto_highlight=True,
            ))
        if session.line is not None:
            start, end = session.line
            layers.append(pdk.Layer(
                "LineLayer",
                id="connection",
                data=[{
                    "source": [start.longitude, start.latitude],
                    "target": [end.longitude, end.latitude],
                    "label": f"{start.label} → {end.label}",
                    "detail": "straight line",
                }],
                get_source_position="source",
                get_target_position="target",
                get_color=LINE_COLOR,
                get_width=LINE_WIDTH,
            ))

        return pdk.Deck(
            layers=layers,
            initial_view_state=session.view_state,
            tooltip={"text": "{label}\n{detail}"},
            map_provider="carto",
            map_style=self.map_style,
        )

    def save(self, session: MapSession, path: str) -> str:
        """Write the map to a standalone HTML file and return its path."""
        deck = self.build_deck(session)
        deck.to_html(path, open_browser=False, notebook_display=False)
        logger.info("Map written to %s", path)
        return path
