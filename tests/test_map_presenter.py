"""Tests for the pydeck map presenter."""

from __future__ import annotations

import pytest

from place_distance.map_presenter import (
    DEFAULT_LATITUDE,
    DEFAULT_LONGITUDE,
    DEFAULT_ZOOM,
    DeckMapPresenter,
    MapPoint,
    MapSession,
    fit_view,
)
from conftest import DELHI_RESULT, MUMBAI_RESULT

DELHI_POINT = MapPoint.from_result("Delhi", DELHI_RESULT)
MUMBAI_POINT = MapPoint.from_result("Mumbai", MUMBAI_RESULT)


class TestMapSession:
    def test_starts_empty_at_default_view(self):
        session = MapSession()
        assert session.is_empty
        assert session.view_state.latitude == DEFAULT_LATITUDE
        assert session.view_state.longitude == DEFAULT_LONGITUDE
        assert session.view_state.zoom == DEFAULT_ZOOM

    def test_sessions_are_independent(self):
        presenter = DeckMapPresenter()
        first, second = MapSession(), MapSession()
        presenter.plot(first, DELHI_POINT, MUMBAI_POINT)
        assert not first.is_empty
        assert second.is_empty


class TestPresenter:
    def test_plot(self):
        session = MapSession()
        DeckMapPresenter().plot(session, DELHI_POINT, MUMBAI_POINT)

        assert session.markers == [DELHI_POINT, MUMBAI_POINT]
        assert session.line == (DELHI_POINT, MUMBAI_POINT)
        # View centred between the two cities
        assert 19.0 < session.view_state.latitude < 28.7
        assert 72.8 < session.view_state.longitude < 77.3

    def test_clear_resets_view(self):
        session = MapSession()
        presenter = DeckMapPresenter()
        presenter.plot(session, DELHI_POINT, MUMBAI_POINT)
        presenter.clear(session)

        assert session.is_empty
        assert session.view_state.zoom == DEFAULT_ZOOM

    def test_deck_layers(self):
        session = MapSession()
        presenter = DeckMapPresenter()
        assert presenter.build_deck(session).layers == []

        presenter.plot(session, DELHI_POINT, MUMBAI_POINT)
        deck = presenter.build_deck(session)
        assert [layer.type for layer in deck.layers] == ["ScatterplotLayer", "LineLayer"]

    def test_save_html(self, tmp_path):
        session = MapSession()
        presenter = DeckMapPresenter()
        presenter.plot(session, DELHI_POINT, MUMBAI_POINT)
        path = tmp_path / "map.html"
        presenter.save(session, str(path))
        assert path.exists()
        assert "Mumbai" in path.read_text(encoding="utf-8")


class TestFitView:
    def test_coincident_points(self):
        view = fit_view([DELHI_POINT, DELHI_POINT])
        assert view.latitude == pytest.approx(DELHI_POINT.latitude)
        assert view.longitude == pytest.approx(DELHI_POINT.longitude)

    def test_farther_points_zoom_out(self):
        near = fit_view([DELHI_POINT, MapPoint(28.7, 77.3, "Noida")])
        far = fit_view([DELHI_POINT, MUMBAI_POINT])
        assert far.zoom < near.zoom
