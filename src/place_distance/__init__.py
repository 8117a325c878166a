"""Straight-line distance between two places, geocoded via OpenStreetMap Nominatim."""

__version__ = "0.1.0"
