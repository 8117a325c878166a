"""HTTP clients for geocoding providers."""
