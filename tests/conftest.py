# tests/conftest.py
"""Shared fixtures for the test suite."""

import matplotlib

matplotlib.use("Agg")

import pytest

from markercluster.core.models.geo import Marker
from markercluster.core.services.clustering import ClustererOptions, MarkerClusterer
from markercluster.core.services.surface import MercatorMap, make_map


@pytest.fixture
def surface() -> MercatorMap:
    """A loaded 1024x768 map centred on (0, 0) at zoom 10."""
    return make_map(0.0, 0.0, zoom=10)


@pytest.fixture
def world_surface() -> MercatorMap:
    """A map zoomed out far enough to show every longitude."""
    return make_map(0.0, 0.0, zoom=1)


@pytest.fixture
def close_markers():
    """Three markers a few metres apart, well inside one grid cell at zoom 10."""
    return [
        Marker.at(0.0, 0.0, title="a"),
        Marker.at(0.0, 0.0001, title="b"),
        Marker.at(0.0, 0.0002, title="c"),
    ]


@pytest.fixture
def make_clusterer():
    """Factory building clusterers that are closed after the test."""
    created = []

    def _make(surface, markers=None, **options):
        clusterer = MarkerClusterer(
            surface, markers, options=ClustererOptions(**options)
        )
        created.append(clusterer)
        return clusterer

    yield _make
    for clusterer in created:
        clusterer.close()
