# markercluster/core/services/surface/__init__.py
"""Map surface services package."""

from markercluster.core.services.surface.base import (
    DeferredQueue,
    EventBus,
    MapSurface,
    Overlay,
    Subscription,
)
from markercluster.core.services.surface.mercator import MercatorMap, make_map

__all__ = [
    "DeferredQueue",
    "EventBus",
    "MapSurface",
    "MercatorMap",
    "Overlay",
    "Subscription",
    "make_map",
]
