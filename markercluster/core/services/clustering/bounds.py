"""Padding of geographic bounds in pixel space."""

# Standard Library Imports
from typing import Optional

# Internal Imports
from markercluster.core.models.geo.latlng import LatLngBounds
from markercluster.core.services.surface.base import MapSurface


class BoundsAdapter:
    """Pads geographic bounds by a fixed number of pixels on every side.

    Corners are projected to pixels, pushed outwards by the padding and
    projected back, so the geographic size of the margin depends on the
    zoom level and on latitude.

    Attributes:
        surface: The host surface providing the projection
        grid_size: Default padding, in pixels
    """

    def __init__(self, surface: MapSurface, grid_size: int):
        self.surface = surface
        self.grid_size = grid_size

    def get_extended_bounds(
        self, bounds: LatLngBounds, padding: Optional[int] = None
    ) -> LatLngBounds:
        """Return a padded copy of ``bounds``.

        Args:
            bounds: Bounds to pad; left untouched
            padding: Pixels to add on each side (default: ``grid_size``)

        Returns:
            LatLngBounds: The padded bounds; empty if ``bounds`` is empty
        """
        if bounds.is_empty:
            return LatLngBounds()
        pad = self.grid_size if padding is None else padding

        ne_pixel = self.surface.from_lat_lng_to_pixel(bounds.ne).offset(pad, -pad)
        sw_pixel = self.surface.from_lat_lng_to_pixel(bounds.sw).offset(-pad, pad)

        extended = bounds.model_copy()
        extended.extend(self.surface.from_pixel_to_lat_lng(ne_pixel))
        extended.extend(self.surface.from_pixel_to_lat_lng(sw_pixel))
        return extended
