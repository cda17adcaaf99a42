"""Geographic and pixel coordinate models."""

# Standard Library Imports
from typing import Iterable, Optional

# Third Party Imports
from pydantic import BaseModel, ConfigDict, Field, field_validator

# Internal Imports
from markercluster.core.exceptions.models.geo import EmptyBoundsError


def wrap_longitude(lng: float) -> float:
    """Wrap a longitude into [-180, 180], keeping both ends as given.

    Args:
        lng: Longitude in degrees

    Returns:
        float: The equivalent longitude inside [-180, 180]
    """
    if -180.0 <= lng <= 180.0:
        return lng
    wrapped = ((lng + 180.0) % 360.0) - 180.0
    if wrapped == -180.0 and lng > 0:
        return 180.0
    return wrapped


class LatLng(BaseModel):
    """A geographic point in degrees.

    Attributes:
        lat: Latitude, validated to [-90, 90]
        lng: Longitude, wrapped into [-180, 180]
    """

    model_config = ConfigDict(frozen=True)

    lat: float = Field(..., ge=-90.0, le=90.0, description="Latitude in degrees.")
    lng: float = Field(..., description="Longitude in degrees.")

    def __init__(self, lat: float, lng: float, **data) -> None:
        super().__init__(lat=lat, lng=lng, **data)

    @field_validator("lng")
    @classmethod
    def _wrap_lng(cls, value: float) -> float:
        return wrap_longitude(value)

    def __str__(self) -> str:
        return f"({self.lat:.6f}, {self.lng:.6f})"


class Point(BaseModel):
    """A position in the host surface's pixel space (y grows downwards)."""

    x: float
    y: float

    def __init__(self, x: float, y: float, **data) -> None:
        super().__init__(x=x, y=y, **data)

    def offset(self, dx: float, dy: float) -> "Point":
        """Return a new point shifted by (dx, dy)."""
        return Point(self.x + dx, self.y + dy)


class LatLngBounds(BaseModel):
    """A geographic rectangle given by its south-west and north-east corners.

    Bounds may be empty (no corners). Longitude ranges may cross the
    antimeridian, in which case ``sw.lng > ne.lng``.

    Attributes:
        sw: South-west corner
        ne: North-east corner
    """

    sw: Optional[LatLng] = Field(default=None, description="South-west corner.")
    ne: Optional[LatLng] = Field(default=None, description="North-east corner.")

    @classmethod
    def from_points(cls, points: Iterable[LatLng]) -> "LatLngBounds":
        """Create the smallest bounds containing every point.

        Args:
            points: Points to include

        Returns:
            LatLngBounds: The bounds, empty if ``points`` is empty
        """
        bounds = cls()
        for point in points:
            bounds.extend(point)
        return bounds

    @property
    def is_empty(self) -> bool:
        return self.sw is None or self.ne is None

    @property
    def crosses_antimeridian(self) -> bool:
        return not self.is_empty and self.sw.lng > self.ne.lng

    def _contains_lng(self, lng: float) -> bool:
        if self.crosses_antimeridian:
            return lng >= self.sw.lng or lng <= self.ne.lng
        return self.sw.lng <= lng <= self.ne.lng

    def contains(self, point: LatLng) -> bool:
        """Check whether a point lies inside the bounds (edges included).

        Args:
            point: The point to test

        Returns:
            bool: False for empty bounds
        """
        if self.is_empty:
            return False
        if not self.sw.lat <= point.lat <= self.ne.lat:
            return False
        return self._contains_lng(point.lng)

    def extend(self, point: LatLng) -> "LatLngBounds":
        """Grow the bounds in place so that they contain ``point``.

        Longitude grows in whichever direction adds the smaller span.

        Args:
            point: The point to include

        Returns:
            LatLngBounds: ``self``, for chaining
        """
        if self.is_empty:
            self.sw = point
            self.ne = point
            return self

        south = min(self.sw.lat, point.lat)
        north = max(self.ne.lat, point.lat)
        west, east = self.sw.lng, self.ne.lng
        if not self._contains_lng(point.lng):
            grow_west = (west - point.lng) % 360.0
            grow_east = (point.lng - east) % 360.0
            if grow_west < grow_east:
                west = point.lng
            else:
                east = point.lng

        self.sw = LatLng(south, west)
        self.ne = LatLng(north, east)
        return self

    def get_center(self) -> LatLng:
        """Get the center of the bounds.

        Returns:
            LatLng: The midpoint of the latitude and longitude ranges

        Raises:
            EmptyBoundsError: If the bounds are empty
        """
        if self.is_empty:
            raise EmptyBoundsError("center")

        lat = (self.sw.lat + self.ne.lat) / 2
        if self.crosses_antimeridian:
            lng = wrap_longitude((self.sw.lng + self.ne.lng + 360.0) / 2)
        else:
            lng = (self.sw.lng + self.ne.lng) / 2
        return LatLng(lat, lng)

    def __str__(self) -> str:
        if self.is_empty:
            return "LatLngBounds(empty)"
        return f"LatLngBounds({self.sw}, {self.ne})"
