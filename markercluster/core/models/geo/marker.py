"""Marker model."""

# Standard Library Imports
from typing import Any, Optional
from uuid import UUID, uuid4

# Third Party Imports
from pydantic import BaseModel, ConfigDict, Field

# Internal Imports
from markercluster.core.models.geo.latlng import LatLng


class Marker(BaseModel):
    """A single point marker owned by the application, not by the clusterer.

    The clusterer only reads ``position`` and ``draggable`` and toggles
    ``map`` to show or hide the marker on the host surface. Assignment to
    clusters is tracked by the clusterer itself, keyed by marker identity.

    Attributes:
        uid: The unique identifier for the marker
        position: Geographic position of the marker
        title: Optional label
        draggable: Whether the host lets the user drag the marker
        map: The surface the marker is currently shown on, or None
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    uid: UUID = Field(
        default_factory=uuid4, description="The unique identifier for the marker."
    )
    position: LatLng = Field(..., description="Geographic position of the marker.")
    title: Optional[str] = Field(default=None, description="Optional label.")
    draggable: bool = Field(
        default=False, description="Whether the host lets the user drag the marker."
    )
    map: Optional[Any] = Field(
        default=None,
        exclude=True,
        repr=False,
        description="The surface the marker is currently shown on.",
    )

    @classmethod
    def at(cls, lat: float, lng: float, **kwargs: Any) -> "Marker":
        """Create a marker at the given coordinates."""
        return cls(position=LatLng(lat, lng), **kwargs)

    @property
    def on_map(self) -> bool:
        return self.map is not None

    def set_map(self, surface: Optional[Any]) -> None:
        """Show the marker on ``surface``, or hide it when None."""
        self.map = surface

    def set_position(self, position: LatLng) -> None:
        self.position = position

    def __str__(self) -> str:
        return self.title or f"Marker-{self.uid}"
