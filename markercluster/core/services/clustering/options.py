"""Configuration for the marker clusterer."""

# Standard Library Imports
import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

# Third Party Imports
from pydantic import BaseModel, Field, ValidationError

# Internal Imports
from markercluster.core.exceptions.services.clustering import OptionsFileError
from markercluster.core.models.spatial.style import IconStyle
from markercluster.utils.constants import (
    DEFAULT_AVERAGE_CENTER,
    DEFAULT_GRID_SIZE,
    DEFAULT_IMAGE_EXTENSION,
    DEFAULT_IMAGE_PATH,
    DEFAULT_MIN_CLUSTER_SIZE,
    DEFAULT_ZOOM_ON_CLICK,
)


class ClustererOptions(BaseModel):
    """Options recognised by ``MarkerClusterer``.

    Attributes:
        grid_size: Grid cell size in pixels
        min_cluster_size: Member count at which markers are aggregated
        max_zoom: Zoom above which clustering is disabled (None: never)
        image_path: Prefix of the built-in icon image assets
        image_extension: Extension of the built-in icon image assets
        zoom_on_click: Fit the viewport to a cluster when it is clicked
        average_center: Keep cluster centers at the mean member position
        styles: Icon tiers; empty means the five built-in tiers
    """

    grid_size: int = Field(default=DEFAULT_GRID_SIZE, gt=0)
    min_cluster_size: int = Field(default=DEFAULT_MIN_CLUSTER_SIZE, ge=1)
    max_zoom: Optional[int] = Field(default=None, ge=0)
    image_path: str = DEFAULT_IMAGE_PATH
    image_extension: str = DEFAULT_IMAGE_EXTENSION
    zoom_on_click: bool = DEFAULT_ZOOM_ON_CLICK
    average_center: bool = DEFAULT_AVERAGE_CENTER
    styles: List[IconStyle] = Field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-serializable dict."""
        return self.model_dump()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ClustererOptions":
        """Create from a dict, ignoring unknown keys."""
        filtered = {k: v for k, v in data.items() if k in cls.model_fields}
        return cls(**filtered)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "ClustererOptions":
        """Load options from a JSON file.

        Args:
            path: Path to a JSON object with option keys

        Returns:
            ClustererOptions: The loaded options

        Raises:
            OptionsFileError: If the file is missing, malformed or invalid
        """
        path = Path(path)
        if not path.exists():
            raise OptionsFileError(str(path), "file does not exist")
        try:
            with open(path) as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise OptionsFileError(str(path), f"invalid JSON ({e})")
        if not isinstance(data, dict):
            raise OptionsFileError(str(path), "expected a JSON object")
        try:
            return cls.from_dict(data)
        except ValidationError as e:
            raise OptionsFileError(str(path), str(e))
