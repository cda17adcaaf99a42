"""Icon style and cluster summary models."""

# Standard Library Imports
from typing import List, Optional, Sequence, Tuple

# Third Party Imports
from pydantic import BaseModel, Field

# Internal Imports
from markercluster.utils.constants import (
    DEFAULT_ICON_SIZES,
    DEFAULT_IMAGE_EXTENSION,
    DEFAULT_IMAGE_PATH,
    DEFAULT_TEXT_COLOR,
    DEFAULT_TEXT_SIZE,
)


class IconStyle(BaseModel):
    """Visual parameters of one aggregate icon tier.

    Attributes:
        url: Image asset for the icon background
        height: Icon height in pixels
        width: Icon width in pixels
        anchor: Label offset (y, x) inside the icon, in pixels
        text_color: Label color
        text_size: Label font size in pixels
        background_position: Sprite offset of the background image
        icon_anchor: Pixel offset (x, y) of the icon's hot spot
    """

    url: Optional[str] = Field(default=None, description="Image asset URL.")
    height: int = Field(default=0, ge=0, description="Icon height in pixels.")
    width: int = Field(default=0, ge=0, description="Icon width in pixels.")
    anchor: Optional[Tuple[int, int]] = Field(
        default=None, description="Label offset (y, x) inside the icon."
    )
    text_color: str = Field(default=DEFAULT_TEXT_COLOR, description="Label color.")
    text_size: int = Field(default=DEFAULT_TEXT_SIZE, description="Label font size.")
    background_position: str = Field(
        default="0 0", description="Sprite offset of the background image."
    )
    icon_anchor: Optional[Tuple[int, int]] = Field(
        default=None, description="Pixel offset (x, y) of the icon's hot spot."
    )


class ClusterSummary(BaseModel):
    """What an aggregate icon displays: a label and a style bucket.

    Attributes:
        text: Label shown on the icon
        index: 1-based style bucket; 0 means "below the first tier"
    """

    text: str
    index: int = Field(..., ge=0)


def build_default_styles(
    image_path: str = DEFAULT_IMAGE_PATH,
    image_extension: str = DEFAULT_IMAGE_EXTENSION,
    sizes: Sequence[int] = DEFAULT_ICON_SIZES,
) -> List[IconStyle]:
    """Build the built-in icon tiers ``{image_path}1.{ext}`` .. ``{image_path}N.{ext}``.

    Args:
        image_path: Prefix of the icon image assets
        image_extension: File extension of the icon image assets
        sizes: Square icon size of each tier, in pixels

    Returns:
        List[IconStyle]: One style per size, smallest first
    """
    return [
        IconStyle(
            url=f"{image_path}{idx + 1}.{image_extension}", height=size, width=size
        )
        for idx, size in enumerate(sizes)
    ]
