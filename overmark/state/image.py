"""Image state - the source raster and its natural size."""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional

from PIL import Image

from ..types import ImageSize


@dataclass
class ImageState:
    """The raster currently displayed under the annotations."""
    image: Optional[Image.Image] = None
    size: ImageSize = field(default_factory=ImageSize)
    source: str = ""

    @property
    def is_ready(self) -> bool:
        """True once an image with non-zero dimensions is loaded."""
        return self.image is not None and self.size.is_known

    def set_image(self, image: Optional[Image.Image], source: str = "") -> None:
        self.image = image
        self.size = ImageSize(image.width, image.height) if image is not None else ImageSize()
        self.source = source
