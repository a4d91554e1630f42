"""
Transient image records passed between download, generation and upload.
"""

from dataclasses import dataclass
from typing import NamedTuple

from .errors import FocalPointError
from .image_format import ImageFormat
from .naming import generate_destination_path


class FocalPoint(NamedTuple):
    """Crop centre as a fraction of image width and height."""
    x: float = 0.5
    y: float = 0.5

    def validate(self) -> 'FocalPoint':
        """Return self, or raise FocalPointError if outside [0, 1] x [0, 1]."""
        if not (0.0 <= self.x <= 1.0 and 0.0 <= self.y <= 1.0):
            raise FocalPointError(f"Focal point must be within [0, 1] x [0, 1], got ({self.x}, {self.y})")
        return self


CENTER = FocalPoint()


@dataclass
class SourceImage:
    """
    A downloaded source image.

    Attributes:
        stem: Filename without directory and extension
        format: Image format, derived from the extension
        directory: Normalized directory the image was read from
        data: Raw image bytes
    """
    stem: str
    format: ImageFormat
    directory: str
    data: bytes


@dataclass
class GeneratedThumbnail:
    """
    An encoded thumbnail waiting for upload.

    Attributes:
        spec_name: Name of the ThumbnailSpec that produced it
        stem: Destination stem (may contain sub-directories)
        format: Image format, same as the source
        directory: Destination directory
        data: Encoded image bytes
    """
    spec_name: str
    stem: str
    format: ImageFormat
    directory: str
    data: bytes

    @property
    def path(self) -> str:
        """Full destination path."""
        return generate_destination_path(self.directory, self.stem, self.format)

    @property
    def size(self) -> int:
        return len(self.data)
