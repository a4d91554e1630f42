"""
ImageFormat - The image formats thumbnails can be made from.
"""

from enum import Enum

from .errors import UnsupportedFormatError
from .paths import path_extension


class ImageFormat(Enum):
    """
    Supported image formats.

    Thumbnails are always written in the format of their source image.
    """

    JPEG = 'JPEG'
    PNG = 'PNG'

    @property
    def extension(self) -> str:
        """Extension used for files written in this format."""
        return EXTENSIONS[self][0]

    @property
    def content_type(self) -> str:
        """MIME type for uploads."""
        return CONTENT_TYPES[self]

    @property
    def pil_format(self) -> str:
        """Format name understood by Pillow."""
        return self.value

    @classmethod
    def from_extension(cls, extension: str) -> 'ImageFormat':
        """
        Look up a format by file extension.

        Args:
            extension: Extension with or without leading dot, any case

        Raises:
            UnsupportedFormatError: If the extension is not JPEG or PNG
        """
        ext = extension.lower().lstrip('.')
        for image_format, extensions in EXTENSIONS.items():
            if ext in extensions:
                return image_format
        raise UnsupportedFormatError(f"Unsupported image extension: {extension!r}")

    @classmethod
    def from_path(cls, path: str) -> 'ImageFormat':
        """Look up a format from the extension of a path."""
        ext = path_extension(path)
        if not ext:
            raise UnsupportedFormatError(f"No file extension: {path!r}")
        return cls.from_extension(ext)


EXTENSIONS = {
    ImageFormat.JPEG: ('jpg', 'jpeg'),
    ImageFormat.PNG: ('png',),
}

CONTENT_TYPES = {
    ImageFormat.JPEG: 'image/jpeg',
    ImageFormat.PNG: 'image/png',
}
