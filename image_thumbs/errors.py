"""
Exceptions raised by image_thumbs.

Storage and codec failures are re-raised as one of these types with
``raise ... from e`` so callers can handle failures by kind.
"""


class ThumbsError(Exception):
    """Base class for all image_thumbs failures."""


class StorageError(ThumbsError):
    """The storage backend failed (network, permissions, missing object)."""


class PathError(ThumbsError):
    """A storage path is malformed."""


class ConfigError(ThumbsError):
    """The thumbnail configuration could not be loaded or is invalid."""


class ImageDecodeError(ThumbsError):
    """Image bytes are corrupt, truncated or not in the declared format."""


class UnsupportedFormatError(ThumbsError):
    """The image format is not JPEG or PNG, or the extension is unknown."""


class Utf8Error(ThumbsError):
    """A path segment is not valid UTF-8."""


class FocalPointError(ThumbsError, ValueError):
    """A focal point lies outside [0, 1] x [0, 1]."""
