"""
Configurable thumbnail generation for images in object storage.

A YAML file lists the thumbnails to create (name, size, quality, fit or
crop mode). For each source image the thumbnails that do not yet exist in
the destination directory are rendered in the source's format and uploaded.

Supports both S3 and local filesystem storage.
"""

__version__ = "0.1.1"

from .errors import (
    ThumbsError,
    StorageError,
    PathError,
    ConfigError,
    ImageDecodeError,
    UnsupportedFormatError,
    Utf8Error,
    FocalPointError,
)
from .image_format import ImageFormat
from .thumb_spec import Mode, ThumbnailSpec
from .image_details import FocalPoint, SourceImage, GeneratedThumbnail
from .geometry import CropBox, fit_dimensions, crop_rect, crop_fill_dimensions
from .naming import generate_thumb_stem, generate_destination_path
from .thumb_filter import filter_pending
from .thumbs_config import load_specs, specs_from_records
from .s3_config import S3Config
from .s3_client import S3Client
from .local_client import LocalConfig, LocalClient
from .thumbnail_generator import ThumbnailGenerator
from .generation_stats import GenerationStats
from .generator import Generator

__all__ = [
    "ThumbsError",
    "StorageError",
    "PathError",
    "ConfigError",
    "ImageDecodeError",
    "UnsupportedFormatError",
    "Utf8Error",
    "FocalPointError",
    "ImageFormat",
    "Mode",
    "ThumbnailSpec",
    "FocalPoint",
    "SourceImage",
    "GeneratedThumbnail",
    "CropBox",
    "fit_dimensions",
    "crop_rect",
    "crop_fill_dimensions",
    "generate_thumb_stem",
    "generate_destination_path",
    "filter_pending",
    "load_specs",
    "specs_from_records",
    "S3Config",
    "S3Client",
    "LocalConfig",
    "LocalClient",
    "ThumbnailGenerator",
    "GenerationStats",
    "Generator",
]
