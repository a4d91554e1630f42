"""
Directory-level pre-filter for sources whose thumbnails already exist.
"""

from typing import Iterable, List, Sequence

from .image_format import ImageFormat
from .paths import path_filename, path_stem
from .thumb_spec import ThumbnailSpec


def expected_thumbnail_names(candidate_path: str, specs: Iterable[ThumbnailSpec]) -> List[str]:
    """
    Filenames `{stem}_{spec.name}.{ext}` a source is expected to have.

    Raises:
        UnsupportedFormatError: If the extension is not JPEG or PNG
    """
    image_format = ImageFormat.from_path(candidate_path)
    stem = path_stem(candidate_path)
    return [f"{stem}_{spec.name}.{image_format.extension}" for spec in specs]


def filter_pending(
    candidate_paths: Iterable[str],
    existing_thumb_paths: Iterable[str],
    specs: Sequence[ThumbnailSpec]
) -> List[str]:
    """
    Keep the candidates that are missing at least one thumbnail.

    Matching is by filename only; directories and naming patterns are
    ignored, so this is a coarse check done before downloading anything.

    Args:
        candidate_paths: Source image paths
        existing_thumb_paths: Paths found in the thumbnail directory
        specs: Thumbnail specifications

    Returns:
        Candidates still needing work, in input order
    """
    existing = {path_filename(p) for p in existing_thumb_paths}

    pending = []
    for candidate in candidate_paths:
        expected = expected_thumbnail_names(candidate, specs)
        if any(name not in existing for name in expected):
            pending.append(candidate)
    return pending
