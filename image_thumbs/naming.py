"""
Destination naming for thumbnails.
"""

import re
from typing import Optional

from .image_format import ImageFormat
from .paths import parse_path

DEFAULT_NAMING_PATTERN = '/{image_stem}_{thumb_name}'

_TOKEN_RE = re.compile(r'\{(image_stem|thumb_name)\}')


def generate_thumb_stem(image_stem: str, thumb_name: str, pattern: Optional[str] = None) -> str:
    """
    Fill in a naming pattern.

    Both tokens are replaced in a single pass, so a stem that itself contains
    '{thumb_name}' is not substituted again.

    Args:
        image_stem: Source filename without extension
        thumb_name: Name of the thumbnail spec
        pattern: Naming pattern, DEFAULT_NAMING_PATTERN if None
    """
    if pattern is None:
        pattern = DEFAULT_NAMING_PATTERN
    values = {'image_stem': image_stem, 'thumb_name': thumb_name}
    return _TOKEN_RE.sub(lambda m: values[m.group(1)], pattern)


def generate_destination_path(base_dir: str, stem: str, image_format: ImageFormat) -> str:
    """Build `base_dir/stem.ext`, dropping one leading slash from the stem."""
    if stem.startswith('/'):
        stem = stem[1:]
    filename = f"{stem}.{image_format.extension}"
    base = parse_path(base_dir)
    return f"{base}/{filename}" if base else filename
