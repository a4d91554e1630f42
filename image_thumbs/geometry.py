"""
Geometry for fit and crop thumbnails.

All functions are pure and work on (width, height) tuples. None of them
ever returns a size larger than the image it is applied to.
"""

import math
from typing import NamedTuple, Tuple

from .image_details import CENTER, FocalPoint

Size = Tuple[int, int]


class CropBox(NamedTuple):
    """Crop rectangle in pixels."""
    left: int
    top: int
    width: int
    height: int

    @property
    def size(self) -> Size:
        return self.width, self.height

    @property
    def box(self) -> Tuple[int, int, int, int]:
        """(left, upper, right, lower) as expected by Image.crop."""
        return self.left, self.top, self.left + self.width, self.top + self.height


def fit_dimensions(target: Size, original: Size) -> Size:
    """
    Clamp a fit box so it does not exceed the original image.

    The image is afterwards scaled to fit inside the returned box, keeping
    its aspect ratio, so the result may be smaller in one dimension.

    Args:
        target: Requested (width, height)
        original: Source image (width, height)
    """
    target_w, target_h = target
    original_w, original_h = original

    wider = target_w > original_w
    taller = target_h > original_h

    if wider and taller:
        return original_w, original_h
    if wider:
        return original_w, target_h
    if taller:
        return target_w, original_h
    return target_w, target_h


def crop_rect(original: Size, target: Size, focal: FocalPoint = CENTER) -> CropBox:
    """
    Largest rectangle with the target's aspect ratio, centred on a focal point.

    The rectangle is shifted as needed to stay inside the image. Offsets are
    clamped with the unrounded crop size, then offsets and size are rounded
    and the size shrunk so the box never runs past the image edge.

    Args:
        original: Source image (width, height)
        target: Thumbnail (width, height); only its aspect ratio matters
        focal: Centre of interest as fractions of width and height
    """
    original_w, original_h = original
    target_w, target_h = target
    fx, fy = FocalPoint(*focal).validate()

    # Compare aspect ratios without floating point error.
    original_cross = original_w * target_h
    target_cross = target_w * original_h

    if original_cross > target_cross:
        crop_w = original_h * target_w / target_h
        crop_h = float(original_h)
    elif original_cross < target_cross:
        crop_w = float(original_w)
        crop_h = original_w * target_h / target_w
    else:
        return CropBox(0, 0, original_w, original_h)

    left = _clamp(fx * original_w - crop_w / 2, 0, original_w - max(math.floor(crop_w), 1))
    top = _clamp(fy * original_h - crop_h / 2, 0, original_h - max(math.floor(crop_h), 1))

    left = round(left)
    top = round(top)
    width = min(max(round(crop_w), 1), original_w - left)
    height = min(max(round(crop_h), 1), original_h - top)

    return CropBox(left, top, width, height)


def crop_fill_dimensions(target: Size, cropped: Size) -> Size:
    """
    Final size of a crop thumbnail.

    `cropped` is the size of the already cropped sub-image, which has the
    target's aspect ratio. The target is returned unless it would need
    upscaling in either dimension, in which case the sub-image is kept as is.
    """
    target_w, target_h = target
    cropped_w, cropped_h = cropped
    if target_w > cropped_w or target_h > cropped_h:
        return cropped_w, cropped_h
    return target_w, target_h


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(value, high))
