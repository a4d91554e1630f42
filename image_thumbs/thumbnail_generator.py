"""
ThumbnailGenerator - Handles image resizing and thumbnail generation.
"""

import asyncio
import io
import logging
from typing import Iterable, List, Optional, Tuple, Union

from PIL import Image, UnidentifiedImageError

from .errors import ImageDecodeError, UnsupportedFormatError
from .geometry import crop_fill_dimensions, crop_rect, fit_dimensions
from .image_details import CENTER, FocalPoint, GeneratedThumbnail
from .image_format import ImageFormat
from .naming import generate_destination_path, generate_thumb_stem
from .paths import parse_path
from .thumb_spec import Mode, ThumbnailSpec


def _encode_jpeg(img: Image.Image, output: io.BytesIO, quality: int) -> None:
    img.save(output, format='JPEG', quality=quality, optimize=True)


def _encode_png(img: Image.Image, output: io.BytesIO, quality: int) -> None:
    # PNG is lossless, quality does not apply
    img.save(output, format='PNG', optimize=True)


class ThumbnailGenerator:
    """
    Generates the configured thumbnails for one image using Pillow.

    The source is decoded once. Thumbnails whose destination already exists
    in storage are skipped unless `force_override` is set.
    """

    ENCODERS = {
        ImageFormat.JPEG: _encode_jpeg,
        ImageFormat.PNG: _encode_png,
    }

    def __init__(
        self,
        specs: Iterable[ThumbnailSpec],
        storage_client,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize thumbnail generator.

        Args:
            specs: Thumbnail specifications, in output order
            storage_client: S3Client or LocalClient used for existence checks
            logger: Optional logger instance
        """
        self.specs: Tuple[ThumbnailSpec, ...] = tuple(specs)
        self.storage = storage_client
        self.logger = logger or logging.getLogger(__name__)

    async def generate(
        self,
        image_data: bytes,
        image_format: Union[ImageFormat, str],
        image_stem: str,
        dest_dir: str,
        force_override: bool = False,
        focal_point: Optional[FocalPoint] = None
    ) -> List[GeneratedThumbnail]:
        """
        Generate thumbnails from image data.

        Args:
            image_data: Original image as bytes
            image_format: Format of the original, e.g. ImageFormat.JPEG or 'png'
            image_stem: Original filename without directory and extension
            dest_dir: Directory the thumbnails will be stored in
            force_override: Regenerate thumbnails that already exist
            focal_point: Crop centre for crop-mode thumbnails

        Returns:
            Generated thumbnails in spec order, without the skipped ones

        Raises:
            UnsupportedFormatError: If the format is not JPEG or PNG
            ImageDecodeError: If the image data cannot be decoded
        """
        image_format = self._coerce_format(image_format)
        focal = FocalPoint(*(focal_point or CENTER)).validate()
        dest_dir = parse_path(dest_dir)
        loop = asyncio.get_running_loop()

        image = await loop.run_in_executor(None, self.decode, image_data, image_format)

        thumbs = []
        for spec in self.specs:
            stem = generate_thumb_stem(image_stem, spec.name, spec.naming_pattern)
            path = generate_destination_path(dest_dir, stem, image_format)

            if not force_override:
                exists = await loop.run_in_executor(None, self.storage.object_exists, path)
                if exists:
                    self.logger.debug(f"Skipping {path}: already exists")
                    continue

            self.logger.debug(f"Generating thumbnail: {path} ({spec.mode.value} {spec.width}x{spec.height})")
            data = await loop.run_in_executor(None, self.render, image, spec, image_format, focal)

            thumbs.append(GeneratedThumbnail(
                spec_name=spec.name,
                stem=stem,
                format=image_format,
                directory=dest_dir,
                data=data,
            ))

        return thumbs

    def decode(self, image_data: bytes, image_format: ImageFormat) -> Image.Image:
        """Decode image bytes, which must be in the given format."""
        try:
            img = Image.open(io.BytesIO(image_data), formats=[image_format.pil_format])
            img.load()
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError, SyntaxError, ValueError) as e:
            self.logger.error(f"Error decoding {image_format.value} image: {e}")
            raise ImageDecodeError(f"Cannot decode {image_format.value} image: {e}") from e
        return img

    def render(
        self,
        img: Image.Image,
        spec: ThumbnailSpec,
        image_format: ImageFormat,
        focal_point: FocalPoint = CENTER
    ) -> bytes:
        """Resize a decoded image for one spec and encode it."""
        if spec.mode is Mode.FIT:
            thumb = self.fit(img, spec.size)
        else:
            thumb = self.crop(img, spec.size, focal_point)
        return self.encode(thumb, image_format, spec.quality)

    @staticmethod
    def fit(img: Image.Image, size: Tuple[int, int]) -> Image.Image:
        """Scale to fit within `size`, keeping aspect ratio, never upscaling."""
        box = fit_dimensions(size, img.size)
        thumb = img.copy()
        thumb.thumbnail(box, Image.Resampling.LANCZOS)
        return thumb

    @staticmethod
    def crop(img: Image.Image, size: Tuple[int, int], focal_point: FocalPoint = CENTER) -> Image.Image:
        """Crop to the aspect ratio of `size` around the focal point, then scale to `size`."""
        rect = crop_rect(img.size, size, focal_point)
        thumb = img.crop(rect.box)
        final_size = crop_fill_dimensions(size, rect.size)
        if thumb.size != final_size:
            thumb = thumb.resize(final_size, Image.Resampling.LANCZOS)
        return thumb

    def encode(self, img: Image.Image, image_format: ImageFormat, quality: int) -> bytes:
        """Encode with the encoder of the given format."""
        encoder = self.ENCODERS.get(image_format)
        if encoder is None:
            raise UnsupportedFormatError(f"No encoder for {image_format}")

        output = io.BytesIO()
        encoder(img, output, quality)
        return output.getvalue()

    @staticmethod
    def _coerce_format(image_format: Union[ImageFormat, str]) -> ImageFormat:
        if isinstance(image_format, ImageFormat):
            return image_format
        if isinstance(image_format, str):
            return ImageFormat.from_extension(image_format)
        raise UnsupportedFormatError(f"Unsupported image format: {image_format!r}")
