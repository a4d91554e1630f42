"""
Generator - Downloads images, generates their thumbnails and uploads them.
"""

import asyncio
import logging
from typing import List, Optional, Union

from .errors import ThumbsError
from .generation_stats import GenerationStats
from .image_details import FocalPoint, GeneratedThumbnail, SourceImage
from .image_format import ImageFormat
from .paths import parse_path, path_parent, path_stem
from .thumb_filter import filter_pending
from .thumbnail_generator import ThumbnailGenerator


class Generator:
    """
    Drives download -> generate -> upload for single files and directories.

    Storage calls are blocking and run in the default executor, so the
    public methods can be awaited from an event loop without stalling it.
    A failure stops the run; thumbnails uploaded before it are kept.
    """

    def __init__(
        self,
        storage_client,
        thumbnail_generator: ThumbnailGenerator,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize generator.

        Args:
            storage_client: S3Client or LocalClient instance
            thumbnail_generator: Thumbnail generator instance
            logger: Optional logger instance
        """
        self.storage = storage_client
        self.thumb_gen = thumbnail_generator
        self.logger = logger or logging.getLogger(__name__)
        self.stats = GenerationStats()
        self._stop_requested = False

    def stop(self) -> None:
        """Request the generator to stop after the current image."""
        self._stop_requested = True

    async def _run_in_executor(self, func, *args):
        """Run a blocking storage call in the thread pool."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, func, *args)

    async def create_thumbs_dir(
        self,
        directory: Optional[str],
        dest_dir: str,
        force_override: bool = False
    ) -> GenerationStats:
        """
        Create thumbnails for every image directly under a directory.

        Args:
            directory: Directory to list (one level), None or '/' for the root
            dest_dir: Directory to store the thumbnails in
            force_override: Replace thumbnails that already exist. When set,
                sources whose thumbnails are all present in `dest_dir` (by
                filename) are left out before anything is downloaded

        Returns:
            GenerationStats with results
        """
        prefix = parse_path(directory)
        dest_dir = parse_path(dest_dir)

        names = await self._run_in_executor(self.storage.list_objects, prefix)
        self.stats = GenerationStats(total_sources=len(names))

        if force_override:
            existing = await self._run_in_executor(self.storage.list_objects, dest_dir)
            pending = filter_pending(names, existing, self.thumb_gen.specs)
            self.stats.pruned = len(names) - len(pending)
            names = pending

        self.logger.info(
            f"Starting generation: {len(names)} images in /{prefix} -> /{dest_dir}"
            f"{' (force override)' if force_override else ''}"
        )

        for name in names:
            if self._stop_requested:
                self.logger.info(f"Stop requested, halting generation ({self.stats.remaining_count} images left)")
                break

            try:
                await self.create_thumbs(name, dest_dir, force_override)
            except ThumbsError as e:
                error_msg = f"Error processing {name}: {e}"
                self.logger.error(error_msg)
                self.stats.error_details.append(error_msg)
                raise

        self.logger.info(
            f"Generation complete: {self.stats.processed} images, "
            f"{self.stats.uploaded} thumbnails uploaded, {self.stats.skipped} skipped, "
            f"{self.stats.pruned} images already done ({self.stats.elapsed_seconds:.1f}s)"
        )
        return self.stats

    async def create_thumbs(
        self,
        file: str,
        dest_dir: str,
        force_override: bool = False,
        focal_point: Optional[FocalPoint] = None
    ) -> List[str]:
        """
        Create thumbnails for one stored image.

        Args:
            file: Path of the image
            dest_dir: Directory to store the thumbnails in
            force_override: Replace thumbnails that already exist
            focal_point: Crop centre for crop-mode thumbnails

        Returns:
            Paths of the uploaded thumbnails
        """
        image = await self.download_image(file)
        uploaded = await self.create_thumbs_from_bytes(
            image.data,
            image.format,
            image.stem,
            dest_dir,
            force_override,
            focal_point,
        )
        self.stats.processed += 1
        self.logger.info(f"Processed: {file} ({len(uploaded)} thumbnails uploaded)")
        return uploaded

    async def create_thumbs_from_bytes(
        self,
        data: bytes,
        image_format: Union[ImageFormat, str],
        image_stem: str,
        dest_dir: str,
        force_override: bool = False,
        focal_point: Optional[FocalPoint] = None
    ) -> List[str]:
        """
        Create thumbnails for raw image bytes.

        Args:
            data: Image bytes
            image_format: Format of the image; thumbnails use the same format
            image_stem: Name used for the thumbnails, without extension
            dest_dir: Directory to store the thumbnails in
            force_override: Replace thumbnails that already exist
            focal_point: Crop centre for crop-mode thumbnails

        Returns:
            Paths of the uploaded thumbnails
        """
        thumbs = await self.thumb_gen.generate(
            data,
            image_format,
            image_stem,
            dest_dir,
            force_override=force_override,
            focal_point=focal_point,
        )
        self.stats.skipped += len(self.thumb_gen.specs) - len(thumbs)
        return await self.upload_thumbs(thumbs)

    async def upload_thumbs(self, thumbs: List[GeneratedThumbnail]) -> List[str]:
        """Upload generated thumbnails in order."""
        uploaded = []
        for thumb in thumbs:
            path = thumb.path
            self.logger.debug(f"Uploading: {path} ({thumb.size} bytes)")
            await self._run_in_executor(
                self.storage.upload_object, path, thumb.data, thumb.format.content_type
            )
            self.stats.uploaded += 1
            self.stats.bytes_uploaded += thumb.size
            uploaded.append(path)
        return uploaded

    async def download_image(self, path: str) -> SourceImage:
        """
        Download a stored image.

        Raises:
            UnsupportedFormatError: If the extension is not JPEG or PNG
            StorageError: If the download fails
        """
        path = parse_path(path)
        image_format = ImageFormat.from_path(path)

        self.logger.debug(f"Downloading: {path}")
        data = await self._run_in_executor(self.storage.download_object, path)

        return SourceImage(
            stem=path_stem(path),
            format=image_format,
            directory=path_parent(path),
            data=data,
        )
