"""Tests for Generator class."""

import pytest

from image_thumbs.errors import ImageDecodeError, StorageError, UnsupportedFormatError
from image_thumbs.generator import Generator
from image_thumbs.image_format import ImageFormat
from image_thumbs.thumbnail_generator import ThumbnailGenerator


@pytest.fixture
def generator(local_client, thumb_specs, logger):
    """Fixture providing a Generator over local storage."""
    thumb_gen = ThumbnailGenerator(thumb_specs, local_client, logger=logger)
    return Generator(local_client, thumb_gen, logger=logger)


@pytest.fixture
def stored_images(local_client, sample_image_bytes, sample_png_bytes):
    """Fixture storing penguin.jpg and penguin.png at the storage root."""
    local_client.upload_object('penguin.jpg', sample_image_bytes, 'image/jpeg')
    local_client.upload_object('penguin.png', sample_png_bytes, 'image/png')
    return ['penguin.jpg', 'penguin.png']


ALL_THUMBS = [
    'thumbs/penguin_mini.jpg',
    'thumbs/penguin_mini.png',
    'thumbs/penguin_standard.jpg',
    'thumbs/penguin_standard.png',
]


class TestGenerator:
    """Tests for Generator class."""

    @pytest.mark.asyncio
    async def test_download_image(self, generator, local_client, sample_image_bytes):
        """Test downloading splits the path into stem, format and directory."""
        local_client.upload_object('uploads/2024/penguin.JPG', sample_image_bytes)

        image = await generator.download_image('/uploads/2024/penguin.JPG')

        assert image.stem == 'penguin'
        assert image.format is ImageFormat.JPEG
        assert image.directory == 'uploads/2024'
        assert image.data == sample_image_bytes

    @pytest.mark.asyncio
    async def test_download_missing(self, generator):
        """Test a missing source raises StorageError."""
        with pytest.raises(StorageError):
            await generator.download_image('missing.jpg')

    @pytest.mark.asyncio
    async def test_create_thumbs_from_bytes(self, generator, local_client, sample_image_bytes):
        """Test thumbnails are uploaded in spec order."""
        uploaded = await generator.create_thumbs_from_bytes(
            sample_image_bytes, ImageFormat.JPEG, 'penguin', '/from_bytes'
        )

        assert uploaded == ['from_bytes/penguin_standard.jpg', 'from_bytes/penguin_mini.jpg']
        assert local_client.list_objects('from_bytes') == [
            'from_bytes/penguin_mini.jpg',
            'from_bytes/penguin_standard.jpg',
        ]
        assert generator.stats.uploaded == 2
        assert generator.stats.bytes_uploaded > 0

    @pytest.mark.asyncio
    async def test_create_thumbs(self, generator, local_client, stored_images):
        """Test thumbnails for one stored file."""
        uploaded = await generator.create_thumbs('penguin.png', 'thumbs')

        assert uploaded == ['thumbs/penguin_standard.png', 'thumbs/penguin_mini.png']
        assert generator.stats.processed == 1

    @pytest.mark.asyncio
    async def test_create_thumbs_dir(self, generator, local_client, stored_images):
        """Test every image at the root gets its thumbnails."""
        stats = await generator.create_thumbs_dir(None, 'thumbs')

        assert local_client.list_objects('thumbs') == ALL_THUMBS
        assert stats.total_sources == 2
        assert stats.processed == 2
        assert stats.uploaded == 4

    @pytest.mark.asyncio
    async def test_create_thumbs_dir_slash_root(self, generator, local_client, stored_images):
        """Test '/' lists the root like None."""
        await generator.create_thumbs_dir('/', 'thumbs')

        assert local_client.list_objects('thumbs') == ALL_THUMBS

    @pytest.mark.asyncio
    async def test_rerun_uploads_nothing(self, generator, local_client, stored_images, mocker):
        """Test a second run without override skips every thumbnail."""
        await generator.create_thumbs_dir(None, 'thumbs')
        upload = mocker.spy(local_client, 'upload_object')

        stats = await generator.create_thumbs_dir(None, 'thumbs')

        upload.assert_not_called()
        assert stats.uploaded == 0
        assert stats.skipped == 4

    @pytest.mark.asyncio
    async def test_existing_thumbnail_preserved(self, generator, local_client, stored_images):
        """Test an existing thumbnail is left untouched without override."""
        broken = bytes(range(1, 10))
        local_client.upload_object('thumbs/penguin_standard.png', broken)

        await generator.create_thumbs_dir(None, 'thumbs', force_override=False)

        assert local_client.download_object('thumbs/penguin_standard.png') == broken
        assert local_client.list_objects('thumbs') == ALL_THUMBS

    @pytest.mark.asyncio
    async def test_existing_thumbnail_replaced_with_override(self, generator, local_client, stored_images):
        """Test an existing thumbnail is replaced with override."""
        broken = bytes(range(1, 10))
        local_client.upload_object('thumbs/penguin_standard.png', broken)

        await generator.create_thumbs_dir(None, 'thumbs', force_override=True)

        assert local_client.download_object('thumbs/penguin_standard.png') != broken

    @pytest.mark.asyncio
    async def test_override_prunes_complete_sources(self, generator, local_client, stored_images, mocker):
        """Test override mode skips sources whose thumbnails are all listed."""
        await generator.create_thumbs('penguin.jpg', 'thumbs')
        download = mocker.spy(local_client, 'download_object')

        stats = await generator.create_thumbs_dir(None, 'thumbs', force_override=True)

        download.assert_called_once_with('penguin.png')
        assert stats.pruned == 1
        assert stats.processed == 1

    @pytest.mark.asyncio
    async def test_fail_fast(self, generator, local_client, sample_image_bytes):
        """Test a broken image stops the batch and keeps earlier uploads."""
        local_client.upload_object('a.jpg', sample_image_bytes)
        local_client.upload_object('b.jpg', b'not an image')
        local_client.upload_object('c.jpg', sample_image_bytes)

        with pytest.raises(ImageDecodeError):
            await generator.create_thumbs_dir(None, 'thumbs')

        assert local_client.list_objects('thumbs') == ['thumbs/a_mini.jpg', 'thumbs/a_standard.jpg']
        assert generator.stats.errors == 1
        assert generator.stats.processed == 1

    @pytest.mark.asyncio
    async def test_unsupported_file_in_directory(self, generator, local_client):
        """Test a non-image source fails the batch."""
        local_client.upload_object('notes.txt', b'hello')

        with pytest.raises(UnsupportedFormatError):
            await generator.create_thumbs_dir(None, 'thumbs')

    @pytest.mark.asyncio
    async def test_generate_can_be_stopped(self, generator, local_client, stored_images):
        """Test stopping generation."""
        generator.stop()

        stats = await generator.create_thumbs_dir(None, 'thumbs')

        assert stats.processed == 0
        assert stats.remaining_count == 2
        assert local_client.list_objects('thumbs') == []


class TestGeneratorWithMocks:
    """Tests for Generator with a mocked storage client."""

    @pytest.mark.asyncio
    async def test_storage_error_propagates(self, simple_mock_storage_client, thumb_specs, logger):
        """Test storage failures are not retried or swallowed."""
        simple_mock_storage_client.list_objects.return_value = ['penguin.jpg']
        simple_mock_storage_client.download_object.side_effect = StorageError('boom')
        thumb_gen = ThumbnailGenerator(thumb_specs, simple_mock_storage_client)
        generator = Generator(simple_mock_storage_client, thumb_gen, logger=logger)

        with pytest.raises(StorageError):
            await generator.create_thumbs_dir('uploads', 'thumbs')

        assert simple_mock_storage_client.download_object.call_count == 1
        simple_mock_storage_client.upload_object.assert_not_called()

    @pytest.mark.asyncio
    async def test_uploads_with_content_type(self, simple_mock_storage_client, thumb_specs, sample_png_bytes):
        """Test uploads carry the thumbnail's content type."""
        thumb_gen = ThumbnailGenerator(thumb_specs, simple_mock_storage_client)
        generator = Generator(simple_mock_storage_client, thumb_gen)

        await generator.create_thumbs_from_bytes(sample_png_bytes, 'png', 'penguin', 'thumbs')

        calls = simple_mock_storage_client.upload_object.call_args_list
        assert [c.args[0] for c in calls] == ['thumbs/penguin_standard.png', 'thumbs/penguin_mini.png']
        assert all(c.args[2] == 'image/png' for c in calls)
