"""
Pytest fixtures for image_thumbs tests.
"""

import io

import pytest


def make_image_bytes(size=(100, 100), fmt='JPEG', mode='RGB', color='red'):
    """Encode a solid colour image."""
    from PIL import Image

    img = Image.new(mode, size, color=color)
    buffer = io.BytesIO()
    img.save(buffer, format=fmt)
    return buffer.getvalue()


def image_size(data):
    """Decode image bytes and return (width, height)."""
    from PIL import Image

    with Image.open(io.BytesIO(data)) as img:
        return img.size


@pytest.fixture
def sample_image_bytes():
    """Fixture providing a 100x100 JPEG."""
    return make_image_bytes((100, 100), 'JPEG')


@pytest.fixture
def sample_png_bytes():
    """Fixture providing a 100x100 PNG with transparency."""
    return make_image_bytes((100, 100), 'PNG', mode='RGBA', color=(255, 0, 0, 128))


@pytest.fixture
def thumb_specs():
    """Fixture providing the standard/mini spec pair."""
    from image_thumbs.thumb_spec import Mode, ThumbnailSpec

    return (
        ThumbnailSpec(name='standard', quality=80, size=(640, 480), mode=Mode.FIT),
        ThumbnailSpec(name='mini', quality=80, size=(40, 40), mode=Mode.CROP),
    )


@pytest.fixture
def s3_config():
    """Fixture providing S3 configuration."""
    from image_thumbs.s3_config import S3Config

    return S3Config(
        endpoint='https://test-endpoint.example.com:9000',
        bucket='test-bucket',
        prefix='',
        access_key='test-access-key',
        secret_key='test-secret-key',
        region='us-east-1',
    )


@pytest.fixture
def local_root(tmp_path):
    """Fixture providing an empty storage root directory."""
    root = tmp_path / 'bucket'
    root.mkdir()
    return root


@pytest.fixture
def local_client(local_root, logger):
    """Fixture providing a LocalClient over a temporary directory."""
    from image_thumbs.local_client import LocalClient, LocalConfig

    return LocalClient(LocalConfig(root_path=str(local_root)), logger)


@pytest.fixture
def simple_mock_storage_client():
    """Fixture providing a mock storage client where nothing exists yet."""
    from unittest.mock import MagicMock

    mock = MagicMock()
    mock.object_exists.return_value = False
    mock.upload_object.return_value = None
    mock.list_objects.return_value = []
    return mock


@pytest.fixture
def logger():
    """Fixture providing a logger."""
    import logging
    return logging.getLogger('test')


@pytest.fixture
def image_factory():
    """Fixture providing make_image_bytes for custom sizes and formats."""
    return make_image_bytes


@pytest.fixture
def decoded_size():
    """Fixture providing image_size to check encoded thumbnails."""
    return image_size
