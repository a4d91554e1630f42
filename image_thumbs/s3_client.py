"""
S3Client - S3/MinIO operations for listing, downloading, and uploading files.
"""

import logging
from contextlib import contextmanager
from typing import List, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from .errors import StorageError
from .paths import DELIMITER, join_path, parse_path
from .s3_config import S3Config

NOT_FOUND_CODES = {'404', 'NoSuchKey', 'NotFound'}


class S3Client:
    """
    Wrapper for S3/MinIO operations.

    Paths passed to the public methods are relative to the configured
    prefix. Backend failures are raised as StorageError.
    """

    def __init__(self, config: S3Config, logger: Optional[logging.Logger] = None):
        """
        Initialize S3 client.

        Args:
            config: S3 configuration
            logger: Optional logger instance
        """
        self.config = config
        self.logger = logger or logging.getLogger(__name__)
        self._prefix = parse_path(config.prefix)

        self._client = boto3.client(
            's3',
            endpoint_url=config.endpoint,
            aws_access_key_id=config.access_key,
            aws_secret_access_key=config.secret_key,
            region_name=config.region,
            config=Config(
                signature_version='s3v4',
                s3={'addressing_style': 'path'}
            ),
            verify=config.verify_ssl
        )

    @property
    def client(self):
        """Return the underlying boto3 client."""
        return self._client

    def _key(self, path: str) -> str:
        """Convert a storage path into an S3 object key."""
        return join_path(self._prefix, parse_path(path))

    def _path(self, key: str) -> str:
        """Convert an S3 object key back into a storage path."""
        if self._prefix and key.startswith(self._prefix + DELIMITER):
            return key[len(self._prefix) + 1:]
        return key

    @contextmanager
    def _storage_errors(self, action: str, path: str):
        try:
            yield
        except (ClientError, BotoCoreError) as e:
            raise StorageError(f"Failed to {action} {path}: {e}") from e

    def list_objects(self, prefix: Optional[str] = None) -> List[str]:
        """
        List the objects directly under a prefix (one level, no recursion).

        Args:
            prefix: Directory to list, None or '/' for the root

        Returns:
            Object paths relative to the configured prefix
        """
        directory = self._key(prefix or '')
        list_prefix = f"{directory}{DELIMITER}" if directory else ''

        paths = []
        with self._storage_errors('list', list_prefix or DELIMITER):
            paginator = self._client.get_paginator('list_objects_v2')
            page_iterator = paginator.paginate(
                Bucket=self.config.bucket,
                Prefix=list_prefix,
                Delimiter=DELIMITER,
            )
            for page in page_iterator:
                for obj in page.get('Contents', []):
                    key = obj['Key']
                    # Directory placeholder objects
                    if key.endswith(DELIMITER):
                        continue
                    paths.append(self._path(key))

        self.logger.debug(f"Listed {len(paths)} objects under {list_prefix or DELIMITER}")
        return paths

    def object_exists(self, path: str) -> bool:
        """Check if an object exists in S3."""
        return self.get_object_metadata(path) is not None

    def get_object_metadata(self, path: str) -> Optional[dict]:
        """Get metadata for an S3 object, or None if it does not exist."""
        key = self._key(path)
        try:
            response = self._client.head_object(Bucket=self.config.bucket, Key=key)
        except ClientError as e:
            if e.response.get('Error', {}).get('Code') in NOT_FOUND_CODES:
                return None
            raise StorageError(f"Failed to head {key}: {e}") from e
        except BotoCoreError as e:
            raise StorageError(f"Failed to head {key}: {e}") from e

        last_modified = response.get('LastModified')
        return {
            'size': response.get('ContentLength', 0),
            'last_modified': last_modified.isoformat() if last_modified else None,
            'content_type': response.get('ContentType', 'application/octet-stream'),
        }

    def download_object(self, path: str) -> bytes:
        """Download an object from S3."""
        key = self._key(path)
        with self._storage_errors('download', key):
            response = self._client.get_object(Bucket=self.config.bucket, Key=key)
            return response['Body'].read()

    def upload_object(
        self,
        path: str,
        data: bytes,
        content_type: str = 'application/octet-stream'
    ) -> None:
        """Upload an object to S3, replacing any existing object."""
        key = self._key(path)
        with self._storage_errors('upload', key):
            self._client.put_object(
                Bucket=self.config.bucket,
                Key=key,
                Body=data,
                ContentType=content_type
            )

    def delete_object(self, path: str) -> None:
        """Delete an object from S3."""
        key = self._key(path)
        with self._storage_errors('delete', key):
            self._client.delete_object(Bucket=self.config.bucket, Key=key)
