"""
S3Config - Connection settings for S3-compatible storage.
"""

import os
from dataclasses import dataclass
from typing import List, Optional


def _env_flag(value: Optional[str], default: bool = True) -> bool:
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'y', 't')


@dataclass
class S3Config:
    """
    S3/MinIO connection settings.

    Attributes:
        endpoint: Endpoint URL, None for AWS
        bucket: Bucket holding images and thumbnails
        prefix: Key prefix all paths are relative to ('' for the bucket root)
        access_key: Access key id
        secret_key: Secret access key
        region: Region name
        verify_ssl: Verify TLS certificates
    """
    endpoint: Optional[str] = None
    bucket: Optional[str] = None
    prefix: str = ''
    access_key: Optional[str] = None
    secret_key: Optional[str] = None
    region: Optional[str] = None
    verify_ssl: bool = True

    @classmethod
    def from_env(cls) -> 'S3Config':
        """Read settings from S3_* environment variables."""
        return cls(
            endpoint=os.getenv('S3_ENDPOINT') or None,
            bucket=os.getenv('S3_BUCKET') or None,
            prefix=os.getenv('S3_PREFIX', ''),
            access_key=os.getenv('S3_ACCESS_KEY') or None,
            secret_key=os.getenv('S3_SECRET_KEY') or None,
            region=os.getenv('S3_REGION') or None,
            verify_ssl=_env_flag(os.getenv('S3_VERIFY_SSL')),
        )

    def validate(self) -> List[str]:
        """Return a list of configuration problems (empty when valid)."""
        errors = []
        if not self.bucket:
            errors.append("S3 bucket is not set (S3_BUCKET or --s3-bucket)")
        if bool(self.access_key) != bool(self.secret_key):
            errors.append("S3 access key and secret key must be set together")
        if self.endpoint and not self.endpoint.startswith(('http://', 'https://')):
            errors.append(f"S3 endpoint must be an http(s) URL: {self.endpoint}")
        return errors
