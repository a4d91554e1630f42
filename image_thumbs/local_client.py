"""
LocalClient - Filesystem storage with the same interface as S3Client.
"""

import logging
import mimetypes
import os
import tempfile
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional

from .errors import StorageError
from .paths import join_path, parse_path


def _default_file_mode() -> int:
    """Mode a plain open() would create files with under the current umask."""
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


@dataclass
class LocalConfig:
    """
    Local filesystem storage settings.

    Attributes:
        root_path: Directory acting as the bucket
        prefix: Sub-directory all paths are relative to ('' for the root)
    """
    root_path: str
    prefix: str = ''

    @property
    def base_path(self) -> str:
        prefix = parse_path(self.prefix)
        return os.path.join(self.root_path, *prefix.split('/')) if prefix else self.root_path

    def validate(self) -> List[str]:
        """Return a list of configuration problems (empty when valid)."""
        errors = []
        if not self.root_path:
            errors.append("Local root path is not set")
        elif not os.path.isdir(self.root_path):
            errors.append(f"Local root path does not exist: {self.root_path}")
        return errors


class LocalClient:
    """
    Storage client backed by a local directory.

    Paths are relative to the configured root and prefix. Filesystem
    failures are raised as StorageError.
    """

    def __init__(self, config: LocalConfig, logger: Optional[logging.Logger] = None):
        self.config = config
        self.logger = logger or logging.getLogger(__name__)
        self.file_mode = _default_file_mode()

    def _full_path(self, path: Optional[str]) -> str:
        parsed = parse_path(path)
        if not parsed:
            return self.config.base_path
        return os.path.join(self.config.base_path, *parsed.split('/'))

    def list_objects(self, prefix: Optional[str] = None) -> List[str]:
        """List the files directly under a prefix (one level, no recursion)."""
        directory = parse_path(prefix)
        full_dir = self._full_path(directory)
        if not os.path.isdir(full_dir):
            return []

        try:
            with os.scandir(full_dir) as entries:
                names = sorted(entry.name for entry in entries if entry.is_file())
        except OSError as e:
            raise StorageError(f"Failed to list {full_dir}: {e}") from e

        return [parse_path(join_path(directory, name)) for name in names]

    def object_exists(self, path: str) -> bool:
        """Check if a file exists."""
        return os.path.isfile(self._full_path(path))

    def get_object_metadata(self, path: str) -> Optional[dict]:
        """Get metadata for a file, or None if it does not exist."""
        full_path = self._full_path(path)
        try:
            stat = os.stat(full_path)
        except FileNotFoundError:
            return None
        except OSError as e:
            raise StorageError(f"Failed to stat {full_path}: {e}") from e

        content_type, _ = mimetypes.guess_type(full_path)
        return {
            'size': stat.st_size,
            'last_modified': datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc).isoformat(),
            'content_type': content_type or 'application/octet-stream',
        }

    def download_object(self, path: str) -> bytes:
        """Read a file."""
        full_path = self._full_path(path)
        try:
            with open(full_path, 'rb') as f:
                return f.read()
        except OSError as e:
            raise StorageError(f"Failed to download {full_path}: {e}") from e

    def upload_object(
        self,
        path: str,
        data: bytes,
        content_type: str = 'application/octet-stream'
    ) -> None:
        """Write a file, replacing any existing one. The content type is not stored."""
        full_path = self._full_path(path)
        directory = os.path.dirname(full_path)
        try:
            os.makedirs(directory, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=directory, prefix='.upload-')
            try:
                with os.fdopen(fd, 'wb') as f:
                    f.write(data)
                # mkstemp creates files as 0600
                os.chmod(tmp_path, self.file_mode)
                os.replace(tmp_path, full_path)
            except BaseException:
                os.unlink(tmp_path)
                raise
        except OSError as e:
            raise StorageError(f"Failed to upload {full_path}: {e}") from e

    def delete_object(self, path: str) -> None:
        """Delete a file."""
        full_path = self._full_path(path)
        try:
            os.remove(full_path)
        except OSError as e:
            raise StorageError(f"Failed to delete {full_path}: {e}") from e
