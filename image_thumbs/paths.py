"""
Helpers for forward-slash storage paths.

Paths are normalized the same way for every storage client: a leading or
trailing slash is optional and dropped, and empty, ``.`` or ``..`` segments
are rejected.
"""

from typing import Optional, Union

from .errors import PathError, Utf8Error

DELIMITER = '/'


def parse_path(path: Optional[Union[str, bytes]]) -> str:
    """
    Normalize a storage path.

    Args:
        path: Path as str or UTF-8 bytes. None and '/' mean the root.

    Returns:
        Path without leading/trailing slashes ('' for the root)
    """
    if path is None:
        return ''

    if isinstance(path, bytes):
        try:
            path = path.decode('utf-8')
        except UnicodeDecodeError as e:
            raise Utf8Error(f"Path is not valid UTF-8: {path!r}") from e

    stripped = path.strip(DELIMITER)
    if not stripped:
        return ''

    parts = stripped.split(DELIMITER)
    for part in parts:
        if part in ('', '.', '..'):
            raise PathError(f"Invalid path segment {part!r} in {path!r}")
        try:
            part.encode('utf-8')
        except UnicodeEncodeError as e:
            raise Utf8Error(f"Path segment is not valid UTF-8: {part!r}") from e

    return DELIMITER.join(parts)


def join_path(*parts: str) -> str:
    """Join path parts, skipping empty ones."""
    return DELIMITER.join(p.strip(DELIMITER) for p in parts if p and p.strip(DELIMITER))


def path_filename(path: str) -> str:
    """Last segment of a path."""
    return path.rstrip(DELIMITER).rsplit(DELIMITER, 1)[-1]


def path_parent(path: str) -> str:
    """Path without its last segment ('' for top-level objects)."""
    path = path.strip(DELIMITER)
    if DELIMITER not in path:
        return ''
    return path.rsplit(DELIMITER, 1)[0]


def split_extension(filename: str) -> tuple:
    """
    Split a filename into (stem, extension).

    The extension has no leading dot and is '' when there is none.
    Hidden files like '.env' have no extension.
    """
    stem, dot, ext = filename.rpartition('.')
    if not dot or not stem:
        return filename, ''
    return stem, ext


def path_stem(path: str) -> str:
    """Filename without directory or extension."""
    return split_extension(path_filename(path))[0]


def path_extension(path: str) -> str:
    """Extension of the filename, without the dot."""
    return split_extension(path_filename(path))[1]
