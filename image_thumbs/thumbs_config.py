"""
Loading thumbnail specifications from YAML.

Example file:

    thumbs:
      - name: standard
        quality: 80
        size: [640, 480]
        mode: fit
      - name: mini
        naming_pattern: "/mini/{image_stem}"
        quality: 80
        size: [40, 40]
        mode: crop
"""

import os
from typing import Iterable, Tuple

import yaml

from .errors import ConfigError
from .thumb_spec import ThumbnailSpec

CONFIG_EXTENSIONS = ('.yaml', '.yml')


def resolve_config_path(config: str) -> str:
    """Find the config file; the '.yaml' / '.yml' extension may be omitted."""
    if os.path.isfile(config):
        return config
    for ext in CONFIG_EXTENSIONS:
        candidate = f"{config}{ext}"
        if os.path.isfile(candidate):
            return candidate
    raise ConfigError(f"Thumbnail config not found: {config}")


def load_specs(config: str) -> Tuple[ThumbnailSpec, ...]:
    """
    Load thumbnail specifications from a YAML file.

    Args:
        config: Path to the config file, extension optional

    Returns:
        Specifications in file order

    Raises:
        ConfigError: If the file is missing, unreadable or invalid
    """
    path = resolve_config_path(config)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    if not isinstance(data, dict) or 'thumbs' not in data:
        raise ConfigError(f"{path}: missing top-level 'thumbs' list")

    return specs_from_records(data['thumbs'])


def specs_from_records(records: Iterable[dict]) -> Tuple[ThumbnailSpec, ...]:
    """
    Build specifications from already parsed records.

    Raises:
        ConfigError: On invalid records, duplicate names or an empty list
    """
    if not isinstance(records, (list, tuple)):
        raise ConfigError(f"'thumbs' must be a list, got {type(records).__name__}")

    specs = tuple(ThumbnailSpec.from_dict(record) for record in records)
    if not specs:
        raise ConfigError("No thumbnails configured")

    seen = set()
    for spec in specs:
        if spec.name in seen:
            raise ConfigError(f"Duplicate thumbnail name: {spec.name}")
        seen.add(spec.name)

    return specs
