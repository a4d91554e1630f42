"""
Command Line Interface for thumbnail generation.
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

import urllib3

from .errors import ThumbsError
from .generator import Generator
from .image_details import FocalPoint
from .local_client import LocalClient, LocalConfig
from .s3_client import S3Client
from .s3_config import S3Config
from .thumbnail_generator import ThumbnailGenerator
from .thumbs_config import load_specs


def setup_logging(verbose: bool) -> logging.Logger:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO

    logging.basicConfig(
        level=level,
        format='%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    logging.getLogger('boto3').setLevel(logging.WARNING)
    logging.getLogger('botocore').setLevel(logging.WARNING)
    logging.getLogger('urllib3').setLevel(logging.WARNING)
    logging.getLogger('PIL').setLevel(logging.WARNING)

    return logging.getLogger('image_thumbs')


def get_s3_config(args: argparse.Namespace) -> S3Config:
    """Get S3 configuration from environment and CLI overrides."""
    config = S3Config.from_env()

    if args.s3_endpoint:
        config.endpoint = args.s3_endpoint
    if args.s3_bucket:
        config.bucket = args.s3_bucket
    if args.s3_prefix:
        config.prefix = args.s3_prefix
    if args.s3_access_key:
        config.access_key = args.s3_access_key
    if args.s3_secret_key:
        config.secret_key = args.s3_secret_key
    if args.s3_region:
        config.region = args.s3_region

    return config


def get_storage_client(args: argparse.Namespace, logger: logging.Logger):
    """
    Get the storage client selected by the arguments.

    Raises:
        ValueError: If the storage configuration is invalid
    """
    if args.local_root:
        config = LocalConfig(root_path=args.local_root, prefix=args.local_prefix or '')
        errors = config.validate()
        if errors:
            for error in errors:
                logger.error(error)
            raise ValueError("Local configuration invalid")

        logger.info("Storage: Local filesystem")
        logger.info(f"Root: {config.base_path}")
        return LocalClient(config, logger)

    config = get_s3_config(args)
    errors = config.validate()
    if errors:
        for error in errors:
            logger.error(error)
        raise ValueError("S3 configuration invalid")

    logger.info("Storage: S3")
    logger.info(f"Endpoint: {config.endpoint or 'AWS'}")
    logger.info(f"Bucket: {config.bucket}/{config.prefix}")
    return S3Client(config, logger)


def add_storage_arguments(parser: argparse.ArgumentParser) -> None:
    """Add storage configuration arguments to a parser."""
    local_group = parser.add_argument_group('Local Storage')
    local_group.add_argument('--local-root', metavar='PATH',
                             help='Use local filesystem instead of S3')
    local_group.add_argument('--local-prefix', default='',
                             help='Prefix within local root (default: none)')

    s3_group = parser.add_argument_group('S3 Storage')
    s3_group.add_argument('--s3-endpoint', help='Override S3_ENDPOINT')
    s3_group.add_argument('--s3-bucket', help='Override S3_BUCKET')
    s3_group.add_argument('--s3-prefix', help='Override S3_PREFIX')
    s3_group.add_argument('--s3-access-key', help='Override S3_ACCESS_KEY')
    s3_group.add_argument('--s3-secret-key', help='Override S3_SECRET_KEY')
    s3_group.add_argument('--s3-region', help='Override S3_REGION')


def build_generator(args: argparse.Namespace, logger: logging.Logger) -> Generator:
    """Load the thumbnail config and wire up storage and generators."""
    specs = load_specs(args.config)
    logger.info(f"Thumbnails: {', '.join(spec.name for spec in specs)}")

    client = get_storage_client(args, logger)
    thumb_gen = ThumbnailGenerator(specs, client, logger=logger)
    return Generator(client, thumb_gen, logger=logger)


def _run(args: argparse.Namespace, command) -> int:
    logger = setup_logging(args.verbose)
    urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

    try:
        generator = build_generator(args, logger)
    except ValueError:
        return 1
    except ThumbsError as e:
        logger.error(str(e))
        return 1

    try:
        asyncio.run(command(generator, logger))
        return 0
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except ThumbsError as e:
        logger.error(f"Thumbnail generation failed: {e}")
        return 1


def cmd_file(args: argparse.Namespace) -> int:
    """Create thumbnails for one image."""
    focal = None
    if args.focal:
        try:
            focal = FocalPoint(*args.focal).validate()
        except ValueError as e:
            print(f"error: {e}", file=sys.stderr)
            return 2

    async def command(generator: Generator, logger: logging.Logger) -> None:
        uploaded = await generator.create_thumbs(args.path, args.dest, args.force_override, focal)
        for path in uploaded:
            logger.info(f"Uploaded: {path}")

    return _run(args, command)


def cmd_dir(args: argparse.Namespace) -> int:
    """Create thumbnails for all images in a directory."""
    async def command(generator: Generator, logger: logging.Logger) -> None:
        stats = await generator.create_thumbs_dir(args.prefix, args.dest, args.force_override)
        if not args.quiet:
            print()
            print(f"Images: {stats.processed}")
            print(f"Already complete: {stats.pruned}")
            print(f"Uploaded: {stats.uploaded}")
            print(f"Skipped: {stats.skipped}")
            print(f"Time: {stats.elapsed_seconds:.1f}s ({stats.rate_per_minute:.1f} images/min)")
            if stats.remaining_count:
                print(f"Not processed: {stats.remaining_count}")

    return _run(args, command)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog='image_thumbs',
        description='Create configured thumbnails for images in object storage',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m image_thumbs file penguin.jpg --dest thumbs
  python -m image_thumbs dir uploads --dest thumbs --force-override

Storage options:
  Use --local-root for local filesystem, or S3 environment variables for S3.
"""
    )

    subparsers = parser.add_subparsers(dest='command', help='Command to run')

    file_parser = subparsers.add_parser('file', help='Create thumbnails for one image')
    file_parser.add_argument('path', help='Image path in storage')
    file_parser.add_argument('--focal', type=float, nargs=2, metavar=('X', 'Y'),
                             help='Crop focal point as fractions of width and height (default: 0.5 0.5)')

    dir_parser = subparsers.add_parser('dir', help='Create thumbnails for all images in a directory')
    dir_parser.add_argument('prefix', nargs='?', default=None, help='Directory in storage (default: root)')
    dir_parser.add_argument('-q', '--quiet', action='store_true', help='Suppress summary output')

    for sub in (file_parser, dir_parser):
        sub.add_argument('-d', '--dest', required=True, help='Directory to store thumbnails in')
        sub.add_argument('-c', '--config', default='image_thumbs',
                         help='Thumbnail config YAML, extension optional (default: image_thumbs)')
        sub.add_argument('-f', '--force-override', action='store_true',
                         help='Replace thumbnails that already exist')
        sub.add_argument('-v', '--verbose', action='store_true', help='Enable verbose logging')
        add_storage_arguments(sub)

    return parser


def main(args: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    if not parsed_args.command:
        parser.print_help()
        return 1

    if parsed_args.command == 'file':
        return cmd_file(parsed_args)
    elif parsed_args.command == 'dir':
        return cmd_dir(parsed_args)

    return 1
