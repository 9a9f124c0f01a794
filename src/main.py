"""Main entry point for the libvips header tool."""

import argparse
import json
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.utils.config_loader import load_config
from src.utils.logger import setup_logger, get_logger

logger = None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Inspect and edit libvips image header metadata"
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # Info command
    info_parser = subparsers.add_parser(
        'info',
        help='Print header metadata of an image'
    )
    info_parser.add_argument('path', help='Image file to inspect')
    info_parser.add_argument(
        '--json',
        action='store_true',
        help='Print metadata as JSON'
    )

    # Strip ICC command
    strip_parser = subparsers.add_parser(
        'strip-icc',
        help='Remove the embedded ICC profile'
    )
    strip_parser.add_argument('path', help='Source image')
    strip_parser.add_argument('output', help='Output image')

    # Set pages command
    pages_parser = subparsers.add_parser(
        'set-pages',
        help='Set page count and/or page height'
    )
    pages_parser.add_argument('path', help='Source image')
    pages_parser.add_argument('output', help='Output image')
    pages_parser.add_argument(
        '--n-pages',
        type=int,
        default=None,
        help='Number of pages'
    )
    pages_parser.add_argument(
        '--page-height',
        type=int,
        default=None,
        help='Height of a single page in pixels'
    )

    # Set delay command
    delay_parser = subparsers.add_parser(
        'set-delay',
        help='Set per-frame animation delays'
    )
    delay_parser.add_argument('path', help='Source image')
    delay_parser.add_argument('output', help='Output image')
    delay_parser.add_argument(
        'delays',
        type=int,
        nargs='+',
        help='Delay of each frame in milliseconds'
    )

    for sub in (info_parser, strip_parser, pages_parser, delay_parser):
        sub.add_argument(
            '--config',
            default='config/config.yaml',
            help='Path to configuration file'
        )

    return parser


def main(argv=None):
    """Main entry point."""
    global logger

    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    try:
        config = load_config(args.config)
        setup_logger(config)
        logger = get_logger(__name__)

        if args.command == 'info':
            return cmd_info(config, args)
        elif args.command == 'strip-icc':
            return cmd_strip_icc(config, args)
        elif args.command == 'set-pages':
            return cmd_set_pages(config, args)
        elif args.command == 'set-delay':
            return cmd_set_delay(config, args)

    except KeyboardInterrupt:
        if logger:
            logger.info("Operation cancelled by user")
        print("\nOperation cancelled.")
        return 130
    except Exception as e:
        if logger:
            logger.error(f"Fatal error: {e}", exc_info=True)
        print(f"Error: {e}")
        return 1

    return 0


def _load(config, path):
    from src.vips_header import ImageLoader

    image, _ = ImageLoader(config).load_file(path)
    return image


def _write(image, output):
    image.write_to_file(output)
    logger.info(f"Wrote {output}")
    print(f"Written to {output}")


def cmd_info(config, args):
    """Print image header metadata."""
    from src.vips_header import describe_image

    info = describe_image(_load(config, args.path))

    if args.json:
        print(json.dumps(info, indent=2))
        return 0

    print(f"{args.path}:")
    for key, value in info.items():
        print(f"  {key}: {value}")

    return 0


def cmd_strip_icc(config, args):
    """Remove the ICC profile and save."""
    from src.vips_header import remove_icc_profile

    image = _load(config, args.path).copy()

    if not remove_icc_profile(image):
        print(f"Error: could not remove ICC profile from {args.path}")
        return 1

    _write(image, args.output)
    return 0


def cmd_set_pages(config, args):
    """Update page layout fields and save."""
    from src.vips_header import set_image_n_pages, set_page_height

    if args.n_pages is None and args.page_height is None:
        print("Error: nothing to set, pass --n-pages and/or --page-height")
        return 1

    image = _load(config, args.path).copy()

    if args.n_pages is not None:
        set_image_n_pages(image, args.n_pages)
    if args.page_height is not None:
        set_page_height(image, args.page_height)

    _write(image, args.output)
    return 0


def cmd_set_delay(config, args):
    """Update frame delays and save."""
    from src.vips_header import get_image_n_pages, set_image_delay

    image = _load(config, args.path).copy()

    n_pages = get_image_n_pages(image)
    if len(args.delays) != n_pages:
        logger.warning(
            f"{len(args.delays)} delays given for {n_pages} pages in {args.path}"
        )

    set_image_delay(image, args.delays, len(args.delays))

    _write(image, args.output)
    return 0


if __name__ == '__main__':
    sys.exit(main())
