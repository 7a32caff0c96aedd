# filtercam Command Line
"""
Filter still images from the command line.

Usage:
    # List filters
    filtercam list

    # Filter an image
    filtercam apply photo.jpg sepia.jpg --filter sepia

    # Check that every filter keeps up with 30 fps at 640x480
    filtercam bench --width 640 --height 480 --frames 20
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from filtercam import codec
from filtercam.config import settings
from filtercam.errors import CodecError
from filtercam.filters.benchmark import benchmark_filters
from filtercam.filters.catalog import FilterId, all_ids, display_name
from filtercam.filters.engine import FilterEngine

logger = logging.getLogger(__name__)


def _cmd_list(args: argparse.Namespace) -> int:
    for filter_id in all_ids():
        print(f'{filter_id.value:<12}{display_name(filter_id)}')
    return 0


def _cmd_apply(args: argparse.Namespace) -> int:
    if FilterId.parse(args.filter) is None:
        logger.warning(f"Unknown filter '{args.filter}', writing image unchanged")
    try:
        buffer = codec.decode(Path(args.input).read_bytes())
        FilterEngine(pixelate_block_size=settings.PIXELATE_BLOCK_SIZE).apply(buffer, args.filter)
        data = codec.encode(buffer, Path(args.output).suffix or 'png', quality=args.quality)
        Path(args.output).write_bytes(data)
    except (OSError, CodecError) as e:
        logger.error(f'Failed to filter {args.input}: {e}')
        return 1
    print(f'Wrote {args.output} ({display_name(args.filter)})')
    return 0


def _cmd_bench(args: argparse.Namespace) -> int:
    result = benchmark_filters(
        width=args.width,
        height=args.height,
        frames=args.frames,
        filter_ids=args.filters or None,
        target_fps=args.fps,
    )
    print(result.to_json() if args.json else result.ascii_table())
    return 0 if result.passed else 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='filtercam',
        description='Apply live-video pixel filters to still images',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s list
  %(prog)s apply in.jpg out.jpg --filter vintage
  %(prog)s bench --frames 20
"""
    )
    parser.add_argument(
        '--log-level',
        default=settings.LOG_LEVEL,
        help=f'Logging level (default: {settings.LOG_LEVEL})'
    )
    subparsers = parser.add_subparsers(dest='command', required=True)

    list_parser = subparsers.add_parser('list', help='List available filters')
    list_parser.set_defaults(handler=_cmd_list)

    apply_parser = subparsers.add_parser('apply', help='Filter an image file')
    apply_parser.add_argument('input', help='Input image')
    apply_parser.add_argument('output', help='Output image; format from extension')
    apply_parser.add_argument(
        '--filter', '-f',
        default=FilterId.NONE.value,
        help='Filter identifier (see "list")'
    )
    apply_parser.add_argument(
        '--quality', '-q',
        type=int,
        default=settings.JPEG_QUALITY,
        help=f'JPEG quality (default: {settings.JPEG_QUALITY})'
    )
    apply_parser.set_defaults(handler=_cmd_apply)

    bench_parser = subparsers.add_parser('bench', help='Measure filter frame rates')
    bench_parser.add_argument('--width', type=int, default=640)
    bench_parser.add_argument('--height', type=int, default=480)
    bench_parser.add_argument('--frames', type=int, default=10)
    bench_parser.add_argument('--fps', type=float, default=30.0, help='Target frame rate')
    bench_parser.add_argument('--json', action='store_true', help='Print JSON instead of a table')
    bench_parser.add_argument('filters', nargs='*', help='Filters to measure (default: all)')
    bench_parser.set_defaults(handler=_cmd_bench)

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level.upper())
    return args.handler(args)


if __name__ == '__main__':
    sys.exit(main())
