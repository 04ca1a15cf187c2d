#!/usr/bin/env python3
"""
Merge GeoJSON files into a single FeatureCollection.

By default every file is loaded into memory and may hold any GeoJSON root
type (geometry, Feature or FeatureCollection). With --stream, only
FeatureCollection files are accepted, but they are merged with bounded
memory regardless of their size.

Usage:
    geojson-merge a.geojson b.geojson > merged.geojson
    geojson-merge --stream --output merged.geojson data/*.geojson
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import BinaryIO, List, Optional

from .config import MergeConfig, load_config
from .errors import MergeError
from .merge import merge_files
from .stream import merge_feature_collection_stream

logger = logging.getLogger(__name__)


def setup_logging(level: int) -> None:
    """Configure root logging on stderr; stdout is reserved for output."""
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        stream=sys.stderr
    )


def write_merged(paths: List[Path], out: BinaryIO, config: MergeConfig, progress: bool = False) -> int:
    """Merge in memory and write the result. Returns the feature count."""
    result = merge_files(paths, progress=progress)
    text = json.dumps(result, ensure_ascii=config.ensure_ascii, indent=config.indent)
    out.write(text.encode('utf-8'))
    out.write(b'\n')
    return len(result['features'])


def write_streamed(paths: List[Path], out: BinaryIO, config: MergeConfig) -> int:
    """Stream-merge into out. Returns the number of bytes written."""
    with merge_feature_collection_stream(paths, config) as stream:
        written = stream.write_to(out)
    out.write(b'\n')
    return written


def run(args: argparse.Namespace) -> None:
    config = load_config(args.config)
    if args.verbose:
        config.log_level = 'DEBUG'
    logging.getLogger().setLevel(config.level)

    out = open(args.output, 'wb') if args.output else sys.stdout.buffer
    try:
        if args.stream:
            written = write_streamed(args.files, out, config)
            logger.info(f"Streamed {written} bytes from {len(args.files)} files")
        else:
            count = write_merged(args.files, out, config, progress=args.progress)
            logger.info(f"Wrote {count} features")
        out.flush()
    finally:
        if args.output:
            out.close()

    if args.output:
        logger.info(f"Output: {args.output}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='geojson-merge',
        description='Merge GeoJSON files into one FeatureCollection',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )

    parser.add_argument(
        'files',
        type=Path,
        nargs='+',
        help='GeoJSON files to merge, in output order'
    )

    parser.add_argument(
        '-o', '--output',
        type=Path,
        help='Output path (default: stdout)'
    )

    parser.add_argument(
        '-s', '--stream',
        action='store_true',
        help='Stream FeatureCollection files without loading them into memory'
    )

    parser.add_argument(
        '-c', '--config',
        type=Path,
        help='YAML config file (chunk_size, ensure_ascii, indent, log_level)'
    )

    parser.add_argument(
        '--progress',
        action='store_true',
        help='Show a progress bar while loading files (in-memory mode)'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose logging'
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    try:
        run(args)
    except (MergeError, OSError, ValueError) as e:
        logger.error(f"Merge failed: {e}", exc_info=args.verbose)
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
