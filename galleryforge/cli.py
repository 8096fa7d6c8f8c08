"""
Command Line Interface for gallery builds.
"""

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from .access_codes import hash_access_code
from .builder import Builder
from .errors import SourceRootMissing
from .manifest import Manifest
from .reporter import Reporter


def setup_logging(verbose: bool, quiet: bool = False) -> logging.Logger:
    """Configure logging."""
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format='%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    logging.getLogger('PIL').setLevel(logging.WARNING)
    logging.getLogger('MARKDOWN').setLevel(logging.WARNING)

    return logging.getLogger('galleryforge')


def cmd_build(args: argparse.Namespace) -> int:
    """Execute build command."""
    logger = setup_logging(args.verbose, args.quiet)

    builder = Builder(
        source_root=Path(args.root),
        output_dir=Path(args.output) if args.output else None,
        workers=args.workers,
        logger=logger,
    )

    try:
        report = builder.build()
    except SourceRootMissing as e:
        logger.error(str(e))
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130

    if not args.quiet:
        print()
        Reporter().report_build(report)

    if not report.ok:
        logger.warning(
            f"Build finished with problems: {len(report.config_errors)} config errors, "
            f"{report.derivation.errors} asset errors, "
            f"manifest {'not written' if report.manifest_error else 'written'}"
        )
    if report.manifest_error is not None:
        return 1

    return 0


def cmd_report(args: argparse.Namespace) -> int:
    """Execute report command."""
    logger = setup_logging(args.verbose)

    try:
        manifest = Manifest.load(args.manifest)
    except FileNotFoundError:
        logger.error(f"Manifest not found: {args.manifest}")
        return 1
    except Exception as e:
        logger.error(f"Failed to load manifest: {e}")
        return 1

    Reporter().report_summary(manifest)
    return 0


def cmd_hash(args: argparse.Namespace) -> int:
    """Print the digest the viewer compares an entered code against."""
    print(hash_access_code(args.code))
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog='galleryforge',
        description='Build a static photo gallery manifest, thumbnails and pages',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Workflow:
  1. Build:   python -m galleryforge build ./MyGallery
  2. Report:  python -m galleryforge report --manifest ./MyGallery/public/data.json

Access codes:
  python -m galleryforge hash SECRET  prints the digest stored as unlockHash
"""
    )

    parser.add_argument('-v', '--verbose', action='store_true', help='Enable verbose logging')

    subparsers = parser.add_subparsers(dest='command', help='Command to run')

    build_parser = subparsers.add_parser('build', help='Build manifest, derived assets and pages')
    build_parser.add_argument('root', help='Gallery source root (contains albums/)')
    build_parser.add_argument('-o', '--output', help='Output directory (default: ROOT/public)')
    build_parser.add_argument('-w', '--workers', type=int, metavar='N',
                              help='Threads for thumbnail and split generation')
    build_parser.add_argument('-q', '--quiet', action='store_true', help='Only log warnings and errors')
    build_parser.add_argument('-v', '--verbose', action='store_true', help='Enable verbose logging')

    report_parser = subparsers.add_parser('report', help='Summarize an existing manifest')
    report_parser.add_argument('-m', '--manifest', required=True, help='Input manifest file')
    report_parser.add_argument('-v', '--verbose', action='store_true', help='Enable verbose logging')

    hash_parser = subparsers.add_parser('hash', help='Hash an access code')
    hash_parser.add_argument('code', help='Plaintext access code')

    return parser


def main(args: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    if not parsed_args.command:
        parser.print_help()
        return 1

    if parsed_args.command == 'build':
        return cmd_build(parsed_args)
    elif parsed_args.command == 'report':
        return cmd_report(parsed_args)
    elif parsed_args.command == 'hash':
        return cmd_hash(parsed_args)

    return 1
