#!/usr/bin/env python3
"""
scan.py - Scan a media library for Plex naming compliance

Read-only. Never renames, moves or writes anything except the optional
CSV report.

Content type is guessed from the files (any SxxEyy → TV, else movies)
unless --type is given.

Usage:
  python scan.py /path/to/Movies                  # auto-detect type
  python scan.py /path/to/TV --type tv --pass     # also list passing files
  python scan.py /path/to/Movies --report output/movies.csv
  python scan.py /path/to/fixtures --self-test    # replay pass/ and fail/ fixtures
  python scan.py --config shelfscan.yaml          # library_path from config
"""

import sys
import logging
import argparse
from pathlib import Path

import yaml

from shelfscan.models import ContentType
from shelfscan.scanner import find_media_files, guess_content_type, parse_content_type, run_scan
from shelfscan.selftest import run_self_tests
from shelfscan import report

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def load_config(config_path: Path) -> dict:
    """Load configuration from YAML file. Missing file → empty config."""
    if not config_path.exists():
        return {}
    with open(config_path, 'r', encoding='utf-8') as f:
        config = yaml.safe_load(f) or {}
    if not isinstance(config, dict):
        raise yaml.YAMLError(f"expected a mapping at the top level, got {type(config).__name__}")
    return config


def content_type_arg(value: str) -> ContentType:
    try:
        return parse_content_type(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Scan a media library for Plex naming compliance',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument('folder', nargs='?', type=Path, default=None,
                        help='Folder of content to scan (default: library_path from config)')
    parser.add_argument('--type', '-t', type=content_type_arg, default=None, dest='media_type',
                        help="Override auto-detection. Type can be 'movie' or 'tv'")
    parser.add_argument('--pass', '-p', action='store_true', default=False, dest='show_passes',
                        help='Show files that pass verification')
    parser.add_argument('--self-test', '--selftest', '-s', action='store_true', default=False,
                        dest='self_test',
                        help='Run self-tests; folder must point to the base test folder')
    parser.add_argument('--report', type=Path, default=None,
                        help='Also write a CSV report to this path')
    parser.add_argument('--config', type=Path, default=Path('shelfscan.yaml'),
                        help='Configuration file (default: shelfscan.yaml, optional)')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Debug logging')
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        config = load_config(args.config)
    except (OSError, yaml.YAMLError) as e:
        logger.error(f"Cannot read config {args.config}: {e}")
        return 1

    # Command-line flags win over config values
    folder = args.folder
    if folder is None and config.get('library_path'):
        folder = Path(config['library_path'])
    if folder is None:
        parser.print_usage()
        logger.error("No folder given. Pass a folder or set library_path in the config.")
        return 1

    media_type = args.media_type
    if media_type is None and config.get('media_type'):
        try:
            media_type = parse_content_type(str(config['media_type']))
        except ValueError as e:
            logger.error(f"{args.config}: {e}")
            return 1

    show_passes = args.show_passes or bool(config.get('show_passes', False))
    report_path = args.report
    if report_path is None and config.get('report_path'):
        report_path = Path(config['report_path'])

    # Hard gate: folder must exist (drive must be mounted)
    if not folder.is_dir():
        logger.error(f"Folder '{folder}' does not exist.")
        return 1

    if args.self_test:
        results = run_self_tests(folder)
        return 0 if report.print_self_test_summary(results) else 1

    print()
    print(f"Searching for content in {folder}...")
    try:
        files = find_media_files(folder)
    except OSError as e:
        logger.error(f"Error scanning files: {e}")
        return 1

    if media_type is None:
        media_type = guess_content_type(files)
        logger.info(f"Detected content type: {media_type.value}")

    report.print_header(media_type)
    stats = run_scan(files, media_type, folder, show_passes=show_passes,
                     keep_outcomes=report_path is not None)
    report.print_summary(media_type, stats.valid, stats.invalid, stats.total)

    if report_path is not None:
        try:
            report.write_csv(report_path, stats.outcomes, media_type)
        except OSError as e:
            logger.error(f"Cannot write report {report_path}: {e}")
            return 1

    # Invalid files are report content, not errors
    return 0


if __name__ == '__main__':
    sys.exit(main())
