"""
App Version Report CLI

Finds every user whose device reports a given app version.

Usage:
    version-report [--app-version VERSION] [--limit N] [--csv [PATH]]
    version-report-csv [--app-version VERSION] [--limit N] [--output PATH]

API_KEY, APP_VERSION and LIMIT are read from the environment (or a .env
file); flags override them.
"""

import argparse
import logging
import os
import sys
from typing import List, Optional

from dotenv import find_dotenv, load_dotenv

from .config import DEFAULT_CSV_PATH, ConfigError, ReportConfig
from .report import build_report
from .shell_client import ShellClient
from .sink import emit

logger = logging.getLogger(__name__)


def setup_logging() -> None:
    """Configure root logging from the LOG_LEVEL environment variable."""
    log_level = os.environ.get('LOG_LEVEL', 'INFO').upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )


def build_parser(csv_only: bool = False) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='version-report-csv' if csv_only else 'version-report',
        description='Find users whose devices run a given app version',
    )
    parser.add_argument('--app-version', help='Target app version (overrides APP_VERSION)')
    parser.add_argument('--limit', help='Maximum number of organisations to process (overrides LIMIT)')
    if csv_only:
        parser.add_argument('--output', default=DEFAULT_CSV_PATH,
                            help=f'CSV file to write (default: {DEFAULT_CSV_PATH})')
    else:
        parser.add_argument('--csv', nargs='?', const=DEFAULT_CSV_PATH, default=None, metavar='PATH',
                            help=f'Write a CSV file instead of printing a table (default path: {DEFAULT_CSV_PATH})')
    return parser


def run(app_version: Optional[str] = None, limit: Optional[str] = None,
        csv_path: Optional[str] = None) -> int:
    """
    Run the report and output it.

    Args:
        app_version: Target version override
        limit: Organisation limit override
        csv_path: Write CSV here instead of printing a table

    Returns:
        Process exit code
    """
    try:
        config = ReportConfig.from_env({'APP_VERSION': app_version, 'LIMIT': limit})
    except ConfigError as e:
        logger.error(str(e))
        return 1

    try:
        with ShellClient(config.api_key, base_url=config.base_url) as client:
            rows = build_report(client, config.app_version, limit=config.limit)
        emit(rows, config.app_version, csv_path=csv_path)
    except Exception as e:
        logger.error(f"An unexpected error occurred: {e}", exc_info=True)
        return 1

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Print the report as a table, or write CSV with --csv."""
    args = build_parser().parse_args(argv)
    load_dotenv(find_dotenv(usecwd=True))
    setup_logging()
    return run(app_version=args.app_version, limit=args.limit, csv_path=args.csv)


def main_csv(argv: Optional[List[str]] = None) -> int:
    """Write the report to a CSV file."""
    args = build_parser(csv_only=True).parse_args(argv)
    load_dotenv(find_dotenv(usecwd=True))
    setup_logging()
    return run(app_version=args.app_version, limit=args.limit, csv_path=args.output)


if __name__ == '__main__':
    sys.exit(main())
