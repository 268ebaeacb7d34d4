"""
Report Output

Renders report rows either as a console table or as a CSV file.
"""

import csv
import logging
from typing import List, Optional, TextIO

from .models import REPORT_FIELDS, ReportRow

logger = logging.getLogger(__name__)


def print_table(rows: List[ReportRow], out: Optional[TextIO] = None) -> None:
    """
    Print rows as a fixed-width table.

    Args:
        rows: Report rows
        out: Stream to write to (default: stdout)
    """
    table = [row.values() for row in rows]
    widths = [len(name) for name in REPORT_FIELDS]
    for values in table:
        widths = [max(width, len(value)) for width, value in zip(widths, values)]

    def _line(values):
        return "  ".join(value.ljust(width) for value, width in zip(values, widths)).rstrip()

    print(_line(REPORT_FIELDS), file=out)
    print("  ".join("-" * width for width in widths), file=out)
    for values in table:
        print(_line(values), file=out)


def write_csv(rows: List[ReportRow], path: str) -> None:
    """
    Write rows to a CSV file, replacing any existing file.

    Args:
        rows: Report rows
        path: Output file path
    """
    with open(path, 'w', newline='', encoding='utf-8') as f:
        writer = csv.writer(f)
        writer.writerow(REPORT_FIELDS)
        for row in rows:
            writer.writerow(row.values())
    logger.info(f"Wrote {len(rows)} rows to {path}.")


def emit(rows: List[ReportRow], app_version: str, csv_path: Optional[str] = None) -> None:
    """
    Output the report.

    Nothing is printed or written when there are no rows.

    Args:
        rows: Report rows
        app_version: Target version pattern (for log messages)
        csv_path: Write a CSV file here instead of printing a table
    """
    if not rows:
        logger.info(f"No users found with app version {app_version}.")
        return

    logger.info(f"Users with app version {app_version}:")
    if csv_path:
        write_csv(rows, csv_path)
    else:
        print_table(rows)
