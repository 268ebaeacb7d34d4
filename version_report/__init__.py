"""
App Version Report

Finds users across all organisations of the Ringotel Shell API whose devices
run a given app version, and reports them as a table or CSV file.
"""

from .config import ConfigError, ReportConfig

from .models import (
    Device,
    Organisation,
    ReportRow,
    User,
    present_or_placeholder
)

from .report import build_report, build_rows, version_matches
from .shell_client import ShellClient
from .sink import emit, print_table, write_csv

__all__ = [
    # Configuration
    'ConfigError',
    'ReportConfig',

    # Records
    'Device',
    'Organisation',
    'ReportRow',
    'User',
    'present_or_placeholder',

    # API client
    'ShellClient',

    # Report building and output
    'build_report',
    'build_rows',
    'version_matches',
    'emit',
    'print_table',
    'write_csv',
]
