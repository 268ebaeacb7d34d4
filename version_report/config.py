"""
Report Configuration

Loads and validates the settings for an app-version report run.
Values come from the process environment (the CLI loads any .env file into
it first), with command-line overrides applied on top.
"""

import os
from dataclasses import dataclass
from typing import Dict, Optional

DEFAULT_BASE_URL = 'https://shell.ringotel.co/api'
PLACEHOLDER_API_KEY = 'YOUR_RINGOTEL_API_KEY'
DEFAULT_CSV_PATH = 'users_with_app_version.csv'


class ConfigError(ValueError):
    """Raised when a required setting is missing or invalid."""


@dataclass(frozen=True)
class ReportConfig:
    """
    Validated settings for one report run.

    Attributes:
        api_key: Bearer credential for the Shell API
        app_version: Target version pattern matched against device user agents
        limit: Maximum number of organisations to process (None = all)
        base_url: Shell API endpoint every request is posted to
    """

    api_key: str
    app_version: str
    limit: Optional[int] = None
    base_url: str = DEFAULT_BASE_URL

    @classmethod
    def from_env(cls, overrides: Optional[Dict[str, Optional[str]]] = None) -> "ReportConfig":
        """
        Build the config from environment variables.

        Args:
            overrides: Optional values (keyed by variable name) that take
                precedence over the environment, e.g. from CLI flags

        Returns:
            Validated ReportConfig

        Raises:
            ConfigError: If API_KEY or APP_VERSION is missing, or LIMIT is invalid
        """
        overrides = overrides or {}

        def _get(name: str) -> Optional[str]:
            value = overrides.get(name)
            if value is None:
                value = os.environ.get(name)
            return value

        api_key = (_get('API_KEY') or '').strip()
        if not api_key or api_key == PLACEHOLDER_API_KEY:
            raise ConfigError("API_KEY must be set in the environment or .env file.")

        app_version = require_app_version(_get('APP_VERSION'))

        return cls(
            api_key=api_key,
            app_version=app_version,
            limit=parse_limit(_get('LIMIT')),
            base_url=(_get('RINGOTEL_BASE_URL') or DEFAULT_BASE_URL).strip(),
        )


def require_app_version(value: Optional[str]) -> str:
    """
    Check that a target version pattern was supplied.

    Args:
        value: Raw APP_VERSION value

    Returns:
        The pattern, unchanged

    Raises:
        ConfigError: If the value is missing or blank
    """
    if not isinstance(value, str) or not value.strip():
        raise ConfigError("APP_VERSION must be set in the environment or .env file.")
    return value


def parse_limit(raw_value: Optional[str]) -> Optional[int]:
    """
    Parse the LIMIT setting.

    Args:
        raw_value: Raw string from the environment or CLI

    Returns:
        Positive integer, or None when unset

    Raises:
        ConfigError: If the value is not a positive integer
    """
    if raw_value is None or not str(raw_value).strip():
        return None
    try:
        limit = int(str(raw_value).strip())
    except ValueError as e:
        raise ConfigError(f"Invalid LIMIT value: expected a positive integer, got '{raw_value}'.") from e
    if limit < 1:
        raise ConfigError(f"Invalid LIMIT value: expected a positive integer, got '{raw_value}'.")
    return limit
