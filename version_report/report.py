"""
App Version Report

Walks every organisation and user in the Shell API and collects the devices
running a given app version as flat ReportRow records.
"""

import logging
from typing import List, Optional

from .config import require_app_version
from .models import Organisation, ReportRow, User
from .shell_client import ShellClient

logger = logging.getLogger(__name__)


def version_matches(ua: Optional[str], app_version: str) -> bool:
    """
    Check whether a device user agent reports the target app version.

    Matching is case-sensitive substring containment, so "5.5.09" matches
    both "5.5.09.04" and "5.5.09.99".

    Args:
        ua: Device user agent string (may be missing)
        app_version: Target version pattern

    Returns:
        True if the user agent is present and contains the pattern
    """
    if not isinstance(ua, str) or not ua:
        return False
    return app_version in ua


def build_rows(organisation: Organisation, users: List[User], app_version: str) -> List[ReportRow]:
    """
    Flatten one organisation's users into report rows for matching devices.

    Args:
        organisation: The organisation the users were fetched for
        users: Users in API order
        app_version: Target version pattern

    Returns:
        One ReportRow per matching device, in user then device order
    """
    rows = []
    for user in users:
        if not user.devs:
            continue
        for device in user.devs:
            if version_matches(device.ua, app_version):
                rows.append(ReportRow.build(organisation, user, device))
    return rows


def build_report(client: ShellClient, app_version: str, limit: Optional[int] = None) -> List[ReportRow]:
    """
    Find every device running the target app version across all organisations.

    Organisations are processed one at a time, in API order. A failed user
    fetch only removes that organisation's rows from the report.

    Args:
        client: Shell API client
        app_version: Target version pattern
        limit: Maximum number of organisations to process (None = all)

    Returns:
        Report rows in organisation, user, device order

    Raises:
        ConfigError: If app_version is missing or blank (checked before any request)
    """
    app_version = require_app_version(app_version)

    logger.info(f"Starting search for users with app version: {app_version}")
    organisations = client.get_organisations()
    if not organisations:
        logger.info("No organisations to process.")
        return []

    if limit is not None:
        organisations = organisations[:limit]

    rows: List[ReportRow] = []
    for index, organisation in enumerate(organisations, start=1):
        logger.info(f"{index}: Fetching users for organisation ID: {organisation.id}...")
        users = client.get_users(organisation.id)
        logger.info(f"Found {len(users)} users in organisation ID: {organisation.id}.")
        rows.extend(build_rows(organisation, users, app_version))

    return rows
