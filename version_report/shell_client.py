"""
Shell API Client

Client for the Ringotel Shell API. Every call is a single JSON POST to one
endpoint with the API method name in the body. Failed calls are logged and
collapse to an empty result so one bad organisation never stops a run.
"""

import json
import logging
from typing import Any, Dict, List, Optional

import requests

from .config import DEFAULT_BASE_URL
from .models import Organisation, User


class ShellClient:
    """Client for the organisation and user listing calls of the Shell API."""

    def __init__(self, api_key: str, base_url: str = DEFAULT_BASE_URL,
                 session: Optional[requests.Session] = None):
        """
        Initialize the client.

        Args:
            api_key: Bearer credential sent with every request
            base_url: Shell API endpoint (default: https://shell.ringotel.co/api)
            session: Optional requests session to reuse
        """
        self.base_url = base_url
        self.api_key = api_key
        self.session = session or requests.Session()
        self.logger = logging.getLogger(__name__)

    def __enter__(self) -> "ShellClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self.session.close()

    def _headers(self) -> Dict[str, str]:
        return {
            'Authorization': f'Bearer {self.api_key}',
            'Content-Type': 'application/json',
            'Accept': 'application/json',
        }

    def _call_api(self, method: str, params: Optional[Dict] = None) -> Optional[Any]:
        """
        Internal method to call the Shell API.

        Args:
            method: API method name (e.g., 'getOrganizations')
            params: Optional method parameters

        Returns:
            The `result` field of the response body, or None on any failure
        """
        payload: Dict[str, Any] = {'method': method}
        if params is not None:
            payload['params'] = params

        try:
            self.logger.debug(f"POST {self.base_url} method={method} params={params}")
            response = self.session.post(self.base_url, json=payload, headers=self._headers())

            if not response.ok:
                try:
                    details = json.dumps(response.json(), indent=2)
                except ValueError:
                    details = response.text or 'No additional error details.'
                self.logger.error(
                    f"API Error: {response.status_code} {response.reason} for POST {self.base_url} ({method})"
                )
                self.logger.error(f"Details: {details}")
                return None

            body = response.json()

        except ValueError as e:
            # requests' JSONDecodeError is also a RequestException
            self.logger.error(f"Invalid JSON in response from {self.base_url} ({method}): {e}")
            return None
        except requests.RequestException as e:
            self.logger.error(f"Network error during request to {self.base_url} ({method}): {e}")
            return None

        if not isinstance(body, dict):
            return None
        return body.get('result')

    def get_organisations(self) -> List[Organisation]:
        """
        Get all organisations visible to the API key.

        Returns:
            Organisations in API order, or an empty list if the call failed
        """
        self.logger.info("Fetching organisations...")
        result = self._call_api('getOrganizations')

        if isinstance(result, list):
            self.logger.info(f"Found {len(result)} organisations.")
            return [Organisation.from_dict(org) for org in result]

        self.logger.error("Could not retrieve organisations.")
        return []

    def get_users(self, org_id: str) -> List[User]:
        """
        Get all users (with their devices) in an organisation.

        Args:
            org_id: Organisation ID

        Returns:
            Users in API order, or an empty list if the call failed
        """
        result = self._call_api('getUsers', params={'orgid': org_id})

        if isinstance(result, list):
            return [User.from_dict(user) for user in result]

        self.logger.error(f"Could not retrieve users for organisation ID: {org_id}.")
        return []
