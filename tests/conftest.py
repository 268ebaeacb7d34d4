"""
Shared test fixtures.

Provides a fake Shell API that answers ShellClient requests in-process,
so no test touches the network.
"""

import json

import pytest
import requests

from version_report.shell_client import ShellClient


def make_response(status_code, body=None, text=None, reason=None):
    """Build a requests.Response with a JSON body (or raw text)."""
    response = requests.Response()
    response.status_code = status_code
    response.reason = reason or ('OK' if status_code < 400 else 'Error')
    response.encoding = 'utf-8'
    if body is not None:
        response._content = json.dumps(body).encode('utf-8')
    else:
        response._content = (text or '').encode('utf-8')
    return response


class FakeShellSession:
    """Stands in for requests.Session, routing by API method (and orgid)."""

    def __init__(self):
        self.routes = {}
        self.calls = []
        self.closed = False

    def post(self, url, json=None, headers=None):
        self.calls.append({'url': url, 'json': json, 'headers': headers})
        params = json.get('params') or {}
        key = (json['method'], params['orgid']) if 'orgid' in params else json['method']
        reply = self.routes.get(key)
        if reply is None:
            return make_response(404, {'error': f'no route for {key}'})
        if isinstance(reply, Exception):
            raise reply
        return reply

    def close(self):
        self.closed = True


class FakeShellApi:
    """Configures canned Shell API replies and hands out clients wired to them."""

    def __init__(self):
        self.session = FakeShellSession()

    def organisations(self, orgs):
        self.session.routes['getOrganizations'] = make_response(200, {'result': orgs})

    def users(self, org_id, users):
        self.session.routes[('getUsers', org_id)] = make_response(200, {'result': users})

    def reply(self, key, response_or_error):
        self.session.routes[key] = response_or_error

    @property
    def calls(self):
        return self.session.calls

    def fetched_org_ids(self):
        return [call['json']['params']['orgid'] for call in self.calls
                if call['json']['method'] == 'getUsers']

    def client(self, api_key='test-key', base_url='https://shell.example.test/api'):
        return ShellClient(api_key, base_url=base_url, session=self.session)


@pytest.fixture
def shell_api():
    return FakeShellApi()


@pytest.fixture
def acme_api(shell_api):
    """A single organisation with one user on app version 5.5.09.04."""
    shell_api.organisations([{'id': 'o1', 'domain': 'acme.com'}])
    shell_api.users('o1', [{
        'id': 'u1',
        'name': 'Ann',
        'info': {'email': 'a@acme.com'},
        'devs': [{'id': 'd1', 'ip': '1.2.3.4', 'ua': '5.5.09.04'}],
    }])
    return shell_api
