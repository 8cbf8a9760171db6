"""
Pytest configuration and fixtures.
"""

import pytest
import os
import sys
import tempfile
import json
from unittest.mock import Mock

import requests

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from handlers.base_handler import BaseHandler
from models.check_result import CheckResult
from utils.config import EnvConfig


class StubHandler(BaseHandler):
    """Handler returning a fixed result, for orchestration tests."""

    def __init__(self, name: str, result: CheckResult = None, error: Exception = None):
        super().__init__({'source_id': name, 'import_name': name})
        self.result = result or CheckResult.not_found()
        self.error = error
        self.calls = 0

    def get_method_name(self) -> str:
        return "stub"

    def _check(self) -> CheckResult:
        self.calls += 1
        if self.error:
            raise self.error
        return self.result


@pytest.fixture
def temp_state_file():
    """Create a temporary subscriptions file for testing."""
    fd, path = tempfile.mkstemp(suffix='.json')
    os.close(fd)
    with open(path, 'w') as f:
        json.dump({}, f)
    yield path
    if os.path.exists(path):
        os.unlink(path)


@pytest.fixture
def push_env():
    """Environment with both notification channels configured."""
    return EnvConfig(
        anthropic_api_key='test-key',
        vapid_public_key='public-key',
        vapid_private_key='private-key',
        ntfy_topic='test-topic',
    )


@pytest.fixture
def bare_env():
    """Environment with no credentials at all."""
    return EnvConfig()


@pytest.fixture
def sample_subscription():
    return {
        'endpoint': 'https://push.example.com/send/abc123',
        'keys': {'p256dh': 'BPublicKey', 'auth': 'authSecret'},
    }


def make_response(status_code=200, json_data=None, text='', headers=None):
    """Build a mock requests.Response."""
    response = Mock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 400
    response.headers = headers or {}
    response.text = text
    response.json = Mock(return_value=json_data)
    if status_code >= 400:
        response.raise_for_status = Mock(
            side_effect=requests.exceptions.HTTPError(f"{status_code} Error")
        )
    else:
        response.raise_for_status = Mock()
    return response
