"""
AgentChat - Test Configuration and Fixtures
"""
import os

import httpx
import pytest
from faker import Faker

# Set testing environment before the settings object is created
os.environ['ENVIRONMENT'] = 'testing'
os.environ['API_BASE_URL'] = 'http://api.test'
os.environ['LOG_LEVEL'] = 'DEBUG'
os.environ['LOG_FILE'] = ''
os.environ['DEFAULT_HEADERS_STR'] = ''

from agentchat.services.api_manager import ApiManager
from agentchat.services.token_provider import TokenProvider

fake = Faker()

TEST_BASE_URL = 'http://api.test'


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served"""

    def __init__(self, handler):
        self.requests = []

        def recording_handler(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(recording_handler)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def token() -> str:
    """A random bearer token"""
    return fake.sha256()


@pytest.fixture
def token_provider(token: str) -> TokenProvider:
    """Token provider holding a cached token and no getter"""
    return TokenProvider(token=token)


@pytest.fixture
def make_api():
    """
    Factory for ApiManager instances backed by a recording mock transport.

    Usage:
        api, transport = make_api(lambda request: httpx.Response(200, json={}))
    """
    def _make(handler, token_provider=None, **kwargs):
        transport = RecordingTransport(handler)
        api = ApiManager(
            base_url=kwargs.pop('base_url', TEST_BASE_URL),
            token_provider=token_provider,
            transport=transport,
            **kwargs
        )
        return api, transport

    return _make
