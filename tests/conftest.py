import base64
import json

import pytest

from marketplace.integrations.api_client import ApiClient
from marketplace.storage.local_storage import MemoryStorage


def make_token(payload, header=None):
    """Build an unsigned header.payload.signature credential."""
    def seg(obj):
        raw = json.dumps(obj).encode("utf-8")
        return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")

    return f"{seg(header or {'alg': 'HS256', 'typ': 'JWT'})}.{seg(payload)}.signature"


class FakeApi(ApiClient):
    """Records requests and answers from a route table instead of the network."""

    def __init__(self, routes=None):
        super().__init__(base_url="http://backend.test")
        self.routes = dict(routes or {})
        self.calls = []
        self.on_request = None

    def request(self, method, path, body=None, params=None):
        self.calls.append((method, path, body))
        if self.on_request:
            self.on_request(method, path)
        result = self.routes.get((method, path))
        if isinstance(result, Exception):
            raise result
        if callable(result):
            return result(body)
        return result


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def fake_api():
    return FakeApi()


@pytest.fixture
def token_for():
    return make_token
