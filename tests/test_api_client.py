import pytest
import requests

from marketplace.integrations.api_client import ApiClient, ApiError


class FakeResponse:
    def __init__(self, status_code, payload=None, raw=None):
        self.status_code = status_code
        self._payload = payload
        self._raw = raw

    @property
    def ok(self):
        return 200 <= self.status_code < 400

    def json(self):
        if self._raw is not None:
            raise ValueError("No JSON object could be decoded")
        return self._payload


class FakeSession:
    def __init__(self, response=None, exc=None):
        self.response = response
        self.exc = exc
        self.sent = []

    def request(self, method, url, **kwargs):
        self.sent.append((method, url, kwargs))
        if self.exc:
            raise self.exc
        return self.response


def _client(session, token=None):
    return ApiClient(
        base_url="http://backend.test/",
        token_provider=lambda: token,
        timeout=3,
        session=session,
    )


def test_unwraps_data_and_sends_bearer():
    session = FakeSession(FakeResponse(200, {"ok": True, "data": [1, 2]}))

    assert _client(session, token="tok").get("/api/deals") == [1, 2]

    method, url, kwargs = session.sent[0]
    assert method == "GET"
    assert url == "http://backend.test/api/deals"
    assert kwargs["headers"]["Authorization"] == "Bearer tok"
    assert kwargs["timeout"] == 3
    assert "Content-Type" not in kwargs["headers"]


def test_post_sends_json_without_token_when_signed_out():
    session = FakeSession(FakeResponse(201, {"ok": True, "data": {"_id": "1"}}))

    assert _client(session).post("/api/owner/deals", {"title": "x"}) == {"_id": "1"}

    _, _, kwargs = session.sent[0]
    assert kwargs["json"] == {"title": "x"}
    assert kwargs["headers"]["Content-Type"] == "application/json"
    assert "Authorization" not in kwargs["headers"]


def test_ok_false_is_failure_even_with_2xx():
    session = FakeSession(FakeResponse(200, {"ok": False, "error": "Deal not in DRAFT"}))

    with pytest.raises(ApiError) as exc:
        _client(session).post("/api/owner/deals/1/submit")
    assert exc.value.message == "Deal not in DRAFT"
    assert exc.value.status_code == 200


def test_error_status_uses_envelope_message_or_default():
    with pytest.raises(ApiError, match="Forbidden"):
        _client(FakeSession(FakeResponse(403, {"ok": False, "error": "Forbidden"}))).get("/x")

    with pytest.raises(ApiError, match="Request failed"):
        _client(FakeSession(FakeResponse(500, {"ok": True}))).get("/x")


def test_non_json_body_is_failure():
    with pytest.raises(ApiError, match="Request failed"):
        _client(FakeSession(FakeResponse(502, raw="<html>"))).get("/x")


def test_transport_errors_become_api_errors():
    with pytest.raises(ApiError, match="too long"):
        _client(FakeSession(exc=requests.exceptions.Timeout())).get("/x")

    with pytest.raises(ApiError, match="reach"):
        _client(FakeSession(exc=requests.exceptions.ConnectionError())).get("/x")
