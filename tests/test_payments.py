import pytest
import requests

from marketplace.integrations.api_client import ApiError
from marketplace.integrations.payments import PROCESSOR_URL, confirm_card_payment

SECRET = "pi_42_secret_abc"


class ProcessorResponse:
    def __init__(self, status_code, payload):
        self.status_code = status_code
        self._payload = payload

    @property
    def ok(self):
        return 200 <= self.status_code < 400

    def json(self):
        return self._payload


class ProcessorSession:
    def __init__(self, response=None, exc=None):
        self.response = response
        self.exc = exc
        self.sent = []

    def request(self, method, url, **kwargs):
        self.sent.append((method, url, kwargs))
        if self.exc:
            raise self.exc
        return self.response


def _confirm(session, key="pk_test_123", method="pm_card_visa"):
    return confirm_card_payment(SECRET, method, publishable_key=key, session=session, timeout=2)


def test_succeeded_intent_returns_its_id():
    session = ProcessorSession(ProcessorResponse(200, {"id": "pi_42", "status": "succeeded"}))

    assert _confirm(session) == "pi_42"

    method, url, kwargs = session.sent[0]
    assert method == "POST"
    assert url == f"{PROCESSOR_URL}/payment_intents/pi_42/confirm"
    assert kwargs["data"] == {"client_secret": SECRET, "payment_method": "pm_card_visa"}
    assert kwargs["auth"] == ("pk_test_123", "")


def test_declined_card_raises_processor_message():
    session = ProcessorSession(ProcessorResponse(402, {"error": {"message": "Your card was declined."}}))

    with pytest.raises(ApiError, match="declined"):
        _confirm(session)


@pytest.mark.parametrize("status", ["requires_action", "processing", None])
def test_unfinished_intent_is_not_a_payment(status):
    session = ProcessorSession(ProcessorResponse(200, {"id": "pi_42", "status": status}))

    with pytest.raises(ApiError, match="not completed"):
        _confirm(session)


def test_missing_configuration_never_contacts_processor():
    session = ProcessorSession(ProcessorResponse(200, {"status": "succeeded"}))

    with pytest.raises(ApiError, match="not configured"):
        _confirm(session, key="")
    with pytest.raises(ApiError, match="payment method"):
        _confirm(session, method="")
    assert session.sent == []


def test_transport_failures_become_api_errors():
    with pytest.raises(ApiError, match="too long"):
        _confirm(ProcessorSession(exc=requests.exceptions.Timeout()))
    with pytest.raises(ApiError, match="reach"):
        _confirm(ProcessorSession(exc=requests.exceptions.ConnectionError()))


def test_unconfirmed_intent_blocks_order(fake_api, storage):
    from marketplace.core.cart import Cart
    from marketplace.services.order_service import place_order

    cart = Cart(storage, "cart")
    cart.add_item("A", "Burger", "Bob's", "10.00")
    fake_api.routes[("POST", "/api/payments/create-intent")] = {"clientSecret": SECRET}
    session = ProcessorSession(ProcessorResponse(200, {"id": "pi_42", "status": "requires_payment_method"}))

    with pytest.raises(ApiError):
        place_order(fake_api, cart, confirm_payment=lambda s: _confirm(session))

    assert all(path != "/api/orders" for _, path, _ in fake_api.calls)
    assert cart.count == 1
