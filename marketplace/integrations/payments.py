"""
PAYMENT INTEGRATION

Purpose:
- Ask the backend for a payment intent sized to the cart total
- Confirm the intent with the external processor before any order exists

Requirements:
• Amounts travel in integer cents
• Card data never passes through this client
"""

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

import requests

from marketplace import config
from marketplace.integrations.api_client import ApiClient, ApiError

logger = logging.getLogger(__name__)

SECRET_MARKER = "_secret_"
PROCESSOR_URL = "https://api.stripe.com/v1"


def to_cents(amount: Decimal) -> int:
    return int((Decimal(amount) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def create_payment_intent(api: ApiClient, amount: Decimal) -> str:
    """
    Create a payment intent for ``amount`` and return its client secret.

    Raises:
        ApiError: backend refused or returned no secret
    """
    cents = to_cents(amount)
    if cents <= 0:
        raise ApiError("Nothing to pay for")

    data = api.post("/api/payments/create-intent", {"amount": cents})
    secret = data.get("clientSecret") if isinstance(data, dict) else None
    if not secret:
        raise ApiError("Payment could not be started")

    logger.info(f"Payment intent created for {cents} cents")
    return secret


def payment_intent_id(client_secret: str) -> Optional[str]:
    """Processor client secrets are ``<intent id>_secret_<nonce>``."""
    if not client_secret or SECRET_MARKER not in client_secret:
        return None
    return client_secret.split(SECRET_MARKER, 1)[0] or None


def confirm_card_payment(
    client_secret: str,
    payment_method: str,
    publishable_key: str = config.STRIPE_PUBLISHABLE_KEY,
    session: Optional[requests.Session] = None,
    timeout: float = config.API_TIMEOUT,
) -> str:
    """
    Confirm a payment intent with the processor and return its id.

    Uses the publishable key plus the intent's client secret, the same
    pair the browser SDK sends, so no secret key ever reaches this client.

    Raises:
        ApiError: not configured, unreachable, declined or not yet captured
    """
    intent_id = payment_intent_id(client_secret)
    if not intent_id:
        raise ApiError("Payment failed")
    if not publishable_key:
        raise ApiError("Card payments are not configured")
    if not payment_method:
        raise ApiError("Choose a payment method")

    session = session or requests.Session()
    try:
        response = session.request(
            "POST",
            f"{PROCESSOR_URL}/payment_intents/{intent_id}/confirm",
            data={"client_secret": client_secret, "payment_method": payment_method},
            auth=(publishable_key, ""),
            timeout=timeout,
        )
    except requests.exceptions.Timeout:
        logger.error(f"Timeout confirming {intent_id}")
        raise ApiError("The payment processor took too long to respond")
    except requests.exceptions.RequestException as e:
        logger.error(f"Network error confirming {intent_id}: {str(e)}")
        raise ApiError("Could not reach the payment processor")

    try:
        body = response.json()
    except ValueError:
        body = None

    if not isinstance(body, dict):
        raise ApiError("Payment failed", response.status_code)

    if not response.ok:
        error = body.get("error")
        message = error.get("message") if isinstance(error, dict) else None
        logger.warning(f"Payment {intent_id} declined ({response.status_code})")
        raise ApiError(message or "Payment failed", response.status_code)

    status = body.get("status")
    if status != "succeeded":
        logger.warning(f"Payment {intent_id} not captured: {status}")
        raise ApiError(f"Payment was not completed ({status or 'unknown'})")

    logger.info(f"Payment {intent_id} confirmed")
    return body.get("id") or intent_id
