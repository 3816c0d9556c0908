"""
ORDER SERVICE

Checkout and order history. Placing an order is the one code path that
clears the cart, and only after the backend has accepted the order.
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Callable, Dict, List, Optional

from marketplace.core.cart import Cart
from marketplace.integrations.api_client import ApiClient, ApiError
from marketplace.integrations.payments import create_payment_intent

logger = logging.getLogger(__name__)

ORDER_STATUSES = ["Placed", "Preparing", "Ready", "Completed"]


@dataclass(frozen=True)
class OrderLine:
    deal_id: str
    title: str
    restaurant_name: str
    price: Decimal
    qty: int


@dataclass(frozen=True)
class Order:
    order_id: str
    status: str
    total: Decimal
    created_at: Optional[str] = None
    paid_at: Optional[str] = None
    items: List[OrderLine] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Order":
        return cls(
            order_id=str(data["_id"]),
            status=data.get("status", "Placed"),
            total=Decimal(str(data.get("total", 0))),
            created_at=data.get("createdAt"),
            paid_at=data.get("paidAt"),
            items=[
                OrderLine(
                    deal_id=str(i.get("dealId")),
                    title=i.get("title", ""),
                    restaurant_name=i.get("restaurantName", ""),
                    price=Decimal(str(i.get("price", 0))),
                    qty=int(i.get("qty", 0)),
                )
                for i in data.get("items") or []
            ],
        )


def place_order(
    api: ApiClient,
    cart: Cart,
    confirm_payment: Callable[[str], str],
) -> Dict[str, Any]:
    """
    Pay for the cart and create the order.

    Steps:
        1. Create a payment intent for the cart total
        2. Confirm it with the processor; confirm_payment returns the
           intent id only once the charge has succeeded
        3. Create the order with the intent id
        4. Clear the cart

    Raises:
        ApiError: any step failed; the cart is left as it was
    """
    items = cart.items
    if not items:
        raise ApiError("Your cart is empty")

    secret = create_payment_intent(api, cart.total)
    intent_id = confirm_payment(secret)

    order = api.post("/api/orders", {
        "items": [{"dealId": i.deal_id, "qty": i.qty} for i in items],
        "stripePaymentIntentId": intent_id,
    })

    cart.clear_cart()
    logger.info(f"Order placed for {len(items)} line(s)")
    return order or {}


def list_orders(api: ApiClient) -> List[Order]:
    orders = []
    for entry in api.get("/api/orders") or []:
        try:
            orders.append(Order.from_dict(entry))
        except (KeyError, ValueError, TypeError, AttributeError, ArithmeticError) as e:
            logger.warning(f"Skipping unreadable order record: {e!r}")
    return orders
