"""
CART AGGREGATOR

Purpose:
- One quantity-carrying entry per deal
- Derived total and count
- Survive reloads via local storage

Requirements:
• Price/title are snapshotted when a deal is first added
• Every mutation rewrites the persisted collection
• A corrupt persisted blob yields an empty cart, never a crash
• total/count are recomputed on every read
"""

import json
import logging
from dataclasses import dataclass, replace
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, List

from marketplace.storage.local_storage import LocalStorage

logger = logging.getLogger(__name__)

MONEY = Decimal("0.01")


def _money(x: Decimal) -> Decimal:
    return x.quantize(MONEY, rounding=ROUND_HALF_UP)


def _price(value) -> Decimal:
    """Parse a unit price; only finite, non-negative amounts are accepted."""
    price = Decimal(str(value))
    if not price.is_finite() or price < 0:
        raise ValueError(f"Invalid price: {value!r}")
    return price


@dataclass(frozen=True)
class CartItem:
    deal_id: str
    title: str
    restaurant_name: str
    price: Decimal
    qty: int = 1

    @property
    def line_total(self) -> Decimal:
        return _money(self.price * self.qty)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "dealId": self.deal_id,
            "title": self.title,
            "restaurantName": self.restaurant_name,
            "price": str(self.price),
            "qty": self.qty,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CartItem":
        qty = data["qty"]
        if not isinstance(qty, int) or isinstance(qty, bool) or qty <= 0:
            raise ValueError(f"Invalid quantity: {qty!r}")
        return cls(
            deal_id=str(data["dealId"]),
            title=data["title"],
            restaurant_name=data["restaurantName"],
            price=_price(data["price"]),
            qty=qty,
        )


class Cart:
    """Local cart; the only writer of the persisted cart key."""

    def __init__(self, storage: LocalStorage, key: str):
        self._storage = storage
        self._key = key
        self._items: List[CartItem] = self._load()

    def _load(self) -> List[CartItem]:
        raw = self._storage.get_item(self._key)
        if not raw:
            return []

        try:
            entries = json.loads(raw)
            if not isinstance(entries, list):
                raise ValueError("cart blob is not a list")
            items = [CartItem.from_dict(entry) for entry in entries]
        except (ValueError, KeyError, TypeError, ArithmeticError) as e:
            logger.warning(f"Discarding unreadable cart: {e}")
            return []

        # Collapse any duplicated rows so the one-entry-per-deal rule holds.
        merged: Dict[str, CartItem] = {}
        for item in items:
            if item.deal_id in merged:
                existing = merged[item.deal_id]
                merged[item.deal_id] = replace(existing, qty=existing.qty + item.qty)
            else:
                merged[item.deal_id] = item
        return list(merged.values())

    def _save(self) -> None:
        self._storage.set_item(self._key, json.dumps([i.to_dict() for i in self._items]))

    @property
    def items(self) -> List[CartItem]:
        return list(self._items)

    @property
    def total(self) -> Decimal:
        return _money(sum((i.price * i.qty for i in self._items), Decimal("0")))

    @property
    def count(self) -> int:
        return sum(i.qty for i in self._items)

    def get(self, deal_id: str):
        for item in self._items:
            if item.deal_id == deal_id:
                return item
        return None

    def add_item(self, deal_id: str, title: str, restaurant_name: str, price) -> None:
        """Add one unit; an existing entry keeps its original snapshot."""
        deal_id = str(deal_id)
        if self.get(deal_id) is not None:
            self._items = [
                replace(i, qty=i.qty + 1) if i.deal_id == deal_id else i
                for i in self._items
            ]
        else:
            self._items = self._items + [
                CartItem(
                    deal_id=deal_id,
                    title=title,
                    restaurant_name=restaurant_name,
                    price=_price(price),
                    qty=1,
                )
            ]
        self._save()

    def decrement_item(self, deal_id: str) -> None:
        """Remove one unit; the entry disappears when it reaches zero."""
        if self.get(deal_id) is None:
            return
        self._items = [
            replace(i, qty=i.qty - 1) if i.deal_id == deal_id else i
            for i in self._items
        ]
        self._items = [i for i in self._items if i.qty > 0]
        self._save()

    def remove_item(self, deal_id: str) -> None:
        self._items = [i for i in self._items if i.deal_id != deal_id]
        self._save()

    def clear_cart(self) -> None:
        self._items = []
        self._save()
        logger.info("Cart cleared")
