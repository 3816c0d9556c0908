"""
DEAL RECORD

Purpose:
- Client-side view of an owner-authored offer
- Translate between the backend's JSON shape and Python fields

Requirements:
- Exactly one status per deal
- rejection_reason only meaningful while REJECTED
"""

from dataclasses import dataclass, field, replace
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Optional

from marketplace.core.lifecycle import DealStatus

DEAL_TYPES = ["Lunch", "Carryout", "Delivery", "Other"]
DISCOUNT_TYPES = ["percent", "amount", "bogo", "other"]


def _to_decimal(value: Any) -> Optional[Decimal]:
    if value is None or value == "":
        return None
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None
    return amount if amount.is_finite() else None


@dataclass(frozen=True)
class Discount:
    """Discount descriptor: type plus a value where the type needs one."""
    discount_type: str = "other"
    value: Optional[Decimal] = None

    def describe(self) -> str:
        if self.discount_type == "percent" and self.value is not None:
            return f"{self.value}% off"
        if self.discount_type == "amount" and self.value is not None:
            return f"${self.value} off"
        if self.discount_type == "bogo":
            return "Buy one, get one"
        return "Special offer"


@dataclass(frozen=True)
class Deal:
    """
    Immutable snapshot of a deal as last acknowledged by the backend.

    Attributes:
        deal_id: Backend identity
        title: Headline shown on cards
        restaurant_name: Restaurant offering the deal
        status: Lifecycle status
        description: Free text
        deal_type: Lunch | Carryout | Delivery | Other
        discount: Discount descriptor
        price: Unit price for cart-eligible deals
        rejection_reason: Admin's reason while REJECTED
        created_at: ISO timestamp from the backend
        owner_id: Owning actor
    """
    deal_id: str
    title: str
    restaurant_name: str
    status: DealStatus = DealStatus.DRAFT
    description: str = ""
    deal_type: Optional[str] = None
    discount: Discount = field(default_factory=Discount)
    price: Optional[Decimal] = None
    rejection_reason: Optional[str] = None
    created_at: Optional[str] = None
    owner_id: Optional[str] = None

    @property
    def is_cart_eligible(self) -> bool:
        return (
            self.price is not None
            and self.price >= 0
            and self.status == DealStatus.PUBLISHED
        )

    def with_changes(self, **changes) -> "Deal":
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the backend's JSON shape."""
        return {
            "_id": self.deal_id,
            "title": self.title,
            "restaurantName": self.restaurant_name,
            "status": self.status.value,
            "description": self.description,
            "dealType": self.deal_type,
            "discountType": self.discount.discount_type,
            "value": float(self.discount.value) if self.discount.value is not None else None,
            "price": float(self.price) if self.price is not None else None,
            "rejectionReason": self.rejection_reason,
            "createdAt": self.created_at,
            "ownerId": self.owner_id,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Deal":
        """Create a deal from a backend payload."""
        raw_id = data.get("_id") or data.get("id")
        if raw_id is None or raw_id == "":
            raise ValueError("Deal record has no id")
        status = DealStatus(data.get("status") or DealStatus.DRAFT.value)
        reason = data.get("rejectionReason") or None
        owner = data.get("ownerId") or data.get("owner")
        if isinstance(owner, dict):
            owner = owner.get("_id")
        return cls(
            deal_id=str(raw_id),
            title=data.get("title", ""),
            restaurant_name=data.get("restaurantName", ""),
            status=status,
            description=data.get("description") or "",
            deal_type=data.get("dealType"),
            discount=Discount(
                discount_type=data.get("discountType") or "other",
                value=_to_decimal(data.get("value")),
            ),
            price=_to_decimal(data.get("price")),
            rejection_reason=reason if status == DealStatus.REJECTED else None,
            created_at=data.get("createdAt"),
            owner_id=str(owner) if owner else None,
        )
