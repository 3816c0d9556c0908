# marketplace/services/favorites_service.py

import logging
from dataclasses import dataclass
from typing import List

from marketplace.integrations.api_client import ApiClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Favorite:
    favorite_id: str
    deal_id: str
    title: str
    restaurant_name: str
    description: str = ""


class FavoritesList:
    """The signed-in user's saved deals."""

    def __init__(self, api: ApiClient):
        self.api = api
        self.items: List[Favorite] = []

    def refresh(self) -> None:
        data = self.api.get("/api/favorites") or []
        items = []
        for entry in data:
            deal = entry.get("dealId") if isinstance(entry, dict) else None
            if not isinstance(deal, dict):
                # Deal was deleted upstream; nothing to show.
                continue
            if not entry.get("_id") or not deal.get("_id"):
                logger.warning(f"Skipping favorite without an id: {entry!r}")
                continue
            items.append(Favorite(
                favorite_id=str(entry["_id"]),
                deal_id=str(deal["_id"]),
                title=deal.get("title", ""),
                restaurant_name=deal.get("restaurantName", ""),
                description=deal.get("description") or "",
            ))
        self.items = items

    def add(self, deal_id: str) -> None:
        self.api.post(f"/api/favorites/{deal_id}")
        logger.info(f"Deal {deal_id} saved to favorites")

    def remove(self, deal_id: str) -> None:
        self.api.delete(f"/api/favorites/{deal_id}")
        self.items = [f for f in self.items if f.deal_id != deal_id]
