# marketplace/services/catalog_service.py

import logging
from typing import Any, Dict, List, Optional

from marketplace.core.deal import Deal
from marketplace.core.lifecycle import DealStatus
from marketplace.integrations.api_client import ApiClient, ApiError

logger = logging.getLogger(__name__)


def list_published_deals(api: ApiClient, params: Optional[Dict[str, Any]] = None) -> List[Deal]:
    """Public catalog. Anything not PUBLISHED is dropped even if returned."""
    data = api.get("/api/deals", params=params) or []
    # Some backend versions wrap the list as {"deals": [...]}
    if isinstance(data, dict):
        data = data.get("deals") or data.get("items") or []
    deals = []
    for entry in data:
        try:
            deal = Deal.from_dict(entry)
        except (ValueError, TypeError, AttributeError) as e:
            logger.warning(f"Skipping unreadable catalog entry: {e}")
            continue
        if deal.status == DealStatus.PUBLISHED:
            deals.append(deal)
    return deals


def list_featured_deals(api: ApiClient, limit: int = 3) -> List[Deal]:
    """Top deals by discount value for the home page; failures yield no deals."""
    try:
        deals = list_published_deals(api, params={"limit": limit, "sort": "value"})
    except ApiError as e:
        logger.warning(f"Featured deals unavailable: {e.message}")
        return []
    return deals[:limit]


def get_deal(api: ApiClient, deal_id: str) -> Deal:
    data = api.get(f"/api/deals/{deal_id}")
    try:
        return Deal.from_dict(data)
    except (ValueError, TypeError, AttributeError) as e:
        logger.warning(f"Unreadable deal {deal_id}: {e}")
        raise ApiError("Deal not found")


def search_places(api: ApiClient, query: str, near: str = "") -> List[Dict[str, Any]]:
    """External places lookup used by the Explore page."""
    params = {"query": query.strip()}
    if near.strip():
        params["near"] = near.strip()
    return api.get("/api/external/places", params=params) or []
