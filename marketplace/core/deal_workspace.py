"""
DEAL LIFECYCLE ENGINE

Purpose:
- Hold the deals loaded for the owner portal or the admin queue
- Drive lifecycle transitions through the backend
- Reconcile the local list only after the backend acknowledges

Rules:
- Legality is checked locally via lifecycle.next_status before any request
- One request per transition, never retried automatically
- Local mutation happens only in the success continuation
- A deal with a pending request refuses further transitions
- Status filters are read-only projections
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Set

from marketplace.core.deal import Deal
from marketplace.core.lifecycle import (
    DealStatus,
    LifecycleError,
    Transition,
    can_transition,
    next_status,
)
from marketplace.core.role_guard import AuthorizationError
from marketplace.integrations.api_client import ApiClient, ApiError

logger = logging.getLogger(__name__)

UNREADABLE_RESPONSE = "The server sent back a deal that could not be read. Reload the list."

EDITABLE_FIELDS = {
    "title": "title",
    "description": "description",
    "restaurant_name": "restaurantName",
    "deal_type": "dealType",
    "price": "price",
}


@dataclass
class TransitionOutcome:
    """Result of a transition request, ready to show as a scoped message."""
    ok: bool
    message: str
    deal: Optional[Deal] = None


class DealWorkspace:
    """
    Working set of deals for one actor.

    Args:
        api: API gateway
        role: Role of the acting user (from the credential store)
    """

    def __init__(self, api: ApiClient, role: Optional[str]):
        self.api = api
        self.role = role
        self.deals: List[Deal] = []
        self._pending: Set[str] = set()

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------
    @staticmethod
    def _parse(data) -> List[Deal]:
        deals = []
        for entry in data or []:
            try:
                deals.append(Deal.from_dict(entry))
            except (ValueError, TypeError, AttributeError) as e:
                logger.warning(f"Skipping unreadable deal record: {e}")
        return deals

    def load_owner_deals(self) -> None:
        self.deals = self._parse(self.api.get("/api/owner/deals"))
        logger.info(f"Loaded {len(self.deals)} owner deals")

    def load_submitted_queue(self) -> None:
        self.deals = self._parse(self.api.get("/api/admin/deals/submitted"))
        logger.info(f"Loaded {len(self.deals)} deals awaiting review")

    # ------------------------------------------------------------------
    # Read-side projections
    # ------------------------------------------------------------------
    def get(self, deal_id: str) -> Optional[Deal]:
        for deal in self.deals:
            if deal.deal_id == deal_id:
                return deal
        return None

    def filter_by_status(self, status=None) -> List[Deal]:
        """Deals in the given status; None (or "ALL") returns everything."""
        if status is None or status == "ALL":
            return list(self.deals)
        status = DealStatus(status)
        return [d for d in self.deals if d.status == status]

    def submitted_queue(self) -> List[Deal]:
        return self.filter_by_status(DealStatus.SUBMITTED)

    def status_counts(self) -> Dict[str, int]:
        counts = {s.value: 0 for s in DealStatus}
        for deal in self.deals:
            counts[deal.status.value] += 1
        return counts

    def is_pending(self, deal_id: str) -> bool:
        """
        Whether a request for this deal is in flight.

        The flag lives only for the duration of the blocking request call.
        Streamlit runs the script synchronously, so a rerun never observes
        it set; it guards re-entry from within the same run (callbacks or
        a shared workspace) rather than the rendered button state.
        """
        return deal_id in self._pending

    def can(self, deal: Deal, transition: Transition) -> bool:
        """Whether the control for this transition should be enabled."""
        if self.is_pending(deal.deal_id):
            return False
        return can_transition(deal.status, transition, self.role)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------
    def _replace(self, updated: Deal) -> None:
        self.deals = [updated if d.deal_id == updated.deal_id else d for d in self.deals]

    def _transition(self, deal_id: str, transition: Transition, method: str, path: str,
                    body: Optional[Dict[str, Any]] = None):
        """
        Validate, issue the request and return (new_status, response_data).

        Raises LifecycleError/AuthorizationError before any request and
        ApiError when the backend refuses; local state is untouched in
        every failure path.
        """
        deal = self.get(deal_id)
        if deal is None:
            raise LifecycleError(f"Deal {deal_id} is not in the current list")
        if self.is_pending(deal_id):
            raise LifecycleError("Another request for this deal is still in progress")

        status = next_status(deal.status, transition, self.role)

        self._pending.add(deal_id)
        try:
            data = self.api.request(method, path, body=body)
        finally:
            self._pending.discard(deal_id)

        logger.info(f"Deal {deal_id}: {transition.value} acknowledged")
        return status, data

    def _run(self, action: str, fn, *args) -> TransitionOutcome:
        try:
            return fn(*args)
        except (LifecycleError, AuthorizationError) as e:
            logger.warning(f"{action} refused locally: {e}")
            return TransitionOutcome(False, str(e))
        except ApiError as e:
            return TransitionOutcome(False, e.message or f"{action} failed")

    def create_draft(self, fields: Dict[str, Any]) -> TransitionOutcome:
        return self._run("Create", self._create_draft, fields)

    def _create_draft(self, fields: Dict[str, Any]) -> TransitionOutcome:
        next_status(None, Transition.CREATE, self.role)
        data = self.api.post("/api/owner/deals", fields)
        try:
            created = Deal.from_dict(data)
        except (ValueError, TypeError, AttributeError) as e:
            logger.warning(f"Create acknowledged with an unreadable deal: {e}")
            return TransitionOutcome(False, UNREADABLE_RESPONSE)
        self.deals = [created] + self.deals
        logger.info(f"Draft {created.deal_id} created")
        return TransitionOutcome(True, "Draft created.", created)

    def edit_deal(self, deal_id: str, changes: Dict[str, Any]) -> TransitionOutcome:
        return self._run("Edit", self._edit_deal, deal_id, changes)

    def _edit_deal(self, deal_id: str, changes: Dict[str, Any]) -> TransitionOutcome:
        body = {}
        for name, value in changes.items():
            if name not in EDITABLE_FIELDS:
                raise LifecycleError(f"Field '{name}' cannot be edited")
            body[EDITABLE_FIELDS[name]] = value.strip() if isinstance(value, str) else value

        status, data = self._transition(deal_id, Transition.EDIT, "PUT",
                                        f"/api/owner/deals/{deal_id}", body)
        current = self.get(deal_id)
        if isinstance(data, dict) and data:
            merged = {**current.to_dict(), **data}
        else:
            merged = {**current.to_dict(), **body}
        # Status never changes on edit, whatever the response echoes.
        merged["status"] = status.value
        merged["rejectionReason"] = current.rejection_reason
        try:
            updated = Deal.from_dict(merged)
        except (ValueError, TypeError, AttributeError) as e:
            logger.warning(f"Edit of {deal_id} acknowledged with an unreadable deal: {e}")
            return TransitionOutcome(False, UNREADABLE_RESPONSE)
        self._replace(updated)
        return TransitionOutcome(True, "Deal updated.", updated)

    def submit_deal(self, deal_id: str) -> TransitionOutcome:
        return self._run("Submit", self._submit_deal, deal_id)

    def _submit_deal(self, deal_id: str) -> TransitionOutcome:
        status, _ = self._transition(deal_id, Transition.SUBMIT, "POST",
                                     f"/api/owner/deals/{deal_id}/submit")
        updated = self.get(deal_id).with_changes(status=status, rejection_reason=None)
        self._replace(updated)
        return TransitionOutcome(True, "Deal submitted for review.", updated)

    def delete_deal(self, deal_id: str) -> TransitionOutcome:
        return self._run("Delete", self._delete_deal, deal_id)

    def _delete_deal(self, deal_id: str) -> TransitionOutcome:
        self._transition(deal_id, Transition.DELETE, "DELETE", f"/api/owner/deals/{deal_id}")
        self.deals = [d for d in self.deals if d.deal_id != deal_id]
        return TransitionOutcome(True, "Draft deleted.")

    def approve_deal(self, deal_id: str) -> TransitionOutcome:
        return self._run("Approve", self._approve_deal, deal_id)

    def _approve_deal(self, deal_id: str) -> TransitionOutcome:
        status, _ = self._transition(deal_id, Transition.APPROVE, "POST",
                                     f"/api/admin/deals/{deal_id}/approve")
        updated = self.get(deal_id).with_changes(status=status)
        self._replace(updated)
        return TransitionOutcome(True, "Deal approved and published.", updated)

    def reject_deal(self, deal_id: str, reason: str) -> TransitionOutcome:
        return self._run("Reject", self._reject_deal, deal_id, reason)

    def _reject_deal(self, deal_id: str, reason: str) -> TransitionOutcome:
        reason = (reason or "").strip()
        if not reason:
            raise LifecycleError("A rejection reason is required")

        status, _ = self._transition(deal_id, Transition.REJECT, "POST",
                                     f"/api/admin/deals/{deal_id}/reject", {"reason": reason})
        updated = self.get(deal_id).with_changes(status=status, rejection_reason=reason)
        self._replace(updated)
        return TransitionOutcome(True, "Deal rejected.", updated)
