import pytest

from marketplace.core.deal import Deal
from marketplace.core.deal_workspace import DealWorkspace
from marketplace.core.lifecycle import DealStatus, Transition
from marketplace.integrations.api_client import ApiError
from security.roles import ADMIN, CUSTOMER, OWNER


def _deal(deal_id, status, **extra):
    data = {
        "_id": deal_id,
        "title": f"Deal {deal_id}",
        "restaurantName": "Luigi's",
        "description": "Two slices and a drink",
        "dealType": "Lunch",
        "discountType": "percent",
        "value": 20,
        "status": status,
    }
    data.update(extra)
    return data


@pytest.fixture
def owner_ws(fake_api):
    fake_api.routes[("GET", "/api/owner/deals")] = [
        _deal("d1", "DRAFT"),
        _deal("d2", "SUBMITTED"),
        _deal("d3", "PUBLISHED"),
        _deal("d4", "REJECTED", rejectionReason="blurry photo"),
    ]
    ws = DealWorkspace(fake_api, OWNER)
    ws.load_owner_deals()
    return ws


@pytest.fixture
def admin_ws(fake_api):
    fake_api.routes[("GET", "/api/admin/deals/submitted")] = [_deal("s1", "SUBMITTED")]
    ws = DealWorkspace(fake_api, ADMIN)
    ws.load_submitted_queue()
    return ws


def test_load_and_filter_are_read_only(owner_ws):
    assert [d.deal_id for d in owner_ws.filter_by_status("ALL")] == ["d1", "d2", "d3", "d4"]
    assert [d.deal_id for d in owner_ws.filter_by_status(DealStatus.REJECTED)] == ["d4"]
    assert [d.deal_id for d in owner_ws.filter_by_status("DRAFT")] == ["d1"]
    assert owner_ws.status_counts() == {"DRAFT": 1, "SUBMITTED": 1, "PUBLISHED": 1, "REJECTED": 1}
    assert owner_ws.get("d4").rejection_reason == "blurry photo"


def test_create_draft_prepends_backend_copy(owner_ws, fake_api):
    fake_api.routes[("POST", "/api/owner/deals")] = lambda body: {**body, "_id": "new", "status": "DRAFT"}

    outcome = owner_ws.create_draft({"title": "Taco Tuesday", "restaurantName": "Casa", "description": "x"})

    assert outcome.ok
    assert owner_ws.deals[0].deal_id == "new"
    assert owner_ws.deals[0].status == DealStatus.DRAFT


def test_submit_from_draft(owner_ws, fake_api):
    fake_api.routes[("POST", "/api/owner/deals/d1/submit")] = {}

    outcome = owner_ws.submit_deal("d1")

    assert outcome.ok
    assert owner_ws.get("d1").status == DealStatus.SUBMITTED
    assert fake_api.calls[-1] == ("POST", "/api/owner/deals/d1/submit", None)


@pytest.mark.parametrize("deal_id", ["d2", "d3"])
def test_submit_refused_locally_without_request(owner_ws, fake_api, deal_id):
    before = owner_ws.get(deal_id)
    calls_before = len(fake_api.calls)

    outcome = owner_ws.submit_deal(deal_id)

    assert not outcome.ok
    assert owner_ws.get(deal_id) == before
    assert len(fake_api.calls) == calls_before


def test_failed_request_leaves_deal_unchanged(owner_ws, fake_api):
    fake_api.routes[("POST", "/api/owner/deals/d1/submit")] = ApiError("Deal is incomplete", 400)
    before = owner_ws.get("d1")

    outcome = owner_ws.submit_deal("d1")

    assert not outcome.ok
    assert outcome.message == "Deal is incomplete"
    assert owner_ws.get("d1") == before
    # No automatic retry
    assert [c for c in fake_api.calls if c[1] == "/api/owner/deals/d1/submit"] == [
        ("POST", "/api/owner/deals/d1/submit", None)
    ]


def test_edit_keeps_status_and_reason(owner_ws, fake_api):
    fake_api.routes[("PUT", "/api/owner/deals/d4")] = lambda body: {**_deal("d4", "SUBMITTED"), **body}

    outcome = owner_ws.edit_deal("d4", {"title": "  Better title ", "description": "Now with photo"})

    assert outcome.ok
    updated = owner_ws.get("d4")
    assert updated.title == "Better title"
    assert updated.status == DealStatus.REJECTED
    assert updated.rejection_reason == "blurry photo"
    assert fake_api.calls[-1][2] == {"title": "Better title", "description": "Now with photo"}


def test_edit_refused_after_submission(owner_ws):
    outcome = owner_ws.edit_deal("d2", {"title": "sneaky"})
    assert not outcome.ok
    assert owner_ws.get("d2").title == "Deal d2"


def test_edit_rejects_unknown_fields(owner_ws):
    outcome = owner_ws.edit_deal("d1", {"status": "PUBLISHED"})
    assert not outcome.ok
    assert owner_ws.get("d1").status == DealStatus.DRAFT


def test_delete_only_drafts(owner_ws, fake_api):
    fake_api.routes[("DELETE", "/api/owner/deals/d1")] = None

    assert owner_ws.delete_deal("d1").ok
    assert owner_ws.get("d1") is None
    assert not owner_ws.delete_deal("d4").ok
    assert owner_ws.get("d4") is not None


def test_approve_publishes(admin_ws, fake_api):
    fake_api.routes[("POST", "/api/admin/deals/s1/approve")] = {}

    outcome = admin_ws.approve_deal("s1")

    assert outcome.ok
    assert admin_ws.get("s1").status == DealStatus.PUBLISHED
    assert admin_ws.submitted_queue() == []


def test_reject_requires_reason(admin_ws, fake_api):
    outcome = admin_ws.reject_deal("s1", "   ")

    assert not outcome.ok
    assert admin_ws.get("s1").status == DealStatus.SUBMITTED
    assert not any(c[1].endswith("/reject") for c in fake_api.calls)


def test_reject_then_resubmit_clears_reason(fake_api):
    fake_api.routes[("GET", "/api/admin/deals/submitted")] = [_deal("x", "SUBMITTED")]
    fake_api.routes[("POST", "/api/admin/deals/x/reject")] = {}
    admin = DealWorkspace(fake_api, ADMIN)
    admin.load_submitted_queue()

    assert admin.reject_deal("x", "incomplete description").ok
    rejected = admin.get("x")
    assert rejected.status == DealStatus.REJECTED
    assert rejected.rejection_reason == "incomplete description"
    assert fake_api.calls[-1][2] == {"reason": "incomplete description"}

    fake_api.routes[("GET", "/api/owner/deals")] = [rejected.to_dict()]
    fake_api.routes[("POST", "/api/owner/deals/x/submit")] = {}
    owner = DealWorkspace(fake_api, OWNER)
    owner.load_owner_deals()
    assert owner.get("x").rejection_reason == "incomplete description"

    assert owner.submit_deal("x").ok
    assert owner.get("x").status == DealStatus.SUBMITTED
    assert owner.get("x").rejection_reason is None


def test_owner_cannot_approve_and_customer_cannot_submit(owner_ws, fake_api):
    assert not owner_ws.approve_deal("d2").ok
    customer = DealWorkspace(fake_api, CUSTOMER)
    customer.deals = list(owner_ws.deals)
    assert not customer.submit_deal("d1").ok
    assert customer.get("d1").status == DealStatus.DRAFT


def test_second_request_while_pending_is_refused(owner_ws, fake_api):
    fake_api.routes[("POST", "/api/owner/deals/d1/submit")] = {}
    nested = []

    def reenter(method, path):
        if path.endswith("/submit") and not nested:
            assert owner_ws.is_pending("d1")
            assert not owner_ws.can(owner_ws.get("d1"), Transition.SUBMIT)
            nested.append(owner_ws.submit_deal("d1"))

    fake_api.on_request = reenter

    outcome = owner_ws.submit_deal("d1")

    assert outcome.ok
    assert not nested[0].ok
    assert not owner_ws.is_pending("d1")
    assert len([c for c in fake_api.calls if c[1].endswith("/submit")]) == 1


def test_deal_from_dict_drops_reason_outside_rejected():
    deal = Deal.from_dict(_deal("z", "SUBMITTED", rejectionReason="stale"))
    assert deal.rejection_reason is None


def test_load_skips_records_with_unknown_status(fake_api):
    fake_api.routes[("GET", "/api/owner/deals")] = [_deal("ok", "DRAFT"), _deal("bad", "ARCHIVED")]
    ws = DealWorkspace(fake_api, OWNER)

    ws.load_owner_deals()

    assert [d.deal_id for d in ws.deals] == ["ok"]


@pytest.mark.parametrize("payload", [None, {"_id": "x", "status": "ARCHIVED"}, {"title": "no id"}])
def test_create_with_unreadable_response_fails_softly(owner_ws, fake_api, payload):
    fake_api.routes[("POST", "/api/owner/deals")] = payload

    outcome = owner_ws.create_draft({"title": "Taco Tuesday", "restaurantName": "Casa"})

    assert not outcome.ok
    assert "could not be read" in outcome.message
    assert [d.deal_id for d in owner_ws.deals] == ["d1", "d2", "d3", "d4"]


def test_edit_with_unreadable_response_keeps_local_copy(owner_ws, fake_api):
    before = owner_ws.get("d1")
    fake_api.routes[("PUT", "/api/owner/deals/d1")] = {"_id": ""}

    outcome = owner_ws.edit_deal("d1", {"title": "Renamed"})

    assert not outcome.ok
    assert owner_ws.get("d1") == before


def test_load_skips_records_without_id(fake_api):
    record = _deal("ignored", "DRAFT")
    del record["_id"]
    fake_api.routes[("GET", "/api/owner/deals")] = [record, _deal("ok", "DRAFT")]
    ws = DealWorkspace(fake_api, OWNER)

    ws.load_owner_deals()

    assert [d.deal_id for d in ws.deals] == ["ok"]
