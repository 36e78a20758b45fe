"""EnquiryStore: 생성/조회/수정/삭제 동작 테스트"""
from datetime import date, datetime, timedelta

import pytest

from models import Enquiry, db
from services.errors import NotFoundError, ValidationError


def _add(uname, email, mobile, status="new", created_at=None, **extra):
    created_at = created_at or datetime(2024, 1, 1, 9, 0, 0)
    enquiry = Enquiry(
        uname=uname,
        email=email,
        mobile=mobile,
        status=status,
        created_at=created_at,
        updated_at=created_at,
        submission_datetime=created_at,
        **extra,
    )
    db.session.add(enquiry)
    db.session.commit()
    return enquiry


# ── 생성 ──────────────────────────────────────────────

def test_create_forces_new_status_and_timestamps(store):
    enquiry = store.create("Alice", "a@x.com", "9999999999")
    assert enquiry.id is not None
    assert enquiry.status == "new"
    assert enquiry.contacted is False
    assert enquiry.created_at == enquiry.updated_at == enquiry.submission_datetime


@pytest.mark.parametrize(
    "uname,email,mobile",
    [("", "a@x.com", "1"), ("Alice", None, "1"), ("Alice", "a@x.com", "   ")],
)
def test_create_missing_required_persists_nothing(store, uname, email, mobile):
    with pytest.raises(ValidationError):
        store.create(uname, email, mobile)
    assert Enquiry.query.count() == 0


def test_ids_are_not_reused_after_delete(store):
    first = store.create("A", "a@x.com", "1")
    first_id = first.id
    store.delete(first_id)
    second = store.create("B", "b@x.com", "2")
    assert second.id > first_id


# ── 조회 ──────────────────────────────────────────────

def test_list_default_order_is_created_at_desc(store):
    base = datetime(2024, 1, 1)
    _add("Old", "old@x.com", "1", created_at=base)
    _add("Newest", "newest@x.com", "2", created_at=base + timedelta(days=2))
    _add("Middle", "mid@x.com", "3", created_at=base + timedelta(days=1))

    names = [e.uname for e in store.list(sort="bogus", direction="sideways")]
    assert names == ["Newest", "Middle", "Old"]


def test_list_sort_by_uname_asc(store):
    _add("Charlie", "c@x.com", "1")
    _add("alpha", "al@x.com", "2")
    _add("Bravo", "b@x.com", "3")
    names = [e.uname for e in store.list(sort="uname", direction="asc")]
    assert names == sorted(names)


def test_search_matches_email_only(store):
    _add("Bob", "alice.work@x.com", "111")
    _add("Carol", "carol@x.com", "222")
    results = store.list(search="ALICE")
    assert [e.uname for e in results] == ["Bob"]


def test_search_matches_mobile(store):
    _add("Bob", "bob@x.com", "98765")
    _add("Carol", "carol@x.com", "12345")
    assert [e.uname for e in store.list(search="876")] == ["Bob"]


def test_status_and_search_combined(store):
    _add("Alice A", "a1@x.com", "1", status="contacted")
    _add("Alice B", "a2@x.com", "2", status="new")
    _add("Zed", "z@x.com", "3", status="contacted")
    results = store.list(status="contacted", search="alice")
    assert [e.uname for e in results] == ["Alice A"]


def test_get_missing_raises(store):
    with pytest.raises(NotFoundError):
        store.get(12345)


# ── 수정 ──────────────────────────────────────────────

def test_patch_updates_only_given_fields(store):
    enquiry = _add("Alice", "a@x.com", "999", notes="keep me")
    enquiry_id = enquiry.id
    before = enquiry.updated_at

    updated = store.patch(enquiry_id, {"contacted": True})
    assert updated.contacted is True
    assert updated.uname == "Alice"
    assert updated.notes == "keep me"
    assert updated.status == "new"
    assert updated.updated_at > before


def test_patch_empty_mapping_rejected(store):
    enquiry = _add("Alice", "a@x.com", "999")
    with pytest.raises(ValidationError):
        store.patch(enquiry.id, {})


def test_patch_missing_raises_not_found(store):
    with pytest.raises(NotFoundError):
        store.patch(999, {"status": "contacted"})


def test_replace_rewrites_all_fields(store):
    enquiry = _add(
        "Alice", "a@x.com", "999",
        contacted=True, notes="old", followup_date=date(2024, 2, 1), status="interested",
    )
    updated = store.replace(enquiry.id, {"uname": "Alicia", "email": "a@x.com", "mobile": "888"})
    assert updated.uname == "Alicia"
    assert updated.mobile == "888"
    assert updated.contacted is False
    assert updated.notes is None
    assert updated.followup_date is None
    assert updated.status == "new"
    assert updated.updated_at >= updated.created_at


def test_replace_missing_raises_not_found(store):
    with pytest.raises(NotFoundError):
        store.replace(404, {"uname": "A", "email": "a@x.com", "mobile": "1"})


# ── 삭제 ──────────────────────────────────────────────

def test_delete_twice_raises_not_found(store):
    enquiry = store.create("Alice", "a@x.com", "999")
    enquiry_id = enquiry.id
    assert store.delete(enquiry_id) == enquiry_id
    with pytest.raises(NotFoundError):
        store.delete(enquiry_id)


@pytest.mark.parametrize("enquiry_id", [0, -1, 2**31, 10**22])
def test_out_of_range_id_is_not_found(store, enquiry_id):
    with pytest.raises(NotFoundError):
        store.get(enquiry_id)
    with pytest.raises(NotFoundError):
        store.patch(enquiry_id, {"contacted": True})
    with pytest.raises(NotFoundError):
        store.replace(enquiry_id, {"uname": "A", "email": "a@x.com", "mobile": "1"})
    with pytest.raises(NotFoundError):
        store.delete(enquiry_id)
