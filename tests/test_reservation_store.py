import pytest
from sqlalchemy import text

from app.core.exceptions import ConflictError, NotFoundError, ValidationError
from app.models.reservation import Reservation, ReservationStatus
from tests.conftest import FIELD


def test_create_stores_pending_with_timestamps(store):
    r = store.create(date="2025-06-01", field=FIELD, time_slot="16-17", customer_name="  Ali Veli ")

    assert r.id is not None
    assert r.status is ReservationStatus.pending
    assert r.customer_name == "Ali Veli"
    assert r.created_at is not None
    assert r.submitted_at is not None
    assert r.updated_at is None
    assert r.admin_note is None


def test_create_keeps_payment_proof_pointer(store):
    r = store.create(
        date="2025-06-01", field=FIELD, time_slot="16-17", customer_name="Ali",
        payment_proof_url="https://files.example/dekont.pdf", payment_proof_name="dekont.pdf",
    )
    assert r.payment_proof_url == "https://files.example/dekont.pdf"
    assert r.payment_proof_name == "dekont.pdf"


@pytest.mark.parametrize("overrides", [
    {"date": ""},
    {"date": "2025-13-01"},
    {"field": ""},
    {"field": "unknown-field"},
    {"time_slot": None},
    {"time_slot": "09-10"},
    {"customer_name": "   "},
])
def test_create_validates_before_writing(store, overrides):
    values = dict(date="2025-06-01", field=FIELD, time_slot="16-17", customer_name="Ali")
    values.update(overrides)

    with pytest.raises(ValidationError):
        store.create(**values)
    assert store.list_all() == []


def test_get_by_id_unknown(store):
    with pytest.raises(NotFoundError):
        store.get_by_id(42)


def test_list_all_newest_first(make_reservation, store):
    first = make_reservation(customer_name="first")
    second = make_reservation(customer_name="second")
    third = make_reservation(customer_name="third")

    assert [r.id for r in store.list_all()] == [third.id, second.id, first.id]


def test_update_status_sets_note_and_timestamp(make_reservation, store):
    r = make_reservation()

    updated = store.update_status(r.id, ReservationStatus.rejected, note="wrong receipt")

    assert updated.status is ReservationStatus.rejected
    assert updated.admin_note == "wrong receipt"
    assert updated.updated_at is not None


def test_terminal_record_never_returns_to_pending(make_reservation, store):
    r = make_reservation()
    store.update_status(r.id, "rejected")

    with pytest.raises(ConflictError):
        store.update_status(r.id, ReservationStatus.pending)
    with pytest.raises(ConflictError):
        store.update_status(r.id, "Beklemede")

    assert store.get_by_id(r.id).status is ReservationStatus.rejected


def test_legacy_status_reads_as_pending(make_reservation, store, db):
    r = make_reservation()
    db.execute(text("UPDATE reservations SET status = 'Beklemede' WHERE id = :id"), {"id": r.id})
    db.commit()
    db.expire_all()

    assert store.get_by_id(r.id).status is ReservationStatus.pending
    assert [x.id for x in store.list_pending()] == [r.id]
    assert [x.id for x in store.list_all(status=ReservationStatus.pending)] == [r.id]
    assert store.list_all(status=ReservationStatus.rejected) == []


def test_find_by_slot_filters_tuple_and_status(make_reservation, store):
    a = make_reservation()
    make_reservation(time_slot="17-18")
    make_reservation(date="2025-06-02")
    c = make_reservation()
    store.update_status(c.id, ReservationStatus.rejected)

    assert [r.id for r in store.find_by_slot("2025-06-01", FIELD, "16-17")] == [a.id, c.id]
    assert [r.id for r in store.find_by_slot("2025-06-01", FIELD, "16-17", [ReservationStatus.pending])] == [a.id]


def test_status_normalize():
    assert ReservationStatus.normalize("Beklemede") is ReservationStatus.pending
    assert ReservationStatus.normalize("approved") is ReservationStatus.approved
    with pytest.raises(ValueError):
        ReservationStatus.normalize("cancelled")


def test_second_approved_record_for_slot_is_refused_by_the_database(make_reservation, store, db):
    a = make_reservation()
    b = make_reservation()
    store.update_status(a.id, ReservationStatus.approved)

    with pytest.raises(ConflictError):
        store.update_status(b.id, ReservationStatus.approved)

    db.expire_all()
    assert db.get(Reservation, b.id).status is ReservationStatus.pending
