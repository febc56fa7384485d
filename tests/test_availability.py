from app.schemas.availability import SlotVerdict
from app.services.approval import ApprovalService
from app.services.availability import AvailabilityResolver
from app.services.block_store import BlockStore
from tests.conftest import FIELD, OTHER_FIELD


def test_empty_slot_is_free(db):
    verdict = AvailabilityResolver(db).resolve("2025-06-01", FIELD, "16-17")

    assert verdict.verdict is SlotVerdict.free
    assert verdict.selectable
    assert verdict.label == "16:00 - 17:00"


def test_pending_request_makes_slot_contested_but_selectable(db, make_reservation):
    make_reservation(customer_name="Ayşe")
    make_reservation(customer_name="Mehmet")

    verdict = AvailabilityResolver(db).resolve("2025-06-01", FIELD, "16-17")

    assert verdict.verdict is SlotVerdict.contested
    assert verdict.selectable
    assert verdict.customer_name == "Ayşe"


def test_approved_request_occupies_slot(db, make_reservation):
    r = make_reservation(customer_name="Ayşe")
    ApprovalService(db).approve(r.id)

    verdict = AvailabilityResolver(db).resolve("2025-06-01", FIELD, "16-17")

    assert verdict.verdict is SlotVerdict.occupied
    assert not verdict.selectable
    assert verdict.customer_name == "Ayşe"


def test_block_takes_precedence_over_reservations(db, make_reservation):
    r = make_reservation()
    ApprovalService(db).approve(r.id)
    BlockStore(db).create_block("2025-06-01", "2025-06-01", "all", "16-17", "pitch repair")

    verdict = AvailabilityResolver(db).resolve("2025-06-01", FIELD, "16-17")

    assert verdict.verdict is SlotVerdict.blocked
    assert not verdict.selectable
    assert verdict.reason == "pitch repair"


def test_rejected_requests_do_not_affect_the_slot(db, make_reservation):
    r = make_reservation()
    ApprovalService(db).reject(r.id)

    assert AvailabilityResolver(db).resolve("2025-06-01", FIELD, "16-17").verdict is SlotVerdict.free


def test_resolve_day_covers_every_slot(db, make_reservation):
    approved = make_reservation(time_slot="17-18", customer_name="Can")
    ApprovalService(db).approve(approved.id)
    make_reservation(time_slot="18-19", customer_name="Deniz")
    make_reservation(field=OTHER_FIELD, time_slot="19-20")
    BlockStore(db).create_block("2025-05-30", "2025-06-02", FIELD, "21-22", "lights off")

    verdicts = {v.time_slot: v for v in AvailabilityResolver(db).resolve_day("2025-06-01", FIELD)}

    assert list(verdicts) == ["16-17", "17-18", "18-19", "19-20", "20-21", "21-22"]
    assert verdicts["16-17"].verdict is SlotVerdict.free
    assert verdicts["17-18"].verdict is SlotVerdict.occupied
    assert verdicts["18-19"].verdict is SlotVerdict.contested
    assert verdicts["18-19"].customer_name == "Deniz"
    assert verdicts["19-20"].verdict is SlotVerdict.free
    assert verdicts["21-22"].verdict is SlotVerdict.blocked
    assert verdicts["21-22"].reason == "lights off"
