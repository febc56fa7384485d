# app/services/availability.py
from typing import Dict, List
import logging

from sqlalchemy.orm import Session

from app.core import catalog
from app.models.reservation import Reservation, ReservationStatus
from app.schemas.availability import SlotAvailability, SlotVerdict
from app.services.block_store import BlockCheck, BlockStore, first_matching_block, parse_day
from app.services.reservation_store import ReservationStore

logger = logging.getLogger(__name__)

ACTIVE_STATUSES = (ReservationStatus.approved, ReservationStatus.pending)


def decide(day: str, field: str, time_slot: str, block: BlockCheck, reservations: List[Reservation]) -> SlotAvailability:
    """
    Combines a block check and the slot's reservations into one verdict.

    Precedence: blocked, occupied (approved), contested (pending), free.
    ``reservations`` must be oldest first so the earliest customer is reported.
    """
    base = dict(date=day, field=field, time_slot=time_slot, label=catalog.slot_label(time_slot))

    if block.is_blocked:
        return SlotAvailability(
            **base, verdict=SlotVerdict.blocked, selectable=False,
            reason=block.reason, message=block.reason,
        )

    approved = next((r for r in reservations if r.status is ReservationStatus.approved), None)
    if approved:
        return SlotAvailability(
            **base, verdict=SlotVerdict.occupied, selectable=False,
            customer_name=approved.customer_name,
            message=f"Booked by {approved.customer_name}",
        )

    pending = next((r for r in reservations if r.status is ReservationStatus.pending), None)
    if pending:
        # Only approval reserves the slot, so another request is still allowed
        return SlotAvailability(
            **base, verdict=SlotVerdict.contested, selectable=True,
            customer_name=pending.customer_name,
            message=f"{pending.customer_name} has a pending request for this slot; the owner will approve only one",
        )

    return SlotAvailability(**base, verdict=SlotVerdict.free, selectable=True)


class AvailabilityResolver:
    """Recomputed on every call, approvals may land between two requests."""

    def __init__(self, db: Session):
        self.blocks = BlockStore(db)
        self.reservations = ReservationStore(db)

    def resolve(self, day: str, field: str, time_slot: str) -> SlotAvailability:
        target = parse_day(day)
        block = first_matching_block(self.blocks.list_blocks(), target, field, time_slot)
        reservations = []
        if not block.is_blocked:
            reservations = self.reservations.find_by_slot(target.isoformat(), field, time_slot, ACTIVE_STATUSES)
        return decide(target.isoformat(), field, time_slot, block, reservations)

    def resolve_day(self, day: str, field: str) -> List[SlotAvailability]:
        """Verdicts for every catalog slot of one field on one day."""
        target = parse_day(day)
        blocks = self.blocks.list_blocks()

        by_slot: Dict[str, List[Reservation]] = {}
        for r in self.reservations.find_by_day(target.isoformat(), field, ACTIVE_STATUSES):
            by_slot.setdefault(r.time_slot, []).append(r)

        verdicts = []
        for time_slot in catalog.TIME_SLOTS:
            block = first_matching_block(blocks, target, field, time_slot)
            verdicts.append(decide(target.isoformat(), field, time_slot, block, by_slot.get(time_slot, [])))

        logger.debug(f"🔍 Availability {target} {field}: {[v.verdict.value for v in verdicts]}")
        return verdicts
