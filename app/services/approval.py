# app/services/approval.py
"""
Admin decisions on reservation requests.

Approving one request is the only point where a slot becomes taken, so it
runs as a single transaction: lock the slot's rows, approve the target with
a compare-and-set and reject every other pending request for the same slot.
Either all of it is committed or none of it.
"""
from dataclasses import dataclass, field
from typing import List, Optional
import logging

from sqlalchemy import func, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import ConflictError, ReservationError, StorageIOError
from app.models.base import utcnow
from app.models.reservation import PENDING_VALUES, Reservation, ReservationStatus
from app.services.reservation_store import ReservationStore

logger = logging.getLogger(__name__)

SUPERSEDED_NOTE = "superseded by an approved reservation for the same slot."


@dataclass
class ApprovalResult:
    reservation: Reservation
    rejected_ids: List[int] = field(default_factory=list)
    changed: bool = True


def _same_slot(reservation: Reservation):
    return (
        Reservation.date == reservation.date,
        Reservation.field == reservation.field,
        Reservation.time_slot == reservation.time_slot,
    )


class ApprovalService:
    def __init__(self, db: Session):
        self.db = db
        self.store = ReservationStore(db)

    def approve(self, reservation_id: int) -> ApprovalResult:
        target = self.store.get_by_id(reservation_id)
        slot = _same_slot(target)

        try:
            # Serializes concurrent approvals of the same slot where the backend supports row locks
            slot_rows = (
                self.db.query(Reservation)
                .filter(*slot)
                .order_by(Reservation.id.asc())
                .with_for_update()
                .populate_existing()
                .all()
            )
            target = next(r for r in slot_rows if r.id == reservation_id)
            others = [r for r in slot_rows if r.id != reservation_id]

            winner = next((r for r in others if r.status is ReservationStatus.approved), None)
            if winner:
                raise ConflictError(f"Slot {target.date} {target.field} {target.time_slot} is already approved for reservation {winner.id}")
            if target.status is ReservationStatus.rejected:
                raise ConflictError(f"Reservation {reservation_id} is already rejected")

            pending_ids = [r.id for r in others if r.status is ReservationStatus.pending]
            if target.status is ReservationStatus.approved and not pending_ids:
                self.db.rollback()
                logger.info(f"ℹ️ Reservation {reservation_id} already approved, nothing to do")
                return ApprovalResult(reservation=self.store.get_by_id(reservation_id), changed=False)

            now = utcnow()
            if target.status is ReservationStatus.pending:
                result = self.db.execute(
                    update(Reservation)
                    .where(Reservation.id == reservation_id, Reservation.status.in_(PENDING_VALUES))
                    .values(status=ReservationStatus.approved, updated_at=now)
                    .execution_options(synchronize_session=False)
                )
                if result.rowcount != 1:
                    raise ConflictError(f"Reservation {reservation_id} changed while it was being approved")

            self.db.execute(
                update(Reservation)
                .where(*slot, Reservation.id != reservation_id, Reservation.status.in_(PENDING_VALUES))
                .values(status=ReservationStatus.rejected, updated_at=now, admin_note=SUPERSEDED_NOTE)
                .execution_options(synchronize_session=False)
            )

            approved_count = (
                self.db.query(func.count(Reservation.id))
                .filter(*slot, Reservation.status == ReservationStatus.approved)
                .scalar()
            )
            if approved_count != 1:
                raise ConflictError(f"Slot {target.date} {target.field} {target.time_slot} was approved concurrently")

            self.db.commit()
        except ReservationError:
            self.db.rollback()
            raise
        except IntegrityError:
            self.db.rollback()
            raise ConflictError(f"Slot of reservation {reservation_id} was approved concurrently")
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Approval of reservation {reservation_id} failed: {e}")
            raise StorageIOError("Could not approve the reservation")

        # Bulk updates bypass the identity map
        self.db.expire_all()
        reservation = self.store.get_by_id(reservation_id)
        logger.info(f"✅ Reservation {reservation_id} approved, {len(pending_ids)} competing request(s) rejected: {pending_ids}")
        return ApprovalResult(reservation=reservation, rejected_ids=pending_ids)

    def reject(self, reservation_id: int, note: Optional[str] = None) -> ApprovalResult:
        target = self.store.get_by_id(reservation_id)
        if target.status is ReservationStatus.rejected:
            return ApprovalResult(reservation=target, changed=False)
        if target.status is ReservationStatus.approved:
            raise ConflictError(f"Reservation {reservation_id} is already approved")

        values = {"status": ReservationStatus.rejected, "updated_at": utcnow()}
        if note:
            values["admin_note"] = note.strip()

        try:
            result = self.db.execute(
                update(Reservation)
                .where(Reservation.id == reservation_id, Reservation.status.in_(PENDING_VALUES))
                .values(**values)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount != 1:
                self.db.rollback()
                current = self.store.get_by_id(reservation_id)
                self.db.refresh(current)
                if current.status is ReservationStatus.rejected:
                    return ApprovalResult(reservation=current, changed=False)
                raise ConflictError(f"Reservation {reservation_id} is already {current.status.value}")
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Rejection of reservation {reservation_id} failed: {e}")
            raise StorageIOError("Could not reject the reservation")

        self.db.expire_all()
        logger.info(f"🚫 Reservation {reservation_id} rejected")
        return ApprovalResult(reservation=target)
