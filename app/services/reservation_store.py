# app/services/reservation_store.py
from typing import Iterable, List, Optional
import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core import catalog
from app.core.exceptions import ConflictError, NotFoundError, StorageIOError, ValidationError
from app.models.base import utcnow
from app.models.reservation import PENDING_VALUES, Reservation, ReservationStatus
from app.services.block_store import parse_day

logger = logging.getLogger(__name__)


def status_values(statuses: Iterable) -> List[str]:
    """Raw column values for a set of statuses; pending expands to the legacy alias too."""
    values = []
    for s in statuses:
        s = ReservationStatus.normalize(s)
        if s is ReservationStatus.pending:
            values.extend(PENDING_VALUES)
        else:
            values.append(s.value)
    return values


def _required(value: Optional[str], name: str) -> str:
    value = str(value).strip() if value is not None else ""
    if not value:
        raise ValidationError(f"'{name}' is required")
    return value


class ReservationStore:
    def __init__(self, db: Session):
        self.db = db

    def validate(self, date: str, field: str, time_slot: str, customer_name: str) -> dict:
        """Cleaned booking fields, or ValidationError. Nothing is written."""
        day = parse_day(_required(date, "date"))
        field = _required(field, "field")
        time_slot = _required(time_slot, "time_slot")
        customer_name = _required(customer_name, "customer_name")

        if field not in catalog.field_ids():
            raise ValidationError(f"Unknown field '{field}'")
        if time_slot not in catalog.TIME_SLOTS:
            raise ValidationError(f"Unknown time slot '{time_slot}'")

        return {"date": day.isoformat(), "field": field, "time_slot": time_slot, "customer_name": customer_name}

    def create(
        self,
        date: str,
        field: str,
        time_slot: str,
        customer_name: str,
        payment_proof_url: Optional[str] = None,
        payment_proof_name: Optional[str] = None,
    ) -> Reservation:
        """Validates and stores a new request as pending. Callers send notifications themselves."""
        values = self.validate(date, field, time_slot, customer_name)

        now = utcnow()
        reservation = Reservation(
            **values,
            payment_proof_url=payment_proof_url,
            payment_proof_name=payment_proof_name,
            status=ReservationStatus.pending,
            submitted_at=now,
            created_at=now,
        )
        try:
            self.db.add(reservation)
            self.db.commit()
            self.db.refresh(reservation)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Could not create reservation: {e}")
            raise StorageIOError("Could not save the reservation")

        logger.info(f"📝 Reservation {reservation.id} created: {reservation.date} {reservation.field} {reservation.time_slot} ({reservation.customer_name})")
        return reservation

    def get_by_id(self, reservation_id: int) -> Reservation:
        try:
            reservation = self.db.query(Reservation).filter(Reservation.id == reservation_id).first()
        except SQLAlchemyError as e:
            logger.error(f"❌ Could not load reservation {reservation_id}: {e}")
            raise StorageIOError("Could not load the reservation")
        if not reservation:
            raise NotFoundError(f"Reservation {reservation_id} not found")
        return reservation

    def list_all(self, status: Optional[ReservationStatus] = None) -> List[Reservation]:
        """All reservations, newest first."""
        try:
            query = self.db.query(Reservation)
            if status is not None:
                query = query.filter(Reservation.status.in_(status_values([status])))
            return query.order_by(Reservation.created_at.desc(), Reservation.id.desc()).all()
        except SQLAlchemyError as e:
            logger.error(f"❌ Could not list reservations: {e}")
            raise StorageIOError("Could not load reservations")

    def find_by_slot(
        self,
        date: str,
        field: str,
        time_slot: str,
        statuses: Optional[Iterable] = None,
    ) -> List[Reservation]:
        """Reservations for one (date, field, slot) tuple, oldest first."""
        try:
            query = self.db.query(Reservation).filter(
                Reservation.date == date,
                Reservation.field == field,
                Reservation.time_slot == time_slot,
            )
            if statuses is not None:
                query = query.filter(Reservation.status.in_(status_values(statuses)))
            return query.order_by(Reservation.created_at.asc(), Reservation.id.asc()).all()
        except SQLAlchemyError as e:
            logger.error(f"❌ Could not query slot {date} {field} {time_slot}: {e}")
            raise StorageIOError("Could not load reservations")

    def find_by_day(self, date: str, field: str, statuses: Optional[Iterable] = None) -> List[Reservation]:
        try:
            query = self.db.query(Reservation).filter(
                Reservation.date == date,
                Reservation.field == field,
            )
            if statuses is not None:
                query = query.filter(Reservation.status.in_(status_values(statuses)))
            return query.order_by(Reservation.created_at.asc(), Reservation.id.asc()).all()
        except SQLAlchemyError as e:
            logger.error(f"❌ Could not query {date} {field}: {e}")
            raise StorageIOError("Could not load reservations")

    def list_pending(self) -> List[Reservation]:
        try:
            return (
                self.db.query(Reservation)
                .filter(Reservation.status.in_(PENDING_VALUES))
                .order_by(Reservation.id.asc())
                .all()
            )
        except SQLAlchemyError as e:
            logger.error(f"❌ Could not list pending reservations: {e}")
            raise StorageIOError("Could not load reservations")

    def update_status(self, reservation_id: int, new_status, note: Optional[str] = None) -> Reservation:
        """Sets the status of one record. Cascading is handled by the approval service."""
        new_status = ReservationStatus.normalize(new_status)
        reservation = self.get_by_id(reservation_id)

        if reservation.status.is_terminal and new_status is ReservationStatus.pending:
            raise ConflictError(f"Reservation {reservation_id} is already {reservation.status.value}")

        reservation.status = new_status
        reservation.updated_at = utcnow()
        if note is not None:
            reservation.admin_note = note
        try:
            self.db.commit()
            self.db.refresh(reservation)
        except IntegrityError:
            self.db.rollback()
            raise ConflictError(f"Slot of reservation {reservation_id} already has an approved reservation")
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Could not update reservation {reservation_id}: {e}")
            raise StorageIOError("Could not update the reservation")

        logger.info(f"🔧 Reservation {reservation_id} -> {new_status.value}")
        return reservation
