import enum
from sqlalchemy import Column, String, Text, DateTime, Index, text
from sqlalchemy.types import TypeDecorator
from app.models.base import BaseModel, utcnow

LEGACY_PENDING = "Beklemede"


class ReservationStatus(str, enum.Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"

    @classmethod
    def normalize(cls, value) -> "ReservationStatus":
        """Maps stored or incoming values to the enum; the legacy "Beklemede" reads as pending."""
        if isinstance(value, cls):
            return value
        if value == LEGACY_PENDING:
            return cls.pending
        return cls(value)

    @property
    def is_terminal(self) -> bool:
        return self is not ReservationStatus.pending


# Raw column values that mean "pending", used in SQL filters so legacy rows match
PENDING_VALUES = (ReservationStatus.pending.value, LEGACY_PENDING)


class StatusType(TypeDecorator):
    """Stores the status as plain text and normalizes it when loading."""
    impl = String(20)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if isinstance(value, ReservationStatus):
            return value.value
        # Raw strings pass through untouched so filters can target legacy values
        return value

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return ReservationStatus.normalize(value)


class Reservation(BaseModel):
    __tablename__ = "reservations"

    date = Column(String(10), nullable=False)  # YYYY-MM-DD
    field = Column(String(100), nullable=False)
    time_slot = Column(String(10), nullable=False)
    customer_name = Column(String(150), nullable=False)
    payment_proof_url = Column(Text)
    payment_proof_name = Column(String(255))
    status = Column(StatusType(), nullable=False, default=ReservationStatus.pending)
    submitted_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True))
    admin_note = Column(Text)

    __table_args__ = (
        Index("ix_reservations_slot", "date", "field", "time_slot"),
        Index("ix_reservations_status", "status"),
        # At most one approved reservation per slot
        Index(
            "uq_reservations_one_approved",
            "date", "field", "time_slot",
            unique=True,
            sqlite_where=text("status = 'approved'"),
            postgresql_where=text("status = 'approved'"),
        ),
    )

    def __repr__(self):
        return f"<Reservation {self.id} {self.date} {self.field} {self.time_slot} {self.status}>"
