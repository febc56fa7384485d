# app/services/expiry_sweeper.py
"""
Automatic rejection of stale pending reservations.

A pending request is rejected once 24 hours (configurable) have passed since
the end of its slot. Every run re-scans all pending records and writes the
due ones in a single conditional UPDATE, so runs can crash, restart or
overlap with each other and with approvals without reverting a decision.
"""
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Callable, List, Optional
from zoneinfo import ZoneInfo
import logging
import threading

from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.config import settings
from app.core.catalog import parse_slot
from app.models.base import utcnow
from app.models.reservation import PENDING_VALUES, Reservation, ReservationStatus

logger = logging.getLogger(__name__)

EXPIRED_NOTE = "automatically rejected: no action taken within 24 hours of slot time."


@dataclass
class SweepResult:
    success: bool
    rejected_count: int = 0
    message: str = ""
    error: Optional[str] = None


def slot_deadline(day: str, time_slot: str, tz: ZoneInfo, grace: timedelta) -> Optional[datetime]:
    """End of the slot in local time plus the grace period, or None for malformed data."""
    parsed = parse_slot(time_slot)
    if parsed is None:
        return None
    try:
        midnight = datetime.combine(date.fromisoformat(day), datetime.min.time(), tzinfo=tz)
    except (TypeError, ValueError):
        return None
    # timedelta keeps "23-24" valid
    return midnight + timedelta(hours=parsed[1]) + grace


class ExpirySweeper:
    def __init__(
        self,
        session_factory: Callable[[], Session],
        grace_hours: Optional[int] = None,
        tz_name: Optional[str] = None,
    ):
        self.session_factory = session_factory
        hours = settings.AUTO_REJECT_GRACE_HOURS if grace_hours is None else grace_hours
        self.grace = timedelta(hours=hours)
        self.tz = ZoneInfo(tz_name or settings.TIMEZONE)

    def due_ids(self, pending: List[Reservation], now: datetime) -> List[int]:
        due = []
        for r in pending:
            deadline = slot_deadline(r.date, r.time_slot, self.tz, self.grace)
            if deadline is None:
                logger.warning(f"⚠️ Reservation {r.id} has malformed date/slot ({r.date!r}, {r.time_slot!r}), skipped")
                continue
            if now >= deadline:
                logger.info(f"❌ Rejecting {r.id} - {r.customer_name} - {r.date} {r.time_slot} (deadline {deadline.isoformat()})")
                due.append(r.id)
        return due

    def run_once(self, now: Optional[datetime] = None) -> SweepResult:
        """One sweep; storage failures are reported in the result and retried next tick."""
        now = now or datetime.now(timezone.utc)
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        logger.info("🔍 Checking for expired pending reservations...")

        db = self.session_factory()
        try:
            pending = db.query(Reservation).filter(Reservation.status.in_(PENDING_VALUES)).all()
            if not pending:
                db.rollback()
                logger.info("✅ No pending reservations")
                return SweepResult(success=True, message="No pending reservations")

            due = self.due_ids(pending, now)
            if not due:
                db.rollback()
                logger.info("✅ Nothing to reject")
                return SweepResult(success=True, message="Nothing to reject")

            # One statement for the whole batch; approvals that won the race are left alone
            result = db.execute(
                update(Reservation)
                .where(Reservation.id.in_(due), Reservation.status.in_(PENDING_VALUES))
                .values(status=ReservationStatus.rejected, updated_at=utcnow(), admin_note=EXPIRED_NOTE)
                .execution_options(synchronize_session=False)
            )
            db.commit()
            rejected = result.rowcount
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"❌ Automatic rejection failed: {e}")
            return SweepResult(success=False, error=str(e), message="Automatic rejection failed")
        finally:
            db.close()

        logger.info(f"✅ {rejected} expired reservation(s) rejected")
        return SweepResult(success=True, rejected_count=rejected, message=f"{rejected} reservation(s) automatically rejected")


class SweeperHandle:
    """Owns the background thread of a running sweeper; ``stop()`` cancels it."""

    def __init__(self, sweeper: ExpirySweeper, interval_seconds: float):
        self.sweeper = sweeper
        self.interval_seconds = interval_seconds
        self._stop_event = threading.Event()
        self._thread = threading.Thread(target=self._loop, name="expiry-sweeper", daemon=True)

    @property
    def running(self) -> bool:
        return self._thread.is_alive()

    def start(self) -> "SweeperHandle":
        self._thread.start()
        return self

    def _loop(self):
        while not self._stop_event.is_set():
            try:
                self.sweeper.run_once()
            except Exception:
                # Keep the timer alive; the next tick scans everything again
                logger.exception("❌ Unexpected error in expiry sweeper")
            if self._stop_event.wait(timeout=self.interval_seconds):
                break

    def stop(self, timeout: Optional[float] = 5.0) -> None:
        self._stop_event.set()
        if self._thread.is_alive() and threading.current_thread() is not self._thread:
            self._thread.join(timeout=timeout)
        logger.info("⏹️ Expiry sweeper stopped")


def start_sweeper(
    session_factory: Callable[[], Session],
    interval_minutes: Optional[float] = None,
    sweeper: Optional[ExpirySweeper] = None,
) -> SweeperHandle:
    """Runs a sweep right away and then every ``interval_minutes`` (default 30)."""
    minutes = settings.AUTO_REJECT_INTERVAL_MINUTES if interval_minutes is None else interval_minutes
    if minutes <= 0:
        raise ValueError("interval_minutes must be positive")
    sweeper = sweeper or ExpirySweeper(session_factory)
    logger.info(f"🚀 Automatic rejection scheduled every {minutes} minute(s)")
    return SweeperHandle(sweeper, interval_seconds=minutes * 60).start()


def stop_sweeper(handle: Optional[SweeperHandle]) -> None:
    if handle:
        handle.stop()
