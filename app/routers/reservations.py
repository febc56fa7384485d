# app/routers/reservations.py
from fastapi import APIRouter, BackgroundTasks, Body, Depends, File, Form, Query, UploadFile, status
from sqlalchemy.orm import Session
from typing import List, Optional
import logging

from app.database import get_db
from app.core.email_service import NewReservationEmail, send_new_reservation_email
from app.core.security import get_current_admin
from app.models.reservation import ReservationStatus
from app.schemas.common import OperationResult
from app.schemas.reservation import ApprovalResponse, ReservationReject, ReservationResponse
from app.services.approval import ApprovalService
from app.services.reservation_store import ReservationStore
from app.services.supabase_storage import SupabaseStorage, get_storage

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post("/", response_model=OperationResult, status_code=status.HTTP_201_CREATED)
async def create_reservation(
    background_tasks: BackgroundTasks,
    date: str = Form(""),
    field: str = Form(""),
    time_slot: str = Form(""),
    customer_name: str = Form(""),
    payment_proof: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    storage: SupabaseStorage = Depends(get_storage),
):
    """Last wizard step: stores the request as pending and notifies the owner"""
    store = ReservationStore(db)
    # Rejected input never reaches the bucket
    values = store.validate(date, field, time_slot, customer_name)

    payment_proof_url = None
    payment_proof_name = None
    if payment_proof is not None and payment_proof.filename:
        payment_proof_url = await storage.upload_payment_proof(payment_proof)
        payment_proof_name = payment_proof.filename

    reservation = store.create(
        **values,
        payment_proof_url=payment_proof_url,
        payment_proof_name=payment_proof_name,
    )

    # Runs after the response; a failed email never affects the booking
    background_tasks.add_task(
        send_new_reservation_email,
        NewReservationEmail(
            customer_name=reservation.customer_name,
            date=reservation.date,
            field=reservation.field,
            time_slot=reservation.time_slot,
        ),
    )

    return OperationResult(success=True, id=reservation.id, message="Reservation created, waiting for approval")

@router.get("/", response_model=List[ReservationResponse])
def list_reservations(
    status_filter: Optional[ReservationStatus] = Query(None, alias="status"),
    db: Session = Depends(get_db),
    admin: dict = Depends(get_current_admin),
):
    """All reservations, newest first; ``status=pending`` includes legacy records"""
    return ReservationStore(db).list_all(status=status_filter)

@router.get("/{reservation_id}", response_model=ReservationResponse)
def get_reservation(
    reservation_id: int,
    db: Session = Depends(get_db),
    admin: dict = Depends(get_current_admin),
):
    return ReservationStore(db).get_by_id(reservation_id)

@router.post("/{reservation_id}/approve", response_model=ApprovalResponse)
def approve_reservation(
    reservation_id: int,
    db: Session = Depends(get_db),
    admin: dict = Depends(get_current_admin),
):
    result = ApprovalService(db).approve(reservation_id)
    logger.info(f"👤 {admin['email']} approved reservation {reservation_id}")
    message = "Reservation approved" if result.changed else "Reservation was already approved"
    return ApprovalResponse(
        message=message,
        reservation=ReservationResponse.model_validate(result.reservation),
        rejected_ids=result.rejected_ids,
    )

@router.post("/{reservation_id}/reject", response_model=ApprovalResponse)
def reject_reservation(
    reservation_id: int,
    payload: Optional[ReservationReject] = Body(None),
    db: Session = Depends(get_db),
    admin: dict = Depends(get_current_admin),
):
    note = payload.admin_note if payload else None
    result = ApprovalService(db).reject(reservation_id, note=note)
    logger.info(f"👤 {admin['email']} rejected reservation {reservation_id}")
    message = "Reservation rejected" if result.changed else "Reservation was already rejected"
    return ApprovalResponse(
        message=message,
        reservation=ReservationResponse.model_validate(result.reservation),
    )
