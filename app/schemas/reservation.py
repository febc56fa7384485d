from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from app.models.reservation import ReservationStatus

class ReservationBase(BaseModel):
    date: str = Field(..., description="Reservation day in YYYY-MM-DD format")
    field: str = Field(..., description="Field identifier from the catalog")
    time_slot: str = Field(..., description="Hourly slot such as 16-17")
    customer_name: str = Field(..., description="Name shown to the admin")

class ReservationReject(BaseModel):
    admin_note: Optional[str] = Field(None, max_length=500, description="Optional note stored with the rejection")

class ReservationResponse(ReservationBase):
    id: int
    status: ReservationStatus
    payment_proof_url: Optional[str] = None
    payment_proof_name: Optional[str] = None
    admin_note: Optional[str] = None
    submitted_at: datetime
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class ApprovalResponse(BaseModel):
    success: bool = True
    message: str
    reservation: ReservationResponse
    rejected_ids: list[int] = []
