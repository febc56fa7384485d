# app/routers/availability.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.database import get_db
from app.schemas.availability import DayAvailabilityResponse, SlotAvailability
from app.services.availability import AvailabilityResolver

router = APIRouter()

@router.get("/", response_model=DayAvailabilityResponse)
def get_day_availability(
    date: str = Query(..., description="Date in YYYY-MM-DD format"),
    field: str = Query(..., description="Field identifier"),
    db: Session = Depends(get_db),
):
    """Verdict for every slot of a field on a day, requested again whenever date or field changes"""
    slots = AvailabilityResolver(db).resolve_day(date, field)
    return DayAvailabilityResponse(date=slots[0].date if slots else date, field=field, slots=slots)

@router.get("/slot", response_model=SlotAvailability)
def get_slot_availability(
    date: str = Query(..., description="Date in YYYY-MM-DD format"),
    field: str = Query(...),
    time_slot: str = Query(..., description="Slot such as 16-17"),
    db: Session = Depends(get_db),
):
    return AvailabilityResolver(db).resolve(date, field, time_slot)
