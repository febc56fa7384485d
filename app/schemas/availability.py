from pydantic import BaseModel
from typing import List, Optional
from enum import Enum

class SlotVerdict(str, Enum):
    blocked = "blocked"
    occupied = "occupied"
    contested = "contested"
    free = "free"

class SlotAvailability(BaseModel):
    date: str
    field: str
    time_slot: str
    label: str
    verdict: SlotVerdict
    selectable: bool
    reason: Optional[str] = None
    customer_name: Optional[str] = None
    message: Optional[str] = None

class DayAvailabilityResponse(BaseModel):
    date: str
    field: str
    slots: List[SlotAvailability]
