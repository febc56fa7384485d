from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

class BlockCreate(BaseModel):
    start_date: str = Field(..., description="First blocked day, YYYY-MM-DD")
    end_date: str = Field(..., description="Last blocked day (inclusive), YYYY-MM-DD")
    field: Optional[str] = Field("all", description="Field identifier or 'all'")
    time_slot: Optional[str] = Field("all", description="Slot identifier or 'all'")
    reason: str = Field(..., description="Shown to customers as-is")

class BlockResponse(BaseModel):
    id: int
    start_date: str
    end_date: str
    field: str
    time_slot: str
    reason: str
    created_at: datetime

    class Config:
        from_attributes = True

class BlockCheckResponse(BaseModel):
    is_blocked: bool
    reason: Optional[str] = None
    block_id: Optional[int] = None
