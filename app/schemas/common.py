from pydantic import BaseModel
from typing import Optional

class OperationResult(BaseModel):
    """Envelope returned by every mutating endpoint."""
    success: bool
    id: Optional[int] = None
    message: Optional[str] = None
    error_type: Optional[str] = None

class SweepResponse(BaseModel):
    success: bool
    rejected_count: int
    message: str
    error: Optional[str] = None
