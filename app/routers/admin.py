from fastapi import APIRouter, Depends

from app.core.security import get_current_admin
from app.database import SessionLocal
from app.schemas.common import SweepResponse
from app.services.expiry_sweeper import ExpirySweeper

router = APIRouter()

def get_sweeper() -> ExpirySweeper:
    return ExpirySweeper(SessionLocal)

@router.post("/auto-reject", response_model=SweepResponse)
def run_auto_reject(
    sweeper: ExpirySweeper = Depends(get_sweeper),
    admin: dict = Depends(get_current_admin),
):
    """Runs one expiry sweep now instead of waiting for the next tick"""
    result = sweeper.run_once()
    return SweepResponse(
        success=result.success,
        rejected_count=result.rejected_count,
        message=result.message,
        error=result.error,
    )
