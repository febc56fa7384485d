# app/routers/blocks.py
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List

from app.database import get_db
from app.core.security import get_current_admin
from app.schemas.block import BlockCheckResponse, BlockCreate, BlockResponse
from app.schemas.common import OperationResult
from app.services.block_store import BlockStore

router = APIRouter()

@router.get("/", response_model=List[BlockResponse])
def list_blocks(db: Session = Depends(get_db)):
    """All closures, oldest first (the order in which they are matched)"""
    return BlockStore(db).list_blocks()

@router.get("/check", response_model=BlockCheckResponse)
def check_block(
    date: str = Query(..., description="Date in YYYY-MM-DD format"),
    field: str = Query(...),
    time_slot: str = Query(...),
    db: Session = Depends(get_db),
):
    check = BlockStore(db).is_blocked(date, field, time_slot)
    return BlockCheckResponse(is_blocked=check.is_blocked, reason=check.reason, block_id=check.block_id)

@router.post("/", response_model=OperationResult, status_code=status.HTTP_201_CREATED)
def create_block(
    block_data: BlockCreate,
    db: Session = Depends(get_db),
    admin: dict = Depends(get_current_admin),
):
    block = BlockStore(db).create_block(
        start_date=block_data.start_date,
        end_date=block_data.end_date,
        field=block_data.field,
        time_slot=block_data.time_slot,
        reason=block_data.reason,
    )
    return OperationResult(success=True, id=block.id, message="Block created")

@router.delete("/{block_id}", response_model=OperationResult)
def delete_block(
    block_id: int,
    db: Session = Depends(get_db),
    admin: dict = Depends(get_current_admin),
):
    BlockStore(db).delete_block(block_id)
    return OperationResult(success=True, id=block_id, message="Block deleted")
