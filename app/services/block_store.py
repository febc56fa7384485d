# app/services/block_store.py
from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Optional
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.catalog import WILDCARD
from app.core.exceptions import NotFoundError, StorageIOError, ValidationError
from app.models.block import Block

logger = logging.getLogger(__name__)


@dataclass
class BlockCheck:
    is_blocked: bool
    reason: Optional[str] = None
    block_id: Optional[int] = None


def parse_day(value: str, field_name: str = "date") -> date:
    """Parses a YYYY-MM-DD string, raising ValidationError otherwise."""
    if not value or not isinstance(value, str):
        raise ValidationError(f"'{field_name}' is required (YYYY-MM-DD)")
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        raise ValidationError(f"'{field_name}' must be a valid date in YYYY-MM-DD format, got '{value}'")


def block_applies(block: Block, day: date, field: str, time_slot: str) -> bool:
    if not (date.fromisoformat(block.start_date) <= day <= date.fromisoformat(block.end_date)):
        return False
    if block.field != WILDCARD and block.field != field:
        return False
    return block.time_slot == WILDCARD or block.time_slot == time_slot


def first_matching_block(blocks: Iterable[Block], day: date, field: str, time_slot: str) -> BlockCheck:
    """Blocks must be given in insertion order; the oldest match wins."""
    for block in blocks:
        if block_applies(block, day, field, time_slot):
            return BlockCheck(is_blocked=True, reason=block.reason, block_id=block.id)
    return BlockCheck(is_blocked=False)


class BlockStore:
    def __init__(self, db: Session):
        self.db = db

    def create_block(
        self,
        start_date: str,
        end_date: str,
        field: Optional[str] = None,
        time_slot: Optional[str] = None,
        reason: str = "",
    ) -> Block:
        start = parse_day(start_date, "start_date")
        end = parse_day(end_date, "end_date")
        if start > end:
            raise ValidationError("'start_date' must be on or before 'end_date'")
        reason = (reason or "").strip()
        if not reason:
            raise ValidationError("'reason' is required")

        block = Block(
            start_date=start.isoformat(),
            end_date=end.isoformat(),
            field=(field or "").strip() or WILDCARD,
            time_slot=(time_slot or "").strip() or WILDCARD,
            reason=reason,
        )
        try:
            self.db.add(block)
            self.db.commit()
            self.db.refresh(block)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Could not create block: {e}")
            raise StorageIOError("Could not save the block")

        logger.info(f"🔒 Block {block.id} created: {block.start_date}..{block.end_date} {block.field}/{block.time_slot}")
        return block

    def list_blocks(self) -> List[Block]:
        try:
            return self.db.query(Block).order_by(Block.id.asc()).all()
        except SQLAlchemyError as e:
            logger.error(f"❌ Could not list blocks: {e}")
            raise StorageIOError("Could not load blocks")

    def delete_block(self, block_id: int) -> None:
        try:
            block = self.db.query(Block).filter(Block.id == block_id).first()
            if not block:
                raise NotFoundError(f"Block {block_id} not found")
            self.db.delete(block)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Could not delete block {block_id}: {e}")
            raise StorageIOError("Could not delete the block")

        logger.info(f"🔓 Block {block_id} deleted")

    def is_blocked(self, day: str, field: str, time_slot: str) -> BlockCheck:
        target = parse_day(day)
        return first_matching_block(self.list_blocks(), target, field, time_slot)
