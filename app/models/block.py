from sqlalchemy import Column, String, Text
from app.models.base import BaseModel


class Block(BaseModel):
    """Owner-defined closure of a date range, field and slot ("all" is a wildcard)."""
    __tablename__ = "blocks"

    start_date = Column(String(10), nullable=False)  # YYYY-MM-DD, inclusive
    end_date = Column(String(10), nullable=False)    # YYYY-MM-DD, inclusive
    field = Column(String(100), nullable=False, default="all")
    time_slot = Column(String(10), nullable=False, default="all")
    reason = Column(Text, nullable=False)

    def __repr__(self):
        return f"<Block {self.start_date}..{self.end_date} {self.field} {self.time_slot} - {self.reason}>"
