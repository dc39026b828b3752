"""
Vote data model
"""

from sqlalchemy import Column, Integer, String, ForeignKey, DateTime
from app.core.utils import utc_now
from app.core.database import Base

class Vote(Base):
    """Votes, at most one per participant per round"""
    __tablename__ = "votes"
    # ids are never reused after a vote is replaced
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    room_id = Column(String(100), ForeignKey("rooms.id"), nullable=False, index=True)
    participant_id = Column(String(100), nullable=False, index=True)
    value = Column(String(20), nullable=False)       # card label, "" means not voted / withdrawn
    round = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime, default=utc_now)
