"""
Participant data model
"""

from sqlalchemy import Column, String, ForeignKey, Boolean, DateTime
from app.core.utils import utc_now
from app.core.database import Base

class Participant(Base):
    """Room participants"""
    __tablename__ = "participants"

    id = Column(String(100), primary_key=True, index=True)
    room_id = Column(String(100), ForeignKey("rooms.id"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    is_moderator = Column(Boolean, default=False, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)    # only active participants are in the room
    joined_at = Column(DateTime, default=utc_now)
