"""
Room data model
"""

from sqlalchemy import Column, String, DateTime, Boolean
from app.core.utils import utc_now
from app.core.database import Base

class Room(Base):
    """Estimation rooms"""
    __tablename__ = "rooms"

    id = Column(String(100), primary_key=True, index=True)        # supplied by the client
    moderator_id = Column(String(100), nullable=False)
    current_story = Column(String(100), nullable=True)            # tracker issue key, e.g. PROJ-42
    current_story_title = Column(String(500), nullable=True)
    is_revealed = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=utc_now)
