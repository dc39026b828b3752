# Business logic services
from .record_store import RecordStore
from .room_service import RoomService
from .jira_service import JiraService

__all__ = ["RecordStore", "RoomService", "JiraService"]
