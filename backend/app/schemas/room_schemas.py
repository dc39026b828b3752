"""
Room, participant and vote schemas
"""

from pydantic import BaseModel, Field, field_serializer, field_validator
from typing import Optional, List
from datetime import datetime

from app.core.utils import format_timestamp_with_timezone

# Card deck shown to voters
CARD_VALUES = ["0", "0.5", "1", "2", "3", "5", "8", "13"]
SPECIAL_CARDS = ["pass", "infinity"]


class RoomCreate(BaseModel):
    """Create room request"""
    id: str = Field(..., min_length=1, max_length=100, description="Room id chosen by the client")
    moderator_id: str = Field(..., min_length=1, max_length=100, description="Moderator identity")
    current_story: Optional[str] = Field(None, max_length=100, description="Story key")
    current_story_title: Optional[str] = Field(None, max_length=500, description="Story title")
    is_revealed: bool = Field(False, description="Whether votes are revealed")


class RoomUpdate(BaseModel):
    """Partial room update, only these fields may change"""
    current_story: Optional[str] = Field(None, max_length=100)
    current_story_title: Optional[str] = Field(None, max_length=500)
    is_revealed: Optional[bool] = None

    @field_validator('is_revealed')
    def reject_null(cls, value):
        if value is None:
            raise ValueError("is_revealed cannot be null")
        return value

    class Config:
        extra = "forbid"


class RoomResponse(BaseModel):
    """Room response"""
    id: str
    moderator_id: str
    current_story: Optional[str] = None
    current_story_title: Optional[str] = None
    is_revealed: bool
    created_at: Optional[datetime] = None

    @field_serializer('created_at', when_used='json')
    def serialize_dt(self, dt: Optional[datetime]) -> Optional[str]:
        return format_timestamp_with_timezone(dt)

    class Config:
        from_attributes = True


class ParticipantCreate(BaseModel):
    """Join room request"""
    name: str = Field(..., min_length=1, max_length=100, description="Display name")
    is_moderator: bool = Field(False, description="Moderators never count in results")
    is_active: bool = Field(True, description="Whether the participant is in the room")


class ParticipantUpdate(BaseModel):
    """Participant update request"""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    is_active: Optional[bool] = None

    @field_validator('name', 'is_active')
    def reject_null(cls, value, info):
        if value is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return value

    class Config:
        extra = "forbid"


class ParticipantResponse(BaseModel):
    """Participant response"""
    id: str
    room_id: str
    name: str
    is_moderator: bool
    is_active: bool
    joined_at: Optional[datetime] = None

    @field_serializer('joined_at', when_used='json')
    def serialize_dt(self, dt: Optional[datetime]) -> Optional[str]:
        return format_timestamp_with_timezone(dt)

    class Config:
        from_attributes = True


class ParticipantState(ParticipantResponse):
    """Participant as seen in the polled room state"""
    has_voted: bool = False


class VoteCreate(BaseModel):
    """Submit vote request, an empty value withdraws the vote"""
    participant_id: str = Field(..., min_length=1, max_length=100)
    value: str = Field(..., max_length=20, description="Card label, or empty to withdraw")
    round: int = Field(1, ge=1, description="Round number")


class VoteResponse(BaseModel):
    """Vote response"""
    id: int
    room_id: str
    participant_id: str
    value: str
    round: int
    created_at: Optional[datetime] = None

    @field_serializer('created_at', when_used='json')
    def serialize_dt(self, dt: Optional[datetime]) -> Optional[str]:
        return format_timestamp_with_timezone(dt)

    class Config:
        from_attributes = True


class RoomDetail(RoomResponse):
    """Room with its active participants and every vote"""
    participants: List[ParticipantState]
    votes: List[VoteResponse]


class VoteResult(BaseModel):
    """One counted vote"""
    participant_id: str
    participant_name: str
    value: str


class RoomResults(BaseModel):
    """Aggregated round results"""
    average: float
    participants: int
    consensus: str
    votes: List[VoteResult]


class NewRoundRequest(BaseModel):
    """Start new round request"""
    round: int = Field(1, ge=1, description="Round whose votes are cleared")


class JiraSyncRequest(BaseModel):
    """Push the estimate to Jira"""
    story_id: Optional[str] = Field(None, description="Issue key, defaults to the room's current story")
    average_points: Optional[float] = Field(None, allow_inf_nan=False, description="Estimate, defaults to the round average")
    field_id: Optional[str] = Field(None, description="Story points custom field")
    round: int = Field(1, ge=1, description="Round used when the estimate is omitted")


class DeckResponse(BaseModel):
    """Card deck"""
    values: List[str]
    special: List[str]
    poll_interval_ms: int
