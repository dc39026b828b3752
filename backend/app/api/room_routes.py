"""
Room, participant and vote API routes
"""

from fastapi import APIRouter, Depends, Header, HTTPException
from typing import List, Optional

from app.core.database import get_store
from app.core.exceptions import PokerError, UpstreamError
from app.core.utils import round_half_up, utc_now, format_timestamp_with_timezone
from app.services.record_store import RecordStore
from app.services.room_service import RoomService
from app.services.jira_service import JiraService, get_jira_service
from app.schemas.room_schemas import (
    RoomCreate,
    RoomUpdate,
    RoomResponse,
    RoomDetail,
    RoomResults,
    ParticipantCreate,
    ParticipantUpdate,
    ParticipantResponse,
    VoteCreate,
    VoteResponse,
    NewRoundRequest,
    JiraSyncRequest
)

router = APIRouter()

@router.post("", response_model=RoomResponse)
async def create_room(
    room_data: RoomCreate,
    store: RecordStore = Depends(get_store)
):
    """Create a room"""
    service = RoomService(store)
    try:
        return service.create_room(room_data)
    except PokerError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

@router.get("/{room_id}", response_model=RoomDetail)
async def get_room(
    room_id: str,
    round: int = 1,
    store: RecordStore = Depends(get_store)
):
    """Room with active participants and all votes, polled by clients"""
    service = RoomService(store)
    try:
        return service.get_room_state(room_id, round)
    except PokerError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

@router.patch("/{room_id}", response_model=RoomResponse)
async def update_room(
    room_id: str,
    update: RoomUpdate,
    x_participant_id: Optional[str] = Header(None),
    store: RecordStore = Depends(get_store)
):
    """Set the story or toggle reveal"""
    service = RoomService(store)
    try:
        return service.update_room(room_id, update, actor_id=x_participant_id)
    except PokerError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

@router.post("/{room_id}/participants", response_model=ParticipantResponse)
async def join_room(
    room_id: str,
    participant_data: ParticipantCreate,
    store: RecordStore = Depends(get_store)
):
    """Join a room"""
    service = RoomService(store)
    try:
        return service.join_room(room_id, participant_data)
    except PokerError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

@router.get("/{room_id}/participants", response_model=List[ParticipantResponse])
async def list_participants(
    room_id: str,
    store: RecordStore = Depends(get_store)
):
    """Active participants of a room"""
    service = RoomService(store)
    try:
        return service.list_participants(room_id)
    except PokerError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

@router.patch("/{room_id}/participants/{participant_id}", response_model=ParticipantResponse)
async def update_participant(
    room_id: str,
    participant_id: str,
    update: ParticipantUpdate,
    store: RecordStore = Depends(get_store)
):
    """Rename a participant or mark them inactive"""
    service = RoomService(store)
    try:
        return service.update_participant(room_id, participant_id, update)
    except PokerError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

@router.delete("/{room_id}/participants/{participant_id}")
async def remove_participant(
    room_id: str,
    participant_id: str,
    store: RecordStore = Depends(get_store)
):
    """Leave a room"""
    service = RoomService(store)
    try:
        service.leave_room(room_id, participant_id)
        return {"message": "Participant removed successfully"}
    except PokerError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

@router.post("/{room_id}/votes", response_model=VoteResponse)
async def submit_vote(
    room_id: str,
    vote_data: VoteCreate,
    store: RecordStore = Depends(get_store)
):
    """Submit, change or withdraw (empty value) a vote"""
    service = RoomService(store)
    try:
        return service.submit_vote(room_id, vote_data)
    except PokerError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

@router.get("/{room_id}/votes", response_model=List[VoteResponse])
async def get_votes(
    room_id: str,
    round: int = 1,
    store: RecordStore = Depends(get_store)
):
    """Votes of one round"""
    service = RoomService(store)
    try:
        return service.get_votes(room_id, round)
    except PokerError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

@router.get("/{room_id}/votes/{participant_id}", response_model=Optional[VoteResponse])
async def get_participant_vote(
    room_id: str,
    participant_id: str,
    round: int = 1,
    store: RecordStore = Depends(get_store)
):
    """One participant's vote, null when they have not voted"""
    service = RoomService(store)
    try:
        return service.get_participant_vote(room_id, participant_id, round)
    except PokerError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

@router.get("/{room_id}/results", response_model=RoomResults)
async def get_results(
    room_id: str,
    round: int = 1,
    store: RecordStore = Depends(get_store)
):
    """Average, consensus and counted votes of a round"""
    service = RoomService(store)
    try:
        return service.get_results(room_id, round)
    except PokerError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

@router.post("/{room_id}/new-round")
async def start_new_round(
    room_id: str,
    request: Optional[NewRoundRequest] = None,
    x_participant_id: Optional[str] = Header(None),
    store: RecordStore = Depends(get_store)
):
    """Clear the round's votes and hide them"""
    service = RoomService(store)
    round_number = request.round if request else 1
    try:
        service.start_new_round(room_id, round_number, actor_id=x_participant_id)
        return {"message": "New round started", "round": round_number}
    except PokerError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

@router.post("/{room_id}/sync-jira")
async def sync_jira(
    room_id: str,
    sync: JiraSyncRequest,
    store: RecordStore = Depends(get_store),
    jira_service: Optional[JiraService] = Depends(get_jira_service)
):
    """Push the estimate to Jira, or simulate it when Jira is not configured"""
    service = RoomService(store)
    try:
        story_id, average_points = service.build_sync_request(room_id, sync)
    except PokerError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

    story_points = int(round_half_up(average_points))
    timestamp = format_timestamp_with_timezone(utc_now())

    if jira_service is None:
        sync_data = {
            "story_id": story_id,
            "average_points": average_points,
            "story_points": story_points,
            "room_id": room_id,
            "timestamp": timestamp,
            "mode": "simulation"
        }
        print("=== 🧪 JIRA SYNC SIMULATION (no config) ===")
        print(f"   Story ID: {story_id}")
        print(f"   Average points: {average_points}")
        print(f"   Room ID: {room_id}")
        print("   Set JIRA_BASE_URL, JIRA_EMAIL and JIRA_API_TOKEN for a real sync")
        return {
            "message": "Story synced to Jira (simulation mode)",
            "sync_data": sync_data,
            "mode": "simulation"
        }

    try:
        result = await jira_service.update_story_points(story_id, story_points, sync.field_id)
    except UpstreamError as e:
        print(f"❌ Jira sync failed for {story_id}: {e}")
        raise HTTPException(status_code=e.status_code, detail={
            "message": f"Failed to sync to Jira: {e}",
            "mode": "real",
            "error": str(e)
        })

    print(f"✅ Jira sync: {story_id} = {story_points} points (room {room_id}, {timestamp})")
    return {
        "message": "Story synced to Jira successfully",
        "result": result.model_dump(),
        "mode": "real"
    }
