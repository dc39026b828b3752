"""
Room and vote management service
"""

from typing import List, Optional, Tuple

from app.core.exceptions import NotFoundError, InvalidInputError, PermissionDeniedError
from app.models.room import Room
from app.schemas.room_schemas import (
    RoomCreate,
    RoomUpdate,
    RoomResponse,
    RoomDetail,
    RoomResults,
    ParticipantCreate,
    ParticipantUpdate,
    ParticipantResponse,
    ParticipantState,
    VoteCreate,
    VoteResponse,
    JiraSyncRequest
)
from app.services.record_store import RecordStore
from app.services.results import compute_results


class RoomService:
    """Room lifecycle and voting"""

    def __init__(self, store: RecordStore):
        self.store = store

    def _get_room_or_raise(self, room_id: str) -> Room:
        room = self.store.get_room(room_id)
        if room is None:
            raise NotFoundError("Room not found")
        return room

    def _require_moderator(self, room_id: str, actor_id: Optional[str]) -> None:
        """Anonymous callers pass, identified ones must moderate this room"""
        if actor_id is None:
            return
        actor = self.store.get_participant(actor_id)
        if actor is None or actor.room_id != room_id or not actor.is_moderator:
            raise PermissionDeniedError("Only the moderator can do this")

    def _require_voters(self, room_id: str) -> None:
        participants = self.store.get_participants_by_room(room_id)
        if not any(not p.is_moderator for p in participants):
            raise InvalidInputError("Cannot reveal votes, nobody in the room can vote")

    # Rooms

    def create_room(self, room_data: RoomCreate) -> RoomResponse:
        room = self.store.create_room(room_data.model_dump())
        print(f"🃏 Room {room.id} created by {room.moderator_id}")
        return RoomResponse.model_validate(room)

    def get_room(self, room_id: str) -> RoomResponse:
        return RoomResponse.model_validate(self._get_room_or_raise(room_id))

    def get_room_state(self, room_id: str, round_number: int = 1) -> RoomDetail:
        """What polling clients see: room, active participants and every vote"""
        found = self.store.get_room_with_participants(room_id)
        if found is None:
            raise NotFoundError("Room not found")
        room, participants, votes = found

        voted = {
            v.participant_id for v in votes
            if v.round == round_number and v.value != ""
        }
        participant_states = []
        for participant in participants:
            state = ParticipantState.model_validate(participant)
            state.has_voted = participant.id in voted
            participant_states.append(state)

        return RoomDetail(
            **RoomResponse.model_validate(room).model_dump(),
            participants=participant_states,
            votes=[VoteResponse.model_validate(v) for v in votes]
        )

    def update_room(self, room_id: str, update: RoomUpdate, actor_id: Optional[str] = None) -> RoomResponse:
        """Apply a partial update. Setting a story hides the votes again."""
        self._get_room_or_raise(room_id)
        fields = update.model_dump(exclude_unset=True)
        if not fields:
            return self.get_room(room_id)

        self._require_moderator(room_id, actor_id)

        if ("current_story" in fields or "current_story_title" in fields) and "is_revealed" not in fields:
            fields["is_revealed"] = False
        if fields.get("is_revealed"):
            self._require_voters(room_id)

        room = self.store.update_room(room_id, fields)
        if room is None:
            raise NotFoundError("Room not found")
        if fields.get("is_revealed"):
            print(f"👀 Votes revealed in room {room_id}")
        return RoomResponse.model_validate(room)

    def set_story(self, room_id: str, story_id: Optional[str], title: Optional[str] = None,
                  actor_id: Optional[str] = None) -> RoomResponse:
        update = RoomUpdate(current_story=story_id, current_story_title=title)
        return self.update_room(room_id, update, actor_id)

    def reveal(self, room_id: str, actor_id: Optional[str] = None) -> RoomResponse:
        return self.update_room(room_id, RoomUpdate(is_revealed=True), actor_id)

    def hide(self, room_id: str, actor_id: Optional[str] = None) -> RoomResponse:
        return self.update_room(room_id, RoomUpdate(is_revealed=False), actor_id)

    def start_new_round(self, room_id: str, round_number: int = 1, actor_id: Optional[str] = None) -> None:
        """Clear the round's votes and hide results. Round numbers come from the caller."""
        self._get_room_or_raise(room_id)
        self._require_moderator(room_id, actor_id)

        self.store.clear_votes(room_id, round_number)
        self.store.update_room(room_id, {"is_revealed": False})
        print(f"🔄 Round {round_number} cleared in room {room_id}")

    # Participants

    def join_room(self, room_id: str, participant_data: ParticipantCreate) -> ParticipantResponse:
        self._get_room_or_raise(room_id)
        participant = self.store.add_participant({
            "room_id": room_id,
            **participant_data.model_dump()
        })
        role = "moderator" if participant.is_moderator else "voter"
        print(f"👋 {participant.name} joined room {room_id} as {role}")
        return ParticipantResponse.model_validate(participant)

    def list_participants(self, room_id: str) -> List[ParticipantResponse]:
        self._get_room_or_raise(room_id)
        return [
            ParticipantResponse.model_validate(p)
            for p in self.store.get_participants_by_room(room_id)
        ]

    def _get_participant_or_raise(self, room_id: str, participant_id: str):
        participant = self.store.get_participant(participant_id)
        if participant is None or participant.room_id != room_id:
            raise NotFoundError("Participant not found")
        return participant

    def update_participant(self, room_id: str, participant_id: str,
                           update: ParticipantUpdate) -> ParticipantResponse:
        self._get_room_or_raise(room_id)
        self._get_participant_or_raise(room_id, participant_id)

        participant = self.store.update_participant(participant_id, update.model_dump(exclude_unset=True))
        if participant is None:
            raise NotFoundError("Participant not found")
        return ParticipantResponse.model_validate(participant)

    def leave_room(self, room_id: str, participant_id: str) -> None:
        """Remove the participant together with their votes"""
        self._get_room_or_raise(room_id)
        participant = self._get_participant_or_raise(room_id, participant_id)

        self.store.remove_participant(participant_id)
        print(f"🚪 {participant.name} left room {room_id}")

    # Votes

    def submit_vote(self, room_id: str, vote_data: VoteCreate) -> VoteResponse:
        """Record or replace a vote. An empty value withdraws it."""
        self._get_room_or_raise(room_id)
        participant = self.store.get_participant(vote_data.participant_id)
        if participant is None or participant.room_id != room_id:
            raise NotFoundError("Participant not found")
        if not participant.is_active:
            raise InvalidInputError("Participant is not active in this room")

        vote = self.store.submit_vote({
            "room_id": room_id,
            **vote_data.model_dump()
        })
        return VoteResponse.model_validate(vote)

    def get_votes(self, room_id: str, round_number: int = 1) -> List[VoteResponse]:
        self._get_room_or_raise(room_id)
        return [
            VoteResponse.model_validate(v)
            for v in self.store.get_votes_by_room(room_id, round_number)
        ]

    def get_participant_vote(self, room_id: str, participant_id: str,
                             round_number: int = 1) -> Optional[VoteResponse]:
        self._get_room_or_raise(room_id)
        vote = self.store.get_participant_vote(room_id, participant_id, round_number)
        if vote is None:
            return None
        return VoteResponse.model_validate(vote)

    def get_results(self, room_id: str, round_number: int = 1) -> RoomResults:
        self._get_room_or_raise(room_id)
        participants = self.store.get_participants_by_room(room_id)
        votes = self.store.get_votes_by_room(room_id, round_number)
        return compute_results(participants, votes)

    # Jira

    def build_sync_request(self, room_id: str, sync: JiraSyncRequest) -> Tuple[str, float]:
        """Story key and estimate to push, falling back to the room's story and average"""
        room = self._get_room_or_raise(room_id)

        story_id = sync.story_id or room.current_story
        average_points = sync.average_points
        if average_points is None and story_id:
            results = self.get_results(room_id, sync.round)
            if results.participants:
                average_points = results.average

        if not story_id or average_points is None:
            raise InvalidInputError("Story ID and average points are required")
        return story_id, average_points
