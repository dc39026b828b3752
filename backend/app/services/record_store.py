"""
Record store for rooms, participants and votes
"""

import threading
import uuid
from contextlib import contextmanager
from typing import List, Optional, Tuple, Dict, Any
from sqlalchemy.orm import Session, sessionmaker

from app.core.database import create_session_factory
from app.core.exceptions import ConflictError
from app.models.room import Room
from app.models.participant import Participant
from app.models.vote import Vote


class RecordStore:
    """Keyed storage for the three tables.

    Every operation runs in its own session under one process-wide lock, so
    callers on any thread always see complete writes. Lookups
    return None for missing records; only create_room raises.
    """

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory
        self._lock = threading.RLock()

    @classmethod
    def from_url(cls, database_url: str) -> "RecordStore":
        return cls(create_session_factory(database_url))

    @contextmanager
    def _session(self):
        with self._lock:
            db: Session = self._session_factory()
            try:
                yield db
            finally:
                db.close()

    # Rooms

    def create_room(self, data: Dict[str, Any]) -> Room:
        """Insert a room with the caller supplied id"""
        with self._session() as db:
            if db.get(Room, data["id"]) is not None:
                raise ConflictError(f"Room '{data['id']}' already exists")

            room = Room(**data)
            db.add(room)
            db.commit()
            db.refresh(room)
            return room

    def get_room(self, room_id: str) -> Optional[Room]:
        with self._session() as db:
            return db.get(Room, room_id)

    def get_room_with_participants(self, room_id: str) -> Optional[Tuple[Room, List[Participant], List[Vote]]]:
        """Room, its active participants and its votes of every round"""
        with self._session() as db:
            room = db.get(Room, room_id)
            if room is None:
                return None

            participants = db.query(Participant).filter(
                Participant.room_id == room_id,
                Participant.is_active.is_(True)
            ).order_by(Participant.joined_at, Participant.id).all()

            votes = db.query(Vote).filter(
                Vote.room_id == room_id
            ).order_by(Vote.id).all()

            return room, participants, votes

    def update_room(self, room_id: str, fields: Dict[str, Any]) -> Optional[Room]:
        with self._session() as db:
            room = db.get(Room, room_id)
            if room is None:
                return None

            for field, value in fields.items():
                setattr(room, field, value)

            db.commit()
            db.refresh(room)
            return room

    # Participants

    def add_participant(self, data: Dict[str, Any]) -> Participant:
        """Insert a participant under a freshly generated id"""
        with self._session() as db:
            participant = Participant(id=f"participant_{uuid.uuid4().hex}", **data)
            db.add(participant)
            db.commit()
            db.refresh(participant)
            return participant

    def get_participant(self, participant_id: str) -> Optional[Participant]:
        with self._session() as db:
            return db.get(Participant, participant_id)

    def get_participants_by_room(self, room_id: str) -> List[Participant]:
        with self._session() as db:
            return db.query(Participant).filter(
                Participant.room_id == room_id,
                Participant.is_active.is_(True)
            ).order_by(Participant.joined_at, Participant.id).all()

    def update_participant(self, participant_id: str, fields: Dict[str, Any]) -> Optional[Participant]:
        with self._session() as db:
            participant = db.get(Participant, participant_id)
            if participant is None:
                return None

            for field, value in fields.items():
                setattr(participant, field, value)

            db.commit()
            db.refresh(participant)
            return participant

    def remove_participant(self, participant_id: str) -> None:
        """Delete the participant and all of their votes, in every room"""
        with self._session() as db:
            db.query(Vote).filter(
                Vote.participant_id == participant_id
            ).delete(synchronize_session=False)
            db.query(Participant).filter(
                Participant.id == participant_id
            ).delete(synchronize_session=False)
            db.commit()

    # Votes

    def submit_vote(self, data: Dict[str, Any]) -> Vote:
        """Replace the participant's vote for the round with a new record"""
        round_number = data.get("round") or 1
        with self._session() as db:
            db.query(Vote).filter(
                Vote.room_id == data["room_id"],
                Vote.participant_id == data["participant_id"],
                Vote.round == round_number
            ).delete(synchronize_session=False)

            vote = Vote(
                room_id=data["room_id"],
                participant_id=data["participant_id"],
                value=data["value"],
                round=round_number
            )
            db.add(vote)
            db.commit()
            db.refresh(vote)
            return vote

    def get_votes_by_room(self, room_id: str, round_number: int = 1) -> List[Vote]:
        with self._session() as db:
            return db.query(Vote).filter(
                Vote.room_id == room_id,
                Vote.round == round_number
            ).order_by(Vote.id).all()

    def get_participant_vote(self, room_id: str, participant_id: str, round_number: int = 1) -> Optional[Vote]:
        with self._session() as db:
            return db.query(Vote).filter(
                Vote.room_id == room_id,
                Vote.participant_id == participant_id,
                Vote.round == round_number
            ).first()

    def clear_votes(self, room_id: str, round_number: int) -> None:
        with self._session() as db:
            db.query(Vote).filter(
                Vote.room_id == room_id,
                Vote.round == round_number
            ).delete(synchronize_session=False)
            db.commit()
