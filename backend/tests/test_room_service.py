"""
Room lifecycle tests
"""

import pytest

from app.core.exceptions import ConflictError, InvalidInputError, NotFoundError, PermissionDeniedError
from app.schemas.room_schemas import (
    JiraSyncRequest,
    ParticipantCreate,
    ParticipantUpdate,
    RoomCreate,
    RoomUpdate,
    VoteCreate
)


def vote(service, room, who, value, round_number=1):
    return service.submit_vote(room["id"], VoteCreate(participant_id=room[who], value=value, round=round_number))


def test_duplicate_room_is_rejected(service, room):
    with pytest.raises(ConflictError):
        service.create_room(RoomCreate(id="R", moderator_id="mod_2"))


def test_unknown_room_raises_not_found(service):
    with pytest.raises(NotFoundError):
        service.get_room_state("nope")
    with pytest.raises(NotFoundError):
        service.join_room("nope", ParticipantCreate(name="Bob"))
    with pytest.raises(NotFoundError):
        service.get_results("nope")
    with pytest.raises(NotFoundError):
        service.start_new_round("nope")
    with pytest.raises(NotFoundError):
        service.reveal("nope")


def test_example_round(service, room):
    vote(service, room, "b", "5")
    vote(service, room, "c", "8")

    results = service.get_results("R")
    assert results.average == 6.5
    assert results.participants == 2
    assert results.consensus == "Medium"
    assert [(v.participant_name, v.value) for v in results.votes] == [("Bob", "5"), ("Carol", "8")]

    vote(service, room, "c", "5")
    results = service.get_results("R")
    assert results.average == 5
    assert results.participants == 2
    assert results.consensus == "High"

    vote(service, room, "c", "")
    results = service.get_results("R")
    assert results.average == 5
    assert results.participants == 1
    assert results.consensus == "High"
    assert [v.participant_name for v in results.votes] == ["Bob"]


def test_revote_keeps_one_record(service, room):
    vote(service, room, "b", "3")
    vote(service, room, "b", "13")

    votes = service.get_votes("R")
    assert [(v.participant_id, v.value) for v in votes] == [(room["b"], "13")]


def test_moderator_can_vote_but_is_not_counted(service, room):
    vote(service, room, "a", "13")
    vote(service, room, "b", "2")

    assert len(service.get_votes("R")) == 2
    assert service.get_results("R").participants == 1


def test_vote_from_other_room_participant_is_rejected(service, room):
    service.create_room(RoomCreate(id="OTHER", moderator_id="mod_2"))
    stranger = service.join_room("OTHER", ParticipantCreate(name="Dave"))

    with pytest.raises(NotFoundError):
        service.submit_vote("R", VoteCreate(participant_id=stranger.id, value="3"))
    with pytest.raises(NotFoundError):
        service.submit_vote("R", VoteCreate(participant_id="ghost", value="3"))


def test_inactive_participant_cannot_vote(service, room):
    service.update_participant("R", room["b"], ParticipantUpdate(is_active=False))

    with pytest.raises(InvalidInputError):
        vote(service, room, "b", "3")


def test_room_state_marks_who_has_voted(service, room):
    vote(service, room, "b", "5")
    vote(service, room, "c", "")
    vote(service, room, "c", "8", round_number=2)

    state = service.get_room_state("R")
    has_voted = {p.name: p.has_voted for p in state.participants}

    assert has_voted == {"Alice": False, "Bob": True, "Carol": False}
    assert len(state.votes) == 3
    round_two = service.get_room_state("R", 2)
    assert {p.name for p in round_two.participants if p.has_voted} == {"Carol"}


def test_setting_story_hides_votes(service, room):
    vote(service, room, "b", "5")
    service.reveal("R", actor_id=room["a"])
    assert service.get_room("R").is_revealed is True

    room_state = service.set_story("R", "PROJ-9", "Login page", actor_id=room["a"])

    assert room_state.current_story == "PROJ-9"
    assert room_state.current_story_title == "Login page"
    assert room_state.is_revealed is False
    # a new story does not clear votes
    assert len(service.get_votes("R")) == 1


def test_reveal_requires_a_voter(service):
    service.create_room(RoomCreate(id="SOLO", moderator_id="mod_1"))
    moderator = service.join_room("SOLO", ParticipantCreate(name="Alice", is_moderator=True))

    with pytest.raises(InvalidInputError):
        service.reveal("SOLO", actor_id=moderator.id)

    service.join_room("SOLO", ParticipantCreate(name="Bob"))
    assert service.reveal("SOLO", actor_id=moderator.id).is_revealed is True


def test_moderator_only_actions(service, room):
    with pytest.raises(PermissionDeniedError):
        service.reveal("R", actor_id=room["b"])
    with pytest.raises(PermissionDeniedError):
        service.set_story("R", "PROJ-1", actor_id=room["c"])
    with pytest.raises(PermissionDeniedError):
        service.start_new_round("R", actor_id=room["b"])
    with pytest.raises(PermissionDeniedError):
        service.reveal("R", actor_id="ghost")

    assert service.get_room("R").is_revealed is False


def test_update_room_without_fields_changes_nothing(service, room):
    assert service.update_room("R", RoomUpdate(), actor_id=room["b"]).is_revealed is False


def test_new_round_clears_votes_and_hides(service, room):
    vote(service, room, "b", "5")
    vote(service, room, "c", "8")
    service.reveal("R")

    service.start_new_round("R")

    assert service.get_votes("R") == []
    assert service.get_room("R").is_revealed is False
    assert service.get_results("R").participants == 0


def test_clearing_round_two_leaves_round_one(service, room):
    service.start_new_round("R", 2)
    vote(service, room, "b", "3")
    vote(service, room, "c", "5", round_number=2)

    service.start_new_round("R", 2)

    assert [v.value for v in service.get_votes("R", 1)] == ["3"]
    assert service.get_votes("R", 2) == []


def test_leave_room_removes_votes(service, room):
    vote(service, room, "b", "5")
    vote(service, room, "c", "8")

    service.leave_room("R", room["c"])

    results = service.get_results("R")
    assert results.participants == 1
    assert all(v.participant_id != room["c"] for v in results.votes)
    assert sorted(p.name for p in service.list_participants("R")) == ["Alice", "Bob"]
    with pytest.raises(NotFoundError):
        service.leave_room("R", room["c"])


def test_get_participant_vote(service, room):
    vote(service, room, "b", "pass")

    assert service.get_participant_vote("R", room["b"]).value == "pass"
    assert service.get_participant_vote("R", room["c"]) is None


def test_build_sync_request_uses_room_defaults(service, room):
    service.set_story("R", "PROJ-3", "Search")
    vote(service, room, "b", "3")
    vote(service, room, "c", "5")

    assert service.build_sync_request("R", JiraSyncRequest()) == ("PROJ-3", 4.0)
    assert service.build_sync_request("R", JiraSyncRequest(story_id="X-1", average_points=2.5)) == ("X-1", 2.5)


def test_build_sync_request_needs_story_and_estimate(service, room):
    with pytest.raises(InvalidInputError):
        service.build_sync_request("R", JiraSyncRequest(average_points=3))

    service.set_story("R", "PROJ-3")
    with pytest.raises(InvalidInputError):
        service.build_sync_request("R", JiraSyncRequest())
