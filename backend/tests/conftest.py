"""
Shared test fixtures, every test gets its own in-memory store
"""

import pytest
from fastapi.testclient import TestClient

from main import create_app
from app.services.record_store import RecordStore
from app.services.room_service import RoomService
from app.services.jira_service import get_jira_service
from app.schemas.room_schemas import RoomCreate, ParticipantCreate


@pytest.fixture
def store():
    return RecordStore.from_url("sqlite://")


@pytest.fixture
def service(store):
    return RoomService(store)


@pytest.fixture
def app(store):
    app = create_app(store)
    # simulation mode unless a test installs a client
    app.dependency_overrides[get_jira_service] = lambda: None
    return app


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def room(service):
    """Room R with moderator A and voters B and C"""
    service.create_room(RoomCreate(id="R", moderator_id="mod_1"))
    a = service.join_room("R", ParticipantCreate(name="Alice", is_moderator=True))
    b = service.join_room("R", ParticipantCreate(name="Bob"))
    c = service.join_room("R", ParticipantCreate(name="Carol"))
    return {"id": "R", "a": a.id, "b": b.id, "c": c.id}
