"""
Database configuration
"""
from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

Base = declarative_base()

def create_session_factory(database_url: str) -> sessionmaker:
    """Create the engine, the tables and a session factory for it"""
    engine_args = {"echo": False}  # set to True to see the SQL
    if database_url.startswith("sqlite"):
        engine_args["connect_args"] = {"check_same_thread": False}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            # one shared connection, otherwise every session gets its own empty database
            engine_args["poolclass"] = StaticPool

    engine = create_engine(database_url, **engine_args)
    init_db(engine)

    return sessionmaker(
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        bind=engine
    )

def init_db(engine):
    """Initialize the database"""
    # Import every model so they register on Base
    from app.models.room import Room
    from app.models.participant import Participant
    from app.models.vote import Vote

    Base.metadata.create_all(bind=engine)

def get_store(request: Request):
    """Get the record store owned by the running application"""
    return request.app.state.store
