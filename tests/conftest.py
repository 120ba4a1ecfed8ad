"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Generator

import pytest
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.core.shared_types import GameRules
from src.db.schema import Base
from src.whist.session import Session as WhistSession

PLAYER_NAMES = ["A", "B", "C", "D"]

# Setup an in-memory SQLite database for testing
DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autoflush=False, bind=engine)


@pytest.fixture
def db_session_repo() -> Generator[Session, None, None]:
    """Connection to a test database. Tables are removed at teardown to make unit tests of repository independent of each other."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        Base.metadata.drop_all(bind=engine)
        db.close()


@pytest.fixture
def dutch_session() -> WhistSession:
    """Session with Dutch rules and the four players A, B, C, D (ids 0 to 3)."""
    session = WhistSession.new_session(GameRules.DUTCH)
    for name in PLAYER_NAMES:
        session.add_player(name)
    return session
