"""Unit tests for src/db/sql_repository.py"""

from uuid import uuid4

from sqlalchemy.orm import Session

from src.core.shared_types import Status
from src.db.sql_repository import SessionModel, SQLSessionRepository

HAND = {
    "gamemode_name": "Alleen",
    "bid": 5,
    "tricks": 5,
    "contractors": {"shape": "solo", "players": [1]},
    "scores": [-3, 9, -3, -3],
}


def _players(*scores: int) -> list[dict]:
    return [
        {"id": i, "name": name, "score": score}
        for i, (name, score) in enumerate(zip("ABCD", scores))
    ]


def _model() -> SessionModel:
    return SessionModel(
        rules="dutch",
        selected_contract=1,
        players=_players(-3, 9, -3, -3),
        hands=[HAND],
        status=Status.IN_PROGRESS,
    )


def test_create_session(db_session_repo: Session) -> None:
    """Conversion from a SessionModel to DBSession for a new entry to the database."""
    model = _model()
    repo = SQLSessionRepository(db_session_repo)
    record_in_db, _ = repo.create_session(model)
    assert isinstance(record_in_db, SessionModel)
    assert record_in_db == model


def test_create_empty_session(db_session_repo: Session) -> None:
    model = SessionModel(
        rules=None, selected_contract=0, players=[], hands=[], status=Status.WAITING_FOR_RULES
    )
    repo = SQLSessionRepository(db_session_repo)
    record_in_db, session_id = repo.create_session(model)
    assert record_in_db == model
    assert repo.get_session(session_id) == model


def test_get_session_by_id(db_session_repo: Session) -> None:
    """Create a session, then fetch it from db."""
    repo = SQLSessionRepository(db_session_repo)
    expected_session, session_id = repo.create_session(_model())
    session_found = repo.get_session(session_id)
    assert isinstance(session_found, SessionModel)
    assert session_found == expected_session


def test_get_unknown_session(db_session_repo: Session) -> None:
    """
    Should return None if ID does not match anything in database.

    NOTE with an empty database, any id is a valid test case.
    """
    repo = SQLSessionRepository(db_session_repo)
    assert repo.get_session(uuid4()) is None

    # Now do it with creating a session, but retrieving from the wrong ID
    repo.create_session(_model())
    assert repo.get_session(uuid4()) is None


def test_update_session(db_session_repo: Session) -> None:
    """Update an earlier created record: a second hand was played."""
    repo = SQLSessionRepository(db_session_repo)
    _, session_id = repo.create_session(_model())

    second_hand = dict(HAND, contractors={"shape": "solo", "players": [0]}, scores=[9, -3, -3, -3])
    updated = SessionModel(
        rules="dutch",
        selected_contract=4,
        players=_players(6, 6, -6, -6),
        hands=[HAND, second_hand],
        status=Status.IN_PROGRESS,
    )
    result = repo.update_session(session_id, updated)
    assert result == updated

    fetched = repo.get_session(session_id)
    assert fetched is not None
    assert fetched.hands == [HAND, second_hand]
    assert fetched.selected_contract == 4
    assert [p["score"] for p in fetched.players] == [6, 6, -6, -6]


def test_update_unknown_session(db_session_repo: Session) -> None:
    repo = SQLSessionRepository(db_session_repo)
    assert repo.update_session(uuid4(), _model()) is None


def test_delete_session(db_session_repo: Session) -> None:
    repo = SQLSessionRepository(db_session_repo)
    model, session_id = repo.create_session(_model())

    deleted = repo.delete_session(session_id)
    assert deleted == model
    assert repo.get_session(session_id) is None
    assert repo.delete_session(session_id) is None
