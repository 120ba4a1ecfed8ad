"""Unit tests for src/main.py"""

import logging

import pytest
from sqlalchemy.orm import Session

from src.api.models import CreateSessionRequest, GetSessionRequest
from src.core.shared_types import GameRules, Status
from src.main import build_service, configure_logging
from src.services.whist_service import WhistService


def test_build_service_on_given_database(db_session_repo: Session) -> None:
    """Service wired to SQL persistence: a created session can be read back."""
    service = build_service(db_session_repo)
    assert isinstance(service, WhistService)

    created = service.create_session(CreateSessionRequest(rules=GameRules.DUTCH))
    fetched = service.get_session(GetSessionRequest(session_id=created.session_id))
    assert fetched.status == Status.WAITING_FOR_PLAYERS
    assert fetched.rules == GameRules.DUTCH


def test_configure_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[dict] = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))

    configure_logging("debug")
    configure_logging("nonsense")

    assert calls[0]["level"] == logging.DEBUG
    assert calls[1]["level"] == logging.INFO


def test_build_service_configures_logging(db_session_repo: Session, monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[dict] = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))

    build_service(db_session_repo)
    assert len(calls) == 1
    assert "%(name)s" in calls[0]["format"]
