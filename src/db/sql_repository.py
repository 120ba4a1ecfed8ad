"""Implementation of (Session)Repository using SQLAlchemy"""

import logging
from uuid import UUID, uuid4

from sqlalchemy import select
from sqlalchemy.orm import Session

from src.core.models import SessionModel
from src.db.schema import DBSession

logger = logging.getLogger(__name__)


class SQLSessionRepository:
    """Data stored using SQL / methods implemented using SQLAlchemy"""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def get_session(self, session_id: UUID) -> SessionModel | None:
        """Get session by ID, if record exists."""
        session_db = self._fetch_session(session_id)
        if session_db:
            return self._to_model(session_db)
        return None

    def create_session(self, session: SessionModel) -> tuple[SessionModel, UUID]:
        """Store new session and return the stored data + newly created session ID."""

        new_id = uuid4()
        session_db = DBSession(
            id=new_id,
            rules=session.rules,
            selected_contract=session.selected_contract,
            players=session.players,
            hands=session.hands,
            status=session.status,
        )
        self.db.add(session_db)
        self.db.commit()
        self.db.refresh(session_db)
        logger.debug("Session %s created", new_id)
        return self._to_model(session_db), new_id

    def update_session(
        self, session_id: UUID, session: SessionModel
    ) -> SessionModel | None:
        """Replace the info of an existing record."""
        session_db = self._fetch_session(session_id)
        if not session_db:
            return None
        # JSON columns are not mutation-tracked: always assign new lists.
        session_db.rules = session.rules
        session_db.selected_contract = session.selected_contract
        session_db.players = list(session.players)
        session_db.hands = list(session.hands)
        session_db.status = session.status
        self.db.commit()
        self.db.refresh(session_db)
        logger.debug("Session %s updated (%d hands)", session_id, len(session.hands))
        return self._to_model(session_db)

    def delete_session(self, session_id: UUID) -> SessionModel | None:
        """Remove a session's record."""
        session_db = self._fetch_session(session_id)
        if not session_db:
            return None
        session_model = self._to_model(session_db)
        self.db.delete(session_db)
        self.db.commit()
        logger.debug("Session %s deleted", session_id)
        return session_model

    def _fetch_session(self, session_id: UUID) -> DBSession | None:
        query = select(DBSession).where(DBSession.id == session_id)
        return self.db.scalar(query)

    def _to_model(self, session_db: DBSession) -> SessionModel:
        """Convert SQLAlchemy model to data transfer model."""
        return SessionModel(
            rules=session_db.rules,
            selected_contract=session_db.selected_contract,
            players=list(session_db.players),
            hands=list(session_db.hands),
            status=session_db.status,
        )
