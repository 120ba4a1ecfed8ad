"""Orchestration of communication from API router to business logic and persistence layers (and the reverse direction)."""

import logging
from typing import assert_never
from uuid import UUID

from src.api.models import (
    AddPlayerRequest,
    BidRequest,
    ContractorResponse,
    ContractorsRequest,
    ContractResponse,
    ContractsResponse,
    CreateSessionRequest,
    DeleteSessionRequest,
    GetSessionRequest,
    HandRecapResponse,
    HandRequest,
    HandRequestsResponse,
    HistoricResponse,
    InputRequestResponse,
    PlayerResponse,
    ResetSessionRequest,
    SelectContractRequest,
    SelectRulesRequest,
    SessionResponse,
    TricksRequest,
    UndoHandRequest,
)
from src.core.exceptions import GameStateError, RepositoryError
from src.core.models import SessionModel
from src.core.shared_types import RequestKind
from src.db.repository import SessionRepository
from src.whist.hand import (
    Bid,
    BuildState,
    ContractorsOther,
    ContractorsSolo,
    ContractorsTeam,
    HandBuilder,
    HandRecap,
    InputRequest,
    Tricks,
)
from src.whist.session import Session

logger = logging.getLogger(__name__)


class WhistService:
    """Orchestration of layers for whist score keeping.

    Sessions are persisted after every change. The hand being entered is not: it lives in memory
    until it is finished (then its result is persisted) or cancelled.
    """

    def __init__(self, repository: SessionRepository) -> None:
        self.repo = repository
        self._builders: dict[UUID, HandBuilder] = {}

    # -- Session set-up --
    def create_session(self, request: CreateSessionRequest) -> SessionResponse:
        """Open a new score sheet, optionally with the rules already chosen."""
        session = Session.new_session(request.rules)
        stored_session, session_id = self.repo.create_session(session.to_model())
        logger.info("Session %s created", session_id)
        return self._create_session_response(session_id, Session.from_model(stored_session))

    def select_rules(self, request: SelectRulesRequest) -> SessionResponse:
        session = self._load_session(request.session_id)
        session.select_rules(request.rules)
        self._builders.pop(request.session_id, None)
        return self._save_session(request.session_id, session)

    def add_player(self, request: AddPlayerRequest) -> SessionResponse:
        session = self._load_session(request.session_id)
        session.add_player(request.player_name)
        return self._save_session(request.session_id, session)

    def list_contracts(self, request: GetSessionRequest) -> ContractsResponse:
        session = self._load_session(request.session_id)
        if session.rules is None:
            raise GameStateError("No rules selected yet.")
        return ContractsResponse(
            session_id=request.session_id,
            rules=session.rules,
            contracts=[
                ContractResponse(
                    index=index,
                    name=contract.name,
                    shape=contract.shape,
                    bid_min=contract.bid_range.min if contract.bid_range else None,
                    bid_max=contract.bid_range.max if contract.bid_range else None,
                    manual=contract.is_manual,
                )
                for index, contract in enumerate(session.contracts)
            ],
            selected_index=session.selected_contract,
        )

    def select_contract(self, request: SelectContractRequest) -> SessionResponse:
        """Choose the contract of the next hand. Discards a hand that was being entered."""
        session = self._load_session(request.session_id)
        session.select_contract(request.contract_index)
        self._builders.pop(request.session_id, None)
        return self._save_session(request.session_id, session)

    # -- Hand entry --
    def start_hand(self, request: HandRequest) -> HandRequestsResponse:
        """
        Start entering a hand for the selected contract.
        ----
        The response lists the requests to answer, in order. Starting again discards the previous hand in progress.
        """
        session = self._load_session(request.session_id)
        builder = session.new_hand()
        self._builders[request.session_id] = builder
        logger.debug("Hand started for session %s: %s", request.session_id, builder.contract.name)
        return self._create_requests_response(request.session_id, session, builder)

    def set_contractors(self, request: ContractorsRequest) -> HandRequestsResponse:
        session = self._load_session(request.session_id)
        builder = self._get_builder(request.session_id)
        contractors = session.contractors_from_names(request.player_names, request.points)
        builder.set_contractors(contractors)
        return self._create_requests_response(request.session_id, session, builder)

    def set_bid(self, request: BidRequest) -> HandRequestsResponse:
        session = self._load_session(request.session_id)
        builder = self._get_builder(request.session_id)
        builder.set_bid(request.bid)
        return self._create_requests_response(request.session_id, session, builder)

    def set_tricks(self, request: TricksRequest) -> HandRequestsResponse:
        session = self._load_session(request.session_id)
        builder = self._get_builder(request.session_id)
        builder.set_tricks(request.tricks)
        return self._create_requests_response(request.session_id, session, builder)

    def finish_hand(self, request: HandRequest) -> SessionResponse:
        """
        Build the hand, score it, update the players and the historic, persist.
        ----
        Nothing is persisted unless every step succeeded. A hand that fails to build or to be saved stays in progress.
        """
        session = self._load_session(request.session_id)
        builder = self._get_builder(request.session_id)

        hand = builder.build()
        session.record_hand(hand)
        try:
            response = self._save_session(request.session_id, session)
        except RepositoryError:
            self._builders[request.session_id] = HandBuilder.from_hand(hand, builder.player_count)
            raise
        self._builders.pop(request.session_id)
        return response

    def cancel_hand(self, request: HandRequest) -> None:
        if self._builders.pop(request.session_id, None) is not None:
            logger.debug("Hand in progress for session %s cancelled", request.session_id)

    def undo_last_hand(self, request: UndoHandRequest) -> SessionResponse:
        session = self._load_session(request.session_id)
        session.undo_last_hand()
        return self._save_session(request.session_id, session)

    # -- Read / maintenance --
    def get_session(self, request: GetSessionRequest) -> SessionResponse:
        session = self._load_session(request.session_id)
        return self._create_session_response(request.session_id, session)

    def get_historic(self, request: GetSessionRequest) -> HistoricResponse:
        session = self._load_session(request.session_id)
        names = session.players.names()
        return HistoricResponse(
            session_id=request.session_id,
            players=names,
            hands=[
                self._create_recap_response(number, recap, cumulative, names)
                for number, (recap, cumulative) in enumerate(session.historic, start=1)
            ],
        )

    def reset_session(self, request: ResetSessionRequest) -> SessionResponse:
        """Remove players and hands, keep the rules."""
        session = self._load_session(request.session_id)
        session.reset()
        self._builders.pop(request.session_id, None)
        return self._save_session(request.session_id, session)

    def delete_session(self, request: DeleteSessionRequest) -> None:
        """Handle a request to delete a Session record."""
        self._builders.pop(request.session_id, None)
        self.repo.delete_session(request.session_id)

    # -- Internal helpers --
    def _fetch_session(self, session_id: UUID) -> SessionModel:
        """Attempt to find the session in the repository and raise error if it fails."""
        session_model = self.repo.get_session(session_id)
        if session_model is None:
            raise RepositoryError(f"Session with {session_id=} not found.")
        return session_model

    def _load_session(self, session_id: UUID) -> Session:
        return Session.from_model(self._fetch_session(session_id))

    def _save_session(self, session_id: UUID, session: Session) -> SessionResponse:
        updated = self.repo.update_session(session_id, session.to_model())
        if updated is None:
            raise RepositoryError(f"Session with {session_id=} not found.")
        return self._create_session_response(session_id, session)

    def _get_builder(self, session_id: UUID) -> HandBuilder:
        builder = self._builders.get(session_id)
        if builder is None:
            raise GameStateError("No hand in progress. Start a new hand first.")
        return builder

    def _create_session_response(self, session_id: UUID, session: Session) -> SessionResponse:
        return SessionResponse(
            session_id=session_id,
            rules=session.rules,
            status=session.status,
            players=[
                PlayerResponse(player_id=player.id, name=player.name, score=player.score)
                for player in session.players.members
            ],
            selected_contract=session.selected.name if session.contracts else None,
            hands_played=len(session.historic),
            totals=list(session.historic.totals),
        )

    def _create_requests_response(
        self, session_id: UUID, session: Session, builder: HandBuilder
    ) -> HandRequestsResponse:
        names = session.players.names()
        contractors = (
            [names[pid] for pid in builder.contractors.player_ids()]
            if builder.contractors is not None
            else []
        )
        return HandRequestsResponse(
            session_id=session_id,
            contract=builder.contract.name,
            requests=[_request_response(r) for r in builder.all_requests()],
            pending=[_request_response(r) for r in builder.pending_requests()],
            ready=builder.state == BuildState.READY,
            contractors=contractors,
            bid=builder.bid,
            tricks=builder.tricks,
        )

    def _create_recap_response(
        self, number: int, recap: HandRecap, cumulative: tuple[int, ...], names: list[str]
    ) -> HandRecapResponse:
        return HandRecapResponse(
            number=number,
            gamemode_name=recap.gamemode_name,
            bid=recap.bid,
            tricks=recap.tricks,
            contractors=[
                ContractorResponse(player_id=pid, name=names[pid], points=points)
                for pid, points in recap.points_of_contractors()
            ],
            scores=list(recap.scores),
            cumulative=list(cumulative),
        )


def _request_response(request: InputRequest) -> InputRequestResponse:
    if isinstance(request, ContractorsSolo):
        return InputRequestResponse(kind=RequestKind.CONTRACTORS_SOLO, count=request.count)
    if isinstance(request, ContractorsTeam):
        return InputRequestResponse(kind=RequestKind.CONTRACTORS_TEAM, count=request.count)
    if isinstance(request, ContractorsOther):
        return InputRequestResponse(kind=RequestKind.CONTRACTORS_OTHER, count=request.count)
    if isinstance(request, Bid):
        return InputRequestResponse(kind=RequestKind.BID, minimum=request.min, maximum=request.max)
    if isinstance(request, Tricks):
        return InputRequestResponse(kind=RequestKind.TRICKS, minimum=request.min, maximum=request.max)
    assert_never(request)
