"""
The Session class is the entrypoint into the domain layer for the service layer.
It owns everything that makes up one evening of whist: the rules, the players with their scores and the ledger of hands.
It hands out HandBuilders for the selected contract and turns a finished Hand into scores -->
the service layer persists the result through a SessionModel.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional, Self, Sequence

from src.core.exceptions import (
    GameStateError,
    InvalidInputError,
    TooManyPlayerError,
    UnexpectedInputError,
)
from src.core.models import SessionModel
from src.core.shared_types import GameRules, Shape, Status
from src.whist.contractors import (
    PLAYER_COUNT,
    Contractors,
    Other,
    PlayerId,
    Solo,
    Team,
    contractor_count,
)
from src.whist.hand import Hand, HandBuilder, HandRecap
from src.whist.historic import HandsHistoric
from src.whist.players import Players
from src.whist.rules import Contract, select_rules
from src.whist.scoring import score

logger = logging.getLogger(__name__)


@dataclass
class Session:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    rules: Optional[GameRules] = None
    contracts: list[Contract] = field(default_factory=list)
    selected_contract: int = 0
    players: Players = field(default_factory=Players)
    historic: HandsHistoric = field(default_factory=HandsHistoric)

    @classmethod
    def new_session(cls, rules: Optional[GameRules] = None) -> Self:
        session = cls()
        if rules is not None:
            session.select_rules(rules)
        return session

    @classmethod
    def from_model(cls, model: SessionModel) -> Self:
        """Define how to construct a Session from the information the Service layer actually has"""

        # Validation
        rules: Optional[GameRules] = None
        if model.rules is not None:
            if model.rules not in {rule.value for rule in GameRules}:
                raise GameStateError(
                    f"Invalid rules: {model.rules!r}. \nPick one from {','.join(rule.value for rule in GameRules)}"
                )
            rules = GameRules(model.rules)

        session = cls.new_session(rules)
        session.players = Players.from_records(model.players)
        session.historic = HandsHistoric.from_recaps(
            HandRecap.from_dict(hand) for hand in model.hands
        )
        if session.contracts:
            session.select_contract(model.selected_contract)
        return session

    def to_model(self) -> SessionModel:
        """Encode back into a format the Service layer uses"""

        return SessionModel(
            rules=self.rules.value if self.rules else None,
            selected_contract=self.selected_contract,
            players=self.players.to_records(),
            hands=[recap.to_dict() for recap, _ in self.historic],
            status=self.status.value,
        )

    @property
    def status(self) -> Status:
        if self.rules is None:
            return Status.WAITING_FOR_RULES
        if not self.players.is_full:
            return Status.WAITING_FOR_PLAYERS
        return Status.IN_PROGRESS

    @property
    def selected(self) -> Contract:
        if not self.contracts:
            raise GameStateError("No rules selected yet.")
        return self.contracts[self.selected_contract]

    def select_rules(self, rules: GameRules) -> None:
        """(Re)load the contract list. Not allowed anymore once hands were recorded under the current rules."""
        if len(self.historic) > 0 and rules != self.rules:
            raise GameStateError(
                f"Cannot switch to {rules} rules: {len(self.historic)} hand(s) played under {self.rules} rules."
            )
        self.rules = rules
        self.contracts = select_rules(rules)
        self.selected_contract = 0
        logger.info("Rules set to %s (%d contracts)", rules, len(self.contracts))

    def add_player(self, name: str) -> int:
        count = self.players.add_player(name)
        logger.info("Player %r registered (%d/%d)", name.strip(), count, PLAYER_COUNT)
        return count

    def select_contract(self, index: int) -> Contract:
        if not self.contracts:
            raise GameStateError("No rules selected yet.")
        if not 0 <= index < len(self.contracts):
            raise InvalidInputError(
                f"No contract at index {index}. Pick one from 0 to {len(self.contracts) - 1}."
            )
        self.selected_contract = index
        return self.contracts[index]

    def new_hand(self) -> HandBuilder:
        """Start entering a hand for the selected contract."""
        self._assert_in_progress()
        return HandBuilder(self.selected, player_count=len(self.players))

    def contractors_from_names(
        self, names: Sequence[str], points: Optional[Sequence[int]] = None
    ) -> Contractors:
        """
        Translate the selected player names into Contractors.
        ----
        The shape follows from the number of names: 1 -> Solo, 2 -> Team, 3 -> Other (points required, same order as names).
        Names are matched without surrounding whitespace. Points given for a Solo or Team are refused.
        """
        player_ids = [self._get_id(name.strip()) for name in names]

        scored_by_contract = (contractor_count(Shape.SOLO), contractor_count(Shape.TEAM))
        if points is not None and len(player_ids) in scored_by_contract:
            raise UnexpectedInputError("Points are only entered for manually scored contracts.")
        if len(player_ids) == contractor_count(Shape.SOLO):
            return Solo(player_ids[0])
        if len(player_ids) == contractor_count(Shape.TEAM):
            return Team(player_ids[0], player_ids[1])
        if len(player_ids) == contractor_count(Shape.OTHER):
            if points is None:
                raise InvalidInputError("Points not set")
            if len(points) != len(player_ids):
                raise InvalidInputError(
                    f"Got {len(points)} point values for {len(player_ids)} players."
                )
            return Other.from_pairs(list(zip(player_ids, points)))
        raise TooManyPlayerError(f"No contract is played by {len(player_ids)} players.")

    def record_hand(self, hand: Hand) -> HandRecap:
        """Score the hand, update the players' scores and append it to the historic."""
        self._assert_in_progress()
        recap = HandRecap.from_hand(hand, score(hand))
        self.players.apply_scores(recap.scores)
        self.historic.push(recap)
        logger.info(
            "Hand %d recorded: %s, scores %s, totals %s",
            len(self.historic),
            recap.gamemode_name,
            recap.scores,
            self.historic.totals,
        )
        return recap

    def undo_last_hand(self) -> HandRecap:
        recap = self.historic.remove_last()
        self.players.revert_scores(recap.scores)
        logger.info("Hand %d (%s) removed", len(self.historic) + 1, recap.gamemode_name)
        return recap

    def reset(self) -> None:
        """Forget players and hands. The rules are kept."""
        self.players.reset()
        self.historic = HandsHistoric()
        logger.info("Session reset")

    # -- PRIVATE HELPERS ---
    def _get_id(self, name: str) -> PlayerId:
        player_id = self.players.get_id(name)
        if player_id is None:
            raise InvalidInputError(f"Player ID mismatch: unknown player {name!r}")
        return player_id

    def _assert_in_progress(self) -> None:
        if self.status != Status.IN_PROGRESS:
            raise GameStateError(f"Session is not in progress. status: {self.status}")
