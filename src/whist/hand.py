"""
Construction of a Hand: the state machine that asks for contractors, bid and tricks.

A HandBuilder is created from a Contract. It exposes the ordered list of InputRequests for that contract,
validates every answer as soon as it is given, and turns the answers into an immutable Hand exactly once.

----
States: AWAITING_CONTRACTORS -> AWAITING_BID (skipped without bid) -> AWAITING_TRICKS -> READY -> BUILT

A rejected answer never clears an answer that was accepted before, so the caller only has to fix the faulty field.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Optional, Self, assert_never

from src.core.exceptions import (
    BidOutOfRangeError,
    HandAlreadyBuiltError,
    InvalidInputError,
    MissingBidError,
    MissingContractorsError,
    MissingTricksError,
    ShapeMismatchError,
    TricksOutOfRangeError,
    UnexpectedInputError,
)
from src.core.shared_types import Shape
from src.whist.contractors import (
    MAX_TRICKS,
    PLAYER_COUNT,
    Contractors,
    Other,
    Solo,
    Team,
    contractor_count,
    contractors_from_dict,
    contractors_to_dict,
)
from src.whist.rules import Contract


# --- INPUT REQUESTS ---
@dataclass(frozen=True)
class ContractorsSolo:
    count: int = 1


@dataclass(frozen=True)
class ContractorsTeam:
    count: int = 2


@dataclass(frozen=True)
class ContractorsOther:
    count: int = contractor_count(Shape.OTHER)


@dataclass(frozen=True)
class Bid:
    min: int
    max: int


@dataclass(frozen=True)
class Tricks:
    min: int = 0
    max: int = MAX_TRICKS


InputRequest = ContractorsSolo | ContractorsTeam | ContractorsOther | Bid | Tricks


def contractors_request(shape: Shape, player_count: int = PLAYER_COUNT) -> InputRequest:
    if shape == Shape.SOLO:
        return ContractorsSolo()
    if shape == Shape.TEAM:
        return ContractorsTeam()
    if shape == Shape.OTHER:
        return ContractorsOther(count=player_count - 1)
    assert_never(shape)


class BuildState(Enum):
    AWAITING_CONTRACTORS = auto()
    AWAITING_BID = auto()
    AWAITING_TRICKS = auto()
    READY = auto()
    BUILT = auto()


# --- RESULTS ---
@dataclass(frozen=True)
class Hand:
    contract: Contract
    contractors: Contractors
    bid: Optional[int]
    tricks: int


@dataclass(frozen=True)
class HandRecap:
    """What is kept of a hand once it has been scored. scores: one delta per PlayerId."""

    gamemode_name: str
    bid: Optional[int]
    tricks: int
    contractors: Contractors
    scores: tuple[int, ...]

    def __post_init__(self) -> None:
        if len(self.scores) != PLAYER_COUNT:
            raise InvalidInputError(
                f"A hand holds one score per player: expected {PLAYER_COUNT}, got {len(self.scores)}."
            )

    @classmethod
    def from_hand(cls, hand: Hand, scores: tuple[int, ...]) -> Self:
        return cls(
            gamemode_name=hand.contract.name,
            bid=hand.bid,
            tricks=hand.tricks,
            contractors=hand.contractors,
            scores=tuple(scores),
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        try:
            return cls(
                gamemode_name=data["gamemode_name"],
                bid=data.get("bid"),
                tricks=int(data["tricks"]),
                contractors=contractors_from_dict(data["contractors"]),
                scores=tuple(int(s) for s in data["scores"]),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise InvalidInputError(f"Cannot interpret hand recap: {data!r}") from exc

    def to_dict(self) -> dict[str, Any]:
        return {
            "gamemode_name": self.gamemode_name,
            "bid": self.bid,
            "tricks": self.tricks,
            "contractors": contractors_to_dict(self.contractors),
            "scores": list(self.scores),
        }

    def points_of_contractors(self) -> list[tuple[int, int]]:
        """(PlayerId, delta) for every contractor of the hand."""
        return [(pid, self.scores[pid]) for pid in self.contractors.player_ids()]


# --- BUILDER ---
class HandBuilder:
    """Single-use accumulator of the answers needed to build one Hand."""

    def __init__(self, contract: Contract, player_count: int = PLAYER_COUNT) -> None:
        self.contract = contract
        self.player_count = player_count
        self.contractors: Optional[Contractors] = None
        self.bid: Optional[int] = None
        self.tricks: Optional[int] = None
        self._built = False

    @classmethod
    def from_hand(cls, hand: Hand, player_count: int = PLAYER_COUNT) -> Self:
        """A fresh builder holding the answers of an already built hand."""
        builder = cls(hand.contract, player_count)
        builder.contractors = hand.contractors
        builder.bid = hand.bid
        builder.tricks = hand.tricks
        return builder

    @property
    def state(self) -> BuildState:
        if self._built:
            return BuildState.BUILT
        if self.contractors is None:
            return BuildState.AWAITING_CONTRACTORS
        if self.contract.requires_bid and self.bid is None:
            return BuildState.AWAITING_BID
        if self.tricks is None:
            return BuildState.AWAITING_TRICKS
        return BuildState.READY

    def all_requests(self) -> list[InputRequest]:
        """Everything the contract asks for, in the order it has to be asked. Depends on the contract only."""
        requests: list[InputRequest] = [
            contractors_request(self.contract.shape, self.player_count)
        ]
        if self.contract.bid_range is not None:
            requests.append(Bid(self.contract.bid_range.min, self.contract.bid_range.max))
        requests.append(Tricks())
        return requests

    def pending_requests(self) -> list[InputRequest]:
        """The requests that still lack a valid answer."""
        return [request for request in self.all_requests() if not self._is_answered(request)]

    def set_contractors(self, contractors: Contractors) -> None:
        self._assert_not_built()
        self._validate_contractors(contractors)
        self.contractors = contractors

    def set_bid(self, value: int) -> None:
        self._assert_not_built()
        bid_range = self.contract.bid_range
        if bid_range is None:
            raise UnexpectedInputError(f"{self.contract.name} is played without a bid.")
        if value not in bid_range:
            raise BidOutOfRangeError(
                f"Bid {value} outside of [{bid_range.min}, {bid_range.max}] for {self.contract.name}."
            )
        self.bid = value

    def set_tricks(self, value: int) -> None:
        self._assert_not_built()
        if not 0 <= value <= MAX_TRICKS:
            raise TricksOutOfRangeError(f"Tricks must be within 0 and {MAX_TRICKS}, got {value}.")
        self.tricks = value

    def build(self) -> Hand:
        self._assert_not_built()
        if self.contractors is None:
            raise MissingContractorsError("Contractors not set.")
        if self.contract.requires_bid and self.bid is None:
            raise MissingBidError("Bid not set.")
        if self.tricks is None:
            raise MissingTricksError("Tricks not set.")

        self._built = True
        return Hand(
            contract=self.contract,
            contractors=self.contractors,
            bid=self.bid,
            tricks=self.tricks,
        )

    # -- Internal helpers --
    def _assert_not_built(self) -> None:
        if self._built:
            raise HandAlreadyBuiltError(
                "Hand already built. Start a new one from a contract."
            )

    def _is_answered(self, request: InputRequest) -> bool:
        if isinstance(request, (ContractorsSolo, ContractorsTeam, ContractorsOther)):
            return self.contractors is not None
        if isinstance(request, Bid):
            return self.bid is not None
        if isinstance(request, Tricks):
            return self.tricks is not None
        assert_never(request)

    def _validate_contractors(self, contractors: Contractors) -> None:
        """Shape, number of players and player ids have to match the contract."""
        expected = self.contract.shape
        if contractors.shape != expected:
            raise ShapeMismatchError(
                f"{self.contract.name} requires {expected} contractors, got {contractors.shape}."
            )

        player_ids = contractors.player_ids()
        if isinstance(contractors, Other):
            expected_count = self.player_count - 1
        elif isinstance(contractors, (Solo, Team)):
            expected_count = contractor_count(contractors.shape)
        else:
            assert_never(contractors)

        if len(player_ids) != expected_count:
            raise ShapeMismatchError(
                f"{self.contract.name} requires {expected_count} contractors, got {len(player_ids)}."
            )
        if len(set(player_ids)) != len(player_ids):
            raise ShapeMismatchError(f"A player appears twice among {player_ids}.")

        unknown = [pid for pid in player_ids if not 0 <= pid < self.player_count]
        if unknown:
            raise InvalidInputError(f"Unknown player id(s): {unknown}")
