"""
Rule catalog: the contracts that can be played under a given rule set.

Each Contract combines a Gamemode (name and scoring parameters), the contractor Shape it requires
and, if the contractors announce a number of tricks, the range of legal bids.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, assert_never

from src.core.shared_types import GameRules, Shape
from src.whist.contractors import MAX_TRICKS


class Objective(Enum):
    """How the tricks taken by the contractors are compared to the target."""

    AT_LEAST = auto()
    AT_MOST = auto()


@dataclass(frozen=True)
class Gamemode:
    """Named scoring mode.

    target: trick target for modes without a bid (a bid replaces it otherwise).
    base: points for exactly reaching the target at the lowest level.
    bid_step: extra points per bid level above the minimum bid.
    trick_step: extra points per trick above (made) or below (failed) the target.
    slam_multiplier: applied when the contract is made with all 13 tricks.
    """

    name: str
    objective: Objective = Objective.AT_LEAST
    target: int = 0
    base: int = 0
    bid_step: int = 0
    trick_step: int = 0
    slam_multiplier: int = 1


@dataclass(frozen=True)
class BidRange:
    min: int
    max: int

    def __contains__(self, value: int) -> bool:
        return self.min <= value <= self.max


@dataclass(frozen=True)
class Contract:
    gamemode: Gamemode
    shape: Shape
    bid_range: Optional[BidRange] = None

    @property
    def name(self) -> str:
        return self.gamemode.name

    @property
    def requires_bid(self) -> bool:
        return self.bid_range is not None

    @property
    def is_manual(self) -> bool:
        """Points are entered by hand instead of computed from the tricks."""
        return self.shape == Shape.OTHER


# --- RULE SETS ---
DUTCH_CONTRACTS: tuple[Contract, ...] = (
    Contract(
        Gamemode("Vraag en meegaan", base=2, bid_step=1, trick_step=1, slam_multiplier=2),
        Shape.TEAM,
        BidRange(8, MAX_TRICKS),
    ),
    Contract(
        Gamemode("Alleen", base=3, bid_step=1, trick_step=1, slam_multiplier=2),
        Shape.SOLO,
        BidRange(5, MAX_TRICKS),
    ),
    Contract(
        Gamemode("Troel", target=9, base=4, trick_step=1, slam_multiplier=2),
        Shape.TEAM,
    ),
    Contract(
        Gamemode("Abondance", base=5, bid_step=3),
        Shape.SOLO,
        BidRange(9, 12),
    ),
    Contract(
        Gamemode("Miserie", objective=Objective.AT_MOST, target=0, base=7),
        Shape.SOLO,
    ),
    Contract(
        Gamemode("Open miserie", objective=Objective.AT_MOST, target=0, base=14),
        Shape.SOLO,
    ),
    Contract(
        Gamemode("Solo slim", target=MAX_TRICKS, base=30),
        Shape.SOLO,
    ),
    Contract(Gamemode("Andere"), Shape.OTHER),
)

FRENCH_CONTRACTS: tuple[Contract, ...] = (
    Contract(
        Gamemode("Emballage", base=2, bid_step=1, trick_step=1, slam_multiplier=2),
        Shape.TEAM,
        BidRange(8, MAX_TRICKS),
    ),
    Contract(
        Gamemode("Seul", base=3, bid_step=1, trick_step=1, slam_multiplier=2),
        Shape.SOLO,
        BidRange(6, MAX_TRICKS),
    ),
    Contract(
        Gamemode("Trou", target=9, base=4, trick_step=1, slam_multiplier=2),
        Shape.TEAM,
    ),
    Contract(
        Gamemode("Petite misère", objective=Objective.AT_MOST, target=0, base=6),
        Shape.SOLO,
    ),
    Contract(
        Gamemode("Abondance", base=6, bid_step=3),
        Shape.SOLO,
        BidRange(9, 12),
    ),
    Contract(
        Gamemode("Grande misère", objective=Objective.AT_MOST, target=0, base=12),
        Shape.SOLO,
    ),
    Contract(
        Gamemode("Grande misère étalée", objective=Objective.AT_MOST, target=0, base=24),
        Shape.SOLO,
    ),
    Contract(
        Gamemode("Chelem", target=MAX_TRICKS, base=36),
        Shape.SOLO,
    ),
    Contract(Gamemode("Autre"), Shape.OTHER),
)


def select_rules(rules: GameRules) -> list[Contract]:
    """Contracts available under the given rules, always in the same order."""
    if rules == GameRules.DUTCH:
        return list(DUTCH_CONTRACTS)
    if rules == GameRules.FRENCH:
        return list(FRENCH_CONTRACTS)
    assert_never(rules)
