"""
Score calculation: from a completed Hand to one delta per player.

contract value = base + bid_step * (bid - minimum bid) + trick_step * |tricks - target|
  (times slam_multiplier when made with all 13 tricks), positive if made, negative if failed.

Distribution over the table (always sums to 0):
- Solo: the soloist gets 3 * value, every opponent -value.
- Team: both partners get value, both opponents -value.
- Other: the entered points as given, the remaining player gets the balance.
"""

from typing import Optional, assert_never

from src.whist.contractors import MAX_TRICKS, PLAYER_COUNT, Other, Solo, Team
from src.whist.hand import Hand
from src.whist.rules import Contract, Objective


def target_tricks(contract: Contract, bid: Optional[int]) -> int:
    """The bid if the contract has one, otherwise the fixed target of the gamemode."""
    if contract.bid_range is not None:
        if bid is None:
            raise ValueError(f"{contract.name} cannot be scored without a bid")
        return bid
    return contract.gamemode.target


def contract_made(contract: Contract, bid: Optional[int], tricks: int) -> bool:
    return _margin(contract, bid, tricks) >= 0


def contract_points(contract: Contract, bid: Optional[int], tricks: int) -> int:
    """Signed value of the contract for one contractor unit."""
    gamemode = contract.gamemode
    margin = _margin(contract, bid, tricks)

    value = gamemode.base + gamemode.trick_step * abs(margin)
    if contract.bid_range is not None and bid is not None:
        value += gamemode.bid_step * (bid - contract.bid_range.min)

    if margin < 0:
        return -value
    if tricks == MAX_TRICKS and gamemode.objective == Objective.AT_LEAST:
        value *= gamemode.slam_multiplier
    return value


def score(hand: Hand) -> tuple[int, ...]:
    """Per-player deltas for the hand, indexed by PlayerId."""
    contractors = hand.contractors

    if isinstance(contractors, Other):
        scores = [0] * PLAYER_COUNT
        for player, points in (entry.as_components() for entry in contractors.entries):
            scores[player] = points
        named = set(contractors.player_ids())
        remaining = [pid for pid in range(PLAYER_COUNT) if pid not in named]
        # The balance is split over the players without entered points (one with 4 players).
        share, rest = divmod(-sum(scores), len(remaining) or 1)
        for index, pid in enumerate(remaining):
            scores[pid] = share + (1 if index < rest else 0)
        return tuple(scores)

    value = contract_points(hand.contract, hand.bid, hand.tricks)
    if isinstance(contractors, Solo):
        scores = [-value] * PLAYER_COUNT
        scores[contractors.player] = (PLAYER_COUNT - 1) * value
        return tuple(scores)
    if isinstance(contractors, Team):
        scores = [-value] * PLAYER_COUNT
        scores[contractors.first] = value
        scores[contractors.second] = value
        return tuple(scores)
    assert_never(contractors)


# -- Internal helpers --
def _margin(contract: Contract, bid: Optional[int], tricks: int) -> int:
    """Tricks to spare (>= 0) or missing (< 0) with respect to the target."""
    target = target_tricks(contract, bid)
    objective = contract.gamemode.objective
    if objective == Objective.AT_LEAST:
        return tricks - target
    if objective == Objective.AT_MOST:
        return target - tricks
    assert_never(objective)
