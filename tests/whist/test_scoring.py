"""Unit tests for src/whist/scoring.py"""

import pytest

from src.core.shared_types import GameRules, Shape
from src.whist.contractors import Other, Solo, Team
from src.whist.hand import Hand
from src.whist.rules import Contract, select_rules
from src.whist.scoring import contract_made, contract_points, score, target_tricks

DUTCH = {contract.name: contract for contract in select_rules(GameRules.DUTCH)}
FRENCH = {contract.name: contract for contract in select_rules(GameRules.FRENCH)}


def _contractors_for(shape: Shape) -> Solo | Team | Other:
    if shape == Shape.SOLO:
        return Solo(0)
    if shape == Shape.TEAM:
        return Team(0, 1)
    return Other.from_pairs([(0, 7), (1, -3), (2, 1)])


# --- CONTRACT VALUE ---
@pytest.mark.parametrize(
    "name, bid, tricks, expected",
    [
        ("Alleen", 5, 5, 3),  # just made
        ("Alleen", 6, 8, 6),  # one level above minimum, two overtricks
        ("Alleen", 6, 4, -6),  # two tricks short
        ("Alleen", 13, 13, 22),  # slam doubles
        ("Vraag en meegaan", 8, 9, 3),
        ("Vraag en meegaan", 8, 13, 14),
        ("Vraag en meegaan", 9, 7, -5),
        ("Abondance", 10, 11, 8),  # no overtrick bonus
        ("Abondance", 12, 13, 14),  # no slam bonus
        ("Abondance", 9, 8, -5),
    ],
)
def test_contract_points_with_bid(name: str, bid: int, tricks: int, expected: int) -> None:
    assert contract_points(DUTCH[name], bid, tricks) == expected


@pytest.mark.parametrize(
    "name, tricks, expected",
    [
        ("Troel", 9, 4),
        ("Troel", 11, 6),
        ("Troel", 13, 16),
        ("Troel", 8, -5),
        ("Miserie", 0, 7),
        ("Miserie", 1, -7),
        ("Miserie", 13, -7),
        ("Open miserie", 0, 14),
        ("Solo slim", 13, 30),
        ("Solo slim", 12, -30),
    ],
)
def test_contract_points_without_bid(name: str, tricks: int, expected: int) -> None:
    assert contract_points(DUTCH[name], None, tricks) == expected


def test_target_tricks() -> None:
    assert target_tricks(DUTCH["Alleen"], 7) == 7
    assert target_tricks(DUTCH["Troel"], None) == 9
    assert target_tricks(DUTCH["Miserie"], None) == 0
    with pytest.raises(ValueError):
        target_tricks(DUTCH["Alleen"], None)


def test_contract_made() -> None:
    assert contract_made(DUTCH["Alleen"], 5, 5)
    assert not contract_made(DUTCH["Alleen"], 5, 4)
    assert contract_made(DUTCH["Miserie"], None, 0)
    assert not contract_made(DUTCH["Miserie"], None, 2)


# --- DISTRIBUTION OVER THE TABLE ---
def test_solo_distribution() -> None:
    hand = Hand(DUTCH["Alleen"], Solo(1), 5, 5)
    assert score(hand) == (-3, 9, -3, -3)


def test_failed_solo_distribution() -> None:
    hand = Hand(DUTCH["Miserie"], Solo(3), None, 2)
    assert score(hand) == (7, 7, 7, -21)


def test_team_distribution() -> None:
    hand = Hand(DUTCH["Vraag en meegaan"], Team(0, 2), 8, 9)
    assert score(hand) == (3, -3, 3, -3)


def test_other_distribution() -> None:
    """Entered points are used as they are, the player left out gets the balance."""
    hand = Hand(DUTCH["Andere"], Other.from_pairs([(0, 10), (1, -4), (3, 2)]), None, 6)
    assert score(hand) == (10, -4, -8, 2)


def test_french_solo() -> None:
    hand = Hand(FRENCH["Seul"], Solo(2), 6, 7)
    assert score(hand) == (-4, -4, 12, -4)


@pytest.mark.parametrize(
    "contract",
    select_rules(GameRules.DUTCH) + select_rules(GameRules.FRENCH),
    ids=lambda c: c.name,
)
def test_scores_sum_to_zero(contract: Contract) -> None:
    """Every possible outcome gives a delta to each of the 4 players, summing to 0."""
    bids = (
        range(contract.bid_range.min, contract.bid_range.max + 1)
        if contract.bid_range
        else [None]
    )
    for bid in bids:
        for tricks in range(14):
            scores = score(Hand(contract, _contractors_for(contract.shape), bid, tricks))
            assert len(scores) == 4
            assert sum(scores) == 0


def test_score_is_deterministic() -> None:
    hand = Hand(DUTCH["Troel"], Team(1, 3), None, 10)
    assert score(hand) == score(hand)
