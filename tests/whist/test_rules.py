"""Unit tests for src/whist/rules.py"""

import pytest

from src.core.shared_types import GameRules, Shape
from src.whist.contractors import MAX_TRICKS
from src.whist.rules import BidRange, Contract, Gamemode, select_rules


@pytest.mark.parametrize("rules", list(GameRules))
def test_select_rules_is_deterministic(rules: GameRules) -> None:
    """Same rules, same contracts in the same order (the selected index must keep pointing to the same contract)."""
    first = select_rules(rules)
    second = select_rules(rules)
    assert first == second
    assert [c.name for c in first] == [c.name for c in second]


@pytest.mark.parametrize("rules", list(GameRules))
def test_every_shape_is_available(rules: GameRules) -> None:
    shapes = {contract.shape for contract in select_rules(rules)}
    assert shapes == {Shape.SOLO, Shape.TEAM, Shape.OTHER}


@pytest.mark.parametrize("rules", list(GameRules))
def test_bid_ranges_are_legal(rules: GameRules) -> None:
    for contract in select_rules(rules):
        if contract.bid_range is None:
            continue
        assert 0 <= contract.bid_range.min <= contract.bid_range.max <= MAX_TRICKS


def test_dutch_contracts() -> None:
    contracts = select_rules(GameRules.DUTCH)
    assert [c.name for c in contracts] == [
        "Vraag en meegaan",
        "Alleen",
        "Troel",
        "Abondance",
        "Miserie",
        "Open miserie",
        "Solo slim",
        "Andere",
    ]
    alleen = contracts[1]
    assert alleen.shape == Shape.SOLO
    assert alleen.bid_range == BidRange(5, 13)
    assert alleen.requires_bid
    assert not contracts[4].requires_bid


def test_french_contracts_differ_from_dutch() -> None:
    french = select_rules(GameRules.FRENCH)
    assert french[0].name == "Emballage"
    assert french[-1].is_manual
    assert [c.name for c in french] != [c.name for c in select_rules(GameRules.DUTCH)]


def test_returned_list_is_a_copy() -> None:
    """Modifying a returned list does not affect the catalog."""
    contracts = select_rules(GameRules.DUTCH)
    contracts.clear()
    assert len(select_rules(GameRules.DUTCH)) == 8


def test_bid_range_contains() -> None:
    bid_range = BidRange(8, 13)
    assert 8 in bid_range
    assert 13 in bid_range
    assert 7 not in bid_range
    assert 14 not in bid_range


def test_contract_name() -> None:
    contract = Contract(Gamemode("Test"), Shape.TEAM)
    assert contract.name == "Test"
    assert not contract.requires_bid
    assert not contract.is_manual
