"""
Contractors: the player(s) accountable for the outcome of a hand.

A closed set of three variants (Solo, Team, Other). Every consumer checks all three
and raises on anything else, so adding a shape is a change in one place.
"""

from dataclasses import dataclass
from typing import Any, Self, assert_never

from src.core.exceptions import InvalidInputError
from src.core.shared_types import Shape

PlayerId = int

PLAYER_COUNT = 4
MAX_TRICKS = 13

CONTRACTOR_COUNT: dict[Shape, int] = {
    Shape.SOLO: 1,
    Shape.TEAM: 2,
    # Everybody but one player: the remaining player receives the balance.
    Shape.OTHER: PLAYER_COUNT - 1,
}


@dataclass(frozen=True)
class Solo:
    player: PlayerId

    @property
    def shape(self) -> Shape:
        return Shape.SOLO

    def player_ids(self) -> tuple[PlayerId, ...]:
        return (self.player,)


@dataclass(frozen=True)
class Team:
    first: PlayerId
    second: PlayerId

    @property
    def shape(self) -> Shape:
        return Shape.TEAM

    def player_ids(self) -> tuple[PlayerId, ...]:
        return (self.first, self.second)


@dataclass(frozen=True)
class PlayerIdAndScore:
    player: PlayerId
    points: int

    def as_components(self) -> tuple[PlayerId, int]:
        return self.player, self.points


@dataclass(frozen=True)
class Other:
    """Players with manually entered points."""

    entries: tuple[PlayerIdAndScore, ...]

    @classmethod
    def from_pairs(cls, pairs: list[tuple[PlayerId, int]]) -> Self:
        return cls(tuple(PlayerIdAndScore(player, points) for player, points in pairs))

    @property
    def shape(self) -> Shape:
        return Shape.OTHER

    def player_ids(self) -> tuple[PlayerId, ...]:
        return tuple(entry.player for entry in self.entries)


Contractors = Solo | Team | Other


def contractor_count(shape: Shape) -> int:
    return CONTRACTOR_COUNT[shape]


def contractors_to_dict(contractors: Contractors) -> dict[str, Any]:
    """Encode into plain JSON types (used for persistence)."""
    data: dict[str, Any] = {
        "shape": contractors.shape.value,
        "players": list(contractors.player_ids()),
    }
    if isinstance(contractors, Other):
        data["points"] = [entry.points for entry in contractors.entries]
    return data


def contractors_from_dict(data: dict[str, Any]) -> Contractors:
    try:
        shape = Shape(data["shape"])
        players = [int(p) for p in data["players"]]
    except (KeyError, ValueError, TypeError) as exc:
        raise InvalidInputError(f"Cannot interpret contractors: {data!r}") from exc

    if any(not 0 <= p < PLAYER_COUNT for p in players):
        raise InvalidInputError(f"Contractor ids must be within 0..{PLAYER_COUNT - 1}: {data!r}")
    if len(set(players)) != len(players):
        raise InvalidInputError(f"Contractor ids must be distinct: {data!r}")

    if len(players) != contractor_count(shape):
        raise InvalidInputError(
            f"{shape} contractors need {contractor_count(shape)} players, got {len(players)}."
        )

    if shape == Shape.SOLO:
        return Solo(players[0])
    if shape == Shape.TEAM:
        return Team(players[0], players[1])
    if shape == Shape.OTHER:
        points = [int(p) for p in data.get("points", [])]
        if len(points) != len(players):
            raise InvalidInputError(
                f"Other contractors need one score per player: {data!r}"
            )
        return Other.from_pairs(list(zip(players, points)))
    assert_never(shape)
