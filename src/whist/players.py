"""Player registry: the (at most) four people at the table and their running scores."""

from dataclasses import dataclass, field
from typing import Iterable, Self, Sequence

from src.core.exceptions import (
    DuplicateNameError,
    GameStateError,
    InvalidInputError,
    RegistryFullError,
)
from src.core.models import PlayerRecord
from src.whist.contractors import PLAYER_COUNT, Contractors, PlayerId


@dataclass
class Player:
    id: PlayerId
    name: str
    score: int = 0


@dataclass
class Players:
    """Ordered roster. Position in the list equals the PlayerId."""

    members: list[Player] = field(default_factory=list)

    @classmethod
    def from_records(cls, records: Iterable[PlayerRecord]) -> Self:
        players = cls()
        for record in records:
            players.add_player(record["name"])
            players.members[-1].score = int(record.get("score", 0))
        return players

    def to_records(self) -> list[PlayerRecord]:
        return [
            {"id": player.id, "name": player.name, "score": player.score}
            for player in self.members
        ]

    def __len__(self) -> int:
        return len(self.members)

    @property
    def is_full(self) -> bool:
        return len(self.members) == PLAYER_COUNT

    def add_player(self, name: str) -> int:
        """Register a new player under the next PlayerId and return the new number of players."""
        name = name.strip()
        if not name:
            raise InvalidInputError("Player name cannot be empty.")
        if name in self.names():
            raise DuplicateNameError(f"Player {name!r} is already registered.")
        if self.is_full:
            raise RegistryFullError(f"Already {PLAYER_COUNT} players registered.")

        self.members.append(Player(id=len(self.members), name=name))
        return len(self.members)

    def get_id(self, name: str) -> PlayerId | None:
        return next((player.id for player in self.members if player.name == name), None)

    def names(self) -> list[str]:
        return [player.name for player in self.members]

    def scores(self) -> list[int]:
        return [player.score for player in self.members]

    def update_score(self, contractors: Contractors, score: int) -> None:
        """Add the same score to every player named by the contractors."""
        for player_id in contractors.player_ids():
            self._player(player_id).score += score

    def apply_scores(self, scores: Sequence[int]) -> None:
        """Add one delta per player, indexed by PlayerId."""
        self._check_deltas(scores)
        for player, delta in zip(self.members, scores):
            player.score += delta

    def revert_scores(self, scores: Sequence[int]) -> None:
        """Undo an earlier apply_scores with the same deltas."""
        self.apply_scores([-delta for delta in scores])

    def reset(self) -> None:
        self.members.clear()

    # -- Internal helpers --
    def _player(self, player_id: PlayerId) -> Player:
        if not 0 <= player_id < len(self.members):
            raise InvalidInputError(f"No player with id {player_id}.")
        return self.members[player_id]

    def _check_deltas(self, scores: Sequence[int]) -> None:
        if not self.is_full:
            raise GameStateError(
                f"Scores can only be applied to {PLAYER_COUNT} players, got {len(self.members)}."
            )
        if len(scores) != PLAYER_COUNT:
            raise InvalidInputError(
                f"Expected {PLAYER_COUNT} score deltas, got {len(scores)}."
            )
