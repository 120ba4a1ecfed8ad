"""Ledger of the hands played in a session, with the cumulative scores after each of them."""

from typing import Iterable, Iterator, Self

from src.core.exceptions import EmptyHistoricError
from src.whist.contractors import PLAYER_COUNT
from src.whist.hand import HandRecap

Snapshot = tuple[int, ...]


class HandsHistoric:
    """
    Append-only list of HandRecaps plus, for each, the running total of every player.

    players_scores[i] == players_scores[i - 1] + list[i].scores (element-wise), players_scores[0] == list[0].scores.
    The only way back is remove_last().
    """

    def __init__(self) -> None:
        self.list: list[HandRecap] = []
        self.players_scores: list[Snapshot] = []

    @classmethod
    def from_recaps(cls, recaps: Iterable[HandRecap]) -> Self:
        historic = cls()
        for recap in recaps:
            historic.push(recap)
        return historic

    def push(self, hand_recap: HandRecap) -> None:
        if self.players_scores:
            previous = self.players_scores[-1]
            new_scores = tuple(p + s for p, s in zip(previous, hand_recap.scores, strict=True))
        else:
            new_scores = tuple(hand_recap.scores)
        self.players_scores.append(new_scores)
        self.list.append(hand_recap)

    def remove_last(self) -> HandRecap:
        """Drop the most recent hand and its snapshot, and return the hand."""
        self._assert_consistent()
        if not self.list:
            raise EmptyHistoricError("No hand to remove.")
        self.players_scores.pop()
        return self.list.pop()

    @property
    def totals(self) -> Snapshot:
        if not self.players_scores:
            return (0,) * PLAYER_COUNT
        return self.players_scores[-1]

    def __len__(self) -> int:
        self._assert_consistent()
        return len(self.list)

    def __iter__(self) -> Iterator[tuple[HandRecap, Snapshot]]:
        """(hand, cumulative scores after that hand), oldest first."""
        return zip(self.list, self.players_scores)

    def _assert_consistent(self) -> None:
        if len(self.list) != len(self.players_scores):
            raise AssertionError(
                "Length difference would imply a misuse of the historic"
            )
