"""
Type definitions used across layers
"""

from enum import StrEnum


class Status(StrEnum):
    WAITING_FOR_RULES = "waiting for rules"
    WAITING_FOR_PLAYERS = "waiting for players"
    IN_PROGRESS = "in progress"


class GameRules(StrEnum):
    DUTCH = "dutch"
    FRENCH = "french"


class Shape(StrEnum):
    """Which player(s) a contract holds accountable."""

    SOLO = "solo"
    TEAM = "team"
    OTHER = "other"


class RequestKind(StrEnum):
    """Kind of input a hand under construction is waiting for."""

    CONTRACTORS_SOLO = "contractors solo"
    CONTRACTORS_TEAM = "contractors team"
    CONTRACTORS_OTHER = "contractors other"
    BID = "bid"
    TRICKS = "tricks"
