"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Hence, both the API layer (higher) and domain/db layers (lower) will use model(s) defined here to send to/receive from the Service
(Decouples the data model specific to the DB layer, API layer, or domain layer from the information needed to send across boundaries)
"""

from dataclasses import dataclass
from typing import Any, Optional

# Type aliases to make SessionModel easier to read
PlayerRecord = dict[str, Any]
HandRecord = dict[str, Any]


@dataclass
class SessionModel:
    """Transport-safe representation of a scoring session used between API, Service, DB, and Whist layers.

    The cumulative scores are not part of it: they follow from the hands and are rebuilt on load.
    The hand currently being entered is not part of it either.
    """

    rules: Optional[str]
    selected_contract: int
    players: list[PlayerRecord]
    hands: list[HandRecord]
    status: str
