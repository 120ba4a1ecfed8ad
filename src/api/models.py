"""Requests and Response models"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ValidationInfo, field_validator

from src.core.exceptions import InvalidRequestError
from src.core.shared_types import GameRules, RequestKind, Shape, Status

PlayerName = str


# --- REQUEST MODELS ---
class CreateSessionRequest(BaseModel):
    rules: Optional[GameRules] = None


class SelectRulesRequest(BaseModel):
    session_id: UUID
    rules: GameRules


class AddPlayerRequest(BaseModel):
    session_id: UUID
    player_name: PlayerName

    @field_validator("player_name")
    @classmethod
    def validate_player_name(cls, value: str) -> str:
        name = value.strip()
        if not name:
            raise InvalidRequestError("Player name cannot be empty.")
        return name


class SelectContractRequest(BaseModel):
    session_id: UUID
    contract_index: int

    @field_validator("contract_index")
    @classmethod
    def validate_contract_index(cls, value: int) -> int:
        if value < 0:
            raise InvalidRequestError(f"Contract index cannot be negative: {value}")
        return value


class HandRequest(BaseModel):
    """Start, finish or cancel the hand in progress."""

    session_id: UUID


class ContractorsRequest(BaseModel):
    session_id: UUID
    player_names: list[PlayerName]
    points: Optional[list[int]] = None

    @field_validator("player_names")
    @classmethod
    def validate_player_names(cls, value: list[str]) -> list[str]:
        if not value:
            raise InvalidRequestError("Select at least one player.")
        if len(set(value)) != len(value):
            raise InvalidRequestError(f"A player is selected twice: {value}")
        return value

    @field_validator("points")
    @classmethod
    def validate_points(
        cls, value: Optional[list[int]], info: ValidationInfo
    ) -> Optional[list[int]]:
        if value is None:
            return value
        names = info.data.get("player_names")
        if names is not None and len(value) != len(names):
            raise InvalidRequestError(
                f"Need one point value per selected player: {len(value)} values for {len(names)} players."
            )
        return value


class BidRequest(BaseModel):
    session_id: UUID
    bid: int


class TricksRequest(BaseModel):
    session_id: UUID
    tricks: int


class GetSessionRequest(BaseModel):
    session_id: UUID


class UndoHandRequest(BaseModel):
    session_id: UUID


class ResetSessionRequest(BaseModel):
    session_id: UUID


class DeleteSessionRequest(BaseModel):
    session_id: UUID


# --- RESPONSE MODELS ---
class PlayerResponse(BaseModel):
    player_id: int
    name: PlayerName
    score: int


class SessionResponse(BaseModel):
    session_id: UUID
    rules: Optional[GameRules]
    status: Status
    players: list[PlayerResponse]
    selected_contract: Optional[str]
    hands_played: int
    totals: list[int]


class ContractResponse(BaseModel):
    index: int
    name: str
    shape: Shape
    bid_min: Optional[int]
    bid_max: Optional[int]
    manual: bool


class ContractsResponse(BaseModel):
    session_id: UUID
    rules: GameRules
    contracts: list[ContractResponse]
    selected_index: int


class InputRequestResponse(BaseModel):
    kind: RequestKind
    count: Optional[int] = None
    minimum: Optional[int] = None
    maximum: Optional[int] = None


class HandRequestsResponse(BaseModel):
    session_id: UUID
    contract: str
    requests: list[InputRequestResponse]
    pending: list[InputRequestResponse]
    ready: bool
    contractors: list[PlayerName]
    bid: Optional[int]
    tricks: Optional[int]


class ContractorResponse(BaseModel):
    player_id: int
    name: PlayerName
    points: int


class HandRecapResponse(BaseModel):
    number: int
    gamemode_name: str
    bid: Optional[int]
    tricks: int
    contractors: list[ContractorResponse]
    scores: list[int]
    cumulative: list[int]


class HistoricResponse(BaseModel):
    session_id: UUID
    players: list[PlayerName]
    hands: list[HandRecapResponse]
