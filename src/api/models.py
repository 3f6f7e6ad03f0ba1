"""Requests and Response models"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Role, Status

RoleName = str
PlayerName = str

PLAYABLE_GLYPHS = ("X", "O")


# --- REQUEST MODELS ---
class CreateGameRequest(BaseModel):
    rows: int = 3
    cols: int = 3
    player1_name: Optional[str] = None
    player2_name: Optional[str] = None

    @field_validator(*["rows", "cols"])
    @classmethod
    def validate_dimension(cls, value: int) -> int:
        if value < 1:
            raise InvalidRequestError(
                f"Board dimensions must be positive, got {value}."
            )
        return value


class GetGameRequest(BaseModel):
    game_id: UUID


class MoveRequest(BaseModel):
    """
    `piece` is optional: the piece always follows from the role.
    When supplied, the engine checks it matches the piece of that role.
    """

    game_id: UUID
    role: Role
    location: int
    piece: Optional[str] = None

    @field_validator("location")
    @classmethod
    def validate_location(cls, value: int) -> int:
        # upper bound depends on the board; the engine checks that one
        if value < 0:
            raise InvalidRequestError(f"Location cannot be negative: {value}.")
        return value

    @field_validator("piece")
    @classmethod
    def validate_piece(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        if value.upper() not in PLAYABLE_GLYPHS:
            raise InvalidRequestError(
                f"Cannot interpret piece: {value!r}. Pick one from {','.join(PLAYABLE_GLYPHS)}."
            )
        return value.upper()


class ResetGameRequest(BaseModel):
    game_id: UUID


class DeleteGameRequest(BaseModel):
    game_id: UUID


# --- RESPONSE MODELS ---
class GameResponse(BaseModel):
    game_id: UUID
    rows: int
    cols: int
    board: list[str]  # one glyph per cell: "X", "O" or "" (empty)
    turn: Role
    status: Status
    players: dict[RoleName, PlayerName]
    winner: Optional[PlayerName] = None
