"""Requests and Response models"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Color, Status


def _normalize_square(value: str) -> str:
    """A file letter 'a'-'h' followed by a rank number '1'-'8'. Upper case file letters ('E2') are accepted too."""
    square = value.lower()
    if len(square) != 2 or square[0] not in "abcdefgh" or square[1] not in "12345678":
        raise InvalidRequestError(
            f"Cannot interpret square: {value!r} as a valid square name."
        )
    return square


# --- REQUEST MODELS ---
class GetGameRequest(BaseModel):
    game_id: UUID


class LegalMovesRequest(BaseModel):
    game_id: UUID
    square: str

    @field_validator("square")
    @classmethod
    def validate_square(cls, value: str) -> str:
        return _normalize_square(value)


class MoveRequest(BaseModel):
    game_id: UUID
    from_square: str
    to_square: str

    @field_validator(*["from_square", "to_square"])
    @classmethod
    def validate_square(cls, value: str) -> str:
        return _normalize_square(value)


class UndoRequest(BaseModel):
    game_id: UUID


class DeleteGameRequest(BaseModel):
    game_id: UUID


# --- RESPONSE MODELS ---
class GameResponse(BaseModel):
    game_id: UUID
    board_fen: str
    color_to_move: Color
    status: Status
    status_text: str
    is_game_over: bool
    winner: Optional[Color]
    move_log: list[str]
    move_history: list[str]
    captures: dict[Color, int]
    last_move: Optional[tuple[str, str]]


class LegalMovesResponse(BaseModel):
    game_id: UUID
    square: str
    legal_destinations: list[str]
