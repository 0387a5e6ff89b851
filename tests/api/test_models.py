"""Unit tests for src/api/models.py"""

from uuid import UUID, uuid4

import pytest

from src.api.models import GameResponse, LegalMovesRequest, MoveRequest
from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Color, Status


@pytest.fixture
def mock_id() -> UUID:
    return uuid4()


# -- Validation - MoveRequest --
def test_valid_move_request(mock_id: UUID) -> None:
    request = MoveRequest(game_id=mock_id, from_square="e2", to_square="e4")
    assert request.from_square == "e2"
    assert request.to_square == "e4"


@pytest.mark.parametrize(
    "invalid_square",
    ["", "e", "e22", "i1", "a9", "a0", "I1", "2e", " e2"],
)
def test_invalid_squares_in_move_request(mock_id: UUID, invalid_square: str) -> None:
    with pytest.raises(InvalidRequestError):
        MoveRequest(game_id=mock_id, from_square=invalid_square, to_square="e4")
    with pytest.raises(InvalidRequestError):
        MoveRequest(game_id=mock_id, from_square="e2", to_square=invalid_square)


# -- Validation - LegalMovesRequest --
@pytest.mark.parametrize("square", ["a1", "h8", "d5"])
def test_valid_legal_moves_request(mock_id: UUID, square: str) -> None:
    assert LegalMovesRequest(game_id=mock_id, square=square).square == square


def test_square_names_are_case_insensitive(mock_id: UUID) -> None:
    """Same as Square.from_algebraic: 'E2' and 'e2' name the same square"""
    request = MoveRequest(game_id=mock_id, from_square="E2", to_square="e4")
    assert request.from_square == "e2"
    assert LegalMovesRequest(game_id=mock_id, square="G1").square == "g1"


def test_invalid_legal_moves_request(mock_id: UUID) -> None:
    with pytest.raises(InvalidRequestError):
        LegalMovesRequest(game_id=mock_id, square="z0")


# -- Response --
def test_game_response_serializes_enums_as_text(mock_id: UUID) -> None:
    response = GameResponse(
        game_id=mock_id,
        board_fen="8/8/8/8/8/8/8/8",
        color_to_move=Color.BLACK,
        status=Status.IN_PROGRESS,
        status_text="Turn: Black",
        is_game_over=False,
        winner=None,
        move_log=["e2-e4"],
        move_history=["e2e4"],
        captures={Color.WHITE: 0, Color.BLACK: 0},
        last_move=("e2", "e4"),
    )
    data = response.model_dump(mode="json")
    assert data["color_to_move"] == "black"
    assert data["status"] == "in progress"
    assert data["captures"] == {"white": 0, "black": 0}
    assert data["last_move"] == ["e2", "e4"]
