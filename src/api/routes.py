"""HTTP routes. Thin layer: parse the request, call the Service, return its response model."""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from src.api.models import (
    DeleteGameRequest,
    GameResponse,
    GetGameRequest,
    LegalMovesRequest,
    LegalMovesResponse,
    MoveRequest,
    UndoRequest,
)
from src.db.database import get_db
from src.db.sql_repository import SQLGameRepository
from src.services.chess_service import ChessService

router = APIRouter(prefix="/games", tags=["games"])


def get_chess_service(db: Session = Depends(get_db)) -> ChessService:
    """Every request gets its own database session, and hence works on its own copy of the game"""
    return ChessService(SQLGameRepository(db))


@router.post("", response_model=GameResponse, status_code=status.HTTP_201_CREATED)
def create_game(service: ChessService = Depends(get_chess_service)) -> GameResponse:
    return service.create_new_game()


@router.get("/{game_id}", response_model=GameResponse)
def get_game(
    game_id: UUID, service: ChessService = Depends(get_chess_service)
) -> GameResponse:
    return service.get_game_state(GetGameRequest(game_id=game_id))


@router.get("/{game_id}/legal-moves/{square}", response_model=LegalMovesResponse)
def legal_moves(
    game_id: UUID, square: str, service: ChessService = Depends(get_chess_service)
) -> LegalMovesResponse:
    return service.legal_destinations(LegalMovesRequest(game_id=game_id, square=square))


@router.post("/{game_id}/moves", response_model=GameResponse)
def make_move(
    game_id: UUID,
    from_square: str,
    to_square: str,
    service: ChessService = Depends(get_chess_service),
) -> GameResponse:
    request = MoveRequest(game_id=game_id, from_square=from_square, to_square=to_square)
    return service.make_move(request)


@router.post("/{game_id}/undo", response_model=GameResponse)
def undo_move(
    game_id: UUID, service: ChessService = Depends(get_chess_service)
) -> GameResponse:
    return service.undo_move(UndoRequest(game_id=game_id))


@router.delete("/{game_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_game(
    game_id: UUID, service: ChessService = Depends(get_chess_service)
) -> None:
    service.delete_game(DeleteGameRequest(game_id=game_id))
