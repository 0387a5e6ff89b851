"""Orchestration of communication from API router to business logic and persistence layers (and the reverse direction)."""

import logging
from dataclasses import replace
from uuid import UUID

from src.api.models import (
    DeleteGameRequest,
    GameResponse,
    GetGameRequest,
    LegalMovesRequest,
    LegalMovesResponse,
    MoveRequest,
    UndoRequest,
)
from src.chess.game import Game
from src.chess.square import Square
from src.core.exceptions import RepositoryError
from src.core.models import GameModel
from src.core.shared_types import Color, Status
from src.db.repository import GameRepository

_log = logging.getLogger(__name__)


class ChessService:
    """Orchestration of layers for chess game."""

    def __init__(self, repository: GameRepository) -> None:
        self.repo = repository

    # -- API routes logic ---
    def create_new_game(self) -> GameResponse:
        """Someone requested to start a new game from the standard starting position."""

        # Create a new Game, and convert into GameModel
        new_game = Game.new_game()
        created_game_data = new_game.to_model()

        # Store the GameModel in the repository
        _, game_id = self.repo.create_game(created_game_data)
        _log.info("Created game %s", game_id)

        # Return a GameResponse
        return self._create_game_response(game_id, new_game)

    def get_game_state(self, request: GetGameRequest) -> GameResponse:
        """
        Retrieve current game state.
        ----
        Used in "polling" loop by frontend to redraw the board, status line, move list, etc.
        """
        game = self._fetch_game(request.game_id)
        return self._create_game_response(request.game_id, game)

    def legal_destinations(self, request: LegalMovesRequest) -> LegalMovesResponse:
        """retrieve the squares the piece on the requested square may move to (for move hints)."""

        game = self._fetch_game(request.game_id)
        destinations = game.legal_destinations(Square.from_algebraic(request.square))
        return LegalMovesResponse(
            game_id=request.game_id,
            square=request.square,
            legal_destinations=sorted(square.to_algebraic() for square in destinations),
        )

    def make_move(self, request: MoveRequest) -> GameResponse:
        """Make a move attempt. Rejected moves raise, and nothing gets stored."""

        stored = self._fetch_model(request.game_id)
        game = Game.from_model(stored)

        # Attempt the move
        game.apply_move(
            Square.from_algebraic(request.from_square),
            Square.from_algebraic(request.to_square),
        )

        # store in repository (refused if another request got there first)
        self._store_game(request.game_id, game, stored.version)

        # Return a GameResponse
        return self._create_game_response(request.game_id, game)

    def undo_move(self, request: UndoRequest) -> GameResponse:
        """Take back the last move. Without any moves played this changes nothing."""

        stored = self._fetch_model(request.game_id)
        game = Game.from_model(stored)
        if game.undo() is not None:
            self._store_game(request.game_id, game, stored.version)
        return self._create_game_response(request.game_id, game)

    def delete_game(self, request: DeleteGameRequest) -> None:
        """Handle a request to delete a Game record."""
        if self.repo.delete_game(request.game_id) is None:
            raise RepositoryError(f"Game with {request.game_id=} not found.")
        _log.info("Deleted game %s", request.game_id)

    # -- Internal helpers --
    def _create_game_response(self, game_id: UUID, game: Game) -> GameResponse:
        """Convert the Game into a GameResponse (for game with given ID.)"""
        model = game.to_model()
        white_captures, black_captures = game.capture_counts()
        last_move = game.last_move()
        return GameResponse(
            game_id=game_id,
            board_fen=model.board_fen,
            color_to_move=Color(model.color_to_move),
            status=Status(model.status),
            status_text=game.status_text(),
            is_game_over=game.is_game_over(),
            winner=Color(game.winner.name.lower()) if game.winner else None,
            move_log=model.move_log,
            move_history=model.moves_uci,
            captures={Color.WHITE: white_captures, Color.BLACK: black_captures},
            last_move=(
                (last_move[0].to_algebraic(), last_move[1].to_algebraic())
                if last_move
                else None
            ),
        )

    def _fetch_model(self, game_id: UUID) -> GameModel:
        """Attempt to find the game in the repository and raise error if it fails."""
        game_model = self.repo.get_game(game_id)
        if game_model is None:
            raise RepositoryError(f"Game with {game_id=} not found.")
        return game_model

    def _fetch_game(self, game_id: UUID) -> Game:
        """Rebuilds the Game from the stored record."""
        return Game.from_model(self._fetch_model(game_id))

    def _store_game(self, game_id: UUID, game: Game, read_version: int) -> None:
        """
        Write the game back, based on the version that was read.

        Concurrent requests for the same game are serialized here: the repository refuses an update
        based on an outdated version (GameStateError), so a move can never silently replace another one.
        """
        model = replace(game.to_model(), version=read_version)
        if self.repo.update_game(game_id, model) is None:
            raise RepositoryError(f"Game with {game_id=} not found.")
