"""
The Game class will be the entrypoint into the domain layer for the service layer (or any UI driving a game).
It is responsible for orchestrating all the business logic required to play a turn of the board game:
validating and applying moves, keeping the history needed to take them back, and deciding when the game is over.
"""

import logging
from copy import deepcopy
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Self

from src.chess.moves import Move, UndoRecord, is_promotion_square
from src.chess.pieces import AVAILABLE_COLORS, Color, PieceType
from src.chess.position import LastMove, Position
from src.chess.rules import (
    enumerate_legal_moves,
    is_checkmate,
    is_in_check,
    is_legal_move,
    is_stalemate,
)
from src.chess.square import Square, validate_square
from src.core.exceptions import (
    GameError,
    GameStateError,
    IllegalMoveError,
)
from src.core.models import GameModel

_log = logging.getLogger(__name__)


class Status(Enum):
    IN_PROGRESS = auto()
    CHECKMATE = auto()
    STALEMATE = auto()


STALEMATE_RESULT = "Stalemate — draw"


def checkmate_result(winner: Color) -> str:
    return f"Checkmate — {winner.display_name} wins"


def _no_captures() -> dict[Color, int]:
    return {color: 0 for color in AVAILABLE_COLORS}


def _check_playable(position: Position) -> None:
    board = position.board
    king_colors = [
        board.piece(square).color for square in board.locate_pieces(PieceType.KING)
    ]
    for color in AVAILABLE_COLORS:
        if king_colors.count(color) != 1:
            raise GameStateError(
                f"Expected exactly one {color.display_name} king, found {king_colors.count(color)}."
            )

    waiting_color = position.color_to_move.opponent
    if is_in_check(waiting_color, position):
        raise GameStateError(
            f"{waiting_color.display_name} is in check, but it is {position.color_to_move.display_name} to move."
        )


@dataclass
class Game:
    # --- DOMAIN LAYER API CALLED BY SERVICE / UI ---

    position: Position
    history: list[UndoRecord]  # the undo stack
    notation_log: list[str]  # 'e2-e4', 'e4-d5 xPawn', ...
    captures: dict[Color, int]
    status: Status
    result: str = ""

    @classmethod
    def new_game(cls) -> Self:
        """Standard starting position, White to move."""
        return cls(
            position=Position.starting_position(),
            history=[],
            notation_log=[],
            captures=_no_captures(),
            status=Status.IN_PROGRESS,
        )

    @classmethod
    def from_position(cls, position: Position) -> Self:
        """
        Start playing from an arbitrary position (no history to undo).

        The position might already be decided, so the end condition gets checked right away.
        Positions no game could ever reach (missing or extra kings, or the side that is NOT
        to move standing in check) raise GameStateError: playing on from there would allow capturing a king.
        """
        _check_playable(position)
        game = cls(
            position=position,
            history=[],
            notation_log=[],
            captures=_no_captures(),
            status=Status.IN_PROGRESS,
        )
        game.check_game_end()
        return game

    @classmethod
    def from_model(cls, model: GameModel) -> Self:
        """
        Define how to construct a Game from the information the Service layer actually has

        The recorded moves get replayed from the starting position, so the undo stack, movement flags and capture counts are exact.
        """
        # Validation
        status_name = model.status.replace(" ", "_").upper()
        if status_name not in Status.__members__:
            raise GameStateError(
                f"Invalid status code: {model.status!r}. \nPick one from {','.join([status.name.lower() for status in Status])}"
            )

        game = cls.new_game()
        for move_uci in model.moves_uci:
            try:
                game.make_move(move_uci)
            except GameError as error:
                raise GameStateError(
                    f"Cannot replay stored move {move_uci!r}: {error}"
                ) from error

        if game.status != Status[status_name]:
            raise GameStateError(
                f"Stored status {model.status!r} does not match the replayed game ({game.status.name.lower()})."
            )
        return game

    def to_model(self) -> GameModel:
        """Encode back into a format the Service layer uses"""
        return GameModel(
            moves_uci=[record.move.to_uci() for record in self.history],
            move_log=self.move_log(),
            board_fen=self.position.board.to_fen(),
            color_to_move=self.position.color_to_move.name.lower(),
            status=self.status.name.lower().replace("_", " "),
            result=self.result,
        )

    def reset(self) -> None:
        """Start over in place: standard position, no history, no captures, game in progress."""
        self.position.reset()
        self.history.clear()
        self.notation_log.clear()
        self.captures = _no_captures()
        self._change_status(Status.IN_PROGRESS)
        _log.info("Game reset to the starting position.")

    # --- PLAYING ---
    def apply_move(self, from_square: Square, to_square: Square) -> UndoRecord:
        """
        Attempt to make a move
        -----

        1. both squares must be on the board (InvalidSquareError otherwise, before the board is touched)
        2. the game must still be in progress, and you must move a piece of the side to move
        3. the rule engine must accept the move
        Any failure raises IllegalMoveError and leaves the game exactly as it was.

        4. record the capture (if any) and the king/rook movement
        5. push the undo record
        6. update the board (a pawn reaching the far rank becomes a queen)
        7. update the move log and the last move
        8. pass the turn and update game status (if needed)
        """
        validate_square(from_square)
        validate_square(to_square)

        if self.is_game_over():
            raise IllegalMoveError(f"Game is not in progress: {self.result}")

        move = Move(from_square, to_square)
        player_color = self.position.color_to_move
        if not self.position.is_occupied_by_color(from_square, player_color):
            raise IllegalMoveError(
                f"Move not allowed: {move.to_notation()}. No {player_color.display_name} piece on {from_square.to_algebraic()}."
            )
        if not is_legal_move(from_square, to_square, self.position):
            raise IllegalMoveError(f"Move not allowed: {move.to_notation()}")

        # Store move info before update
        record = UndoRecord.from_move_and_position(move, self.position)

        if record.is_capture:
            self.captures[player_color] += 1
        if record.was_king_move:
            self.position.record_king_move(player_color)
        if record.was_rook_move:
            self.position.record_rook_move(player_color, from_square)

        self.history.append(record)
        self._update_board(record)
        self.notation_log.append(record.to_notation())
        self.position.last_move = (from_square, to_square)

        # NOTE pass the turn BEFORE checking for the end of the game: it is the opponent who might be mated
        self.position.pass_turn()
        _log.debug("Played %s", record.to_notation())
        self.check_game_end()
        return record

    def make_move(self, move_uci: str) -> UndoRecord:
        """Convenience wrapper for coordinate notation ('e2e4'), as used at the layer boundaries"""
        move = Move.from_uci(move_uci)
        return self.apply_move(move.from_square, move.to_square)

    def undo(self) -> Optional[UndoRecord]:
        """
        Take back the most recent move.
        ----

        Nothing to take back? Then this is a no-op and None is returned.

        NOTE: the game is always back in progress afterwards, even if the restored position happens to be decided as well.
        """
        if not self.history:
            _log.debug("Nothing to undo.")
            return None

        record = self.history.pop()
        player_color = record.moved_piece.color

        # restores an un-promoted pawn as well, since the piece as it was before the move is stored
        self.position.set(record.move.from_square, record.moved_piece)
        self.position.set(record.move.to_square, record.captured_piece)

        if record.is_capture:
            self.captures[player_color] -= 1
        if self.notation_log:
            self.notation_log.pop()

        self.position.flags[player_color] = record.flags_before
        self.position.color_to_move = player_color
        self._change_status(Status.IN_PROGRESS)
        self.position.last_move = self._last_move_from_history()
        _log.debug("Took back %s", record.to_notation())
        return record

    def check_game_end(self) -> None:
        """Performs checks to see if game has ended and changes status accordingly.

        NOTE the turn has already been passed. At this point the side to move is the opponent of the player who just moved.
        """
        color = self.position.color_to_move
        if is_checkmate(color, self.position):
            self._change_status(Status.CHECKMATE, checkmate_result(color.opponent))
        elif is_stalemate(color, self.position):
            self._change_status(Status.STALEMATE, STALEMATE_RESULT)

    # --- QUERIES ---
    def current_position(self) -> Position:
        """Read-only snapshot for rendering: changing it does not affect the game."""
        return deepcopy(self.position)

    def legal_destinations(self, from_square: Square) -> set[Square]:
        """Move hints: where can the piece on this square go? Empty for the opponent's pieces and once the game is over."""
        validate_square(from_square)
        if self.is_game_over():
            return set()
        if not self.position.is_occupied_by_color(
            from_square, self.position.color_to_move
        ):
            return set()
        return enumerate_legal_moves(from_square, self.position)

    def status_text(self) -> str:
        """The result once the game is over, otherwise whose turn it is (and whether they are in check)"""
        if self.is_game_over():
            return self.result

        color = self.position.color_to_move
        text = f"Turn: {color.display_name}"
        if is_in_check(color, self.position):
            text += " (check)"
        return text

    def move_log(self) -> list[str]:
        return list(self.notation_log)

    def capture_counts(self) -> tuple[int, int]:
        """(white, black)"""
        return self.captures[Color.WHITE], self.captures[Color.BLACK]

    def is_game_over(self) -> bool:
        return self.status != Status.IN_PROGRESS

    def last_move(self) -> Optional[LastMove]:
        return self.position.last_move

    @property
    def winner(self) -> Optional[Color]:
        """
        Only defined for checkmate.
        Given we know it is checkmate, the side to move just got mated and the opponent must be the winner
        """
        if self.status != Status.CHECKMATE:
            return None
        return self.position.color_to_move.opponent

    # -- PRIVATE HELPERS ---
    def _update_board(self, record: UndoRecord) -> None:
        """Move the piece, promoting a pawn that reaches the far rank (always into a queen)"""
        move = record.move
        self.position.board.move_piece(move.from_square, move.to_square)
        if is_promotion_square(record.moved_piece, move.to_square):
            self.position.set(
                move.to_square, record.moved_piece.promoted_to(PieceType.QUEEN)
            )

    def _last_move_from_history(self) -> Optional[LastMove]:
        if not self.history:
            return None
        previous = self.history[-1].move
        return previous.from_square, previous.to_square

    def _change_status(self, new_status: Status, result: str = "") -> None:
        if new_status != Status.IN_PROGRESS:
            _log.info("Game over: %s", result)
        self.status = new_status
        self.result = result
