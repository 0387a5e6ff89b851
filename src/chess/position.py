"""
Representation of a single position: the board plus everything else that belongs to "the state of the game right now".
"""

from copy import deepcopy
from dataclasses import dataclass, field, replace
from typing import Optional, Self

from src.chess.board import STARTING_POSITION_FEN, Board
from src.chess.pieces import AVAILABLE_COLORS, Color, Piece
from src.chess.square import Square

LastMove = tuple[Square, Square]


@dataclass(frozen=True)
class MovementFlags:
    """
    Has the king / one of the rooks of a color left its starting square?
    ----

    Castling is not part of this engine, but these are exactly the facts castling rights would be derived from,
    so they are kept up to date by every move.
    """

    king_moved: bool = False
    kingside_rook_moved: bool = False
    queenside_rook_moved: bool = False


# The corners the rooks start in. Moving a rook away from one of these revokes the matching flag.
ROOK_HOME_SQUARES: dict[Color, dict[str, Square]] = {
    Color.WHITE: {
        "kingside_rook_moved": Square(7, 7),
        "queenside_rook_moved": Square(0, 7),
    },
    Color.BLACK: {
        "kingside_rook_moved": Square(7, 0),
        "queenside_rook_moved": Square(0, 0),
    },
}


def _fresh_flags() -> dict[Color, MovementFlags]:
    return {color: MovementFlags() for color in AVAILABLE_COLORS}


@dataclass
class Position:
    board: Board
    color_to_move: Color = Color.WHITE
    flags: dict[Color, MovementFlags] = field(default_factory=_fresh_flags)
    last_move: Optional[LastMove] = None

    @classmethod
    def starting_position(cls) -> Self:
        return cls(Board.from_fen(STARTING_POSITION_FEN))

    @classmethod
    def from_fen(cls, placement: str, color_to_move: Color = Color.WHITE) -> Self:
        """Any position from the piece placement part of a FEN string (handy for setting up scenarios)"""
        return cls(Board.from_fen(placement), color_to_move)

    def reset(self) -> None:
        """Standard starting arrangement, White to move, nothing has moved yet"""
        self.board = Board.from_fen(STARTING_POSITION_FEN)
        self.color_to_move = Color.WHITE
        self.flags = _fresh_flags()
        self.last_move = None

    def copy(self) -> Self:
        return deepcopy(self)

    # --- direct accessors, no rule checks ---
    def get(self, square: Square) -> Piece:
        return self.board.piece(square)

    def set(self, square: Square, piece: Piece) -> None:
        self.board.place_piece(piece, square)

    def is_occupied_by_color(self, square: Square, color: Color) -> bool:
        return self.board.is_occupied_by_color(square, color)

    def pass_turn(self) -> None:
        self.color_to_move = self.color_to_move.opponent

    # --- movement flags ---
    def record_king_move(self, color: Color) -> None:
        self.flags[color] = replace(self.flags[color], king_moved=True)

    def record_rook_move(self, color: Color, from_square: Square) -> None:
        """Only a rook leaving its home corner changes anything"""
        for flag_name, home_square in ROOK_HOME_SQUARES[color].items():
            if from_square == home_square:
                self.flags[color] = replace(self.flags[color], **{flag_name: True})
