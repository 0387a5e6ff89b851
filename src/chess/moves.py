"""
Geometry/Base movement and capturing/attacking rules

Key idea: Use strategy pattern to define the movement pattern (and the attack pattern) for each piece type.

A pattern only answers "could this kind of piece travel from here to there on this board?".
Whether the move leaves your own king in check is decided later (see rules.py).
"""

from dataclasses import dataclass
from typing import Callable, Self

from src.chess.board import Board
from src.chess.pieces import Color, Piece, PieceType
from src.chess.position import MovementFlags, Position
from src.chess.square import Square

Vector = tuple[int, int]

# White moves UP the board (towards rank index 0), Black moves DOWN
PAWN_DIRECTION: dict[Color, int] = {Color.WHITE: -1, Color.BLACK: 1}
PAWN_STARTING_RANK: dict[Color, int] = {Color.WHITE: 6, Color.BLACK: 1}
PROMOTION_RANK: dict[Color, int] = {Color.WHITE: 0, Color.BLACK: 7}


@dataclass(frozen=True)
class Move:
    """basic definition of a move to be made"""

    from_square: Square
    to_square: Square

    @classmethod
    def from_uci(cls, uci: str) -> Self:
        """
        Coordinate notation as used by the Universal Chess Interface:
        ---

        examples:
        * "e2e4": move the piece that was on e2 to e4
        * "g8f6": (knight) moves from g8 to f6

        NOTE: no promotion suffix. Pawns always promote into a queen.
        """
        from_sq = Square.from_algebraic(uci[:2])
        to_sq = Square.from_algebraic(uci[2:4])
        return cls(from_sq, to_sq)

    def to_uci(self) -> str:
        return f"{self.from_square.to_algebraic()}{self.to_square.to_algebraic()}"

    def to_notation(self) -> str:
        """Human-readable notation for the move log: 'e2-e4'"""
        return f"{self.from_square.to_algebraic()}-{self.to_square.to_algebraic()}"

    @property
    def delta(self) -> Vector:
        return (
            self.to_square.file - self.from_square.file,
            self.to_square.rank - self.from_square.rank,
        )


@dataclass(frozen=True)
class UndoRecord:
    """
    A move that has been accepted, together with everything needed to take it back again.
    ---

    Snapshot is taken BEFORE the board gets updated.
    """

    move: Move
    moved_piece: Piece
    captured_piece: Piece
    was_king_move: bool
    was_rook_move: bool
    flags_before: MovementFlags

    @classmethod
    def from_move_and_position(cls, move: Move, position: Position) -> Self:
        moved_piece = position.get(move.from_square)
        return cls(
            move=move,
            moved_piece=moved_piece,
            captured_piece=position.get(move.to_square),
            was_king_move=moved_piece.type == PieceType.KING,
            was_rook_move=moved_piece.type == PieceType.ROOK,
            flags_before=position.flags[moved_piece.color],
        )

    @property
    def is_capture(self) -> bool:
        return not self.captured_piece.is_empty

    def to_notation(self) -> str:
        """'e2-e4', or 'e4-d5 xPawn' when something got taken"""
        notation = self.move.to_notation()
        if self.is_capture:
            notation += f" x{self.captured_piece.name}"
        return notation


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def is_aligned(from_square: Square, to_square: Square) -> bool:
    """Same file, same rank or same diagonal"""
    df = abs(to_square.file - from_square.file)
    dr = abs(to_square.rank - from_square.rank)
    return df == 0 or dr == 0 or df == dr


def is_path_clear(from_square: Square, to_square: Square, board: Board) -> bool:
    """
    Line of sight for sliding pieces.
    ----

    True if every square strictly in between the two squares is empty. The end points themselves are not inspected.
    """
    if not is_aligned(from_square, to_square):
        raise ValueError(
            f"is_path_clear requires both squares to lie on one line. \n from: {from_square}\n to:{to_square}"
        )

    df = _sign(to_square.file - from_square.file)
    dr = _sign(to_square.rank - from_square.rank)
    square = from_square.offset(df, dr)
    while square != to_square:
        if not board.is_empty(square):
            return False
        square = square.offset(df, dr)
    return True


# --- MOVEMENT RULES ---
def pawn_pattern(from_square: Square, to_square: Square, board: Board) -> bool:
    """
    A pawn:
    - moves by a single square forward, onto an empty square.
    - It can move by two in its first move (so when on its starting rank), as long as both squares are empty
    - takes diagonally (one square), and only when there actually is an enemy piece to take

    NOTE: No en passant.
    """
    color = board.piece(from_square).color
    direction = PAWN_DIRECTION[color]
    df, dr = Move(from_square, to_square).delta
    target_empty = board.is_empty(to_square)

    if df == 0 and dr == direction:
        return target_empty

    if df == 0 and dr == 2 * direction:
        in_between = from_square.offset(0, direction)
        return (
            from_square.rank == PAWN_STARTING_RANK[color]
            and board.is_empty(in_between)
            and target_empty
        )

    if abs(df) == 1 and dr == direction:
        return board.is_occupied_by_color(to_square, color.opponent)

    return False


def knight_pattern(from_square: Square, to_square: Square, board: Board) -> bool:
    """Knights always move such that |delta_rank| + |delta_file| = 3 (and neither is zero)"""
    df, dr = Move(from_square, to_square).delta
    return {abs(df), abs(dr)} == {1, 2}


def bishop_pattern(from_square: Square, to_square: Square, board: Board) -> bool:
    """Bishops move diagonally: |delta_rank| = |delta_file|"""
    df, dr = Move(from_square, to_square).delta
    return abs(df) == abs(dr) != 0 and is_path_clear(from_square, to_square, board)


def rook_pattern(from_square: Square, to_square: Square, board: Board) -> bool:
    """Rooks move either horizontally or vertically"""
    df, dr = Move(from_square, to_square).delta
    return (df == 0) != (dr == 0) and is_path_clear(from_square, to_square, board)


def queen_pattern(from_square: Square, to_square: Square, board: Board) -> bool:
    """
    The Queen combines the rook moves (horizontal + vertical movements) and bishop moves (diagonal movement)
    """
    return bishop_pattern(from_square, to_square, board) or rook_pattern(
        from_square, to_square, board
    )


def king_pattern(from_square: Square, to_square: Square, board: Board) -> bool:
    """
    The king can move by a single square at the time.

    No castling.
    """
    df, dr = Move(from_square, to_square).delta
    return max(abs(df), abs(dr)) == 1


# -- STRATEGY PATTERN: MOVEMENT RULES ---
PatternFn = Callable[[Square, Square, Board], bool]
MOVEMENT_RULES: dict[PieceType, PatternFn] = {
    PieceType.PAWN: pawn_pattern,
    PieceType.KNIGHT: knight_pattern,
    PieceType.BISHOP: bishop_pattern,
    PieceType.ROOK: rook_pattern,
    PieceType.QUEEN: queen_pattern,
    PieceType.KING: king_pattern,
}


# --- CAPTURING RULES / ATTACKING RULES ---
def pawn_attack(from_square: Square, to_square: Square, board: Board) -> bool:
    """
    Pawns attack a single square diagonally forward, whether or not anything stands there.

    NOTE: the forward pushes are not attacks.
    """
    direction = PAWN_DIRECTION[board.piece(from_square).color]
    df, dr = Move(from_square, to_square).delta
    return abs(df) == 1 and dr == direction


# -- STRATEGY PATTERN: ATTACKING RULES ---
# Apart from the pawn, a piece attacks exactly the squares its movement pattern reaches.
ATTACK_RULES: dict[PieceType, PatternFn] = {
    PieceType.PAWN: pawn_attack,
    PieceType.KNIGHT: knight_pattern,
    PieceType.BISHOP: bishop_pattern,
    PieceType.ROOK: rook_pattern,
    PieceType.QUEEN: queen_pattern,
    PieceType.KING: king_pattern,
}


def is_promotion_square(piece: Piece, square: Square) -> bool:
    """Pawn reaching the far rank"""
    return piece.type == PieceType.PAWN and square.rank == PROMOTION_RANK[piece.color]
