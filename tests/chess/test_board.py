"""Unit tests for /src/chess/board.py"""

import pytest

from src.chess.board import EMPTY_BOARD_FEN, STARTING_POSITION_FEN, Board
from src.chess.pieces import Color, Piece, PieceType
from src.chess.square import Square
from src.core.exceptions import InvalidFENError

BACK_ROW = [
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
]


# -- CREATION LOGIC ---
def test_creating_board_in_starting_position() -> None:
    """Make sure board position is correctly initialized using a partial FEN string

    Using the standard opening position. Rank index 0 is Black's back row.
    """
    board = Board.from_fen(STARTING_POSITION_FEN)

    for file, piece_type in enumerate(BACK_ROW):
        assert board.piece(Square(file, 0)) == Piece(piece_type, Color.BLACK)
        assert board.piece(Square(file, 1)) == Piece(PieceType.PAWN, Color.BLACK)
        assert board.piece(Square(file, 6)) == Piece(PieceType.PAWN, Color.WHITE)
        assert board.piece(Square(file, 7)) == Piece(piece_type, Color.WHITE)

    # ranks 6th through 3rd all empty
    for rank in range(2, 6):
        for file in range(8):
            assert board.piece(Square(file, rank)) == Piece(PieceType.EMPTY, Color.NONE)


def test_creating_board_after_e4() -> None:
    """Say, white moves the pawn from e2 to e4, and I want to load up the board in this position"""
    e4_fen = "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR"
    board = Board.from_fen(e4_fen)
    assert board.piece(Square.from_algebraic("e4")) == Piece(PieceType.PAWN, Color.WHITE)
    assert board.is_empty(Square.from_algebraic("e2"))


def test_creating_empty_board() -> None:
    board = Board.from_fen(EMPTY_BOARD_FEN)
    assert len(board.position) == 64
    assert all(piece.is_empty for piece in board.position.values())


@pytest.mark.parametrize(
    "fen",
    [
        STARTING_POSITION_FEN,
        EMPTY_BOARD_FEN,
        "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR",
        "r3k2r/pppq1ppp/2npbn2/4p3/2B1P3/2NP1N2/PPP2PPP/R1BQ1RK1",
        "k7/8/KQ6/8/8/8/8/8",
    ],
)
def test_writing_board_to_fen(fen: str) -> None:
    board = Board.from_fen(fen)
    assert board.to_fen() == fen


@pytest.mark.parametrize(
    "invalid_fen",
    [
        "",
        "8/8/8/8/8/8/8",  # 7 ranks
        "8/8/8/8/8/8/8/8/8",  # 9 ranks
        "9/8/8/8/8/8/8/8",
        "rnbqkbnrp/8/8/8/8/8/8/8",  # 9 squares
        "7/8/8/8/8/8/8/8",  # 7 squares
        "4k2/8/8/8/8/8/8/4K3",
        "8/8/8/8/8/8/8/0K7",
        "8/8/8/8/4x3/8/8/8",
        "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1",  # full FEN, not just placement
    ],
)
def test_reading_invalid_fen(invalid_fen: str) -> None:
    """A board either has all 64 squares, or does not get created at all"""
    with pytest.raises(InvalidFENError):
        Board.from_fen(invalid_fen)


# --- ACCESSORS ---
def test_place_and_remove_piece() -> None:
    board = Board.from_fen(EMPTY_BOARD_FEN)
    d4 = Square.from_algebraic("d4")
    board.place_piece(Piece.from_fen("N"), d4)
    assert board.piece(d4) == Piece(PieceType.KNIGHT, Color.WHITE)
    board.remove_piece(d4)
    assert board.is_empty(d4)


@pytest.mark.parametrize("uci_squares", [("e2", "e4"), ("a1", "a5"), ("g8", "f6")])
def test_move_piece(uci_squares: tuple[str, str]) -> None:
    """Not the responsibility of the board to check the move is legal"""
    board = Board.starting_position()
    from_square, to_square = (Square.from_algebraic(sq) for sq in uci_squares)
    moving_piece = board.piece(from_square)
    captured = board.move_piece(from_square, to_square)
    assert captured.is_empty
    assert board.is_empty(from_square)
    assert board.piece(to_square) == moving_piece


def test_move_piece_hands_back_captured_piece() -> None:
    board = Board.from_fen("8/8/8/3p4/4P3/8/8/8")
    captured = board.move_piece(Square.from_algebraic("e4"), Square.from_algebraic("d5"))
    assert captured == Piece(PieceType.PAWN, Color.BLACK)
    assert board.piece(Square.from_algebraic("d5")) == Piece(PieceType.PAWN, Color.WHITE)


def test_is_occupied_by_color() -> None:
    board = Board.starting_position()
    e2 = Square.from_algebraic("e2")
    e4 = Square.from_algebraic("e4")
    assert board.is_occupied_by_color(e2, Color.WHITE)
    assert not board.is_occupied_by_color(e2, Color.BLACK)
    assert not board.is_occupied_by_color(e4, Color.WHITE)
    assert board.is_occupied_by_color(e4, Color.NONE)


# --- SEARCHING THE BOARD ---
def test_locating_pawns() -> None:
    board = Board.starting_position()
    assert len(board.locate_pieces(PieceType.PAWN)) == 16


@pytest.mark.parametrize("player_color", [Color.WHITE, Color.BLACK])
def test_locating_color(player_color: Color) -> None:
    """Locate all pieces (incl. pawns) in the starting position"""
    board = Board.starting_position()
    player_pieces = board.locate_color(player_color)
    assert len(player_pieces) == 16
    assert all(board.piece(square).color == player_color for square in player_pieces)


@pytest.mark.parametrize(
    "color, king_square",
    [(color, sq) for color in [Color.BLACK, Color.WHITE] for sq in ["a1", "d4", "d8"]],
)
def test_finding_the_king(color: Color, king_square: str) -> None:
    """Make sure you locate the king of the specified color at the correct location"""
    board = Board.from_fen(EMPTY_BOARD_FEN)
    expected_square = Square.from_algebraic(king_square)
    board.place_piece(Piece(PieceType.KING, color), expected_square)

    # the other king and a decoy queen elsewhere
    board.place_piece(Piece(PieceType.KING, color.opponent), Square.from_algebraic("h8"))
    board.place_piece(Piece(PieceType.QUEEN, color), Square.from_algebraic("a2"))

    assert board.locate_king(color) == expected_square


def test_no_king_on_the_board() -> None:
    assert Board.from_fen(EMPTY_BOARD_FEN).locate_king(Color.WHITE) is None
