"""The Game board: the 8x8 grid of pieces. Knows nothing about legality, only where pieces stand."""

from dataclasses import dataclass
from typing import Optional, Self

from src.chess.pieces import FEN_TO_PIECE, Color, Piece, PieceType
from src.chess.square import BOARD_DIMENSIONS, Square, all_squares
from src.core.exceptions import InvalidFENError

STARTING_POSITION_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"
EMPTY_BOARD_FEN = "/".join(["8"] * BOARD_DIMENSIONS[1])


@dataclass
class Board:
    position: dict[Square, Piece]

    @classmethod
    def from_fen(cls, fen_str: str) -> Self:
        """Construct a board using the piece placement part of a FEN string.

        ex. standard starting position:
        rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR
        means:
        * black pieces are on the 8th rank (rank index 0), starting with rook on a8, knight on b8, etc.
        * pawns cover 7th rank entirely
        * ranks 6 through 3 have 8 consecutive empty squares
        * rank 2 are the white pawns (capital letters)
        * 1st rank (rank index 7) are the white pieces.
        """
        n_files, n_ranks = BOARD_DIMENSIONS
        position: dict[Square, Piece] = {}
        fen_by_ranks = fen_str.split("/")
        if len(fen_by_ranks) != n_ranks:
            raise InvalidFENError(
                f"Expected {n_ranks} ranks, got {len(fen_by_ranks)}: {fen_str!r}"
            )

        # FEN string is read from top rank (8th) to bottom rank (1st), which matches the rank index directly
        for rank, fen_one_rank in enumerate(fen_by_ranks):
            file = 0
            for character in fen_one_rank:
                if character.lower() in FEN_TO_PIECE:
                    # simple case: a letter directly denotes the piece that should be created
                    position[Square(file, rank)] = Piece.from_fen(character)
                    file += 1
                elif character in "12345678":
                    # A number denotes the amount of empty squares after each other
                    for _ in range(int(character)):
                        position[Square(file, rank)] = Piece.empty()
                        file += 1
                else:
                    raise InvalidFENError(
                        f"Cannot interpret {character!r} in FEN placement: {fen_str!r}"
                    )
            if file != n_files:
                raise InvalidFENError(
                    f"Rank {fen_one_rank!r} covers {file} squares instead of {n_files}: {fen_str!r}"
                )
        return cls(position)

    @classmethod
    def starting_position(cls) -> Self:
        return cls.from_fen(STARTING_POSITION_FEN)

    def to_fen(self) -> str:
        """Ranks are separated by slashes in FEN string."""
        return "/".join(self._rank_to_fen(rank) for rank in range(BOARD_DIMENSIONS[1]))

    def _rank_to_fen(self, rank: int) -> str:
        """FEN string of a single rank"""
        fen_characters: list[str] = []
        empty_count = 0
        for file in range(BOARD_DIMENSIONS[0]):
            piece = self.piece(Square(file, rank))

            if not piece.is_empty:
                if empty_count > 0:
                    fen_characters.append(str(empty_count))
                    empty_count = 0
                fen_characters.append(piece.to_fen())
            else:
                empty_count += 1

        # if the entire rank is empty, then we still place this number in the string
        if empty_count > 0:
            fen_characters.append(str(empty_count))
        return "".join(fen_characters)

    # --- ACCESSORS ---
    def piece(self, square: Square) -> Piece:
        return self.position[square]

    def place_piece(self, piece: Piece, square: Square) -> None:
        """The only mutation primitive. No checks: callers are responsible for the rules."""
        self.position[square] = piece

    def remove_piece(self, square: Square) -> None:
        self.position[square] = Piece.empty()

    def move_piece(self, from_square: Square, to_square: Square) -> Piece:
        """Update the position on the board. Returns whatever stood on the target square."""
        captured = self.piece(to_square)
        self.place_piece(self.piece(from_square), to_square)
        self.remove_piece(from_square)
        return captured

    def is_empty(self, square: Square) -> bool:
        return self.piece(square).is_empty

    def is_occupied_by_color(self, square: Square, color: Color) -> bool:
        return self.piece(square).color == color

    # --- SEARCHING THE BOARD ---
    def locate_pieces(self, piece_type: PieceType) -> list[Square]:
        return [
            square
            for square, piece in self.position.items()
            if piece.type == piece_type
        ]

    def locate_color(self, color: Color) -> list[Square]:
        return [
            square for square, piece in self.position.items() if piece.color == color
        ]

    def locate_king(self, color: Color) -> Optional[Square]:
        """There should always be exactly one king per color, but a hand-built board might lack one"""
        king = Piece(PieceType.KING, color)
        return next(
            (square for square in all_squares() if self.position[square] == king), None
        )
