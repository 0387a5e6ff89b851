"""
A square on the board

(placed in its own module as multiple other modules need to import it)

Coordinates are zero-based. Files run a-h from left to right (0-7).
Ranks are counted from Black's side of the board: rank 0 is Black's back row (the 8th rank in algebraic notation),
rank 7 is White's back row (the 1st rank).
"""

from __future__ import annotations

from dataclasses import dataclass

from src.core.exceptions import InvalidSquareError

# Chess board is always 8x8. Just in case we want to try some funky stuff, make it adjustable
BOARD_DIMENSIONS = (8, 8)


@dataclass(frozen=True)
class Square:
    file: int
    rank: int

    @classmethod
    def from_algebraic(cls, sq: str) -> Square:
        """Algebraic notation: 'a8' - 'h1' get converted to (0,0) - (7,7)"""
        if len(sq) != 2 or not sq[1].isdigit():
            raise InvalidSquareError(f"Cannot interpret {sq!r} as a square name.")
        file = ord(sq[0].lower()) - ord("a")
        rank = BOARD_DIMENSIONS[1] - int(sq[1])
        square = cls(file, rank)
        if not square.is_within_bounds():
            raise InvalidSquareError(f"Square {sq!r} is not on the board.")
        return square

    def to_algebraic(self) -> str:
        return f"{chr(self.file + ord('a'))}{BOARD_DIMENSIONS[1] - self.rank}"

    def is_within_bounds(self) -> bool:
        return (0 <= self.file < BOARD_DIMENSIONS[0]) and (
            0 <= self.rank < BOARD_DIMENSIONS[1]
        )

    def offset(self, df: int, dr: int) -> Square:
        """Square displaced by the given file/rank deltas (may land off the board)"""
        return Square(self.file + df, self.rank + dr)


def all_squares() -> list[Square]:
    """Every square on the board, row by row starting from Black's back row"""
    return [
        Square(file, rank)
        for rank in range(BOARD_DIMENSIONS[1])
        for file in range(BOARD_DIMENSIONS[0])
    ]


def validate_square(square: Square) -> None:
    """Reject coordinates outside the board before they are used to access it"""
    if not square.is_within_bounds():
        raise InvalidSquareError(
            f"Square (file={square.file}, rank={square.rank}) lies outside the {BOARD_DIMENSIONS[0]}x{BOARD_DIMENSIONS[1]} board."
        )
