"""
Type definitions used across layers
"""

from enum import StrEnum


class Status(StrEnum):
    IN_PROGRESS = "in progress"
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"


# --- Color at the boundary does NOT contain an option for empty squares (the domain version in src/chess/pieces.py does)
# --- NOTE Same name as the domain Color, as that reads clearly. Let the imports show which version is used in what part of the code


class Color(StrEnum):
    WHITE = "white"
    BLACK = "black"
