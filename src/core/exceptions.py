"""
Exceptions shared across layers.

All errors raised by the domain, service and persistence layers derive from `GameError`,
so the API layer can translate them into HTTP responses in one place.
"""


class GameError(Exception):
    """Base class for anything that went wrong while handling a chess game"""


class IllegalMoveError(GameError):
    """Move violates a movement pattern, occupancy, turn order or would leave your own king in check."""


class InvalidSquareError(GameError):
    """Coordinates outside the 8x8 board (or a square name that cannot be parsed)."""


class GameStateError(GameError):
    """The (stored) game data is inconsistent, e.g. an unknown status or a move list that cannot be replayed."""


class RepositoryError(GameError):
    """Persistence layer could not find / store the requested game."""


class InvalidRequestError(GameError):
    """Malformed request data (raised from the request model validators)."""


class InvalidFENError(GameError):
    """Piece placement that does not describe an 8x8 board."""
