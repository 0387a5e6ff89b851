"""Persistence seen from the Service: SQLGameRepository implements it, tests can use a dictionary."""

from typing import Protocol
from uuid import UUID

from src.core.models import GameModel


class GameRepository(Protocol):
    """
    Stores one GameModel per game ID.

    Records are always read and written as a whole: the Service rebuilds the Game from the stored move list
    and hands back the complete new state.
    """

    def get_game(self, game_id: UUID) -> GameModel | None:
        """The stored game including its current version, or None for an unknown ID."""
        ...

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        """Store a new game (at version 0) and return the stored data + newly created game ID."""
        ...

    def update_game(self, game_id: UUID, game: GameModel) -> GameModel | None:
        """
        Replace every field of the stored record with `game`, and bump the version.

        `game.version` must equal the stored version (the one the update was based on),
        otherwise GameStateError is raised and nothing changes. Returns None for an unknown ID.
        """
        ...

    def delete_game(self, game_id: UUID) -> GameModel | None:
        """Remove a game's record, handing back what was stored (None if there is no such game)."""
        ...
