"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Hence, both the API layer (higher) and domain/db layers (lower) will use model(s) defined here to send to/receive from the Service
(Decouples the data model specific to the DB layer, API layer, or domain layer from the information needed to send across boundaries)
"""

from dataclasses import dataclass


@dataclass
class GameModel:
    """
    Transport-safe representation of a chess game used between API, Service, DB, and Game layers.

    NOTE: `moves_uci` is the source of truth. Everything else can be recomputed by replaying those moves,
    but is stored as well so a game can be displayed without running the rule engine.

    `version` counts the stored updates. An update must carry the version it was based on,
    so two requests working on the same game can not overwrite each other's moves.
    """

    moves_uci: list[str]
    move_log: list[str]
    board_fen: str
    color_to_move: str
    status: str
    result: str
    version: int = 0
