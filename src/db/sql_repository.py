"""Implementation of (Game)Repository using SQLAlchemy"""

from uuid import UUID, uuid4

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from src.core.exceptions import GameStateError
from src.core.models import GameModel
from src.db.schema import DBGame


class SQLGameRepository:
    """Data stored using SQL / methods implemented using SQLAlchemy"""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def get_game(self, game_id: UUID) -> GameModel | None:
        """Get game by ID, if record exists."""
        game_db = self._fetch_game(game_id)
        if game_db:
            return self._to_model(game_db)
        return None

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        """Store new game and return the stored data + newly created game ID."""

        new_id = uuid4()
        game_db = DBGame(
            id=new_id,
            moves_uci=game.moves_uci,
            move_log=game.move_log,
            board_fen=game.board_fen,
            color_to_move=game.color_to_move,
            status=game.status,
            result=game.result,
            version=0,
        )
        self.db.add(game_db)
        self.db.commit()
        self.db.refresh(game_db)
        return self._to_model(game_db), new_id

    def update_game(self, game_id: UUID, game: GameModel) -> GameModel | None:
        """
        Replace the whole record, if nobody stored a newer version in the meantime.
        ----

        `game.version` is the version the update is based on. Comparing and writing happen in a single UPDATE statement,
        so of two requests based on the same version, only the first one gets stored. The other one raises GameStateError.
        """
        statement = (
            update(DBGame)
            .where(DBGame.id == game_id, DBGame.version == game.version)
            .values(
                moves_uci=list(game.moves_uci),
                move_log=list(game.move_log),
                board_fen=game.board_fen,
                color_to_move=game.color_to_move,
                status=game.status,
                result=game.result,
                version=DBGame.version + 1,
            )
            .execution_options(synchronize_session=False)
        )
        result = self.db.execute(statement)
        if result.rowcount == 0:
            self.db.rollback()
            if self._fetch_game(game_id) is None:
                return None
            raise GameStateError(
                f"Game with {game_id=} was changed by another request since version {game.version} was read."
            )

        # NOTE: commit expires the (now outdated) instance in the session, so fetching it reloads the new row
        self.db.commit()
        game_db = self._fetch_game(game_id)
        if not game_db:
            return None
        return self._to_model(game_db)

    def delete_game(self, game_id: UUID) -> GameModel | None:
        """Remove a game's record."""
        game_db = self._fetch_game(game_id)
        if not game_db:
            return None
        game_model = self._to_model(game_db)
        self.db.delete(game_db)
        self.db.commit()
        return game_model

    def _fetch_game(self, game_id: UUID) -> DBGame | None:
        query = select(DBGame).where(DBGame.id == game_id)
        return self.db.scalar(query)

    def _to_model(self, game_db: DBGame) -> GameModel:
        """Convert SQLAlchemy model to data transfer model."""
        return GameModel(
            moves_uci=list(game_db.moves_uci),
            move_log=list(game_db.move_log),
            board_fen=game_db.board_fen,
            color_to_move=game_db.color_to_move,
            status=game_db.status,
            result=game_db.result,
            version=game_db.version,
        )
