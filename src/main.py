"""
FastAPI application: wires the routes, the database and the translation of domain errors into HTTP responses.

Run with: uvicorn src.main:app
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from src.api.routes import router
from src.core.config import LOG_LEVEL
from src.core.exceptions import (
    GameError,
    GameStateError,
    IllegalMoveError,
    InvalidRequestError,
    InvalidSquareError,
    RepositoryError,
)
from src.db.database import init_db

logging.basicConfig(level=LOG_LEVEL)
_log = logging.getLogger(__name__)

ERROR_STATUS_CODES: dict[type[GameError], int] = {
    RepositoryError: 404,
    IllegalMoveError: 422,
    InvalidSquareError: 422,
    InvalidRequestError: 422,
    GameStateError: 409,
}


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    init_db()
    yield


app = FastAPI(title="Chess rule engine", lifespan=lifespan)
app.include_router(router)


@app.exception_handler(GameError)
async def handle_game_error(_: Request, exc: GameError) -> JSONResponse:
    status_code = next(
        (
            code
            for error_type, code in ERROR_STATUS_CODES.items()
            if isinstance(exc, error_type)
        ),
        400,
    )
    _log.info("Rejected request (%s): %s", type(exc).__name__, exc)
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})
