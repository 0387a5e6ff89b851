"""Tests for the HTTP layer (src/api/routes.py + error handling in src/main.py)"""

from copy import deepcopy
from typing import Generator
from uuid import UUID, uuid4

import pytest
from fastapi.testclient import TestClient
from httpx import Response
from sqlalchemy.orm import Session

from src.db.database import get_db
from src.db.sql_repository import SQLGameRepository
from src.main import app


@pytest.fixture
def client(db_session_repo: Session) -> Generator[TestClient, None, None]:
    """All requests share the in-memory test database"""

    def override_get_db() -> Generator[Session, None, None]:
        yield db_session_repo

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def create_game(client: TestClient) -> str:
    response = client.post("/games")
    assert response.status_code == 201
    return response.json()["game_id"]


def move(
    client: TestClient, game_id: str, from_square: str, to_square: str
) -> Response:
    return client.post(
        f"/games/{game_id}/moves",
        params={"from_square": from_square, "to_square": to_square},
    )


def test_create_and_fetch_game(client: TestClient) -> None:
    game_id = create_game(client)
    response = client.get(f"/games/{game_id}")
    assert response.status_code == 200

    data = response.json()
    assert data["color_to_move"] == "white"
    assert data["status"] == "in progress"
    assert data["status_text"] == "Turn: White"
    assert data["move_log"] == []


def test_unknown_game(client: TestClient) -> None:
    response = client.get(f"/games/{uuid4()}")
    assert response.status_code == 404
    assert "not found" in response.json()["detail"]


def test_play_moves(client: TestClient) -> None:
    game_id = create_game(client)
    assert move(client, game_id, "e2", "e4").status_code == 200
    assert move(client, game_id, "d7", "d5").status_code == 200

    response = move(client, game_id, "e4", "d5")
    assert response.status_code == 200
    data = response.json()
    assert data["move_log"] == ["e2-e4", "d7-d5", "e4-d5 xPawn"]
    assert data["captures"] == {"white": 1, "black": 0}
    assert data["last_move"] == ["e4", "d5"]

    # the move got stored
    data = client.get(f"/games/{game_id}").json()
    assert data["move_history"] == ["e2e4", "d7d5", "e4d5"]


def test_illegal_move(client: TestClient) -> None:
    game_id = create_game(client)
    response = move(client, game_id, "e2", "e5")
    assert response.status_code == 422
    assert "e2-e5" in response.json()["detail"]


def test_malformed_square(client: TestClient) -> None:
    game_id = create_game(client)
    assert move(client, game_id, "e9", "e4").status_code == 422
    assert client.get(f"/games/{game_id}/legal-moves/x1").status_code == 422


def test_legal_moves(client: TestClient) -> None:
    game_id = create_game(client)
    response = client.get(f"/games/{game_id}/legal-moves/g1")
    assert response.status_code == 200
    assert response.json()["legal_destinations"] == ["f3", "h3"]


def test_checkmate_and_undo(client: TestClient) -> None:
    game_id = create_game(client)
    for from_square, to_square in [("f2", "f3"), ("e7", "e5"), ("g2", "g4"), ("d8", "h4")]:
        response = move(client, game_id, from_square, to_square)
    data = response.json()
    assert data["status"] == "checkmate"
    assert data["is_game_over"] is True
    assert data["status_text"] == "Checkmate — Black wins"
    assert data["winner"] == "black"

    assert move(client, game_id, "a2", "a3").status_code == 422

    response = client.post(f"/games/{game_id}/undo")
    assert response.status_code == 200
    assert response.json()["status"] == "in progress"


def test_delete_game(client: TestClient) -> None:
    game_id = create_game(client)
    assert client.delete(f"/games/{game_id}").status_code == 204
    assert client.get(f"/games/{game_id}").status_code == 404
    assert client.delete(f"/games/{game_id}").status_code == 404


def test_square_names_in_upper_case(client: TestClient) -> None:
    game_id = create_game(client)
    response = move(client, game_id, "E2", "E4")
    assert response.status_code == 200
    assert response.json()["move_history"] == ["e2e4"]


def test_move_based_on_an_outdated_read(
    client: TestClient, db_session_repo: Session, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Of two requests that read the same game, the one storing second gets a conflict instead of erasing the other move"""
    game_id = create_game(client)
    outdated = SQLGameRepository(db_session_repo).get_game(UUID(game_id))
    assert move(client, game_id, "e2", "e4").status_code == 200

    # the second request read the game before the first move got stored
    monkeypatch.setattr(
        SQLGameRepository, "get_game", lambda self, _: deepcopy(outdated)
    )
    response = move(client, game_id, "d2", "d4")
    assert response.status_code == 409
    monkeypatch.undo()

    data = client.get(f"/games/{game_id}").json()
    assert data["move_history"] == ["e2e4"]
    assert data["color_to_move"] == "black"
