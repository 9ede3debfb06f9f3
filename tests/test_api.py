"""Tests for the FastAPI tic-tac-toe interface."""

from __future__ import annotations

import time

from fastapi.testclient import TestClient

from tictacai import ui
from tictacai.ui import app


client = TestClient(app)
ui.AI_THINK_DELAY = (0.0, 0.0)


def test_create_game_and_first_move():
    response = client.post("/api/game", json={"difficulty": "hard"})
    assert response.status_code == 200
    payload = response.json()
    assert payload["currentPlayer"] == "X"
    assert payload["difficulty"] == "hard"
    assert payload["moveLog"] == []
    assert len(payload["availableMoves"]) == 9

    game_id = payload["id"]
    move_response = client.post(
        f"/api/game/{game_id}/move",
        json={"row": 1, "col": 1},
    )
    assert move_response.status_code == 200
    state = move_response.json()
    assert state["moveLog"][0] == {"player": "X", "row": 1, "col": 1}
    assert state["board"][1][1] == "X"
    assert state["currentPlayer"] == "O"
    assert state["aiPending"] is True

    time.sleep(0.01)
    follow_up = client.get(f"/api/game/{game_id}")
    assert follow_up.status_code == 200
    final_state = follow_up.json()
    assert final_state["currentPlayer"] == "X"
    assert final_state["aiPending"] is False
    assert final_state["moveLog"][-1]["player"] == "O"
    assert final_state["lastMove"] == final_state["moveLog"][-1]
    # Hard answers a centre opening with the first corner
    assert final_state["board"][0][0] == "O"


def test_occupied_cell_rejected():
    response = client.post("/api/game", json={"difficulty": "easy"})
    assert response.status_code == 200
    game_id = response.json()["id"]

    first_move = client.post(
        f"/api/game/{game_id}/move",
        json={"row": 0, "col": 0},
    )
    assert first_move.status_code == 200

    duplicate_move = client.post(
        f"/api/game/{game_id}/move",
        json={"row": 0, "col": 0},
    )
    assert duplicate_move.status_code == 400
    assert duplicate_move.json()["detail"]


def test_out_of_range_move_rejected():
    game_id = client.post("/api/game", json={}).json()["id"]
    response = client.post(f"/api/game/{game_id}/move", json={"row": 3, "col": 0})
    assert response.status_code == 422


def test_rejects_unsupported_difficulty():
    response = client.post("/api/game", json={"difficulty": "impossible"})
    assert response.status_code == 422


def test_change_difficulty_and_reset():
    payload = client.post("/api/game", json={"difficulty": "hard"}).json()
    game_id = payload["id"]

    changed = client.put(
        f"/api/game/{game_id}/difficulty", json={"difficulty": "medium"}
    )
    assert changed.status_code == 200
    assert changed.json()["difficulty"] == "medium"

    bad = client.put(f"/api/game/{game_id}/difficulty", json={"difficulty": "???"})
    assert bad.status_code == 422

    client.post(f"/api/game/{game_id}/move", json={"row": 2, "col": 2})
    reset = client.post(f"/api/game/{game_id}/reset")
    assert reset.status_code == 200
    state = reset.json()
    assert state["difficulty"] == "medium"
    assert state["moveLog"] == []
    assert all(cell == "" for row in state["board"] for cell in row)
    assert state["terminal"] is False


def test_finished_game_rejects_moves():
    game_id = client.post("/api/game", json={"difficulty": "hard"}).json()["id"]
    session = ui.SESSIONS[game_id]
    session.board[:] = [["X", "X", "X"], ["O", "O", " "], [" ", " ", " "]]

    state = client.get(f"/api/game/{game_id}").json()
    assert state["terminal"] is True
    assert state["winner"] == "X"
    assert state["availableMoves"] != []

    response = client.post(f"/api/game/{game_id}/move", json={"row": 2, "col": 2})
    assert response.status_code == 400


def test_missing_game_returns_404():
    missing = client.get("/api/game/unknown")
    assert missing.status_code == 404


def test_index_serves_page():
    response = client.get("/")
    assert response.status_code == 200
    assert "tictacai" in response.text
