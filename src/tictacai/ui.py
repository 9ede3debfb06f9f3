"""FastAPI-powered web UI for playing tic-tac-toe against the engine."""

from __future__ import annotations

import logging
import random
import threading
import time
import uuid
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from fastapi import BackgroundTasks, FastAPI, HTTPException
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, Field, field_validator

from .ai import Difficulty
from .engine import DEFAULT_DIFFICULTY, Engine
from .game import EMPTY, O, Board, InvalidDifficulty, TicTacToeError, X

logger = logging.getLogger(__name__)

HUMAN_PLAYER = X
AI_PLAYER = O
AI_THINK_DELAY: Tuple[float, float] = (0.1, 0.1)


@dataclass
class GameSession:
    """Container for an active game, its engine and the AI's random source."""

    engine: Engine
    board: Board
    rng: random.Random = field(default_factory=random.Random, repr=False)
    move_log: List[Dict[str, int | str]] = field(default_factory=list)
    ai_pending: bool = False
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)


SESSIONS: Dict[str, GameSession] = {}
app = FastAPI(title="tictacai", description="Tic-tac-toe against a minimax opponent")


def _check_difficulty(value: str) -> str:
    try:
        return Difficulty.parse(value).value
    except InvalidDifficulty as exc:
        raise ValueError(str(exc)) from exc


class NewGameRequest(BaseModel):
    """Request payload for starting a new game."""

    difficulty: str = Field(
        default=DEFAULT_DIFFICULTY.value,
        description="easy, medium or hard",
    )

    @field_validator("difficulty")
    @classmethod
    def ensure_supported_difficulty(cls, value: str) -> str:
        return _check_difficulty(value)


class DifficultyRequest(BaseModel):
    """Request payload for changing difficulty between moves."""

    difficulty: str

    @field_validator("difficulty")
    @classmethod
    def ensure_supported_difficulty(cls, value: str) -> str:
        return _check_difficulty(value)


class MoveRequest(BaseModel):
    """Request payload for submitting a move on an existing game."""

    row: int = Field(ge=0, le=2)
    col: int = Field(ge=0, le=2)


def _create_session(difficulty: str) -> Tuple[str, GameSession]:
    """Create a new game session and register it for later access."""

    engine = Engine()
    board = engine.reset()
    engine.set_difficulty(difficulty)
    session = GameSession(engine=engine, board=board)
    session_id = uuid.uuid4().hex
    SESSIONS[session_id] = session
    logger.info("New game %s at %s difficulty", session_id, difficulty)
    return session_id, session


def _get_session(game_id: str) -> GameSession:
    try:
        return SESSIONS[game_id]
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Game not found") from exc


def _log_if_finished(game_id: str, session: GameSession) -> None:
    engine = session.engine
    if engine.is_terminal(session.board):
        logger.info(
            "Game %s finished, winner: %s",
            game_id,
            engine.winner(session.board) or "draw",
        )


def _run_ai_turn(game_id: str) -> None:
    session = SESSIONS.get(game_id)
    if not session:
        return

    time.sleep(max(0.0, random.uniform(*AI_THINK_DELAY)))

    with session.lock:
        try:
            engine = session.engine
            board = session.board
            if engine.is_terminal(board):
                return
            if engine.current_player(board) != AI_PLAYER:
                return
            row, col = engine.choose_move(board, session.rng)
            engine.apply_move(board, (row, col))
            session.move_log.append({"player": AI_PLAYER, "row": row, "col": col})
            _log_if_finished(game_id, session)
        finally:
            session.ai_pending = False


def _serialize_session(game_id: str, session: GameSession) -> Dict[str, object]:
    with session.lock:
        engine = session.engine
        board = session.board
        terminal = engine.is_terminal(board)
        winner = engine.winner(board)

        state: Dict[str, object] = {
            "id": game_id,
            "board": [["" if c == EMPTY else c for c in row] for row in board],
            "currentPlayer": engine.current_player(board),
            "difficulty": engine.difficulty.value,
            "winner": winner,
            "drawn": terminal and winner is None,
            "terminal": terminal,
            "availableMoves": [
                {"row": row, "col": col} for row, col in engine.legal_actions(board)
            ],
            "moveLog": list(session.move_log),
            "aiPending": session.ai_pending,
        }
        if session.move_log:
            state["lastMove"] = session.move_log[-1]
        return state


def _apply_player_move(
    game_id: str,
    session: GameSession,
    row: int,
    col: int,
    background_tasks: Optional[BackgroundTasks] = None,
) -> None:
    should_schedule_ai = False
    with session.lock:
        engine = session.engine
        board = session.board
        if engine.is_terminal(board):
            raise HTTPException(status_code=400, detail="Game already finished")

        if session.ai_pending:
            raise HTTPException(status_code=400, detail="AI is completing its move")

        player = engine.current_player(board)
        if player != HUMAN_PLAYER:
            raise HTTPException(status_code=400, detail="It is not your turn")

        try:
            engine.apply_move(board, (row, col))
        except TicTacToeError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc

        session.move_log.append({"player": player, "row": row, "col": col})
        _log_if_finished(game_id, session)

        should_schedule_ai = not engine.is_terminal(board)
        if should_schedule_ai:
            session.ai_pending = True

    if should_schedule_ai and background_tasks is not None:
        background_tasks.add_task(_run_ai_turn, game_id)


@app.post("/api/game")
def create_game(request: NewGameRequest) -> Dict[str, object]:
    game_id, session = _create_session(request.difficulty)
    return _serialize_session(game_id, session)


@app.get("/api/game/{game_id}")
def get_game(game_id: str) -> Dict[str, object]:
    session = _get_session(game_id)
    return _serialize_session(game_id, session)


@app.post("/api/game/{game_id}/move")
def make_move(
    game_id: str, request: MoveRequest, background_tasks: BackgroundTasks
) -> Dict[str, object]:
    session = _get_session(game_id)
    _apply_player_move(game_id, session, request.row, request.col, background_tasks)
    return _serialize_session(game_id, session)


@app.put("/api/game/{game_id}/difficulty")
def change_difficulty(game_id: str, request: DifficultyRequest) -> Dict[str, object]:
    session = _get_session(game_id)
    with session.lock:
        session.engine.set_difficulty(request.difficulty)
    return _serialize_session(game_id, session)


@app.post("/api/game/{game_id}/reset")
def reset_game(game_id: str) -> Dict[str, object]:
    session = _get_session(game_id)
    with session.lock:
        if session.ai_pending:
            raise HTTPException(status_code=400, detail="AI is completing its move")
        difficulty = session.engine.difficulty
        session.board = session.engine.reset()
        session.engine.set_difficulty(difficulty)
        session.move_log.clear()
    return _serialize_session(game_id, session)


@app.get("/", response_class=HTMLResponse)
def index() -> str:
    return HTML_PAGE


HTML_PAGE = """<!DOCTYPE html>
<html lang=\"en\">
  <head>
    <meta charset=\"utf-8\" />
    <meta name=\"viewport\" content=\"width=device-width, initial-scale=1\" />
    <title>tictacai</title>
    <style>
      body { font-family: sans-serif; display: flex; flex-direction: column; align-items: center; }
      #board { display: grid; grid-template-columns: repeat(3, 1fr); width: 50vmin; height: 50vmin; gap: 4px; }
      .cell { display: flex; align-items: center; justify-content: center; font-size: 10vmin;
              background: #f1f1f1; cursor: pointer; }
      .cell:hover { background: #e0e0e0; }
      #status { margin: 1rem; min-height: 1.5rem; }
    </style>
  </head>
  <body>
    <h1>Tic-tac-toe</h1>
    <label>Difficulty
      <select id=\"difficulty\">
        <option value=\"easy\">Easy</option>
        <option value=\"medium\">Medium</option>
        <option value=\"hard\" selected>Hard</option>
      </select>
    </label>
    <div id=\"status\"></div>
    <div id=\"board\"></div>
    <script>
      let state = null;
      const boardEl = document.querySelector("#board");
      const statusEl = document.querySelector("#status");
      const difficultyEl = document.querySelector("#difficulty");

      async function api(method, path, body) {
        const response = await fetch(path, {
          method,
          headers: { "Content-Type": "application/json" },
          body: body ? JSON.stringify(body) : undefined,
        });
        return response.json();
      }

      function render() {
        boardEl.innerHTML = "";
        state.board.forEach((cells, row) => cells.forEach((value, col) => {
          const cell = document.createElement("div");
          cell.className = "cell";
          cell.textContent = value;
          cell.addEventListener("click", () => play(row, col));
          boardEl.appendChild(cell);
        }));
        if (state.terminal) {
          statusEl.textContent = state.winner === "X" ? "You win!"
            : state.winner === "O" ? "You lose." : "Draw.";
          setTimeout(restart, 3000);
        } else {
          statusEl.textContent = state.aiPending ? "Thinking..." : "Your move";
        }
      }

      async function poll() {
        state = await api("GET", `/api/game/${state.id}`);
        render();
        if (state.aiPending) setTimeout(poll, 100);
      }

      async function play(row, col) {
        if (!state || state.terminal || state.aiPending || state.board[row][col]) return;
        state = await api("POST", `/api/game/${state.id}/move`, { row, col });
        render();
        if (state.aiPending) setTimeout(poll, 100);
      }

      async function restart() {
        state = await api("POST", `/api/game/${state.id}/reset`);
        render();
      }

      difficultyEl.addEventListener("change", async () => {
        state = await api("PUT", `/api/game/${state.id}/difficulty`, { difficulty: difficultyEl.value });
        render();
      });

      api("POST", "/api/game", { difficulty: difficultyEl.value }).then((s) => { state = s; render(); });
    </script>
  </body>
</html>
"""
