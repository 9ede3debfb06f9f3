"""tictacai package exposing game rules, the minimax AI, and the web application."""

from .ai import Difficulty, MinimaxAI
from .engine import Engine
from .game import (
    InvalidBoard,
    InvalidDifficulty,
    InvalidMove,
    PreconditionViolation,
    TicTacToeError,
)
from .ui import app

__all__ = [
    "Difficulty",
    "Engine",
    "InvalidBoard",
    "InvalidDifficulty",
    "InvalidMove",
    "MinimaxAI",
    "PreconditionViolation",
    "TicTacToeError",
    "app",
]
