"""Exhaustive minimax search and the difficulty policy that wraps it."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Protocol, Union
import logging
import math

from .game import (
    Action,
    Board,
    InvalidDifficulty,
    PreconditionViolation,
    X,
    _successor,
    _to_move,
    actions,
    is_empty_board,
    terminal,
    utility,
    validate_board,
)

logger = logging.getLogger(__name__)


class RandomSource(Protocol):
    """Anything with ``randrange``; ``random.Random`` is the usual choice."""

    def randrange(self, stop: int) -> int:
        ...


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @classmethod
    def parse(cls, value: Union["Difficulty", str]) -> "Difficulty":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            choices = ", ".join(level.value for level in cls)
            raise InvalidDifficulty(
                f"Unsupported difficulty {value!r}. Choose one of {choices}."
            ) from exc


# One roll in [0, RANDOM_ROLL_SIDES); a roll below the threshold randomises
RANDOM_ROLL_SIDES = 11
RANDOM_THRESHOLDS: Dict[Difficulty, int] = {
    Difficulty.EASY: 6,
    Difficulty.MEDIUM: 3,
    Difficulty.HARD: 0,
}


# ---------- core search ----------


def minimax(board: Board) -> Action:
    """Optimal action for the side to move; earliest action wins ties."""
    validate_board(board)
    if terminal(board):
        raise PreconditionViolation("Cannot search a terminal board")

    best_action = None
    if _to_move(board) == X:
        best = -math.inf
        for action in actions(board):
            score = min_value(_successor(board, action))
            if score > best:
                best, best_action = score, action
    else:
        best = math.inf
        for action in actions(board):
            score = max_value(_successor(board, action))
            if score < best:
                best, best_action = score, action
    return best_action


def max_value(board: Board) -> int:
    if terminal(board):
        return utility(board)
    value = -math.inf
    for action in actions(board):
        value = max(value, min_value(_successor(board, action)))
    return value


def min_value(board: Board) -> int:
    if terminal(board):
        return utility(board)
    value = math.inf
    for action in actions(board):
        value = min(value, max_value(_successor(board, action)))
    return value


# ---------- difficulty policy ----------


def is_random_move(board: Board, difficulty: Difficulty, rng: RandomSource) -> bool:
    """Decide whether this turn plays a uniformly random legal move.

    The opening move on an empty board is always random, whatever the
    difficulty, including ``hard``. Otherwise one roll in ``[0, 11)`` is
    drawn and compared against the difficulty's threshold.
    """
    if is_empty_board(board):
        return True
    return rng.randrange(RANDOM_ROLL_SIDES) < RANDOM_THRESHOLDS[difficulty]


def random_action(board: Board, rng: RandomSource) -> Action:
    moves = actions(board)
    return moves[rng.randrange(len(moves))]


@dataclass
class MinimaxAI:
    """Computer player combining minimax with a difficulty level.

    - MinimaxAI(difficulty=Difficulty.HARD)
    - choose(board, rng) -> (row, col)
    """

    difficulty: Difficulty = Difficulty.HARD

    def __post_init__(self) -> None:
        self.difficulty = Difficulty.parse(self.difficulty)

    def choose(self, board: Board, rng: RandomSource) -> Action:
        validate_board(board)
        if terminal(board):
            raise PreconditionViolation("Cannot choose a move on a terminal board")
        if is_random_move(board, self.difficulty, rng):
            action = random_action(board, rng)
            logger.debug("Random move %s at %s difficulty", action, self.difficulty.value)
            return action
        return minimax(board)
