"""In-process contract used by the game-flow layer to drive the engine."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Union

from . import game
from .ai import Difficulty, MinimaxAI, RandomSource
from .game import Action, Board, Player

logger = logging.getLogger(__name__)

DEFAULT_DIFFICULTY = Difficulty.HARD


@dataclass
class Engine:
    """Holds the difficulty for the current game; boards stay with the caller."""

    ai: MinimaxAI = field(default_factory=lambda: MinimaxAI(DEFAULT_DIFFICULTY))

    @property
    def difficulty(self) -> Difficulty:
        return self.ai.difficulty

    def reset(self) -> Board:
        self.ai.difficulty = DEFAULT_DIFFICULTY
        return game.reset()

    def set_difficulty(self, level: Union[Difficulty, str]) -> Difficulty:
        self.ai.difficulty = Difficulty.parse(level)
        logger.debug("Difficulty set to %s", self.ai.difficulty.value)
        return self.ai.difficulty

    def current_player(self, board: Board) -> Player:
        return game.player(board)

    def legal_actions(self, board: Board) -> List[Action]:
        game.validate_board(board)
        return game.actions(board)

    def apply_move(self, board: Board, action: Action) -> None:
        game.make_move(board, action)

    def is_terminal(self, board: Board) -> bool:
        game.validate_board(board)
        return game.terminal(board)

    def winner(self, board: Board) -> Optional[Player]:
        game.validate_board(board)
        return game.winner(board)

    def choose_move(self, board: Board, rng: RandomSource) -> Action:
        action = self.ai.choose(board, rng)
        logger.debug("%s plays %s", game.player(board), action)
        return action
