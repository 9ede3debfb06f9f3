"""Tests for the engine contract used by the game-flow layer."""

import random

import pytest

from tictacai.ai import Difficulty
from tictacai.engine import DEFAULT_DIFFICULTY, Engine
from tictacai.game import (
    EMPTY,
    InvalidBoard,
    InvalidDifficulty,
    InvalidMove,
    PreconditionViolation,
    O,
    X,
)

_ = EMPTY


def test_reset_restores_default_difficulty():
    engine = Engine()
    engine.set_difficulty("easy")
    board = engine.reset()
    assert engine.difficulty is DEFAULT_DIFFICULTY
    assert engine.legal_actions(board) == [(r, c) for r in range(3) for c in range(3)]


def test_set_difficulty_accepts_names_and_members():
    engine = Engine()
    assert engine.set_difficulty("medium") is Difficulty.MEDIUM
    assert engine.set_difficulty(Difficulty.EASY) is Difficulty.EASY
    assert engine.difficulty is Difficulty.EASY


def test_set_difficulty_rejects_unknown_level():
    engine = Engine()
    with pytest.raises(InvalidDifficulty):
        engine.set_difficulty("impossible")
    assert engine.difficulty is DEFAULT_DIFFICULTY


def test_apply_move_and_turn_order():
    engine = Engine()
    board = engine.reset()
    engine.apply_move(board, (0, 0))
    assert board[0][0] == X
    assert engine.current_player(board) == O

    with pytest.raises(InvalidMove):
        engine.apply_move(board, (0, 0))
    with pytest.raises(InvalidMove):
        engine.apply_move(board, (3, 3))


def test_malformed_board_is_rejected():
    engine = Engine()
    with pytest.raises(InvalidBoard):
        engine.current_player([[X, X, _], [_, _, _], [_, _, _]])
    with pytest.raises(InvalidBoard):
        engine.is_terminal([[X, _, _]])


def test_terminal_iff_winner_or_full():
    engine = Engine()
    won = [[O, O, O], [X, X, _], [X, _, _]]
    drawn = [[X, O, X], [X, O, O], [O, X, X]]
    open_board = [[X, _, _], [_, O, _], [_, _, _]]

    assert engine.is_terminal(won) and engine.winner(won) == O
    assert engine.is_terminal(drawn) and engine.winner(drawn) is None
    assert not engine.is_terminal(open_board) and engine.winner(open_board) is None


def test_choose_move_on_terminal_board_fails():
    engine = Engine()
    with pytest.raises(PreconditionViolation):
        engine.choose_move([[X, X, X], [O, O, _], [_, _, _]], random.Random(1))


def test_choose_move_completes_winning_row():
    engine = Engine()
    engine.set_difficulty("hard")
    board = [[X, X, _], [O, O, _], [_, _, _]]

    move = engine.choose_move(board, random.Random(3))
    engine.apply_move(board, move)

    assert move == (0, 2)
    assert engine.winner(board) == X
    assert engine.is_terminal(board)
