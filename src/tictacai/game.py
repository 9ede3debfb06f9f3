"""Core rules for 3x3 tic-tac-toe: board model, move generator and outcomes."""

from __future__ import annotations

from typing import List, Optional, Tuple

Player = str  # "X" or "O"
Board = List[List[str]]
Action = Tuple[int, int]

X: Player = "X"
O: Player = "O"
EMPTY = " "

SIZE = 3

# Rows, columns, then diagonals, as (row, col) triples
WINNING_LINES: Tuple[Tuple[Action, Action, Action], ...] = (
    ((0, 0), (0, 1), (0, 2)),
    ((1, 0), (1, 1), (1, 2)),
    ((2, 0), (2, 1), (2, 2)),
    ((0, 0), (1, 0), (2, 0)),
    ((0, 1), (1, 1), (2, 1)),
    ((0, 2), (1, 2), (2, 2)),
    ((0, 0), (1, 1), (2, 2)),
    ((0, 2), (1, 1), (2, 0)),
)


# ---------- Errors ----------


class TicTacToeError(ValueError):
    """Base class for every failure raised by the engine."""


class InvalidBoard(TicTacToeError):
    """Board is not a 3x3 grid of X/O/empty with a legal mark balance."""


class InvalidMove(TicTacToeError):
    """Action is out of range or targets an occupied cell."""


class InvalidDifficulty(TicTacToeError):
    """Difficulty level is not one of easy, medium or hard."""


class PreconditionViolation(TicTacToeError):
    """Search was asked to move on a board that is already terminal."""


# ---------- Board model ----------


def reset() -> Board:
    return [[EMPTY] * SIZE for _ in range(SIZE)]


def validate_board(board: Board) -> None:
    """Raise :class:`InvalidBoard` unless ``board`` is a legal position shape.

    Checks the 3x3 shape, the cell alphabet and that X has the same number
    of marks as O or exactly one more.
    """
    if not isinstance(board, list) or len(board) != SIZE:
        raise InvalidBoard("Board must have exactly 3 rows")
    x_count = o_count = 0
    for row in board:
        if not isinstance(row, list) or len(row) != SIZE:
            raise InvalidBoard("Every row must have exactly 3 cells")
        for cell in row:
            if cell == X:
                x_count += 1
            elif cell == O:
                o_count += 1
            elif cell != EMPTY:
                raise InvalidBoard(f"Unknown cell value {cell!r}")
    if x_count - o_count not in (0, 1):
        raise InvalidBoard(
            f"Mark imbalance X={x_count} O={o_count}; X moves first and players alternate"
        )


def _to_move(board: Board) -> Player:
    x_count = sum(row.count(X) for row in board)
    o_count = sum(row.count(O) for row in board)
    return O if o_count < x_count else X


def _successor(board: Board, action: Action) -> Board:
    # Unchecked copy-with-one-cell-changed used inside the search
    new_board = [row.copy() for row in board]
    new_board[action[0]][action[1]] = _to_move(board)
    return new_board


def player(board: Board) -> Player:
    """Whose turn it is: X on equal counts, O otherwise."""
    validate_board(board)
    return _to_move(board)


def result(board: Board, action: Optional[Action] = None) -> Board:
    """Return a new board with ``action`` played; ``board`` is never mutated.

    Without an action this is a plain defensive copy.
    """
    validate_board(board)
    if action is None:
        return [row.copy() for row in board]
    row, col = _check_in_range(action)
    if board[row][col] != EMPTY:
        raise InvalidMove(f"Cell ({row}, {col}) is already occupied")
    return _successor(board, (row, col))


def make_move(board: Board, action: Action) -> None:
    """Play ``action`` on the caller's board in place."""
    board[:] = result(board, action)


def is_empty(board: Board, row: int, col: int) -> bool:
    return board[row][col] == EMPTY


def is_empty_board(board: Board) -> bool:
    return all(cell == EMPTY for row in board for cell in row)


def _check_in_range(action: Action) -> Action:
    try:
        row, col = action
    except (TypeError, ValueError) as exc:
        raise InvalidMove(f"Action must be a (row, col) pair, got {action!r}") from exc
    if not all(isinstance(v, int) and 0 <= v < SIZE for v in (row, col)):
        raise InvalidMove(f"Action ({row}, {col}) is outside the board")
    return row, col


# ---------- Move generator ----------


def actions(board: Board) -> List[Action]:
    """All empty cells, scanned row-major."""
    return [
        (i, j)
        for i in range(SIZE)
        for j in range(SIZE)
        if board[i][j] == EMPTY
    ]


# ---------- Outcome evaluator ----------


def check_win(player_symbol: Player, board: Board) -> bool:
    return any(
        all(board[r][c] == player_symbol for r, c in line) for line in WINNING_LINES
    )


def utility(board: Board) -> int:
    # X is checked first so a crafted double win scores +1
    if check_win(X, board):
        return 1
    if check_win(O, board):
        return -1
    return 0


def winner(board: Board) -> Optional[Player]:
    score = utility(board)
    if score == 1:
        return X
    if score == -1:
        return O
    return None


def terminal(board: Board) -> bool:
    return winner(board) is not None or not actions(board)
