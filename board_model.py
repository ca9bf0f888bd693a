"""
board_model.py
--------------
Immutable 3x3 board helpers.
Boards are 9-tuples in row-major order holding "", "X" or "O".
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

EMPTY = ""
X = "X"
O = "O"
PLAYERS = (X, O)

BOARD_CELLS = 9

LINES = [
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    (0, 4, 8),
    (2, 4, 6),
]

Board = Tuple[str, ...]


class InvalidMove(ValueError):
    """Move targets a cell outside the board or one that is already taken."""

    def __init__(self, index, reason: str):
        super().__init__(f"invalid move at {index!r}: {reason}")
        self.index = index
        self.reason = reason


@dataclass(frozen=True)
class Outcome:
    kind: str  # "in_progress", "win" or "draw"
    winner: Optional[str] = None

    @classmethod
    def win(cls, player: str) -> "Outcome":
        return cls("win", player)

    @property
    def finished(self) -> bool:
        return self.kind != "in_progress"

    def __str__(self):
        if self.kind == "win":
            return f"win({self.winner})"
        return self.kind


IN_PROGRESS = Outcome("in_progress")
DRAW = Outcome("draw")


def new_board() -> Board:
    return (EMPTY,) * BOARD_CELLS


def other(player: str) -> str:
    return O if player == X else X


def apply_move(board: Board, index: int, player: str) -> Board:
    """Return a new board with ``player`` placed at ``index``.

    Raises InvalidMove for an out-of-range index or an occupied cell.
    """
    if player not in PLAYERS:
        raise ValueError(f"unknown player {player!r}")
    if isinstance(index, bool) or not isinstance(index, int):
        raise InvalidMove(index, "index must be an int")
    if not 0 <= index < BOARD_CELLS:
        raise InvalidMove(index, "out of range")
    if board[index] != EMPTY:
        raise InvalidMove(index, f"occupied by {board[index]}")
    cells = list(board)
    cells[index] = player
    return tuple(cells)


def winning_line(board: Board) -> Optional[Tuple[int, int, int]]:
    for a, b, c in LINES:
        if board[a] and board[a] == board[b] == board[c]:
            return (a, b, c)
    return None


def evaluate(board: Board) -> Outcome:
    line = winning_line(board)
    if line:
        return Outcome.win(board[line[0]])
    if all(board):
        return DRAW
    return IN_PROGRESS


def empty_cells(board: Board) -> list:
    return [i for i, v in enumerate(board) if v == EMPTY]
