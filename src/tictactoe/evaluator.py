"""
Win/draw detection

Key idea: only the lines through the last move can have changed, so only those get checked.
The board must therefore be evaluated after every applied move, not just at the end of the game.
"""

from enum import Enum, auto
from typing import Optional

from src.tictactoe.board import Board
from src.tictactoe.cell import Cell
from src.tictactoe.moves import Move


class Outcome(Enum):
    NONE = auto()
    WIN = auto()


def lines_through(board: Board, location: int) -> list[list[int]]:
    """
    Candidate lines in order of precedence:
    column -> row -> forward diagonal -> backward diagonal

    ---
    NOTE: the diagonals are only added for square boards. On non-square boards they are not full-length lines, so they are skipped.
    NOTE: both diagonals are checked even when `location` is not on them.
    """
    lines = [
        board.column_indices(board.col_of(location)),
        board.row_indices(board.row_of(location)),
    ]
    if board.is_square:
        lines.append(board.forward_diagonal())
        lines.append(board.backward_diagonal())
    return lines


def winning_line(board: Board, last_move: Move) -> Optional[tuple[int, ...]]:
    """The first line through the last move that is entirely filled with the moving piece (if any)"""
    if last_move.piece == Cell.EMPTY:
        return None

    for line in lines_through(board, last_move.location):
        if all(board.cell_at(index) == last_move.piece for index in line):
            return tuple(line)
    return None


def evaluate(board: Board, last_move: Move) -> Outcome:
    """Did the last move win the game?"""
    if winning_line(board, last_move) is not None:
        return Outcome.WIN
    return Outcome.NONE


def is_draw(board: Board, outcome: Outcome) -> bool:
    """A full board is a draw, unless the move that filled it also won (win is always checked first)"""
    return outcome != Outcome.WIN and board.is_full()
