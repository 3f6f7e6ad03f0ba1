"""Definition of a move: which piece gets placed where"""

from dataclasses import dataclass

from src.tictactoe.cell import Cell


@dataclass(frozen=True)
class Move:
    piece: Cell
    location: int

    def is_no_move(self) -> bool:
        return self == NO_MOVE


# Sentinel for "nothing staged". No legal move places an empty piece at -1.
NO_MOVE = Move(piece=Cell.EMPTY, location=-1)
