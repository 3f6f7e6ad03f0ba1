"""Defines what a single cell of the board can hold"""

from enum import Enum, auto


class Cell(Enum):
    EMPTY = auto()
    X = auto()
    O = auto()  # noqa: E741


# What a player sees in a cell. Empty cells show nothing.
CELL_TO_GLYPH: dict[Cell, str] = {
    Cell.X: "X",
    Cell.O: "O",
    Cell.EMPTY: "",
}

# Compact notation used to store a board (see Board.to_notation)
NOTATION_TO_CELL: dict[str, Cell] = {
    "X": Cell.X,
    "O": Cell.O,
    "-": Cell.EMPTY,
}

CELL_TO_NOTATION: dict[Cell, str] = {
    value: key for key, value in NOTATION_TO_CELL.items()
}

# The pieces a player can actually place
PLAYABLE_PIECES: tuple[Cell, ...] = (Cell.X, Cell.O)
