"""The Game board: a fixed-size grid of cells plus the geometry needed to find rows, columns and diagonals"""

from dataclasses import dataclass
from typing import Self

from src.core.exceptions import GameStateError, IndexOutOfRangeError
from src.tictactoe.cell import (
    CELL_TO_GLYPH,
    CELL_TO_NOTATION,
    NOTATION_TO_CELL,
    Cell,
)

ROW_SEPARATOR = "/"


@dataclass(frozen=True)
class Board:
    """
    Cells are stored row by row: index i lives on row i // cols, column i % cols.

    ---
    NOTE: the board is frozen. Every update returns a new board, so a board handed to a caller never changes underneath them.
    """

    rows: int
    cols: int
    cells: tuple[Cell, ...]

    def __post_init__(self) -> None:
        if len(self.cells) != self.rows * self.cols:
            raise GameStateError(
                f"Board of {self.rows}x{self.cols} needs {self.rows * self.cols} cells, got {len(self.cells)}."
            )

    @classmethod
    def empty(cls, rows: int = 3, cols: int = 3) -> Self:
        return cls(rows, cols, (Cell.EMPTY,) * (rows * cols))

    @classmethod
    def from_notation(cls, notation: str) -> Self:
        """Construct a board from its compact notation.

        Rows are separated by slashes, each character is one cell:
        'X' and 'O' for the pieces, '-' for an empty cell.
        ex. "XO-/-X-/--X" is a 3x3 board with X on the forward diagonal and O on index 1.
        """
        notation_rows = notation.split(ROW_SEPARATOR)
        cols = len(notation_rows[0])
        if cols == 0 or any(len(row) != cols for row in notation_rows):
            raise GameStateError(
                f"All rows must have the same (non-zero) length: {notation!r}"
            )
        try:
            cells = tuple(
                NOTATION_TO_CELL[character]
                for row in notation_rows
                for character in row
            )
        except KeyError as exc:
            raise GameStateError(
                f"Unknown character {exc.args[0]!r} in board notation {notation!r}"
            ) from exc
        return cls(len(notation_rows), cols, cells)

    def to_notation(self) -> str:
        return ROW_SEPARATOR.join(
            "".join(CELL_TO_NOTATION[self.cells[index]] for index in self.row_indices(row))
            for row in range(self.rows)
        )

    def glyphs(self) -> list[str]:
        """What to display in every cell"""
        return [CELL_TO_GLYPH[cell] for cell in self.cells]

    # --- CELL ACCESS ---
    @property
    def size(self) -> int:
        return self.rows * self.cols

    def is_within_bounds(self, index: int) -> bool:
        return 0 <= index < self.size

    def cell_at(self, index: int) -> Cell:
        self._assert_within_bounds(index)
        return self.cells[index]

    def is_empty_at(self, index: int) -> bool:
        return self.cell_at(index) == Cell.EMPTY

    def with_cell_set(self, index: int, piece: Cell) -> Self:
        """Copy of this board, except that `index` now holds `piece`."""
        self._assert_within_bounds(index)
        cells = list(self.cells)
        cells[index] = piece
        return type(self)(self.rows, self.cols, tuple(cells))

    def is_full(self) -> bool:
        return Cell.EMPTY not in self.cells

    def empty_indices(self) -> list[int]:
        return [index for index, cell in enumerate(self.cells) if cell == Cell.EMPTY]

    # --- GEOMETRY ---
    @property
    def is_square(self) -> bool:
        return self.rows == self.cols

    def row_of(self, index: int) -> int:
        return index // self.cols

    def col_of(self, index: int) -> int:
        return index % self.cols

    def index_of(self, row: int, col: int) -> int:
        return row * self.cols + col

    def row_indices(self, row: int) -> list[int]:
        return [self.index_of(row, col) for col in range(self.cols)]

    def column_indices(self, col: int) -> list[int]:
        return [self.index_of(row, col) for row in range(self.rows)]

    def forward_diagonal(self) -> list[int]:
        """top-left to bottom-right. Only a full-length line on square boards."""
        return [self.index_of(i, i) for i in range(min(self.rows, self.cols))]

    def backward_diagonal(self) -> list[int]:
        """top-right to bottom-left. Only a full-length line on square boards."""
        return [
            self.index_of(i, self.cols - 1 - i) for i in range(min(self.rows, self.cols))
        ]

    def _assert_within_bounds(self, index: int) -> None:
        if not self.is_within_bounds(index):
            raise IndexOutOfRangeError(
                f"Location {index} is outside the board (0 - {self.size - 1})."
            )
