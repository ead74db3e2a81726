from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Iterable, List, Optional, Tuple

import numpy as np

if TYPE_CHECKING:
    from tictactoe.core.move import Move


SIZE = 3


class Cell(Enum):
    """Cell constants."""
    EMPTY = 0
    X = 1
    O = 2

    def symbol(self) -> str:
        return {0: "_", 1: "X", 2: "O"}[self.value]

    def opponent(self) -> "Cell":
        if self == Cell.X:
            return Cell.O
        if self == Cell.O:
            return Cell.X
        return Cell.EMPTY

    @classmethod
    def from_symbol(cls, ch: str) -> "Cell":
        for cell in cls:
            if cell.symbol() == ch.upper():
                return cell
        raise ValueError(f"Unknown cell symbol: {ch!r}")

    def __str__(self) -> str:
        return self.symbol()


# SYMBOLS[0] is the human / first-listed player, SYMBOLS[1] the computer.
SYMBOLS: Tuple[Cell, Cell] = (Cell.X, Cell.O)

# Flat indices of the 8 winning lines on a row-major 3x3 grid
WIN_LINES: Tuple[Tuple[int, int, int], ...] = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),  # rows
    (0, 3, 6), (1, 4, 7), (2, 5, 8),  # cols
    (0, 4, 8), (2, 4, 6),             # diagonals
)


class Board:
    """
    Represents the 3x3 game board.

    - Uses 0-based (row, col) coordinates.
    - Internally stores an int8 numpy grid of Cell values.
    """

    def __init__(self) -> None:
        self._size: int = SIZE
        self._grid: np.ndarray = np.zeros((SIZE, SIZE), dtype=np.int8)

    @classmethod
    def from_rows(cls, rows: Iterable[str]) -> "Board":
        """
        Build a board from row strings, e.g. ["XO_", "_X_", "__O"].

        Raises:
            ValueError if the shape or a symbol is wrong.
        """
        rows = list(rows)
        if len(rows) != SIZE or any(len(r) != SIZE for r in rows):
            raise ValueError(f"Board needs {SIZE} rows of {SIZE} cells")
        board = cls()
        for r, line in enumerate(rows):
            for c, ch in enumerate(line):
                board._grid[r, c] = Cell.from_symbol(ch).value
        return board

    @property
    def size(self) -> int:
        return self._size

    def copy(self) -> "Board":
        """Create a deep copy of the board."""
        new_board = Board()
        new_board._grid = np.copy(self._grid)
        return new_board

    def snapshot(self) -> np.ndarray:
        """Return a copy of the raw grid (for bit-for-bit comparisons)."""
        return self._grid.copy()

    def clear(self) -> None:
        """Reset board to empty."""
        self._grid.fill(Cell.EMPTY.value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return bool(np.array_equal(self._grid, other._grid))

    # ---------- Cell queries ----------

    def is_cell_valid(self, row: int, col: int) -> bool:
        return 0 <= row < self._size and 0 <= col < self._size

    def is_cell_empty(self, row: int, col: int) -> bool:
        # Caller must validate coordinates first (see is_cell_free).
        return bool(self._grid[row, col] == Cell.EMPTY.value)

    def is_cell_free(self, row: int, col: int) -> bool:
        return self.is_cell_valid(row, col) and self.is_cell_empty(row, col)

    def get(self, row: int, col: int) -> Cell:
        if not self.is_cell_valid(row, col):
            raise ValueError(f"Out of bounds: ({row}, {col}) for size={self._size}")
        return Cell(int(self._grid[row, col]))

    # ---------- Mutation ----------

    def make_move(self, move: "Move", mark: Cell) -> None:
        """
        Write `mark` into the move's cell. Cell.EMPTY undoes a move.

        No legality check: callers validate with is_cell_free first.
        """
        self._grid[move.row, move.col] = mark.value

    # ---------- Terminal checks ----------

    def is_win(self, mark: Cell) -> bool:
        """True if any row, column or diagonal is all `mark`."""
        cells = self._grid.ravel().tolist()
        v = mark.value
        for a, b, c in WIN_LINES:
            if cells[a] == v and cells[b] == v and cells[c] == v:
                return True
        return False

    def is_draw(self) -> bool:
        """
        True if no empty cell remains.
        Only meaningful after is_win has been checked for both marks.
        """
        return Cell.EMPTY.value not in self._grid.ravel().tolist()

    def winner(self) -> Optional[Cell]:
        for mark in SYMBOLS:
            if self.is_win(mark):
                return mark
        return None

    def is_terminal(self) -> bool:
        return self.winner() is not None or self.is_draw()

    # ---------- Iteration / helpers ----------

    def empty_cells(self) -> List[Tuple[int, int]]:
        """All empty cells as (row, col), in row-major order."""
        cells = self._grid.ravel().tolist()
        empty = Cell.EMPTY.value
        return [divmod(i, self._size) for i, v in enumerate(cells) if v == empty]

    def count(self, mark: Cell) -> int:
        return int(np.count_nonzero(self._grid == mark.value))

    # ---------- Rendering ----------

    def to_cli(self) -> str:
        """
        Render the board with 1-based headers:

              1 2 3
            1 X _ O
        """
        lines: List[str] = []
        lines.append("  " + " ".join(str(i) for i in range(1, self._size + 1)))
        for r in range(self._size):
            row = [Cell(int(v)).symbol() for v in self._grid[r]]
            lines.append(f"{r + 1} " + " ".join(row))
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.to_cli()
