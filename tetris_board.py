
"""Board: 1-based occupancy grid with row clearing and compaction"""
from typing import Iterator, List, Optional, Tuple
from tetris_piece import Color

COLS, ROWS = 10, 18

Cell = Optional[Color]


class Board:
    """Grid indexed by (col, row), cols 1..cols and rows 1..rows, row 1 on top.

    Index 0 and cols+1 / rows+1 exist as an empty margin so neighbour
    lookups never wrap; they are never in bounds.
    """

    def __init__(self, cols: int = COLS, rows: int = ROWS):
        self.cols = cols
        self.rows = rows
        self._cells: List[List[Cell]] = [[None] * (cols + 2) for _ in range(rows + 2)]

    def in_bounds(self, col: int, row: int) -> bool:
        return 1 <= col <= self.cols and 1 <= row <= self.rows

    def is_empty(self, col: int, row: int) -> bool:
        return self.in_bounds(col, row) and self._cells[row][col] is None

    def get(self, col: int, row: int) -> Cell:
        if not self.in_bounds(col, row):
            raise IndexError(f"cell ({col}, {row}) is outside the board")
        return self._cells[row][col]

    def set(self, col: int, row: int, color: Cell):
        if not self.in_bounds(col, row):
            raise IndexError(f"cell ({col}, {row}) is outside the board")
        self._cells[row][col] = color

    def clear_row(self, row: int):
        for c in range(1, self.cols + 1):
            self._cells[row][c] = None

    def compact_from(self, row: int):
        """Shift every row above `row` down by one and empty row 1."""
        for r in range(row - 1, 0, -1):
            self._cells[r + 1][1:self.cols + 1] = self._cells[r][1:self.cols + 1]
        self.clear_row(1)

    def is_full(self, row: int) -> bool:
        return all(self._cells[row][c] is not None for c in range(1, self.cols + 1))

    def full_rows(self) -> List[int]:
        return [r for r in range(1, self.rows + 1) if self.is_full(r)]

    def occupied(self) -> Iterator[Tuple[int, int, Color]]:
        for r in range(1, self.rows + 1):
            for c in range(1, self.cols + 1):
                v = self._cells[r][c]
                if v is not None:
                    yield c, r, v

    def occupied_count(self) -> int:
        return sum(1 for _ in self.occupied())

    def grid(self) -> List[List[Cell]]:
        """Row-major copy without the margin, top row first."""
        return [self._cells[r][1:self.cols + 1] for r in range(1, self.rows + 1)]

    def clear(self):
        for r in range(1, self.rows + 1):
            self.clear_row(r)
