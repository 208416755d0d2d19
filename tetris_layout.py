
"""Pixel geometry of the window, derived from the board size and CELL_SIZE"""
from dataclasses import dataclass
from typing import Optional, Tuple
from tetris_config import CONFIG

MARGIN = 16
PANEL_W = 220
PREVIEW_SCALE = 0.6

@dataclass(frozen=True)
class Dims:
    cols: int
    rows: int
    cell: int
    preview_cell: int

    @property
    def board_x(self) -> int: return MARGIN
    @property
    def board_y(self) -> int: return MARGIN
    @property
    def board_w(self) -> int: return self.cols * self.cell
    @property
    def board_h(self) -> int: return self.rows * self.cell
    @property
    def panel_x(self) -> int: return self.board_x + self.board_w + MARGIN
    @property
    def panel_y(self) -> int: return MARGIN
    @property
    def panel_w(self) -> int: return PANEL_W
    @property
    def total_w(self) -> int: return self.panel_x + PANEL_W + MARGIN
    @property
    def total_h(self) -> int: return self.board_h + 2 * MARGIN

    def cell_topleft(self, col: int, row: int, inset: int = 1) -> Tuple[int, int]:
        # board coordinates are 1-based
        return (self.board_x + (col - 1) * self.cell + inset,
                self.board_y + (row - 1) * self.cell + inset)

def compute_dims(cols: int, rows: int, cell: Optional[int] = None) -> Dims:
    """Size the board for a `cols` x `rows` session; cell defaults to CONFIG."""
    cell = int(CONFIG["CELL_SIZE"] if cell is None else cell)
    return Dims(cols=cols, rows=rows, cell=cell,
                preview_cell=max(12, int(cell * PREVIEW_SCALE)))
