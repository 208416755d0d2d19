
"""Active piece: spawn search, translation, rotation with kicks, locking"""
import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import List, Optional, Tuple

from tetris_board import Board
from tetris_piece import Color, Piece

log = logging.getLogger(__name__)

Pos = Tuple[int, int]


class Rotation(IntEnum):
    CW = 1
    CCW = -1


# Horizontal displacements tried, in order, when a rotation is blocked
KICKS = (-1, 1, -2, 2)


def spawn_shifts(cols: int) -> List[int]:
    """Center column first, then alternating outward: 5, 6, 4, 7, ... for 10."""
    center = cols // 2
    shifts = []
    for k in range(cols):
        s = center + (k + 1) // 2 if k % 2 else center - k // 2
        if 1 <= s <= cols:
            shifts.append(s)
    return shifts


@dataclass
class ActivePiece:
    piece: Piece
    cells: List[Pos]
    pivot: Optional[int]

    @property
    def color(self) -> Color:
        return self.piece.color


class PieceController:
    """Moves the falling piece around a Board.

    The active cells are written on the board in the piece's color for as
    long as the piece is live; every mutation lifts them, tests, and writes
    back either the old or the new positions.
    """

    def __init__(self, board: Board):
        self.board = board
        self.active: Optional[ActivePiece] = None
        self.shifts = spawn_shifts(board.cols)

    # ---------- spawning ----------
    def can_spawn(self, piece: Piece, shift: int) -> bool:
        if piece.is_none:
            return True
        return all(self.board.is_empty(c + shift, r) for c, r in piece.cells())

    def can_place(self, piece: Piece) -> bool:
        return any(self.can_spawn(piece, s) for s in self.shifts)

    def spawn(self, piece: Piece) -> bool:
        if piece.is_none:
            raise RuntimeError("cannot spawn the empty placeholder piece")
        for shift in self.shifts:
            if self.can_spawn(piece, shift):
                cells = [(c + shift, r) for c, r in piece.cells()]
                self.active = ActivePiece(piece, cells, piece.pivot)
                self._write(cells)
                return True
        return False

    # ---------- board bookkeeping ----------
    def _write(self, cells: List[Pos]):
        for c, r in cells:
            self.board.set(c, r, self.active.color)

    def _lift(self):
        for c, r in self.active.cells:
            self.board.set(c, r, None)

    def _fits(self, cells: List[Pos]) -> bool:
        # only valid while the active cells are lifted
        return all(self.board.is_empty(c, r) for c, r in cells)

    def _check(self, cells: List[Pos]) -> bool:
        self._lift()
        ok = self._fits(cells)
        self._write(self.active.cells)
        return ok

    def _commit(self, cells: List[Pos]) -> bool:
        self._lift()
        ok = self._fits(cells)
        if ok:
            self.active.cells = cells
        self._write(self.active.cells)
        return ok

    # ---------- translation ----------
    def _shifted(self, dh: int, dv: int) -> List[Pos]:
        return [(c + dh, r + dv) for c, r in self.active.cells]

    def can_move(self, dh: int, dv: int) -> bool:
        if self.active is None:
            return False
        return self._check(self._shifted(dh, dv))

    def move(self, dh: int, dv: int) -> bool:
        if self.active is None:
            return False
        return self._commit(self._shifted(dh, dv))

    def hard_drop(self) -> int:
        rows = 0
        while self.move(0, 1):
            rows += 1
        return rows

    def slide(self, dh: int) -> int:
        cols = 0
        while self.move(dh, 0):
            cols += 1
        return cols

    def ghost_cells(self) -> List[Pos]:
        if self.active is None:
            return []
        self._lift()
        dv = 0
        while self._fits([(c, r + dv + 1) for c, r in self.active.cells]):
            dv += 1
        self._write(self.active.cells)
        return [(c, r + dv) for c, r in self.active.cells]

    # ---------- rotation ----------
    def _rotated(self, direction: int) -> List[Pos]:
        pc, pr = self.active.cells[self.active.pivot]
        return [(pc - (r - pr) * direction, pr + (c - pc) * direction)
                for c, r in self.active.cells]

    def _rotatable(self) -> bool:
        return self.active is not None and self.active.pivot is not None

    def can_rotate(self, direction: int) -> bool:
        if not self._rotatable():
            return False
        return self._check(self._rotated(direction))

    def rotate(self, direction: int) -> bool:
        """Rotate, falling back on horizontal kicks and then a one-row drop."""
        if not self._rotatable():
            return False
        if self._commit(self._rotated(direction)):
            return True
        for dh in KICKS:
            if not self.move(dh, 0):
                continue
            if self._commit(self._rotated(direction)):
                log.debug("rotation kicked by %+d", dh)
                return True
            self.move(-dh, 0)
        # the drop is kept even when the rotation still fails
        if self.move(0, 1):
            if self._commit(self._rotated(direction)):
                log.debug("rotation kicked one row down")
                return True
        return False

    # ---------- end of life ----------
    def lock(self) -> List[Pos]:
        if self.active is None:
            raise RuntimeError("no active piece to lock")
        cells = self.active.cells
        self.active = None
        return cells

    def remove(self) -> Optional[Piece]:
        if self.active is None:
            return None
        self._lift()
        piece = self.active.piece
        self.active = None
        return piece

    def restore(self, active: ActivePiece):
        self.active = active
        self._write(active.cells)
