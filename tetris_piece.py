
"""Piece catalog: shapes, spawn offsets, rotation pivots, colors"""
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Dict, Optional, Tuple

Offsets = Tuple[Tuple[int, int], ...]


class Shape(Enum):
    I = 1
    S = 2
    O = 3
    T = 4
    L = 5


class Color(IntEnum):
    """Occupancy tag of a board cell. An empty cell is None."""
    RED = 1
    CYAN = 2
    YELLOW = 3
    GREEN = 4


def next_color(color: Color) -> Color:
    return Color.RED if color >= Color.GREEN else Color(color + 1)


# (column offset, row offset) per block; the inverted set is its own drawing,
# not a rotation of the normal one.
SPAWN_OFFSETS: Dict[Shape, Offsets] = {
    Shape.I: ((0, 1), (0, 2), (0, 3), (0, 4)),
    Shape.S: ((-1, 1), (0, 1), (0, 2), (1, 2)),
    Shape.O: ((0, 1), (0, 2), (1, 1), (1, 2)),
    Shape.T: ((-1, 1), (0, 1), (1, 1), (0, 2)),
    Shape.L: ((0, 1), (0, 2), (0, 3), (1, 3)),
}
INVERTED_OFFSETS: Dict[Shape, Offsets] = {
    Shape.I: SPAWN_OFFSETS[Shape.I],
    Shape.S: ((-1, 2), (0, 1), (0, 2), (1, 1)),
    Shape.O: SPAWN_OFFSETS[Shape.O],
    Shape.T: ((-1, 2), (0, 1), (1, 2), (0, 2)),
    Shape.L: ((0, 1), (0, 2), (0, 3), (1, 1)),
}

# Index of the block the others turn around. O has none and never rotates.
PIVOTS: Dict[Shape, Optional[int]] = {
    Shape.I: 2,
    Shape.S: 2,
    Shape.O: None,
    Shape.T: 1,
    Shape.L: 1,
}


def offsets(shape: Shape, inverted: bool = False) -> Offsets:
    return (INVERTED_OFFSETS if inverted else SPAWN_OFFSETS)[shape]


def pivot_index(shape: Shape) -> Optional[int]:
    return PIVOTS[shape]


@dataclass(frozen=True)
class Piece:
    shape: Optional[Shape]
    inverted: bool = False
    color: Color = Color.RED

    @property
    def is_none(self) -> bool:
        return self.shape is None

    def cells(self) -> Offsets:
        if self.shape is None:
            return ()
        return offsets(self.shape, self.inverted)

    @property
    def pivot(self) -> Optional[int]:
        if self.shape is None:
            return None
        return pivot_index(self.shape)


# Placeholder for an empty hold slot
NO_PIECE = Piece(None)
