
"""Seeded piece randomizer module"""
import time
from typing import Optional
from tetris_piece import Color, Piece, Shape, next_color


class PieceRandom:
    """Rolls shape, orientation and the cycled color of the next piece.

    A 32-bit LCG keeps the sequence identical on every platform for a given
    seed; shapes are uniform over I, S, O, T, L.
    """
    SHAPES = [Shape.I, Shape.S, Shape.O, Shape.T, Shape.L]

    def __init__(self, seed: Optional[int] = None):
        if seed is None:
            seed = int(time.time() * 1000) & 0xFFFFFFFF
        self.state = seed & 0xFFFFFFFF

    def _lcg_next(self) -> int:
        self.state = (self.state * 0x41C64E6D + 0x3039) & 0xFFFFFFFF
        return self.state

    def _rand(self) -> int:
        return (self._lcg_next() >> 16) & 0x7FFF

    def next_piece(self, prev: Optional[Piece] = None) -> Piece:
        shape = self.SHAPES[self._rand() % len(self.SHAPES)]
        inverted = (self._rand() & 1) == 1
        color = Color.RED if prev is None else next_color(prev.color)
        return Piece(shape, inverted, color)
