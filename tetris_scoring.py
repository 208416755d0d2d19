
"""Line clearing, scoring and level progression"""
from dataclasses import dataclass
from tetris_board import Board

LINES_PER_LEVEL = 10
SCORE_TABLE = {1: 40, 2: 100, 3: 300, 4: 1200}   # multiplied by the current level


def clear_full_rows(board: Board) -> int:
    """Delete full rows one at a time, rescanning after every compaction."""
    cleared = 0
    while True:
        full = board.full_rows()
        if not full:
            return cleared
        row = full[0]
        board.clear_row(row)
        board.compact_from(row)
        cleared += 1


def line_score(cleared: int, level: int) -> int:
    if cleared <= 0:
        return 0
    return SCORE_TABLE[min(cleared, 4)] * level


def level_for(lines: int) -> int:
    return lines // LINES_PER_LEVEL + 1


@dataclass
class ScoreKeeper:
    score: int = 0
    lines: int = 0
    level: int = 1

    def award(self, cleared: int) -> int:
        points = line_score(cleared, self.level)
        self.score += points
        self.lines += max(cleared, 0)
        self.level = level_for(self.lines)
        return points
