
"""Game session: phases, timers, hold slot and the command vocabulary"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union

from tetris_board import Board, Cell, COLS, ROWS
from tetris_config import CONFIG
from tetris_controller import PieceController, Pos, Rotation
from tetris_piece import Color, NO_PIECE, Piece
from tetris_rng import PieceRandom
from tetris_scoring import ScoreKeeper, clear_full_rows

log = logging.getLogger(__name__)


class Phase(Enum):
    IDLE = "idle"
    SPAWNING = "spawning"
    FALLING = "falling"
    LOCKING = "locking"
    CLEARING = "clearing"
    GAME_OVER = "game_over"


class Status(Enum):
    IDLE = "Idle"
    RUNNING = "Running"
    GAME_OVER = "GameOver"


class Command(Enum):
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    MOVE_LEFT_MAX = "move_left_max"
    MOVE_RIGHT_MAX = "move_right_max"
    SOFT_DROP = "soft_drop"
    HARD_DROP = "hard_drop"
    ROTATE_CW = "rotate_cw"
    ROTATE_CCW = "rotate_ccw"
    HOLD = "hold"
    TOGGLE_FAST_SHIFT = "toggle_fast_shift"
    QUIT = "quit"


@dataclass(frozen=True)
class Tick:
    now: int  # milliseconds on a monotonic clock


Event = Union[Command, Tick]


@dataclass(frozen=True)
class Snapshot:
    """Everything the renderer needs after one processed event."""
    grid: Tuple[Tuple[Cell, ...], ...]
    active: Tuple[Pos, ...]
    active_color: Optional[Color]
    ghost: Tuple[Pos, ...]
    next_piece: Piece
    held_piece: Piece
    score: int
    level: int
    lines: int
    status: Status


# Phases that are entered and left within a single event
TRANSIENT = (Phase.SPAWNING, Phase.LOCKING, Phase.CLEARING)


class Session:
    """One game, from the first spawn to game over.

    Transitions run to completion inside `start`, `dispatch` or `tick`, so
    a caller only ever observes IDLE, FALLING or GAME_OVER.
    """

    def __init__(self, rng: Optional[PieceRandom] = None, cols: int = COLS, rows: int = ROWS,
                 lock_delay_ms: Optional[int] = None, speed_unit_ms: Optional[int] = None,
                 max_speed_level: Optional[int] = None):
        self.rng = rng if rng is not None else PieceRandom(CONFIG["SEED"])
        self.cols, self.rows = cols, rows
        self.lock_delay_ms = CONFIG["LOCK_DELAY_MS"] if lock_delay_ms is None else lock_delay_ms
        self.speed_unit_ms = CONFIG["SPEED_UNIT_MS"] if speed_unit_ms is None else speed_unit_ms
        self.max_speed_level = CONFIG["MAX_SPEED_LEVEL"] if max_speed_level is None else max_speed_level
        self._handlers = {
            Command.MOVE_LEFT: lambda: self._shift(-1),
            Command.MOVE_RIGHT: lambda: self._shift(1),
            Command.MOVE_LEFT_MAX: lambda: self.controller.slide(-1),
            Command.MOVE_RIGHT_MAX: lambda: self.controller.slide(1),
            Command.SOFT_DROP: lambda: self.controller.move(0, 1),
            Command.HARD_DROP: self._hard_drop,
            Command.ROTATE_CW: lambda: self.controller.rotate(Rotation.CW),
            Command.ROTATE_CCW: lambda: self.controller.rotate(Rotation.CCW),
            Command.HOLD: self.hold,
            Command.TOGGLE_FAST_SHIFT: self._toggle_fast_shift,
        }
        self.reset()

    def reset(self):
        self.board = Board(self.cols, self.rows)
        self.controller = PieceController(self.board)
        self.scores = ScoreKeeper()
        self.phase = Phase.IDLE
        self.current: Piece = NO_PIECE
        self.next_piece: Piece = NO_PIECE
        self.held: Piece = NO_PIECE
        self.hold_used = False
        self.fast_shift = False
        self.quit_requested = False
        self.now = 0
        self.gravity_deadline = 0.0
        self.grounded_deadline: Optional[float] = None

    # ---------- progress ----------
    @property
    def score(self) -> int:
        return self.scores.score

    @property
    def level(self) -> int:
        return self.scores.level

    @property
    def lines(self) -> int:
        return self.scores.lines

    @property
    def status(self) -> Status:
        if self.phase is Phase.IDLE:
            return Status.IDLE
        if self.phase is Phase.GAME_OVER:
            return Status.GAME_OVER
        return Status.RUNNING

    def gravity_interval(self, level: Optional[int] = None) -> float:
        """Milliseconds between gravity steps; speed stops rising at the cap."""
        level = self.level if level is None else level
        return self.speed_unit_ms / min(max(level, 1), self.max_speed_level)

    # ---------- lifecycle ----------
    def start(self, now: int = 0):
        if self.phase is not Phase.IDLE:
            raise RuntimeError(f"cannot start a session in phase {self.phase.value}")
        self.now = now
        self.next_piece = self.rng.next_piece()
        log.info("game started")
        self._enter(Phase.SPAWNING)

    def dispatch(self, event: Event):
        if isinstance(event, Tick):
            self.tick(event.now)
            return
        if event is Command.QUIT:
            self.quit_requested = True
            return
        if not isinstance(event, Command):
            log.debug("ignoring unknown event %r", event)
            return
        handler = self._handlers[event]
        if self.phase is not Phase.FALLING:
            return
        handler()
        if self.phase is Phase.FALLING:
            self._refresh_grounded()

    def tick(self, now: int):
        self.now = now
        if self.phase is not Phase.FALLING:
            return
        if now >= self.gravity_deadline:
            self.controller.move(0, 1)
            self.gravity_deadline = now + self.gravity_interval()
        self._refresh_grounded()
        if self.grounded_deadline is not None and now >= self.grounded_deadline:
            self._enter(Phase.LOCKING)

    # ---------- state machine ----------
    def _enter(self, phase: Phase):
        self.phase = phase
        while self.phase in TRANSIENT:
            log.debug("phase %s", self.phase.value)
            if self.phase is Phase.SPAWNING:
                self._spawn()
            elif self.phase is Phase.LOCKING:
                self._lock()
            else:
                self._clear()

    def _spawn(self):
        piece = self.next_piece
        if not self.controller.spawn(piece):
            self.phase = Phase.GAME_OVER
            log.info("game over: score %d, level %d, lines %d", self.score, self.level, self.lines)
            return
        self.current = piece
        self.next_piece = self.rng.next_piece(piece)
        self._arm_gravity()
        self.phase = Phase.FALLING
        self._refresh_grounded()

    def _lock(self):
        self.controller.lock()
        self.hold_used = False
        self.phase = Phase.CLEARING

    def _clear(self):
        cleared = clear_full_rows(self.board)
        if cleared:
            points = self.scores.award(cleared)
            log.debug("cleared %d rows for %d points", cleared, points)
        self.phase = Phase.SPAWNING

    def _arm_gravity(self):
        self.gravity_deadline = self.now + self.gravity_interval()
        self.grounded_deadline = None

    def _refresh_grounded(self):
        if self.controller.can_move(0, 1):
            self.grounded_deadline = None
        elif self.grounded_deadline is None:
            self.grounded_deadline = self.now + self.lock_delay_ms

    # ---------- commands ----------
    def _shift(self, dh: int):
        if self.fast_shift:
            self.fast_shift = False
            self.controller.slide(dh)
        else:
            self.controller.move(dh, 0)

    def _toggle_fast_shift(self):
        self.fast_shift = not self.fast_shift

    def _hard_drop(self):
        self.controller.hard_drop()
        self._enter(Phase.LOCKING)

    def hold(self) -> bool:
        """Bank the falling piece, at most once per spawned piece."""
        if self.phase is not Phase.FALLING or self.hold_used:
            return False
        candidate = self.next_piece if self.held.is_none else self.held
        active = self.controller.active
        self.controller.remove()
        if not self.controller.can_place(candidate):
            self.controller.restore(active)
            log.debug("hold refused: %s cannot be placed", candidate.shape)
            return False
        if self.held.is_none:
            self.held = self.current
            self.current = self.next_piece
            self.next_piece = self.rng.next_piece(self.current)
        else:
            self.held, self.current = self.current, self.held
        self.controller.spawn(self.current)
        self.hold_used = True
        self._arm_gravity()
        return True

    # ---------- rendering sink ----------
    def snapshot(self) -> Snapshot:
        active = self.controller.active if self.phase is Phase.FALLING else None
        return Snapshot(
            grid=tuple(tuple(row) for row in self.board.grid()),
            active=tuple(active.cells) if active else (),
            active_color=active.color if active else None,
            ghost=tuple(self.controller.ghost_cells()) if active else (),
            next_piece=self.next_piece,
            held_piece=self.held,
            score=self.score,
            level=self.level,
            lines=self.lines,
            status=self.status,
        )
