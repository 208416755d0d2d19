import unittest

from tetris_piece import Color, NO_PIECE, Piece, Shape, next_color
from tetris_session import Command, Phase, Session, Status, Tick


class ScriptedRandom:
    """Hands out the given shapes in order, cycling colors like PieceRandom."""
    def __init__(self, *shapes):
        self.shapes = list(shapes)

    def next_piece(self, prev=None):
        shape = self.shapes.pop(0) if self.shapes else Shape.O
        color = Color.RED if prev is None else next_color(prev.color)
        return Piece(shape, False, color)


def make_session(*shapes):
    return Session(rng=ScriptedRandom(*shapes), lock_delay_ms=500, speed_unit_ms=1000,
                   max_speed_level=20)


class LifecycleTests(unittest.TestCase):
    def test_idle_until_started(self):
        s = make_session(Shape.I, Shape.T)
        self.assertIs(s.status, Status.IDLE)
        s.dispatch(Command.MOVE_LEFT)
        s.dispatch(Tick(5000))
        self.assertIs(s.phase, Phase.IDLE)
        self.assertEqual(s.board.occupied_count(), 0)

    def test_start_spawns_and_prerolls_next(self):
        s = make_session(Shape.I, Shape.T)
        s.start(0)
        self.assertIs(s.phase, Phase.FALLING)
        self.assertIs(s.status, Status.RUNNING)
        self.assertEqual(s.current, Piece(Shape.I, False, Color.RED))
        self.assertEqual(s.next_piece, Piece(Shape.T, False, Color.CYAN))
        self.assertEqual(s.controller.active.cells, [(5, 1), (5, 2), (5, 3), (5, 4)])
        self.assertEqual((s.score, s.level, s.lines), (0, 1, 0))

    def test_start_twice_is_a_contract_violation(self):
        s = make_session(Shape.I)
        s.start(0)
        with self.assertRaises(RuntimeError):
            s.start(0)

    def test_reset_returns_to_idle(self):
        s = make_session(Shape.I, Shape.T)
        s.start(0)
        s.dispatch(Command.HARD_DROP)
        s.reset()
        self.assertIs(s.status, Status.IDLE)
        self.assertEqual(s.board.occupied_count(), 0)
        self.assertEqual(s.held, NO_PIECE)

    def test_quit_and_unknown_events(self):
        s = make_session(Shape.I)
        s.start(0)
        s.dispatch("jump")
        s.dispatch(None)
        self.assertIs(s.phase, Phase.FALLING)
        self.assertFalse(s.quit_requested)
        s.dispatch(Command.QUIT)
        self.assertTrue(s.quit_requested)


class TimerTests(unittest.TestCase):
    def test_gravity_interval_is_capped(self):
        s = make_session()
        self.assertEqual(s.gravity_interval(1), 1000)
        self.assertEqual(s.gravity_interval(4), 250)
        self.assertEqual(s.gravity_interval(20), 50)
        self.assertEqual(s.gravity_interval(35), 50)

    def test_gravity_tick_moves_piece_down(self):
        s = make_session(Shape.I, Shape.T)
        s.start(0)
        s.dispatch(Tick(999))
        self.assertEqual(s.controller.active.cells[0], (5, 1))
        s.dispatch(Tick(1000))
        self.assertEqual(s.controller.active.cells[0], (5, 2))
        s.dispatch(Tick(1500))
        self.assertEqual(s.controller.active.cells[0], (5, 2))
        s.dispatch(Tick(2000))
        self.assertEqual(s.controller.active.cells[0], (5, 3))

    def test_lock_delay_before_locking(self):
        s = make_session(Shape.I, Shape.T, Shape.L)
        s.start(0)
        for _ in range(14):
            s.dispatch(Command.SOFT_DROP)
        self.assertEqual(s.controller.active.cells[-1], (5, 18))
        self.assertEqual(s.grounded_deadline, 500)
        s.dispatch(Tick(499))
        self.assertEqual(s.current.shape, Shape.I)
        s.dispatch(Tick(500))
        self.assertEqual(s.current.shape, Shape.T)
        self.assertEqual(s.next_piece.shape, Shape.L)
        for r in range(15, 19):
            self.assertEqual(s.board.get(5, r), Color.RED)
        self.assertEqual(s.board.occupied_count(), 8)

    def test_sliding_while_grounded_keeps_the_deadline(self):
        s = make_session(Shape.T, Shape.I)
        s.start(0)
        for _ in range(20):
            s.dispatch(Command.SOFT_DROP)
        self.assertEqual(s.grounded_deadline, 500)
        s.dispatch(Tick(300))
        s.dispatch(Command.MOVE_LEFT)
        self.assertEqual(s.grounded_deadline, 500)
        s.dispatch(Tick(499))
        self.assertEqual(s.current.shape, Shape.T)
        s.dispatch(Tick(500))
        self.assertEqual(s.current.shape, Shape.I)
        self.assertEqual(s.board.occupied_count(), 8)

    def test_leaving_the_ledge_cancels_lock_delay(self):
        s = make_session(Shape.I, Shape.T)
        s.board.set(5, 5, Color.GREEN)
        s.start(0)
        self.assertEqual(s.grounded_deadline, 500)
        s.dispatch(Command.MOVE_RIGHT)
        self.assertIsNone(s.grounded_deadline)
        s.dispatch(Tick(600))
        self.assertEqual(s.current.shape, Shape.I)


class CommandTests(unittest.TestCase):
    def setUp(self):
        self.s = make_session(Shape.I, Shape.T, Shape.L, Shape.S)
        self.s.start(0)

    def columns(self):
        return {c for c, r in self.s.controller.active.cells}

    def test_moves(self):
        self.s.dispatch(Command.MOVE_LEFT)
        self.assertEqual(self.columns(), {4})
        self.s.dispatch(Command.MOVE_RIGHT_MAX)
        self.assertEqual(self.columns(), {10})
        self.s.dispatch(Command.MOVE_LEFT_MAX)
        self.assertEqual(self.columns(), {1})

    def test_fast_shift_is_one_shot(self):
        self.s.dispatch(Command.TOGGLE_FAST_SHIFT)
        self.s.dispatch(Command.MOVE_RIGHT)
        self.assertEqual(self.columns(), {10})
        self.assertFalse(self.s.fast_shift)
        self.s.dispatch(Command.MOVE_LEFT)
        self.assertEqual(self.columns(), {9})

    def test_rotate_commands(self):
        for _ in range(5):
            self.s.dispatch(Command.SOFT_DROP)
        self.s.dispatch(Command.ROTATE_CW)
        self.assertEqual(len({r for c, r in self.s.controller.active.cells}), 1)
        self.s.dispatch(Command.ROTATE_CCW)
        self.assertEqual(self.columns(), {5})

    def test_hard_drop_locks_immediately(self):
        self.s.dispatch(Command.HARD_DROP)
        self.assertIs(self.s.phase, Phase.FALLING)
        self.assertEqual(self.s.current.shape, Shape.T)
        self.assertEqual(self.s.board.get(5, 18), Color.RED)
        self.assertEqual(self.s.board.occupied_count(), 8)


class HoldTests(unittest.TestCase):
    def test_hold_then_second_hold_is_noop(self):
        s = make_session(Shape.I, Shape.T, Shape.L, Shape.S)
        s.start(0)
        first, second = s.current, s.next_piece
        self.assertTrue(s.hold())
        self.assertEqual(s.held, first)
        self.assertEqual(s.current, second)
        self.assertEqual(s.next_piece.shape, Shape.L)
        self.assertEqual(s.controller.active.piece, second)
        self.assertEqual(s.board.occupied_count(), 4)
        cells = list(s.controller.active.cells)
        s.dispatch(Command.HOLD)
        self.assertEqual(s.controller.active.cells, cells)
        self.assertEqual(s.held, first)

    def test_hold_swaps_after_lock(self):
        s = make_session(Shape.I, Shape.T, Shape.L, Shape.S)
        s.start(0)
        held = s.current
        s.dispatch(Command.HOLD)
        s.dispatch(Command.HARD_DROP)
        self.assertFalse(s.hold_used)
        self.assertEqual(s.current.shape, Shape.L)
        s.dispatch(Command.HOLD)
        self.assertEqual(s.current, held)
        self.assertEqual(s.held.shape, Shape.L)
        self.assertEqual(s.controller.active.color, held.color)

    def test_hold_refused_when_candidate_cannot_be_placed(self):
        s = make_session(Shape.I, Shape.O)
        for c in range(1, 11):
            if c != 5:
                s.board.set(c, 1, Color.GREEN)
        s.start(0)
        cells = list(s.controller.active.cells)
        self.assertFalse(s.hold())
        self.assertFalse(s.hold_used)
        self.assertEqual(s.held, NO_PIECE)
        self.assertEqual(s.controller.active.cells, cells)
        self.assertEqual(s.board.occupied_count(), 13)


class ScoringThroughSessionTests(unittest.TestCase):
    def test_four_row_clear(self):
        s = make_session(Shape.I, Shape.T)
        for r in range(15, 19):
            for c in range(1, 11):
                if c != 5:
                    s.board.set(c, r, Color.GREEN)
        s.start(0)
        s.dispatch(Command.HARD_DROP)
        self.assertEqual(s.lines, 4)
        self.assertEqual(s.score, 1200)
        self.assertEqual(s.level, 1)
        # only the freshly spawned piece remains
        self.assertEqual(s.board.occupied_count(), 4)

    def test_score_is_monotonic_until_game_over(self):
        s = Session(lock_delay_ms=500)
        s.start(0)
        last = 0
        for _ in range(400):
            if s.phase is Phase.GAME_OVER:
                break
            s.dispatch(Command.HARD_DROP)
            self.assertGreaterEqual(s.score, last)
            last = s.score
            if s.phase is Phase.FALLING:
                self.assertEqual(len(s.controller.active.cells), 4)


class GameOverTests(unittest.TestCase):
    def test_blocked_spawn_is_game_over(self):
        s = make_session(Shape.I, Shape.T)
        for c in range(1, 11):
            if c != 1:
                s.board.set(c, 1, Color.GREEN)
            if c != 10:
                s.board.set(c, 2, Color.GREEN)
        s.start(0)
        self.assertIs(s.phase, Phase.GAME_OVER)
        self.assertIs(s.status, Status.GAME_OVER)
        s.dispatch(Command.HARD_DROP)
        s.dispatch(Tick(10000))
        self.assertIs(s.phase, Phase.GAME_OVER)
        snap = s.snapshot()
        self.assertEqual(snap.active, ())
        self.assertIs(snap.status, Status.GAME_OVER)

    def test_stack_reaching_the_top(self):
        s = make_session(*([Shape.O] * 50))
        # a solid first column keeps column 2 out of reach, so no row ever fills
        for r in range(1, 19):
            s.board.set(1, r, Color.GREEN)
        s.start(0)
        drops = 0
        while s.phase is Phase.FALLING and drops < 50:
            s.dispatch(Command.HARD_DROP)
            drops += 1
        self.assertIs(s.phase, Phase.GAME_OVER)
        self.assertEqual(drops, 36)
        self.assertEqual(s.lines, 0)


class SnapshotTests(unittest.TestCase):
    def test_snapshot_contents(self):
        s = make_session(Shape.I, Shape.T)
        snap = s.snapshot()
        self.assertIs(snap.status, Status.IDLE)
        self.assertEqual(snap.next_piece, NO_PIECE)
        s.start(0)
        snap = s.snapshot()
        self.assertEqual(len(snap.grid), 18)
        self.assertEqual(len(snap.grid[0]), 10)
        self.assertEqual(snap.active, ((5, 1), (5, 2), (5, 3), (5, 4)))
        self.assertEqual(snap.active_color, Color.RED)
        self.assertEqual(snap.ghost, ((5, 15), (5, 16), (5, 17), (5, 18)))
        self.assertEqual(snap.next_piece.shape, Shape.T)
        self.assertEqual(snap.held_piece, NO_PIECE)
        self.assertEqual(snap.grid[0][4], Color.RED)
        self.assertEqual((snap.score, snap.level, snap.lines), (0, 1, 0))


if __name__ == "__main__":
    unittest.main()
