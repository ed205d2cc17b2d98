"""
Rules engine for the falling-block game.

The engine owns the grid, the active/next piece pair, gravity timing, the
line-clear animation state machine and score bookkeeping. It knows nothing
about pixels or keyboards: a driver calls update() once per frame with a
monotonic timestamp, an input collaborator calls the command methods (or
dispatch() with a Command), and a renderer reads snapshot().

Lifecycle:

  Paused (initial) --start/toggle--> Playing <--toggle--> Paused
  Playing --spawn collides--> GameOver --reset--> Playing

Line clears run in two phases. Locking a piece that completes rows flags
them (clearing_rows) and arms a one-shot timer; while it is pending, gravity
and movement are suspended. When the timer fires the rows are removed,
scored, and the next piece is spawned. With nothing to clear the second
phase runs immediately.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Tuple

from tetris_board import (Grid, detect_full_rows, is_valid_placement, merge,
                          new_grid, remove_rows)
from tetris_config import CONFIG
from tetris_piece import Piece, Shape, generate_piece, rotate_cw
from tetris_rng import UniformRandom
from tetris_scoring import ScoreState, drop_interval_ms
from tetris_timer import OneShotTimer

logger = logging.getLogger(__name__)


class Command(Enum):
    MOVE_LEFT = auto()
    MOVE_RIGHT = auto()
    SOFT_DROP = auto()
    ROTATE = auto()
    HARD_DROP = auto()
    TOGGLE_PAUSE = auto()
    START = auto()
    RESET = auto()


@dataclass(frozen=True)
class PieceView:
    type: int
    shape: Tuple[Tuple[int, ...], ...]
    x: int
    y: int

    @staticmethod
    def of(p: Optional[Piece]) -> Optional["PieceView"]:
        if p is None:
            return None
        return PieceView(p.type, tuple(tuple(r) for r in p.shape), p.x, p.y)


@dataclass(frozen=True)
class Snapshot:
    """Read-only state handed to the renderer each frame."""
    grid: Tuple[Tuple[int, ...], ...]
    active: Optional[PieceView]
    next: Optional[PieceView]
    clearing_rows: Tuple[int, ...]
    clear_elapsed_ms: float
    score: int
    level: int
    lines: int
    drop_interval_ms: int
    is_paused: bool
    is_game_over: bool

    @property
    def is_clearing(self) -> bool:
        return bool(self.clearing_rows)


class TetrisEngine:
    def __init__(self, rng=None, config=CONFIG):
        self.config = config
        self.rng = rng if rng is not None else UniformRandom(config["SEED"])
        self.rows = config["ROWS"]
        self.cols = config["COLS"]
        self._last_time: Optional[float] = None
        self._init_state()
        self.is_paused = True

    def _init_state(self) -> None:
        self.grid: Grid = new_grid(self.rows, self.cols)
        self.active: Optional[Piece] = self._generate()
        self.next: Piece = self._generate()
        self.scores = ScoreState()
        self.drop_interval = drop_interval_ms(1, self.config)
        self.drop_counter = 0.0
        self.clearing_rows: Tuple[int, ...] = ()
        self.clear_elapsed_ms = 0.0
        self._clear_timer: Optional[OneShotTimer] = None
        self.is_game_over = False

    def _generate(self) -> Piece:
        return generate_piece(self.rng, self.cols)

    # ---------- read-only state ----------
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
    def is_playing(self) -> bool:
        return not self.is_paused and not self.is_game_over

    @property
    def is_clearing(self) -> bool:
        return bool(self.clearing_rows)

    @property
    def clear_pending(self) -> bool:
        return self._clear_timer is not None and self._clear_timer.pending

    def snapshot(self) -> Snapshot:
        return Snapshot(
            grid=tuple(tuple(r) for r in self.grid),
            active=PieceView.of(self.active),
            next=PieceView.of(self.next),
            clearing_rows=self.clearing_rows,
            clear_elapsed_ms=self.clear_elapsed_ms,
            score=self.score,
            level=self.level,
            lines=self.lines,
            drop_interval_ms=self.drop_interval,
            is_paused=self.is_paused,
            is_game_over=self.is_game_over,
        )

    # ---------- validation & movement ----------
    def is_valid_placement(self, shape: Shape, x: int, y: int) -> bool:
        return is_valid_placement(self.grid, shape, x, y)

    def try_move(self, dx: int, dy: int) -> bool:
        p = self.active
        if p is None or not self.is_valid_placement(p.shape, p.x + dx, p.y + dy):
            return False
        p.x += dx
        p.y += dy
        return True

    def try_rotate(self) -> bool:
        p = self.active
        if p is None:
            return False
        rotated = rotate_cw(p.shape)
        # No wall kicks: a rotation that does not fit in place is discarded.
        if not self.is_valid_placement(rotated, p.x, p.y):
            return False
        p.shape = rotated
        return True

    # ---------- player commands ----------
    def _accepts_movement(self) -> bool:
        return self.is_playing and not self.is_clearing and self.active is not None

    def move_left(self) -> bool:
        return self._accepts_movement() and self.try_move(-1, 0)

    def move_right(self) -> bool:
        return self._accepts_movement() and self.try_move(1, 0)

    def soft_drop(self) -> bool:
        if not self._accepts_movement() or not self.try_move(0, 1):
            return False
        self.scores.add_drop(self.config["SOFT_DROP_POINTS"])
        return True

    def rotate(self) -> bool:
        return self._accepts_movement() and self.try_rotate()

    def hard_drop(self) -> bool:
        if not self._accepts_movement():
            return False
        distance = 0
        while self.try_move(0, 1):
            distance += 1
        self.scores.add_drop(distance * self.config["HARD_DROP_POINTS_PER_ROW"])
        logger.debug("hard drop %d rows", distance)
        self.lock()
        return True

    def toggle_pause(self) -> bool:
        if self.is_game_over:
            return False
        self.is_paused = not self.is_paused
        logger.info("paused" if self.is_paused else "resumed")
        return True

    def start(self) -> bool:
        if self.is_game_over:
            self.reset()
            return True
        if not self.is_paused:
            return False
        self.is_paused = False
        logger.info("started")
        return True

    def reset(self) -> bool:
        if self._clear_timer is not None:
            self._clear_timer.cancel()
        self._init_state()
        self.is_paused = False
        logger.info("reset")
        return True

    def dispatch(self, command: Command) -> bool:
        handlers = {
            Command.MOVE_LEFT: self.move_left,
            Command.MOVE_RIGHT: self.move_right,
            Command.SOFT_DROP: self.soft_drop,
            Command.ROTATE: self.rotate,
            Command.HARD_DROP: self.hard_drop,
            Command.TOGGLE_PAUSE: self.toggle_pause,
            Command.START: self.start,
            Command.RESET: self.reset,
        }
        if command not in handlers:
            raise ValueError(f"unknown command: {command!r}")
        return handlers[command]()

    # ---------- placement & clearing ----------
    def lock(self) -> None:
        """Merge the active piece and begin the clear sequence."""
        assert not self.is_clearing, "lock while a clear is pending"
        merge(self.grid, self.active)
        self.active = None
        self.drop_counter = 0.0
        self.detect_and_clear()

    def detect_full_rows(self):
        return detect_full_rows(self.grid)

    def detect_and_clear(self) -> None:
        full = self.detect_full_rows()
        if not full:
            self._commit_clear()
            return
        self.clearing_rows = tuple(full)
        self.clear_elapsed_ms = 0.0
        self._clear_timer = OneShotTimer(self.config["CLEAR_ANIMATION_MS"], self._commit_clear)
        logger.debug("flagged rows %s", self.clearing_rows)

    def _commit_clear(self) -> None:
        rows = self.clearing_rows
        if rows:
            remove_rows(self.grid, rows)
            old_level = self.level
            points = self.scores.apply_clear(len(rows), self.config)
            self.drop_interval = drop_interval_ms(self.level, self.config)
            logger.info("cleared %d rows for %d points", len(rows), points)
            if self.level != old_level:
                logger.info("level %d, drop interval %d ms", self.level, self.drop_interval)
        self.clearing_rows = ()
        self.clear_elapsed_ms = 0.0
        self._clear_timer = None
        self._spawn_next()

    def _spawn_next(self) -> None:
        self.active = self.next
        self.next = self._generate()
        if not self.is_valid_placement(self.active.shape, self.active.x, self.active.y):
            self.is_game_over = True
            logger.info("game over, score %d", self.score)

    # ---------- tick ----------
    def update(self, current_time_ms: float) -> None:
        """Advance clocks to current_time_ms and apply gravity if due."""
        if self._last_time is None:
            dt = 0.0
        else:
            dt = max(0.0, current_time_ms - self._last_time)
        self._last_time = current_time_ms

        if self.is_clearing:
            self.clear_elapsed_ms += dt
            self._clear_timer.advance(dt)
            return

        if not self.is_playing:
            return
        self.drop_counter += dt
        while self.drop_counter >= self.drop_interval and self.is_playing and not self.is_clearing:
            self.drop_counter -= self.drop_interval
            self.gravity_step()

    def gravity_step(self) -> None:
        if not self.try_move(0, 1):
            self.lock()
