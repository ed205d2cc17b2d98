import pytest

from tetris_config import CONFIG
from tetris_engine import Command, Snapshot, TetrisEngine
from tetris_piece import I, O, T
from tetris_rng import ScriptedRandom

ROWS, COLS = 20, 10


def fill_row(eng, y, gap=(4, 5)):
    eng.grid[y] = [0 if x in gap else 7 for x in range(COLS)]


def state(eng):
    p = eng.active
    return [r[:] for r in eng.grid], [r[:] for r in p.shape], p.x, p.y, eng.score


# ---------- initial state & lifecycle ----------

def test_initial_state_is_paused(make_engine):
    eng = make_engine(T, O, started=False)
    assert eng.is_paused and not eng.is_game_over
    assert (eng.score, eng.level, eng.lines) == (0, 1, 0)
    assert eng.active.type == T and eng.next.type == O
    assert (eng.active.x, eng.active.y) == (4, 0)
    assert not any(any(r) for r in eng.grid)


def test_paused_rejects_movement_and_gravity(make_engine):
    eng = make_engine(O, started=False)
    assert not eng.move_left()
    assert not eng.hard_drop()
    eng.update(0)
    eng.update(5000)
    assert eng.active.y == 0


def test_start_and_toggle(make_engine):
    eng = make_engine(O, started=False)
    assert eng.start()
    assert eng.is_playing
    assert not eng.start()
    assert eng.toggle_pause() and eng.is_paused
    assert not eng.move_right()
    assert eng.toggle_pause() and eng.is_playing
    assert eng.move_right()


def test_toggle_from_initial_pause_starts(make_engine):
    eng = make_engine(O, started=False)
    assert eng.toggle_pause()
    assert eng.is_playing


# ---------- movement & rotation ----------

def test_moves_stop_at_walls(i_engine):
    eng = i_engine
    assert [eng.move_left() for _ in range(4)] == [True, True, True, False]
    assert eng.active.x == 0
    assert [eng.move_right() for _ in range(7)] == [True] * 6 + [False]
    assert eng.active.x == 6


def test_try_move_blocked_leaves_state(o_engine):
    eng = o_engine
    eng.grid[2][4] = 1
    before = state(eng)
    assert not eng.try_move(0, 1)
    assert state(eng) == before


def test_rotate_on_empty_board(t_engine):
    assert t_engine.rotate()
    assert t_engine.active.shape == [[0,1,0],[0,1,1],[0,1,0]]
    assert (t_engine.active.x, t_engine.active.y) == (4, 0)


def test_blocked_rotation_is_discarded(t_engine):
    eng = t_engine
    eng.grid[2][5] = 3
    before = state(eng)
    assert not eng.rotate()
    assert state(eng) == before


def test_rotation_against_wall_has_no_kick(i_engine):
    eng = i_engine
    assert eng.rotate()
    while eng.move_right():
        pass
    # vertical I sits in the rightmost column; turning back would poke out
    assert eng.active.x == 7
    before = state(eng)
    assert not eng.rotate()
    assert state(eng) == before


def test_o_rotation_is_noop(o_engine):
    before = state(o_engine)
    assert o_engine.rotate()
    assert state(o_engine) == before


def test_soft_drop_scores_one(o_engine):
    assert o_engine.soft_drop()
    assert (o_engine.active.y, o_engine.score) == (1, 1)


def test_soft_drop_at_floor_scores_nothing(o_engine):
    o_engine.active.y = 18
    assert not o_engine.soft_drop()
    assert o_engine.score == 0
    assert o_engine.active.y == 18


# ---------- hard drop & locking ----------

def test_hard_drop_scores_and_locks(make_engine):
    eng = make_engine(O, T, I)
    assert eng.hard_drop()
    assert eng.score == 2 * 18
    assert eng.grid[18][4:6] == [O, O] and eng.grid[19][4:6] == [O, O]
    assert sum(map(bool, sum(eng.grid, []))) == 4
    assert eng.active.type == T and (eng.active.x, eng.active.y) == (4, 0)
    assert eng.next.type == I


def test_hard_drop_from_lower_start(o_engine):
    o_engine.active.y = 10
    o_engine.hard_drop()
    assert o_engine.score == 16


def test_gravity_locks_at_floor(o_engine):
    eng = o_engine
    eng.active.y = 18
    eng.update(0)
    eng.update(1000)
    assert eng.grid[19][4] == O
    assert eng.active.y == 0
    assert eng.score == 0


# ---------- gravity timing ----------

def test_gravity_waits_for_interval(o_engine):
    eng = o_engine
    eng.update(0)
    eng.update(999)
    assert eng.active.y == 0
    eng.update(1000)
    assert eng.active.y == 1


def test_gravity_handles_irregular_ticks(o_engine):
    eng = o_engine
    eng.update(100)
    eng.update(117)
    eng.update(160)
    eng.update(1100)
    assert eng.active.y == 1
    eng.update(3600)
    assert eng.active.y == 3


def test_paused_time_does_not_count(o_engine):
    eng = o_engine
    eng.update(0)
    eng.update(600)
    eng.toggle_pause()
    eng.update(10_000)
    eng.toggle_pause()
    eng.update(10_300)
    assert eng.active.y == 0
    eng.update(10_400)
    assert eng.active.y == 1


# ---------- line clearing ----------

def test_clear_is_deferred_until_animation_ends(o_engine):
    eng = o_engine
    fill_row(eng, 18)
    fill_row(eng, 19)
    eng.update(0)
    eng.hard_drop()
    assert eng.clearing_rows == (18, 19)
    assert eng.clear_pending and eng.active is None
    assert eng.score == 36 and eng.lines == 0

    # movement and hard drop are suspended
    assert not eng.move_left()
    assert not eng.hard_drop()
    assert not eng.rotate()

    eng.update(250)
    assert eng.clear_elapsed_ms == 250
    eng.update(499)
    assert eng.is_clearing
    eng.update(500)
    assert not eng.is_clearing and not eng.clear_pending
    assert eng.score == 36 + 300
    assert eng.lines == 2
    assert not any(any(r) for r in eng.grid)
    assert eng.active.type == O and eng.active.y == 0


def test_gravity_suspended_during_clear(o_engine):
    eng = o_engine
    fill_row(eng, 19)
    eng.grid[18] = [0] * COLS
    eng.update(0)
    eng.hard_drop()
    assert eng.clearing_rows == (19,)
    # the two locked cells above the full row stay put until commit
    assert eng.grid[18][4:6] == [O, O]
    eng.update(400)
    assert eng.active is None
    eng.update(600)
    assert eng.grid[19][4:6] == [O, O]
    assert eng.score == 36 + 100


def test_no_full_rows_spawns_immediately(o_engine):
    o_engine.hard_drop()
    assert not o_engine.is_clearing
    assert o_engine.active is not None


def test_clear_scales_with_level(o_engine):
    eng = o_engine
    eng.scores.level = 3
    fill_row(eng, 19)
    eng.update(0)
    eng.hard_drop()
    eng.update(500)
    assert eng.score == 36 + 3 * 100
    assert eng.level == 3


def test_tenth_line_raises_level_and_speed(o_engine):
    eng = o_engine
    eng.scores.lines = 9
    fill_row(eng, 19)
    eng.update(0)
    eng.hard_drop()
    eng.update(500)
    assert (eng.lines, eng.level) == (10, 2)
    assert eng.drop_interval == 900


def test_pause_during_clear_still_commits(o_engine):
    eng = o_engine
    fill_row(eng, 19)
    eng.update(0)
    eng.hard_drop()
    assert eng.toggle_pause()
    eng.update(500)
    assert not eng.is_clearing
    assert eng.lines == 1
    assert eng.is_paused


# ---------- game over & reset ----------

def make_game_over(eng):
    for _ in range(4):
        eng.move_left()
    eng.grid[1][4] = 7
    eng.hard_drop()


def test_spawn_collision_ends_game(o_engine):
    eng = o_engine
    make_game_over(eng)
    assert eng.is_game_over
    assert not eng.is_playing


def test_game_over_rejects_everything_but_reset(o_engine):
    eng = o_engine
    make_game_over(eng)
    before = state(eng)
    for cmd in (Command.MOVE_LEFT, Command.MOVE_RIGHT, Command.SOFT_DROP,
                Command.ROTATE, Command.HARD_DROP, Command.TOGGLE_PAUSE):
        assert not eng.dispatch(cmd)
    eng.update(0)
    eng.update(5000)
    assert state(eng) == before
    assert eng.is_game_over


def test_reset_after_game_over(make_engine):
    eng = make_engine(O, T)
    eng.soft_drop()
    make_game_over(eng)
    assert eng.is_game_over
    assert eng.reset()
    assert not any(any(r) for r in eng.grid)
    assert (eng.score, eng.level, eng.lines) == (0, 1, 0)
    assert not eng.is_paused and not eng.is_game_over
    assert eng.active is not None and eng.next is not None
    assert eng.drop_interval == 1000


def test_start_after_game_over_resets(o_engine):
    make_game_over(o_engine)
    assert o_engine.start()
    assert o_engine.is_playing and o_engine.score == 0


def test_reset_cancels_pending_clear(o_engine):
    eng = o_engine
    fill_row(eng, 19)
    eng.update(0)
    eng.hard_drop()
    assert eng.clear_pending
    eng.reset()
    assert not eng.clear_pending and not eng.is_clearing
    eng.update(1000)
    assert eng.lines == 0 and eng.score == 0


# ---------- dispatch & snapshot ----------

def test_dispatch_routes_commands(o_engine):
    assert o_engine.dispatch(Command.MOVE_LEFT)
    assert o_engine.active.x == 3
    assert o_engine.dispatch(Command.SOFT_DROP)
    assert o_engine.dispatch(Command.TOGGLE_PAUSE)
    assert o_engine.is_paused


def test_dispatch_rejects_unknown():
    eng = TetrisEngine(rng=ScriptedRandom([0]))
    with pytest.raises(ValueError):
        eng.dispatch("drop")


def test_snapshot_is_detached(o_engine):
    snap = o_engine.snapshot()
    assert isinstance(snap, Snapshot)
    o_engine.hard_drop()
    assert not any(any(r) for r in snap.grid)
    assert snap.active.y == 0
    assert (snap.score, snap.level, snap.lines) == (0, 1, 0)
    assert snap.drop_interval_ms == 1000
    assert not snap.is_paused and not snap.is_game_over


def test_snapshot_during_clear(o_engine):
    fill_row(o_engine, 19)
    o_engine.update(0)
    o_engine.hard_drop()
    o_engine.update(120)
    snap = o_engine.snapshot()
    assert snap.is_clearing
    assert snap.clearing_rows == (19,)
    assert snap.clear_elapsed_ms == 120
    assert snap.active is None
    assert snap.next.type == O


def test_seeded_engines_match():
    a = TetrisEngine(config=dict(CONFIG, SEED=7))
    b = TetrisEngine(config=dict(CONFIG, SEED=7))
    assert a.snapshot() == b.snapshot()
