import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pytest

from tetris_engine import TetrisEngine
from tetris_piece import I, O, T, PIECE_TYPES
from tetris_rng import ScriptedRandom


def index_of(piece_type):
    return PIECE_TYPES.index(piece_type)


@pytest.fixture
def make_engine():
    """Engine whose generator always yields the given piece types in order."""
    def _make(*types, started=True):
        eng = TetrisEngine(rng=ScriptedRandom(index_of(t) for t in types))
        if started:
            eng.start()
        return eng
    return _make


@pytest.fixture
def o_engine(make_engine):
    return make_engine(O)


@pytest.fixture
def t_engine(make_engine):
    return make_engine(T)


@pytest.fixture
def i_engine(make_engine):
    return make_engine(I)
