"""Piece model, canonical shapes, transpose rotation"""
from dataclasses import dataclass
from typing import List, Tuple

from tetris_config import CONFIG

Shape = List[List[int]]

I, O, T, S, Z, J, L = range(1, 8)

PIECE_NAMES = {I: "I", O: "O", T: "T", S: "S", Z: "Z", J: "J", L: "L"}

# Index 0 is the empty cell; types 1..7 index their square bounding matrix.
SHAPES: Tuple[Tuple[Tuple[int, ...], ...], ...] = (
    (),
    ((0,0,0,0),(1,1,1,1),(0,0,0,0),(0,0,0,0)),
    ((1,1),(1,1)),
    ((0,1,0),(1,1,1),(0,0,0)),
    ((0,1,1),(1,1,0),(0,0,0)),
    ((1,1,0),(0,1,1),(0,0,0)),
    ((1,0,0),(1,1,1),(0,0,0)),
    ((0,0,1),(1,1,1),(0,0,0)),
)

PIECE_TYPES = tuple(range(1, len(SHAPES)))


def rotate_cw(m: Shape) -> Shape:
    """Quarter turn: rotated[y][x] = m[size-1-x][y]."""
    size = len(m)
    return [[m[size-1-x][y] for x in range(size)] for y in range(size)]


def occupied_cells(shape: Shape):
    for sy, row in enumerate(shape):
        for sx, v in enumerate(row):
            if v:
                yield sx, sy


@dataclass
class Piece:
    type: int
    shape: Shape
    x: int
    y: int

    @staticmethod
    def spawn(t: int, cols: int = CONFIG["COLS"]) -> "Piece":
        s = [list(r) for r in SHAPES[t]]
        w = len(s[0])
        return Piece(t, s, cols//2 - w//2, 0)

    def copy(self) -> "Piece":
        return Piece(self.type, [r[:] for r in self.shape], self.x, self.y)

    @property
    def name(self) -> str:
        return PIECE_NAMES[self.type]


def generate_piece(rng, cols: int = CONFIG["COLS"]) -> Piece:
    """Pick one of the seven types uniformly and spawn it centered on row 0."""
    n = len(PIECE_TYPES)
    idx = rng.uniform_random_int(n)
    if not 0 <= idx < n:
        raise ValueError(f"random source returned {idx}, expected 0..{n-1}")
    return Piece.spawn(PIECE_TYPES[idx], cols)
