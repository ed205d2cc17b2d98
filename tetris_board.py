"""Board helpers: placement check, merge, full-row scan, row removal"""
from typing import Iterable, List

from tetris_config import CONFIG
from tetris_piece import Piece, Shape, occupied_cells

Grid = List[List[int]]


def new_grid(rows: int = CONFIG["ROWS"], cols: int = CONFIG["COLS"]) -> Grid:
    return [[0] * cols for _ in range(rows)]


def is_valid_placement(grid: Grid, shape: Shape, x: int, y: int) -> bool:
    """True if every occupied cell is inside the walls, above the floor and
    not on a filled cell. Cells above row 0 skip the occupancy check."""
    rows, cols = len(grid), len(grid[0])
    for sx, sy in occupied_cells(shape):
        bx, by = x + sx, y + sy
        if bx < 0 or bx >= cols or by >= rows:
            return False
        if by >= 0 and grid[by][bx]:
            return False
    return True


def merge(grid: Grid, piece: Piece) -> None:
    """Write the piece into the grid; cells above row 0 are dropped."""
    for sx, sy in occupied_cells(piece.shape):
        by = piece.y + sy
        if by >= 0:
            grid[by][piece.x + sx] = piece.type


def detect_full_rows(grid: Grid) -> List[int]:
    return [y for y, row in enumerate(grid) if all(row)]


def remove_rows(grid: Grid, rows: Iterable[int]) -> None:
    """Drop the given rows in place and pad the top with empty rows."""
    doomed = set(rows)
    if not doomed:
        return
    cols = len(grid[0])
    kept = [row for y, row in enumerate(grid) if y not in doomed]
    grid[:] = [[0] * cols for _ in range(len(grid) - len(kept))] + kept
