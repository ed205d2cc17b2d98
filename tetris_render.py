"""
Rendering helpers for the Tetris project.

- Pre-render one block sprite per piece type and blit it.
- Pre-render the static background (grid + panel frame) once per Dims.
- Cache a BOARD SURFACE with all locked blocks; rebuild only when the grid changes.
- Cache HUD text surfaces; re-render only when values change.
- Rows being cleared pulse white, alpha driven by the clear animation clock.
"""
from __future__ import annotations
import math
import pygame
from dataclasses import dataclass
from typing import Dict, Tuple, Optional
from tetris_layout import Dims
from tetris_engine import Snapshot, PieceView

# Colors per piece type id
COLORS: Dict[int, Tuple[int,int,int]] = {
    1: (0,240,240),    # I
    2: (240,240,0),    # O
    3: (160,0,240),    # T
    4: (0,240,0),      # S
    5: (240,0,0),      # Z
    6: (0,0,240),      # J
    7: (240,160,0),    # L
}
CLEAR_COLOR = (255,255,255)
PREVIEW_CELLS = 4


def clear_pulse_alpha(elapsed_ms: float) -> int:
    """Opacity (0..255) of a clearing row at elapsed_ms into the animation."""
    return int(abs(math.sin(elapsed_ms * 0.05)) * 255)


def _block(size: int, col) -> pygame.Surface:
    s = pygame.Surface((size, size), pygame.SRCALPHA)
    s.fill(col)
    hl = max(1, size - 10)
    pygame.draw.rect(s, (255,255,255,77), (2, 2, hl, hl))
    pygame.draw.rect(s, (51,51,51), (0, 0, size, size), 2)
    return s


@dataclass
class HudCache:
    score: int = -1
    level: int = -1
    lines: int = -1
    next_key: Optional[PieceView] = None
    title: Optional[pygame.Surface] = None
    score_s: Optional[pygame.Surface] = None
    level_s: Optional[pygame.Surface] = None
    lines_s: Optional[pygame.Surface] = None
    next_s: Optional[pygame.Surface] = None
    controls: Optional[list] = None

class RenderAssets:
    """Holds all pre-rendered assets and draws a Snapshot."""
    def __init__(self, dims: Dims, font: pygame.font.Font, rows: int, cols: int):
        self.dims = dims
        self.font = font
        self.rows, self.cols = rows, cols
        self._make_static()
        self.cell_surf = {t: _block(dims.cell, col) for t, col in COLORS.items()}
        self.clear_surf = _block(dims.cell, CLEAR_COLOR)
        self.hud = HudCache()
        # Board surface cache (only locked blocks)
        self.board_surface = pygame.Surface((dims.board_w, dims.board_h), pygame.SRCALPHA)
        self._board_key = None

    # ---------- Static background (grid + panel) ----------
    def _make_static(self):
        d = self.dims
        self.bg = pygame.Surface((d.total_w, d.total_h))
        self.bg.fill((10,13,34))
        pygame.draw.rect(self.bg, (0,0,0), (d.board_x, d.board_y, d.board_w, d.board_h))
        grid_col = (34,34,34)
        for x in range(self.cols+1):
            X = d.board_x + x*d.cell
            pygame.draw.line(self.bg, grid_col, (X, d.board_y), (X, d.board_y + d.board_h))
        for y in range(self.rows+1):
            Y = d.board_y + y*d.cell
            pygame.draw.line(self.bg, grid_col, (d.board_x, Y), (d.board_x + d.board_w, Y))
        panel_rect = pygame.Rect(d.panel_x, d.panel_y, d.panel_w, d.board_h)
        pygame.draw.rect(self.bg, (21,25,53), panel_rect)
        pygame.draw.rect(self.bg, (50,60,100), panel_rect, 1)
        self.pv_cell = max(14, int(d.cell*0.75))
        self.pv_x = d.panel_x + 12
        self.pv_y = d.panel_y + 150
        frame = pygame.Rect(self.pv_x-6, self.pv_y-6, self.pv_cell*PREVIEW_CELLS+12, self.pv_cell*PREVIEW_CELLS+12)
        pygame.draw.rect(self.bg, (0,0,0), frame)
        pygame.draw.rect(self.bg, (55,65,110), frame, 1)

    # ---------- Board surface cache ----------
    def rebuild_board_surface(self, grid, clearing_rows=()):
        """Rebuilds the locked-blocks surface; clearing rows are left for the pulse pass."""
        self.board_surface.fill((0,0,0,0))
        c = self.dims.cell
        for y in range(self.rows):
            if y in clearing_rows:
                continue
            for x in range(self.cols):
                t = grid[y][x]
                if t:
                    self.board_surface.blit(self.cell_surf[t], (x*c, y*c))
        self._board_key = (grid, clearing_rows)

    def draw_cell(self, screen: pygame.Surface, surf: pygame.Surface, bx: int, by: int):
        screen.blit(surf, (self.dims.board_x + bx*self.dims.cell, self.dims.board_y + by*self.dims.cell))

    def draw_piece(self, screen: pygame.Surface, piece: PieceView):
        surf = self.cell_surf[piece.type]
        for r, row in enumerate(piece.shape):
            for c, v in enumerate(row):
                if v and piece.y + r >= 0:
                    self.draw_cell(screen, surf, piece.x + c, piece.y + r)

    def draw(self, screen: pygame.Surface, snap: Snapshot):
        screen.blit(self.bg, (0,0))
        if self._board_key != (snap.grid, snap.clearing_rows):
            self.rebuild_board_surface(snap.grid, snap.clearing_rows)
        screen.blit(self.board_surface, (self.dims.board_x, self.dims.board_y))
        if snap.is_clearing:
            self.clear_surf.set_alpha(clear_pulse_alpha(snap.clear_elapsed_ms))
            for y in snap.clearing_rows:
                for x in range(self.cols):
                    if snap.grid[y][x]:
                        self.draw_cell(screen, self.clear_surf, x, y)
        elif snap.active is not None:
            self.draw_piece(screen, snap.active)
        self.draw_panel_hud(screen, snap)

    # ---------- HUD / Panel ----------
    def _render_next(self, piece: PieceView) -> pygame.Surface:
        s = pygame.Surface((self.pv_cell*PREVIEW_CELLS, self.pv_cell*PREVIEW_CELLS), pygame.SRCALPHA)
        offx = (PREVIEW_CELLS - len(piece.shape[0])) / 2
        offy = (PREVIEW_CELLS - len(piece.shape)) / 2
        block = _block(self.pv_cell, COLORS[piece.type])
        for y, row in enumerate(piece.shape):
            for x, v in enumerate(row):
                if v:
                    s.blit(block, (int((x + offx) * self.pv_cell), int((y + offy) * self.pv_cell)))
        return s

    def draw_panel_hud(self, screen: pygame.Surface, snap: Snapshot):
        d = self.dims
        f = self.font
        if self.hud.title is None:
            self.hud.title = f.render("Tetris", True, (197,202,233))
        if snap.score != self.hud.score:
            self.hud.score = snap.score
            self.hud.score_s = f.render(f"Score: {snap.score}", True, (200,210,240))
        if snap.level != self.hud.level:
            self.hud.level = snap.level
            self.hud.level_s = f.render(f"Level: {snap.level}", True, (200,210,240))
        if snap.lines != self.hud.lines:
            self.hud.lines = snap.lines
            self.hud.lines_s = f.render(f"Lines: {snap.lines}", True, (200,210,240))
        if snap.next is not None and snap.next != self.hud.next_key:
            self.hud.next_key = snap.next
            self.hud.next_s = self._render_next(snap.next)
        screen.blit(self.hud.title, (d.panel_x + 12, d.panel_y + 12))
        screen.blit(self.hud.score_s, (d.panel_x + 12, d.panel_y + 44))
        screen.blit(self.hud.level_s, (d.panel_x + 12, d.panel_y + 68))
        screen.blit(self.hud.lines_s, (d.panel_x + 12, d.panel_y + 92))
        screen.blit(f.render("Next:", True, (200,210,240)), (d.panel_x + 12, d.panel_y + 126))
        if self.hud.next_s:
            screen.blit(self.hud.next_s, (self.pv_x, self.pv_y))
        if not self.hud.controls:
            self.hud.controls = [
                f.render("Controls:", True, (200,210,240)),
                f.render("←/→ Move", True, (165,175,215)),
                f.render("↓ Soft drop", True, (165,175,215)),
                f.render("↑ Rotate", True, (165,175,215)),
                f.render("Space Hard drop", True, (165,175,215)),
                f.render("Enter Pause/Start", True, (165,175,215)),
                f.render("R Restart", True, (165,175,215)),
            ]
        y = d.panel_y + 150 + self.pv_cell*PREVIEW_CELLS + 24
        for surf in self.hud.controls:
            screen.blit(surf, (d.panel_x + 12, y)); y += 20
