import logging
import sys

import pygame

from tetris_config import CONFIG
from tetris_engine import TetrisEngine
from tetris_input import command_for_key, enable_key_repeat
from tetris_layout import compute_dims
from tetris_overlay import Overlay
from tetris_render import RenderAssets

logger = logging.getLogger(__name__)


def recreate_window(dims, flags=pygame.DOUBLEBUF):
    try:
        return pygame.display.set_mode((dims.total_w, dims.total_h), flags, vsync=1)
    except TypeError:
        return pygame.display.set_mode((dims.total_w, dims.total_h), flags)


def main():
    logging.basicConfig(level=CONFIG["LOG_LEVEL"],
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    pygame.init()
    pygame.event.set_allowed([pygame.QUIT, pygame.KEYDOWN])
    enable_key_repeat()

    dims = compute_dims()
    screen = recreate_window(dims)
    pygame.display.set_caption("Tetris")
    font = pygame.font.SysFont(None, 24)
    big_font = pygame.font.SysFont(None, 48)

    engine = TetrisEngine()
    render = RenderAssets(dims, font, engine.rows, engine.cols)
    overlay = Overlay()
    board_rect = pygame.Rect(dims.board_x, dims.board_y, dims.board_w, dims.board_h)
    clock = pygame.time.Clock()
    logger.info("window %dx%d, cell %d", dims.total_w, dims.total_h, dims.cell)

    while True:
        clock.tick(60)
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                pygame.quit(); sys.exit()
            if e.type == pygame.KEYDOWN:
                cmd = command_for_key(e.key, engine.is_game_over)
                if cmd is not None:
                    engine.dispatch(cmd)

        # Gravity and the clear timer advance before the frame is drawn.
        engine.update(pygame.time.get_ticks())
        snap = engine.snapshot()
        render.draw(screen, snap)
        overlay.draw(screen, font, big_font, snap, board_rect)
        pygame.display.flip()


if __name__ == '__main__':
    main()
