"""Keyboard -> engine command mapping"""
from typing import Optional

import pygame

from tetris_config import CONFIG
from tetris_engine import Command

KEYMAP = {
    pygame.K_LEFT: Command.MOVE_LEFT,
    pygame.K_RIGHT: Command.MOVE_RIGHT,
    pygame.K_DOWN: Command.SOFT_DROP,
    pygame.K_UP: Command.ROTATE,
    pygame.K_SPACE: Command.HARD_DROP,
    pygame.K_p: Command.TOGGLE_PAUSE,
    pygame.K_r: Command.RESET,
}

CONFIRM_KEYS = (pygame.K_RETURN, pygame.K_KP_ENTER)


def command_for_key(key: int, is_game_over: bool) -> Optional[Command]:
    # Enter resumes/pauses, or restarts once the game is over.
    if key in CONFIRM_KEYS:
        return Command.RESET if is_game_over else Command.TOGGLE_PAUSE
    return KEYMAP.get(key)


def enable_key_repeat():
    pygame.key.set_repeat(CONFIG["KEY_REPEAT_DELAY_MS"], CONFIG["KEY_REPEAT_INTERVAL_MS"])
