import pygame
import pytest

from tetris_engine import Command
from tetris_input import KEYMAP, command_for_key


@pytest.mark.parametrize("key,cmd", [
    (pygame.K_LEFT, Command.MOVE_LEFT),
    (pygame.K_RIGHT, Command.MOVE_RIGHT),
    (pygame.K_DOWN, Command.SOFT_DROP),
    (pygame.K_UP, Command.ROTATE),
    (pygame.K_SPACE, Command.HARD_DROP),
    (pygame.K_r, Command.RESET),
])
def test_direct_keys(key, cmd):
    assert command_for_key(key, False) is cmd
    assert command_for_key(key, True) is cmd


def test_enter_pauses_or_restarts():
    assert command_for_key(pygame.K_RETURN, False) is Command.TOGGLE_PAUSE
    assert command_for_key(pygame.K_RETURN, True) is Command.RESET
    assert command_for_key(pygame.K_KP_ENTER, True) is Command.RESET


def test_unbound_key():
    assert command_for_key(pygame.K_a, False) is None


def test_keymap_targets_are_commands():
    assert all(isinstance(c, Command) for c in KEYMAP.values())
