import pygame
from tetris_engine import Snapshot

class Overlay:
    """Centered panel over the board for the start, pause and game-over states."""
    def __init__(self):
        self.started = False

    def text_for(self, snap: Snapshot):
        if snap.is_game_over:
            return "GAME OVER", f"Final score: {snap.score}", "Enter to restart"
        if snap.is_paused:
            if not self.started:
                return "TETRIS", "Press Enter to start", ""
            return "PAUSED", "Press Enter to continue", ""
        self.started = True
        return None

    def draw(self, screen, font, big_font, snap: Snapshot, board_rect: pygame.Rect):
        text = self.text_for(snap)
        if text is None: return
        title, message, hint = text
        s = pygame.Surface(board_rect.size, pygame.SRCALPHA); s.fill((0,0,0,200))
        screen.blit(s, board_rect.topleft)
        y = board_rect.centery - 40
        for surf in (big_font.render(title,True,(255,255,255)),
                     font.render(message,True,(220,230,255)),
                     font.render(hint,True,(165,175,215))):
            screen.blit(surf, surf.get_rect(center=(board_rect.centerx, y))); y += 36
