"""One-shot timer stepped by the game loop's own clock"""
from typing import Callable, Optional


class OneShotTimer:
    """Fires its callback once after delay_ms of advanced time.

    Nothing runs in the background: the owner calls advance() from its tick,
    so tests can step time deterministically.
    """
    def __init__(self, delay_ms: float, callback: Callable[[], None]):
        self.delay_ms = delay_ms
        self.callback: Optional[Callable[[], None]] = callback
        self.elapsed_ms = 0.0
        self.fired = False

    @property
    def pending(self) -> bool:
        return self.callback is not None and not self.fired

    def advance(self, dt_ms: float) -> bool:
        """Add dt_ms; run the callback if the delay is reached. Returns True on fire."""
        if not self.pending:
            return False
        self.elapsed_ms += dt_ms
        if self.elapsed_ms < self.delay_ms:
            return False
        self.fired = True
        cb, self.callback = self.callback, None
        cb()
        return True

    def cancel(self) -> None:
        self.callback = None
