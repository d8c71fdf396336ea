"""
Periodic scheduler driven by the application's main loop.
"""

import pygame


class FrameTimer:
    """
    Repeatable, stoppable periodic callback.

    The main loop calls poll() every frame; the callback fires at most
    once per poll, when at least one period has elapsed since the last
    fire (missed periods are coalesced, not replayed).

    Args:
        callback: Function called on every tick
        period_ms: Tick period in milliseconds
        clock: Millisecond clock (default pygame.time.get_ticks)
    """

    def __init__(self, callback, period_ms=10, clock=None):
        self.callback = callback
        self.period_ms = period_ms
        self.clock = clock or pygame.time.get_ticks
        self.running = False
        self._last_fire = 0

    def start(self):
        if not self.running:
            self.running = True
            self._last_fire = self.clock()

    def stop(self):
        self.running = False

    def poll(self, now=None):
        """Fire the callback if running and a period elapsed. Returns True if fired."""
        if not self.running:
            return False
        now = self.clock() if now is None else now
        if now - self._last_fire < self.period_ms:
            return False
        self._last_fire = now
        self.callback()
        return True
