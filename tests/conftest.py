import os

# Headless pygame for the figure fractals and the frame timer
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pytest

from fractal_viewer.settings import ViewerSettings


class ManualTimer:
    """Stand-in for FrameTimer; tests fire ticks by hand."""

    def __init__(self, callback, period_ms=10):
        self.callback = callback
        self.period_ms = period_ms
        self.running = False
        self.starts = 0

    def start(self):
        self.running = True
        self.starts += 1

    def stop(self):
        self.running = False

    def fire(self):
        if self.running:
            self.callback()

    def run_until_idle(self, limit=10000):
        ticks = 0
        while self.running and ticks < limit:
            self.callback()
            ticks += 1
        return ticks


@pytest.fixture
def manual_timer():
    return ManualTimer


@pytest.fixture
def small_settings():
    return ViewerSettings(width=100, height=100, max_iterations=50).validate()
