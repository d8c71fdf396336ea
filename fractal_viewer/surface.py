"""
Double-buffered frame surface.

The off-screen buffer belongs to the render pass in flight; nobody else
reads it until the pass completes. On completion the off-screen and
on-screen buffers trade places under a short lock, and the display is
asked to repaint. Render requests that arrive while a pass is in flight
are dropped, not queued: the animation tick keeps asking until the
surface has accepted a pass for the camera's current view (see shows()).
"""

import threading

import numpy as np

from .renderer import RenderRegion, render_inline


class DoubleBufferedSurface:
    """
    Off-screen/on-screen frame pair for one viewer.

    Args:
        fractal: Strategy that paints regions of a frame
        tile_renderer: TileRenderer for parallel fractals (None = paint inline)
        on_swap: Called after every swap (e.g. display.invalidate)

    Attributes:
        frames_completed: Number of passes swapped on screen
        requests_dropped: Number of requests ignored while a pass was in flight
    """

    def __init__(self, fractal, tile_renderer=None, on_swap=None):
        self.fractal = fractal
        self.tile_renderer = tile_renderer
        self.on_swap = on_swap

        self._lock = threading.Lock()
        self._rendering = False
        self._offscreen = None
        self._onscreen = None
        self._accepted = None

        self.frames_completed = 0
        self.requests_dropped = 0

    @property
    def rendering(self):
        with self._lock:
            return self._rendering

    def render(self, width, height, view):
        """
        Start rendering a width x height frame for the camera snapshot view.

        Returns:
            RenderJob of the started pass, or None if the request was a
            no-op (empty canvas or a pass already in flight)
        """
        if width <= 0 or height <= 0:
            return None
        with self._lock:
            if self._rendering:
                self.requests_dropped += 1
                return None
            self._rendering = True
            self._accepted = (width, height, view)

        if self._offscreen is None or self._offscreen.shape[:2] != (height, width):
            self._offscreen = np.zeros((height, width, 3), dtype=np.uint8)
        buffer = self._offscreen
        region = RenderRegion.full(width, height)

        def paint(tile):
            self.fractal.paint(buffer, tile, view)

        def on_complete(job):
            self._finish(job, buffer)

        try:
            if self.fractal.parallel and self.tile_renderer is not None:
                return self.tile_renderer.render(region, paint, on_complete)
            return render_inline(region, paint, on_complete)
        except RuntimeError:
            # Pool already shut down
            with self._lock:
                self._rendering = False
                self._accepted = None
            raise

    def _finish(self, job, buffer):
        if job.error is not None:
            print(f"Warning: Render of {self.fractal!r} failed: {job.error!r}")
            with self._lock:
                self._rendering = False
            return
        with self._lock:
            self._offscreen = self._onscreen
            self._onscreen = buffer
            self.frames_completed += 1
            self._rendering = False
        if self.on_swap is not None:
            self.on_swap()

    def frame(self):
        """
        Copy of the last completed frame, or None before the first one.
        """
        with self._lock:
            if self._onscreen is None:
                return None
            return self._onscreen.copy()

    def shows(self, width, height, view):
        """
        Whether the last accepted pass (in flight or finished) was for
        this canvas size and view. An empty canvas needs no frame.
        """
        if width <= 0 or height <= 0:
            return True
        with self._lock:
            return self._accepted == (width, height, view)

    @property
    def frame_size(self):
        """(width, height) of the on-screen frame, or None."""
        with self._lock:
            if self._onscreen is None:
                return None
            return self._onscreen.shape[1], self._onscreen.shape[0]
