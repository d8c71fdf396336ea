"""
Generic interactive fractal viewer.

One InteractiveFractalViewer serves every fractal: the camera,
animation and interaction logic are shared, and the fractal strategy
only paints frames.
"""

from .camera import Camera
from .controller import InteractionController
from .renderer import TileRenderer
from .surface import DoubleBufferedSurface
from .timer import FrameTimer


class InteractiveFractalViewer:
    """
    Camera + double buffer + interaction for one fractal.

    Args:
        fractal: Strategy from fractals.FRACTALS
        settings: Validated ViewerSettings
        display: Optional object with invalidate(), told about new frames
        tile_renderer: Shared TileRenderer (one is created for parallel
            fractals if omitted, and shut down by close())
        scheduler_factory: Animation timer factory (see InteractionController)
    """

    def __init__(self, fractal, settings, display=None, tile_renderer=None,
                 scheduler_factory=FrameTimer):
        self.fractal = fractal
        self.settings = settings
        self.display = display
        self.width = settings.width
        self.height = settings.height

        self._owns_renderer = False
        if tile_renderer is None and fractal.parallel:
            tile_renderer = TileRenderer(settings.tile_threshold, settings.workers)
            self._owns_renderer = True
        self.tile_renderer = tile_renderer

        self.camera = Camera(
            zoom=fractal.initial_zoom,
            damping=settings.damping,
            epsilon=settings.settle_epsilon,
            zoom_step=settings.zoom_step,
            pan_sign=fractal.pan_sign,
        )
        self.surface = DoubleBufferedSurface(fractal, tile_renderer, on_swap=self._on_swap)
        self.controller = InteractionController(
            self.camera, self.request_render, self.size,
            scheduler_factory=scheduler_factory,
            period_ms=settings.frame_period_ms,
            is_current=self._frame_is_current,
        )

    @property
    def title(self):
        return self.fractal.title

    def size(self):
        return self.width, self.height

    def request_render(self):
        """Render the current camera state (dropped if a pass is in flight)."""
        return self.surface.render(self.width, self.height, self.camera.snapshot())

    def resize(self, width, height):
        self.width = width
        self.height = height
        job = self.request_render()
        if job is None:
            self.controller.start_animation()
        return job

    def reset(self):
        """Animate back to the initial view."""
        self.camera.home()
        self.controller.start_animation()

    def frame(self):
        return self.surface.frame()

    def _frame_is_current(self):
        return self.surface.shows(self.width, self.height, self.camera.snapshot())

    def _on_swap(self):
        if self.display is not None:
            self.display.invalidate()

    def close(self):
        self.controller.timer.stop()
        if self._owns_renderer:
            self.tile_renderer.shutdown()

    def __repr__(self):
        return f"InteractiveFractalViewer({self.fractal!r}, {self.width}x{self.height})"
