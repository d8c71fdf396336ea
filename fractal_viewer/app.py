"""
Main application module for the fractal viewers.

Contains the FractalApp class which handles:
- Window setup and main loop
- Translating pygame mouse events into clicks and drags
- Driving the animation timer and presenting finished frames
- Switching between fractals and saving screenshots
"""

import os
from datetime import datetime

import pygame

from .compute import warmup_jit
from .fractals import EscapeTimeFractal, create_fractal, list_fractal_names
from .renderer import TileRenderer
from .settings import load_settings
from .viewer import InteractiveFractalViewer


class PygameDisplay:
    """
    Display surface for the viewers: presents frames on the window.

    invalidate() may be called from a worker thread; it only raises a
    flag that the main loop picks up.
    """

    def __init__(self, screen):
        self.screen = screen
        self.dirty = True

    def invalidate(self):
        self.dirty = True

    def present(self, image):
        """Blit an (height, width, 3) RGB frame and flip."""
        self.dirty = False
        self.screen.fill((0, 0, 0))
        if image is not None:
            surface = pygame.surfarray.make_surface(image.swapaxes(0, 1))
            self.screen.blit(surface, (0, 0))
        pygame.display.flip()


class FractalApp:
    """
    Main application class for the fractal viewers.

    Handles the pygame window, event loop, and routes input to the
    active InteractiveFractalViewer.
    """

    FPS = 60
    CLICK_SLOP = 2  # Pixels of motion still treated as a click

    def __init__(self, fractal='mandelbrot', settings=None):
        """
        Initialize the application.

        Args:
            fractal: Name from fractals.FRACTALS to show first
            settings: ViewerSettings (default: loaded from settings.json)
        """
        self.settings = (settings or load_settings()).validate()
        self.fractal_names = list_fractal_names()
        if fractal not in self.fractal_names:
            raise KeyError(f"Unknown fractal {fractal!r}")
        self.fractal_name = fractal

        # Pygame state (initialized in run())
        self.screen = None
        self.clock = None
        self.display = None
        self._caption = None

        self.tile_renderer = None
        self.viewer = None

        # Input state
        self.press_pos = None
        self.press_button = None
        self.moved = False

        self.running = False

    def run(self):
        """Run the application main loop."""
        self._init_pygame()
        self.tile_renderer = TileRenderer(self.settings.tile_threshold, self.settings.workers)
        try:
            self._open_viewer(self.fractal_name)
            self.running = True
            while self.running:
                self._handle_events()
                self.viewer.controller.timer.poll()
                self._draw()
                self.clock.tick(self.FPS)
        finally:
            if self.viewer is not None:
                self.viewer.close()
            self.tile_renderer.shutdown()
            pygame.quit()

    def _init_pygame(self):
        """Initialize pygame and create window."""
        pygame.init()
        self.screen = pygame.display.set_mode(
            (self.settings.width, self.settings.height),
            pygame.DOUBLEBUF
        )
        self.clock = pygame.time.Clock()
        self.display = PygameDisplay(self.screen)

    def _open_viewer(self, name):
        """Replace the active viewer with a fresh one for fractal name."""
        if self.viewer is not None:
            self.viewer.close()
        fractal = create_fractal(name, self.settings)
        if isinstance(fractal, EscapeTimeFractal):
            pygame.display.set_caption("Compiling (first run only)...")
            self._caption = None
            warmup_jit(fractal.colormap.colors)
        self.fractal_name = name
        self.viewer = InteractiveFractalViewer(
            fractal, self.settings,
            display=self.display,
            tile_renderer=self.tile_renderer,
        )
        self.viewer.request_render()
        self._update_caption()

    def _update_caption(self):
        status = " - Rendering..." if self.viewer.surface.rendering else ""
        caption = f"{self.viewer.title} - Click to zoom, drag to pan, Tab for next{status}"
        if caption != self._caption:
            self._caption = caption
            pygame.display.set_caption(caption)

    def _handle_events(self):
        """Process all pending pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.MOUSEBUTTONDOWN:
                self._handle_mouse_down(event)
            elif event.type == pygame.MOUSEBUTTONUP:
                self._handle_mouse_up(event)
            elif event.type == pygame.MOUSEMOTION:
                self._handle_mouse_motion(event)
            elif event.type == pygame.KEYDOWN:
                self._handle_key(event)

    def _handle_mouse_down(self, event):
        """Handle mouse button press (wheel buttons are ignored)."""
        if event.button not in (1, 3):
            return
        self.press_pos = event.pos
        self.press_button = event.button
        self.moved = False
        self.viewer.controller.press(event.pos[0], event.pos[1], event.button)

    def _handle_mouse_up(self, event):
        """A release without motion is a click; otherwise it ends a drag."""
        if event.button != self.press_button:
            return
        x, y = event.pos
        if self.moved:
            self.viewer.controller.release(x, y, event.button)
        else:
            self.viewer.controller.click(x, y, event.button)
        self.press_pos = None
        self.press_button = None

    def _handle_mouse_motion(self, event):
        """Handle mouse movement (for dragging)."""
        if self.press_pos is None:
            return
        x, y = event.pos
        if not self.moved:
            px, py = self.press_pos
            if abs(x - px) <= self.CLICK_SLOP and abs(y - py) <= self.CLICK_SLOP:
                return
            self.moved = True
        self.viewer.controller.drag(x, y)

    def _handle_key(self, event):
        """Handle keyboard input."""
        if event.key == pygame.K_r:
            self.viewer.reset()
        elif event.key == pygame.K_TAB:
            index = self.fractal_names.index(self.fractal_name)
            self._open_viewer(self.fractal_names[(index + 1) % len(self.fractal_names)])
        elif event.key == pygame.K_s:
            self._save_image()
        elif event.key == pygame.K_ESCAPE:
            self.running = False

    def _save_image(self):
        """Save the current frame as a PNG in the working directory."""
        image = self.viewer.frame()
        if image is None:
            return
        surface = pygame.surfarray.make_surface(image.swapaxes(0, 1))
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filename = os.path.abspath(f"{self.fractal_name}_{timestamp}.png")
        pygame.image.save(surface, filename)
        print(f"Image saved to: {filename}")

    def _draw(self):
        """Present the latest frame if a new one was swapped in."""
        self._update_caption()
        if self.display.dirty:
            self.display.present(self.viewer.frame())


def run(fractal='mandelbrot', settings=None):
    """
    Run the fractal viewer.

    Args:
        fractal: Name of the fractal to show first
        settings: ViewerSettings (default: loaded from settings.json)
    """
    app = FractalApp(fractal, settings)
    try:
        app.run()
    except KeyboardInterrupt:
        pass
