"""
Interactive Fractal Viewer Package

Interactive explorers for classic fractals (Mandelbrot, Julia,
Sierpinski triangle/carpet, Koch snowflake, dragon curve, L-system,
Cantor set, fractal tree, Barnsley fern) with click-to-zoom, drag-to-pan and an
eased camera animation. Escape-time fractals are rendered in parallel
tiles by Numba-compiled kernels; pygame handles display and input.

Quick Start:
    from fractal_viewer import run
    run('julia')

Or from command line:
    python -m fractal_viewer julia

Package Structure:
    - camera.py: Eased zoom/pan camera and immutable View snapshots
    - compute.py: JIT-compiled escape-time kernels
    - colormaps.py: Iteration -> color tables
    - renderer.py: Fork/join parallel tile renderer
    - surface.py: Double-buffered frame surface
    - controller.py: Pointer interaction and animation scheduling
    - timer.py: Periodic scheduler driven by the main loop
    - fractals.py: Fractal strategies and registry
    - figures.py: Synchronous line-drawing fractals
    - viewer.py: Generic interactive viewer
    - settings.py: Settings loading and validation
    - app.py: Main application and event loop

Controls:
    - Left click: Zoom in toward the cursor
    - Right click: Zoom out
    - Drag: Pan around
    - R: Ease back to the default view
    - Tab: Next fractal
    - S: Save the current frame as PNG
    - ESC: Quit
"""

from .app import run, FractalApp
from .camera import Camera, View
from .colormaps import COLORMAPS, ColorMap, get_colormap, list_colormap_names
from .fractals import FRACTALS, create_fractal, list_fractal_names
from .renderer import RenderRegion, TileRenderer
from .settings import ViewerSettings, load_settings
from .surface import DoubleBufferedSurface
from .viewer import InteractiveFractalViewer

__version__ = "1.0.0"
__all__ = [
    "run",
    "FractalApp",
    "Camera",
    "View",
    "COLORMAPS",
    "ColorMap",
    "get_colormap",
    "list_colormap_names",
    "FRACTALS",
    "create_fractal",
    "list_fractal_names",
    "RenderRegion",
    "TileRenderer",
    "ViewerSettings",
    "load_settings",
    "DoubleBufferedSurface",
    "InteractiveFractalViewer",
]
