"""
Fractal strategies plugged into the generic viewer.

Every fractal paints a region of a frame buffer for a camera View. The
escape-time fractals are painted tile by tile on the worker pool; the
figure fractals (figures.py) draw a whole frame synchronously.

To add a new fractal:
1. Subclass Fractal (or EscapeTimeFractal / FigureFractal) and implement paint()
2. Add a factory to the FRACTALS dictionary at the bottom of this file
"""

from .colormaps import get_colormap
from .compute import paint_escape_tile
from . import figures


class Fractal:
    """
    Base strategy.

    Attributes:
        name: Registry key
        title: Window caption
        pan_sign: Drag direction flag (-1: offset -= delta/zoom, +1: +=),
            or a (sign_x, sign_y) pair
        initial_zoom: Camera zoom at construction and after a reset
        parallel: Whether paint() may run concurrently on disjoint tiles
    """
    name = 'fractal'
    title = 'Fractal Viewer'
    pan_sign = -1
    initial_zoom = 1.0
    parallel = False

    def paint(self, out, region, view):
        """Fill region of out (height, width, 3) for view."""
        raise NotImplementedError

    def __repr__(self):
        return f"{type(self).__name__}()"


class EscapeTimeFractal(Fractal):
    """Per-pixel escape-time fractal colored through a ColorMap."""
    pan_sign = -1
    initial_zoom = 200.0
    parallel = True
    is_julia = False

    def __init__(self, colormap):
        self.colormap = colormap
        self.constant = (0.0, 0.0)

    @property
    def max_iter(self):
        return self.colormap.max_iter

    def paint(self, out, region, view):
        cx, cy = view.center
        paint_escape_tile(
            out, region.x0, region.x1, region.y0, region.y1,
            float(cx), float(cy), float(view.zoom), self.max_iter,
            self.is_julia, self.constant[0], self.constant[1],
            self.colormap.colors
        )


class Mandelbrot(EscapeTimeFractal):
    name = 'mandelbrot'
    title = 'Mandelbrot Viewer'


class Julia(EscapeTimeFractal):
    name = 'julia'
    title = 'Julia Set Viewer'
    is_julia = True

    def __init__(self, colormap, constant=(-0.7, 0.27015)):
        super().__init__(colormap)
        self.constant = (float(constant[0]), float(constant[1]))

    def __repr__(self):
        return f"Julia(c={self.constant[0]}{self.constant[1]:+}i)"


def _mandelbrot(settings):
    return Mandelbrot(get_colormap(settings.colormap, settings.max_iterations))


def _julia(settings):
    colormap = get_colormap(settings.colormap, settings.max_iterations)
    return Julia(colormap, settings.julia_constant)


def _figure(cls):
    return lambda settings: cls()


# Registry of all available fractals.
# Keys are CLI names, values are factories taking ViewerSettings.
FRACTALS = {
    'mandelbrot': _mandelbrot,
    'julia': _julia,
    'sierpinski-triangle': _figure(figures.SierpinskiTriangle),
    'sierpinski-carpet': _figure(figures.SierpinskiCarpet),
    'koch-snowflake': _figure(figures.KochSnowflake),
    'dragon-curve': _figure(figures.DragonCurve),
    'l-system': _figure(figures.LSystem),
    'cantor-set': _figure(figures.CantorSet),
    'fractal-tree': _figure(figures.FractalTree),
    'barnsley-fern': _figure(figures.BarnsleyFern),
}


def create_fractal(name, settings):
    """
    Build a fractal strategy by name.

    Raises:
        KeyError if name not found
    """
    return FRACTALS[name](settings)


def list_fractal_names():
    """Get list of available fractal names."""
    return list(FRACTALS.keys())
