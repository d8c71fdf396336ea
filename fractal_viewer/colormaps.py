"""
Color tables for the escape-time fractals.

A color table maps an iteration count in [0, max_iter] to an RGB color.
Index max_iter is reserved for points that never escaped and is always
black.

To add a new colormap:
1. Define a create_colormap_xxx(max_iter) function that returns the color array
2. Add it to the COLORMAPS dictionary at the bottom of this file
"""

import colorsys

import numpy as np


BLACK = (0, 0, 0)


class ColorMap:
    """
    Immutable iteration -> RGB lookup table of length max_iter + 1.

    The last entry is forced to black whatever the palette produced.
    """

    def __init__(self, colors):
        colors = np.array(colors, dtype=np.uint8)
        if colors.ndim != 2 or colors.shape[1] != 3 or colors.shape[0] < 2:
            raise ValueError(f"Expected an (N, 3) color array, got shape {colors.shape}")
        colors[-1] = BLACK
        colors.setflags(write=False)
        self._colors = colors

    @property
    def colors(self):
        return self._colors

    @property
    def max_iter(self):
        return self._colors.shape[0] - 1

    def __len__(self):
        return self._colors.shape[0]

    def __getitem__(self, index):
        return self._colors[index]

    def __repr__(self):
        return f"ColorMap(max_iter={self.max_iter})"


def _hsb_to_rgb(hue, saturation, brightness):
    # Hue wraps like java.awt.Color.HSBtoRGB; channels round half up
    r, g, b = colorsys.hsv_to_rgb(hue % 1.0, saturation, brightness)
    return int(r * 255.0 + 0.5), int(g * 255.0 + 0.5), int(b * 255.0 + 0.5)


def create_colormap_hsb(max_iter):
    """
    HSB colormap: hue cycles every 256 iterations, brightness i / (i + 8).

    Low counts (points that escaped on the last iterations, close to the
    set) are dark; counts near max_iter (fast escape) are bright.
    """
    colors = np.zeros((max_iter + 1, 3), dtype=np.uint8)
    for i in range(max_iter):
        colors[i] = _hsb_to_rgb(i / 256.0, 1.0, i / (i + 8.0))
    return colors


def create_colormap_hot(max_iter):
    """
    Hot colormap: black -> red -> orange -> yellow -> white.

    Uses a power curve to spend more time in the bright colors.
    """
    colors = np.zeros((max_iter + 1, 3), dtype=np.uint8)
    for i in range(max_iter):
        t = (i / max(1, max_iter - 1)) ** 0.8
        colors[i, 0] = int(min(255, 255 * min(1, t * 2.5)))
        colors[i, 1] = int(min(255, 255 * max(0, (t - 0.4) * 2.5)))
        colors[i, 2] = int(min(255, 255 * max(0, (t - 0.7) * 3.3)))
    return colors


def create_colormap_ocean(max_iter):
    """Ocean colormap: deep blue -> cyan -> white."""
    colors = np.zeros((max_iter + 1, 3), dtype=np.uint8)
    for i in range(max_iter):
        t = i / max(1, max_iter - 1)
        colors[i, 0] = int(min(255, 255 * max(0, (t - 0.5) * 2)))
        colors[i, 1] = int(min(255, 255 * t))
        colors[i, 2] = int(min(255, 50 + 205 * t))
    return colors


def create_colormap_grayscale(max_iter):
    """Grayscale colormap: black -> white."""
    colors = np.zeros((max_iter + 1, 3), dtype=np.uint8)
    for i in range(max_iter):
        v = int(255 * i / max(1, max_iter - 1))
        colors[i] = [v, v, v]
    return colors


# Registry of all available colormaps.
# Keys are display names, values are factory functions taking max_iter.
COLORMAPS = {
    'HSB': create_colormap_hsb,
    'Hot': create_colormap_hot,
    'Ocean': create_colormap_ocean,
    'Grayscale': create_colormap_grayscale,
}


def get_colormap(name, max_iter):
    """
    Build a colormap by name.

    Args:
        name: Key from COLORMAPS dictionary
        max_iter: Iteration budget; the table has max_iter + 1 entries

    Returns:
        ColorMap

    Raises:
        KeyError if name not found
    """
    return ColorMap(COLORMAPS[name](max_iter))


def list_colormap_names():
    """Get list of available colormap names."""
    return list(COLORMAPS.keys())
