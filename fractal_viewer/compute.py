"""
Escape-time fractal computation using Numba JIT compilation.

The kernels are compiled with nogil=True so the tile renderer's worker
threads run them in parallel. Iteration counts follow a countdown
convention: the counter starts at max_iter and is decremented once per
iteration of z <- z^2 + c while |z|^2 < 4.

    - never escaped (budget exhausted inside the bound): max_iter
    - escaped: the remaining counter, so fast escapes score high
      (c = 2 escapes after one step and scores max_iter - 1)
"""

import numpy as np
from numba import jit


ESCAPE_RADIUS_SQ = 4.0


@jit(nopython=True, nogil=True, cache=True)
def escape_time(zr, zi, cr, ci, max_iter):
    """
    Iterate z <- z^2 + c from z0 = zr + i*zi.

    Returns:
        max_iter for a bounded orbit, otherwise the remaining counter
        (capped at max_iter - 1 for a z0 that starts outside the bound)
    """
    iteration = max_iter
    while zr * zr + zi * zi < ESCAPE_RADIUS_SQ and iteration > 0:
        zr, zi = zr * zr - zi * zi + cr, 2.0 * zr * zi + ci
        iteration -= 1
    if zr * zr + zi * zi < ESCAPE_RADIUS_SQ:
        return max_iter
    return min(iteration, max_iter - 1)


@jit(nopython=True, nogil=True, cache=True)
def mandelbrot(cr, ci, max_iter):
    """Escape time of c = cr + i*ci starting from z0 = 0."""
    return escape_time(0.0, 0.0, cr, ci, max_iter)


@jit(nopython=True, nogil=True, cache=True)
def julia(zr, zi, cr, ci, max_iter):
    """Escape time of z0 = zr + i*zi for the fixed constant c = cr + i*ci."""
    return escape_time(zr, zi, cr, ci, max_iter)


@jit(nopython=True, nogil=True, cache=True)
def paint_escape_tile(out, x0, x1, y0, y1, center_x, center_y, zoom,
                      max_iter, is_julia, cr, ci, colors):
    """
    Color the pixels [x0, x1) x [y0, y1) of out in place.

    Args:
        out: (height, width, 3) uint8 frame buffer
        x0, x1, y0, y1: Tile bounds in pixels (half-open)
        center_x, center_y: Fractal-space point under the screen center
        zoom: Pixels per fractal-space unit
        max_iter: Iteration budget
        is_julia: Pixel is z0 (Julia) instead of c (Mandelbrot)
        cr, ci: Julia constant (ignored for Mandelbrot)
        colors: (max_iter + 1, 3) uint8 color table
    """
    half_w = out.shape[1] / 2.0
    half_h = out.shape[0] / 2.0
    for y in range(y0, y1):
        fy = (y - half_h) / zoom + center_y
        for x in range(x0, x1):
            fx = (x - half_w) / zoom + center_x
            if is_julia:
                iteration = escape_time(fx, fy, cr, ci, max_iter)
            else:
                iteration = escape_time(0.0, 0.0, fx, fy, max_iter)
            out[y, x, 0] = colors[iteration, 0]
            out[y, x, 1] = colors[iteration, 1]
            out[y, x, 2] = colors[iteration, 2]


@jit(nopython=True, cache=True)
def fern_points(count, seed):
    """
    Barnsley fern by the chaos game.

    Returns:
        (count, 2) float64 array of fern-space points (y up)
    """
    np.random.seed(seed)
    points = np.empty((count, 2), dtype=np.float64)
    x = 0.0
    y = 0.0
    for i in range(count):
        r = np.random.random()
        if r < 0.01:
            x, y = 0.0, 0.16 * y
        elif r < 0.86:
            x, y = 0.85 * x + 0.04 * y, -0.04 * x + 0.85 * y + 1.6
        elif r < 0.93:
            x, y = 0.2 * x - 0.26 * y, 0.23 * x + 0.22 * y + 1.6
        else:
            x, y = -0.15 * x + 0.28 * y, 0.26 * x + 0.24 * y + 0.44
        points[i, 0] = x
        points[i, 1] = y
    return points


def warmup_jit(colors):
    """
    Warm up JIT compilation with small dummy arrays.

    Call this once at startup to pre-compile the Numba functions,
    avoiding a delay on the first frame.

    Args:
        colors: A color table to use for warming up paint_escape_tile
    """
    max_iter = colors.shape[0] - 1
    dummy = np.zeros((4, 4, 3), dtype=np.uint8)
    paint_escape_tile(dummy, 0, 4, 0, 4, 0.0, 0.0, 2.0, max_iter, False, 0.0, 0.0, colors)
    paint_escape_tile(dummy, 0, 4, 0, 4, 0.0, 0.0, 2.0, max_iter, True, -0.7, 0.27015, colors)
    mandelbrot(0.0, 0.0, 1)
    julia(0.0, 0.0, 0.0, 0.0, 1)
    fern_points(1, 0)
