"""
Line-drawing fractals rendered synchronously with pygame.draw.

These viewers share the camera/animation contract of the escape-time
fractals but draw a whole frame at once: black figure on a white
background, drawn into a pygame.Surface and copied into the frame
buffer. Figure coordinates are pixels at zoom 1 relative to the screen
center, with the offset following the +1 pan direction (the fern keeps
its y offset y-up):

    screen = size / 2 + (figure + offset) * zoom

Figures whose geometry does not depend on the camera (Koch, dragon,
L-system, tree, fern) are built once and cached as numpy point arrays.
"""

import math

import numpy as np
import pygame

from .compute import fern_points


WHITE = (255, 255, 255)
BLACK = (0, 0, 0)

# Base size of the figures at zoom 1, in pixels
BASE_SIZE = 800

# pygame.draw takes C ints; far off-screen endpoints are clamped to this
COORD_LIMIT = 1e7


class FigureFractal:
    """
    Synchronous figure strategy (same interface as fractals.Fractal).
    """
    name = 'figure'
    title = 'Figure Viewer'
    pan_sign = 1
    initial_zoom = 1.0
    parallel = False

    def paint(self, out, region, view):
        """Draw the figure and copy region of it into out."""
        canvas = pygame.Surface((out.shape[1], out.shape[0]), 0, 32)
        canvas.fill(WHITE)
        self.draw(canvas, view)
        rgb = pygame.surfarray.array3d(canvas).swapaxes(0, 1)
        out[region.y0:region.y1, region.x0:region.x1] = \
            rgb[region.y0:region.y1, region.x0:region.x1]

    def draw(self, canvas, view):
        raise NotImplementedError

    def __repr__(self):
        return f"{type(self).__name__}()"


def to_screen(points, view, canvas):
    """Map (N, 2) figure-space points to screen pixels."""
    w, h = canvas.get_size()
    cx, cy = view.center
    screen = np.empty(points.shape, dtype=np.float64)
    screen[:, 0] = (points[:, 0] - cx) * view.zoom + w / 2.0
    screen[:, 1] = (points[:, 1] - cy) * view.zoom + h / 2.0
    return screen


def drawable(screen):
    return np.clip(screen, -COORD_LIMIT, COORD_LIMIT).tolist()


class SierpinskiTriangle(FigureFractal):
    """Subdivides until a triangle is under two pixels wide on screen."""
    name = 'sierpinski-triangle'
    title = 'Sierpinski Triangle Viewer'
    MAX_DEPTH = 8

    def draw(self, canvas, view):
        s = BASE_SIZE / 2.0
        a, b, c = to_screen(np.array([[-s, s], [s, s], [0.0, -s]]), view, canvas)
        side = b[0] - a[0]
        depth = 0
        while side / 2 ** depth >= 2 and depth < self.MAX_DEPTH:
            depth += 1
        self._draw(canvas, a, b, c, depth)

    def _draw(self, canvas, a, b, c, depth):
        w, h = canvas.get_size()
        xs = (a[0], b[0], c[0])
        ys = (a[1], b[1], c[1])
        if max(xs) < 0 or min(xs) >= w or max(ys) < 0 or min(ys) >= h:
            return
        if depth == 0:
            pygame.draw.polygon(canvas, BLACK, drawable(np.array([a, b, c])), 1)
            return
        ab = (a + b) / 2
        bc = (b + c) / 2
        ca = (c + a) / 2
        self._draw(canvas, a, ab, ca, depth - 1)
        self._draw(canvas, ab, b, bc, depth - 1)
        self._draw(canvas, ca, bc, c, depth - 1)


class SierpinskiCarpet(FigureFractal):
    """
    Per-pixel carpet membership: a pixel is a hole if, at some level,
    both of its base-3 digits are 1.
    """
    name = 'sierpinski-carpet'
    title = 'Sierpinski Carpet Viewer'
    MAX_LEVELS = 30

    def draw(self, canvas, view):
        w, h = canvas.get_size()
        size = BASE_SIZE * view.zoom
        if size < 1:
            return
        half = BASE_SIZE / 2.0
        left, top = to_screen(np.array([[-half, -half]]), view, canvas)[0]
        u = (np.arange(w) + 0.5 - left) / size
        v = (np.arange(h) + 0.5 - top) / size
        filled = (((v >= 0) & (v < 1))[:, np.newaxis]
                  & ((u >= 0) & (u < 1))[np.newaxis, :])

        # Stop once a cell is smaller than a pixel
        levels = min(self.MAX_LEVELS, int(math.log(size, 3)) + 1)
        uu = np.clip(u, 0.0, 1.0)
        vv = np.clip(v, 0.0, 1.0)
        for _ in range(levels):
            uu = uu * 3
            vv = vv * 3
            du = np.floor(uu) == 1
            dv = np.floor(vv) == 1
            filled &= ~(dv[:, np.newaxis] & du[np.newaxis, :])
            uu -= np.floor(uu)
            vv -= np.floor(vv)

        pixels = pygame.surfarray.pixels3d(canvas)
        pixels[filled.T] = BLACK
        del pixels


class KochSnowflake(FigureFractal):
    name = 'koch-snowflake'
    title = 'Koch Snowflake Viewer'
    LEVEL = 5

    def __init__(self):
        size = BASE_SIZE / 1.5
        h = size * math.sqrt(3) / 2
        a = np.array([-size / 2, h / 3])
        b = np.array([size / 2, h / 3])
        c = np.array([0.0, -2 * h / 3])
        points = []
        for start, end in ((a, b), (b, c), (c, a)):
            points.extend(self._curve(start, end, self.LEVEL))
        self.points = np.array(points)

    def _curve(self, p1, p2, level):
        # Polyline from p1 up to (not including) p2
        if level == 0:
            return [p1]
        d = (p2 - p1) / 3
        pa = p1 + d
        pb = p1 + 2 * d
        # Bump: d rotated by 60 degrees away from the inside (y down)
        cos60, sin60 = 0.5, math.sqrt(3) / 2
        pc = pa + np.array([d[0] * cos60 + d[1] * sin60, -d[0] * sin60 + d[1] * cos60])
        points = []
        for s, e in ((p1, pa), (pa, pc), (pc, pb), (pb, p2)):
            points.extend(self._curve(s, e, level - 1))
        return points

    def draw(self, canvas, view):
        pygame.draw.lines(canvas, BLACK, True, drawable(to_screen(self.points, view, canvas)))


class DragonCurve(FigureFractal):
    name = 'dragon-curve'
    title = 'Dragon Curve Viewer'
    FOLDS = 16

    def __init__(self):
        size = BASE_SIZE * 0.8
        start = (-size / 2, size / 3)
        end = (size / 2, size / 3)
        self.points = np.array(self._path(start, end, self.FOLDS))

    def _path(self, p1, p2, folds):
        # Polyline from p1 to p2, both ends included
        if folds == 0:
            return [p1, p2]
        mid = ((p1[0] + p2[0]) / 2 + (p2[1] - p1[1]) / 2,
               (p1[1] + p2[1]) / 2 - (p2[0] - p1[0]) / 2)
        first = self._path(p1, mid, folds - 1)
        second = self._path(p2, mid, folds - 1)
        return first + second[-2::-1]

    def draw(self, canvas, view):
        pygame.draw.lines(canvas, BLACK, False, drawable(to_screen(self.points, view, canvas)))


class LSystem(FigureFractal):
    """
    Turtle drawing of an L-system string.

    The axiom is rewritten DEPTH times; F steps forward, + and - turn by
    TURN degrees, other symbols only drive the rewriting. The turtle
    starts at the origin heading up.
    """
    name = 'l-system'
    title = 'L-System Viewer'
    AXIOM = 'FX'
    RULES = {'X': 'X+YF+', 'Y': '-FX-Y'}
    DEPTH = 6
    STEP = 10.0
    TURN = 90.0

    def __init__(self):
        self.commands = expand_lsystem(self.AXIOM, self.RULES, self.DEPTH)
        self.points = self._walk(self.commands)

    def _walk(self, commands):
        x, y = 0.0, 0.0
        angle = 90.0
        points = [(x, y)]
        for symbol in commands:
            if symbol == 'F':
                # Angles are y-up, figure space is y-down
                x += math.cos(math.radians(angle)) * self.STEP
                y -= math.sin(math.radians(angle)) * self.STEP
                points.append((x, y))
            elif symbol == '+':
                angle += self.TURN
            elif symbol == '-':
                angle -= self.TURN
        return np.array(points).round(9)

    def draw(self, canvas, view):
        pygame.draw.lines(canvas, BLACK, False, drawable(to_screen(self.points, view, canvas)))


def expand_lsystem(axiom, rules, depth):
    """Apply the rewriting rules depth times; unmatched symbols are kept."""
    result = axiom
    for _ in range(depth):
        result = ''.join(rules.get(symbol, symbol) for symbol in result)
    return result


class CantorSet(FigureFractal):
    name = 'cantor-set'
    title = 'Cantor Set Viewer'
    BAR_HEIGHT = 10

    def draw(self, canvas, view):
        w, h = canvas.get_size()
        # First bar starts a third of the way across, 50px down
        x, y = to_screen(np.array([[-w / 6.0, 50 - h / 2.0]]), view, canvas)[0]
        self._draw(canvas, x, y, w * view.zoom / 3)

    def _draw(self, canvas, x, y, length):
        w, h = canvas.get_size()
        if length < 1 or y >= h or x >= w or x + length < 0:
            return
        if y + self.BAR_HEIGHT > 0:
            left = max(x, -1.0)
            right = min(x + length, w + 1.0)
            pygame.draw.rect(canvas, BLACK,
                             pygame.Rect(int(left), int(y), int(right - left), self.BAR_HEIGHT))
        third = length / 3
        self._draw(canvas, x, y + 2 * self.BAR_HEIGHT, third)
        self._draw(canvas, x + 2 * third, y + 2 * self.BAR_HEIGHT, third)


class FractalTree(FigureFractal):
    """Four branches per node (+-20 degrees at 0.75, +-45 at 0.5)."""
    name = 'fractal-tree'
    title = 'Fractal Tree Viewer'
    TRUNK = 100.0
    MIN_LENGTH = 5.0

    def __init__(self):
        segments = []
        self._grow(segments, 0.0, BASE_SIZE / 2.0, -90.0, self.TRUNK)
        self.segments = np.array(segments).reshape(-1, 2)

    def _grow(self, segments, x1, y1, angle, length):
        if length < self.MIN_LENGTH:
            return
        x2 = x1 + math.cos(math.radians(angle)) * length
        y2 = y1 + math.sin(math.radians(angle)) * length
        segments.append(((x1, y1), (x2, y2)))
        self._grow(segments, x2, y2, angle - 20, length * 0.75)
        self._grow(segments, x2, y2, angle + 20, length * 0.75)
        self._grow(segments, x2, y2, angle - 45, length * 0.5)
        self._grow(segments, x2, y2, angle + 45, length * 0.5)

    def draw(self, canvas, view):
        screen = drawable(to_screen(self.segments, view, canvas))
        for i in range(0, len(screen), 2):
            pygame.draw.line(canvas, BLACK, screen[i], screen[i + 1])


class BarnsleyFern(FigureFractal):
    """
    Chaos-game fern; a fixed seed keeps every frame identical.

    The y offset is kept in the fern's y-up space, so it moves against
    the screen delta.
    """
    name = 'barnsley-fern'
    title = 'Barnsley Fern Viewer'
    POINTS = 100000
    SEED = 7
    SCALE = 40.0
    pan_sign = (1, -1)

    def __init__(self):
        fern = fern_points(self.POINTS, self.SEED)
        # Fern space is y-up
        self.points = np.column_stack((fern[:, 0], -fern[:, 1])) * self.SCALE

    def draw(self, canvas, view):
        w, h = canvas.get_size()
        screen = np.floor(to_screen(self.points, view, canvas))
        visible = ((screen[:, 0] >= 0) & (screen[:, 0] < w)
                   & (screen[:, 1] >= 0) & (screen[:, 1] < h))
        screen = screen[visible].astype(np.int64)
        pixels = pygame.surfarray.pixels3d(canvas)
        pixels[screen[:, 0], screen[:, 1]] = BLACK
        del pixels
