"""
Camera model shared by every viewer.

The camera keeps a current and a target value for zoom and for the two
offset axes. Pointer interaction moves the targets; the animation tick
eases the current values toward them with first-order damping. Renders
only ever see an immutable View snapshot of the current values.

Offsets follow the fractal's pan direction flag (pan_sign), one sign per
axis:

    world = (pixel - size / 2) / zoom - pan_sign * offset

With pan_sign = -1 (escape-time fractals) this is the usual
fx = (px - width / 2) / zoom + offset_x. A single sign applies to both
axes; a (sign_x, sign_y) pair sets them separately.
"""

from dataclasses import dataclass


def axis_signs(pan_sign):
    """Normalize a pan direction flag to an (x, y) pair of +-1."""
    if isinstance(pan_sign, (int, float)):
        pan_sign = (pan_sign, pan_sign)
    sign_x, sign_y = pan_sign
    if sign_x not in (-1, 1) or sign_y not in (-1, 1):
        raise ValueError(f"pan_sign must be -1, 1 or a pair of them, got {pan_sign}")
    return int(sign_x), int(sign_y)


@dataclass(frozen=True)
class View:
    """Immutable camera state handed to a render pass."""

    zoom: float
    offset_x: float
    offset_y: float
    pan_sign: tuple = -1

    def __post_init__(self):
        object.__setattr__(self, 'pan_sign', axis_signs(self.pan_sign))

    @property
    def center(self):
        """Fractal-space point under the middle of the screen."""
        sign_x, sign_y = self.pan_sign
        return -sign_x * self.offset_x, -sign_y * self.offset_y

    def to_world(self, px, py, width, height):
        cx, cy = self.center
        return (px - width / 2.0) / self.zoom + cx, (py - height / 2.0) / self.zoom + cy

    def to_screen(self, wx, wy, width, height):
        cx, cy = self.center
        return (wx - cx) * self.zoom + width / 2.0, (wy - cy) * self.zoom + height / 2.0


class Camera:
    """
    Eased zoom/pan state of one viewer.

    Only the UI thread mutates a camera; render passes take a snapshot().
    """

    def __init__(self, zoom=200.0, damping=0.1, epsilon=0.01, zoom_step=1.5,
                 pan_sign=-1):
        if zoom <= 0:
            raise ValueError(f"zoom must be positive, got {zoom}")
        if not 0 < damping <= 1:
            raise ValueError(f"damping must be in (0, 1], got {damping}")
        if zoom_step <= 0 or zoom_step == 1.0:
            raise ValueError(f"zoom_step must be positive and not 1.0, got {zoom_step}")
        self.initial_zoom = float(zoom)
        self.damping = damping
        self.epsilon = epsilon
        self.zoom_step = zoom_step
        self.pan_sign = axis_signs(pan_sign)
        self.reset()

    def reset(self):
        """Jump back to the initial view (current and target)."""
        self.zoom = self.target_zoom = self.initial_zoom
        self.offset_x = self.target_offset_x = 0.0
        self.offset_y = self.target_offset_y = 0.0

    def home(self):
        """Ease back to the initial view (targets only)."""
        self.target_zoom = self.initial_zoom
        self.target_offset_x = 0.0
        self.target_offset_y = 0.0

    def _ease(self, current, target):
        if abs(current - target) > self.epsilon:
            return current + (target - current) * self.damping, True
        return current, False

    def tick(self):
        """
        Advance every axis one damping step toward its target.

        Returns:
            True if any axis moved (a new frame is needed)
        """
        self.zoom, zoom_changed = self._ease(self.zoom, self.target_zoom)
        self.offset_x, x_changed = self._ease(self.offset_x, self.target_offset_x)
        self.offset_y, y_changed = self._ease(self.offset_y, self.target_offset_y)
        return zoom_changed or x_changed or y_changed

    @property
    def settled(self):
        return (abs(self.zoom - self.target_zoom) <= self.epsilon
                and abs(self.offset_x - self.target_offset_x) <= self.epsilon
                and abs(self.offset_y - self.target_offset_y) <= self.epsilon)

    def zoom_at(self, px, py, width, height, zoom_in=True):
        """
        Zoom the target view by zoom_step, keeping the point under the
        cursor fixed once the animation settles.
        """
        old_zoom = self.target_zoom
        ratio = self.zoom_step if zoom_in else 1.0 / self.zoom_step
        new_zoom = old_zoom * ratio

        dx = px - width / 2.0
        dy = py - height / 2.0
        sign_x, sign_y = self.pan_sign
        self.target_offset_x += sign_x * (dx / new_zoom - dx / old_zoom)
        self.target_offset_y += sign_y * (dy / new_zoom - dy / old_zoom)
        self.target_zoom = new_zoom

    def pan(self, dx, dy):
        """Shift the view by a screen delta, immediately (no easing)."""
        sign_x, sign_y = self.pan_sign
        shift_x = sign_x * dx / self.zoom
        shift_y = sign_y * dy / self.zoom
        self.offset_x += shift_x
        self.offset_y += shift_y
        self.target_offset_x += shift_x
        self.target_offset_y += shift_y

    def snapshot(self):
        return View(self.zoom, self.offset_x, self.offset_y, self.pan_sign)

    def __repr__(self):
        return (f"Camera(zoom={self.zoom:.4g}->{self.target_zoom:.4g}, "
                f"offset=({self.offset_x:.4g}, {self.offset_y:.4g})->"
                f"({self.target_offset_x:.4g}, {self.target_offset_y:.4g}))")
