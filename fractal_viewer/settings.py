"""
Viewer settings for the fractal viewers.

Settings are read from settings.json (next to this module) and can be
overridden from the command line. Every viewer instance gets its own
validated copy.
"""

import json
import os
from dataclasses import dataclass, fields, replace

from .colormaps import COLORMAPS


SETTINGS_PATH = os.path.join(os.path.dirname(__file__), 'settings.json')


@dataclass
class ViewerSettings:
    """
    Configuration surface of one viewer instance.

    Attributes:
        width, height: Canvas size in pixels
        max_iterations: Iteration budget of the escape-time fractals
        julia_constant: (re, im) of the Julia set constant c
        zoom_step: Zoom ratio applied per click (must not be 1.0)
        damping: Fraction of the remaining gap closed per animation tick
        settle_epsilon: Gap below which an axis counts as settled
        tile_threshold: Largest tile area (pixels) painted without splitting
        frame_period_ms: Animation tick period
        colormap: Name of the color table (see colormaps.COLORMAPS)
        workers: Worker pool size (None = one per CPU)
    """
    width: int = 800
    height: int = 800
    max_iterations: int = 1000
    julia_constant: tuple = (-0.7, 0.27015)
    zoom_step: float = 1.5
    damping: float = 0.1
    settle_epsilon: float = 0.01
    tile_threshold: int = 8000
    frame_period_ms: int = 10
    colormap: str = 'HSB'
    workers: int = None

    def __post_init__(self):
        self.julia_constant = tuple(self.julia_constant)

    def validate(self):
        """Raise ValueError if any setting is out of range. Returns self."""
        for name in ('width', 'height', 'max_iterations', 'tile_threshold',
                     'frame_period_ms'):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")
        if not 0 < self.damping <= 1:
            raise ValueError(f"damping must be in (0, 1], got {self.damping}")
        if self.settle_epsilon <= 0:
            raise ValueError(f"settle_epsilon must be positive, got {self.settle_epsilon}")
        # A unit step never changes the view
        if self.zoom_step <= 0 or self.zoom_step == 1.0:
            raise ValueError(f"zoom_step must be positive and not 1.0, got {self.zoom_step}")
        if len(self.julia_constant) != 2:
            raise ValueError(f"julia_constant must be (re, im), got {self.julia_constant}")
        if self.colormap not in COLORMAPS:
            raise ValueError(f"Unknown colormap {self.colormap!r}")
        if self.workers is not None and self.workers <= 0:
            raise ValueError(f"workers must be positive, got {self.workers}")
        return self

    def replace(self, **overrides):
        """Return a copy with the non-None overrides applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes)

    @classmethod
    def from_dict(cls, data):
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            print(f"Warning: Ignoring unknown settings: {', '.join(unknown)}")
        return cls(**{k: v for k, v in data.items() if k in known})


def load_settings(path=None):
    """
    Load viewer settings from a JSON file.

    Args:
        path: Settings file (default: settings.json beside this module)

    Returns:
        ViewerSettings; defaults if the file is missing or malformed
    """
    path = path or SETTINGS_PATH
    try:
        with open(path, 'r') as f:
            data = json.load(f)
    except (FileNotFoundError, json.JSONDecodeError) as e:
        print(f"Warning: Could not load {os.path.basename(path)}: {e}")
        return ViewerSettings()
    if not isinstance(data, dict):
        print(f"Warning: Could not load {os.path.basename(path)}: expected an object")
        return ViewerSettings()
    return ViewerSettings.from_dict(data)
