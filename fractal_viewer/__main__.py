"""
Allow running the package directly: python -m fractal_viewer [fractal]
"""

import argparse
import sys

from .app import run
from .colormaps import list_colormap_names
from .fractals import list_fractal_names
from .settings import load_settings


def build_parser():
    parser = argparse.ArgumentParser(
        prog='fractal_viewer',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument(
        "fractal",
        nargs="?",
        default="mandelbrot",
        choices=list_fractal_names(),
        help="the fractal to show first (Tab cycles through the others)",
    )
    parser.add_argument("--width", type=int, help="canvas width in pixels")
    parser.add_argument("--height", type=int, help="canvas height in pixels")
    parser.add_argument(
        "--max-iter",
        type=int,
        dest="max_iterations",
        help="iteration budget of the escape-time fractals",
    )
    parser.add_argument(
        "--colormap",
        choices=list_colormap_names(),
        help="color table of the escape-time fractals",
    )
    parser.add_argument(
        "--threshold",
        type=int,
        dest="tile_threshold",
        help="largest tile area (pixels) rendered without splitting",
    )
    parser.add_argument("--workers", type=int, help="worker threads (default: one per CPU)")
    parser.add_argument("--settings", help="settings JSON file to load")
    parser.add_argument(
        "--list",
        action="store_true",
        help="list the available fractals and exit",
    )
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.list:
        for name in list_fractal_names():
            print(name)
        return 0

    settings = load_settings(args.settings).replace(
        width=args.width,
        height=args.height,
        max_iterations=args.max_iterations,
        colormap=args.colormap,
        tile_threshold=args.tile_threshold,
        workers=args.workers,
    )
    try:
        settings.validate()
    except ValueError as e:
        parser.error(str(e))

    run(args.fractal, settings)
    return 0


if __name__ == "__main__":
    sys.exit(main())
