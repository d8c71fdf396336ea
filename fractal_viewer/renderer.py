"""
Parallel tile renderer.

A render pass covers a rectangular pixel region. Regions larger than the
tile threshold are bisected on both axes and the pieces are rendered as
independent pool tasks; regions at or below the threshold are painted
serially by the worker that owns them. Tiles partition the region, so
workers never write the same pixel.

Parents never block on their children: every split node keeps a count
of unfinished children, and the worker that finishes the last child
finishes the parent. When the root finishes, the job's completion
callback runs exactly once.

Usage:
    with TileRenderer(threshold=8000) as tiles:
        job = tiles.render(RenderRegion(0, 800, 0, 800), paint, on_complete)
        job.wait()
"""

import os
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass


DEFAULT_THRESHOLD = 8000


@dataclass(frozen=True)
class RenderRegion:
    """Half-open pixel rectangle [x0, x1) x [y0, y1)."""

    x0: int
    x1: int
    y0: int
    y1: int

    def __post_init__(self):
        if self.x0 >= self.x1 or self.y0 >= self.y1:
            raise ValueError(f"Empty render region {self}")

    @classmethod
    def full(cls, width, height):
        return cls(0, width, 0, height)

    @property
    def width(self):
        return self.x1 - self.x0

    @property
    def height(self):
        return self.y1 - self.y0

    @property
    def area(self):
        return self.width * self.height

    def split(self):
        """
        Bisect on both axes.

        Returns:
            Four quadrants (top-left, top-right, bottom-left, bottom-right);
            a side of length 1 is not bisected, giving two halves instead.
        """
        xs = (self.x0, self.x1)
        if self.width > 1:
            xs = (self.x0, (self.x0 + self.x1) // 2, self.x1)
        ys = (self.y0, self.y1)
        if self.height > 1:
            ys = (self.y0, (self.y0 + self.y1) // 2, self.y1)
        return [RenderRegion(xs[i], xs[i + 1], ys[j], ys[j + 1])
                for j in range(len(ys) - 1)
                for i in range(len(xs) - 1)]


class RenderJob:
    """
    Handle on one render pass.

    Attributes:
        region: The full region being rendered
        tiles: Number of leaf tiles painted so far
        error: First exception raised by a leaf, or None
    """

    def __init__(self, region, on_complete=None):
        self.region = region
        self.tiles = 0
        self.error = None
        self._on_complete = on_complete
        self._lock = threading.Lock()
        self._done = threading.Event()

    @property
    def done(self):
        return self._done.is_set()

    def wait(self, timeout=None):
        """Block until the pass completes. Returns True if it did."""
        return self._done.wait(timeout)

    def _leaf_finished(self, error=None):
        with self._lock:
            self.tiles += 1
            if error is not None and self.error is None:
                self.error = error

    def _complete(self):
        if self._on_complete is not None:
            self._on_complete(self)
        self._done.set()


class _TileTask:
    """One node of the fork/join tree."""

    __slots__ = ('job', 'region', 'parent', 'pending')

    def __init__(self, job, region, parent=None):
        self.job = job
        self.region = region
        self.parent = parent
        self.pending = 0

    def finish(self):
        task = self
        while True:
            parent = task.parent
            if parent is None:
                task.job._complete()
                return
            with task.job._lock:
                parent.pending -= 1
                last = parent.pending == 0
            if not last:
                return
            task = parent


class TileRenderer:
    """
    Fork/join renderer backed by a thread pool.

    Args:
        threshold: Largest tile area (pixels) painted without splitting
        max_workers: Pool size (default: one thread per CPU)
    """

    def __init__(self, threshold=DEFAULT_THRESHOLD, max_workers=None):
        if threshold < 1:
            raise ValueError(f"threshold must be at least 1 pixel, got {threshold}")
        self.threshold = threshold
        self.max_workers = max_workers or os.cpu_count() or 1
        self.executor = ThreadPoolExecutor(
            max_workers=self.max_workers, thread_name_prefix='tile'
        )

    def render(self, region, paint, on_complete=None):
        """
        Start rendering region asynchronously.

        Args:
            region: RenderRegion to cover
            paint: paint(tile) callable that fills one leaf tile
            on_complete: on_complete(job), called once after every tile

        Returns:
            RenderJob for the pass
        """
        job = RenderJob(region, on_complete)
        self._submit(_TileTask(job, region), paint)
        return job

    def _submit(self, task, paint):
        self.executor.submit(self._run, task, paint)

    def _run(self, task, paint):
        if task.region.area <= self.threshold:
            _paint_leaf(task, paint)
            return
        children = [_TileTask(task.job, r, task) for r in task.region.split()]
        task.pending = len(children)
        for i, child in enumerate(children):
            try:
                self._submit(child, paint)
            except RuntimeError as e:
                # Pool shut down mid-split: resolve the unsubmitted children here
                for orphan in children[i:]:
                    task.job._leaf_finished(e)
                    orphan.finish()
                return

    def shutdown(self, wait=True):
        self.executor.shutdown(wait=wait)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.shutdown()


def _paint_leaf(task, paint):
    try:
        paint(task.region)
    except Exception as e:
        task.job._leaf_finished(e)
    else:
        task.job._leaf_finished()
    task.finish()


def render_inline(region, paint, on_complete=None):
    """Run a whole pass as a single tile in the calling thread."""
    job = RenderJob(region, on_complete)
    _paint_leaf(_TileTask(job, region), paint)
    return job
