import threading

import numpy as np
import pytest

from fractal_viewer.renderer import RenderRegion, TileRenderer, render_inline


def leaf_count(region, threshold):
    if region.area <= threshold:
        return 1
    return sum(leaf_count(child, threshold) for child in region.split())


@pytest.fixture
def tiles():
    renderer = TileRenderer(threshold=1000, max_workers=4)
    yield renderer
    renderer.shutdown()


def test_split_partitions_the_region():
    region = RenderRegion(3, 104, 7, 58)
    children = region.split()
    assert len(children) == 4
    counts = np.zeros((58, 104), dtype=int)
    for child in children:
        counts[child.y0:child.y1, child.x0:child.x1] += 1
    assert (counts[7:58, 3:104] == 1).all()
    assert counts.sum() == region.area


def test_split_order_is_row_major():
    tl, tr, bl, br = RenderRegion(0, 10, 0, 10).split()
    assert (tl.x0, tl.y0) == (0, 0)
    assert (tr.x0, tr.y0) == (5, 0)
    assert (bl.x0, bl.y0) == (0, 5)
    assert (br.x0, br.y0) == (5, 5)


def test_thin_strip_splits_in_two():
    children = RenderRegion(0, 1, 0, 20000).split()
    assert len(children) == 2
    assert sum(child.area for child in children) == 20000


def test_empty_region_rejected():
    with pytest.raises(ValueError):
        RenderRegion(5, 5, 0, 10)


def test_threshold_must_be_positive():
    with pytest.raises(ValueError):
        TileRenderer(threshold=0)


def test_every_pixel_painted_once(tiles):
    region = RenderRegion.full(200, 150)
    counts = np.zeros((150, 200), dtype=int)
    completions = []

    def paint(tile):
        assert tile.area <= 1000
        counts[tile.y0:tile.y1, tile.x0:tile.x1] += 1

    def on_complete(job):
        completions.append((counts == 1).all())

    job = tiles.render(region, paint, on_complete)
    assert job.wait(10)
    assert job.done
    assert job.error is None
    assert completions == [True]
    assert job.tiles == leaf_count(region, 1000)


def test_small_region_is_one_tile(tiles):
    seen = []
    job = tiles.render(RenderRegion.full(20, 20), seen.append)
    assert job.wait(10)
    assert seen == [RenderRegion(0, 20, 0, 20)]
    assert job.tiles == 1


def test_default_threshold_splits_800x800():
    region = RenderRegion.full(800, 800)
    # 800x800 -> 400x400 -> 200x200 -> 100x100 (10000) -> 50x50
    assert leaf_count(region, 8000) == 256


def test_failing_tile_is_reported_once(tiles):
    completions = []

    def paint(tile):
        if tile.x0 == 0 and tile.y0 == 0:
            raise RuntimeError("boom")

    job = tiles.render(RenderRegion.full(100, 100), paint, completions.append)
    assert job.wait(10)
    assert isinstance(job.error, RuntimeError)
    assert completions == [job]
    assert job.tiles == leaf_count(RenderRegion.full(100, 100), 1000)


def test_workers_run_concurrently():
    # Two leaves meet at a barrier: only passes if they overlap in time
    barrier = threading.Barrier(2, timeout=10)
    with TileRenderer(threshold=50, max_workers=2) as renderer:
        job = renderer.render(RenderRegion(0, 1, 0, 100), lambda tile: barrier.wait())
        assert job.wait(10)
    assert job.error is None


def test_render_inline():
    seen = []
    completions = []
    job = render_inline(RenderRegion.full(300, 300), seen.append, completions.append)
    assert job.done
    assert seen == [RenderRegion(0, 300, 0, 300)]
    assert completions == [job]


class ClosingRenderer(TileRenderer):
    """Refuses new work after a fixed number of submissions."""

    def __init__(self, limit, **kwargs):
        super().__init__(**kwargs)
        self.limit = limit
        self.submitted = 0

    def _submit(self, task, paint):
        self.submitted += 1
        if self.submitted > self.limit:
            raise RuntimeError("cannot schedule new futures after shutdown")
        super()._submit(task, paint)


def test_shutdown_during_split_still_completes():
    painted = []
    completions = []
    with ClosingRenderer(2, threshold=2500, max_workers=2) as renderer:
        job = renderer.render(RenderRegion.full(100, 100), painted.append, completions.append)
        assert job.wait(10)
    # Root and the first quadrant went out; the other three never ran
    assert isinstance(job.error, RuntimeError)
    assert completions == [job]
    assert painted == [RenderRegion(0, 50, 0, 50)]
    assert job.tiles == 4
