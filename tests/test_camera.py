import math

import pytest

from fractal_viewer.camera import Camera, View


def target_world(camera, px, py, width, height):
    view = View(camera.target_zoom, camera.target_offset_x,
                camera.target_offset_y, camera.pan_sign)
    return view.to_world(px, py, width, height)


def test_view_center_and_inverse():
    view = View(200.0, 0.5, -0.25)
    assert view.center == (0.5, -0.25)
    assert view.to_world(400, 400, 800, 800) == pytest.approx((0.5, -0.25))
    wx, wy = view.to_world(123, 456, 800, 800)
    assert view.to_screen(wx, wy, 800, 800) == pytest.approx((123, 456))


def test_figure_view_offsets_follow_positive_pan():
    view = View(1.0, 10.0, 0.0, pan_sign=1)
    assert view.center == (-10.0, 0.0)


@pytest.mark.parametrize("kwargs", [
    {"zoom": 0},
    {"damping": 0},
    {"damping": 1.1},
    {"zoom_step": 1.0},
    {"pan_sign": 0},
    {"pan_sign": (1, 0)},
])
def test_invalid_arguments(kwargs):
    with pytest.raises(ValueError):
        Camera(**kwargs)


def test_convergence_bound():
    camera = Camera(zoom=200.0, damping=0.1, epsilon=0.01)
    camera.target_zoom = 300.0
    camera.target_offset_x = 2.0
    camera.target_offset_y = -1.0

    bound = math.ceil(math.log(0.01 / 100.0) / math.log(0.9))
    moves = 0
    while camera.tick():
        moves += 1
        assert moves <= bound
    assert camera.settled
    assert abs(camera.zoom - 300.0) <= 0.01


def test_tick_is_monotone_and_does_not_overshoot():
    camera = Camera(zoom=200.0)
    camera.target_zoom = 300.0
    previous = camera.zoom
    while camera.tick():
        assert previous < camera.zoom <= 300.0
        previous = camera.zoom


def test_settled_tick_is_idempotent():
    camera = Camera()
    camera.target_zoom = 250.0
    while camera.tick():
        pass
    state = camera.snapshot()
    for _ in range(5):
        assert not camera.tick()
    assert camera.snapshot() == state


@pytest.mark.parametrize("pan_sign", [-1, 1, (1, -1)])
@pytest.mark.parametrize("zoom_in", [True, False])
def test_zoom_keeps_cursor_point_fixed(pan_sign, zoom_in):
    camera = Camera(zoom=200.0, pan_sign=pan_sign)
    camera.pan(37, -12)
    before = target_world(camera, 610, 150, 800, 600)

    camera.zoom_at(610, 150, 800, 600, zoom_in=zoom_in)
    expected_zoom = 300.0 if zoom_in else 200.0 / 1.5
    assert camera.target_zoom == pytest.approx(expected_zoom)
    assert target_world(camera, 610, 150, 800, 600) == pytest.approx(before)

    while camera.tick():
        pass
    # Within epsilon of the target after the animation settles
    world = camera.snapshot().to_world(610, 150, 800, 600)
    assert world == pytest.approx(before, abs=0.02)


def test_repeated_clicks_compound_on_targets():
    camera = Camera(zoom=200.0)
    camera.zoom_at(400, 400, 800, 800)
    camera.zoom_at(400, 400, 800, 800)
    assert camera.target_zoom == pytest.approx(450.0)
    # Nothing moved yet: clicks only change targets
    assert camera.zoom == 200.0


@pytest.mark.parametrize("pan_sign", [-1, 1, (1, -1)])
def test_pan_is_immediate_and_grabs_the_point(pan_sign):
    camera = Camera(zoom=200.0, pan_sign=pan_sign)
    grabbed = camera.snapshot().to_world(100, 100, 800, 800)

    camera.pan(30, -20)
    assert camera.offset_x == camera.target_offset_x
    assert camera.offset_y == camera.target_offset_y
    assert camera.settled
    # The point under the pointer moved with it
    assert camera.snapshot().to_world(130, 80, 800, 800) == pytest.approx(grabbed)


def test_escape_time_pan_direction():
    camera = Camera(zoom=200.0, pan_sign=-1)
    camera.pan(20, 0)
    assert camera.offset_x == pytest.approx(-0.1)


def test_reset_and_home():
    camera = Camera(zoom=200.0)
    camera.zoom_at(10, 10, 800, 800)
    camera.pan(50, 50)
    camera.home()
    assert camera.target_zoom == 200.0
    assert (camera.target_offset_x, camera.target_offset_y) == (0.0, 0.0)
    assert camera.offset_x != 0.0

    camera.reset()
    assert camera.snapshot() == View(200.0, 0.0, 0.0, -1)


def test_per_axis_pan_sign():
    assert View(1.0, 2.0, 3.0, pan_sign=(1, -1)).center == (-2.0, 3.0)
    assert View(1.0, 0.0, 0.0, pan_sign=1).pan_sign == (1, 1)

    camera = Camera(zoom=2.0, pan_sign=(1, -1))
    camera.pan(10, 10)
    assert camera.offset_x == pytest.approx(5.0)
    assert camera.offset_y == pytest.approx(-5.0)
