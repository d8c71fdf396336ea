import numpy as np
import pytest

from fractal_viewer.colormaps import (
    COLORMAPS, ColorMap, get_colormap, list_colormap_names
)


@pytest.mark.parametrize("name", list(COLORMAPS))
def test_table_length_and_black_sentinel(name):
    colormap = get_colormap(name, 50)
    assert len(colormap) == 51
    assert colormap.max_iter == 50
    assert colormap.colors.dtype == np.uint8
    assert tuple(colormap[50]) == (0, 0, 0)


def test_hsb_entries():
    colormap = get_colormap("HSB", 1000)
    # Brightness i / (i + 8) is zero at i = 0
    assert tuple(colormap[0]) == (0, 0, 0)
    # hue 8/256, brightness 0.5
    assert tuple(colormap[8]) == (128, 24, 0)
    assert tuple(colormap[1000]) == (0, 0, 0)


def test_colormap_is_read_only():
    colormap = get_colormap("Grayscale", 10)
    with pytest.raises(ValueError):
        colormap.colors[0] = (1, 2, 3)


def test_last_entry_forced_black():
    colormap = ColorMap([[255, 255, 255]] * 4)
    assert tuple(colormap[3]) == (0, 0, 0)
    assert tuple(colormap[2]) == (255, 255, 255)


def test_bad_shape_rejected():
    with pytest.raises(ValueError):
        ColorMap([[1, 2, 3]])
    with pytest.raises(ValueError):
        ColorMap(np.zeros((4, 4)))


def test_unknown_name():
    with pytest.raises(KeyError):
        get_colormap("Rainbow", 10)
    assert "HSB" in list_colormap_names()
