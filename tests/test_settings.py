import json

import pytest

from fractal_viewer.settings import ViewerSettings, load_settings


def test_defaults_are_valid():
    settings = ViewerSettings().validate()
    assert settings.width == 800
    assert settings.height == 800
    assert settings.max_iterations == 1000
    assert settings.julia_constant == (-0.7, 0.27015)
    assert settings.tile_threshold == 8000
    assert settings.damping == 0.1
    assert settings.settle_epsilon == 0.01


@pytest.mark.parametrize("overrides", [
    {"zoom_step": 1.0},
    {"zoom_step": 0.0},
    {"damping": 0.0},
    {"damping": 1.5},
    {"settle_epsilon": 0.0},
    {"width": 0},
    {"height": -5},
    {"max_iterations": 0},
    {"tile_threshold": 0},
    {"frame_period_ms": 0},
    {"colormap": "Rainbow"},
    {"workers": 0},
    {"julia_constant": (1.0,)},
])
def test_invalid_settings_raise(overrides):
    with pytest.raises(ValueError):
        ViewerSettings(**overrides).validate()


def test_replace_skips_none():
    settings = ViewerSettings().replace(width=320, height=None, colormap="Hot")
    assert settings.width == 320
    assert settings.height == 800
    assert settings.colormap == "Hot"


def test_from_dict_ignores_unknown_keys(capsys):
    settings = ViewerSettings.from_dict({"width": 640, "sparkles": True})
    assert settings.width == 640
    assert "sparkles" in capsys.readouterr().out


def test_load_missing_file_returns_defaults(tmp_path, capsys):
    settings = load_settings(str(tmp_path / "missing.json"))
    assert settings == ViewerSettings()
    assert "Warning" in capsys.readouterr().out


def test_load_malformed_file_returns_defaults(tmp_path, capsys):
    path = tmp_path / "settings.json"
    path.write_text("{not json")
    assert load_settings(str(path)) == ViewerSettings()
    assert "Warning" in capsys.readouterr().out


def test_load_non_object_returns_defaults(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text("[1, 2, 3]")
    assert load_settings(str(path)) == ViewerSettings()


def test_load_file(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"max_iterations": 256, "julia_constant": [-0.8, 0.156]}))
    settings = load_settings(str(path)).validate()
    assert settings.max_iterations == 256
    assert settings.julia_constant == (-0.8, 0.156)


def test_packaged_settings_load():
    assert load_settings().validate() == ViewerSettings()
