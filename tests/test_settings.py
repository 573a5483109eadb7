"""Tests for the persistent JSON settings file."""

import json
import os

import pytest

from audiovizgui import settings


@pytest.fixture
def config_home(tmp_path, monkeypatch):
    monkeypatch.setattr(settings.platform, "system", lambda: "Linux")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    return tmp_path


def _write(path, payload):
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(payload)


class TestConfigPath:

    def test_linux_uses_xdg(self, config_home):
        assert settings.config_path() == str(
            config_home / "audioviz" / "audioviz.config.json")


class TestLoadConfig:

    def test_first_launch_creates_defaults(self, config_home):
        cfg = settings.load_config()
        assert cfg == settings.build_defaults()
        assert os.path.isfile(settings.config_path())

    def test_missing_keys_are_merged(self, config_home):
        _write(settings.config_path(),
               json.dumps({"spectrum": {"bar_count": 32}}))
        cfg = settings.load_config()
        assert cfg["spectrum"]["bar_count"] == 32
        assert cfg["spectrum"]["bar_spacing"] == 2.0
        assert cfg["gui"]["scale_factor"] == 1.0
        with open(settings.config_path(), encoding="utf-8") as f:
            assert json.load(f)["circular"]["bar_count"] == 128

    def test_unknown_keys_dropped(self, config_home):
        _write(settings.config_path(),
               json.dumps({"spectrum": {"colour": "red"}, "extra": {}}))
        cfg = settings.load_config()
        assert "colour" not in cfg["spectrum"]
        assert "extra" not in cfg

    def test_corrupt_file_is_backed_up(self, config_home):
        path = settings.config_path()
        _write(path, "{not json")
        cfg = settings.load_config()
        assert cfg == settings.build_defaults()
        assert os.path.isfile(path + ".bak")

    def test_non_object_root_is_backed_up(self, config_home):
        path = settings.config_path()
        _write(path, "[1, 2]")
        settings.load_config()
        assert os.path.isfile(path + ".bak")

    def test_invalid_values_reset_but_gui_survives(self, config_home):
        _write(settings.config_path(), json.dumps({
            "display": {"fps": 0},
            "gui": {"last_directory": "/music"},
        }))
        cfg = settings.load_config()
        assert cfg["display"]["fps"] == 60
        assert cfg["gui"]["last_directory"] == "/music"


def test_save_round_trip(config_home):
    cfg = settings.build_defaults()
    cfg["gui"]["last_directory"] = "/tmp/x"
    path = settings.save_config(cfg)
    with open(path, encoding="utf-8") as f:
        assert json.load(f) == cfg
