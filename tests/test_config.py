"""Tests for the configuration layer."""

from __future__ import annotations

import json

import pytest

from reorderlist.config import AutoscrollSettings, Config, ListSettings


def test_defaults_without_file():
    config = Config()

    assert config.get_setting("list.spacing") == 1.0
    assert config.get_setting("autoscroll.exp_base") == 1.05
    assert config.get_setting("missing.key", "fallback") == "fallback"
    assert config.get_list_settings() == ListSettings()
    assert config.get_autoscroll_settings() == AutoscrollSettings()


def test_set_setting_emits_signal():
    config = Config()
    changes = []
    config.setting_changed.connect(lambda key, value: changes.append((key, value)))

    config.set_setting("autoscroll.max_power", 20.0)

    assert changes == [("autoscroll.max_power", 20.0)]
    assert config.get_autoscroll_settings().max_power == 20.0


def test_json_file_is_merged_over_defaults(tmp_path):
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps({"autoscroll": {"trigger_distance": 24}, "extra": True}))

    config = Config(str(config_file))

    assert config.get_setting("autoscroll.trigger_distance") == 24
    assert config.get_setting("autoscroll.exp_base") == 1.05
    assert config.get_setting("list.row_height") == 50.0
    assert config.get_setting("extra") is True


def test_unreadable_file_falls_back_to_defaults(tmp_path):
    config_file = tmp_path / "config.json"
    config_file.write_text("{not json")

    config = Config(str(config_file))

    assert config.get_list_settings() == ListSettings()


def test_missing_file_uses_defaults(tmp_path):
    config = Config(str(tmp_path / "absent.json"))

    assert config.get_setting("ui.window_height") == 480
    assert not (tmp_path / "absent.json").exists()


@pytest.mark.parametrize("value", [1.0, 0.5, "steep", None])
def test_invalid_exp_base_falls_back(value):
    config = Config()
    config.set_setting("autoscroll.exp_base", value)

    assert config.get_autoscroll_settings().exp_base == 1.05


def test_negative_spacing_falls_back():
    config = Config()
    config.set_setting("list.spacing", -3)

    assert config.get_list_settings().spacing == 1.0


def test_reset_to_defaults():
    config = Config()
    config.set_setting("list.drag_threshold", 2.0)

    config.reset_to_defaults()

    assert config.get_list_settings().drag_threshold == 8.0


@pytest.mark.parametrize("version", ["2", 1.5, None, True])
def test_invalid_config_version_is_ignored(tmp_path, caplog, version):
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps({"config_version": version, "list": {"spacing": 3}}))

    config = Config(str(config_file))

    assert config.get_setting("config_version") == 1
    assert config.get_list_settings().spacing == 3.0
    assert "invalid config_version" in caplog.text
