import json
import logging

from core.settings_manager import (
    DEFAULT_SETTINGS,
    BUNDLED_DATA_DIR,
    configure_logging,
    data_dir,
    load_settings,
    resolve_data_path,
    save_settings,
    settings_file,
)


def test_defaults_when_file_missing(tmp_path):
    assert load_settings(tmp_path / "absent.json") == DEFAULT_SETTINGS


def test_defaults_when_file_unreadable(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text("{oops", encoding="utf-8")
    assert load_settings(path) == DEFAULT_SETTINGS


def test_defaults_when_not_a_dict(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text("[1, 2]", encoding="utf-8")
    assert load_settings(path) == DEFAULT_SETTINGS


def test_saved_values_merge_over_defaults(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"missing_field_placeholder": "n/a", "log_level": "debug"}), encoding="utf-8")
    settings = load_settings(path)
    assert settings["missing_field_placeholder"] == "n/a"
    assert settings["log_level"] == "DEBUG"
    assert settings["characters_file"] == DEFAULT_SETTINGS["characters_file"]


def test_bad_values_normalized(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"log_level": "LOUD", "missing_field_placeholder": 3}), encoding="utf-8")
    settings = load_settings(path)
    assert settings["log_level"] == "INFO"
    assert settings["missing_field_placeholder"] == ""


def test_save_then_load(tmp_path):
    path = tmp_path / "nested" / "settings.json"
    settings = dict(DEFAULT_SETTINGS, show_debug_button=False)
    save_settings(settings, path)
    assert load_settings(path)["show_debug_button"] is False


def test_resolve_data_path(tmp_path, monkeypatch):
    monkeypatch.delenv("ROSTER_DATA_DIR", raising=False)
    assert resolve_data_path("characters.json") == BUNDLED_DATA_DIR / "characters.json"
    assert resolve_data_path(tmp_path) == tmp_path


def test_data_dir_follows_env(tmp_path, monkeypatch):
    monkeypatch.setenv("ROSTER_DATA_DIR", str(tmp_path))
    assert data_dir() == tmp_path
    assert settings_file() == tmp_path / "user_settings.json"
    assert resolve_data_path("characters.json") == tmp_path / "characters.json"


def test_save_and_load_use_data_dir(tmp_path, monkeypatch):
    monkeypatch.setenv("ROSTER_DATA_DIR", str(tmp_path))
    save_settings(dict(DEFAULT_SETTINGS, missing_field_placeholder="?"))
    assert (tmp_path / "user_settings.json").exists()
    assert load_settings()["missing_field_placeholder"] == "?"


def test_configure_logging_sets_level():
    root = logging.getLogger()
    before = root.level
    try:
        configure_logging({"log_level": "WARNING"})
        assert root.level == logging.WARNING
    finally:
        root.setLevel(before)
