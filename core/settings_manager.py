import json
import logging
import os
from copy import deepcopy
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parent.parent
BUNDLED_DATA_DIR = ROOT_DIR / "data"
DATA_DIR_ENV = "ROSTER_DATA_DIR"
SETTINGS_FILENAME = "user_settings.json"

DEFAULT_SETTINGS = {
    "characters_file": "characters.json",
    # Shown in place of a field the record does not carry.
    "missing_field_placeholder": "",
    "show_debug_button": True,
    "log_level": "INFO",
}

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def data_dir() -> Path:
    """Directory the app reads data from: $ROSTER_DATA_DIR, else the bundled data/."""
    env = os.getenv(DATA_DIR_ENV)
    return Path(env) if env else BUNDLED_DATA_DIR


def settings_file() -> Path:
    return data_dir() / SETTINGS_FILENAME


def resolve_data_path(path) -> Path:
    p = Path(path)
    if p.is_absolute():
        return p
    return data_dir() / p


def load_settings(path=None):
    """Load saved user settings, merged with defaults."""
    source = Path(path) if path else settings_file()
    merged = deepcopy(DEFAULT_SETTINGS)
    if not source.exists():
        return merged

    try:
        with open(source, "r", encoding="utf-8") as f:
            loaded = json.load(f)
    except Exception:
        return merged

    if not isinstance(loaded, dict):
        return merged

    for k, v in loaded.items():
        merged[k] = v

    level = str(merged.get("log_level") or "").upper()
    merged["log_level"] = level if level in LOG_LEVELS else DEFAULT_SETTINGS["log_level"]

    if not isinstance(merged.get("missing_field_placeholder"), str):
        merged["missing_field_placeholder"] = DEFAULT_SETTINGS["missing_field_placeholder"]
    merged["show_debug_button"] = bool(merged.get("show_debug_button"))

    return merged


def save_settings(settings: dict, path=None):
    target = Path(path) if path else settings_file()
    target.parent.mkdir(parents=True, exist_ok=True)
    with open(target, "w", encoding="utf-8") as f:
        json.dump(settings, f, indent=2)


def configure_logging(settings: dict) -> None:
    level = getattr(logging, str(settings.get("log_level", "INFO")).upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger().setLevel(level)
