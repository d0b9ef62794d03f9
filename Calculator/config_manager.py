# config_manager.py
"""""
Settings for the Big Number Calculator.

Settings live in config.json next to main.py. A missing or unreadable file
falls back to DEFAULT_SETTINGS so the engine always has usable values.
"""""
import json
from pathlib import Path

from . import error as E

config_json = Path(__file__).resolve().parent.parent / "config.json"

DEFAULT_SETTINGS = {
    "decimal_places": 10,
    "debug": False
}


def load_setting_value(key_value):
    settings_dict = dict(DEFAULT_SETTINGS)
    try:
        with open(config_json, 'r', encoding= 'utf-8') as f:
            loaded = json.load(f)

    except (FileNotFoundError, json.JSONDecodeError):
        loaded = {}

    if isinstance(loaded, dict):
        settings_dict.update(loaded)

    if key_value == "all":
        return settings_dict

    else:
        return settings_dict.get(key_value, 0)


def save_setting(settings_dict):
    try:
        with open (config_json, 'w', encoding= 'utf-8') as f:
            json.dump(settings_dict, f, indent=4)
            return settings_dict

    except OSError as e:
        raise E.MathError(f"Settings file could not be written: {config_json}", code="5001") from e
