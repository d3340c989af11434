import configparser
from pathlib import Path

from match_ui.ui_config import DEFAULT_THEME, THEME_ORDER

SETTINGS_PATH = Path(__file__).with_name("settings.ini")

DEFAULT_SETTINGS = {
    "onboarding_completed": "false",
    "theme_name": DEFAULT_THEME,
    "sound_enabled": "true",
    "haptic_enabled": "true",
}

_BOOL_KEYS = ("onboarding_completed", "sound_enabled", "haptic_enabled")
_TRUE = ("1", "true", "yes", "on")
_FALSE = ("0", "false", "no", "off")


def _as_bool_text(value, default: str) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    text = str(value).strip().lower()
    if text in _TRUE:
        return "true"
    if text in _FALSE:
        return "false"
    return default


def _sanitize(settings):
    data = dict(DEFAULT_SETTINGS)
    data.update({k: v for k, v in settings.items() if k in DEFAULT_SETTINGS})

    for key in _BOOL_KEYS:
        data[key] = _as_bool_text(data[key], DEFAULT_SETTINGS[key])

    theme = str(data["theme_name"]).strip()
    if theme not in THEME_ORDER:
        theme = DEFAULT_SETTINGS["theme_name"]
    data["theme_name"] = theme
    return data


def as_bool(settings, key) -> bool:
    return _sanitize(settings)[key] == "true"


def _resolve(path) -> Path:
    return Path(path) if path is not None else SETTINGS_PATH


def load_settings(path=None):
    path = _resolve(path)
    parser = configparser.ConfigParser()
    if not path.exists():
        return dict(DEFAULT_SETTINGS)
    try:
        parser.read(path, encoding="utf-8")
    except Exception:
        return dict(DEFAULT_SETTINGS)
    if "ui" not in parser:
        return dict(DEFAULT_SETTINGS)
    raw = {key: parser["ui"].get(key, DEFAULT_SETTINGS[key]) for key in DEFAULT_SETTINGS}
    return _sanitize(raw)


def save_settings(settings, path=None):
    path = _resolve(path)
    data = _sanitize(settings)
    parser = configparser.ConfigParser()
    parser["ui"] = data
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        parser.write(f)


def update_setting(key, value, path=None):
    settings = load_settings(path)
    settings[key] = value
    save_settings(settings, path)
    return _sanitize(settings)
