# settings.py - persisted user preferences
import json
import logging
import os
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

FRONTENDS = ("terminal", "window")

_DEFAULT_SETTINGS = {
    "frontend": "terminal",   # terminal | window
    "recycle_limit": None,    # None = unlimited waste recycles
    "debug_invariants": False,
}


def default_settings() -> Dict[str, Any]:
    return dict(_DEFAULT_SETTINGS)


def _settings_dir() -> str:
    # $KLONDIKE_HOME wins, then %APPDATA% on Windows, else ~/.klondike
    override = os.environ.get("KLONDIKE_HOME")
    if override:
        return override
    base = os.environ.get("APPDATA")
    if base:
        return os.path.join(base, "Klondike")
    return os.path.join(os.path.expanduser("~"), ".klondike")


def settings_path() -> str:
    return os.path.join(_settings_dir(), "settings.json")


def _sanitize(data: Dict[str, Any]) -> Dict[str, Any]:
    out = default_settings()

    frontend = str(data.get("frontend", out["frontend"])).strip().lower()
    if frontend in FRONTENDS:
        out["frontend"] = frontend

    limit = data.get("recycle_limit", out["recycle_limit"])
    if limit is not None:
        try:
            limit = int(limit)
        except (TypeError, ValueError):
            limit = None
        if limit is not None and limit < 0:
            limit = None
    out["recycle_limit"] = limit

    out["debug_invariants"] = bool(data.get("debug_invariants", out["debug_invariants"]))
    return out


def _read_settings(path: str) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        return default_settings()
    except (OSError, ValueError) as exc:
        logger.warning("ignoring unreadable settings file %s: %s", path, exc)
        return default_settings()
    if not isinstance(data, dict):
        logger.warning("ignoring settings file %s: expected a JSON object", path)
        return default_settings()
    return _sanitize(data)


def load_settings(path: Optional[str] = None) -> Dict[str, Any]:
    settings = _read_settings(path or settings_path())
    env_frontend = os.environ.get("KLONDIKE_FRONTEND", "").strip().lower()
    if env_frontend in FRONTENDS:
        settings["frontend"] = env_frontend
    return settings


def save_settings(new_values: Dict[str, Any], path: Optional[str] = None) -> Dict[str, Any]:
    # Merge with what is on disk and write back
    path = path or settings_path()
    current = _read_settings(path)
    current.update({k: new_values[k] for k in _DEFAULT_SETTINGS if k in new_values})
    current = _sanitize(current)
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(current, f, indent=2)
    return current
