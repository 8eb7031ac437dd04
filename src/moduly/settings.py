"""Persisted user settings.

Settings live in ``~/.moduly/settings.json`` (``MODULY_HOME`` overrides the
directory). They are process-wide state with an explicit lifecycle: the CLI
calls ``load_settings()`` once at start-up and ``save_settings()`` after a
change. The analysis engine never reads them.
"""

from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path

from .exceptions import ConfigurationError
from .logging_config import get_logger

logger = get_logger(__name__)

SETTINGS_FILENAME = "settings.json"


@dataclass
class UserSettings:
    """User-level toggles that survive between runs.

    Attributes:
        ai_enabled: AI-assisted commit detection switch
    """

    ai_enabled: bool = False


def settings_dir() -> Path:
    """Directory holding the settings file."""
    override = os.environ.get("MODULY_HOME")
    if override:
        return Path(override)
    return Path.home() / ".moduly"


def settings_path() -> Path:
    return settings_dir() / SETTINGS_FILENAME


def load_settings() -> UserSettings:
    """Load settings from disk, falling back to defaults.

    A missing file is normal on first run. A corrupt file is logged and
    ignored rather than blocking the CLI.
    """
    path = settings_path()
    if not path.exists():
        return UserSettings()

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Ignoring unreadable settings file %s: %s", path, e)
        return UserSettings()

    if not isinstance(raw, dict):
        logger.warning("Ignoring malformed settings file %s", path)
        return UserSettings()

    known = {f.name for f in fields(UserSettings)}
    values = {k: v for k, v in raw.items() if k in known}
    if "ai_enabled" in values and not isinstance(values["ai_enabled"], bool):
        logger.warning("Ignoring non-boolean ai_enabled in %s", path)
        del values["ai_enabled"]
    return UserSettings(**values)


def save_settings(settings: UserSettings) -> Path:
    """Write settings to disk and return the file path.

    Raises:
        ConfigurationError: If the settings directory can't be written
    """
    path = settings_path()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(asdict(settings), indent=2) + "\n", encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Cannot write settings to {path}: {e}")
    logger.debug("Saved settings to %s", path)
    return path
