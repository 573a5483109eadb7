"""Persistent GUI configuration (audioviz.config.json).

On first launch the file is created in the OS-specific user preferences
directory with all built-in defaults.  On subsequent launches it is
loaded, merged with the current defaults so that newly added keys always
receive a value, and validated.

The config file is organised by section::

    {
        "analysis": { ... },     # analyser + amplitude chart ranges
        "spectrum": { ... },     # frequency bar renderer
        "circular": { ... },     # circular renderer
        "display":  { ... },     # frame rate, tooltip debounce
        "gui":      { ... },     # window-level preferences
    }

Locations:
    Windows : %APPDATA%\\audioviz\\audioviz.config.json
    macOS   : ~/Library/Application Support/audioviz/audioviz.config.json
    Linux   : $XDG_CONFIG_HOME/audioviz/audioviz.config.json
              (defaults to ~/.config/audioviz/audioviz.config.json)
"""

from __future__ import annotations

import copy
import json
import logging
import os
import platform
from typing import Any

from audiovizlib.config import (
    SECTIONS,
    build_structured_defaults,
    validate_structured_config,
)

log = logging.getLogger(__name__)

CONFIG_FILENAME = "audioviz.config.json"

_GUI_DEFAULTS: dict[str, Any] = {
    "scale_factor": 1.0,
    "last_directory": "",
}


# ---------------------------------------------------------------------------
# Path helpers
# ---------------------------------------------------------------------------

def _config_dir() -> str:
    """Return the OS-specific configuration directory for AudioViz."""
    system = platform.system()
    if system == "Windows":
        base = os.environ.get("APPDATA")
        if not base:
            base = os.path.expanduser("~")
        return os.path.join(base, "audioviz")
    elif system == "Darwin":
        return os.path.join(
            os.path.expanduser("~"),
            "Library",
            "Application Support",
            "audioviz",
        )
    else:  # Linux / BSD / …
        base = os.environ.get("XDG_CONFIG_HOME")
        if not base:
            base = os.path.join(os.path.expanduser("~"), ".config")
        return os.path.join(base, "audioviz")


def config_path() -> str:
    """Return the full path to the GUI config file."""
    return os.path.join(_config_dir(), CONFIG_FILENAME)


def build_defaults() -> dict[str, Any]:
    defaults = build_structured_defaults()
    defaults["gui"] = copy.deepcopy(_GUI_DEFAULTS)
    return defaults


# ---------------------------------------------------------------------------
# Load / Save
# ---------------------------------------------------------------------------

def load_config() -> dict[str, Any]:
    """Load the structured config, creating it with defaults if needed.

    If the file is corrupt or fails validation it is backed up as
    ``*.bak`` and recreated from defaults (the ``gui`` section survives a
    validation failure).
    """
    path = config_path()
    defaults = build_defaults()

    if not os.path.isfile(path):
        log.info("Config file not found, creating %s", path)
        save_config(defaults)
        return copy.deepcopy(defaults)

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError) as exc:
        log.warning("Cannot read config (%s), recreating from defaults", exc)
        _backup_corrupt(path)
        save_config(defaults)
        return copy.deepcopy(defaults)

    if not isinstance(data, dict):
        log.warning("Config root is %s, expected object, recreating",
                    type(data).__name__)
        _backup_corrupt(path)
        save_config(defaults)
        return copy.deepcopy(defaults)

    merged = _merge_structured(defaults, data)

    errors = validate_structured_config(merged)
    if errors:
        msgs = "; ".join(f"{e.key}: {e.message}" for e in errors)
        log.warning("Config validation failed (%s), resetting to defaults", msgs)
        _backup_corrupt(path)
        defaults["gui"] = copy.deepcopy(merged.get("gui", _GUI_DEFAULTS))
        save_config(defaults)
        return copy.deepcopy(defaults)

    if merged != data:
        save_config(merged)
    return merged


def save_config(config: dict[str, Any]) -> str:
    """Save a structured config to the user preferences file.

    Returns the path written.
    """
    path = config_path()
    os.makedirs(os.path.dirname(path), exist_ok=True)

    with open(path, "w", encoding="utf-8") as f:
        json.dump(config, f, indent=4, ensure_ascii=False)
        f.write("\n")

    log.info("Config saved to %s", path)
    return path


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _merge_structured(
    defaults: dict[str, Any],
    overrides: dict[str, Any],
) -> dict[str, Any]:
    """Merge *overrides* into *defaults* one section deep.

    Unknown sections and unknown keys inside the renderer sections are
    dropped.  The ``gui`` section accepts any key.
    """
    merged = copy.deepcopy(defaults)

    for name in SECTIONS:
        section = overrides.get(name)
        if not isinstance(section, dict):
            continue
        target = merged[name]
        for k, v in section.items():
            if k in target:
                target[k] = v

    if isinstance(overrides.get("gui"), dict):
        merged["gui"].update(overrides["gui"])

    return merged


def _backup_corrupt(path: str) -> None:
    """Rename a corrupt config file to ``*.bak``."""
    backup = path + ".bak"
    try:
        if os.path.isfile(backup):
            os.remove(backup)
        os.rename(path, backup)
        log.info("Backed up corrupt config to %s", backup)
    except OSError as exc:
        log.warning("Could not back up %s: %s", path, exc)
