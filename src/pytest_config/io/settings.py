"""Workspace settings file I/O.

Reads and writes the editor-style JSON settings file at
<workspace>/.vscode/settings.json. Only the keys this tool owns are
touched; every other key in the file is preserved on write.

This module is a STABLE BOUNDARY.
Import as: import pytest_config.io.settings
"""

import json
import logging
import os
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)

SETTINGS_DIRNAME = ".vscode"
SETTINGS_FILENAME = "settings.json"


class SettingsFileError(ValueError):
    """The settings file exists but is not a JSON object."""


def get_settings_path(workspace: Path) -> Path:
    """Return path to the workspace settings file."""
    return Path(workspace) / SETTINGS_DIRNAME / SETTINGS_FILENAME


def _read_settings(path: Path) -> dict:
    """Parse the settings file strictly. Missing file is an empty dict."""
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}
    except OSError as e:
        raise SettingsFileError("Cannot read {}: {}".format(path, e)) from e
    if not raw.strip():
        return {}
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise SettingsFileError("Invalid JSON in {}: {}".format(path, e)) from e
    if not isinstance(data, dict):
        raise SettingsFileError("{} root is not an object".format(path))
    return data


def load_settings(workspace: Path) -> dict:
    """Load settings from JSON file. Returns empty dict on missing/corrupt file."""
    path = get_settings_path(workspace)
    try:
        return _read_settings(path)
    except SettingsFileError as e:
        logger.warning("ignoring unreadable settings file: %s", e)
        return {}


def save_settings(workspace: Path, data: dict) -> None:
    """Atomic write of settings dict to JSON file.

    Creates parent directories if needed. Writes to temp file then renames
    to avoid partial writes on crash.
    """
    path = get_settings_path(workspace)
    path.parent.mkdir(parents=True, exist_ok=True)
    # Atomic: write temp → rename
    fd, tmp_path = tempfile.mkstemp(dir=path.parent, suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=4)
            f.write("\n")
        os.replace(tmp_path, path)
    except Exception:
        # Clean up temp file on failure
        try:
            os.unlink(tmp_path)
        except OSError:
            pass
        raise


def load_setting(workspace: Path, key: str, default=None):
    """Load a single setting by key. Returns default if absent."""
    return load_settings(workspace).get(key, default)


def save_setting(workspace: Path, key: str, value) -> None:
    """Save a single setting by key (merge into existing settings).

    Raises SettingsFileError instead of overwriting a file it cannot parse.
    """
    data = _read_settings(get_settings_path(workspace))
    data[key] = value
    save_settings(workspace, data)
    logger.debug("saved setting %s to %s", key, get_settings_path(workspace))
