"""Pytest configuration and shared fixtures for pytest-config tests."""

import json
import logging

import pytest

import pytest_config.io.logging_setup


# ---------------------------------------------------------------------------
# Logging isolation
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def isolated_logging(tmp_path, monkeypatch):
    """Send log files to tmp and let each test configure logging afresh."""
    monkeypatch.setenv("PYTEST_CONFIG_LOG_FILE", str(tmp_path / "logs" / "pytest-config.log"))
    monkeypatch.setattr(pytest_config.io.logging_setup, "_RUNTIME", None)
    yield
    logger = logging.getLogger("pytest_config")
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


# ---------------------------------------------------------------------------
# Workspace fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def workspace(tmp_path):
    """An empty workspace folder (no .vscode/settings.json yet)."""
    root = tmp_path / "workspace"
    root.mkdir()
    return root


@pytest.fixture
def settings_path(workspace):
    return workspace / ".vscode" / "settings.json"


@pytest.fixture
def write_settings(settings_path):
    """Write a settings dict (or raw text) to the workspace settings file."""

    def _write(data):
        settings_path.parent.mkdir(parents=True, exist_ok=True)
        text = data if isinstance(data, str) else json.dumps(data, indent=4)
        settings_path.write_text(text, encoding="utf-8")
        return settings_path

    return _write


@pytest.fixture
def read_settings(settings_path):
    def _read():
        return json.loads(settings_path.read_text(encoding="utf-8"))

    return _read
