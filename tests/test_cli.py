"""Tests for the non-interactive CLI paths (--print, --set, --clear)."""

from unittest.mock import MagicMock

import pytest

import pytest_config.cli
import pytest_config.tui.app
from pytest_config.app.workspace_args import PYTEST_ARGS_KEY


def test_print_shows_args_and_fields(workspace, write_settings, capsys):
    write_settings({PYTEST_ARGS_KEY: ["--tb=short", "-v", "--headed"]})
    assert pytest_config.cli.main(["--workspace", str(workspace), "--print"]) == 0
    out = capsys.readouterr().out
    assert "Arguments: --tb=short -v --headed" in out
    assert "Traceback output" in out
    assert "Playwright" in out
    assert "Show browser" in out


def test_set_persists_fields(workspace, read_settings, capsys):
    code = pytest_config.cli.main([
        "--workspace", str(workspace),
        "--set", "verbosity=verbose",
        "--set", "capture-output=on",
        "--set", "traceback_style=short",
    ])
    assert code == 0
    assert read_settings()[PYTEST_ARGS_KEY] == ["--tb=short", "-v", "-s"]
    assert "updated successfully" in capsys.readouterr().out


def test_set_merges_with_stored_config(workspace, write_settings, read_settings):
    write_settings({PYTEST_ARGS_KEY: ["--browser=webkit", "-q"], "other": 1})
    pytest_config.cli.main(["--workspace", str(workspace), "--set", "verbosity=default"])
    data = read_settings()
    assert data[PYTEST_ARGS_KEY] == ["--browser=webkit"]
    assert data["other"] == 1


def test_set_rejects_invalid_value(workspace, settings_path, capsys):
    code = pytest_config.cli.main(["--workspace", str(workspace), "--set", "browser=msedge"])
    assert code == 2
    assert "browser must be one of" in capsys.readouterr().err
    assert not settings_path.exists()


def test_clear_writes_empty_list(workspace, write_settings, read_settings):
    write_settings({PYTEST_ARGS_KEY: ["-s", "--slowmo"]})
    assert pytest_config.cli.main(["--workspace", str(workspace), "--clear"]) == 0
    assert read_settings()[PYTEST_ARGS_KEY] == []


def test_missing_workspace_fails(tmp_path, capsys):
    code = pytest_config.cli.main(["--workspace", str(tmp_path / "nope"), "--clear"])
    assert code == 1
    assert "No workspace folder found" in capsys.readouterr().err


def test_no_flags_runs_tui(workspace, monkeypatch):
    app_cls = MagicMock()
    monkeypatch.setattr(pytest_config.tui.app, "PytestConfigApp", app_cls)
    assert pytest_config.cli.main(["--workspace", str(workspace), "--cores", "4"]) == 0
    app_cls.assert_called_once_with(workspace.resolve(), core_count=4)
    app_cls.return_value.run.assert_called_once_with()


@pytest.mark.parametrize("argv", [["--cores", "x"], ["--bogus"]])
def test_bad_arguments_exit(argv):
    with pytest.raises(SystemExit):
        pytest_config.cli.main(argv)
