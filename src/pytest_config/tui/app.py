"""Textual application hosting the pytest settings panel.

// [LAW:locality-or-seam] Thin coordinator: form values -> form_model -> workspace_args.
"""

from __future__ import annotations

import logging
from pathlib import Path

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.css.query import NoMatches
from textual.widgets import Footer, Header, Static

import pytest_config.app.form_model
import pytest_config.app.workspace_args
import pytest_config.io.environment
import pytest_config.io.settings
from pytest_config.core.pytest_args import PytestConfig, encode
from pytest_config.tui.pytest_config_panel import PytestConfigPanel

logger = logging.getLogger(__name__)

_SAVE_ERRORS = (
    pytest_config.app.workspace_args.NoWorkspaceError,
    pytest_config.io.settings.SettingsFileError,
    OSError,
)


def format_args(args: list[str]) -> str:
    return " ".join(args) if args else "(no arguments)"


class PytestConfigApp(App):
    """TUI for editing the workspace's pytest arguments."""

    TITLE = "Pytest Configuration"

    BINDINGS = [
        Binding("r", "refresh_config", "Refresh"),
        Binding("q", "quit", "Quit"),
    ]

    CSS = """
    #pc-args {
        height: auto;
        padding: 0 2;
        background: $panel-darken-1;
        color: $text-muted;
    }
    """

    def __init__(self, workspace: Path | None, core_count: int | None = None) -> None:
        super().__init__()
        self._workspace = workspace
        count = core_count if core_count is not None else pytest_config.io.environment.cpu_count()
        self._fields = pytest_config.app.form_model.form_fields(count)
        self._config = pytest_config.app.workspace_args.load_config(workspace)

    @property
    def config(self) -> PytestConfig:
        return self._config

    def compose(self) -> ComposeResult:
        yield Header()
        yield PytestConfigPanel(
            fields=self._fields,
            initial_values=pytest_config.app.form_model.render_state(self._config),
            id="pc-panel",
        )
        yield Static(format_args(encode(self._config)), id="pc-args")
        yield Footer()

    def on_mount(self) -> None:
        if self._workspace is not None:
            self.sub_title = str(self._workspace)
        if not pytest_config.app.workspace_args.has_workspace(self._workspace):
            self.notify("No workspace folder found", severity="warning")

    def _update_args_display(self) -> None:
        try:
            self.query_one("#pc-args", Static).update(format_args(encode(self._config)))
        except NoMatches:
            return

    def on_pytest_config_panel_changed(self, msg: PytestConfigPanel.Changed) -> None:
        """Apply a form edit: decode presentation values, encode, persist."""
        config = pytest_config.app.form_model.on_user_edit(msg.values)
        try:
            pytest_config.app.workspace_args.save_config(self._workspace, config)
        except _SAVE_ERRORS as e:
            logger.error("failed to update pytest configuration: %s", e)
            self.notify("Failed to update pytest configuration: {}".format(e), severity="error")
            return
        self._config = config
        self._update_args_display()
        self.notify("Pytest configuration updated successfully")

    def action_refresh_config(self) -> None:
        """Re-read the settings file and re-render the form."""
        self._config = pytest_config.app.workspace_args.load_config(self._workspace)
        panel = self.query_one("#pc-panel", PytestConfigPanel)
        panel.load_values(pytest_config.app.form_model.render_state(self._config))
        self._update_args_display()
        self.notify("Pytest configuration refreshed")
