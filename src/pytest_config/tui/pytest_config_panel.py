"""Pytest settings form panel.

Renders the form-model fields grouped by section. Every edit posts a
Changed message carrying the full presentation values; the app turns
them into a PytestConfig and persists it.

// [LAW:one-source-of-truth] Field list and order come from app.form_model.
// [LAW:locality-or-seam] Panel only maps widgets <-> presentation values.
"""

from __future__ import annotations

from typing import Sequence

from textual.app import ComposeResult
from textual.containers import Horizontal, VerticalScroll
from textual.css.query import NoMatches
from textual.message import Message
from textual.widgets import Label, Static

import pytest_config.app.form_model
from pytest_config.app.form_model import FieldDef
from pytest_config.tui.chip import ToggleChip
from pytest_config.tui.cycle_selector import CycleSelector


def widget_id(field_key: str) -> str:
    return "pc-field-{}".format(field_key.replace("_", "-"))


class PytestConfigPanel(VerticalScroll):
    """Form for the pytest argument settings."""

    DEFAULT_CSS = """
    PytestConfigPanel {
        padding: 1 2;
        height: 1fr;
        background: $panel;
        color: $text;
    }
    PytestConfigPanel .section-title {
        text-style: bold;
        margin-top: 1;
        color: $text-primary;
    }
    PytestConfigPanel .section-title.-first {
        margin-top: 0;
    }
    PytestConfigPanel .field-row {
        height: auto;
        width: 100%;
        margin-top: 1;
    }
    PytestConfigPanel .field-label {
        width: 1fr;
        content-align-vertical: middle;
        color: $text-secondary;
    }
    PytestConfigPanel ToggleChip {
        margin-top: 1;
    }
    PytestConfigPanel CycleSelector {
        width: auto;
        min-width: 20;
    }
    """

    class Changed(Message):
        """Posted after any field edit, with all current presentation values."""

        def __init__(self, values: dict[str, object]) -> None:
            self.values = values
            super().__init__()

    def __init__(
        self,
        *,
        fields: Sequence[FieldDef],
        initial_values: dict | None = None,
        id: str | None = None,
    ) -> None:
        super().__init__(id=id)
        self._fields = tuple(fields)
        self._initial_values = initial_values or {}

    def _make_widget(self, field: FieldDef, value: object) -> ToggleChip | CycleSelector:
        if field.kind == "bool":
            return ToggleChip(field.label, value=bool(value), id=widget_id(field.key))
        selected = str(value) if value else field.absent_option
        options = pytest_config.app.form_model.select_options(field, selected)
        return CycleSelector(options, value=selected, id=widget_id(field.key))

    def compose(self) -> ComposeResult:
        section = None
        for field in self._fields:
            if field.section != section:
                classes = "section-title" if section is not None else "section-title -first"
                section = field.section
                yield Static(section, classes=classes)

            value = self._initial_values.get(field.key, field.absent_option if field.kind == "select" else False)
            widget = self._make_widget(field, value)
            if field.kind == "bool":
                yield widget
            else:
                with Horizontal(classes="field-row"):
                    yield Label(field.label, classes="field-label")
                    yield widget

    def on_mount(self) -> None:
        focusable = self.query("CycleSelector, ToggleChip")
        if focusable:
            focusable.first().focus()

    def collect_values(self) -> dict[str, object]:
        values: dict[str, object] = {}
        for field in self._fields:
            try:
                widget = self.query_one("#{}".format(widget_id(field.key)))
            except NoMatches:
                continue
            values[field.key] = widget.value
        return values

    def load_values(self, values: dict[str, object]) -> None:
        """Push presentation values into the widgets without posting Changed."""
        for field in self._fields:
            if field.key not in values:
                continue
            value = values[field.key]
            if field.kind == "bool":
                self.query_one("#{}".format(widget_id(field.key)), ToggleChip).set_value(bool(value))
            else:
                selector = self.query_one("#{}".format(widget_id(field.key)), CycleSelector)
                selector.set_options(
                    pytest_config.app.form_model.select_options(field, value),
                    value=str(value),
                )

    def _post_changed(self) -> None:
        self.post_message(self.Changed(self.collect_values()))

    def on_cycle_selector_changed(self, event: CycleSelector.Changed) -> None:
        event.stop()
        self._post_changed()

    def on_toggle_chip_changed(self, event: ToggleChip.Changed) -> None:
        event.stop()
        self._post_changed()
