"""Boolean toggle chip — lightweight clickable text control."""

from __future__ import annotations

from textual.message import Message
from textual.widgets import Static


class ToggleChip(Static):
    """Boolean toggle rendered as a clickable chip.

    Shows label + ON/OFF state inline. Click or Space toggles the value.
    Bold+accent when on, dim when off. Focusable for Tab navigation.
    """

    ALLOW_SELECT = False
    can_focus = True

    DEFAULT_CSS = """
    ToggleChip {
        width: auto;
        height: 1;
        text-style: bold;
        background: $accent;
        color: $text;
    }

    ToggleChip:hover {
        background: $primary;
        color: $text;
    }

    ToggleChip:focus {
        text-style: bold underline;
        background: $primary;
        color: $text;
    }

    ToggleChip.-off {
        text-style: bold;
        background: $surface-lighten-1;
        color: $text-muted;
    }

    ToggleChip.-off:hover {
        background: $surface-lighten-2;
        color: $text;
    }

    ToggleChip.-off:focus {
        text-style: bold underline;
        background: $surface-lighten-2;
        color: $text;
    }
    """

    class Changed(Message):
        """Posted when the user flips the toggle."""

        def __init__(self, toggle_chip: ToggleChip, value: bool) -> None:
            self.toggle_chip = toggle_chip
            self.value = value
            super().__init__()

        @property
        def control(self) -> ToggleChip:
            return self.toggle_chip

    def __init__(self, label: str, *, value: bool = False, **kwargs):
        super().__init__("", **kwargs)
        self._base_label = label
        self.value = value
        self._refresh_label()

    def _refresh_label(self):
        self.update(f" {self._base_label}  {'ON' if self.value else 'OFF'} ")
        self.set_class(not self.value, "-off")

    def set_value(self, value: bool) -> None:
        """Set value programmatically without posting Changed."""
        self.value = bool(value)
        self._refresh_label()

    def _toggle(self) -> None:
        self.value = not self.value
        self._refresh_label()
        self.post_message(self.Changed(self, self.value))

    async def on_click(self, event) -> None:
        self._toggle()

    def on_key(self, event) -> None:
        if event.key == "space":
            event.stop()
            event.prevent_default()
            self._toggle()
