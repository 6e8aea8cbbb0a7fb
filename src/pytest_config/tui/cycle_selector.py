"""Compact inline cycle selector — a space-efficient dropdown alternative.

Renders as ▾ value ▴ with two-state editing behavior.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import ClassVar

from rich.style import Style
from rich.text import Text
from textual.message import Message
from textual.widget import Widget

# Internal focus zones within editing mode
_ZONE_PREV = 0
_ZONE_CENTER = 1
_ZONE_NEXT = 2

_ARROW_PREV = "\u25be"  # ▾ (down-pointing small triangle)
_ARROW_NEXT = "\u25b4"  # ▴ (up-pointing small triangle)

# [LAW:dataflow-not-control-flow] Zone activation deltas as data.
# Center delta=0 exits editing.
_ZONE_DELTAS: dict[int, int] = {
    _ZONE_PREV: -1,
    _ZONE_CENTER: 0,
    _ZONE_NEXT: +1,
}


class CycleSelector(Widget, can_focus=True):
    """Compact inline single-select option selector with cycling behavior.

    Three zones: prev arrow (▾), current value, next arrow (▴).
    Two modes: non-editing (single focusable unit) and editing
    (internal zone navigation with arrow keys).

    // [LAW:one-source-of-truth] _options is the canonical option list.
    // _index is the canonical selected index. .value is derived.
    """

    ALLOW_SELECT: ClassVar[bool] = False

    DEFAULT_CSS = """
    CycleSelector {
        width: auto;
        height: 1;
        text-style: bold;
        background: $panel-lighten-2;
        color: $text;
    }

    CycleSelector:hover {
        background: $surface-darken-1;
    }

    CycleSelector:focus {
        text-style: bold underline;
        background: $surface-darken-1;
    }

    CycleSelector.-editing {
        text-style: bold;
        background: $accent;
        color: $text;
    }
    """

    class Changed(Message):
        """Posted when the selected value changes (on prev/next activation).

        Attributes:
            cycle_selector: The CycleSelector that changed.
            value: The new selected value.
            index: The new selected index.
        """

        def __init__(
            self, cycle_selector: CycleSelector, value: str, index: int
        ) -> None:
            self.cycle_selector = cycle_selector
            self.value = value
            self.index = index
            super().__init__()

        @property
        def control(self) -> CycleSelector:
            """The CycleSelector widget that posted this message."""
            return self.cycle_selector

    def __init__(
        self,
        options: Sequence[str],
        *,
        value: str | None = None,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
        disabled: bool = False,
        tooltip: str | None = None,
    ) -> None:
        super().__init__(name=name, id=id, classes=classes, disabled=disabled)
        if tooltip is not None:
            self.tooltip = tooltip
        self._options: list[str] = list(options)
        self._index: int = self._index_of(value)
        self._editing: bool = False
        self._zone: int = _ZONE_CENTER

    def _index_of(self, value: str | None) -> int:
        return self._options.index(value) if value is not None and value in self._options else 0

    # -- Properties ----------------------------------------------------------

    @property
    def value(self) -> str:
        """Current selected option value."""
        return self._options[self._index]

    @value.setter
    def value(self, new_value: str) -> None:
        """Set value programmatically. Raises ValueError if not in options."""
        self._index = self._options.index(new_value)
        self.refresh()

    @property
    def options(self) -> tuple[str, ...]:
        return tuple(self._options)

    @property
    def index(self) -> int:
        """Current selected index."""
        return self._index

    def set_options(self, options: Sequence[str], *, value: str | None = None) -> None:
        """Replace the option list, selecting value (or the first option). No Changed is posted."""
        self._options = list(options)
        self._index = self._index_of(value)
        self._editing = False
        self.refresh(layout=True)

    # -- Rendering -----------------------------------------------------------

    def render(self) -> Text:
        """Render the widget as a Rich Text with zone-specific styling.

        // [LAW:dataflow-not-control-flow] Always builds all 3 zones.
        // Editing varies the styling, not the structure.
        """
        val = self._options[self._index]
        parts = [f" {_ARROW_PREV} ", f" {val} ", f" {_ARROW_NEXT} "]

        text = Text()
        reverse = Style(reverse=True)
        for i, part in enumerate(parts):
            style = reverse if (self._editing and i == self._zone) else Style.null()
            text.append(part, style=style)

        self.set_class(self._editing, "-editing")
        return text

    # -- Zone management -----------------------------------------------------

    def _zone_boundaries(self) -> tuple[int, int]:
        """Return (prev_end, next_start) x-offsets for click zone detection."""
        prev_width = 3  # " ▾ "
        center_width = len(self._options[self._index]) + 2  # " value "
        return prev_width, prev_width + center_width

    def _move_zone(self, delta: int) -> None:
        """Move internal focus zone by delta, clamping to valid range."""
        self._zone = max(_ZONE_PREV, min(_ZONE_NEXT, self._zone + delta))
        self.refresh()

    def _activate_zone(self, zone: int) -> None:
        """Activate a zone: cycle prev/next or confirm center."""
        delta = _ZONE_DELTAS[zone]
        old_index = self._index

        self._index = (self._index + delta) % len(self._options)
        # delta==0 means center (confirm) → exit editing
        self._editing = self._editing and delta != 0

        self.refresh(layout=True)

        if self._index != old_index:
            self.post_message(self.Changed(self, self.value, self._index))

    def _enter_editing(self) -> None:
        """Enter editing mode, starting with center zone focused."""
        self._editing = True
        self._zone = _ZONE_CENTER
        self.refresh()

    def _exit_editing(self) -> None:
        self._editing = False
        self.refresh()

    # -- Event handlers ------------------------------------------------------

    def on_click(self, event) -> None:
        """Handle click: enter editing or activate zone."""
        if self.disabled:
            return

        prev_end, next_start = self._zone_boundaries()
        zone = (
            _ZONE_PREV
            if event.x < prev_end
            else _ZONE_NEXT
            if event.x >= next_start
            else _ZONE_CENTER
        )

        if not self._editing:
            self._zone = zone
            self._editing = True
            self.refresh()
        else:
            self._activate_zone(zone)

    def on_key(self, event) -> None:
        """Handle keyboard: Enter/Space toggle editing, arrows navigate zones."""
        if self.disabled:
            return

        if not self._editing:
            if event.key in ("enter", "space"):
                event.stop()
                event.prevent_default()
                self._enter_editing()
            return

        # Editing mode — consume all handled keys
        key = event.key
        if key in ("left", "right", "enter", "space", "escape"):
            event.stop()
            event.prevent_default()

        if key == "left":
            self._move_zone(-1)
        elif key == "right":
            self._move_zone(+1)
        elif key in ("enter", "space"):
            self._activate_zone(self._zone)
        elif key == "escape":
            self._exit_editing()
