"""Form presentation model for the pytest settings editor.

Two pure functions bridge the codec and any UI:

    render_state(config)   -> presentation (field key -> str | bool)
    on_user_edit(values)   -> PytestConfig

The UI restricts select values to FIELD_DEFS options; this module maps the
"nothing selected" option of each select back to an absent field.

// [LAW:one-source-of-truth] FIELD_DEFS defines every editable field, its section and order.
// [LAW:locality-or-seam] Widgets consume FieldDef; they never touch token strings.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import Literal, Mapping, Sequence

from pytest_config.core.pytest_args import (
    BROWSERS,
    NONE,
    RECORDING_MODES,
    TRACEBACK_STYLES,
    VERBOSITY_LEVELS,
    PytestConfig,
    derive_process_options,
    is_absent,
)


@dataclass(frozen=True)
class FieldDef:
    key: str
    label: str
    section: str
    kind: Literal["bool", "select"]
    options: tuple[str, ...] = ()
    absent_option: str = NONE


SECTIONS: tuple[str, ...] = ("Pytest", "Playwright", "Debugging")

FIELD_DEFS: tuple[FieldDef, ...] = (
    FieldDef(
        key="traceback_style",
        label="Traceback output",
        section="Pytest",
        kind="select",
        options=(NONE,) + TRACEBACK_STYLES,
    ),
    FieldDef(
        key="num_processes",
        label="Number of processes",
        section="Pytest",
        kind="select",
        # Replaced per host by form_fields().
        options=(NONE, "auto", "1"),
    ),
    FieldDef(
        key="verbosity",
        label="Verbosity level",
        section="Pytest",
        kind="select",
        options=("default",) + VERBOSITY_LEVELS,
        absent_option="default",
    ),
    FieldDef(key="capture_output", label="Capture output", section="Pytest", kind="bool"),
    FieldDef(key="show_locals", label="Show locals", section="Pytest", kind="bool"),
    FieldDef(
        key="browser",
        label="Browser",
        section="Playwright",
        kind="select",
        options=(NONE,) + BROWSERS,
    ),
    FieldDef(key="show_browser", label="Show browser", section="Playwright", kind="bool"),
    FieldDef(key="slow_motion", label="Slow motion", section="Playwright", kind="bool"),
    FieldDef(
        key="tracing",
        label="Tracing",
        section="Playwright",
        kind="select",
        options=(NONE,) + RECORDING_MODES,
    ),
    FieldDef(
        key="video",
        label="Video",
        section="Playwright",
        kind="select",
        options=(NONE,) + RECORDING_MODES,
    ),
    FieldDef(
        key="wait_for_debugger_attach",
        label="Wait for Delve attach",
        section="Debugging",
        kind="bool",
    ),
)
FIELD_DEFS_BY_KEY: dict[str, FieldDef] = {f.key: f for f in FIELD_DEFS}

_PROCESS_COUNT_RE = re.compile(r"^(auto|\d+)$")


def form_fields(core_count: int) -> tuple[FieldDef, ...]:
    """FIELD_DEFS with the process-count options derived for core_count."""
    process_options = tuple(derive_process_options(core_count))
    return tuple(
        replace(f, options=process_options) if f.key == "num_processes" else f
        for f in FIELD_DEFS
    )


def select_options(field: FieldDef, value: object) -> tuple[str, ...]:
    """Options to offer for field, keeping a stored value that is not listed.

    A settings file edited elsewhere may hold e.g. --numprocesses=12 on a
    4-core host; it stays selectable instead of being silently replaced.
    """
    current = str(value)
    if field.kind != "select" or current in field.options:
        return field.options
    return field.options + (current,)


def render_state(config: PytestConfig) -> dict[str, str | bool]:
    """Presentation values for every field, absent selects shown as their 'none' option."""
    values: dict[str, str | bool] = {}
    for field in FIELD_DEFS:
        value = getattr(config, field.key)
        if field.kind == "bool":
            values[field.key] = bool(value)
        else:
            values[field.key] = field.absent_option if is_absent(value) else str(value)
    return values


_TRUE_WORDS = frozenset({"1", "true", "yes", "on"})
_FALSE_WORDS = frozenset({"0", "false", "no", "off", ""})
_BOOL_WORDS = _TRUE_WORDS | _FALSE_WORDS


def _coerce_bool(value: object, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in _TRUE_WORDS:
            return True
        if normalized in _FALSE_WORDS:
            return False
    if value is None:
        return default
    return bool(value)


def on_user_edit(values: Mapping[str, object]) -> PytestConfig:
    """Build a PytestConfig from presentation values.

    Missing keys mean absent/off. Unknown keys are ignored.
    """
    kwargs: dict[str, object] = {}
    for field in FIELD_DEFS:
        value = values.get(field.key)
        if field.kind == "bool":
            kwargs[field.key] = _coerce_bool(value, False)
            continue
        text = "" if value is None else str(value)
        kwargs[field.key] = None if (text == field.absent_option or is_absent(text)) else text
    return PytestConfig(**kwargs)


def _check_choice(field: FieldDef, value: str) -> None:
    if value == field.absent_option or is_absent(value):
        return
    if field.key == "num_processes":
        if not _PROCESS_COUNT_RE.match(value):
            raise ValueError("num_processes must be 'auto' or a non-negative integer, got {!r}".format(value))
        return
    if value not in field.options:
        raise ValueError(
            "{} must be one of {}, got {!r}".format(field.key, ", ".join(field.options), value)
        )


def apply_edits(config: PytestConfig, edits: Mapping[str, object]) -> PytestConfig:
    """Apply field edits to config, validating select values against their domains.

    Raises ValueError for unknown fields or values outside a field's options.
    """
    values: dict[str, object] = dict(render_state(config))
    for key, value in edits.items():
        field = FIELD_DEFS_BY_KEY.get(key)
        if field is None:
            raise ValueError("unknown field {!r}; expected one of {}".format(key, ", ".join(FIELD_DEFS_BY_KEY)))
        if field.kind == "select":
            _check_choice(field, str(value))
        elif isinstance(value, str) and value.strip().lower() not in _BOOL_WORDS:
            raise ValueError("{} expects a boolean, got {!r}".format(key, value))
        values[key] = value
    return on_user_edit(values)


def parse_assignments(assignments: Sequence[str]) -> dict[str, str]:
    """Parse KEY=VALUE strings. Dashes in keys are accepted for underscores."""
    edits: dict[str, str] = {}
    for item in assignments:
        key, sep, value = item.partition("=")
        if not sep or not key.strip():
            raise ValueError("expected KEY=VALUE, got {!r}".format(item))
        edits[key.strip().replace("-", "_")] = value.strip()
    return edits
