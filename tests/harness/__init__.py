"""Textual in-process test harness for pytest-config.

Re-exports all public API for convenient imports:
    from tests.harness import run_app, toggle_field, get_field_value, ...
"""

from tests.harness.app_runner import run_app
from tests.harness.interactions import (
    press_and_settle,
    focus_field,
    toggle_field,
    cycle_field,
)
from tests.harness.assertions import (
    get_panel,
    get_field_value,
    notification_messages,
)
from tests.harness.messages import MessageCapture

__all__ = [
    "run_app",
    "press_and_settle",
    "focus_field",
    "toggle_field",
    "cycle_field",
    "get_panel",
    "get_field_value",
    "notification_messages",
    "MessageCapture",
]
