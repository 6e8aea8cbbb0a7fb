"""Bidirectional mapping between PytestConfig and pytest argument tokens.

Pure data, no I/O. Both directions are driven by one ordered option table,
so the encode order and the decode classification can never drift apart.

// [LAW:one-source-of-truth] ARG_OPTION_DEFS defines every recognized token.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields, replace
from typing import Iterable, Literal

logger = logging.getLogger(__name__)


NONE = "none"
"""Sentinel value meaning 'field absent, emit no token'."""

TRACEBACK_STYLES = ("auto", "long", "short", "native", "no")
VERBOSITY_LEVELS = ("quiet", "verbose", "more-verbose", "very-verbose")
BROWSERS = ("chromium", "firefox", "webkit")
RECORDING_MODES = ("on", "off", "retain-on-failure")


@dataclass(frozen=True)
class PytestConfig:
    """Structured view of a pytest argument list.

    Optional fields use None for 'not set'; switches default to False.
    """

    traceback_style: str | None = None
    num_processes: str | None = None
    verbosity: str | None = None
    capture_output: bool = False
    show_locals: bool = False
    browser: str | None = None
    show_browser: bool = False
    slow_motion: bool = False
    tracing: str | None = None
    video: str | None = None
    wait_for_debugger_attach: bool = False


@dataclass(frozen=True)
class ArgOptionDef:
    """Declarative CLI mapping for one PytestConfig field.

    cli_mode:
        value  -- ``<cli_flag><value>``, matched by prefix on decode
        switch -- exact ``cli_flag`` when the field is True
        choice -- exact token looked up in ``choices`` (value -> token)
    """

    key: str
    cli_mode: Literal["value", "switch", "choice"]
    cli_flag: str = ""
    choices: tuple[tuple[str, str], ...] = ()


# Encode order is the order of this tuple.
ARG_OPTION_DEFS: tuple[ArgOptionDef, ...] = (
    ArgOptionDef(key="traceback_style", cli_mode="value", cli_flag="--tb="),
    ArgOptionDef(key="num_processes", cli_mode="value", cli_flag="--numprocesses="),
    ArgOptionDef(
        key="verbosity",
        cli_mode="choice",
        choices=(
            ("quiet", "-q"),
            ("verbose", "-v"),
            ("more-verbose", "-vv"),
            ("very-verbose", "-vvv"),
        ),
    ),
    ArgOptionDef(key="capture_output", cli_mode="switch", cli_flag="-s"),
    ArgOptionDef(key="show_locals", cli_mode="switch", cli_flag="--showlocals"),
    ArgOptionDef(key="show_browser", cli_mode="switch", cli_flag="--headed"),
    ArgOptionDef(key="wait_for_debugger_attach", cli_mode="switch", cli_flag="--delve=1"),
    ArgOptionDef(key="browser", cli_mode="value", cli_flag="--browser="),
    ArgOptionDef(key="slow_motion", cli_mode="switch", cli_flag="--slowmo"),
    ArgOptionDef(key="tracing", cli_mode="value", cli_flag="--tracing="),
    ArgOptionDef(key="video", cli_mode="value", cli_flag="--video="),
)

# Exact-match tokens: switches plus every choice token, mapped to (key, value).
_EXACT_TOKENS: dict[str, tuple[str, object]] = {
    **{
        opt.cli_flag: (opt.key, True)
        for opt in ARG_OPTION_DEFS
        if opt.cli_mode == "switch"
    },
    **{
        token: (opt.key, value)
        for opt in ARG_OPTION_DEFS
        if opt.cli_mode == "choice"
        for value, token in opt.choices
    },
}
_PREFIX_OPTIONS: tuple[ArgOptionDef, ...] = tuple(
    opt for opt in ARG_OPTION_DEFS if opt.cli_mode == "value"
)

OPTIONAL_FIELDS: tuple[str, ...] = tuple(
    f.name for f in fields(PytestConfig) if f.default is None
)


def is_absent(value: object) -> bool:
    """True for None, the empty string and the 'none' sentinel."""
    return value is None or value == "" or value == NONE


def normalize(config: PytestConfig) -> PytestConfig:
    """Return config with every sentinel-valued optional field set to None."""
    changes = {
        key: None
        for key in OPTIONAL_FIELDS
        if getattr(config, key) is not None and is_absent(getattr(config, key))
    }
    return replace(config, **changes) if changes else config


def _classify(token: str) -> tuple[str, object] | None:
    exact = _EXACT_TOKENS.get(token)
    if exact is not None:
        return exact
    for opt in _PREFIX_OPTIONS:
        if token.startswith(opt.cli_flag):
            suffix = token[len(opt.cli_flag):]
            return opt.key, (None if is_absent(suffix) else suffix)
    return None


def decode(tokens: Iterable[str]) -> PytestConfig:
    """Parse an argument list into a fresh PytestConfig.

    Unrecognized tokens are dropped. When several verbosity flags are present
    the last one wins.
    """
    values: dict[str, object] = {}
    for token in tokens:
        match = _classify(token) if isinstance(token, str) else None
        if match is None:
            logger.debug("dropping unrecognized pytest arg %r", token)
            continue
        key, value = match
        values[key] = value
    return PytestConfig(**values)


def _encode_option(opt: ArgOptionDef, value: object) -> str | None:
    if opt.cli_mode == "switch":
        return opt.cli_flag if value else None
    if is_absent(value):
        return None
    if opt.cli_mode == "choice":
        return dict(opt.choices).get(str(value))
    return "{}{}".format(opt.cli_flag, value)


def encode(config: PytestConfig) -> list[str]:
    """Build the argument list for config in canonical order.

    Values are not checked against their domains; they are emitted as-is.
    """
    tokens: list[str] = []
    for opt in ARG_OPTION_DEFS:
        token = _encode_option(opt, getattr(config, opt.key))
        if token is not None:
            tokens.append(token)
    return tokens


def derive_process_options(core_count: int) -> list[str]:
    """Selectable values for the number-of-processes field.

    Always offers none/auto/1; with more than two cores, adds even counts up
    to core_count and core_count itself when it is odd.
    """
    options = [NONE, "auto", "1"]
    if core_count <= 2:
        return options
    options.extend(str(n) for n in range(2, core_count + 1, 2))
    if core_count % 2:
        options.append(str(core_count))
    return options
