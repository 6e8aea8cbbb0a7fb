"""Persisted pytest arguments for a workspace.

Reads the stored argument list, decodes it into a PytestConfig, and writes
encoded configs back under the same settings key.

This module is pure data + persistence, no widget deps.

// [LAW:one-source-of-truth] PYTEST_ARGS_KEY is the only settings key this tool owns.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pytest_config.io.settings
from pytest_config.core.pytest_args import PytestConfig, decode, encode

logger = logging.getLogger(__name__)

PYTEST_ARGS_KEY = "python.testing.pytestArgs"


class NoWorkspaceError(RuntimeError):
    """Raised when writing without an open workspace folder."""

    def __init__(self, workspace: Path | None = None) -> None:
        self.workspace = workspace
        super().__init__("No workspace folder found")


def has_workspace(workspace: Path | None) -> bool:
    return workspace is not None and Path(workspace).is_dir()


def load_args(workspace: Path | None) -> list[str]:
    """Load the stored argument list. Missing workspace or key → []."""
    if not has_workspace(workspace):
        return []
    raw = pytest_config.io.settings.load_setting(workspace, PYTEST_ARGS_KEY, [])
    # [LAW:dataflow-not-control-flow] Always return a list; wrong shapes → [].
    if not isinstance(raw, list):
        logger.warning("%s is not a list (got %s); treating as empty", PYTEST_ARGS_KEY, type(raw).__name__)
        return []
    return [arg for arg in raw if isinstance(arg, str)]


def load_config(workspace: Path | None) -> PytestConfig:
    """Decode the stored arguments. No workspace gives the zero config."""
    return decode(load_args(workspace))


def save_args(workspace: Path | None, args: list[str]) -> None:
    """Persist an argument list under PYTEST_ARGS_KEY."""
    if not has_workspace(workspace):
        raise NoWorkspaceError(workspace)
    pytest_config.io.settings.save_setting(workspace, PYTEST_ARGS_KEY, list(args))
    logger.info("updated %s: %s", PYTEST_ARGS_KEY, args)


def save_config(workspace: Path | None, config: PytestConfig) -> list[str]:
    """Encode config, persist it and return the written argument list.

    Tokens the form cannot represent are dropped from the stored list.
    """
    args = encode(config)
    save_args(workspace, args)
    return args
