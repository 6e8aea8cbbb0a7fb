"""CLI entry point for pytest-config."""

import argparse
import logging
import sys
from pathlib import Path

import pytest_config.app.form_model
import pytest_config.app.workspace_args
import pytest_config.io.logging_setup
import pytest_config.io.settings
import pytest_config.tui.app
from pytest_config.core.pytest_args import PytestConfig, encode

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Edit the pytest arguments stored in a workspace's .vscode/settings.json",
    )
    parser.add_argument(
        "--workspace",
        type=Path,
        default=Path.cwd(),
        help="Workspace folder (default: current directory)",
    )
    parser.add_argument(
        "--print",
        dest="print_config",
        action="store_true",
        default=False,
        help="Print the stored arguments and decoded settings, then exit.",
    )
    parser.add_argument(
        "--set",
        dest="assignments",
        action="append",
        default=[],
        metavar="FIELD=VALUE",
        help="Set one field (repeatable), e.g. --set verbosity=verbose --set capture_output=on",
    )
    parser.add_argument(
        "--clear",
        action="store_true",
        default=False,
        help="Remove every recognized pytest argument.",
    )
    parser.add_argument(
        "--cores",
        type=int,
        default=None,
        help="Core count used for the process-count options (default: detected)",
    )
    return parser


def print_config(workspace: Path, config: PytestConfig) -> None:
    args = encode(config)
    print(f"Workspace: {workspace}")
    print(f"Settings:  {pytest_config.io.settings.get_settings_path(workspace)}")
    print(f"Arguments: {' '.join(args) if args else '(none)'}")
    values = pytest_config.app.form_model.render_state(config)
    section = None
    for field in pytest_config.app.form_model.FIELD_DEFS:
        if field.section != section:
            section = field.section
            print(f"\n{section}")
        value = values[field.key]
        shown = ("on" if value else "off") if field.kind == "bool" else value
        print(f"  {field.label:<24} {shown}")


def _apply(workspace: Path, config: PytestConfig) -> int:
    try:
        args = pytest_config.app.workspace_args.save_config(workspace, config)
    except (
        pytest_config.app.workspace_args.NoWorkspaceError,
        pytest_config.io.settings.SettingsFileError,
        OSError,
    ) as e:
        print(f"Failed to update pytest configuration: {e}", file=sys.stderr)
        return 1
    print("Pytest configuration updated successfully")
    print(f"Arguments: {' '.join(args) if args else '(none)'}")
    return 0


def main(argv=None) -> int:
    args = _build_parser().parse_args(argv)
    workspace = args.workspace.expanduser().resolve()

    interactive = not (args.print_config or args.assignments or args.clear)
    # [LAW:single-enforcer] Runtime logger configuration is centralized in io.logging_setup.
    log_runtime = pytest_config.io.logging_setup.configure(stream=not interactive)
    logger.info(
        "logging configured level=%s file=%s workspace=%s",
        log_runtime.level_name,
        log_runtime.file_path,
        workspace,
    )

    if args.clear:
        return _apply(workspace, PytestConfig())

    if args.assignments:
        config = pytest_config.app.workspace_args.load_config(workspace)
        try:
            edits = pytest_config.app.form_model.parse_assignments(args.assignments)
            config = pytest_config.app.form_model.apply_edits(config, edits)
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 2
        return _apply(workspace, config)

    if args.print_config:
        print_config(workspace, pytest_config.app.workspace_args.load_config(workspace))
        return 0

    pytest_config.tui.app.PytestConfigApp(workspace, core_count=args.cores).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
