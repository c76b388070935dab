# topmark:header:start
#
#   project      : Pluggable
#   file         : conftest.py
#   file_relpath : tests/cli/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI test helpers for running Pluggable through Click's `CliRunner`.

The group callback reconfigures the root logger (see `setup_logging`) with a
handler bound to the runner's captured stream; `restore_root_logging` puts
the test-session logging back after every CLI test.
"""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING

import pytest
from click.testing import CliRunner, Result

from pluggable.cli.exit_codes import ExitCode
from pluggable.cli.main import cli

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence
    from pathlib import Path


@pytest.fixture(autouse=True)
def restore_root_logging() -> Iterator[None]:
    """Restore root logger level and handlers changed by the CLI."""
    root = logging.getLogger()
    level, handlers = root.level, root.handlers[:]
    yield
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


def run_cli(argv: str | Sequence[str] | None) -> Result:
    """Invoke the CLI without changing the working directory.

    Args:
        argv (str | Sequence[str] | None): CLI argument vector, e.g. ``["--no-color", "version"]``.

    Returns:
        Result: The `click.testing.Result` produced by `click.testing.CliRunner.invoke`.
    """
    runner = CliRunner()
    return runner.invoke(cli, argv)


def run_cli_in(tmp_path: Path, argv: str | Sequence[str] | None) -> Result:
    """Invoke the CLI with ``tmp_path`` as the working directory.

    Used by commands that look for config files relative to the CWD.
    """
    cwd: str = os.getcwd()
    try:
        os.chdir(tmp_path)
        return run_cli(argv)
    finally:
        os.chdir(cwd)


def assert_exit(result: Result, code: ExitCode) -> None:
    """Assert that the command exited with ``code``, showing the output otherwise."""
    assert result.exit_code == code, result.output


def assert_SUCCESS(result: Result) -> None:
    """Assert that the command exited successfully (code 0)."""
    assert_exit(result, ExitCode.SUCCESS)
