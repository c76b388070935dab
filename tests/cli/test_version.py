# topmark:header:start
#
#   project      : Pluggable
#   file         : test_version.py
#   file_relpath : tests/cli/test_version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI test: `version` command output and group-level behavior."""

from __future__ import annotations

import json

import pytest

from pluggable.cli.exit_codes import ExitCode
from pluggable.constants import PLUGGABLE_VERSION
from tests.cli.conftest import assert_exit, assert_SUCCESS, run_cli

pytestmark = [pytest.mark.cli]


def test_version_outputs_version() -> None:
    result = run_cli(["--no-color", "version"])

    assert_SUCCESS(result)
    assert result.output.strip() == PLUGGABLE_VERSION


def test_version_verbose_adds_heading() -> None:
    result = run_cli(["--no-color", "-v", "version"])

    assert_SUCCESS(result)
    assert "Pluggable version:" in result.output
    assert PLUGGABLE_VERSION in result.output


def test_version_json() -> None:
    result = run_cli(["version", "--format", "JSON"])

    assert_SUCCESS(result)
    assert json.loads(result.output) == {"version": PLUGGABLE_VERSION}


def test_invalid_format_is_a_click_usage_error() -> None:
    result = run_cli(["version", "--format", "yaml"])

    assert result.exit_code == 2
    assert "Invalid value 'yaml'" in result.output


def test_verbose_and_quiet_are_mutually_exclusive() -> None:
    result = run_cli(["-v", "-q", "version"])

    assert_exit(result, ExitCode.USAGE_ERROR)
    assert "mutually exclusive" in result.output


def test_no_command_prints_hint_and_help() -> None:
    result = run_cli(["--no-color"])

    assert_SUCCESS(result)
    assert "pluggable describe MODULE:ATTR" in result.output
    assert "describe" in result.output
    assert "config" in result.output


def test_quiet_version_is_unstyled() -> None:
    result = run_cli(["-q", "version"])

    assert_SUCCESS(result)
    assert result.output == f"{PLUGGABLE_VERSION}\n"


def test_quiet_without_command_omits_hint() -> None:
    result = run_cli(["--no-color", "-q"])

    assert_SUCCESS(result)
    assert "Hint:" not in result.output
    assert "describe" in result.output
