# topmark:header:start
#
#   project      : Pluggable
#   file         : exit_codes.py
#   file_relpath : src/pluggable/cli/exit_codes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exit codes for the Pluggable CLI.

Pluggable aligns with the BSD `sysexits` convention where practical, so that
other tooling can interpret failures consistently.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Standardized exit codes for the Pluggable CLI.

    Attributes:
        SUCCESS: Successful execution with no errors.
        FAILURE: Generic failure (non-specific error).
        USAGE_ERROR: Command-line invocation error (bad target reference).
            Mirrors BSD ``EX_USAGE (64)``.
        TARGET_NOT_FOUND: The module or attribute to inspect does not exist.
            Mirrors BSD ``EX_NOINPUT (66)``.
        PIPELINE_ERROR: The target could not be assembled (malformed step,
            name collision). Mirrors BSD ``EX_SOFTWARE (70)``.
        CONFIG_ERROR: Invalid builder configuration. Mirrors BSD ``EX_CONFIG (78)``.
    """

    SUCCESS = 0
    FAILURE = 1

    USAGE_ERROR = 64  # EX_USAGE
    TARGET_NOT_FOUND = 66  # EX_NOINPUT
    PIPELINE_ERROR = 70  # EX_SOFTWARE
    CONFIG_ERROR = 78  # EX_CONFIG
