# topmark:header:start
#
#   project      : Pluggable
#   file         : __main__.py
#   file_relpath : src/pluggable/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Module entry point for running Pluggable via ``python -m pluggable``.

It delegates directly to `pluggable.cli.main.cli`, ensuring a single,
authoritative CLI entry point regardless of how Pluggable is launched.

Examples:
    Describe a pipeline using the module interface::

        python -m pluggable describe myapp.pipelines:Admin
"""

from __future__ import annotations

from pluggable.cli.main import cli

if __name__ == "__main__":
    # We call the Click group directly
    cli()
