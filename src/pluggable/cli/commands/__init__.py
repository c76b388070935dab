# topmark:header:start
#
#   project      : Pluggable
#   file         : __init__.py
#   file_relpath : src/pluggable/cli/commands/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Click subcommands of the ``pluggable`` CLI."""
