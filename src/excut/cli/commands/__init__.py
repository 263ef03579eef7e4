"""CLI command implementations for the excut application.

This package contains subcommands for the excut CLI:
- validate: Validate a cut job file
"""

from excut.cli.commands.validate import validate_command

__all__ = ["validate_command"]
