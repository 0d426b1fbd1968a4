"""Standardized CLI exit codes for asmsplit.

Exit code scheme:

    0  SUCCESS        -- command completed
    1  GENERAL_ERROR  -- unexpected failure, crash, unhandled exception
    2  USAGE_ERROR    -- invalid arguments or configuration (Click default)
    3  NOT_FOUND      -- the requested function has no glabel or label in the module
    4  IO_FAILURE     -- the module could not be read or written
"""

from __future__ import annotations

import click

# ---------------------------------------------------------------------------
# Exit code constants
# ---------------------------------------------------------------------------

EXIT_SUCCESS: int = 0
EXIT_ERROR: int = 1
EXIT_USAGE: int = 2
EXIT_NOT_FOUND: int = 3
EXIT_IO_FAILURE: int = 4

DESCRIPTIONS: dict[int, str] = {
    EXIT_SUCCESS: "success",
    EXIT_ERROR: "unexpected error",
    EXIT_USAGE: "invalid usage (bad arguments, flags or config)",
    EXIT_NOT_FOUND: "function not found in module",
    EXIT_IO_FAILURE: "module could not be read or written",
}

# ---------------------------------------------------------------------------
# Custom exceptions (caught by the Click error handler)
# ---------------------------------------------------------------------------


class AsmsplitError(click.ClickException):
    """Base class for asmsplit errors with exit codes."""

    def __init__(self, message: str, exit_code: int = EXIT_ERROR):
        super().__init__(message)
        self.exit_code = exit_code

    def format_message(self) -> str:
        return self.message


class FunctionNotFoundError(AsmsplitError):
    """Raised when a function has no start marker or label in a module."""

    def __init__(self, name: str, module: str | None = None):
        where = f' in assembly file "{module}"' if module else ""
        super().__init__(f'Function "{name}" not found{where}', EXIT_NOT_FOUND)
        self.name = name
        self.module = module


class ModuleIOError(AsmsplitError):
    """Raised when a module cannot be read or written."""

    def __init__(self, message: str):
        super().__init__(message, EXIT_IO_FAILURE)


class ConfigError(AsmsplitError):
    """Raised when .asmsplit/config.json cannot be parsed or is invalid."""

    def __init__(self, message: str):
        super().__init__(message, EXIT_USAGE)
