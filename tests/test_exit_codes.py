"""Tests for standardized CLI exit codes.

Validates that:
- Exit code constants have correct values
- Custom exceptions carry the right exit codes
- A missing function produces exit code 3
- An unreadable module produces exit code 4
"""

from __future__ import annotations

import click
import pytest

from asmsplit.exit_codes import (
    DESCRIPTIONS,
    EXIT_ERROR,
    EXIT_IO_FAILURE,
    EXIT_NOT_FOUND,
    EXIT_SUCCESS,
    EXIT_USAGE,
    AsmsplitError,
    ConfigError,
    FunctionNotFoundError,
    ModuleIOError,
)

from conftest import invoke_cli

# ===========================================================================
# Test exit code constants
# ===========================================================================


class TestExitCodeConstants:
    def test_values(self):
        assert (EXIT_SUCCESS, EXIT_ERROR, EXIT_USAGE, EXIT_NOT_FOUND, EXIT_IO_FAILURE) == (0, 1, 2, 3, 4)

    def test_descriptions_cover_all_codes(self):
        assert set(DESCRIPTIONS) == {EXIT_SUCCESS, EXIT_ERROR, EXIT_USAGE, EXIT_NOT_FOUND, EXIT_IO_FAILURE}


# ===========================================================================
# Test custom exceptions
# ===========================================================================


class TestExceptions:
    def test_base_is_click_exception(self):
        err = AsmsplitError("boom")
        assert isinstance(err, click.ClickException)
        assert err.exit_code == EXIT_ERROR
        assert err.format_message() == "boom"

    def test_function_not_found(self):
        err = FunctionNotFoundError("func_80001000", "asm/main.s")
        assert err.exit_code == EXIT_NOT_FOUND
        assert err.message == 'Function "func_80001000" not found in assembly file "asm/main.s"'
        assert (err.name, err.module) == ("func_80001000", "asm/main.s")

    def test_function_not_found_without_module(self):
        assert FunctionNotFoundError("f").message == 'Function "f" not found'

    @pytest.mark.parametrize(
        "exc_class, expected",
        [(ModuleIOError, EXIT_IO_FAILURE), (ConfigError, EXIT_USAGE)],
    )
    def test_exit_codes(self, exc_class, expected):
        with pytest.raises(AsmsplitError) as exc_info:
            raise exc_class("bad")
        assert exc_info.value.exit_code == expected


# ===========================================================================
# Exit codes through the CLI
# ===========================================================================


class TestCliExitCodes:
    def test_success(self, cli_runner, asm_project):
        assert invoke_cli(cli_runner, ["list", "asm/main.s"], cwd=asm_project).exit_code == EXIT_SUCCESS

    def test_not_found(self, cli_runner, asm_project):
        result = invoke_cli(cli_runner, ["show", "asm/main.s", "nope"], cwd=asm_project)
        assert result.exit_code == EXIT_NOT_FOUND

    def test_io_failure(self, cli_runner, asm_project):
        result = invoke_cli(cli_runner, ["remove", "asm/gone.s", "f"], cwd=asm_project)
        assert result.exit_code == EXIT_IO_FAILURE

    def test_usage(self, cli_runner, asm_project):
        result = invoke_cli(cli_runner, ["show", "asm/main.s"], cwd=asm_project)
        assert result.exit_code == EXIT_USAGE
