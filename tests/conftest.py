"""Shared test fixtures and helpers for asmsplit tests.

Provides:
- Sample listings: MAIN_MODULE, LIB_MODULE
- CliRunner fixtures: cli_runner, invoke_cli()
- Project fixture: asm_project (tmp workspace with asm/main.s, asm/lib.s)
- JSON validation helpers: parse_json_output(), assert_json_envelope()
"""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

# ===========================================================================
# Sample listings
# ===========================================================================

# Line numbers (0-based) matter to several tests; keep them in sync.
MAIN_LINES = [
    '.include "macro.inc"',                 # 0
    "",                                     # 1
    "glabel func_80001000",                 # 2
    "    addiu $sp, $sp, -0x18",            # 3
    "    sw    $ra, 0x14($sp)",             # 4
    "    jal   func_80001100",              # 5
    "     nop",                             # 6
    "    la    $a0, =D_80010000",           # 7
    "    lw    $ra, 0x14($sp)",             # 8
    "    jr    $ra",                        # 9
    "     addiu $sp, $sp, 0x18",            # 10
    ".size func_80001000, . - func_80001000",  # 11
    "",                                     # 12
    "glabel func_80001040",                 # 13
    "    jal   func_80001000",              # 14
    "     nop",                             # 15
    "    jal   osSyncPrintf",               # 16
    "     nop",                             # 17
    "    jr    $ra",                        # 18
    "     nop",                             # 19
    "",                                     # 20
    "glabel func_80001080",                 # 21
    "    .word 0 @ =gSaveContext",          # 22
    "    move  $v0, $zero",                 # 23
    "    jr    $ra",                        # 24
    "     nop",                             # 25
    ".size func_80001080, . - func_80001080",  # 26
    "",                                     # 27
]
MAIN_MODULE = "\n".join(MAIN_LINES)

LIB_MODULE = "\n".join([
    "glabel func_80001100",
    "    jal   func_80001140",
    "     nop",
    "    jr    $ra",
    "     nop",
    ".size func_80001100, . - func_80001100",
    "",
    "glabel func_80001140",
    "    jal   func_80001100",
    "     nop",
    "    jr    $ra",
    "     nop",
    ".size func_80001140, . - func_80001140",
    "",
])


# ===========================================================================
# CliRunner helpers
# ===========================================================================


@pytest.fixture
def cli_runner():
    """Provide a Click CliRunner for in-process CLI testing."""
    return CliRunner()


def invoke_cli(runner, args, cwd=None, json_mode=False):
    """Invoke the asmsplit CLI via CliRunner.

    Args:
        runner: CliRunner instance
        args: list of CLI arguments (e.g. ["list", "asm/main.s"])
        cwd: workspace root, passed as --root
        json_mode: if True, prepend --json flag
    Returns:
        click.testing.Result
    """
    from asmsplit.cli import cli

    full_args = []
    if json_mode:
        full_args.append("--json")
    if cwd:
        full_args.extend(["--root", str(cwd)])
    full_args.extend(args)
    return runner.invoke(cli, full_args, catch_exceptions=False)


def parse_json_output(result, command=None):
    """Parse JSON from a CliRunner result, failing with context on errors."""
    assert result.exit_code == 0, f"Command {command or '?'} failed (exit {result.exit_code}):\n{result.output}"
    try:
        return json.loads(result.output)
    except json.JSONDecodeError as e:
        pytest.fail(f"Invalid JSON from {command or '?'}: {e}\nOutput was:\n{result.output[:500]}")


def assert_json_envelope(data, command=None):
    """Validate that a parsed JSON dict follows the asmsplit envelope contract."""
    assert isinstance(data, dict), f"Expected dict, got {type(data)}"
    for key in ("schema", "command", "version", "summary"):
        assert key in data, f"Missing '{key}' key in envelope"
    assert "timestamp" in data.get("_meta", {}), "Missing 'timestamp' in _meta"
    if command:
        assert data["command"] == command, f"Expected command={command}, got {data['command']}"
    assert isinstance(data["summary"], dict)


# ===========================================================================
# Project fixtures
# ===========================================================================


@pytest.fixture
def asm_project(tmp_path, monkeypatch):
    """A workspace with two assembly modules and a non-assembly file."""
    monkeypatch.delenv("ASMSPLIT_ROOT", raising=False)
    asm = tmp_path / "asm"
    asm.mkdir()
    (asm / "main.s").write_text(MAIN_MODULE, encoding="utf-8")
    (asm / "lib.s").write_text(LIB_MODULE, encoding="utf-8")
    (tmp_path / "notes.txt").write_text("glabel not_assembly\n", encoding="utf-8")
    return tmp_path
