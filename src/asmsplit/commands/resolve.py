"""Shared module loading and lookup helpers for all asmsplit commands."""

from __future__ import annotations

import difflib
from pathlib import Path

import click

from asmsplit.asm.catalog import function_names
from asmsplit.config import find_project_root, load_project_config
from asmsplit.exit_codes import FunctionNotFoundError
from asmsplit.workspace.store import FileContentProvider

_MAX_SUGGESTIONS = 5


def project_root(ctx: click.Context) -> Path:
    root = ctx.obj.get("root") if ctx.obj else None
    return Path(root).resolve() if root else find_project_root()


def project_config(ctx: click.Context) -> dict:
    return load_project_config(project_root(ctx))


def get_provider(ctx: click.Context) -> FileContentProvider:
    return FileContentProvider(project_root(ctx))


def read_module(ctx: click.Context, module: str) -> str:
    """Read *module* through the workspace provider (raises ModuleIOError)."""
    return get_provider(ctx).read_text(module)


def not_found(name: str, module: str, text: str) -> FunctionNotFoundError:
    """Build a NotFound error whose message suggests close function names.

    Example message::

        Function "func_8000" not found in assembly file "asm/main.s"
          Did you mean: func_80001000, func_80002000?
          Tip: Run `asmsplit list asm/main.s` to see every function.
    """
    err = FunctionNotFoundError(name, module)
    names = sorted(set(function_names(text)))
    close = difflib.get_close_matches(name, names, n=_MAX_SUGGESTIONS, cutoff=0.6)
    lines = [err.message]
    if close:
        lines.append(f"  Did you mean: {', '.join(close)}?")
    lines.append(f"  Tip: Run `asmsplit list {module}` to see every function.")
    err.message = "\n".join(lines)
    return err
