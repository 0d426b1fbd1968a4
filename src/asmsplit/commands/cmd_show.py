"""Print one function's code."""

from __future__ import annotations

import click

from asmsplit.asm.boundary import resolve_function_range
from asmsplit.asm.source import AssemblySource
from asmsplit.commands.resolve import not_found, read_module
from asmsplit.output.formatter import json_envelope, to_json


@click.command()
@click.argument("module")
@click.argument("name")
@click.pass_context
def show(ctx, module, name):
    """Print function NAME from MODULE, exactly as it appears in the file."""
    json_mode = ctx.obj.get("json") if ctx.obj else False
    text = read_module(ctx, module)
    source = AssemblySource.from_text(text)
    rng = resolve_function_range(source, name)
    if rng is None:
        raise not_found(name, module, text)
    code = source.block(rng.start, rng.end)

    if json_mode:
        click.echo(to_json(json_envelope(
            "show",
            summary={"lines": rng.line_count},
            module=module,
            name=name,
            start_line=rng.start,
            end_line=rng.end,
            code=code,
        )))
        return

    click.echo(code)
