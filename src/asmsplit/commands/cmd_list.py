"""List every function of an assembly module."""

from __future__ import annotations

import click

from asmsplit.asm.catalog import list_functions
from asmsplit.commands.resolve import read_module
from asmsplit.output.formatter import format_table, json_envelope, to_json


@click.command("list")
@click.argument("module")
@click.option("--code", "with_code", is_flag=True, help="Include each function's code in JSON output")
@click.option("--full", is_flag=True, help="Show all results without truncation")
@click.pass_context
def list_cmd(ctx, module, with_code, full):
    """List the functions of MODULE in file order."""
    json_mode = ctx.obj.get("json") if ctx.obj else False
    text = read_module(ctx, module)
    functions = list_functions(text)

    if json_mode:
        names = [fn.name for fn in functions]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        click.echo(to_json(json_envelope(
            "list",
            summary={"functions": len(functions), "duplicates": len(duplicates)},
            module=module,
            functions=[fn.to_dict(include_code=with_code) for fn in functions],
            duplicates=duplicates,
        )))
        return

    click.echo(f"{module}  ({len(functions)} functions)")
    click.echo()
    rows = [[fn.name, f"{fn.start_line + 1}-{fn.end_line + 1}", str(fn.line_count)] for fn in functions]
    click.echo(format_table(["name", "lines", "count"], rows, budget=0 if full else 50))
