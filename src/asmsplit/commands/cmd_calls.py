"""Show the symbols a function (or every function) references."""

from __future__ import annotations

import click

from asmsplit.asm.boundary import extract_function
from asmsplit.asm.references import extract_calls, extract_module_calls
from asmsplit.commands.resolve import not_found, read_module
from asmsplit.output.formatter import format_table, json_envelope, to_json


@click.command()
@click.argument("module")
@click.argument("name", required=False)
@click.pass_context
def calls(ctx, module, name):
    """List symbols referenced via jal, `@ =sym` or la/add/move `=sym`.

    With NAME, only that function is scanned; otherwise every function in
    MODULE is listed with its references.
    """
    json_mode = ctx.obj.get("json") if ctx.obj else False
    text = read_module(ctx, module)

    if name:
        code = extract_function(text, name)
        if code is None:
            raise not_found(name, module, text)
        refs = extract_calls(code)
        if json_mode:
            click.echo(to_json(json_envelope(
                "calls",
                summary={"references": len(refs)},
                module=module,
                name=name,
                references=refs,
            )))
            return
        click.echo(f"{name}  ({len(refs)} references)")
        for ref in refs:
            click.echo(f"  {ref}")
        return

    by_function = extract_module_calls(text)
    if json_mode:
        click.echo(to_json(json_envelope(
            "calls",
            summary={
                "functions": len(by_function),
                "references": len({r for refs in by_function.values() for r in refs}),
            },
            module=module,
            functions=by_function,
        )))
        return

    rows = [[fn, ", ".join(refs) or "-"] for fn, refs in by_function.items()]
    click.echo(format_table(["function", "references"], rows))
