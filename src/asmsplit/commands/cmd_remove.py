"""Remove a function from an assembly module."""

from __future__ import annotations

import click

from asmsplit.commands.resolve import get_provider, not_found, project_config
from asmsplit.exit_codes import FunctionNotFoundError
from asmsplit.output.formatter import json_envelope, to_json
from asmsplit.refactor.transforms import remove_function


@click.command()
@click.argument("module")
@click.argument("name")
@click.option("--dry-run", is_flag=True, help="Show what would be removed without writing")
@click.pass_context
def remove(ctx, module, name, dry_run):
    """Delete function NAME from MODULE and write the file back.

    The function's exact text is located first; its first occurrence is
    cut out and runs of blank lines left behind are collapsed to one.
    """
    json_mode = ctx.obj.get("json") if ctx.obj else False
    cfg = project_config(ctx)
    provider = get_provider(ctx)

    try:
        result = remove_function(
            module, name, provider, dry_run=dry_run, collapse=cfg["collapse_blank_lines"]
        )
    except FunctionNotFoundError:
        raise not_found(name, module, provider.read_text(module))

    if json_mode:
        click.echo(to_json(json_envelope(
            "remove",
            summary={"removed_lines": result.removed_lines, "dry_run": dry_run},
            **result.to_dict(),
        )))
        return

    verb = "Would remove" if dry_run else "Removed"
    click.echo(f"{verb} {name} from {module} (lines {result.start_line + 1}-{result.end_line + 1}, "
               f"{result.removed_lines} lines)")
    if dry_run:
        click.echo()
        click.echo(result.removed_code)
