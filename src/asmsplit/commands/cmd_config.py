"""Manage per-project asmsplit configuration (.asmsplit/config.json)."""

from __future__ import annotations

import click

from asmsplit.commands.resolve import project_root
from asmsplit.config import config_path, load_project_config, write_project_config
from asmsplit.output.formatter import json_envelope, to_json


@click.command("config")
@click.option("--add-extension", "add_ext", default=None, help="Treat files with this suffix as assembly modules.")
@click.option("--remove-extension", "remove_ext", default=None, help="Stop treating this suffix as assembly.")
@click.option("--exclude", "exclude_pattern", default=None, help="Add a glob pattern to the exclude list.")
@click.option("--remove-exclude", "remove_pattern", default=None, help="Remove a glob pattern from the exclude list.")
@click.option(
    "--collapse-blank-lines/--keep-blank-lines",
    "collapse",
    default=None,
    help="Whether `remove` collapses runs of blank lines left at the cut.",
)
@click.option("--show", is_flag=True, help="Print current configuration.")
@click.pass_context
def config(ctx, add_ext, remove_ext, exclude_pattern, remove_pattern, collapse, show):
    """Manage per-project asmsplit configuration (.asmsplit/config.json).

    \b
      asmsplit config --add-extension .inc
      asmsplit config --exclude "asm/nonmatchings/**"
      asmsplit config --keep-blank-lines
    """
    json_mode = ctx.obj.get("json") if ctx.obj else False
    root = project_root(ctx)
    cfg = load_project_config(root)
    updates: dict = {}

    if add_ext:
        ext = add_ext if add_ext.startswith(".") else "." + add_ext
        if ext not in cfg["extensions"]:
            updates["extensions"] = cfg["extensions"] + [ext]
    if remove_ext:
        ext = remove_ext if remove_ext.startswith(".") else "." + remove_ext
        exts = updates.get("extensions", cfg["extensions"])
        if ext in exts:
            updates["extensions"] = [e for e in exts if e != ext]
    if exclude_pattern and exclude_pattern not in cfg["exclude"]:
        updates["exclude"] = cfg["exclude"] + [exclude_pattern]
    if remove_pattern:
        excl = updates.get("exclude", cfg["exclude"])
        if remove_pattern in excl:
            updates["exclude"] = [p for p in excl if p != remove_pattern]
    if collapse is not None:
        updates["collapse_blank_lines"] = collapse

    if updates:
        write_project_config(updates, root)
        cfg.update(updates)

    if json_mode:
        click.echo(to_json(json_envelope(
            "config",
            summary={"updated": sorted(updates)},
            path=str(config_path(root)),
            config=cfg,
        )))
        return

    if updates:
        click.echo(f"Updated {config_path(root)}: {', '.join(sorted(updates))}")
    if show or not updates:
        click.echo(f"extensions:            {' '.join(cfg['extensions'])}")
        click.echo(f"exclude:               {' '.join(cfg['exclude']) or '(none)'}")
        click.echo(f"collapse_blank_lines:  {str(cfg['collapse_blank_lines']).lower()}")
