"""Show function-level dependencies across one module or a directory of modules."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from asmsplit.commands.resolve import get_provider, project_config, project_root
from asmsplit.exit_codes import FunctionNotFoundError, ModuleIOError
from asmsplit.graph.builder import (
    build_call_graph,
    callees,
    callers,
    dependency_order,
    external_symbols,
    find_cycles,
)
from asmsplit.output.formatter import format_table, json_envelope, loc, section, to_json
from asmsplit.workspace.discovery import discover_modules

log = logging.getLogger(__name__)


def _display_path(path: Path, root: Path) -> str:
    """Path relative to the workspace root when it lies inside it."""
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return path.as_posix()


def _load_modules(ctx, path: str) -> dict[str, str]:
    provider = get_provider(ctx)
    target = provider.resolve(path)
    if target.is_dir():
        cfg = project_config(ctx)
        root = project_root(ctx)
        rel_paths = discover_modules(target, cfg["extensions"], cfg["exclude"], exclude_base=root)
        paths = [_display_path(target / p, root) for p in rel_paths]
    else:
        paths = [path]
    modules = {}
    for p in paths:
        try:
            modules[p] = provider.read_text(p)
        except ModuleIOError as exc:
            if len(paths) == 1:
                raise
            log.warning("skipping %s: %s", p, exc.message)
    return modules


@click.command()
@click.argument("path")
@click.option("--function", "fn_name", default=None, help="Only show callers and callees of this function")
@click.option("--order", is_flag=True, help="Print defined functions leaf-first (callees before callers)")
@click.option("--full", is_flag=True, help="Show all results without truncation")
@click.pass_context
def deps(ctx, path, fn_name, order, full):
    """Show which functions reference which, for a module or directory PATH."""
    json_mode = ctx.obj.get("json") if ctx.obj else False
    modules = _load_modules(ctx, path)
    G = build_call_graph(modules)
    defined = sorted(n for n, d in G.nodes(data=True) if d.get("defined"))
    externals = external_symbols(G)
    budget = 0 if full else 30

    if fn_name:
        if not G.has_node(fn_name) or not G.nodes[fn_name].get("defined"):
            raise FunctionNotFoundError(fn_name, path)
        data = G.nodes[fn_name]
        out_edges = callees(G, fn_name)
        in_edges = callers(G, fn_name)
        if json_mode:
            click.echo(to_json(json_envelope(
                "deps",
                summary={"callees": len(out_edges), "callers": len(in_edges)},
                name=fn_name,
                module=data["module"],
                start_line=data["start_line"],
                callees=out_edges,
                callers=in_edges,
            )))
            return
        click.echo(f"{fn_name}  {loc(data['module'], data['start_line'] + 1)}")
        click.echo(section(f"Calls ({len(out_edges)}):", [f"  {c}" for c in out_edges], budget))
        click.echo(section(f"Called by ({len(in_edges)}):", [f"  {c}" for c in in_edges], budget))
        return

    cycles = find_cycles(G)
    ordered = dependency_order(G) if order else []

    if json_mode:
        payload = {
            "modules": sorted(modules),
            "functions": [
                {
                    "name": n,
                    "module": G.nodes[n]["module"],
                    "start_line": G.nodes[n]["start_line"],
                    "callees": callees(G, n),
                    "callers": callers(G, n),
                }
                for n in defined
            ],
            "external": externals,
            "cycles": cycles,
        }
        if order:
            payload["order"] = ordered
        click.echo(to_json(json_envelope(
            "deps",
            summary={
                "modules": len(modules),
                "functions": len(defined),
                "edges": G.number_of_edges(),
                "external": len(externals),
                "cycles": len(cycles),
            },
            **payload,
        )))
        return

    click.echo(f"{len(modules)} modules  |  {len(defined)} functions  |  "
               f"{G.number_of_edges()} references  |  {len(externals)} external")
    click.echo()
    if order:
        click.echo(section("Leaf-first order:", [f"  {n}" for n in ordered], budget))
        return
    rows = [
        [n, str(len(callees(G, n))), str(len(callers(G, n))), loc(G.nodes[n]["module"], G.nodes[n]["start_line"] + 1)]
        for n in defined
    ]
    click.echo(format_table(["function", "calls", "called-by", "location"], rows, budget))
    if externals:
        click.echo()
        click.echo(section(f"External symbols ({len(externals)}):", [f"  {e}" for e in externals], budget))
    if cycles:
        click.echo()
        click.echo(section(f"Cycles ({len(cycles)}):", ["  " + " -> ".join(c) for c in cycles], budget))
