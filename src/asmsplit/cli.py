"""Click CLI entry point with lazy-loaded subcommands."""

import logging
import os
import sys

# Fix Unicode output on Windows consoles (cp1253, cp1252, etc.)
if sys.platform == "win32" and not os.environ.get("PYTHONIOENCODING"):
    sys.stdout.reconfigure(encoding="utf-8", errors="replace")
    sys.stderr.reconfigure(encoding="utf-8", errors="replace")

import click


# Lazy-loading command group: imports command modules only when invoked.
# This keeps networkx out of commands that never build a graph.
_COMMANDS = {
    "list":   ("asmsplit.commands.cmd_list",   "list_cmd"),
    "show":   ("asmsplit.commands.cmd_show",   "show"),
    "calls":  ("asmsplit.commands.cmd_calls",  "calls"),
    "remove": ("asmsplit.commands.cmd_remove", "remove"),
    "deps":   ("asmsplit.commands.cmd_deps",   "deps"),
    "config": ("asmsplit.commands.cmd_config", "config"),
}


class LazyGroup(click.Group):
    """A Click group that lazy-loads command modules on first access."""

    def list_commands(self, ctx):
        return sorted(_COMMANDS.keys())

    def get_command(self, ctx, cmd_name):
        if cmd_name not in _COMMANDS:
            return None
        module_path, attr_name = _COMMANDS[cmd_name]
        import importlib
        mod = importlib.import_module(module_path)
        return getattr(mod, attr_name)


@click.group(cls=LazyGroup)
@click.version_option(package_name="asmsplit")
@click.option('--json', 'json_mode', is_flag=True, help='Output in JSON format')
@click.option('--root', type=click.Path(file_okay=False), default=None,
              help='Workspace root (default: $ASMSPLIT_ROOT or nearest .asmsplit/.git parent)')
@click.option('-v', '--verbose', is_flag=True, help='Log progress to stderr')
@click.pass_context
def cli(ctx, json_mode, root, verbose):
    """asmsplit: catalog, extract and remove functions in assembly listings."""
    ctx.ensure_object(dict)
    ctx.obj['json'] = json_mode
    ctx.obj['root'] = root
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr)
