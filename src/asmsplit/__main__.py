"""Allow ``python -m asmsplit``."""

from asmsplit.cli import cli

cli()
