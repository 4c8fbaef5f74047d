"""
Defines the main Click command group for the tokensync developer CLI.

This module provides:
- The root `cli` command group.
- Integration with Rich-enhanced Click classes (`RichGroup`).
- Registration of the token subcommands.

Usage:
Installed as the `tokensync-cli` console script.
"""

import click
from tokensync.commands.base import RichGroup
from tokensync.commands.tokens import resolve, sync


@click.group(
    cls=RichGroup,
    help="""
    tokensync Command Palette

    Resolve design-token files and sync them into style libraries.
    """,
)
def cli() -> None:
    """
    The root Click command group for tokensync.
    """
    pass


# Explicitly annotate `cli` as `click.Group` for static type checking
cli: click.Group = cli

# Register subcommands
cli.add_command(resolve)
cli.add_command(sync)
