"""Subcommand modules for the commandeer CLI.

Provides register_commands() which uses deferred imports to keep
``commandeer --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the standalone commands on the root CLI group."""
    from commandeer.commands.describe import describe
    from commandeer.commands.run import run

    cli.add_command(run)
    cli.add_command(describe)
