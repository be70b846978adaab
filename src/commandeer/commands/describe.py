"""``commandeer describe`` — show the parameters a command class accepts."""

from __future__ import annotations

import click

from commandeer.commands._context import AppContext
from commandeer.exceptions import CommandError
from commandeer.output.formatters import format_schema


@click.command()
@click.argument("target")
@click.pass_obj
def describe(app: AppContext, target: str) -> None:
    """Print the merged parameter table of the command class TARGET."""
    command_cls = app.load(target)
    try:
        schema = command_cls.schema()
    except CommandError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(format_schema(schema, json_output=app.settings.json_output))
