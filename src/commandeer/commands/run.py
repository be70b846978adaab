"""``commandeer run`` — execute a command class with string input."""

from __future__ import annotations

from typing import Any

import click
import structlog

from commandeer.commands._context import AppContext
from commandeer.exceptions import CommandError

log = structlog.get_logger(__name__)


def parse_assignments(assignments: tuple[str, ...]) -> dict[str, Any]:
    """Turn ``NAME=VALUE`` arguments into the raw input mapping.

    Values stay strings; the command's convertors do the typing. A later
    assignment to the same name wins.
    """
    raw: dict[str, Any] = {}
    for item in assignments:
        name, sep, value = item.partition("=")
        if not sep or not name.strip():
            msg = f"Expected NAME=VALUE, got {item!r}"
            raise click.BadParameter(msg, param_hint="NAME=VALUE")
        raw[name.strip()] = value
    return raw


@click.command()
@click.argument("target")
@click.argument("assignments", nargs=-1, metavar="[NAME=VALUE]...")
@click.option(
    "--null",
    "nulls",
    multiple=True,
    metavar="NAME",
    help="Supply NAME explicitly as None (repeatable).",
)
@click.pass_obj
def run(app: AppContext, target: str, assignments: tuple[str, ...], nulls: tuple[str, ...]) -> None:
    """Execute the command class TARGET with the given parameters.

    TARGET is 'package.module:ClassName', 'path/to/file.py:ClassName', or an
    alias from the [commands.aliases] config table.
    """
    command_cls = app.load(target)
    raw = parse_assignments(assignments)
    for name in nulls:
        raw[name] = None

    try:
        result = command_cls(raw).execute()
    except CommandError as exc:
        raise click.ClickException(str(exc)) from exc

    log.debug(
        "command.executed",
        command=command_cls.__qualname__,
        success=result.success,
        errors=len(result.errors),
    )
    app.emit(result, command_name=command_cls.__qualname__)
