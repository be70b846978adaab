"""Rich/JSON output helpers.

The CLI renders a command's Result (and a command type's Schema) for
humans (Rich markup, colors, tables) or machines (--json).
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.markup import escape
from rich.table import Table

from commandeer.output.console import create_console, get_output

if TYPE_CHECKING:
    from commandeer.domain.schema import Schema
    from commandeer.services.result import Result


def _dumps(payload: Any) -> str:
    return _json.dumps(payload, indent=2, default=str)


def format_result(
    result: Result,
    *,
    command_name: str,
    json_output: bool = False,
    quiet: bool = False,
) -> str:
    """Format a Result for display.

    Args:
        result: The outcome of ``Command.execute()``.
        command_name: Display name of the command that produced it.
        json_output: If True, return JSON; otherwise return human-readable text.
        quiet: Print only the value (success) or the error messages (failure).
    """
    if json_output:
        return _dumps({"command": command_name, **result.model_dump()})

    console = create_console(no_color=quiet)
    if quiet:
        if result.success:
            console.print(escape("" if result.value is None else str(result.value)))
        for message in result.error_messages:
            console.print(escape(message))
        return get_output(console).rstrip("\n")

    if result.success:
        console.print(f"[cmd.ok]OK[/]: [cmd.name]{escape(command_name)}[/]")
        if result.value is not None:
            console.print(f"  [cmd.key]value:[/] {escape(repr(result.value))}")
    else:
        console.print(f"[cmd.error]ERROR[/]: [cmd.name]{escape(command_name)}[/]")
        for error in result.errors:
            suffix = f" [cmd.code]\\[{escape(error.code)}][/]" if error.code else ""
            console.print(f"  - {escape(error.message)}{suffix}")
    return get_output(console).rstrip("\n")


def format_schema(schema: Schema, *, json_output: bool = False) -> str:
    """Format the merged parameter table of a command type."""
    if json_output:
        parameters = [
            spec.model_dump(exclude={"transform"}) for spec in schema.parameters.values()
        ]
        return _dumps({"command": schema.name, "parameters": parameters})

    table = Table(title=schema.name, title_justify="left")
    table.add_column("Parameter", style="cmd.name")
    table.add_column("Required")
    table.add_column("Type", style="cmd.type")
    table.add_column("Default")
    table.add_column("Validations")
    for spec in schema.parameters.values():
        table.add_row(
            spec.name,
            "[cmd.required]yes[/]" if spec.required else "no",
            spec.type or "-",
            "" if spec.required else escape(repr(spec.default)),
            ", ".join(spec.validations) or "-",
        )

    console = create_console()
    console.print(table)
    return get_output(console).rstrip("\n")
