"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. Resolves targets against configured aliases and
centralizes result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from commandeer.exceptions import CommandError
from commandeer.output.formatters import format_result

if TYPE_CHECKING:
    from commandeer.config.settings import CommandeerSettings
    from commandeer.services.command import Command
    from commandeer.services.result import Result


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: CommandeerSettings) -> None:
        self.settings = settings

        from commandeer.config.logging import configure_logging

        configure_logging(
            verbose=settings.verbose,
            log_json=settings.log_json,
            level=settings.log_level,
        )

    def load(self, target: str) -> type[Command]:
        """Resolve *target* to a Command subclass.

        A bad target is a usage error; a misdeclared command class is a
        plain click error.
        """
        from commandeer.infrastructure.loader import load_command

        try:
            return load_command(target, self.settings.aliases)
        except ValueError as exc:
            raise click.BadParameter(str(exc), param_hint="TARGET") from exc
        except CommandError as exc:
            raise click.ClickException(str(exc)) from exc

    def emit(self, result: Result, *, command_name: str) -> None:
        """Format and output a Result with correct exit semantics.

        * Success: writes to stdout, returns normally.
        * Failure: writes to stderr, exits with code 1.
        """
        output = format_result(
            result,
            command_name=command_name,
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
        )
        if result.success:
            click.echo(output)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
