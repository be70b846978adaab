"""Root CLI group for commandeer with global flags and command registration."""

from __future__ import annotations

import click

from commandeer import __version__
from commandeer.commands import register_commands
from commandeer.commands._context import AppContext
from commandeer.config.settings import CommandeerSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="commandeer")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging to stderr.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """commandeer — run declarative command objects from the shell."""
    ctx.ensure_object(dict)
    flags = {
        "json_output": json_output,
        "quiet": quiet,
        "verbose": verbose,
        "log_json": log_json,
    }
    try:
        settings = CommandeerSettings.from_cli(
            config_path=config_path,
            # Unset flags fall through to env vars and the config file.
            **{name: True for name, value in flags.items() if value},
        )
        ctx.obj = AppContext(settings)
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
