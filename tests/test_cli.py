"""Tests for the root CLI group."""

from pathlib import Path

import pytest
from click.testing import CliRunner

from commandeer import __version__
from commandeer.cli import cli


@pytest.mark.usefixtures("isolated_cwd")
class TestRootGroup:
    def test_help(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "commandeer" in result.output
        for name in ("run", "describe", "--json", "--quiet", "--verbose", "--log-json"):
            assert name in result.output

    def test_version(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_no_subcommand_prints_help(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, [])
        assert result.exit_code == 0
        assert "Usage" in result.output

    @pytest.mark.parametrize("command", ["run", "describe"])
    def test_subcommand_help(self, cli_runner: CliRunner, command: str) -> None:
        result = cli_runner.invoke(cli, [command, "--help"])
        assert result.exit_code == 0, f"{command} --help failed: {result.output}"
        assert "TARGET" in result.output

    def test_invalid_config_file(self, cli_runner: CliRunner, isolated_cwd: Path) -> None:
        (isolated_cwd / "commandeer.toml").write_text("quiet = [\n")
        result = cli_runner.invoke(cli, ["run", "tests.sample_commands:AddNumbers"])
        assert result.exit_code == 1
        assert "Invalid TOML" in result.stderr

    def test_invalid_log_level(
        self, cli_runner: CliRunner, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("COMMANDEER_LOG_LEVEL", "chatty")
        result = cli_runner.invoke(cli, ["run", "tests.sample_commands:AddNumbers"])
        assert result.exit_code == 1
        assert "Unknown log level" in result.stderr

    def test_explicit_config_flag(self, cli_runner: CliRunner, isolated_cwd: Path) -> None:
        custom = isolated_cwd / "alt.toml"
        custom.write_text('quiet = true\n[commands.aliases]\nadd = "tests.sample_commands:AddNumbers"\n')
        result = cli_runner.invoke(cli, ["-c", str(custom), "run", "add", "a=2", "b=2"])
        assert result.exit_code == 0, result.output
        assert result.stdout.strip() == "4"
