"""Tests for ``commandeer run``."""

import json
from pathlib import Path

import click
import pytest
from click.testing import CliRunner

from commandeer.cli import cli
from commandeer.commands.run import parse_assignments

ADD = "tests.sample_commands:AddNumbers"
GREET = "tests.sample_commands:Greet"


class TestParseAssignments:
    def test_pairs(self) -> None:
        assert parse_assignments(("a=4", "b=")) == {"a": "4", "b": ""}

    def test_value_may_contain_equals(self) -> None:
        assert parse_assignments(("expr=x=1",)) == {"expr": "x=1"}

    def test_later_assignment_wins(self) -> None:
        assert parse_assignments(("a=1", "a=2")) == {"a": "2"}

    @pytest.mark.parametrize("item", ["oops", "=value", "  =x"])
    def test_malformed(self, item: str) -> None:
        with pytest.raises(click.BadParameter, match="Expected NAME=VALUE"):
            parse_assignments((item,))


@pytest.mark.usefixtures("isolated_cwd")
class TestRunCommand:
    def test_success(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["run", ADD, "a=4", "b=6"])
        assert result.exit_code == 0, result.output
        assert result.stdout.splitlines() == ["OK: AddNumbers", "  value: 10"]

    def test_json_output(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "run", ADD, "a=4", "b=6"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["command"] == "AddNumbers"
        assert data["value"] == 10
        assert data["success"] is True

    def test_quiet_output(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "run", GREET, "name=Ada", "shout=on"])
        assert result.exit_code == 0, result.output
        assert result.stdout.strip() == "HELLO, ADA!"

    def test_optional_value_supplied(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "run", GREET, "name=Ada", "punctuation=?"])
        assert result.stdout.strip() == "Hello, Ada?"

    def test_missing_parameter_fails(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["run", ADD, "a=4"])
        assert result.exit_code == 1
        assert result.stdout == ""
        assert "ERROR: AddNumbers" in result.stderr
        assert "No value specified for the 'b' required parameter." in result.stderr
        assert "[missing_parameter]" in result.stderr

    def test_null_option(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "run", ADD, "a=4", "--null", "b"])
        assert result.exit_code == 1
        data = json.loads(result.stderr)
        assert data["error_codes"] == ["conversion_failed", "conversion_failed"]

    def test_unconvertible_value_fails(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["run", ADD, "a=four", "b=6"])
        assert result.exit_code == 1
        assert "cannot be converted to the 'integer' type" in result.stderr

    def test_invalid_type_reported_as_error(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["run", "tests.sample_commands:Misdeclared", "amount=3"])
        assert result.exit_code == 1
        assert "Invalid type 'money' specified for the 'amount' parameter." in result.stderr

    def test_perform_not_overridden(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["run", "tests.sample_commands:Lazy"])
        assert result.exit_code == 1
        assert "has not overridden perform()" in result.stderr

    def test_malformed_assignment(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["run", ADD, "oops"])
        assert result.exit_code == 2
        assert "Expected NAME=VALUE" in result.stderr

    def test_bad_target(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["run", "AddNumbers"])
        assert result.exit_code == 2
        assert "neither an alias nor 'module:ClassName'" in result.stderr

    def test_target_file_with_syntax_error(
        self, cli_runner: CliRunner, isolated_cwd: Path
    ) -> None:
        source = isolated_cwd / "bad.py"
        source.write_text("def broken(:\n")
        result = cli_runner.invoke(cli, ["run", f"{source}:Broken"])
        assert result.exit_code == 2
        assert "Cannot import" in result.stderr
        assert not isinstance(result.exception, SyntaxError)

    def test_misdeclared_target_class(self, cli_runner: CliRunner, isolated_cwd: Path) -> None:
        source = isolated_cwd / "clash.py"
        source.write_text(
            "from commandeer import Command, required\n\n"
            "class Clashing(Command):\n"
            "    execute = required()\n"
        )
        result = cli_runner.invoke(cli, ["run", f"{source}:Clashing"])
        assert result.exit_code == 1
        assert "The 'execute' parameter clashes" in result.stderr
        assert "Invalid value for TARGET" not in result.stderr

    def test_alias_from_config(self, cli_runner: CliRunner, isolated_cwd: Path) -> None:
        (isolated_cwd / "commandeer.toml").write_text(f'[commands.aliases]\nadd = "{ADD}"\n')
        result = cli_runner.invoke(cli, ["-q", "run", "add", "a=1", "b=2"])
        assert result.exit_code == 0, result.output
        assert result.stdout.strip() == "3"

    def test_json_from_env(self, cli_runner: CliRunner, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("COMMANDEER_JSON_OUTPUT", "true")
        result = cli_runner.invoke(cli, ["run", ADD, "a=1", "b=2"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)["value"] == 3

    def test_verbose_logs_to_stderr(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-v", "--log-json", "run", ADD, "a=1", "b=2"])
        assert result.exit_code == 0, result.output
        assert result.stdout.splitlines()[0] == "OK: AddNumbers"
        events = [json.loads(line)["event"] for line in result.stderr.splitlines() if line]
        assert "command.executed" in events
