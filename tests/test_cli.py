"""Tests for the root instrctl CLI."""

from pathlib import Path

import pytest
from click.testing import CliRunner

from instrctl import __version__
from instrctl.cli import cli


def test_cli_help(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "instrctl" in result.output


def test_cli_version(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


@pytest.mark.usefixtures("_isolated_project")
def test_cli_no_args(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, [])
    assert result.exit_code == 0
    assert "Usage" in result.output


# --- Global flags ---


@pytest.mark.parametrize("flag", ["--json", "-q", "-v", "--log-json"])
def test_global_flag_accepted(cli_runner: CliRunner, flag: str) -> None:
    result = cli_runner.invoke(cli, [flag, "--version"])
    assert result.exit_code == 0


def test_config_option_accepted(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["-c", "/tmp/test.toml", "--version"])
    assert result.exit_code == 0


def test_missing_config_file(cli_runner: CliRunner, tmp_path: Path) -> None:
    result = cli_runner.invoke(cli, ["-c", str(tmp_path / "missing.toml"), "check"])
    assert result.exit_code == 1
    assert "Config file not found" in result.output


def test_explicit_config_sets_root(cli_runner: CliRunner, tmp_path: Path) -> None:
    config = tmp_path / "instrctl.toml"
    config.write_text('[corpus]\ndirectory = "ai"\n')
    (tmp_path / "ai").mkdir()
    (tmp_path / "ai" / "go.instructions.md").write_text(
        '---\ndescription: "Go"\napplyTo: "*.go"\n---\n\n# Go\n'
    )
    result = cli_runner.invoke(cli, ["-q", "-c", str(config), "list"])
    assert result.exit_code == 0
    assert result.stdout.strip() == "ai/go.instructions.md"
