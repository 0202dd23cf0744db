"""Parametrized help tests for all CLI commands."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from instrctl.cli import cli

# (CLI args, expected keywords in output)
HELP_COMMANDS: list[tuple[list[str], list[str]]] = [
    (["--help"], ["check", "fix", "list", "match", "new", "rules", "--json", "--log-json"]),
    (["check", "--help"], ["--min-severity", "--errors-only", "PATHS"]),
    (["fix", "--help"], ["--dry-run", "--key", "PATHS"]),
    (["list", "--help"], ["applyTo"]),
    (["match", "--help"], ["TARGETS"]),
    (["rules", "--help"], ["lint rules"]),
    (["new", "--help"], ["NAME", "--description", "--apply-to"]),
]


@pytest.mark.parametrize(
    "args,expected_keywords",
    HELP_COMMANDS,
    ids=["_".join(a for a in args if a != "--help") or "root" for args, _ in HELP_COMMANDS],
)
def test_help(cli_runner: CliRunner, args: list[str], expected_keywords: list[str]) -> None:
    result = cli_runner.invoke(cli, args)
    assert result.exit_code == 0
    for kw in expected_keywords:
        assert kw in result.output, f"Expected '{kw}' in help output for {args}"
