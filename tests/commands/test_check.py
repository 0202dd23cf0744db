"""Tests for the check and fix CLI commands."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from instrctl.cli import cli
from tests.conftest import GOOD_DOC, frontmatter_doc, write_doc


@pytest.mark.usefixtures("_isolated_project")
class TestCheckCommand:
    def test_clean_corpus(self, cli_runner: CliRunner, instructions_dir: Path) -> None:
        write_doc(instructions_dir, "django", GOOD_DOC)
        result = cli_runner.invoke(cli, ["check"])
        assert result.exit_code == 0
        assert "OK  No issues found in 1 documents." in result.output

    def test_json_output(self, cli_runner: CliRunner, instructions_dir: Path) -> None:
        write_doc(instructions_dir, "django", GOOD_DOC)
        result = cli_runner.invoke(cli, ["--json", "check"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["ok"] is True
        assert data["op"] == "check"
        for key in ("issues", "count", "error_count", "warning_count", "files_checked"):
            assert key in data["data"]
        assert data["data"]["healthy"] is True

    def test_errors_exit_one(self, cli_runner: CliRunner, instructions_dir: Path) -> None:
        write_doc(instructions_dir, "py", frontmatter_doc('description: "Py"', "applyTo: *.py"))
        result = cli_runner.invoke(cli, ["--json", "check"])
        assert result.exit_code == 1
        data = json.loads(result.stdout)
        assert data["ok"] is True
        assert data["data"]["healthy"] is False
        assert data["data"]["issues"][0]["code"] == "IN003"

    def test_warnings_exit_zero(self, cli_runner: CliRunner, instructions_dir: Path) -> None:
        write_doc(instructions_dir, "go", frontmatter_doc("description: Go", "applyTo: '*.go'"))
        result = cli_runner.invoke(cli, ["check"])
        assert result.exit_code == 0
        assert "No errors found; advisory warnings listed below." in result.output
        assert "IN030" in result.output

    def test_errors_only(self, cli_runner: CliRunner, instructions_dir: Path) -> None:
        write_doc(instructions_dir, "go", frontmatter_doc("description: Go", "applyTo: '*.go'"))
        result = cli_runner.invoke(cli, ["--json", "check", "--errors-only"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["data"]["count"] == 0
        assert data["data"]["issues"] == []

    def test_min_severity_choice(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["check", "--min-severity", "info"])
        assert result.exit_code == 2

    def test_quiet_lines(self, cli_runner: CliRunner, instructions_dir: Path) -> None:
        write_doc(instructions_dir, "go", frontmatter_doc("description: Go", "applyTo: '*.go'"))
        result = cli_runner.invoke(cli, ["-q", "check"])
        assert result.stdout.strip() == (
            ".github/instructions/go.instructions.md:2: IN030 'description' value is not quoted"
        )

    def test_explicit_path(self, cli_runner: CliRunner, instructions_dir: Path) -> None:
        write_doc(instructions_dir, "bad", "# no front-matter\n")
        write_doc(instructions_dir, "good", GOOD_DOC)
        result = cli_runner.invoke(
            cli, ["--json", "check", ".github/instructions/good.instructions.md"]
        )
        assert result.exit_code == 0
        assert json.loads(result.stdout)["data"]["files_checked"] == 1

    def test_missing_directory(self, cli_runner: CliRunner, instructions_dir: Path) -> None:
        instructions_dir.rmdir()
        result = cli_runner.invoke(cli, ["--json", "check"])
        assert result.exit_code == 1
        assert result.stdout == ""
        payload = json.loads(result.stderr)
        assert payload["ok"] is False
        assert payload["error"]["code"] == "NO_INSTRUCTIONS_DIR"

    def test_config_directory(
        self, cli_runner: CliRunner, project_root: Path
    ) -> None:
        (project_root / "instrctl.toml").write_text('[corpus]\ndirectory = "docs"\n')
        write_doc(project_root / "docs", "bad", "# no front-matter\n")
        result = cli_runner.invoke(cli, ["--json", "check"])
        assert result.exit_code == 1
        data = json.loads(result.stdout)
        assert data["data"]["issues"][0]["path"] == "docs/bad.instructions.md"


@pytest.mark.usefixtures("_isolated_project")
class TestFixCommand:
    def test_fix(self, cli_runner: CliRunner, instructions_dir: Path) -> None:
        path = write_doc(
            instructions_dir, "py", frontmatter_doc("description: Python", "applyTo: *.py")
        )
        result = cli_runner.invoke(cli, ["--json", "fix"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["op"] == "fix"
        assert data["data"]["count"] == 2
        assert 'applyTo: "*.py"' in path.read_text(encoding="utf-8")
        assert cli_runner.invoke(cli, ["check"]).exit_code == 0

    def test_dry_run(self, cli_runner: CliRunner, instructions_dir: Path) -> None:
        original = frontmatter_doc("description: Python", "applyTo: '*.py'")
        path = write_doc(instructions_dir, "py", original)
        result = cli_runner.invoke(cli, ["fix", "--dry-run"])
        assert result.exit_code == 0
        assert "dry_run: no files written" in result.output
        assert "quoted description" in result.output
        assert path.read_text(encoding="utf-8") == original

    def test_key_option(self, cli_runner: CliRunner, instructions_dir: Path) -> None:
        write_doc(instructions_dir, "py", frontmatter_doc("description: Python", "applyTo: *.py"))
        result = cli_runner.invoke(cli, ["--json", "fix", "--key", "applyTo"])
        data = json.loads(result.stdout)
        assert [f["key"] for f in data["data"]["fixes"]] == ["applyTo"]

    def test_warnings_on_stderr(self, cli_runner: CliRunner, instructions_dir: Path) -> None:
        write_doc(instructions_dir, "broken", "---\ndescription: Broken\n")
        result = cli_runner.invoke(cli, ["fix"])
        assert result.exit_code == 0
        assert "WARNING: Skipped .github/instructions/broken.instructions.md" in result.stderr
