"""Shared pytest fixtures and test helpers for instrctl tests."""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from instrctl.config.settings import InstrSettings
from instrctl.infrastructure.corpus import Corpus

GOOD_DOC = """\
---
description: "Django best practices"
applyTo: "*.py"
---

# Django

Prefer class-based views.
"""


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's INSTRCTL_* environment out of the tests."""
    for name in ("INSTRCTL_CONFIG", "INSTRCTL_PROJECT_ROOT"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Undo the root-handler swap done by every CLI invocation."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers = handlers
    root.setLevel(level)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Temporary project with an empty ``.github/instructions`` directory.

    This is the single source of truth for the project layout.  All
    corpus-related fixtures (corpus, _isolated_project) build on this.
    """
    (tmp_path / ".github" / "instructions").mkdir(parents=True)
    return tmp_path


@pytest.fixture
def instructions_dir(project_root: Path) -> Path:
    return project_root / ".github" / "instructions"


@pytest.fixture
def corpus(project_root: Path) -> Corpus:
    """Corpus over the temporary project with plugins disabled."""
    settings = InstrSettings(project_root=project_root, plugins={"enabled": False})
    return Corpus(settings)


@pytest.fixture
def _isolated_project(project_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to the temp project root so the CLI discovers it.

    Use via ``@pytest.mark.usefixtures("_isolated_project")`` on command
    test classes.
    """
    monkeypatch.chdir(project_root)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def write_doc(directory: Path, name: str, content: str) -> Path:
    """Write ``<name>.instructions.md`` under *directory* and return its path."""
    path = directory / f"{name}.instructions.md"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content.encode("utf-8"))
    return path


def frontmatter_doc(*yaml_lines: str, body: str = "\n# Title\n\nSome guidance.\n") -> str:
    """Build a document from raw front-matter lines and a body."""
    return "---\n" + "\n".join(yaml_lines) + "\n---\n" + body
