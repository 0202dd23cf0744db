"""Integration workflow tests — multi-step scenarios spanning multiple services.

These tests exercise the hand-offs between services: a corpus written in
the common broken style is checked, fixed, re-checked, and then queried.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from instrctl.infrastructure.corpus import Corpus
from instrctl.services.check import CheckService
from instrctl.services.create import CreateService
from instrctl.services.fix import FixService
from instrctl.services.query import QueryService
from tests.conftest import frontmatter_doc, write_doc


@pytest.fixture
def legacy_corpus(corpus: Corpus, instructions_dir: Path) -> Corpus:
    """Documents with unquoted values, the way they are often hand-written."""
    write_doc(
        instructions_dir,
        "terraform",
        frontmatter_doc("description: Terraform conventions", "applyTo: *.tf,*.tfvars"),
    )
    write_doc(
        instructions_dir,
        "java",
        frontmatter_doc("description: Java 21 practices", "applyTo: '*.java'"),
    )
    write_doc(
        instructions_dir,
        "brainstorm",
        frontmatter_doc('description: "{{ description }}"', 'applyTo: "{{ globs }}"'),
    )
    return corpus


class TestCheckFixCheck:
    """check reports → fix quotes → check is clean → match sees every document."""

    def test_pipeline(self, legacy_corpus: Corpus, project_root: Path) -> None:
        before = CheckService(legacy_corpus).check()
        assert before.data["healthy"] is False
        codes = {(i["path"].rsplit("/", 1)[-1], i["code"]) for i in before.data["issues"]}
        assert ("terraform.instructions.md", "IN003") in codes
        assert ("java.instructions.md", "IN030") in codes
        assert not any(name.startswith("brainstorm") for name, _ in codes)

        # Terraform globs are unreadable until quoted.
        listed = QueryService(legacy_corpus).list_documents()
        assert listed.data["count"] == 2

        fixed = FixService(legacy_corpus).fix()
        assert fixed.data["files_changed"] == 2

        after = CheckService(legacy_corpus).check()
        assert after.data["count"] == 0
        assert after.data["healthy"] is True

        matched = QueryService(legacy_corpus).match([str(project_root / "infra" / "main.tf")])
        paths = [d["path"] for d in matched.data["items"][0]["documents"]]
        assert paths == [".github/instructions/terraform.instructions.md"]

    def test_second_fix_is_noop(self, legacy_corpus: Corpus) -> None:
        FixService(legacy_corpus).fix()
        again = FixService(legacy_corpus).fix()
        assert again.data["count"] == 0


class TestCreateThenQuery:
    def test_created_document_is_matched(self, corpus: Corpus, project_root: Path) -> None:
        created = CreateService(corpus).create(
            "circleci", description="CircleCI pipelines", apply_to=".circleci/*.yml"
        )
        assert created.ok
        assert CheckService(corpus).check().data["count"] == 0
        matched = QueryService(corpus).match([str(project_root / ".circleci" / "config.yml")])
        assert matched.data["items"][0]["count"] == 1
