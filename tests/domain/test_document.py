"""Tests for InstructionDocument loading."""

from __future__ import annotations

from instrctl.domain.content import FrontmatterNotMappingError
from instrctl.domain.document import load_document


class TestLoadDocument:
    def test_valid(self) -> None:
        doc = load_document(
            ".github/instructions/go.instructions.md",
            '---\ndescription: "Go"\napplyTo: "*.go"\n---\n\n# Go\n',
        )
        assert doc.frontmatter == {"description": "Go", "applyTo": "*.go"}
        assert doc.yaml_error is None
        assert doc.name == "go.instructions.md"
        assert doc.body == "# Go\n"
        assert doc.body_first_line == 6

    def test_body_first_line_without_separator(self) -> None:
        doc = load_document("a.instructions.md", "---\na: 1\n---\n# Go\n")
        assert doc.body_first_line == 4

    def test_invalid_yaml_recorded(self) -> None:
        doc = load_document("a.instructions.md", "---\napplyTo: *.py\n---\n")
        assert doc.frontmatter is None
        assert doc.yaml_error is not None
        assert doc.yaml_error.line == 2

    def test_not_mapping_recorded(self) -> None:
        doc = load_document("a.instructions.md", "---\njust text\n---\n")
        assert isinstance(doc.yaml_error, FrontmatterNotMappingError)

    def test_no_frontmatter(self) -> None:
        doc = load_document("a.instructions.md", "# Title\n")
        assert doc.block.present is False
        assert doc.frontmatter is None
        assert doc.yaml_error is None
