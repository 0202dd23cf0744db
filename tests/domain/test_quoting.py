"""Tests for plain-scalar detection and quoting."""

from __future__ import annotations

import pytest

from instrctl.domain.quoting import find_plain_scalar, quote_block, quote_scalar


class TestFindPlainScalar:
    def test_plain_value(self) -> None:
        scalar = find_plain_scalar(["description: Django tips", "applyTo: '*.py'"], "description")
        assert scalar is not None
        assert scalar.value == "Django tips"
        assert scalar.index == 0
        assert scalar.comment == ""

    @pytest.mark.parametrize(
        "line",
        ['description: "quoted"', "description: 'quoted'", "description: |", "description: >-"],
    )
    def test_non_plain_values(self, line: str) -> None:
        assert find_plain_scalar([line], "description") is None

    def test_empty_value(self) -> None:
        assert find_plain_scalar(["description:"], "description") is None

    def test_missing_key(self) -> None:
        assert find_plain_scalar(["applyTo: x"], "description") is None

    def test_nested_key_ignored(self) -> None:
        assert find_plain_scalar(["meta:", "  description: nested"], "description") is None

    def test_trailing_comment(self) -> None:
        scalar = find_plain_scalar(["applyTo: *.py  # python"], "applyTo")
        assert scalar is not None
        assert scalar.value == "*.py"
        assert scalar.comment == "# python"


class TestQuote:
    def test_quote_scalar_escapes(self) -> None:
        assert quote_scalar('say "hi" \\ bye') == '"say \\"hi\\" \\\\ bye"'

    def test_quote_block(self) -> None:
        text, changed = quote_block(
            "description: Terraform tips\napplyTo: *.tf,*.tfvars", ["description", "applyTo"]
        )
        assert text == 'description: "Terraform tips"\napplyTo: "*.tf,*.tfvars"'
        assert [s.key for s in changed] == ["description", "applyTo"]

    def test_quote_block_keeps_comment(self) -> None:
        text, _ = quote_block("applyTo: *.go # go files", ["applyTo"])
        assert text == 'applyTo: "*.go"  # go files'

    def test_quote_block_already_quoted(self) -> None:
        original = 'description: "x"'
        text, changed = quote_block(original, ["description"])
        assert text == original
        assert changed == []
