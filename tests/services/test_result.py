"""Tests for ServiceResult and ServiceError."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from instrctl.services.result import FILE_NOT_FOUND, ServiceError, ServiceResult


class TestServiceResult:
    def test_success_defaults(self) -> None:
        result = ServiceResult(ok=True, op="check")
        assert result.data == {}
        assert result.warnings == []
        assert result.error is None

    def test_failure_shorthand(self) -> None:
        result = ServiceResult.failure("fix", FILE_NOT_FOUND, "No such document: x", path="x")
        assert result.ok is False
        assert result.op == "fix"
        assert result.error == ServiceError(
            code=FILE_NOT_FOUND, message="No such document: x", detail={"path": "x"}
        )

    def test_frozen(self) -> None:
        result = ServiceResult(ok=True, op="check")
        with pytest.raises(ValidationError):
            result.ok = False  # type: ignore[misc]

    def test_json_roundtrip(self) -> None:
        result = ServiceResult(ok=True, op="rules", data={"count": 1}, warnings=["w"])
        assert ServiceResult.model_validate_json(result.model_dump_json()) == result
