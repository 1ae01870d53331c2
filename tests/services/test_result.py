"""Tests for ServiceResult and ServiceError."""

import json

import pytest

from fpfixer.domain.diagnostics import Diagnostic, DiagnosticCode
from fpfixer.services.result import RECURSION_OVERFLOW, ServiceError, ServiceResult


class TestServiceResult:
    def test_success_construction(self) -> None:
        result = ServiceResult(ok=True, op="fix", data={"fields_fixed": 3})
        assert result.ok is True
        assert result.op == "fix"
        assert result.data == {"fields_fixed": 3}
        assert result.warnings == []
        assert result.diagnostics == []
        assert result.error is None

    def test_failure_helper(self) -> None:
        result = ServiceResult.failure("fix", RECURSION_OVERFLOW, "too deep", depth=11, limit=10)
        assert result.ok is False
        assert result.error is not None
        assert result.error.code == "RECURSION_OVERFLOW"
        assert result.error.detail == {"depth": 11, "limit": 10}

    def test_json_serialization(self) -> None:
        diag = Diagnostic(
            code=DiagnosticCode.NO_DEFINITIONS,
            message="FpFixer[x/lvl=0]: no definitions!",
            entity="x",
        )
        result = ServiceResult(ok=True, op="fix", warnings=[diag.message], diagnostics=[diag])
        parsed = json.loads(result.model_dump_json())
        assert parsed["ok"] is True
        assert parsed["diagnostics"][0]["code"] == "no_definitions"
        assert parsed["diagnostics"][0]["path"] == "$"
        assert parsed["warnings"] == ["FpFixer[x/lvl=0]: no definitions!"]

    def test_frozen(self) -> None:
        result = ServiceResult(ok=True, op="fix")
        with pytest.raises(Exception):
            result.ok = False  # type: ignore[misc]


class TestServiceError:
    def test_default_detail(self) -> None:
        error = ServiceError(code="E001", message="bad")
        assert error.detail == {}
