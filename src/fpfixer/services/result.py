"""ServiceResult and ServiceError: what every CLI-facing operation returns.

The library entry point (:func:`fpfixer.services.fixer.fix_fp_fields`)
returns a FixReport and raises on overflow. The payload service wraps it
so the CLI never has to catch anything.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from fpfixer.domain.diagnostics import Diagnostic

# Error codes
RECURSION_OVERFLOW = "RECURSION_OVERFLOW"
INVALID_SCALE = "INVALID_SCALE"
ENTITY_NOT_FOUND = "ENTITY_NOT_FOUND"
INVALID_RULES = "INVALID_RULES"


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Return type for payload service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Operation name (``"fix"``, ``"entities"``, ``"resolve"``, ``"round"``).
        data: Operation-specific payload on success.
        warnings: Human-readable form of ``diagnostics``.
        diagnostics: Structured advisory messages from the fixer.
        error: Structured error if ``ok`` is False.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    diagnostics: list[Diagnostic] = Field(default_factory=list)
    error: ServiceError | None = None

    @classmethod
    def failure(
        cls, op: str, code: str, message: str, **detail: Any
    ) -> ServiceResult:
        return cls(ok=False, op=op, error=ServiceError(code=code, message=message, detail=detail))
