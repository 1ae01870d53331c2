"""Advisory diagnostics raised while fixing.

Diagnostics never abort traversal. They are collected on the
:class:`~fpfixer.services.fixer.FixReport` and optionally forwarded to a
caller-supplied callback.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel


class DiagnosticCode(StrEnum):
    """Kinds of non-fatal problems."""

    ENTITY_NOT_FOUND = "entity_not_found"
    NO_DEFINITIONS = "no_definitions"
    REFERENCE_NOT_FOUND = "reference_not_found"
    NON_NUMERIC_VALUE = "non_numeric_value"


class Diagnostic(BaseModel):
    """A single advisory message with its location in the target graph."""

    model_config = {"frozen": True}

    code: DiagnosticCode
    message: str
    entity: str | None = None
    path: str = "$"
    depth: int = 0
