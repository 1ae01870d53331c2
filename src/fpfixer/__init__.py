"""fpfixer: round floating-point fields of nested payloads to configured scales."""

from __future__ import annotations

from fpfixer.domain.errors import FpFixerError, RecursionOverflowError, ScaleError
from fpfixer.domain.limits import DEFAULT_MAX_RECURSION
from fpfixer.domain.registry import Registry, resolve
from fpfixer.domain.rounding import ceil_to_scale, round_to_scale
from fpfixer.domain.rules import ReferenceRule, ScaleRule, parse_rule_list
from fpfixer.services.fixer import FixContext, FixReport, fix_fp_fields

__version__ = "0.3.0"

__all__ = [
    "DEFAULT_MAX_RECURSION",
    "FixContext",
    "FixReport",
    "FpFixerError",
    "RecursionOverflowError",
    "ReferenceRule",
    "Registry",
    "ScaleError",
    "ScaleRule",
    "__version__",
    "ceil_to_scale",
    "fix_fp_fields",
    "parse_rule_list",
    "resolve",
    "round_to_scale",
]
