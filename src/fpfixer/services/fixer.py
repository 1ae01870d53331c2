"""Recursive fixer: applies rule lists to an object graph in place.

Traversal of one mapping happens in two passes:

1. Scale rules round the named fields of the current object.
2. Reference rules, in order, resolve another entity and recurse either
   into the named sub-fields or, with no names, into the same object
   again (cascading).

Arrays are walked element by element with the same rules and without
counting depth. Only reference-driven descents count, and going past
``max_recursion`` raises :class:`RecursionOverflowError`.

INVARIANT: only fields named by an applicable rule are ever written.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field

from fpfixer.domain.diagnostics import Diagnostic, DiagnosticCode
from fpfixer.domain.errors import RecursionOverflowError
from fpfixer.domain.limits import DEFAULT_MAX_RECURSION, MAX_RECURSION_CEILING
from fpfixer.domain.registry import Registry
from fpfixer.domain.rounding import round_to_scale
from fpfixer.domain.rules import ReferenceRule, RuleList, ScaleRule
from fpfixer.domain.shapes import Shape, classify

logger = logging.getLogger(__name__)

Rounder = Callable[[Any, int], Any]


class FixContext(BaseModel):
    """What to fix and where to look up referenced entities.

    Attributes:
        config: Inline rules for the top level. Wins over entity lookup.
        entities: Registry used for entity names and reference rules.
        max_recursion: Deepest reference-driven descent allowed.
        rounder: ``(value, scale) -> value`` used by scale rules.
        on_diagnostic: Called with each diagnostic as it is raised.
    """

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    config: RuleList | None = None
    entities: Registry | None = None
    max_recursion: int = Field(default=DEFAULT_MAX_RECURSION, ge=0, le=MAX_RECURSION_CEILING)
    rounder: Rounder = round_to_scale
    on_diagnostic: Callable[[Diagnostic], None] | None = None


@dataclass
class FixReport:
    """Outcome of one :func:`fix_fp_fields` call."""

    diagnostics: list[Diagnostic] = field(default_factory=list)
    fields_fixed: int = 0
    max_depth: int = 0

    @property
    def ok(self) -> bool:
        return not self.diagnostics

    @property
    def warnings(self) -> list[str]:
        return [d.message for d in self.diagnostics]


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def _is_present(value: Any) -> bool:
    """Truthiness as the payload's producer sees it: 0, NaN and empty are absent."""
    if isinstance(value, float) and math.isnan(value):
        return False
    if isinstance(value, Decimal) and value.is_nan():
        return False
    return bool(value)


class _Walker:
    """One traversal: holds the context and the report being filled."""

    def __init__(self, ctx: FixContext, report: FixReport) -> None:
        self._ctx = ctx
        self._report = report

    def _emit(self, diagnostic: Diagnostic) -> None:
        self._report.diagnostics.append(diagnostic)
        logger.info("%s (code=%s, path=%s)", diagnostic.message, diagnostic.code, diagnostic.path)
        if self._ctx.on_diagnostic is not None:
            self._ctx.on_diagnostic(diagnostic)

    def _resolve(self, name: str, path: str, depth: int) -> list[ScaleRule | ReferenceRule] | None:
        if self._ctx.entities is None:
            return None
        return self._ctx.entities.resolve(name, report=self._emit, path=path, depth=depth)

    def walk(
        self,
        target: Any,
        config: list[ScaleRule | ReferenceRule] | None,
        entity_name: str | None,
        depth: int,
        path: str,
    ) -> None:
        if target is None:
            return
        shape = classify(target)
        if shape is Shape.SCALAR and not _is_present(target):
            return

        if depth > self._ctx.max_recursion:
            raise RecursionOverflowError(depth, self._ctx.max_recursion, entity_name)
        if shape is Shape.SCALAR:
            return
        self._report.max_depth = max(self._report.max_depth, depth)

        if shape is Shape.SEQUENCE:
            for index, item in enumerate(target):
                self.walk(item, config, entity_name, depth, f"{path}[{index}]")
            return

        rules = config
        if rules is None and entity_name:
            rules = self._resolve(entity_name, path, depth)
        if rules is None:
            self._emit(
                Diagnostic(
                    code=DiagnosticCode.NO_DEFINITIONS,
                    message=f"FpFixer[{entity_name}/lvl={depth}]: no definitions!",
                    entity=entity_name,
                    path=path,
                    depth=depth,
                )
            )
            return

        self._apply_scales(target, rules, entity_name, depth, path)
        self._apply_references(target, rules, entity_name, depth, path)

    def _apply_scales(
        self,
        target: Any,
        rules: list[ScaleRule | ReferenceRule],
        entity_name: str | None,
        depth: int,
        path: str,
    ) -> None:
        for rule in rules:
            if not isinstance(rule, ScaleRule) or rule.scale is None:
                continue
            for name in rule.names:
                value = target.get(name)
                if not _is_present(value):
                    continue
                if not _is_number(value):
                    self._emit(
                        Diagnostic(
                            code=DiagnosticCode.NON_NUMERIC_VALUE,
                            message=(
                                f"FpFixer[{entity_name}/lvl={depth}]: "
                                f"field [{name}] holds {type(value).__name__}, not a number"
                            ),
                            entity=entity_name,
                            path=f"{path}.{name}",
                            depth=depth,
                        )
                    )
                    continue
                target[name] = self._ctx.rounder(value, rule.scale)
                self._report.fields_fixed += 1

    def _apply_references(
        self,
        target: Any,
        rules: list[ScaleRule | ReferenceRule],
        entity_name: str | None,
        depth: int,
        path: str,
    ) -> None:
        for rule in rules:
            if not isinstance(rule, ReferenceRule):
                continue
            ref_rules = self._resolve(rule.entity_ref, path, depth)
            if ref_rules is None:
                self._emit(
                    Diagnostic(
                        code=DiagnosticCode.REFERENCE_NOT_FOUND,
                        message=(
                            f"FpFixer[{entity_name}/lvl={depth}]->{rule.entity_ref}: "
                            "no definitions!"
                        ),
                        entity=rule.entity_ref,
                        path=path,
                        depth=depth,
                    )
                )
                continue
            if rule.cascading:
                self.walk(target, ref_rules, rule.entity_ref, depth + 1, path)
                continue
            for name in rule.names or ():
                self.walk(target.get(name), ref_rules, rule.entity_ref, depth + 1, f"{path}.{name}")


def fix_fp_fields(
    target: Any,
    ctx: FixContext | None,
    entity_name: str | None = None,
) -> FixReport:
    """Round the configured fields of *target* in place.

    Args:
        target: A mapping, a sequence of mappings, or any nesting of them.
            ``None`` is a no-op.
        ctx: Inline rules and/or registry. ``None`` is a no-op.
        entity_name: Registry entity to use when ``ctx.config`` is absent.

    Returns:
        A report with diagnostics for every unresolved entity or reference.

    Raises:
        RecursionOverflowError: Reference descents went past
            ``ctx.max_recursion``. Fields already visited stay rounded.
        ScaleError: A scale rule carries an unsupported scale.
    """
    report = FixReport()
    if target is None or ctx is None:
        return report
    _Walker(ctx, report).walk(target, ctx.config, entity_name, 0, "$")
    logger.debug(
        "Fixed %d fields of [%s] (max depth %d, %d diagnostics)",
        report.fields_fixed,
        entity_name,
        report.max_depth,
        len(report.diagnostics),
    )
    return report
