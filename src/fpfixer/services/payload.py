"""PayloadService: fixer operations for the CLI, returning ServiceResult.

Wraps :func:`fix_fp_fields` and the registry so that commands only ever
format results: recursion overflows and bad scales come back as
``ok=False`` results instead of exceptions.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from fpfixer.domain.errors import RecursionOverflowError, ScaleError
from fpfixer.domain.limits import DEFAULT_MAX_RECURSION
from fpfixer.domain.registry import Registry
from fpfixer.domain.rounding import ceil_to_scale, round_to_scale
from fpfixer.domain.rules import ReferenceRule, ScaleRule, dump_rule_list, parse_rule_list
from fpfixer.infrastructure.loader import load_registries
from fpfixer.services.fixer import FixContext, fix_fp_fields
from fpfixer.services.result import (
    ENTITY_NOT_FOUND,
    INVALID_RULES,
    INVALID_SCALE,
    RECURSION_OVERFLOW,
    ServiceResult,
)

if TYPE_CHECKING:
    from fpfixer.config.settings import FpFixerSettings

logger = logging.getLogger(__name__)

_ROUNDERS = {"decimal": round_to_scale, "ceil": ceil_to_scale}


class PayloadService:
    """Fix payloads against one registry.

    Usage::

        svc = PayloadService.from_settings(settings)
        result = svc.fix(payload, entity="casePackDetail")
    """

    def __init__(
        self,
        registry: Registry,
        *,
        max_recursion: int = DEFAULT_MAX_RECURSION,
        rounding: str = "decimal",
    ) -> None:
        self._registry = registry
        self._max_recursion = max_recursion
        self._rounding = rounding

    @classmethod
    def from_settings(
        cls,
        settings: FpFixerSettings,
        extra_registries: Iterable[Path] = (),
    ) -> PayloadService:
        """Build from settings, loading configured and *extra_registries* files.

        Raises:
            RegistryLoadError: A registry file is unreadable or invalid.
        """
        paths = [*settings.registry_files(), *extra_registries]
        registry = load_registries(paths, inline=settings.entities)
        logger.debug("Registry ready: %d entities from %d files", len(registry), len(paths))
        return cls(
            registry,
            max_recursion=settings.fixer.max_recursion,
            rounding=settings.fixer.rounding,
        )

    @property
    def registry(self) -> Registry:
        return self._registry

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def fix(
        self,
        payload: Any,
        *,
        entity: str | None = None,
        rules: Any = None,
        max_recursion: int | None = None,
    ) -> ServiceResult:
        """Fix *payload* in place using inline *rules* or the *entity* rules."""
        if entity is None and rules is None:
            return ServiceResult.failure(
                "fix", INVALID_RULES, "Either an entity name or inline rules are required"
            )
        try:
            ctx = FixContext(
                config=parse_rule_list(rules) if rules is not None else None,
                entities=self._registry,
                max_recursion=max_recursion if max_recursion is not None else self._max_recursion,
                rounder=_ROUNDERS[self._rounding],
            )
        except ValidationError as exc:
            return ServiceResult.failure("fix", INVALID_RULES, f"Invalid rules: {exc}")

        try:
            report = fix_fp_fields(payload, ctx, entity)
        except RecursionOverflowError as exc:
            return ServiceResult.failure(
                "fix",
                RECURSION_OVERFLOW,
                str(exc),
                depth=exc.depth,
                limit=exc.limit,
                entity=exc.entity,
            )
        except ScaleError as exc:
            return ServiceResult.failure("fix", INVALID_SCALE, str(exc))

        return ServiceResult(
            ok=True,
            op="fix",
            data={
                "payload": payload,
                "entity": entity,
                "fields_fixed": report.fields_fixed,
                "max_depth": report.max_depth,
            },
            warnings=report.warnings,
            diagnostics=report.diagnostics,
        )

    def list_entities(self) -> ServiceResult:
        """Summarize every registry entity."""
        items: list[dict[str, Any]] = []
        for name in sorted(self._registry.names()):
            rules = self._registry.root[name]
            scale_rules = [r for r in rules if isinstance(r, ScaleRule)]
            references = [r.entity_ref for r in rules if isinstance(r, ReferenceRule)]
            items.append(
                {
                    "name": name,
                    "fields": sum(len(r.names) for r in scale_rules),
                    "scales": sorted({r.scale for r in scale_rules if r.scale is not None}),
                    "references": references,
                }
            )
        return ServiceResult(ok=True, op="entities", data={"items": items, "count": len(items)})

    def resolve(self, name: str) -> ServiceResult:
        """Show the rule list *name* resolves to (exact, then upper-case)."""
        rules = self._registry.get(name)
        if rules is None:
            return ServiceResult.failure(
                "resolve",
                ENTITY_NOT_FOUND,
                f"Entity not found: {name}",
                known=self._registry.names(),
            )
        resolved_as = name if name in self._registry else name.upper()
        return ServiceResult(
            ok=True,
            op="resolve",
            data={"name": name, "resolved_as": resolved_as, "rules": dump_rule_list(rules)},
        )

    def round_value(self, value: float, scale: int, *, ceil: bool = False) -> ServiceResult:
        """Apply one rounding primitive, for trying out scales."""
        rounder = ceil_to_scale if ceil else round_to_scale
        try:
            fixed = rounder(value, scale)
        except ScaleError as exc:
            return ServiceResult.failure("round", INVALID_SCALE, str(exc))
        return ServiceResult(
            ok=True,
            op="round",
            data={
                "value": value,
                "scale": scale,
                "result": fixed,
                "method": "ceil" if ceil else "decimal",
            },
        )
