"""Entity registry: named, reusable rule lists.

Lookup tries the name as given first, then the same name upper-cased, so
``"prdspc"`` finds an entity stored as ``"PRDSPC"``.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from typing import Any

from pydantic import RootModel

from fpfixer.domain.diagnostics import Diagnostic, DiagnosticCode
from fpfixer.domain.rules import ReferenceRule, RuleList, ScaleRule

Reporter = Callable[[Diagnostic], None]


class Registry(RootModel[dict[str, RuleList]]):
    """Mapping of entity name to its rule list. Read-only while fixing."""

    model_config = {"frozen": True}

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Registry:
        """Validate a raw ``{name: [rule, ...]}`` mapping."""
        return cls.model_validate(dict(data))

    def names(self) -> list[str]:
        return list(self.root)

    def __len__(self) -> int:
        return len(self.root)

    def __contains__(self, name: object) -> bool:
        return name in self.root

    def __iter__(self) -> Iterator[str]:  # type: ignore[override]
        return iter(self.root)

    def get(self, name: str) -> list[ScaleRule | ReferenceRule] | None:
        """Exact, then upper-case lookup. No reporting."""
        rules = self.root.get(name)
        if rules is None:
            rules = self.root.get(name.upper())
        return rules

    def resolve(
        self,
        name: str,
        *,
        report: Reporter | None = None,
        path: str = "$",
        depth: int = 0,
    ) -> list[ScaleRule | ReferenceRule] | None:
        """Find the rule list for *name*, reporting when it is missing."""
        rules = self.get(name)
        if rules is None and report is not None:
            known = self.names()
            report(
                Diagnostic(
                    code=DiagnosticCode.ENTITY_NOT_FOUND,
                    message=(
                        f"[{name}] entity is not found within "
                        f"[{len(known)} items: {','.join(known)}]"
                    ),
                    entity=name,
                    path=path,
                    depth=depth,
                )
            )
        return rules

    def merge(self, *others: Registry) -> Registry:
        """Return a new registry; entities in later registries win."""
        merged: dict[str, list[ScaleRule | ReferenceRule]] = dict(self.root)
        for other in others:
            merged.update(other.root)
        return Registry(merged)


def resolve(
    registry: Registry | None,
    name: str,
    report: Reporter | None = None,
) -> list[ScaleRule | ReferenceRule] | None:
    """Resolve *name* in *registry*; an absent registry resolves nothing."""
    if registry is None:
        return None
    return registry.resolve(name, report=report)
