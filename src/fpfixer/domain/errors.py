"""fpfixer exception hierarchy.

Only two conditions raise during fixing: a recursion overflow and an
invalid scale. Everything else is reported as a diagnostic.
"""

from __future__ import annotations


class FpFixerError(Exception):
    """Base exception for all fpfixer errors."""


class RecursionOverflowError(FpFixerError):
    """Reference-driven descent went deeper than the configured limit.

    Usually a cyclic registry (A -> B -> A) or a self-referential entity.
    Fields visited before the overflow stay rounded.
    """

    def __init__(self, depth: int, limit: int, entity: str | None = None) -> None:
        self.depth = depth
        self.limit = limit
        self.entity = entity
        where = f" at entity [{entity}]" if entity else ""
        super().__init__(f"FP-Fixer recursion overflow ({depth} > {limit}){where}")


class ScaleError(FpFixerError, ValueError):
    """Scale is not an integer in the supported range."""


class RegistryLoadError(FpFixerError):
    """A registry file could not be read or parsed."""
