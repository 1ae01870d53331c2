"""Field-fix rules: the configuration wire format.

A rule list is an ordered sequence of items in one of two shapes::

    {"scale": 3, "names": ["caseWidth", "caseHeight"]}   # scale rule
    {"entityRef": "costObj", "names": ["cost"]}          # reference rule
    {"entityRef": "productObj"}                          # cascading reference

An item carrying ``entityRef`` is always a reference rule. Any ``scale``
it also carries is dropped during parsing, so a parsed rule is exactly one
variant.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Annotated, Any, Union

from pydantic import BaseModel, Discriminator, Field, Tag, TypeAdapter, field_validator


class ScaleRule(BaseModel):
    """Round each named field to ``scale`` fraction digits.

    A rule without ``scale`` or without ``names`` (missing or null) is inert.
    """

    model_config = {"frozen": True}

    scale: int | None = None
    names: list[str] = Field(default_factory=list)

    @field_validator("names", mode="before")
    @classmethod
    def _null_names_are_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class ReferenceRule(BaseModel):
    """Delegate to another entity's rule list.

    With ``names`` the referenced rules apply to those sub-fields (each may
    hold an object or an array of objects). Without ``names`` they apply to
    the current object itself, layering one entity on top of another.
    """

    model_config = {"frozen": True, "populate_by_name": True}

    entity_ref: str = Field(alias="entityRef", min_length=1)
    names: list[str] | None = None

    @property
    def cascading(self) -> bool:
        """True when the reference applies to the current object in place."""
        return not self.names


def _rule_kind(item: Any) -> str:
    if isinstance(item, ReferenceRule):
        return "ref"
    if isinstance(item, Mapping) and (item.get("entityRef") or item.get("entity_ref")):
        return "ref"
    return "scale"


FieldFixRule = Annotated[
    Union[Annotated[ScaleRule, Tag("scale")], Annotated[ReferenceRule, Tag("ref")]],
    Discriminator(_rule_kind),
]

RuleList = list[FieldFixRule]

_RULE_LIST_ADAPTER: TypeAdapter[list[ScaleRule | ReferenceRule]] = TypeAdapter(RuleList)


def parse_rule_list(items: Any) -> list[ScaleRule | ReferenceRule]:
    """Validate raw rule items (dicts or rule models) into a rule list.

    Raises:
        pydantic.ValidationError: If an item is not a mapping or a reference
            rule names a non-string entity.
    """
    return _RULE_LIST_ADAPTER.validate_python(items)


def dump_rule_list(rules: list[ScaleRule | ReferenceRule]) -> list[dict[str, Any]]:
    """Render rules back to the wire format (``entityRef`` spelling)."""
    return [rule.model_dump(by_alias=True, exclude_none=True) for rule in rules]
