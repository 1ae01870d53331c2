"""Target shape classification.

The fixer dispatches on an explicit shape tag instead of probing values
ad hoc at every step.
"""

from __future__ import annotations

from collections.abc import MutableMapping, Sequence
from enum import StrEnum
from typing import Any


class Shape(StrEnum):
    """The three kinds of value found in a JSON-like graph."""

    SCALAR = "scalar"
    SEQUENCE = "sequence"
    MAPPING = "mapping"


def classify(value: Any) -> Shape:
    """Return the shape of *value*.

    Strings and bytes are scalars even though they are sequences.

    Examples:
        >>> classify({"a": 1})
        <Shape.MAPPING: 'mapping'>
        >>> classify([1, 2])
        <Shape.SEQUENCE: 'sequence'>
        >>> classify("text")
        <Shape.SCALAR: 'scalar'>
    """
    if isinstance(value, MutableMapping):
        return Shape.MAPPING
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return Shape.SEQUENCE
    return Shape.SCALAR
