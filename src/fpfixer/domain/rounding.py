"""Scale rounding primitives.

``round_to_scale`` is the canonical fix: render the exact binary value with
``scale`` fraction digits (half away from zero, as JavaScript ``toFixed``
does), then parse the text back to the nearest double. Multiplying by a
power of ten and dividing again can reintroduce the very error being removed,
so the decimal route is the default everywhere.
"""

from __future__ import annotations

import math
from decimal import ROUND_CEILING, ROUND_HALF_UP, Context, Decimal

from fpfixer.domain.errors import ScaleError

MAX_SCALE = 100
"""Largest accepted scale (the ``toFixed`` range is 0..100)."""

FIXED_NOTATION_LIMIT = 1e21
"""At or above this magnitude a double has no fixed-point rendering."""

# 1e21 needs 22 integer digits, plus MAX_SCALE fraction digits.
_QUANTIZE_CONTEXT = Context(prec=MAX_SCALE + 30)

_CEIL_FACTORS = [10**i for i in range(11)]


def validate_scale(scale: object, *, limit: int = MAX_SCALE) -> int:
    """Return *scale* if it is an int in ``0..limit``, else raise ScaleError."""
    if isinstance(scale, bool) or not isinstance(scale, int):
        raise ScaleError(f"Scale must be an integer, got {scale!r}")
    if scale < 0 or scale > limit:
        raise ScaleError(f"Scale {scale} is outside the supported range 0..{limit}")
    return scale


def _quantum(scale: int) -> Decimal:
    return Decimal(1).scaleb(-scale)


def round_to_scale(value: float | int | Decimal, scale: int) -> float | int | Decimal:
    """Round *value* to at most *scale* fraction digits.

    Examples:
        >>> round_to_scale(4.7250000000000005, 3)
        4.725
        >>> round_to_scale(9.9700002, 2)
        9.97
        >>> round_to_scale(2.5, 0)
        3.0

    Integers are returned as-is. Decimals are quantized and stay Decimal.
    NaN, infinities, and magnitudes of 1e21 or more come back unchanged.
    """
    validate_scale(scale)
    if isinstance(value, Decimal):
        if not value.is_finite() or value.adjusted() >= 21:
            return value
        return value.quantize(_quantum(scale), rounding=ROUND_HALF_UP, context=_QUANTIZE_CONTEXT)
    if isinstance(value, int):
        return value
    if not math.isfinite(value) or abs(value) >= FIXED_NOTATION_LIMIT:
        return value
    fixed = Decimal(value).quantize(
        _quantum(scale), rounding=ROUND_HALF_UP, context=_QUANTIZE_CONTEXT
    )
    return float(fixed)


def ceil_to_scale(value: float | int | Decimal, scale: int) -> float | int | Decimal:
    """Round *value* up to *scale* fraction digits by plain arithmetic.

    Faster than :func:`round_to_scale` but always rounds toward +infinity,
    and the multiplication can itself land one ulp off (e.g. a value that is
    already exact may move up a step). Supports scales 0..10.

    Examples:
        >>> ceil_to_scale(9.9700002, 2)
        9.98
        >>> ceil_to_scale(-1.239, 2)
        -1.23

    Value types are handled as in :func:`round_to_scale`: ints as-is,
    Decimals quantized toward +infinity, and non-finite or huge values
    unchanged.
    """
    validate_scale(scale, limit=len(_CEIL_FACTORS) - 1)
    if isinstance(value, Decimal):
        if not value.is_finite() or value.adjusted() >= 21:
            return value
        return value.quantize(_quantum(scale), rounding=ROUND_CEILING, context=_QUANTIZE_CONTEXT)
    if isinstance(value, int):
        return value
    if not math.isfinite(value) or abs(value) >= FIXED_NOTATION_LIMIT:
        return value
    factor = _CEIL_FACTORS[scale]
    scaled = value * factor
    if not math.isfinite(scaled):
        return value
    return math.ceil(scaled) / factor
