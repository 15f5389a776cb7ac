"""Rounding engine.

``round_number(value, decimals, mode)`` rounds a float to ``decimals`` fractional
digits with one of the twelve :class:`RoundingMode` rules. It is a total function:
it never raises, NaN and infinities pass through unchanged.

Scaling is done on the decimal text of the value rather than by multiplying with
``10 ** decimals``: the shortest representation of the float (``repr``) is read
into a :class:`~decimal.Decimal`, shifted, rounded to an integral and shifted back.
This keeps results such as ``round_number(1.005, 2) == 1.01`` stable, where a
floating multiply would see ``100.49999999999999``. The returned float can still
carry binary representation error; callers that emit text re-render it.

The ``*05`` modes snap to multiples of 0.05 and ignore ``decimals``.
"""
from __future__ import annotations

import math
from decimal import (
    ROUND_CEILING,
    ROUND_DOWN,
    ROUND_FLOOR,
    ROUND_HALF_DOWN,
    ROUND_HALF_EVEN,
    ROUND_HALF_UP,
    ROUND_UP,
    Decimal,
)
from typing import Union

from ..models.config import RoundingMode

__all__ = ["round_number", "round_decimal"]

_TWENTY = Decimal(20)

# (rounding for values >= 0, rounding for values < 0)
_MODE_RULES: dict[RoundingMode, tuple[str, str]] = {
    RoundingMode.HALF_UP_SYMMETRIC: (ROUND_HALF_UP, ROUND_HALF_UP),
    RoundingMode.HALF_UP_ASYMMETRIC: (ROUND_HALF_UP, ROUND_HALF_DOWN),
    RoundingMode.HALF_DOWN_SYMMETRIC: (ROUND_HALF_DOWN, ROUND_HALF_DOWN),
    RoundingMode.HALF_DOWN_ASYMMETRIC: (ROUND_HALF_DOWN, ROUND_HALF_UP),
    RoundingMode.HALF_EVEN: (ROUND_HALF_EVEN, ROUND_HALF_EVEN),
    RoundingMode.UP: (ROUND_UP, ROUND_UP),
    RoundingMode.DOWN: (ROUND_DOWN, ROUND_DOWN),
    RoundingMode.CEILING: (ROUND_CEILING, ROUND_CEILING),
    RoundingMode.FLOOR: (ROUND_FLOOR, ROUND_FLOOR),
}

# same (>= 0, < 0) layout; nearest-0.05 ties go toward +inf
_STEP_RULES: dict[RoundingMode, tuple[str, str]] = {
    RoundingMode.NEAREST_05: (ROUND_HALF_UP, ROUND_HALF_DOWN),
    RoundingMode.UP_05: (ROUND_CEILING, ROUND_CEILING),
    RoundingMode.DOWN_05: (ROUND_FLOOR, ROUND_FLOOR),
}


def _as_mode(mode: Union[RoundingMode, str, None]) -> RoundingMode:
    if isinstance(mode, RoundingMode):
        return mode
    try:
        return RoundingMode(mode)
    except ValueError:
        return RoundingMode.HALF_UP_SYMMETRIC


def round_decimal(value: Decimal, decimals: int, mode: RoundingMode) -> Decimal:
    """Round an already finite ``Decimal``; the building block of :func:`round_number`."""
    rules = _STEP_RULES.get(mode)
    if rules is not None:
        steps = (value * _TWENTY).to_integral_value(rounding=rules[0] if value >= 0 else rules[1])
        return steps / _TWENTY
    positive_rule, negative_rule = _MODE_RULES[mode]
    rule = positive_rule if value >= 0 else negative_rule
    scaled = value.scaleb(decimals).to_integral_value(rounding=rule)
    return scaled.scaleb(-decimals)


def round_number(
    value: Union[int, float, Decimal],
    decimals: int = 0,
    mode: Union[RoundingMode, str, None] = RoundingMode.HALF_UP_SYMMETRIC,
) -> float:
    """Round ``value`` to ``decimals`` fractional digits using ``mode``.

    >>> round_number(1.235, 2)
    1.24
    >>> round_number(-1.235, 2, 'A')
    -1.23
    >>> round_number(1.225, 2, 'B')
    1.22
    >>> round_number(1.02, 0, 'N05')
    1.0
    >>> round_number(-1.025, 2, 'N05')
    -1.0
    """
    number = float(value)
    if not math.isfinite(number):
        return number
    decimals = max(0, int(decimals))
    rounded = round_decimal(Decimal(repr(number)), decimals, _as_mode(mode))
    return float(rounded) + 0.0
