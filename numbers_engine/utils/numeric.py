"""Numeric coercion helpers shared by the formatter, parser and pattern compiler.

Rules:
- ``parse_float_prefix`` reads the longest leading decimal literal (optional sign,
  ASCII digits, optional fraction, optional exponent) and ignores trailing garbage, the
  way a lenient ``parseFloat`` does
- ``plain_number`` renders a float without exponent notation and without trailing
  fractional zeros (``1234.5`` -> ``'1234.5'``, ``1e21`` -> ``'1000000000000000000000'``)

Examples:
>>> parse_float_prefix('  12.5px')
12.5
>>> parse_float_prefix('abc') is None
True
>>> plain_number(-0.0)
'0'
>>> plain_number(1e-7)
'0.0000001'
"""
from __future__ import annotations

import math
import re
from decimal import Decimal
from typing import Any, Optional, Union

Number = Union[int, float, Decimal]

__all__ = ["Number", "parse_float_prefix", "coerce_number", "plain_number"]

_FLOAT_PREFIX = re.compile(r"\s*([+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)")
_INFINITY_PREFIX = re.compile(r"\s*([+-]?)Infinity")


def parse_float_prefix(text: str) -> Optional[float]:
    """Parse the leading numeric literal of ``text``; ``None`` when there is none."""
    match = _FLOAT_PREFIX.match(text)
    if match:
        return float(match.group(1))
    match = _INFINITY_PREFIX.match(text)
    if match:
        return -math.inf if match.group(1) == "-" else math.inf
    return None


def coerce_number(value: Any) -> Optional[float]:
    """Coerce formatter input to a finite float, or ``None`` when that is impossible."""
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        number = parse_float_prefix(value)
    elif isinstance(value, (int, float, Decimal)):
        try:
            number = float(value)
        except (OverflowError, ValueError):
            return None
    else:
        return None
    if number is None or not math.isfinite(number):
        return None
    return number


def plain_number(value: float) -> str:
    """Shortest round-tripping decimal text for ``value`` in fixed-point notation."""
    if not math.isfinite(value):
        return "NaN" if math.isnan(value) else ("-Infinity" if value < 0 else "Infinity")
    if value == 0:
        return "0"
    text = format(Decimal(repr(float(value))), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text
