"""Fixed-grammar formatters: phone numbers, IP addresses, credit cards, times and units.

These are plain string rewrites with no rounding or grouping logic of their own.
Each function is pure and total: malformed input is normalised (missing digits
become placeholders, out-of-range octets are clamped) rather than rejected.
"""
from __future__ import annotations

import re
from typing import Any, Callable, Literal, Optional

from pydantic import BaseModel

from ..utils.numeric import coerce_number, plain_number

__all__ = [
    "DEFAULT_PHONE_TEMPLATE",
    "UNIT_CONVERSIONS",
    "SpecializedOptions",
    "format_phone_number",
    "format_ip_address",
    "format_credit_card",
    "detect_card_type",
    "format_time",
    "convert_unit",
    "format_weight",
    "format_length",
    "format_temperature",
    "format_specialized",
]

DEFAULT_PHONE_TEMPLATE = "(###) ###-####"

_NON_DIGIT = re.compile(r"[^0-9]")


def _digits(value: Any) -> str:
    return _NON_DIGIT.sub("", str(value))


def format_phone_number(value: Any, template: Optional[str] = None) -> str:
    """Fill each ``#`` of ``template`` with the next digit, ``_`` once digits run out.

    >>> format_phone_number('1234567890')
    '(123) 456-7890'
    >>> format_phone_number('12345')
    '(123) 45_-____'
    """
    digits = iter(_digits(value))
    return "".join(next(digits, "_") if ch == "#" else ch for ch in (template or DEFAULT_PHONE_TEMPLATE))


def _ipv4(value: str) -> str:
    cleaned = re.sub(r"[^0-9.]", "", value)
    if "." in cleaned:
        octets = cleaned.split(".")
    else:
        # Undotted input is read as consecutive 3 digit octets
        octets = [cleaned[i:i + 3] for i in range(0, len(cleaned), 3)] or [""]
    formatted = [str(min(255, int(octet))) if octet else "0" for octet in octets[:4]]
    formatted.extend(["0"] * (4 - len(formatted)))
    return ".".join(formatted)


def _ipv6(value: str) -> str:
    cleaned = re.sub(r"[^0-9a-fA-F:]", "", value)
    if "::" in cleaned:
        head, _, tail = cleaned.partition("::")
        head_parts = [p for p in head.split(":") if p]
        tail_parts = [p for p in tail.replace("::", ":").split(":") if p]
        missing = max(0, 8 - len(head_parts) - len(tail_parts))
        segments = head_parts + ["0"] * missing + tail_parts
    else:
        segments = cleaned.split(":")
    formatted = [segment.rjust(4, "0")[:4] for segment in segments[:8]]
    formatted.extend(["0000"] * (8 - len(formatted)))
    return ":".join(formatted)


def format_ip_address(value: Any, version: str = "v4") -> str:
    """Normalise an IP address.

    ``v4`` (and ``both``) clamps octets to 255 and fills missing ones with ``0``;
    ``v6`` pads segments to four hex digits and fills missing ones with ``0000``.
    Any other version echoes the input.

    >>> format_ip_address('192.168.1')
    '192.168.1.0'
    >>> format_ip_address('192168001001')
    '192.168.1.1'
    """
    text = str(value)
    if version in ("v4", "both"):
        return _ipv4(text)
    if version == "v6":
        return _ipv6(text)
    return text


_CARD_PREFIXES = (
    (("34", "37"), "amex"),
    (("4",), "visa"),
    (("5",), "mastercard"),
    (("6",), "discover"),
)


def detect_card_type(digits: str) -> str:
    for prefixes, card_type in _CARD_PREFIXES:
        if digits.startswith(prefixes):
            return card_type
    return "visa"


def format_credit_card(value: Any, card_format: str = "auto") -> str:
    """Group card digits: amex as 4-6-5, everything else in blocks of 4.

    >>> format_credit_card('378282246310005')
    '3782 822463 10005'
    >>> format_credit_card('4111111111111111')
    '4111 1111 1111 1111'
    """
    digits = _digits(value)
    card_type = detect_card_type(digits) if card_format in (None, "", "auto") else card_format
    if card_type == "amex":
        parts = [digits[:4], digits[4:10], digits[10:15]]
    else:
        parts = [digits[i:i + 4] for i in range(0, len(digits), 4)]
    return " ".join(part for part in parts if part)


def format_time(value: Any, time_format: str = "24h", show_seconds: bool = False) -> str:
    """Turn a digit run into ``HH:MM[:SS]``, optionally with a 12h ``AM``/``PM`` marker.

    One or two digits are read as hours; longer runs are left-padded with zeros.
    An explicit ``pm`` in the input shifts morning hours by twelve.

    >>> format_time('1430', '12h')
    '02:30 PM'
    >>> format_time('9')
    '09:00'
    """
    text = str(value)
    digits = _digits(text)
    width = 6 if show_seconds else 4
    if len(digits) <= 2:
        digits = digits.rjust(2, "0").ljust(width, "0")
    else:
        digits = digits.rjust(width, "0")

    hours = int(digits[0:2])
    minutes = int(digits[2:4])
    seconds = int(digits[4:6]) if show_seconds else 0
    if "pm" in text.lower() and hours < 12:
        hours += 12

    marker = ""
    if time_format == "12h":
        marker = " PM" if hours >= 12 else " AM"
        hours = hours % 12 or 12

    clock = f"{hours:02d}:{minutes:02d}"
    if show_seconds:
        clock += f":{seconds:02d}"
    return clock + marker


# Every supported (from, to) pair; anything else converts to itself
UNIT_CONVERSIONS: dict[tuple[str, str], Callable[[float], float]] = {
    # weight
    ("kg", "lb"): lambda v: v * 2.20462,
    ("lb", "kg"): lambda v: v * 0.453592,
    ("kg", "g"): lambda v: v * 1000,
    ("g", "kg"): lambda v: v / 1000,
    ("lb", "oz"): lambda v: v * 16,
    ("oz", "lb"): lambda v: v / 16,
    # length
    ("m", "ft"): lambda v: v * 3.28084,
    ("ft", "m"): lambda v: v * 0.3048,
    ("m", "cm"): lambda v: v * 100,
    ("cm", "m"): lambda v: v / 100,
    ("m", "mm"): lambda v: v * 1000,
    ("mm", "m"): lambda v: v / 1000,
    ("m", "km"): lambda v: v / 1000,
    ("km", "m"): lambda v: v * 1000,
    ("ft", "in"): lambda v: v * 12,
    ("in", "ft"): lambda v: v / 12,
    ("ft", "yd"): lambda v: v / 3,
    ("yd", "ft"): lambda v: v * 3,
    ("mi", "ft"): lambda v: v * 5280,
    ("ft", "mi"): lambda v: v / 5280,
    # temperature
    ("C", "F"): lambda v: (v * 9 / 5) + 32,
    ("F", "C"): lambda v: (v - 32) * 5 / 9,
    ("C", "K"): lambda v: v + 273.15,
    ("K", "C"): lambda v: v - 273.15,
    ("F", "K"): lambda v: ((v - 32) * 5 / 9) + 273.15,
    ("K", "F"): lambda v: ((v - 273.15) * 9 / 5) + 32,
}


def convert_unit(value: Any, from_unit: Optional[str], to_unit: Optional[str]) -> float:
    """Convert with the fixed :data:`UNIT_CONVERSIONS` table.

    Unparsable input converts to NaN; identical or unknown unit pairs return the value.

    >>> convert_unit(100, 'C', 'F')
    212.0
    """
    number = coerce_number(value)
    if number is None:
        return float("nan")
    convert = UNIT_CONVERSIONS.get((from_unit, to_unit)) if from_unit and to_unit else None
    return float(convert(number)) if convert else number


def _format_converted(value: Any, from_unit: Optional[str], to_unit: Optional[str]) -> str:
    return plain_number(convert_unit(value, from_unit, to_unit))


def format_weight(value: Any, from_unit: Optional[str] = None, to_unit: Optional[str] = None) -> str:
    return _format_converted(value, from_unit, to_unit)


def format_length(value: Any, from_unit: Optional[str] = None, to_unit: Optional[str] = None) -> str:
    return _format_converted(value, from_unit, to_unit)


def format_temperature(value: Any, from_unit: Optional[str] = None, to_unit: Optional[str] = None) -> str:
    return _format_converted(value, from_unit, to_unit)


SpecializedKind = Literal["phone", "weight", "length", "temperature", "time", "ip", "creditCard", "percentage"]


class SpecializedOptions(BaseModel):
    """Options for :func:`format_specialized`; only the fields of ``kind`` are read."""

    kind: SpecializedKind
    phone_format: Optional[str] = None
    from_unit: Optional[str] = None
    to_unit: Optional[str] = None
    time_format: str = "24h"
    show_seconds: bool = False
    ip_version: str = "v4"
    credit_card_format: str = "auto"


def format_specialized(value: Any, options: SpecializedOptions) -> str:
    kind = options.kind
    if kind == "phone":
        return format_phone_number(value, options.phone_format)
    if kind == "weight":
        return format_weight(value, options.from_unit, options.to_unit)
    if kind == "length":
        return format_length(value, options.from_unit, options.to_unit)
    if kind == "temperature":
        return format_temperature(value, options.from_unit, options.to_unit)
    if kind == "time":
        return format_time(value, options.time_format, options.show_seconds)
    if kind == "ip":
        return format_ip_address(value, options.ip_version)
    if kind == "creditCard":
        return format_credit_card(value, options.credit_card_format)
    return str(value)
