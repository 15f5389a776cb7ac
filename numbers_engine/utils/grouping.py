"""Digit grouping utilities.

Implements the two grouping schemes the formatter needs:
- block grouping: a separator every ``spacing`` digits counted from the right
- Indian grouping (``'2s'``): the last 3 digits stay together, the preceding part
  is grouped in 2s (lakh / crore)

Rules:
- Operates on the unsigned integer digits only; sign and fraction are handled by
  the caller
- Pure string manipulation (no locale dependence)
- An empty separator disables grouping entirely

Examples:
>>> group_digits('1234567', ',', 3)
'1,234,567'
>>> group_digits('1234567', ',', '2s')
'12,34,567'
>>> group_digits('123456789', "'", 4)
"1'2345'6789"
>>> group_digits('1234567', '', 3)
'1234567'
"""
from __future__ import annotations

from typing import Union

__all__ = ["group_digits", "group_blocks", "group_indian"]


def group_blocks(digits: str, separator: str, spacing: int) -> str:
    """Insert ``separator`` every ``spacing`` digits from the right."""
    if len(digits) <= spacing:
        return digits
    groups: list[str] = []
    head = digits
    while len(head) > spacing:
        groups.insert(0, head[-spacing:])
        head = head[:-spacing]
    if head:
        groups.insert(0, head)
    return separator.join(groups)


def group_indian(digits: str, separator: str) -> str:
    """Group using the 3,2,2 pattern from the right."""
    if len(digits) <= 3:
        return digits
    # Last 3 digits stay together; preceding part grouped in 2s
    head = group_blocks(digits[:-3], separator, 2)
    return head + separator + digits[-3:]


def group_digits(digits: str, separator: str, spacing: Union[int, str]) -> str:
    if not separator or not digits:
        return digits
    if spacing == "2s":
        return group_indian(digits, separator)
    return group_blocks(digits, separator, int(spacing))
