"""Number formatter.

``format_number(value, config)`` turns a number (or numeric string) into display
text. The steps run in a fixed order:

1. coerce input; unparsable or non-finite input short-circuits (a string is echoed
   back unchanged, anything else becomes ``'NaN'``)
2. clamp to ``[minimum_value, maximum_value]``
3. round with ``decimal_places`` / ``rounding_method``
4. split into unsigned integer and fraction digits
5. group the integer digits
6. pad or truncate the fraction according to ``allow_decimal_padding``
7. place sign and currency symbol (or wrap negatives in brackets)
8. append ``suffix_text``

No step raises; every input has a defined output.
"""
from __future__ import annotations

import logging
from typing import Any

from ..models.config import DEFAULT_CONFIG, ConfigLike, CurrencyPlacement, FormatConfig, SignPlacement, resolve_config
from ..utils.grouping import group_digits
from ..utils.numeric import coerce_number, parse_float_prefix, plain_number
from .rounding import round_number

logger = logging.getLogger(__name__)

__all__ = ["format_number", "clamp", "compose"]

_SIGN_FIRST = {None, SignPlacement.LEFT, SignPlacement.PREFIX}


def clamp(number: float, config: FormatConfig) -> float:
    """Clamp ``number`` into the configured bounds (silently; max is applied last).

    An empty bound falls back to the default one; any other unparsable bound is ignored.
    """
    minimum = parse_float_prefix(config.minimum_value or DEFAULT_CONFIG.minimum_value)
    maximum = parse_float_prefix(config.maximum_value or DEFAULT_CONFIG.maximum_value)
    if minimum is not None and number < minimum:
        number = minimum
    if maximum is not None and number > maximum:
        number = maximum
    return number


def _fraction(digits: str, config: FormatConfig) -> str:
    places = config.decimal_places
    if places == 0:
        return ""
    padding = config.allow_decimal_padding
    if padding is True or (padding == "floats" and digits):
        return digits.ljust(places, "0")[:places]
    return digits[:places]


def compose(body: str, negative: bool, config: FormatConfig) -> str:
    """Attach sign, currency symbol and suffix text to an unsigned ``body``."""
    brackets = config.bracket_pair if negative else None
    if negative:
        sign = "" if brackets else config.negative_sign_character
    else:
        sign = config.positive_sign_character if config.show_positive_sign else ""

    symbol = config.currency_symbol
    placement = config.negative_positive_sign_placement
    if config.currency_symbol_placement == CurrencyPlacement.PREFIX:
        if placement in _SIGN_FIRST:
            text = f"{sign}{symbol}{body}"
        else:
            text = f"{symbol}{body}{sign}"
    else:
        if placement in _SIGN_FIRST:
            text = f"{sign}{body}{symbol}"
        elif placement == SignPlacement.SUFFIX:
            text = f"{body}{sign}{symbol}"
        else:
            text = f"{body}{symbol}{sign}"

    if brackets:
        text = f"{brackets[0]}{text}{brackets[1]}"
    return text + config.suffix_text


def format_number(value: Any, config: ConfigLike = None) -> str:
    """Format ``value`` into display text.

    >>> format_number(1234.56)
    '1,234.56'
    >>> format_number(-1234.56, {'currencySymbol': '$'})
    '-$1,234.56'
    >>> format_number('not a number')
    'not a number'
    """
    cfg = resolve_config(config)
    number = coerce_number(value)
    if number is None:
        logger.debug("format_number: unformattable input %r", value)
        return value if isinstance(value, str) else "NaN"

    number = clamp(number, cfg)
    number = round_number(number, cfg.decimal_places, cfg.rounding_method)

    text = plain_number(number)
    negative = text.startswith("-")
    if negative:
        text = text[1:]
    integer_digits, _, fraction_digits = text.partition(".")

    body = group_digits(integer_digits, cfg.digit_group_separator, cfg.digit_group_spacing)
    fraction = _fraction(fraction_digits, cfg)
    if fraction:
        body = f"{body}{cfg.decimal_character}{fraction}"

    return compose(body, negative, cfg)
