"""Best-effort inverse of the formatter.

``parse_number(text, config)`` strips the configured decoration (currency symbol,
suffix text, group separator), maps the decimal character to ``'.'``, drops every
character outside ``[0-9.-]`` and reads the leading decimal literal. Anything that
cannot be read yields ``0.0``.

Round-trips are only exact when the config used for parsing matches the one used
for formatting and ``decimal_places`` is large enough to avoid rounding loss.
"""
from __future__ import annotations

import logging
import re
from typing import Any

from ..models.config import ConfigLike, resolve_config
from ..utils.numeric import parse_float_prefix

logger = logging.getLogger(__name__)

__all__ = ["parse_number"]

_NON_NUMERIC = re.compile(r"[^0-9.\-]")


def parse_number(text: Any, config: ConfigLike = None) -> float:
    """Recover the number behind a rendered string.

    >>> parse_number('$1,234.56', {'currencySymbol': '$'})
    1234.56
    >>> parse_number('1.234,5 EUR', {'digitGroupSeparator': '.', 'decimalCharacter': ',', 'suffixText': ' EUR'})
    1234.5
    >>> parse_number('')
    0.0
    """
    cfg = resolve_config(config)
    cleaned = str(text)

    for token in (cfg.currency_symbol, cfg.suffix_text, cfg.digit_group_separator):
        if token:
            cleaned = cleaned.replace(token, "")
    if cfg.decimal_character != ".":
        cleaned = cleaned.replace(cfg.decimal_character, ".")
    cleaned = _NON_NUMERIC.sub("", cleaned)

    number = parse_float_prefix(cleaned) if cleaned else None
    if number is None:
        logger.debug("parse_number: no numeric content in %r", text)
        return 0.0
    return number
