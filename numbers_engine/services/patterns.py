"""Spreadsheet-style format pattern compiler.

A pattern such as ``$#,##0.00;($#,##0.00)`` is compiled in two separate stages:

1. :func:`compile_pattern` parses the text into a small node tree
   (recursive descent: sections, then brackets, then percent, then scientific,
   then a plain number section);
2. :func:`derive_config` turns a :class:`NumberNode` into a :class:`FormatConfig`
   layered over the caller's config, which :func:`format_number` then renders.

Token alphabet::

    #  digit placeholder          0  zero placeholder
    .  decimal point              ,  grouping (between placeholders) or /1000 (trailing)
    $  currency symbol            +  always show sign
    -  sign before currency       () brackets for negatives
    %  percentage (x100)          E  scientific notation
    ;  positive;negative sections

Letters after the last placeholder (``#,##0,K``) become suffix text.
"""
from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Any, Optional, Union

from ..models.config import ConfigLike, CurrencyPlacement, FormatConfig, SignPlacement, resolve_config
from ..utils.errors import UnknownPatternError
from ..utils.numeric import coerce_number
from .formatter import format_number

logger = logging.getLogger(__name__)

__all__ = [
    "NumberNode",
    "ScientificNode",
    "PercentNode",
    "BracketNode",
    "SectionsNode",
    "PatternNode",
    "NamedPattern",
    "FORMAT_PATTERNS",
    "compile_pattern",
    "derive_config",
    "render",
    "apply_pattern",
    "apply_named_pattern",
    "format_scientific",
]

_TOKENS = set("#0.,$+-()%E;")
_DECIMAL_RUN = re.compile(r"\.(0+|#+)")
_GROUPING = re.compile(r"[#0],[#0]")
_BRACKET_GROUP = re.compile(r"\(([^)]+)\)")
_TRAILING = re.compile(r"[#0](,*)([^#0]*)$")
_DEFAULT_SCIENTIFIC_DIGITS = 3
_DEFAULT_CURRENCY = "$"


@dataclass(frozen=True)
class NumberNode:
    """A plain number section, already inspected into its structural flags."""

    pattern: str
    decimals: Optional[int]
    padding: Optional[bool]
    grouping: bool
    scale: int
    suffix: str
    currency: Optional[CurrencyPlacement]
    brackets: bool
    minus: bool
    plus: bool


@dataclass(frozen=True)
class ScientificNode:
    pattern: str
    digits: int


@dataclass(frozen=True)
class PercentNode:
    inner: "PatternNode"


@dataclass(frozen=True)
class BracketNode:
    """Negative section of the form ``prefix(inner)suffix``; renders the absolute value."""

    prefix: str
    inner: "PatternNode"
    suffix: str


@dataclass(frozen=True)
class SectionsNode:
    positive: "PatternNode"
    negative: "PatternNode"


PatternNode = Union[NumberNode, ScientificNode, PercentNode, BracketNode, SectionsNode]


def _compile_number(pattern: str) -> NumberNode:
    decimals: Optional[int] = None
    padding: Optional[bool] = None
    run = _DECIMAL_RUN.search(pattern)
    if run:
        decimals = len(run.group(1))
        padding = run.group(1)[0] == "0"
    elif "#" in pattern or "0" in pattern:
        decimals = 0

    scale = 0
    suffix = ""
    trailing = _TRAILING.search(pattern)
    if trailing:
        scale = len(trailing.group(1))
        suffix = "".join(ch for ch in trailing.group(2) if ch not in _TOKENS)
        if not suffix.strip():
            suffix = ""

    currency = None
    if "$" in pattern:
        first_digit = min((i for i, ch in enumerate(pattern) if ch in "#0"), default=len(pattern))
        currency = CurrencyPlacement.PREFIX if pattern.index("$") < first_digit else CurrencyPlacement.SUFFIX

    return NumberNode(
        pattern=pattern,
        decimals=decimals,
        padding=padding,
        grouping=bool(_GROUPING.search(pattern)),
        scale=scale,
        suffix=suffix,
        currency=currency,
        brackets="(" in pattern and ")" in pattern,
        minus="-" in pattern,
        plus="+" in pattern,
    )


def _compile_scientific(pattern: str) -> ScientificNode:
    mantissa = pattern.split("E", 1)[0]
    run = re.search(r"\.(0+)", mantissa)
    return ScientificNode(pattern=pattern, digits=len(run.group(1)) if run else _DEFAULT_SCIENTIFIC_DIGITS)


def _compile_negative(pattern: str) -> PatternNode:
    group = _BRACKET_GROUP.search(pattern) if ")" in pattern else None
    if group:
        return BracketNode(
            prefix=pattern[: group.start()],
            inner=compile_pattern(group.group(1)),
            suffix=pattern[group.end():],
        )
    return compile_pattern(pattern)


def compile_pattern(pattern: str) -> PatternNode:
    """Parse ``pattern`` into a node tree without looking at any value.

    >>> compile_pattern('0.000E+00')
    ScientificNode(pattern='0.000E+00', digits=3)
    >>> type(compile_pattern('$#,##0.00;($#,##0.00)').negative).__name__
    'BracketNode'
    """
    if ";" in pattern:
        positive, negative = pattern.split(";")[:2]
        positive_node = compile_pattern(positive)
        negative_node = _compile_negative(negative) if negative else positive_node
        return SectionsNode(positive=positive_node, negative=negative_node)
    if "%" in pattern:
        return PercentNode(inner=compile_pattern(pattern.replace("%", "", 1)))
    if "E" in pattern:
        return _compile_scientific(pattern)
    return _compile_number(pattern)


def derive_config(node: NumberNode, config: ConfigLike = None, negative: bool = False) -> FormatConfig:
    """Layer the settings implied by ``node`` over ``config``.

    ``negative`` selects the sign-dependent rules (``$``, ``-`` and bracket tokens
    only affect negative values).
    """
    base = resolve_config(config)
    fields: dict[str, Any] = {}

    if node.decimals is not None:
        fields["decimal_places"] = node.decimals
    if node.padding is not None:
        fields["allow_decimal_padding"] = node.padding
    if not node.grouping:
        fields["digit_group_separator"] = ""
    if node.suffix:
        fields["suffix_text"] = node.suffix + base.suffix_text

    if node.currency is not None:
        fields["currency_symbol_placement"] = node.currency
        if not base.currency_symbol:
            fields["currency_symbol"] = _DEFAULT_CURRENCY
        if negative:
            fields["negative_positive_sign_placement"] = SignPlacement.PREFIX

    if negative:
        if node.brackets:
            fields["negative_brackets_type_on_blur"] = "(,)"
        elif node.minus:
            fields["negative_positive_sign_placement"] = SignPlacement.PREFIX

    if node.plus:
        fields["show_positive_sign"] = True

    return base.with_values(**fields) if fields else base


def format_scientific(value: float, digits: int = _DEFAULT_SCIENTIFIC_DIGITS) -> str:
    """Render ``value`` as ``<mantissa>e<sign><exponent>`` with ``digits`` mantissa decimals.

    >>> format_scientific(1234.56, 3)
    '1.235e+3'
    >>> format_scientific(0.0001234, 2)
    '1.23e-4'
    >>> format_scientific(0, 2)
    '0.00e+0'
    """
    if not math.isfinite(value):
        return "NaN"
    if value == 0:
        return f"0.{'0' * digits}e+0" if digits else "0e+0"
    magnitude = Decimal(repr(abs(float(value))))
    exponent = magnitude.adjusted()
    quantum = Decimal(1).scaleb(-digits)
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, digits + 20)
        mantissa = magnitude.scaleb(-exponent).quantize(quantum, rounding=ROUND_HALF_UP)
        if mantissa >= 10:
            exponent += 1
            mantissa = magnitude.scaleb(-exponent).quantize(quantum, rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    exponent_sign = "+" if exponent >= 0 else ""
    return f"{sign}{format(mantissa, 'f')}e{exponent_sign}{exponent}"


def _substitute_currency(literal: str, config: FormatConfig) -> str:
    return literal.replace("$", config.currency_symbol or _DEFAULT_CURRENCY)


def render(node: PatternNode, value: float, config: FormatConfig) -> str:
    """Render a finite ``value`` through a compiled ``node``."""
    if isinstance(node, SectionsNode):
        if value >= 0:
            return render(node.positive, value, config)
        return render(node.negative, value, config)
    if isinstance(node, BracketNode):
        prefix = _substitute_currency(node.prefix, config)
        suffix = _substitute_currency(node.suffix, config)
        if "$" in node.prefix + node.suffix:
            # The symbol already sits outside the brackets
            config = config.with_values(currency_symbol="")
        inner = render(node.inner, abs(value), config)
        return f"{prefix}({inner}){suffix}"
    if isinstance(node, PercentNode):
        return f"{render(node.inner, value * 100, config)}%"
    if isinstance(node, ScientificNode):
        return format_scientific(value, node.digits)

    derived = derive_config(node, config, negative=value < 0)
    if node.scale:
        value = value / 1000 ** node.scale
    return format_number(value, derived)


def apply_pattern(value: Any, pattern: str, config: ConfigLike = None) -> str:
    """Format ``value`` with a spreadsheet-style ``pattern``.

    >>> apply_pattern(1234.5, '#,##0.00')
    '1,234.50'
    >>> apply_pattern(-1234.56, '$#,##0.00;($#,##0.00)')
    '($1,234.56)'
    >>> apply_pattern(0.1234, '#0%')
    '12%'
    """
    number = coerce_number(value)
    if number is None:
        return value if isinstance(value, str) else "NaN"
    node = compile_pattern(pattern)
    logger.debug("apply_pattern: %r compiled to %s", pattern, type(node).__name__)
    return render(node, number, resolve_config(config))


@dataclass(frozen=True)
class NamedPattern:
    pattern: str
    currency_symbol: Optional[str] = None


FORMAT_PATTERNS: dict[str, NamedPattern] = {
    # Standard number formats
    "decimal": NamedPattern("#,##0.##"),
    "integer": NamedPattern("#,##0"),
    "fixed2": NamedPattern("0.00"),
    "fixed4": NamedPattern("0.0000"),
    # Currency formats
    "currency": NamedPattern("$#,##0.00"),
    "currencyNoDecimal": NamedPattern("$#,##0"),
    "currencyEuro": NamedPattern("€#,##0.00", currency_symbol="€"),
    "currencyPound": NamedPattern("£#,##0.00", currency_symbol="£"),
    "currencyYen": NamedPattern("¥#,##0", currency_symbol="¥"),
    # Percentage formats
    "percent": NamedPattern("#,##0.00%"),
    "percentWhole": NamedPattern("#0%"),
    # Accounting formats
    "accounting": NamedPattern("$#,##0.00;($#,##0.00)"),
    "accountingParens": NamedPattern("$#,##0.00;$(#,##0.00)"),
    "accountingEuro": NamedPattern("€#,##0.00;(€#,##0.00)", currency_symbol="€"),
    "accountingPound": NamedPattern("£#,##0.00;(£#,##0.00)", currency_symbol="£"),
    # Scientific notation
    "scientific": NamedPattern("0.000E+00"),
    "scientificShort": NamedPattern("0.0E+0"),
    # Scaled presentation formats
    "thousands": NamedPattern("#,##0,K"),
    "millions": NamedPattern("#,##0.0,,M"),
    "billions": NamedPattern("#,##0.0,,,B"),
}


def apply_named_pattern(value: Any, name: str, config: ConfigLike = None) -> str:
    """Apply a pattern from :data:`FORMAT_PATTERNS` by name.

    Raises :class:`UnknownPatternError` (a ``LookupError``) for unknown names.
    """
    named = FORMAT_PATTERNS.get(name)
    if named is None:
        logger.warning("apply_named_pattern: unknown pattern %r", name)
        raise UnknownPatternError(name, sorted(FORMAT_PATTERNS))
    cfg = resolve_config(config)
    if named.currency_symbol and not cfg.currency_symbol:
        cfg = cfg.with_values(currency_symbol=named.currency_symbol)
    return apply_pattern(value, named.pattern, cfg)
