"""Numbers Engine: number rounding, formatting, parsing and pattern rendering.

The engine functions are importable from the package root; the HTTP API lives in
:mod:`numbers_engine.main`.
"""

from .models.config import (
    DEFAULT_CONFIG,
    INDIAN_GROUPING,
    CurrencyPlacement,
    FormatConfig,
    RoundingMode,
    SignPlacement,
)
from .services.bulk import (
    PerformanceReport,
    bulk_format,
    bulk_parse,
    generate_large_numbers,
    measure_format_performance,
    measure_parse_performance,
)
from .services.formatter import format_number
from .services.parser import parse_number
from .services.patterns import FORMAT_PATTERNS, apply_named_pattern, apply_pattern, compile_pattern
from .services.rounding import round_number
from .services.specialized import (
    SpecializedOptions,
    convert_unit,
    format_credit_card,
    format_ip_address,
    format_length,
    format_phone_number,
    format_specialized,
    format_temperature,
    format_time,
    format_weight,
)
from .utils.errors import DomainError, UnknownPatternError

__version__ = "1.0.0"

__all__ = [
    "DEFAULT_CONFIG",
    "INDIAN_GROUPING",
    "CurrencyPlacement",
    "FormatConfig",
    "RoundingMode",
    "SignPlacement",
    "PerformanceReport",
    "bulk_format",
    "bulk_parse",
    "generate_large_numbers",
    "measure_format_performance",
    "measure_parse_performance",
    "format_number",
    "parse_number",
    "FORMAT_PATTERNS",
    "apply_named_pattern",
    "apply_pattern",
    "compile_pattern",
    "round_number",
    "SpecializedOptions",
    "convert_unit",
    "format_credit_card",
    "format_ip_address",
    "format_length",
    "format_phone_number",
    "format_specialized",
    "format_temperature",
    "format_time",
    "format_weight",
    "DomainError",
    "UnknownPatternError",
]
