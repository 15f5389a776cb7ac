"""Formatting configuration model.

``FormatConfig`` is the single, fully enumerated configuration struct consumed by
the formatter, the parser and the pattern compiler. Instances are frozen; callers
derive new configurations with :meth:`FormatConfig.merge`, which applies only the
fields an override explicitly set.

Field names are snake_case but the camelCase spelling is accepted as well, so a
JSON payload such as ``{"decimalPlaces": 0, "currencySymbol": "$"}`` validates
directly.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Literal, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class RoundingMode(str, Enum):
    """Closed set of rounding methods understood by the rounding engine."""

    HALF_UP_SYMMETRIC = "S"
    HALF_UP_ASYMMETRIC = "A"
    HALF_DOWN_SYMMETRIC = "s"
    HALF_DOWN_ASYMMETRIC = "a"
    HALF_EVEN = "B"
    UP = "U"
    DOWN = "D"
    CEILING = "C"
    FLOOR = "F"
    NEAREST_05 = "N05"
    UP_05 = "U05"
    DOWN_05 = "D05"


class CurrencyPlacement(str, Enum):
    PREFIX = "prefix"
    SUFFIX = "suffix"


class SignPlacement(str, Enum):
    LEFT = "left"
    RIGHT = "right"
    PREFIX = "prefix"
    SUFFIX = "suffix"


# Single letter shorthands: p/s for currency, l/r/p/s for the sign
_CURRENCY_CODES = {"p": CurrencyPlacement.PREFIX, "s": CurrencyPlacement.SUFFIX}
_SIGN_CODES = {
    "l": SignPlacement.LEFT,
    "r": SignPlacement.RIGHT,
    "p": SignPlacement.PREFIX,
    "s": SignPlacement.SUFFIX,
}

INDIAN_GROUPING = "2s"

DecimalPadding = Union[bool, Literal["floats"]]


class FormatConfig(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )

    decimal_places: int = Field(default=2, ge=0)
    decimal_character: str = Field(default=".", min_length=1)
    digit_group_separator: str = ","
    digit_group_spacing: Union[int, str] = 3
    currency_symbol: str = ""
    currency_symbol_placement: CurrencyPlacement = CurrencyPlacement.PREFIX

    minimum_value: str = "-10000000000000"
    maximum_value: str = "10000000000000"

    allow_decimal_padding: DecimalPadding = True

    negative_sign_character: str = "-"
    positive_sign_character: str = "+"
    show_positive_sign: bool = False
    suffix_text: str = ""
    negative_brackets_type_on_blur: Optional[str] = None
    negative_positive_sign_placement: Optional[SignPlacement] = None

    rounding_method: RoundingMode = RoundingMode.HALF_UP_SYMMETRIC

    @field_validator("digit_group_spacing", mode="before")
    @classmethod
    def _normalize_spacing(cls, value: Any) -> Union[int, str]:
        if isinstance(value, str):
            raw = value.strip()
            if raw == INDIAN_GROUPING:
                return raw
            if not raw.isdigit():
                raise ValueError(f"digit_group_spacing must be a positive integer or '{INDIAN_GROUPING}'")
            value = int(raw)
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            raise ValueError("digit_group_spacing must be a positive integer")
        return value

    @field_validator("currency_symbol_placement", mode="before")
    @classmethod
    def _currency_code(cls, value: Any) -> Any:
        if isinstance(value, str):
            return _CURRENCY_CODES.get(value, value)
        return value

    @field_validator("negative_positive_sign_placement", mode="before")
    @classmethod
    def _sign_code(cls, value: Any) -> Any:
        if isinstance(value, str):
            return _SIGN_CODES.get(value, value)
        return value

    @field_validator("negative_brackets_type_on_blur")
    @classmethod
    def _bracket_pair(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        parts = value.split(",")
        if len(parts) != 2 or not all(parts):
            raise ValueError("negative_brackets_type_on_blur must look like 'open,close'")
        return value

    @property
    def bracket_pair(self) -> Optional[tuple[str, str]]:
        if not self.negative_brackets_type_on_blur:
            return None
        open_, close = self.negative_brackets_type_on_blur.split(",")
        return open_, close

    def merge(self, override: "ConfigLike") -> "FormatConfig":
        """Return a copy with the fields explicitly set on ``override`` applied."""
        if override is None:
            return self
        if not isinstance(override, FormatConfig):
            override = FormatConfig.model_validate(dict(override))
        updates = {name: getattr(override, name) for name in override.model_fields_set}
        if not updates:
            return self
        return self.model_copy(update=updates)

    def with_values(self, **fields: Any) -> "FormatConfig":
        """Validated copy with ``fields`` replaced (pattern compiler helper)."""
        return self.merge(FormatConfig(**fields))


ConfigLike = Union[FormatConfig, Mapping[str, Any], None]

DEFAULT_CONFIG = FormatConfig()


def resolve_config(config: ConfigLike = None, base: FormatConfig = DEFAULT_CONFIG) -> FormatConfig:
    """Resolve ``None``, a mapping or a config into a concrete ``FormatConfig``."""
    if config is None:
        return base
    if isinstance(config, FormatConfig) and base is DEFAULT_CONFIG:
        return config
    return base.merge(config)


__all__ = [
    "RoundingMode",
    "CurrencyPlacement",
    "SignPlacement",
    "FormatConfig",
    "ConfigLike",
    "DEFAULT_CONFIG",
    "INDIAN_GROUPING",
    "resolve_config",
]
