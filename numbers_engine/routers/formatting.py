"""Formatting router exposing the engine operations over HTTP.

Every endpoint layers the request's ``config`` (camelCase or snake_case keys,
only explicitly given fields count) over the settings-derived base config.
"""
from __future__ import annotations

import math
from typing import Any, Dict, List, Optional, Union

from fastapi import APIRouter, status
from pydantic import BaseModel, Field

from ..config.settings import get_settings
from ..models.config import FormatConfig, RoundingMode, resolve_config
from ..services.bulk import measure_format_performance, measure_parse_performance
from ..services.formatter import format_number
from ..services.parser import parse_number
from ..services.patterns import FORMAT_PATTERNS, apply_named_pattern, apply_pattern
from ..services.rounding import round_number
from ..services.specialized import SpecializedOptions, format_specialized
from ..utils.api_shapes import success
from .metrics import FORMAT_OPERATIONS

router = APIRouter()

NumericInput = Union[float, str]


class FormatRequest(BaseModel):
    value: NumericInput
    config: Optional[FormatConfig] = None


class ParseRequest(BaseModel):
    value: str
    config: Optional[FormatConfig] = None


class RoundRequest(BaseModel):
    value: float
    decimals: int = Field(default=0, ge=0)
    mode: RoundingMode = RoundingMode.HALF_UP_SYMMETRIC


class PatternRequest(BaseModel):
    value: NumericInput
    pattern: str
    config: Optional[FormatConfig] = None


class NamedPatternRequest(BaseModel):
    value: NumericInput
    config: Optional[FormatConfig] = None


class BulkFormatRequest(BaseModel):
    values: List[NumericInput]
    config: Optional[FormatConfig] = None


class BulkParseRequest(BaseModel):
    values: List[str]
    config: Optional[FormatConfig] = None


class SpecializedRequest(BaseModel):
    value: NumericInput
    options: SpecializedOptions


def _effective(config: Optional[FormatConfig]) -> FormatConfig:
    return resolve_config(config, base=get_settings().default_format_config())


def _json_number(value: float) -> Optional[float]:
    # JSON has no representation for NaN / infinity
    return value if math.isfinite(value) else None


@router.post("/format", status_code=status.HTTP_200_OK)
async def format_endpoint(payload: FormatRequest) -> Dict[str, Any]:
    FORMAT_OPERATIONS.labels("format").inc()
    return success({"formatted": format_number(payload.value, _effective(payload.config))})


@router.post("/parse", status_code=status.HTTP_200_OK)
async def parse_endpoint(payload: ParseRequest) -> Dict[str, Any]:
    FORMAT_OPERATIONS.labels("parse").inc()
    return success({"value": _json_number(parse_number(payload.value, _effective(payload.config)))})


@router.post("/round", status_code=status.HTTP_200_OK)
async def round_endpoint(payload: RoundRequest) -> Dict[str, Any]:
    FORMAT_OPERATIONS.labels("round").inc()
    rounded = round_number(payload.value, payload.decimals, payload.mode)
    return success({"value": _json_number(rounded)}, mode=payload.mode.value, decimals=payload.decimals)


@router.post("/pattern", status_code=status.HTTP_200_OK)
async def pattern_endpoint(payload: PatternRequest) -> Dict[str, Any]:
    FORMAT_OPERATIONS.labels("pattern").inc()
    formatted = apply_pattern(payload.value, payload.pattern, _effective(payload.config))
    return success({"formatted": formatted}, pattern=payload.pattern)


@router.get("/patterns", status_code=status.HTTP_200_OK)
async def list_patterns() -> Dict[str, Any]:
    return success({name: named.pattern for name, named in FORMAT_PATTERNS.items()})


@router.post("/patterns/{name}", status_code=status.HTTP_200_OK)
async def named_pattern_endpoint(name: str, payload: NamedPatternRequest) -> Dict[str, Any]:
    FORMAT_OPERATIONS.labels("named_pattern").inc()
    # UnknownPatternError propagates to the DomainError handler (404)
    formatted = apply_named_pattern(payload.value, name, _effective(payload.config))
    return success({"formatted": formatted}, pattern=FORMAT_PATTERNS[name].pattern)


@router.post("/bulk/format", status_code=status.HTTP_200_OK)
async def bulk_format_endpoint(payload: BulkFormatRequest) -> Dict[str, Any]:
    FORMAT_OPERATIONS.labels("bulk_format").inc()
    report = measure_format_performance(payload.values, _effective(payload.config))
    return success(
        {"results": report.results},
        count=len(report.results),
        total_time_ms=report.total_time_ms,
        operations_per_second=report.operations_per_second,
    )


@router.post("/bulk/parse", status_code=status.HTTP_200_OK)
async def bulk_parse_endpoint(payload: BulkParseRequest) -> Dict[str, Any]:
    FORMAT_OPERATIONS.labels("bulk_parse").inc()
    report = measure_parse_performance(payload.values, _effective(payload.config))
    return success(
        {"results": [_json_number(v) for v in report.results]},
        count=len(report.results),
        total_time_ms=report.total_time_ms,
        operations_per_second=report.operations_per_second,
    )


@router.post("/specialized", status_code=status.HTTP_200_OK)
async def specialized_endpoint(payload: SpecializedRequest) -> Dict[str, Any]:
    FORMAT_OPERATIONS.labels("specialized").inc()
    return success({"formatted": format_specialized(payload.value, payload.options)}, kind=payload.options.kind)


__all__ = ["router"]
