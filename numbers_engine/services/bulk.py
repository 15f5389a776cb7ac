"""Bulk formatting/parsing helpers and simple throughput measurement."""
from __future__ import annotations

import logging
import time
from typing import Any, Generic, Iterable, List, TypeVar

from pydantic import BaseModel

from ..models.config import ConfigLike, resolve_config
from .formatter import format_number
from .parser import parse_number

logger = logging.getLogger(__name__)

T = TypeVar("T")

__all__ = [
    "PerformanceReport",
    "bulk_format",
    "bulk_parse",
    "measure_format_performance",
    "measure_parse_performance",
    "generate_large_numbers",
]


class PerformanceReport(BaseModel, Generic[T]):
    total_time_ms: float
    average_time_ms: float
    operations_per_second: int
    results: List[T]


def bulk_format(values: Iterable[Any], config: ConfigLike = None) -> list[str]:
    """Format every value with one shared (resolved once) configuration."""
    cfg = resolve_config(config)
    return [format_number(value, cfg) for value in values]


def bulk_parse(values: Iterable[Any], config: ConfigLike = None) -> list[float]:
    cfg = resolve_config(config)
    return [parse_number(value, cfg) for value in values]


def _report(results: list, elapsed_s: float) -> dict:
    count = len(results)
    total_ms = elapsed_s * 1000
    average_ms = total_ms / count if count else 0.0
    ops = int(1000 / average_ms) if average_ms > 0 else 0
    return {
        "total_time_ms": total_ms,
        "average_time_ms": average_ms,
        "operations_per_second": ops,
        "results": results,
    }


def measure_format_performance(values: Iterable[Any], config: ConfigLike = None) -> PerformanceReport[str]:
    values = list(values)
    start = time.perf_counter()
    results = bulk_format(values, config)
    report = PerformanceReport[str](**_report(results, time.perf_counter() - start))
    logger.debug("Formatted %d values in %.3fms", len(results), report.total_time_ms)
    return report


def measure_parse_performance(values: Iterable[Any], config: ConfigLike = None) -> PerformanceReport[float]:
    values = list(values)
    start = time.perf_counter()
    results = bulk_parse(values, config)
    report = PerformanceReport[float](**_report(results, time.perf_counter() - start))
    logger.debug("Parsed %d values in %.3fms", len(results), report.total_time_ms)
    return report


def generate_large_numbers(count: int, start: float = 1_000_000, multiplier: float = 10) -> list[float]:
    """``start * multiplier ** (i // 5)`` for ``i`` in ``range(count)``.

    >>> generate_large_numbers(6, 1, 10)
    [1, 1, 1, 1, 1, 10]
    """
    return [start * multiplier ** (i // 5) for i in range(max(0, count))]
