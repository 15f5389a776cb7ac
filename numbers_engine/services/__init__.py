"""Service layer package.

Pure engine functions: rounding, formatting, parsing, pattern compilation,
specialized formatters and bulk helpers. Nothing here touches HTTP.
"""

__all__ = [
    "rounding",
    "formatter",
    "parser",
    "patterns",
    "specialized",
    "bulk",
]
