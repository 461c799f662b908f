"""Pattern compilation and rendering."""

from .compiler import compile_pattern, detect_dialect
from .renderer import display_zone, format_ordinal, render
from .tokens import (
    CaseVariant,
    CompiledPattern,
    Dialect,
    FieldKind,
    FieldToken,
    FormatToken,
    LiteralToken,
)

__all__ = [
    "CaseVariant",
    "CompiledPattern",
    "Dialect",
    "FieldKind",
    "FieldToken",
    "FormatToken",
    "LiteralToken",
    "compile_pattern",
    "detect_dialect",
    "display_zone",
    "format_ordinal",
    "render",
]
