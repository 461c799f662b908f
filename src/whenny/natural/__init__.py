"""Natural-language date parsing ("next friday at 3pm", "in 2 weeks")."""

from .nodes import Anchor, BoundaryOf, ExpressionNode, Offset, TimeOfDay
from .parser import ParseResult, can_parse, parse, parse_strict, parse_with_info

__all__ = [
    "Anchor",
    "BoundaryOf",
    "ExpressionNode",
    "Offset",
    "ParseResult",
    "TimeOfDay",
    "can_parse",
    "parse",
    "parse_strict",
    "parse_with_info",
]
