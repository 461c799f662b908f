"""Expression tree for parsed natural-language dates.

Nodes are immutable and built fresh for every parse. ``Offset`` and
``BoundaryOf`` wrap the node they modify, so the nesting depth of an
expression is the number of those clauses.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True)
class Anchor:
    """Starting point of an expression.

    ``kind`` is one of ``now``, ``today``, ``tonight``, ``tomorrow``,
    ``yesterday``, ``day_after_tomorrow``, ``day_before_yesterday``,
    ``weekday`` (with ``weekday``, Sunday = 0) or a period ``week``/``month``/
    ``year``. ``qualifier`` is ``next``, ``last`` or ``this`` when present.
    """

    kind: str
    weekday: Optional[int] = None
    qualifier: Optional[str] = None


@dataclass(frozen=True)
class Offset:
    node: "ExpressionNode"
    amount: int
    unit: str
    direction: int  # +1 future, -1 past


@dataclass(frozen=True)
class TimeOfDay:
    node: "ExpressionNode"
    hour: int
    minute: int = 0


@dataclass(frozen=True)
class BoundaryOf:
    node: "ExpressionNode"
    unit: str
    edge: str  # "start" or "end"


ExpressionNode = Union[Anchor, Offset, TimeOfDay, BoundaryOf]


def nesting_depth(node: ExpressionNode) -> int:
    """Number of offset/boundary clauses wrapped around the anchor."""
    depth = 0
    while not isinstance(node, Anchor):
        if isinstance(node, (Offset, BoundaryOf)):
            depth += 1
        node = node.node
    return depth


def describe(node: ExpressionNode) -> str:
    """Compact debugging form, e.g. ``end_of(month, +3 day(now))``."""
    if isinstance(node, Anchor):
        parts = [node.qualifier, node.kind]
        if node.weekday is not None:
            parts.append(str(node.weekday))
        return ":".join(part for part in parts if part)
    if isinstance(node, Offset):
        sign = "+" if node.direction > 0 else "-"
        return f"{sign}{node.amount} {node.unit}({describe(node.node)})"
    if isinstance(node, BoundaryOf):
        return f"{node.edge}_of({node.unit}, {describe(node.node)})"
    return f"at {node.hour:02d}:{node.minute:02d}({describe(node.node)})"


__all__ = [
    "Anchor",
    "BoundaryOf",
    "ExpressionNode",
    "Offset",
    "TimeOfDay",
    "describe",
    "nesting_depth",
]
