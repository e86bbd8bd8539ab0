"""Position accounting primitives."""

from tradebook.engine.ordering import canonical_order, trade_sort_key
from tradebook.engine.position import (
    ARITHMETIC_CONTEXT,
    OutcomeTally,
    PositionState,
    percent,
    safe_div,
    walk_realized,
)

__all__ = [
    "ARITHMETIC_CONTEXT",
    "OutcomeTally",
    "PositionState",
    "canonical_order",
    "percent",
    "safe_div",
    "trade_sort_key",
    "walk_realized",
]
