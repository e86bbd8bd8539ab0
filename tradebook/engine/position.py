"""Average-cost position state shared by every fold."""

import logging
from dataclasses import dataclass
from decimal import Context, Decimal
from typing import Dict, Iterable, Iterator, Optional, Tuple

from tradebook.engine.ordering import canonical_order
from tradebook.models import Trade

logger = logging.getLogger(__name__)

ZERO = Decimal(0)
HUNDRED = Decimal(100)

# No traps: NaN/Infinity flow through arithmetic and ordering comparisons
# against NaN evaluate False instead of raising InvalidOperation.
ARITHMETIC_CONTEXT = Context(traps=[])


def safe_div(numerator: Decimal, denominator: Decimal) -> Decimal:
    """Divide, returning 0 when the denominator is zero."""
    if denominator == 0:
        return ZERO
    return numerator / denominator


def percent(part, whole) -> Decimal:
    """part / whole * 100, or 0 when whole is zero."""
    return safe_div(Decimal(part), Decimal(whole)) * HUNDRED


@dataclass
class PositionState:
    """
    Running quantity and cost basis for one symbol.

    Quantity may go negative when more is sold than held; the arithmetic
    is applied as-is. A flat position carries no cost basis.
    """

    position_qty: Decimal = ZERO
    cost_basis: Decimal = ZERO

    @property
    def avg_cost(self) -> Decimal:
        """Cost per unit of the current position (0 when flat)."""
        return safe_div(self.cost_basis, self.position_qty)

    def _clear_if_flat(self) -> None:
        # Division residue (e.g. 5 - (5/3)*3) must not leak into a reopened position
        if self.position_qty == 0:
            self.cost_basis = ZERO

    def buy(self, price: Decimal, quantity: Decimal) -> None:
        self.position_qty += quantity
        self.cost_basis += price * quantity
        self._clear_if_flat()

    def sell(self, price: Decimal, quantity: Decimal) -> Decimal:
        """
        Reduce the position and return the realized P&L of this sell.

        Realized P&L is measured against the average cost before the sell.
        """
        prev_avg_cost = self.avg_cost
        realized = (price - prev_avg_cost) * quantity
        self.position_qty -= quantity
        self.cost_basis -= prev_avg_cost * quantity
        self._clear_if_flat()
        return realized

    def apply(self, trade: Trade) -> Optional[Decimal]:
        """Apply a trade; returns realized P&L for sells, None for buys."""
        if trade.is_buy:
            self.buy(trade.price, trade.quantity)
            return None
        return self.sell(trade.price, trade.quantity)


@dataclass
class OutcomeTally:
    """Win/loss/even counters over sell events."""

    win_count: int = 0
    loss_count: int = 0
    even_count: int = 0
    trade_count: int = 0

    def record(self, realized: Decimal) -> None:
        self.trade_count += 1
        if realized > 0:
            self.win_count += 1
        elif realized < 0:
            self.loss_count += 1
        else:
            # Zero, and NaN from malformed input
            self.even_count += 1

    @property
    def win_rate(self) -> Decimal:
        """Winning sells as a percentage of all sells."""
        return percent(self.win_count, self.trade_count)


def walk_realized(trades: Iterable[Trade]) -> Iterator[Tuple[Trade, Decimal]]:
    """
    Yield (sell trade, realized P&L) in canonical order.

    Each call owns a fresh set of per-symbol positions, so independent
    consumers never share state. Callers iterate inside ARITHMETIC_CONTEXT.
    """
    positions: Dict[str, PositionState] = {}
    for trade in canonical_order(trades):
        position = positions.setdefault(trade.symbol, PositionState())
        realized = position.apply(trade)
        if realized is not None:
            yield trade, realized
    logger.debug(f"Realized walk finished over {len(positions)} symbols")
