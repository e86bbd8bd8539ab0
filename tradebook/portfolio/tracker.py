"""Per-symbol position tracking with average-cost accounting."""

import logging
from dataclasses import dataclass, field
from decimal import Decimal, localcontext
from typing import Dict, Iterable, List, Optional

from tradebook.engine import (
    ARITHMETIC_CONTEXT,
    OutcomeTally,
    PositionState,
    canonical_order,
)
from tradebook.models import SymbolSummary, Trade

logger = logging.getLogger(__name__)

ZERO = Decimal(0)


@dataclass
class _SymbolAccumulator:
    """Running totals for one symbol while walking the journal."""

    symbol: str
    symbol_name: Optional[str] = None
    total_buy_qty: Decimal = ZERO
    total_buy_amount: Decimal = ZERO
    total_sell_qty: Decimal = ZERO
    total_sell_amount: Decimal = ZERO
    realized_pnl: Decimal = ZERO
    position: PositionState = field(default_factory=PositionState)
    outcomes: OutcomeTally = field(default_factory=OutcomeTally)

    def add(self, trade: Trade) -> None:
        if trade.symbol_name and not self.symbol_name:
            self.symbol_name = trade.symbol_name

        if trade.is_buy:
            self.total_buy_qty += trade.quantity
            self.total_buy_amount += trade.amount
        else:
            self.total_sell_qty += trade.quantity
            self.total_sell_amount += trade.amount

        realized = self.position.apply(trade)
        if realized is not None:
            self.realized_pnl += realized
            self.outcomes.record(realized)

    def to_summary(self) -> SymbolSummary:
        """Freeze the running state; flat or short positions report no cost."""
        qty = self.position.position_qty
        if qty > 0:
            cost_basis = self.position.cost_basis
            avg_cost = cost_basis / qty
        else:
            cost_basis = ZERO
            avg_cost = ZERO

        return SymbolSummary(
            symbol=self.symbol,
            symbol_name=self.symbol_name,
            total_buy_qty=self.total_buy_qty,
            total_buy_amount=self.total_buy_amount,
            total_sell_qty=self.total_sell_qty,
            total_sell_amount=self.total_sell_amount,
            position_qty=qty,
            avg_cost=avg_cost,
            cost_basis=cost_basis,
            realized_pnl=self.realized_pnl,
            win_count=self.outcomes.win_count,
            loss_count=self.outcomes.loss_count,
            even_count=self.outcomes.even_count,
            trade_count=self.outcomes.trade_count,
            win_rate=self.outcomes.win_rate,
        )


class PositionTracker:
    """
    Folds a journal into one summary per symbol.

    Uses the weighted-average-cost method:
    - Buys add quantity and cost, no P&L recognized
    - Sells realize (price - average cost before the sell) * quantity
    - Win/loss/even is counted per sell on the sign of that amount
    """

    def summarize(self, trades: Iterable[Trade]) -> List[SymbolSummary]:
        """
        Compute symbol summaries, sorted by symbol.

        Args:
            trades: Journal trades in any order

        Returns:
            One SymbolSummary per symbol that has at least one trade
        """
        accumulators: Dict[str, _SymbolAccumulator] = {}

        with localcontext(ARITHMETIC_CONTEXT):
            for trade in canonical_order(trades):
                acc = accumulators.get(trade.symbol)
                if acc is None:
                    acc = _SymbolAccumulator(symbol=trade.symbol)
                    accumulators[trade.symbol] = acc
                acc.add(trade)

            summaries = [acc.to_summary() for acc in accumulators.values()]

        summaries.sort(key=lambda s: s.symbol)
        logger.debug(f"Summarized {len(summaries)} symbols")
        return summaries


def symbol_summaries(trades: Iterable[Trade]) -> List[SymbolSummary]:
    """Symbol summaries for a journal, sorted by symbol."""
    return PositionTracker().summarize(trades)
