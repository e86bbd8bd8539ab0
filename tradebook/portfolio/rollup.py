"""Portfolio roll-up against current prices."""

import logging
from decimal import Decimal, localcontext
from typing import Callable, Dict, Iterable, List, Mapping, Optional

from config.settings import SymbolSortKey
from tradebook.engine import ARITHMETIC_CONTEXT, percent
from tradebook.models import OverallStats, SymbolHolding, SymbolSummary

logger = logging.getLogger(__name__)

ZERO = Decimal(0)

PriceMap = Mapping[str, Optional[Decimal]]


def _price_for(prices: PriceMap, symbol: str) -> Optional[Decimal]:
    """Current price for a symbol, None when not supplied."""
    price = prices.get(symbol)
    if price is None:
        return None
    return Decimal(str(price))


class PortfolioRollup:
    """
    Combines symbol summaries with current prices.

    Only symbols with a long position and a supplied price are valued;
    everything else still contributes its realized P&L to the totals.
    """

    def __init__(self, prices: Optional[PriceMap] = None):
        """
        Initialize the roll-up.

        Args:
            prices: Symbol -> current price (sparse)
        """
        self.prices: PriceMap = prices or {}

    def holding(self, summary: SymbolSummary) -> SymbolHolding:
        """Value one symbol summary."""
        price = _price_for(self.prices, summary.symbol)

        with localcontext(ARITHMETIC_CONTEXT):
            if price is None or not summary.position_qty > 0:
                return SymbolHolding(summary=summary, current_price=price)

            qty = summary.position_qty
            open_cost_basis = qty * summary.avg_cost
            market_value = qty * price
            unrealized_pnl = (price - summary.avg_cost) * qty
            return_rate = percent(price - summary.avg_cost, summary.avg_cost)

        return SymbolHolding(
            summary=summary,
            current_price=price,
            open_cost_basis=open_cost_basis,
            market_value=market_value,
            unrealized_pnl=unrealized_pnl,
            unrealized_return_rate=return_rate,
        )

    def holdings(self, summaries: Iterable[SymbolSummary]) -> List[SymbolHolding]:
        """Value every summary, keeping input order."""
        return [self.holding(s) for s in summaries]

    def overall(self, summaries: Iterable[SymbolSummary]) -> OverallStats:
        """
        Compute portfolio totals.

        Args:
            summaries: Symbol summaries from the position tracker

        Returns:
            OverallStats with realized, unrealized and combined P&L
        """
        total_buy_amount = ZERO
        total_sell_amount = ZERO
        total_realized_pnl = ZERO
        total_open_cost_basis = ZERO
        total_open_market_value = ZERO
        valued = 0

        with localcontext(ARITHMETIC_CONTEXT):
            for holding in self.holdings(summaries):
                s = holding.summary
                total_buy_amount += s.total_buy_amount
                total_sell_amount += s.total_sell_amount
                total_realized_pnl += s.realized_pnl

                if holding.is_valued:
                    total_open_cost_basis += holding.open_cost_basis
                    total_open_market_value += holding.market_value
                    valued += 1

            eval_pnl = total_open_market_value - total_open_cost_basis
            total_pnl = total_realized_pnl + eval_pnl
            holding_return_rate = percent(eval_pnl, total_open_cost_basis)

        logger.debug(
            f"Rolled up portfolio: {valued} valued positions, "
            f"realized={total_realized_pnl}, eval={eval_pnl}"
        )

        return OverallStats(
            total_buy_amount=total_buy_amount,
            total_sell_amount=total_sell_amount,
            total_realized_pnl=total_realized_pnl,
            total_open_cost_basis=total_open_cost_basis,
            total_open_market_value=total_open_market_value,
            eval_pnl=eval_pnl,
            total_pnl=total_pnl,
            holding_return_rate=holding_return_rate,
        )


def symbol_holdings(
    summaries: Iterable[SymbolSummary], prices: Optional[PriceMap] = None
) -> List[SymbolHolding]:
    return PortfolioRollup(prices).holdings(summaries)


def overall_stats(
    summaries: Iterable[SymbolSummary], prices: Optional[PriceMap] = None
) -> OverallStats:
    return PortfolioRollup(prices).overall(summaries)


def _holding_metric(key: SymbolSortKey) -> Callable[[SymbolHolding], object]:
    """Sort value for a holdings column; unpriced values sort as zero."""

    def price(h: SymbolHolding) -> Decimal:
        return h.current_price if h.current_price is not None else ZERO

    metrics: Dict[SymbolSortKey, Callable[[SymbolHolding], object]] = {
        SymbolSortKey.SYMBOL: lambda h: h.summary.symbol_name or h.summary.symbol,
        SymbolSortKey.POSITION_QTY: lambda h: h.summary.position_qty,
        SymbolSortKey.AVG_COST: lambda h: h.summary.avg_cost,
        SymbolSortKey.TOTAL_BUY_AMOUNT: lambda h: h.summary.total_buy_amount,
        SymbolSortKey.TOTAL_SELL_AMOUNT: lambda h: h.summary.total_sell_amount,
        SymbolSortKey.REALIZED_PNL: lambda h: h.summary.realized_pnl,
        SymbolSortKey.CURRENT_PRICE: price,
        SymbolSortKey.POSITION_VALUE: lambda h: h.summary.position_qty * price(h),
        SymbolSortKey.UNREALIZED_PNL: lambda h: (
            h.unrealized_pnl if h.unrealized_pnl is not None else ZERO
        ),
        SymbolSortKey.WIN_RATE: lambda h: h.summary.win_rate,
    }
    return metrics[key]


def sort_holdings(
    holdings: Iterable[SymbolHolding],
    key: SymbolSortKey = SymbolSortKey.SYMBOL,
    descending: bool = False,
) -> List[SymbolHolding]:
    """Stable sort of holdings by a table column."""
    with localcontext(ARITHMETIC_CONTEXT):
        return sorted(holdings, key=_holding_metric(key), reverse=descending)


def top_profits(summaries: Iterable[SymbolSummary], limit: int = 5) -> List[SymbolSummary]:
    """Up to `limit` symbols with the largest positive realized P&L."""
    with localcontext(ARITHMETIC_CONTEXT):
        ranked = sorted(summaries, key=lambda s: s.realized_pnl, reverse=True)
        return [s for s in ranked[:limit] if s.realized_pnl > 0]


def top_losses(summaries: Iterable[SymbolSummary], limit: int = 5) -> List[SymbolSummary]:
    """Up to `limit` symbols with the most negative realized P&L."""
    with localcontext(ARITHMETIC_CONTEXT):
        ranked = sorted(summaries, key=lambda s: s.realized_pnl)
        return [s for s in ranked[:limit] if s.realized_pnl < 0]
