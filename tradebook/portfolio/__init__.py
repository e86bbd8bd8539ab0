"""Position tracking and portfolio roll-up."""

from tradebook.portfolio.rollup import (
    PortfolioRollup,
    overall_stats,
    sort_holdings,
    symbol_holdings,
    top_losses,
    top_profits,
)
from tradebook.portfolio.tracker import PositionTracker, symbol_summaries

__all__ = [
    "PortfolioRollup",
    "PositionTracker",
    "overall_stats",
    "sort_holdings",
    "symbol_holdings",
    "symbol_summaries",
    "top_losses",
    "top_profits",
]
