"""Data models for the trade journal."""

from tradebook.models.stats import (
    DailyLossAlert,
    InsightData,
    OverallStats,
    PnLPoint,
    PositionRisk,
    SymbolHolding,
    SymbolSummary,
    TagPerf,
)
from tradebook.models.trade import Side, Trade

__all__ = [
    # Trade
    "Side",
    "Trade",
    # Stats
    "DailyLossAlert",
    "InsightData",
    "OverallStats",
    "PnLPoint",
    "PositionRisk",
    "SymbolHolding",
    "SymbolSummary",
    "TagPerf",
]
