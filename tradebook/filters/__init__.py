"""Trade list filters."""

from tradebook.filters.trade_filter import TradeFilter, all_tags

__all__ = [
    "TradeFilter",
    "all_tags",
]
