"""Trade list filtering."""

import logging
import re
from dataclasses import dataclass
from typing import Iterable, List

from config.settings import TagFilterMode
from tradebook.models import Trade

logger = logging.getLogger(__name__)

_KEYWORD_SPLIT = re.compile(r"[,\s]+")


@dataclass(frozen=True)
class TradeFilter:
    """
    Filter state for the trade list.

    Filters applied (all must pass, empty fields are ignored):
    1. Symbol query (case-insensitive substring)
    2. Tag query (keywords matched against tags, AND/OR)
    3. Selected symbol (exact drill-down)
    4. Date range (inclusive)
    """

    symbol_query: str = ""
    tag_query: str = ""
    tag_mode: TagFilterMode = TagFilterMode.OR
    selected_symbol: str = ""
    date_from: str = ""
    date_to: str = ""

    @property
    def tag_keywords(self) -> List[str]:
        """Lower-cased keywords from the tag query."""
        return [kw.lower() for kw in _KEYWORD_SPLIT.split(self.tag_query.strip()) if kw]

    @property
    def is_empty(self) -> bool:
        return not any(
            (
                self.symbol_query,
                self.tag_keywords,
                self.selected_symbol,
                self.date_from,
                self.date_to,
            )
        )

    def passes_symbol(self, trade: Trade) -> bool:
        if not self.symbol_query:
            return True
        return self.symbol_query.lower() in trade.symbol.lower()

    def passes_tags(self, trade: Trade) -> bool:
        keywords = self.tag_keywords
        if not keywords:
            return True

        tags = [tag.lower() for tag in trade.tags]
        if not tags:
            return False

        def matches(keyword: str) -> bool:
            return any(keyword in tag for tag in tags)

        if self.tag_mode == TagFilterMode.AND:
            return all(matches(kw) for kw in keywords)
        return any(matches(kw) for kw in keywords)

    def passes_selected_symbol(self, trade: Trade) -> bool:
        return not self.selected_symbol or trade.symbol == self.selected_symbol

    def passes_date_range(self, trade: Trade) -> bool:
        if self.date_from and trade.date < self.date_from:
            return False
        if self.date_to and trade.date > self.date_to:
            return False
        return True

    def matches(self, trade: Trade) -> bool:
        """Check a single trade against every filter."""
        return (
            self.passes_symbol(trade)
            and self.passes_tags(trade)
            and self.passes_selected_symbol(trade)
            and self.passes_date_range(trade)
        )

    def apply(self, trades: Iterable[Trade]) -> List[Trade]:
        """
        Return the trades that pass, in input order.

        Args:
            trades: Trades to filter

        Returns:
            Matching trades
        """
        trades = list(trades)
        if self.is_empty:
            return trades

        result = [t for t in trades if self.matches(t)]
        logger.debug(f"Filter kept {len(result)}/{len(trades)} trades")
        return result


def all_tags(trades: Iterable[Trade]) -> List[str]:
    """Every tag used in the journal, sorted."""
    return sorted({tag for trade in trades for tag in trade.tags})
