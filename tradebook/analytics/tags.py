"""Realized performance attributed to trade tags."""

import logging
from dataclasses import dataclass, field
from decimal import Decimal, localcontext
from typing import Callable, Dict, Iterable, List

from config.settings import TagSortKey
from tradebook.engine import ARITHMETIC_CONTEXT, OutcomeTally, safe_div, walk_realized
from tradebook.models import TagPerf, Trade

logger = logging.getLogger(__name__)

ZERO = Decimal(0)


@dataclass
class _TagAccumulator:
    tag: str
    realized_pnl: Decimal = ZERO
    outcomes: OutcomeTally = field(default_factory=OutcomeTally)

    def to_perf(self) -> TagPerf:
        return TagPerf(
            tag=self.tag,
            trade_count=self.outcomes.trade_count,
            win_count=self.outcomes.win_count,
            loss_count=self.outcomes.loss_count,
            even_count=self.outcomes.even_count,
            realized_pnl=self.realized_pnl,
            avg_pnl_per_trade=safe_div(self.realized_pnl, Decimal(self.outcomes.trade_count)),
            win_rate=self.outcomes.win_rate,
        )


def tag_stats(trades: Iterable[Trade]) -> List[TagPerf]:
    """
    Attribute each sell's realized P&L to every tag on the trade.

    A sell with two tags counts fully under both; amounts are not split.
    Duplicate tags on one trade count once.

    Returns:
        TagPerf per tag, most-used tag first
    """
    accumulators: Dict[str, _TagAccumulator] = {}

    with localcontext(ARITHMETIC_CONTEXT):
        for trade, realized in walk_realized(trades):
            for tag in trade.unique_tags:
                acc = accumulators.get(tag)
                if acc is None:
                    acc = _TagAccumulator(tag=tag)
                    accumulators[tag] = acc
                acc.realized_pnl += realized
                acc.outcomes.record(realized)

        stats = [acc.to_perf() for acc in accumulators.values()]

    logger.debug(f"Attributed realized P&L to {len(stats)} tags")
    return sort_tag_perf(stats)


_TAG_METRICS: Dict[TagSortKey, Callable[[TagPerf], object]] = {
    TagSortKey.TAG: lambda t: t.tag,
    TagSortKey.TRADE_COUNT: lambda t: t.trade_count,
    TagSortKey.WIN_RATE: lambda t: t.win_rate,
    TagSortKey.REALIZED_PNL: lambda t: t.realized_pnl,
    TagSortKey.AVG_PNL_PER_TRADE: lambda t: t.avg_pnl_per_trade,
}


def sort_tag_perf(
    stats: Iterable[TagPerf],
    key: TagSortKey = TagSortKey.TRADE_COUNT,
    descending: bool = True,
) -> List[TagPerf]:
    """Stable sort of tag stats by a table column."""
    with localcontext(ARITHMETIC_CONTEXT):
        return sorted(stats, key=_TAG_METRICS[key], reverse=descending)
