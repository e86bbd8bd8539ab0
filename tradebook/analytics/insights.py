"""Headline insights over realized trades."""

import logging
from datetime import date
from decimal import Decimal, localcontext
from typing import Dict, Iterable, List, Optional

from config.settings import TagSortKey
from tradebook.analytics.tags import sort_tag_perf, tag_stats
from tradebook.engine import ARITHMETIC_CONTEXT, OutcomeTally, walk_realized
from tradebook.models import InsightData, TagPerf, Trade

logger = logging.getLogger(__name__)

ZERO = Decimal(0)
NO_INSIGHT = "-"
WEEKDAY_LABELS = ["월요일", "화요일", "수요일", "목요일", "금요일", "토요일", "일요일"]


def weekday_label(day: str) -> str:
    """Korean weekday name for a YYYY-MM-DD date, '' if unparseable."""
    try:
        return WEEKDAY_LABELS[date.fromisoformat(day).weekday()]
    except ValueError:
        return ""


def best_tag(stats: Iterable[TagPerf]) -> str:
    """Tag with the highest realized P&L, if that P&L is positive."""
    ranked = sort_tag_perf(stats, TagSortKey.REALIZED_PNL, descending=True)
    if ranked and ranked[0].realized_pnl > 0:
        return ranked[0].tag
    return NO_INSIGHT


def compute_insights(
    trades: Iterable[Trade], stats: Optional[List[TagPerf]] = None
) -> InsightData:
    """
    Summarize realized trades into headline facts.

    Every sell closes part of a long position, so all sells count
    toward the long win rate and the short win rate is always 0.

    Args:
        trades: Journal trades in any order
        stats: Precomputed tag stats (computed from trades if omitted)

    Returns:
        InsightData
    """
    trades = list(trades)
    if stats is None:
        stats = tag_stats(trades)

    by_weekday: Dict[str, Decimal] = {}
    longs = OutcomeTally()
    max_win = ZERO
    max_loss = ZERO

    with localcontext(ARITHMETIC_CONTEXT):
        for trade, realized in walk_realized(trades):
            if realized > max_win:
                max_win = realized
            if realized < max_loss:
                max_loss = realized

            label = weekday_label(trade.date)
            by_weekday[label] = by_weekday.get(label, ZERO) + realized
            longs.record(realized)

        best_weekday = NO_INSIGHT
        best_value: Optional[Decimal] = None
        for label, value in by_weekday.items():
            if best_value is None or value > best_value:
                best_weekday, best_value = label, value

        long_win_rate = longs.win_rate

    return InsightData(
        best_weekday=best_weekday,
        best_tag=best_tag(stats),
        long_win_rate=long_win_rate,
        short_win_rate=ZERO,
        max_win=max_win,
        max_loss=max_loss,
    )
