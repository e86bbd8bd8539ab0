"""Daily and monthly realized P&L series."""

import logging
from decimal import Decimal, localcontext
from typing import Dict, Iterable, List, Optional

from config.settings import PnLChartMode, StatsSettings
from tradebook.engine import ARITHMETIC_CONTEXT, walk_realized
from tradebook.models import PnLPoint, Trade

logger = logging.getLogger(__name__)

ZERO = Decimal(0)
MONTH_KEY_LENGTH = 7  # YYYY-MM


def format_month_label(month_key: str, label_format: str = "{year}년 {month}월") -> str:
    """
    Render a YYYY-MM key as a human month label.

    Keys that do not split into a year and a numeric month are returned
    unchanged.
    """
    parts = month_key.split("-")
    if len(parts) >= 2 and parts[1].isdigit():
        return label_format.format(year=parts[0], month=int(parts[1]))
    return month_key


def _finite_or_zero(value: Decimal) -> Decimal:
    return value if value.is_finite() else ZERO


class RealizedPnLSeries:
    """
    Buckets realized P&L by trade date for charting.

    The daily series walks the journal with its own position state; the
    monthly series regroups the daily points without touching trades.
    """

    def __init__(self, settings: Optional[StatsSettings] = None):
        self.settings = settings or StatsSettings()

    def daily(self, trades: Iterable[Trade]) -> List[PnLPoint]:
        """One point per date with at least one sell, ascending."""
        by_date: Dict[str, Decimal] = {}

        with localcontext(ARITHMETIC_CONTEXT):
            for trade, realized in walk_realized(trades):
                by_date[trade.date] = by_date.get(trade.date, ZERO) + realized

        points = [
            PnLPoint(key=day, label=day, value=_finite_or_zero(value))
            for day, value in sorted(by_date.items())
        ]
        logger.debug(f"Built {len(points)} daily P&L points")
        return points

    def monthly(self, daily_points: Iterable[PnLPoint]) -> List[PnLPoint]:
        """Sum daily points into YYYY-MM buckets, ascending."""
        by_month: Dict[str, Decimal] = {}
        other_key = self.settings.other_bucket_key

        with localcontext(ARITHMETIC_CONTEXT):
            for point in daily_points:
                if len(point.key) >= MONTH_KEY_LENGTH:
                    month_key = point.key[:MONTH_KEY_LENGTH]
                else:
                    month_key = other_key
                by_month[month_key] = by_month.get(month_key, ZERO) + point.value

        return [
            PnLPoint(
                key=key,
                label=format_month_label(key, self.settings.month_label_format),
                value=_finite_or_zero(value),
            )
            for key, value in sorted(by_month.items())
        ]

    def series(self, trades: Iterable[Trade], mode: PnLChartMode) -> List[PnLPoint]:
        """Series for a chart mode."""
        daily = self.daily(trades)
        if mode == PnLChartMode.MONTHLY:
            return self.monthly(daily)
        return daily


def daily_realized_points(trades: Iterable[Trade]) -> List[PnLPoint]:
    return RealizedPnLSeries().daily(trades)


def monthly_realized_points(
    daily_points: Iterable[PnLPoint], settings: Optional[StatsSettings] = None
) -> List[PnLPoint]:
    return RealizedPnLSeries(settings).monthly(daily_points)
