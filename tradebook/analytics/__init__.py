"""Realized P&L analytics: time buckets, tags and insights."""

from tradebook.analytics.insights import compute_insights, weekday_label
from tradebook.analytics.tags import sort_tag_perf, tag_stats
from tradebook.analytics.timeseries import (
    RealizedPnLSeries,
    daily_realized_points,
    format_month_label,
    monthly_realized_points,
)

__all__ = [
    "RealizedPnLSeries",
    "compute_insights",
    "daily_realized_points",
    "format_month_label",
    "monthly_realized_points",
    "sort_tag_perf",
    "tag_stats",
    "weekday_label",
]
