"""Tests for daily and monthly realized P&L buckets."""

from decimal import Decimal

from config.settings import PnLChartMode, StatsSettings
from tradebook.analytics import (
    RealizedPnLSeries,
    daily_realized_points,
    format_month_label,
    monthly_realized_points,
)
from tradebook.models import PnLPoint
from tradebook.portfolio import symbol_summaries


def test_daily_points_sum_sells_per_date(make_trade):
    trades = [
        make_trade("BUY", 10, 100, "AAA", "2024-01-01"),
        make_trade("BUY", 10, 50, "BBB", "2024-01-01"),
        make_trade("SELL", 5, 110, "AAA", "2024-01-03"),
        make_trade("SELL", 5, 40, "BBB", "2024-01-03"),
        make_trade("SELL", 5, 120, "AAA", "2024-01-02"),
    ]

    points = daily_realized_points(trades)

    assert [(p.key, p.label, p.value) for p in points] == [
        ("2024-01-02", "2024-01-02", Decimal(100)),
        ("2024-01-03", "2024-01-03", Decimal(0)),
    ]


def test_days_without_sells_are_omitted(make_trade):
    assert daily_realized_points([make_trade("BUY")]) == []


def test_monthly_points_regroup_daily(sample_trades):
    series = RealizedPnLSeries()
    daily = series.daily(sample_trades)

    monthly = series.monthly(daily)

    assert [(p.key, p.label, p.value) for p in monthly] == [
        ("2024-01", "2024년 1월", Decimal(300)),
        ("2024-02", "2024년 2월", Decimal(50)),
    ]


def test_short_keys_fall_into_other_bucket():
    daily = [
        PnLPoint(key="2024-03-01", label="2024-03-01", value=Decimal(5)),
        PnLPoint(key="bad", label="bad", value=Decimal(7)),
        PnLPoint(key="x", label="x", value=Decimal(1)),
    ]

    monthly = monthly_realized_points(daily)

    assert [(p.key, p.label, p.value) for p in monthly] == [
        ("2024-03", "2024년 3월", Decimal(5)),
        ("Other", "Other", Decimal(8)),
    ]


def test_month_label_format_is_configurable():
    settings = StatsSettings(month_label_format="{month}/{year}")
    daily = [PnLPoint(key="2025-11-02", label="2025-11-02", value=Decimal(1))]

    (point,) = monthly_realized_points(daily, settings)

    assert point.label == "11/2025"


def test_format_month_label():
    assert format_month_label("2025-11") == "2025년 11월"
    assert format_month_label("2025-01") == "2025년 1월"
    assert format_month_label("Other") == "Other"
    assert format_month_label("2025-xx") == "2025-xx"


def test_bucket_total_matches_symbol_total(sample_trades):
    daily_total = sum(p.value for p in daily_realized_points(sample_trades))
    symbol_total = sum(s.realized_pnl for s in symbol_summaries(sample_trades))

    assert daily_total == symbol_total


def test_series_by_mode(sample_trades):
    series = RealizedPnLSeries()

    assert series.series(sample_trades, PnLChartMode.DAILY) == series.daily(sample_trades)
    assert [p.key for p in series.series(sample_trades, PnLChartMode.MONTHLY)] == [
        "2024-01",
        "2024-02",
    ]


def test_non_finite_day_reports_zero(make_trade):
    trades = [
        make_trade("BUY", 10, "Infinity", date="2024-01-01"),
        make_trade("SELL", 5, 10, date="2024-01-02"),
    ]

    (point,) = daily_realized_points(trades)

    assert point.value == 0
