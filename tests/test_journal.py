"""Tests for the journal report orchestrator and its invariants."""

import random
from datetime import date
from decimal import Decimal

import pytest

from config.settings import PnLChartMode, RiskLevel, Settings, StatsSettings
from tradebook.core import TradeJournal, create_journal
from tradebook.filters import TradeFilter
from tradebook.loader import OversellError


@pytest.fixture()
def journal():
    return create_journal(Settings())


def test_build_report(journal, sample_trades):
    report = journal.build_report(sample_trades, {"AAA": Decimal(160), "BBB": Decimal(1)})

    assert [s.symbol for s in report.symbol_summaries] == ["AAA", "BBB"]
    aaa = report.symbol_summaries[0]
    assert aaa.position_qty == 5
    assert aaa.avg_cost == 150
    assert aaa.realized_pnl == 400

    assert [p.key for p in report.daily_points] == ["2024-01-15", "2024-02-01", "2024-02-05"]
    assert [p.value for p in report.points(PnLChartMode.MONTHLY)] == [300, 50]
    assert [t.tag for t in report.tag_stats] == ["swing", "news"]

    overall = report.overall
    assert overall.total_realized_pnl == 350
    assert overall.total_open_cost_basis == 750
    assert overall.total_open_market_value == 800
    assert overall.eval_pnl == 50
    assert overall.total_pnl == 400
    assert report.insights.best_tag == "swing"
    assert report.position_risks == []
    assert report.daily_loss_alert is None


def test_report_is_idempotent(journal, sample_trades):
    prices = {"AAA": Decimal(160)}
    assert journal.build_report(sample_trades, prices) == journal.build_report(
        sample_trades, prices
    )


def test_report_ignores_input_order(journal, sample_trades):
    shuffled = list(sample_trades)
    random.Random(7).shuffle(shuffled)

    assert journal.build_report(shuffled) == journal.build_report(sample_trades)


def test_bucket_sum_equals_realized_total(journal, sample_trades):
    report = journal.build_report(sample_trades)
    assert sum(p.value for p in report.daily_points) == report.overall.total_realized_pnl
    assert sum(p.value for p in report.monthly_points) == report.overall.total_realized_pnl


def test_oversell_rejected_when_configured(make_trade):
    trades = [make_trade("SELL", 1, 10)]
    strict = TradeJournal(Settings(stats=StatsSettings(reject_oversell=True)))

    with pytest.raises(OversellError):
        strict.build_report(trades)

    lenient = TradeJournal(Settings())
    assert lenient.build_report(trades).symbol_summaries[0].position_qty == -1


def test_tag_sort_follows_settings(sample_trades):
    settings = Settings(stats=StatsSettings(tag_sort_key="tag", tag_sort_descending=False))

    report = TradeJournal(settings).build_report(sample_trades)

    assert [t.tag for t in report.tag_stats] == ["news", "swing"]


def test_filter_restricts_report(journal, sample_trades):
    report = journal.build_report(sample_trades, trade_filter=TradeFilter(selected_symbol="BBB"))

    assert [s.symbol for s in report.symbol_summaries] == ["BBB"]
    assert report.overall.total_realized_pnl == -50


def test_risk_and_daily_alert_with_balance(journal, make_trade):
    trades = [
        make_trade("BUY", 10, 100, "AAA", "2024-03-01"),
        make_trade("BUY", 10, 100, "BBB", "2024-03-01"),
        make_trade("SELL", 5, 60, "BBB", "2024-03-04"),
    ]

    report = journal.build_report(
        trades, {}, account_balance=Decimal(5000), today=date(2024, 3, 4)
    )

    assert [(r.symbol, r.risk_level) for r in report.position_risks] == [
        ("AAA", RiskLevel.HIGH),
        ("BBB", RiskLevel.LOW),
    ]
    assert report.daily_loss_alert.kind == "percent"
    assert report.daily_loss_alert.value == 4


def test_log_report(journal, sample_trades, caplog):
    report = journal.build_report(sample_trades, {"AAA": Decimal(160)})

    with caplog.at_level("INFO", logger="tradebook.core.journal"):
        journal.log_report(report, PnLChartMode.MONTHLY)

    assert "2024년 1월" in caplog.text
    assert "#swing" in caplog.text
