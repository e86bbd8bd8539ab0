"""Tests for the portfolio roll-up."""

from decimal import Decimal

from config.settings import SymbolSortKey
from tradebook.portfolio import (
    PortfolioRollup,
    overall_stats,
    sort_holdings,
    symbol_holdings,
    symbol_summaries,
    top_losses,
    top_profits,
)


def test_open_position_valued_at_current_price(make_trade):
    trades = [
        make_trade("BUY", 10, 100, date="2024-01-01"),
        make_trade("SELL", 5, 150, date="2024-01-02"),
    ]
    summaries = symbol_summaries(trades)

    stats = overall_stats(summaries, {"AAA": Decimal(120)})

    assert stats.total_open_cost_basis == 500
    assert stats.total_open_market_value == 600
    assert stats.eval_pnl == 100
    assert stats.holding_return_rate == 20
    assert stats.total_realized_pnl == 250
    assert stats.total_pnl == 350
    assert stats.total_buy_amount == 1000
    assert stats.total_sell_amount == 750


def test_unpriced_and_closed_symbols_only_add_realized(make_trade):
    trades = [
        make_trade("BUY", 10, 100, "AAA", "2024-01-01"),
        make_trade("SELL", 10, 110, "AAA", "2024-01-02"),
        make_trade("BUY", 4, 25, "BBB", "2024-01-03"),
    ]
    summaries = symbol_summaries(trades)

    stats = overall_stats(summaries, {"AAA": Decimal(999)})

    assert stats.total_open_cost_basis == 0
    assert stats.total_open_market_value == 0
    assert stats.eval_pnl == 0
    assert stats.holding_return_rate == 0
    assert stats.total_pnl == 100


def test_short_position_is_not_valued(make_trade):
    summaries = symbol_summaries([make_trade("SELL", 3, 10)])

    (holding,) = symbol_holdings(summaries, {"AAA": Decimal(8)})

    assert holding.current_price == 8
    assert holding.market_value is None
    assert holding.unrealized_pnl is None
    assert not holding.is_valued


def test_holding_detail(make_trade):
    summaries = symbol_summaries([make_trade("BUY", 4, 50)])

    (holding,) = PortfolioRollup({"AAA": Decimal(60)}).holdings(summaries)

    assert holding.open_cost_basis == 200
    assert holding.market_value == 240
    assert holding.unrealized_pnl == 40
    assert holding.unrealized_return_rate == 20


def test_missing_price_map():
    stats = overall_stats([])
    assert stats.total_pnl == 0
    assert stats.holding_return_rate == 0


def test_sort_holdings_treats_missing_price_as_zero(make_trade):
    trades = [
        make_trade("BUY", 1, 10, "AAA"),
        make_trade("BUY", 1, 10, "BBB"),
        make_trade("BUY", 1, 10, "CCC"),
    ]
    holdings = symbol_holdings(
        symbol_summaries(trades), {"AAA": Decimal(5), "CCC": Decimal(50)}
    )

    ordered = sort_holdings(holdings, SymbolSortKey.CURRENT_PRICE, descending=True)

    assert [h.symbol for h in ordered] == ["CCC", "AAA", "BBB"]


def test_sort_holdings_by_name_falls_back_to_symbol(make_trade):
    trades = [
        make_trade(symbol="AAA", symbol_name="Zeta"),
        make_trade(symbol="BBB"),
    ]

    ordered = sort_holdings(symbol_holdings(symbol_summaries(trades)), SymbolSortKey.SYMBOL)

    assert [h.symbol for h in ordered] == ["BBB", "AAA"]


def test_top_profits_and_losses(sample_trades):
    summaries = symbol_summaries(sample_trades)

    assert [s.symbol for s in top_profits(summaries)] == ["AAA"]
    assert [s.symbol for s in top_losses(summaries)] == ["BBB"]


def test_float_price_converted_through_str(make_trade):
    summaries = symbol_summaries([make_trade("BUY", 10, "0.05")])

    (holding,) = PortfolioRollup({"AAA": 0.1}).holdings(summaries)

    assert holding.current_price == Decimal("0.1")
    assert holding.market_value == Decimal("1.0")
    assert holding.unrealized_pnl == Decimal("0.50")
