"""Shared fixtures for tradebook tests."""

from decimal import Decimal
from itertools import count

import pytest

from tradebook.models import Side, Trade


@pytest.fixture()
def make_trade():
    """Factory for trades with readable defaults and auto-incrementing ids."""
    ids = count(1)

    def _make(
        side="BUY",
        quantity=10,
        price=100,
        symbol="AAA",
        date="2024-01-01",
        tags=(),
        id=None,
        symbol_name=None,
    ) -> Trade:
        return Trade(
            id=id if id is not None else f"t{next(ids):04d}",
            date=date,
            symbol=symbol,
            side=Side(side),
            price=Decimal(str(price)),
            quantity=Decimal(str(quantity)),
            tags=tuple(tags),
            symbol_name=symbol_name,
        )

    return _make


@pytest.fixture()
def sample_trades(make_trade):
    """Two symbols, tagged sells across two months."""
    return [
        make_trade("BUY", 10, 100, "AAA", "2024-01-02"),
        make_trade("BUY", 10, 200, "AAA", "2024-01-03"),
        make_trade("SELL", 10, 180, "AAA", "2024-01-15", tags=["swing"]),
        make_trade("BUY", 5, 50, "BBB", "2024-01-20"),
        make_trade("SELL", 5, 40, "BBB", "2024-02-01", tags=["swing", "news"]),
        make_trade("SELL", 5, 170, "AAA", "2024-02-05", tags=["news"]),
    ]
