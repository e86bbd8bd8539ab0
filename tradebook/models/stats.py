"""Derived statistics data models."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from config.settings import RiskLevel


@dataclass(frozen=True)
class SymbolSummary:
    """Final position and realized P&L state of one symbol."""

    symbol: str
    total_buy_qty: Decimal
    total_buy_amount: Decimal
    total_sell_qty: Decimal
    total_sell_amount: Decimal
    position_qty: Decimal
    avg_cost: Decimal
    cost_basis: Decimal
    realized_pnl: Decimal
    win_count: int
    loss_count: int
    even_count: int
    trade_count: int  # Sells only
    win_rate: Decimal  # Percent, 0-100
    symbol_name: Optional[str] = None

    @property
    def is_open(self) -> bool:
        """True if a long position remains."""
        return self.position_qty > 0


@dataclass(frozen=True)
class PnLPoint:
    """Realized P&L summed over one day or month."""

    key: str  # YYYY-MM-DD or YYYY-MM
    label: str
    value: Decimal


@dataclass(frozen=True)
class TagPerf:
    """Realized performance attributed to one tag."""

    tag: str
    trade_count: int
    win_count: int
    loss_count: int
    even_count: int
    realized_pnl: Decimal
    avg_pnl_per_trade: Decimal
    win_rate: Decimal


@dataclass(frozen=True)
class SymbolHolding:
    """A symbol summary valued against a current price."""

    summary: SymbolSummary
    current_price: Optional[Decimal] = None
    open_cost_basis: Optional[Decimal] = None
    market_value: Optional[Decimal] = None
    unrealized_pnl: Optional[Decimal] = None
    unrealized_return_rate: Decimal = Decimal(0)

    @property
    def symbol(self) -> str:
        return self.summary.symbol

    @property
    def is_valued(self) -> bool:
        """True if this holding contributes to open market value."""
        return self.market_value is not None


@dataclass(frozen=True)
class OverallStats:
    """Portfolio-wide totals."""

    total_buy_amount: Decimal
    total_sell_amount: Decimal
    total_realized_pnl: Decimal
    total_open_cost_basis: Decimal
    total_open_market_value: Decimal
    eval_pnl: Decimal  # Unrealized P&L of valued open positions
    total_pnl: Decimal
    holding_return_rate: Decimal  # Percent


@dataclass(frozen=True)
class InsightData:
    """Headline facts derived from realized trades."""

    best_weekday: str
    best_tag: str
    long_win_rate: Decimal
    short_win_rate: Decimal
    max_win: Decimal
    max_loss: Decimal


@dataclass(frozen=True)
class PositionRisk:
    """Concentration of one open position relative to the account."""

    symbol: str
    position_value: Decimal
    position_percent: Decimal
    risk_level: RiskLevel
    symbol_name: Optional[str] = None


@dataclass(frozen=True)
class DailyLossAlert:
    """Raised when today's realized loss breaches a configured limit."""

    kind: str  # "percent" or "amount"
    value: Decimal
    limit: Decimal
    message: str
