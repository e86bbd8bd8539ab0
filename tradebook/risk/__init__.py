"""Risk checks over open positions."""

from tradebook.risk.position_risk import RiskMonitor, today_realized_pnl

__all__ = [
    "RiskMonitor",
    "today_realized_pnl",
]
