"""Position concentration and daily loss checks."""

import logging
from datetime import date
from decimal import Decimal, localcontext
from typing import Iterable, List, Optional, Union

from config.settings import RiskLevel, RiskSettings
from tradebook.engine import ARITHMETIC_CONTEXT, percent
from tradebook.models import DailyLossAlert, PnLPoint, PositionRisk, SymbolSummary
from tradebook.portfolio.rollup import PriceMap

logger = logging.getLogger(__name__)

ZERO = Decimal(0)

# Fractions of max_position_percent at which each level starts
CRITICAL_FACTOR = Decimal("1.5")
MEDIUM_FACTOR = Decimal("0.7")


class RiskMonitor:
    """
    Checks open positions and today's losses against risk limits.

    Used for:
    - Concentration per symbol (percent of account balance)
    - Daily realized loss alerts (percent and absolute limits)
    """

    def __init__(self, settings: Optional[RiskSettings] = None):
        """
        Initialize the risk monitor.

        Args:
            settings: Risk configuration
        """
        self.settings = settings or RiskSettings()
        self.max_position_pct = Decimal(str(self.settings.max_position_percent))
        self.max_daily_loss_pct = Decimal(str(self.settings.max_daily_loss_percent))
        self.max_daily_loss_amount = Decimal(str(self.settings.max_daily_loss_amount))

    def classify(self, position_percent: Decimal) -> RiskLevel:
        """Map a concentration percentage to a risk level."""
        if position_percent >= self.max_position_pct * CRITICAL_FACTOR:
            return RiskLevel.CRITICAL
        if position_percent >= self.max_position_pct:
            return RiskLevel.HIGH
        if position_percent >= self.max_position_pct * MEDIUM_FACTOR:
            return RiskLevel.MEDIUM
        return RiskLevel.LOW

    def position_risks(
        self,
        summaries: Iterable[SymbolSummary],
        prices: PriceMap,
        account_balance: Decimal,
    ) -> List[PositionRisk]:
        """
        Concentration of every open position, largest first.

        Positions without a current price are valued at average cost.

        Args:
            summaries: Symbol summaries from the position tracker
            prices: Symbol -> current price (sparse)
            account_balance: Total account value

        Returns:
            PositionRisk per open symbol, empty if the balance is not positive
        """
        if account_balance <= 0:
            return []

        risks = []
        with localcontext(ARITHMETIC_CONTEXT):
            for s in summaries:
                if not s.position_qty > 0:
                    continue
                price = prices.get(s.symbol)
                # Zero or missing price falls back to average cost
                current = Decimal(price) if price else s.avg_cost
                value = s.position_qty * current
                pct = percent(value, account_balance)
                risks.append(
                    PositionRisk(
                        symbol=s.symbol,
                        symbol_name=s.symbol_name,
                        position_value=value,
                        position_percent=pct,
                        risk_level=self.classify(pct),
                    )
                )

            risks.sort(key=lambda r: r.position_percent, reverse=True)

        flagged = [r for r in risks if r.risk_level in (RiskLevel.HIGH, RiskLevel.CRITICAL)]
        if flagged:
            logger.warning(
                f"{len(flagged)} position(s) over concentration limit: "
                + ", ".join(f"{r.symbol} {r.position_percent:.1f}%" for r in flagged)
            )
        return risks

    def daily_loss_alert(
        self, daily_pnl: Decimal, account_balance: Decimal
    ) -> Optional[DailyLossAlert]:
        """
        Check today's realized P&L against loss limits.

        The percent limit is checked before the amount limit; a limit of 0
        is disabled.

        Returns:
            DailyLossAlert on breach, otherwise None
        """
        if not self.settings.alert_enabled or account_balance <= 0 or not daily_pnl < 0:
            return None

        loss_amount = abs(daily_pnl)
        loss_percent = percent(loss_amount, account_balance)

        if self.max_daily_loss_pct > 0 and loss_percent >= self.max_daily_loss_pct:
            logger.warning(f"Daily loss {loss_percent:.1f}% breaches {self.max_daily_loss_pct}%")
            return DailyLossAlert(
                kind="percent",
                value=loss_percent,
                limit=self.max_daily_loss_pct,
                message=(
                    f"Daily loss {loss_percent:.1f}% exceeds the "
                    f"{self.max_daily_loss_pct}% limit"
                ),
            )

        if self.max_daily_loss_amount > 0 and loss_amount >= self.max_daily_loss_amount:
            logger.warning(f"Daily loss {loss_amount} breaches {self.max_daily_loss_amount}")
            return DailyLossAlert(
                kind="amount",
                value=loss_amount,
                limit=self.max_daily_loss_amount,
                message="Daily loss amount exceeds the limit",
            )

        return None


def today_realized_pnl(
    daily_points: Iterable[PnLPoint], day: Optional[Union[date, str]] = None
) -> Decimal:
    """Realized P&L of one day from the daily series (today by default)."""
    if day is None:
        day = date.today()
    key = day if isinstance(day, str) else day.isoformat()
    for point in daily_points:
        if point.key == key:
            return point.value
    return ZERO
