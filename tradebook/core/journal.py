"""Trade journal report orchestration."""

import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Iterable, List, Optional

from config.settings import PnLChartMode, Settings
from tradebook.analytics import RealizedPnLSeries, compute_insights, sort_tag_perf, tag_stats
from tradebook.filters import TradeFilter
from tradebook.loader import check_oversell
from tradebook.models import (
    DailyLossAlert,
    InsightData,
    OverallStats,
    PnLPoint,
    PositionRisk,
    SymbolHolding,
    SymbolSummary,
    TagPerf,
    Trade,
)
from tradebook.portfolio import PortfolioRollup, PositionTracker
from tradebook.portfolio.rollup import PriceMap
from tradebook.risk import RiskMonitor, today_realized_pnl

logger = logging.getLogger(__name__)


@dataclass
class JournalReport:
    """Every derived view of one journal."""

    symbol_summaries: List[SymbolSummary]
    holdings: List[SymbolHolding]
    daily_points: List[PnLPoint]
    monthly_points: List[PnLPoint]
    tag_stats: List[TagPerf]
    overall: OverallStats
    insights: InsightData
    position_risks: List[PositionRisk] = field(default_factory=list)
    daily_loss_alert: Optional[DailyLossAlert] = None

    def points(self, mode: PnLChartMode) -> List[PnLPoint]:
        """Chart series for a bucket mode."""
        if mode == PnLChartMode.MONTHLY:
            return self.monthly_points
        return self.daily_points


class TradeJournal:
    """
    Builds reports from a set of trades and current prices.

    Every call recomputes from scratch; nothing is cached between calls.
    """

    def __init__(self, settings: Optional[Settings] = None):
        """
        Initialize the journal.

        Args:
            settings: Application configuration
        """
        self.settings = settings or Settings()
        self.tracker = PositionTracker()
        self.series = RealizedPnLSeries(self.settings.stats)
        self.risk_monitor = RiskMonitor(self.settings.risk)

    def validate(self, trades: List[Trade]) -> None:
        """Apply the configured boundary checks."""
        if self.settings.stats.reject_oversell:
            check_oversell(trades)

    def build_report(
        self,
        trades: Iterable[Trade],
        prices: Optional[PriceMap] = None,
        account_balance: Optional[Decimal] = None,
        trade_filter: Optional[TradeFilter] = None,
        today: Optional[date] = None,
    ) -> JournalReport:
        """
        Compute every derived view.

        Args:
            trades: Journal trades in any order
            prices: Symbol -> current price (sparse)
            account_balance: Account value for position risk (skipped if None)
            trade_filter: Restrict the report to matching trades
            today: Day checked for the daily loss alert (defaults to today)

        Returns:
            JournalReport
        """
        trades = list(trades)
        if trade_filter is not None:
            trades = trade_filter.apply(trades)
        self.validate(trades)
        prices = prices or {}

        summaries = self.tracker.summarize(trades)
        rollup = PortfolioRollup(prices)
        daily = self.series.daily(trades)
        tags = sort_tag_perf(
            tag_stats(trades),
            self.settings.stats.tag_sort_key,
            self.settings.stats.tag_sort_descending,
        )

        risks: List[PositionRisk] = []
        alert = None
        if account_balance is not None:
            risks = self.risk_monitor.position_risks(summaries, prices, account_balance)
            alert = self.risk_monitor.daily_loss_alert(
                today_realized_pnl(daily, today), account_balance
            )

        report = JournalReport(
            symbol_summaries=summaries,
            holdings=rollup.holdings(summaries),
            daily_points=daily,
            monthly_points=self.series.monthly(daily),
            tag_stats=tags,
            overall=rollup.overall(summaries),
            insights=compute_insights(trades, tags),
            position_risks=risks,
            daily_loss_alert=alert,
        )

        logger.info(
            f"Report: {len(trades)} trades, {len(summaries)} symbols, "
            f"realized={report.overall.total_realized_pnl}, "
            f"eval={report.overall.eval_pnl}, total={report.overall.total_pnl}"
        )
        return report

    def log_report(self, report: JournalReport, mode: PnLChartMode = PnLChartMode.DAILY) -> None:
        """Log a report in readable form."""
        overall = report.overall
        logger.info(
            f"Totals: bought={overall.total_buy_amount}, sold={overall.total_sell_amount}, "
            f"realized={overall.total_realized_pnl}, open cost={overall.total_open_cost_basis}, "
            f"market value={overall.total_open_market_value}, eval={overall.eval_pnl} "
            f"({overall.holding_return_rate:.2f}%), total={overall.total_pnl}"
        )

        for holding in report.holdings:
            s = holding.summary
            line = (
                f"  {s.symbol}: qty={s.position_qty} avg={s.avg_cost} "
                f"realized={s.realized_pnl} win rate={s.win_rate:.1f}% "
                f"({s.win_count}W/{s.loss_count}L/{s.even_count}E)"
            )
            if holding.is_valued:
                line += f" unrealized={holding.unrealized_pnl}"
            logger.info(line)

        for point in report.points(mode):
            logger.info(f"  {point.label}: {point.value}")

        for tag in report.tag_stats:
            logger.info(
                f"  #{tag.tag}: {tag.trade_count} sells, realized={tag.realized_pnl}, "
                f"avg={tag.avg_pnl_per_trade}, win rate={tag.win_rate:.1f}%"
            )

        insights = report.insights
        logger.info(
            f"Insights: best day={insights.best_weekday}, best tag={insights.best_tag}, "
            f"max win={insights.max_win}, max loss={insights.max_loss}"
        )

        for risk in report.position_risks:
            logger.info(
                f"  risk {risk.symbol}: {risk.position_percent:.1f}% ({risk.risk_level.value})"
            )

        if report.daily_loss_alert is not None:
            logger.warning(report.daily_loss_alert.message)


def create_journal(settings: Settings) -> TradeJournal:
    """
    Factory function to create a trade journal.

    Args:
        settings: Application configuration

    Returns:
        Configured TradeJournal instance
    """
    return TradeJournal(settings)
