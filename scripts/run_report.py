#!/usr/bin/env python3
"""Entry point for the trade journal report."""

import argparse
import logging
import sys
from decimal import Decimal, InvalidOperation
from logging.handlers import RotatingFileHandler
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from config.settings import PnLChartMode
from tradebook.core import create_journal
from tradebook.loader import ConfigurationError, TradebookError, load_config, load_journal


def setup_logging(log_level: str, log_file: Path) -> None:
    """Configure logging for the application."""
    # Create log directory if needed
    log_file.parent.mkdir(parents=True, exist_ok=True)

    # Root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level.upper()))

    # Console handler
    console_format = logging.Formatter(
        "%(asctime)s | %(levelname)-8s | %(message)s",
        datefmt="%H:%M:%S",
    )
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(console_format)
    root_logger.addHandler(console_handler)

    # File handler (rotating)
    file_format = logging.Formatter(
        "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=10 * 1024 * 1024,  # 10MB
        backupCount=5,
    )
    file_handler.setFormatter(file_format)
    root_logger.addHandler(file_handler)


def decimal_arg(value: str) -> Decimal:
    try:
        return Decimal(value)
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"not a number: {value}")


def parse_args(argv=None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Trade journal position and P&L report",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python scripts/run_report.py --journal journal.yaml
  python scripts/run_report.py --journal journal.yaml --mode monthly
  python scripts/run_report.py --journal journal.yaml --balance 10000000
        """,
    )

    parser.add_argument(
        "--journal",
        type=Path,
        required=True,
        help="Path to the YAML journal (trades and current prices)",
    )

    parser.add_argument(
        "--config",
        type=Path,
        default=Path("config/config.yaml"),
        help="Path to config file (default: config/config.yaml)",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Override log level from config",
    )

    parser.add_argument(
        "--mode",
        type=PnLChartMode,
        choices=list(PnLChartMode),
        default=PnLChartMode.DAILY,
        help="Realized P&L bucket (default: daily)",
    )

    parser.add_argument(
        "--balance",
        type=decimal_arg,
        help="Account balance for position risk checks",
    )

    return parser.parse_args(argv)


def main(argv=None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    # Load settings
    try:
        settings = load_config(args.config)
    except ConfigurationError as e:
        print(f"Error loading settings: {e}", file=sys.stderr)
        return 1

    # Override log level if specified
    log_level = args.log_level or settings.logging.level

    # Setup logging
    setup_logging(log_level, settings.logging.file)
    logger = logging.getLogger(__name__)

    try:
        journal_file = load_journal(args.journal)
        journal = create_journal(settings)
        report = journal.build_report(
            journal_file.trades,
            journal_file.prices,
            account_balance=args.balance,
        )
    except TradebookError as e:
        logger.error(f"Failed to build report: {e}")
        return 1

    journal.log_report(report, args.mode)
    return 0


if __name__ == "__main__":
    sys.exit(main())
