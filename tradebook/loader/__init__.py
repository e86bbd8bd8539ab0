"""Journal loading, validation and error types."""

from tradebook.loader.config import load_config
from tradebook.loader.exceptions import (
    ConfigurationError,
    JournalFileError,
    OversellError,
    TradebookError,
    TradeValidationError,
)
from tradebook.loader.journal import (
    Journal,
    TradeRecord,
    load_journal,
    parse_prices,
    parse_tag_string,
    parse_trade,
    parse_trades,
)
from tradebook.loader.validation import check_oversell, find_oversells

__all__ = [
    "ConfigurationError",
    "Journal",
    "JournalFileError",
    "OversellError",
    "TradeRecord",
    "TradeValidationError",
    "TradebookError",
    "check_oversell",
    "find_oversells",
    "load_config",
    "load_journal",
    "parse_prices",
    "parse_tag_string",
    "parse_trade",
    "parse_trades",
]
