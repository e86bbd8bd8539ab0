"""Custom exceptions for journal loading and validation."""

from typing import Optional


class TradebookError(Exception):
    """Base exception for all tradebook errors."""

    pass


class JournalFileError(TradebookError):
    """Journal file is missing, unreadable or not a journal document."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class TradeValidationError(TradebookError):
    """A trade record does not satisfy the trade schema."""

    def __init__(
        self, message: str, index: Optional[int] = None, field: Optional[str] = None
    ):
        if index is not None:
            message = f"trade #{index}: {message}"
        super().__init__(message)
        self.index = index
        self.field = field


class OversellError(TradeValidationError):
    """A sell exceeds the quantity held at that point in the journal."""

    def __init__(self, trade_id: str, symbol: str, held, sold):
        super().__init__(
            f"sell {trade_id} of {sold} {symbol} exceeds held quantity {held}",
            field="quantity",
        )
        self.trade_id = trade_id
        self.symbol = symbol
        self.held = held
        self.sold = sold


class ConfigurationError(TradebookError):
    """Invalid or missing configuration."""

    pass
