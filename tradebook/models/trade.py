"""Trade record data models."""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Optional, Tuple


class Side(str, Enum):
    BUY = "BUY"
    SELL = "SELL"


@dataclass(frozen=True)
class Trade:
    """One buy or sell execution as entered in the journal."""

    id: str
    date: str  # YYYY-MM-DD
    symbol: str
    side: Side
    price: Decimal  # Unit price
    quantity: Decimal  # Fractional quantities allowed
    tags: Tuple[str, ...] = field(default_factory=tuple)
    symbol_name: Optional[str] = None  # Display name, e.g. "Samsung Electronics"

    def __post_init__(self):
        # Accept any iterable of tags but store them immutably
        if not isinstance(self.tags, tuple):
            object.__setattr__(self, "tags", tuple(self.tags))

    @property
    def amount(self) -> Decimal:
        """Total value of the trade (price * quantity)."""
        return self.price * self.quantity

    @property
    def unique_tags(self) -> Tuple[str, ...]:
        """Tags with duplicates removed, first occurrence wins."""
        return tuple(dict.fromkeys(self.tags))

    @property
    def is_buy(self) -> bool:
        return self.side == Side.BUY
