"""Journal file loading and trade record validation."""

import logging
import re
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from tradebook.loader.exceptions import JournalFileError, TradeValidationError
from tradebook.models import Side, Trade

logger = logging.getLogger(__name__)

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_tag_string(value: Optional[str]) -> List[str]:
    """Split a comma-separated tag string, dropping empty entries."""
    if not value:
        return []
    return [tag.strip() for tag in value.split(",") if tag.strip()]


class TradeRecord(BaseModel):
    """Strict schema for one raw trade entry."""

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    id: str = Field(min_length=1)
    date: str
    symbol: str = Field(min_length=1)
    side: Side
    price: Decimal = Field(ge=0, allow_inf_nan=False)
    quantity: Decimal = Field(gt=0, allow_inf_nan=False)
    tags: List[str] = Field(default_factory=list)
    symbol_name: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> Any:
        """YAML reads bare numeric ids as ints."""
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("date", mode="before")
    @classmethod
    def check_date(cls, v: Any) -> Any:
        """Require a real calendar date written as YYYY-MM-DD."""
        if isinstance(v, datetime):
            return v.date().isoformat()
        if isinstance(v, date):
            return v.isoformat()
        if not isinstance(v, str) or not _DATE_RE.match(v.strip()):
            raise ValueError("date must be YYYY-MM-DD")
        date.fromisoformat(v.strip())
        return v.strip()

    @field_validator("price", "quantity", mode="before")
    @classmethod
    def float_via_str(cls, v: Any) -> Any:
        """Convert floats through their repr so 0.1 stays 0.1."""
        if isinstance(v, float):
            return str(v)
        return v

    @field_validator("side", mode="before")
    @classmethod
    def normalize_side(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @field_validator("tags", mode="before")
    @classmethod
    def split_tags(cls, v: Any) -> Any:
        """Accept a list of tags or a single comma-separated string."""
        if v is None:
            return []
        if isinstance(v, str):
            return parse_tag_string(v)
        return v

    @field_validator("symbol_name", mode="before")
    @classmethod
    def blank_name_to_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    def to_trade(self) -> Trade:
        return Trade(
            id=self.id,
            date=self.date,
            symbol=self.symbol,
            side=self.side,
            price=self.price,
            quantity=self.quantity,
            tags=tuple(tag for tag in self.tags if tag),
            symbol_name=self.symbol_name,
        )


def parse_trade(record: Mapping[str, Any], index: Optional[int] = None) -> Trade:
    """
    Validate one raw record and build a Trade.

    Args:
        record: Raw mapping (from YAML, a form, an API payload)
        index: Position in the source list, used in error messages

    Returns:
        Trade

    Raises:
        TradeValidationError: If any field is missing or invalid
    """
    if not isinstance(record, Mapping):
        raise TradeValidationError("record must be a mapping", index=index)
    try:
        return TradeRecord.model_validate(dict(record)).to_trade()
    except ValidationError as e:
        first = e.errors()[0]
        field_name = ".".join(str(part) for part in first["loc"]) or None
        raise TradeValidationError(
            f"{field_name}: {first['msg']}", index=index, field=field_name
        ) from e


def parse_trades(records: List[Mapping[str, Any]]) -> List[Trade]:
    """Validate a list of records; ids must be unique."""
    trades = []
    seen = set()
    for index, record in enumerate(records):
        trade = parse_trade(record, index=index)
        if trade.id in seen:
            raise TradeValidationError(f"duplicate id {trade.id!r}", index=index, field="id")
        seen.add(trade.id)
        trades.append(trade)
    return trades


def parse_prices(raw: Optional[Mapping[str, Any]]) -> Dict[str, Decimal]:
    """Convert a symbol -> price mapping to Decimals, skipping blanks."""
    prices: Dict[str, Decimal] = {}
    for symbol, value in (raw or {}).items():
        if value is None or value == "":
            continue
        try:
            price = Decimal(str(value))
        except InvalidOperation as e:
            raise JournalFileError(f"invalid price for {symbol}: {value!r}") from e
        if not price.is_finite() or price < 0:
            raise JournalFileError(f"invalid price for {symbol}: {value!r}")
        prices[str(symbol)] = price
    return prices


@dataclass
class Journal:
    """Trades and current prices loaded from one journal document."""

    trades: List[Trade] = field(default_factory=list)
    prices: Dict[str, Decimal] = field(default_factory=dict)
    source: Optional[Path] = None


def load_journal(path: Path) -> Journal:
    """
    Load a YAML journal.

    Expected layout:
        trades:
          - {id: t1, date: 2024-01-02, symbol: AAA, side: BUY, price: 100, quantity: 10}
        prices:
          AAA: 120

    Raises:
        JournalFileError: If the file cannot be read or parsed
        TradeValidationError: If a trade record is invalid
    """
    path = Path(path)
    if not path.exists():
        raise JournalFileError(f"journal not found: {path}", path=str(path))

    try:
        with open(path, encoding="utf-8") as f:
            document = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise JournalFileError(f"could not read journal {path}: {e}", path=str(path)) from e

    if not isinstance(document, dict):
        raise JournalFileError(f"journal {path} must be a mapping", path=str(path))

    records = document.get("trades") or []
    if not isinstance(records, list):
        raise JournalFileError(f"'trades' in {path} must be a list", path=str(path))

    prices = document.get("prices") or {}
    if not isinstance(prices, dict):
        raise JournalFileError(f"'prices' in {path} must be a mapping", path=str(path))

    journal = Journal(
        trades=parse_trades(records),
        prices=parse_prices(prices),
        source=path,
    )
    logger.info(
        f"Loaded {len(journal.trades)} trades and {len(journal.prices)} prices from {path}"
    )
    return journal
