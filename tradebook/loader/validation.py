"""Caller-side checks the position engine does not enforce."""

import logging
from decimal import Decimal, localcontext
from typing import Dict, Iterable, Iterator, List, Tuple

from tradebook.engine import ARITHMETIC_CONTEXT, PositionState, canonical_order
from tradebook.loader.exceptions import OversellError
from tradebook.models import Trade

logger = logging.getLogger(__name__)


def _oversold_sells(trades: Iterable[Trade]) -> Iterator[Tuple[Trade, Decimal]]:
    """Yield (sell, quantity held before it) for every oversold sell."""
    positions: Dict[str, PositionState] = {}
    for trade in canonical_order(trades):
        position = positions.setdefault(trade.symbol, PositionState())
        if not trade.is_buy and trade.quantity > position.position_qty:
            yield trade, position.position_qty
        position.apply(trade)


def find_oversells(trades: Iterable[Trade]) -> List[Trade]:
    """
    Sells that exceed the quantity held when they execute.

    Walks the journal in evaluation order, so a same-day buy only covers a
    sell whose id sorts after it.
    """
    with localcontext(ARITHMETIC_CONTEXT):
        oversold = [trade for trade, _ in _oversold_sells(trades)]

    if oversold:
        logger.debug(f"Found {len(oversold)} oversold sells")
    return oversold


def check_oversell(trades: Iterable[Trade]) -> None:
    """
    Reject a journal containing any oversold sell.

    Raises:
        OversellError: For the first offending sell
    """
    with localcontext(ARITHMETIC_CONTEXT):
        for trade, held in _oversold_sells(trades):
            raise OversellError(
                trade_id=trade.id,
                symbol=trade.symbol,
                held=held,
                sold=trade.quantity,
            )
