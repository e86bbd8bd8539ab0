"""Canonical evaluation order for trades."""

from typing import Iterable, List, Tuple

from tradebook.models import Trade


def trade_sort_key(trade: Trade) -> Tuple[str, str]:
    """Date first, then id, both compared as plain strings."""
    return (trade.date, trade.id)


def canonical_order(trades: Iterable[Trade]) -> List[Trade]:
    """
    Return a new list of trades in evaluation order.

    Every fold over the journal must use this ordering: the id tie-break
    decides which same-day trade counts as earlier for cost attribution.
    Input is never assumed to be sorted and is not modified.
    """
    return sorted(trades, key=trade_sort_key)
