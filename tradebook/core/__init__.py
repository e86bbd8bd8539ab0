"""Journal report orchestration."""

from tradebook.core.journal import JournalReport, TradeJournal, create_journal

__all__ = [
    "JournalReport",
    "TradeJournal",
    "create_journal",
]
