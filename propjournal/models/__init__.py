"""Data models for PropJournal."""

from propjournal.models.journal import EntryRequest, JournalEntry
from propjournal.models.stats import TradingStats
from propjournal.models.analysis import FALLBACK_ANALYSIS, CoachAnalysis, VibeReport

__all__ = [
    "EntryRequest",
    "JournalEntry",
    "TradingStats",
    "CoachAnalysis",
    "VibeReport",
    "FALLBACK_ANALYSIS",
]
