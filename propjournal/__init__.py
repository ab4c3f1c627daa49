"""PropJournal - trading-performance journal for funded accounts."""

__version__ = "0.1.0"
