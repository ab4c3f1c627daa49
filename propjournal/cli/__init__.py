"""CLI commands for PropJournal.

This package provides the command-line interface for PropJournal:
logging entries, viewing statistics and charts, and AI coaching.
"""

from propjournal.cli.main import cli, main

__all__ = ["cli", "main"]
