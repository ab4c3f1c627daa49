"""Entry store and entry-creation boundary."""

from propjournal.journal.entries import (
    ENTRIES_KEY,
    EntryStore,
    build_entry,
    make_request,
    parse_amount,
    parse_date,
)

__all__ = [
    "ENTRIES_KEY",
    "EntryStore",
    "build_entry",
    "make_request",
    "parse_amount",
    "parse_date",
]
