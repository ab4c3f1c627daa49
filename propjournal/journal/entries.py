"""Entry creation and the append-only entry store.

Entries are validated and given an id at the boundary (``build_entry``),
then appended to the ``EntryStore``. The store never reorders, edits or
removes entries; every append writes the whole collection back to
persistence.
"""

import logging
import math
import uuid
from datetime import date
from typing import Iterator, Optional, Union

from pydantic import TypeAdapter, ValidationError

from propjournal.db.store import BaseStore
from propjournal.models import EntryRequest, JournalEntry

logger = logging.getLogger(__name__)

ENTRIES_KEY = "trade_journal_entries"
MAX_AMOUNT = 1_000_000_000.0

_ENTRY_LIST = TypeAdapter(list[JournalEntry])


def parse_amount(value: Union[str, int, float]) -> float:
    """Parse a monetary amount typed by the user.

    Args:
        value: Number or numeric string (a leading "$" and thousands
            separators are accepted).

    Returns:
        Amount as float.

    Raises:
        ValueError: If the value is empty, non-numeric, not finite or
            larger than MAX_AMOUNT in magnitude.
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid amount: {value!r}")

    if isinstance(value, str):
        cleaned = value.strip().replace(",", "").replace("$", "")
        if not cleaned:
            raise ValueError("Amount is required")
        try:
            amount = float(cleaned)
        except ValueError:
            raise ValueError(f"Invalid amount: {value!r}") from None
    else:
        amount = float(value)

    if not math.isfinite(amount):
        raise ValueError(f"Invalid amount: {value!r}")
    if abs(amount) > MAX_AMOUNT:
        raise ValueError(f"Amount out of range: {value!r}")
    return amount


def parse_date(value: Union[str, date, None]) -> date:
    """Parse an entry date. None means today.

    Raises:
        ValueError: If the string is not an ISO date (YYYY-MM-DD).
    """
    if value is None:
        return date.today()
    if isinstance(value, date):
        return value
    value = value.strip()
    if not value:
        raise ValueError("Date is required")
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise ValueError(f"Invalid date: {value!r}. Use YYYY-MM-DD") from None


def make_request(
    amount: Union[str, int, float],
    entry_date: Union[str, date, None] = None,
    is_payout: bool = False,
    notes: Optional[str] = None,
    setup: Optional[str] = None,
) -> EntryRequest:
    """Turn raw form input into an entry request.

    Args:
        amount: Daily net P/L, or the withdrawal amount for payouts.
        entry_date: Activity date. Defaults to today.
        is_payout: True for a withdrawal.
        notes: Optional free text.
        setup: Optional trade setup tag.

    Returns:
        EntryRequest ready for build_entry().

    Raises:
        ValueError: On a missing or non-numeric amount or a bad date.
    """
    value = parse_amount(amount)
    return EntryRequest(
        date=parse_date(entry_date),
        pnl=0.0 if is_payout else value,
        is_payout=is_payout,
        payout_amount=value if is_payout else None,
        notes=notes or None,
        setup=setup or None,
    )


def build_entry(request: EntryRequest) -> JournalEntry:
    """Create a journal entry from a request, assigning a fresh id.

    Payout amounts are stored as absolute values and payouts carry no P/L;
    trade entries carry no payout amount.
    """
    if request.is_payout:
        return JournalEntry(
            id=str(uuid.uuid4()),
            date=request.date,
            pnl=0.0,
            is_payout=True,
            payout_amount=abs(request.payout_amount or 0.0),
            notes=request.notes,
        )
    return JournalEntry(
        id=str(uuid.uuid4()),
        date=request.date,
        pnl=request.pnl,
        is_payout=False,
        payout_amount=None,
        notes=request.notes,
        setup=request.setup,
    )


def serialize_entries(entries: list[JournalEntry]) -> str:
    """Serialize entries in the persisted JSON shape."""
    return _ENTRY_LIST.dump_json(entries, by_alias=True, exclude_none=True).decode()


def deserialize_entries(raw: str) -> list[JournalEntry]:
    """Parse a persisted entry blob.

    Raises:
        ValidationError: If the blob is not JSON or not a list of entries.
    """
    return _ENTRY_LIST.validate_json(raw)


class EntryStore:
    """In-memory, append-only journal mirrored to a key/value store."""

    def __init__(self, store: BaseStore, key: str = ENTRIES_KEY):
        """Load the entry collection from persistence.

        Args:
            store: Persistence backend.
            key: Slot holding the serialized collection.
        """
        self._store = store
        self._key = key
        self._entries: list[JournalEntry] = self._load()

    def _load(self) -> list[JournalEntry]:
        """Load persisted entries; malformed state yields an empty journal."""
        raw = self._store.get(self._key)
        if raw is None:
            return []

        try:
            entries = deserialize_entries(raw)
        except ValidationError as e:
            logger.warning(
                "Ignoring malformed journal data under '%s' (%d errors)",
                self._key,
                e.error_count(),
            )
            # Keep the unreadable blob around before it gets overwritten
            self._store.set(f"{self._key}.corrupt", raw)
            return []

        seen: set[str] = set()
        unique = []
        for entry in entries:
            if entry.id in seen:
                logger.warning("Skipping duplicate journal entry id %s", entry.id)
                continue
            seen.add(entry.id)
            unique.append(entry)
        return unique

    def _persist(self) -> bool:
        saved = self._store.set(self._key, serialize_entries(self._entries))
        if not saved:
            logger.error("Journal not saved; %d entries only in memory", len(self._entries))
        return saved

    @property
    def entries(self) -> tuple[JournalEntry, ...]:
        """All entries in insertion order."""
        return tuple(self._entries)

    def append(self, entry: JournalEntry) -> tuple[JournalEntry, ...]:
        """Append an entry and persist the whole collection.

        Args:
            entry: Fully-formed journal entry.

        Returns:
            The updated collection.

        Raises:
            ValueError: If an entry with the same id already exists.
        """
        if any(existing.id == entry.id for existing in self._entries):
            raise ValueError(f"Entry id already used: {entry.id}")

        self._entries.append(entry)
        self._persist()
        logger.info(
            "Logged %s on %s",
            "payout" if entry.is_payout else "trading day",
            entry.date.isoformat(),
        )
        return self.entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[JournalEntry]:
        return iter(self.entries)
