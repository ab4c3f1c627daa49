"""Statistics engine for the trading journal.

Turns the (unordered) entry collection into a TradingStats snapshot. The
snapshot is rebuilt from scratch on every change; nothing is carried over
between calls.
"""

import math
from typing import Iterable

from propjournal.models import JournalEntry, TradingStats

# Funded account defaults
INITIAL_BALANCE = 50000.0
PROFIT_GOAL = 20000.0


def sort_by_date(
    entries: Iterable[JournalEntry], descending: bool = False
) -> list[JournalEntry]:
    """Sort entries by date, keeping insertion order for equal dates.

    Args:
        entries: Entries to sort.
        descending: Newest first if True.

    Returns:
        New sorted list.
    """
    entries = list(entries)
    if descending:
        # reversed() before a stable sort keeps ties newest-inserted first
        return sorted(reversed(entries), key=lambda e: e.date, reverse=True)
    return sorted(entries, key=lambda e: e.date)


def split_entries(
    entries: Iterable[JournalEntry],
) -> tuple[list[JournalEntry], list[JournalEntry]]:
    """Partition entries into (trading days, payouts)."""
    trading_days: list[JournalEntry] = []
    payouts: list[JournalEntry] = []
    for entry in entries:
        (payouts if entry.is_payout else trading_days).append(entry)
    return trading_days, payouts


def next_streak(current: int, pnl: float) -> int:
    """Advance the signed streak counter by one trading day.

    Positive values count consecutive wins, negative values consecutive
    losses. A flat day leaves the counter untouched.
    """
    if pnl > 0:
        return current + 1 if current >= 0 else 1
    if pnl < 0:
        return current - 1 if current <= 0 else -1
    return current


def streak_sequence(entries: Iterable[JournalEntry]) -> list[int]:
    """Streak counter value after each trading day, in date order.

    Args:
        entries: Any entries; payouts are ignored.

    Returns:
        One value per trading day.
    """
    trading_days, _ = split_entries(entries)
    sequence = []
    current = 0
    for entry in sort_by_date(trading_days):
        current = next_streak(current, entry.pnl)
        sequence.append(current)
    return sequence


def compute_stats(
    entries: Iterable[JournalEntry],
    initial_balance: float = INITIAL_BALANCE,
    profit_goal: float = PROFIT_GOAL,
) -> TradingStats:
    """Compute the statistics snapshot for an entry collection.

    Total over any finite collection, including the empty one.

    Args:
        entries: Journal entries in any order.
        initial_balance: Account balance before the first entry.
        profit_goal: Total payouts targeted.

    Returns:
        TradingStats snapshot.
    """
    trading_days, payouts = split_entries(entries)

    cumulative_pnl = 0.0
    wins = 0
    current_streak = 0
    best_streak = 0
    worst_streak = 0

    for entry in sort_by_date(trading_days):
        cumulative_pnl += entry.pnl
        current_streak = next_streak(current_streak, entry.pnl)

        if entry.pnl > 0:
            wins += 1
            best_streak = max(best_streak, current_streak)
        elif entry.pnl < 0:
            worst_streak = min(worst_streak, current_streak)

    total_payouts = sum((entry.payout_amount or 0.0 for entry in payouts), 0.0)

    trading_day_count = len(trading_days)
    current_balance = initial_balance + cumulative_pnl - total_payouts
    win_rate = (wins / trading_day_count * 100) if trading_day_count > 0 else 0.0
    daily_average = (cumulative_pnl / trading_day_count) if trading_day_count > 0 else 0.0

    remaining_to_goal = profit_goal - total_payouts
    projected_days_to_goal = None
    if daily_average > 0:
        days = remaining_to_goal / daily_average
        # Overflowed sums give inf or nan here
        if math.isfinite(days):
            projected_days_to_goal = math.ceil(days)
    profit_goal_progress = min(100.0, max(0.0, total_payouts / profit_goal * 100))

    return TradingStats(
        current_balance=current_balance,
        cumulative_pnl=cumulative_pnl,
        win_rate=win_rate,
        daily_average=daily_average,
        projected_days_to_goal=projected_days_to_goal,
        best_streak=best_streak,
        worst_streak=worst_streak,
        total_payouts=total_payouts,
        profit_goal_progress=profit_goal_progress,
    )
