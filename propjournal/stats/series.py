"""Chart and card data derived from the journal."""

from datetime import date
from typing import Iterable, Optional

from propjournal.models import JournalEntry, TradingStats
from propjournal.stats.engine import sort_by_date, split_entries


def cumulative_series(entries: Iterable[JournalEntry]) -> list[dict]:
    """Running trading P/L by date.

    Args:
        entries: Journal entries; payouts are ignored.

    Returns:
        List of dicts with date, value (running total) and daily P/L.
    """
    trading_days, _ = split_entries(entries)
    running_total = 0.0
    series = []
    for entry in sort_by_date(trading_days):
        running_total += entry.pnl
        series.append({
            "date": entry.date,
            "value": running_total,
            "daily": entry.pnl,
        })
    return series


def payout_series(entries: Iterable[JournalEntry]) -> list[dict]:
    """Running payout total by date.

    Args:
        entries: Journal entries; trading days are ignored.

    Returns:
        List of dicts with date, value (running total) and amount.
    """
    _, payouts = split_entries(entries)
    running_total = 0.0
    series = []
    for entry in sort_by_date(payouts):
        amount = entry.payout_amount or 0.0
        running_total += amount
        series.append({
            "date": entry.date,
            "value": running_total,
            "amount": amount,
        })
    return series


def daily_bars(entries: Iterable[JournalEntry], limit: int = 14) -> list[JournalEntry]:
    """The last ``limit`` trading days in date order."""
    trading_days, _ = split_entries(entries)
    if limit <= 0:
        return []
    return sort_by_date(trading_days)[-limit:]


def recent_activity(entries: Iterable[JournalEntry], limit: int = 5) -> list[JournalEntry]:
    """The ``limit`` most recent entries of either kind, newest first."""
    if limit <= 0:
        return []
    return sort_by_date(entries, descending=True)[:limit]


def gradient_offset(series: list[dict]) -> float:
    """Fraction of the cumulative chart's range that sits above zero.

    Used to split the line colour between profit and drawdown. 1.0 means
    entirely in profit, 0.0 entirely in drawdown.
    """
    if not series:
        return 1.0
    values = [point["value"] for point in series]
    data_max = max(values)
    data_min = min(values)
    if data_max <= 0:
        return 0.0
    if data_min >= 0:
        return 1.0
    return data_max / (data_max - data_min)


def remaining_to_goal(stats: TradingStats, profit_goal: float) -> float:
    """Payouts still needed to reach the goal, never negative."""
    return max(0.0, profit_goal - stats.total_payouts)


def is_goal_reached(stats: TradingStats, profit_goal: float) -> bool:
    return stats.total_payouts >= profit_goal


def days_until_summer(today: Optional[date] = None) -> int:
    """Days until the next June 21st (countdown card).

    On June 21st itself the countdown is zero.
    """
    today = today or date.today()
    summer = date(today.year, 6, 21)
    if today > summer:
        summer = date(today.year + 1, 6, 21)
    return (summer - today).days
