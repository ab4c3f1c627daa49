"""Statistics engine, goal tracking and chart series for the journal."""

from propjournal.stats.engine import (
    INITIAL_BALANCE,
    PROFIT_GOAL,
    compute_stats,
    sort_by_date,
    split_entries,
    streak_sequence,
)
from propjournal.stats.goal import GoalState, GoalTransition, evaluate_goal

__all__ = [
    "INITIAL_BALANCE",
    "PROFIT_GOAL",
    "compute_stats",
    "sort_by_date",
    "split_entries",
    "streak_sequence",
    "GoalState",
    "GoalTransition",
    "evaluate_goal",
]
