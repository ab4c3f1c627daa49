"""TradingStats data model."""

from typing import Optional
from pydantic import BaseModel, Field


class TradingStats(BaseModel):
    """Statistics derived from the full entry collection.

    Always rebuilt from scratch; never persisted as a source of truth.
    """

    current_balance: float = Field(..., description="Initial balance + P/L - payouts")
    cumulative_pnl: float = Field(..., description="Sum of trading P/L")
    win_rate: float = Field(..., ge=0, le=100, description="Winning days percentage")
    daily_average: float = Field(..., description="Mean P/L per trading day")
    projected_days_to_goal: Optional[int] = Field(
        default=None, description="Trading days to the payout goal at the current average"
    )
    best_streak: int = Field(..., ge=0, description="Longest winning run")
    worst_streak: int = Field(..., le=0, description="Longest losing run (negative)")
    total_payouts: float = Field(..., ge=0, description="Sum of payouts")
    profit_goal_progress: float = Field(
        ..., ge=0, le=100, description="Payouts as a percentage of the goal"
    )

    model_config = {"frozen": True}
