"""Payout-goal celebration state.

The celebration is a one-shot event: it fires the first time total payouts
reach the goal. The state is passed in and returned explicitly so callers
decide where it is stored.
"""

from enum import Enum

from pydantic import BaseModel, Field


class GoalState(str, Enum):
    """Whether the payout goal has already been celebrated."""

    NOT_CELEBRATED = "not_celebrated"
    CELEBRATED = "celebrated"


class GoalTransition(BaseModel):
    """Result of evaluating the goal state against fresh statistics."""

    state: GoalState = Field(..., description="State after evaluation")
    fired: bool = Field(default=False, description="Celebration triggered now")
    cleared: bool = Field(default=False, description="Flag reset below goal")

    model_config = {"frozen": True}


def evaluate_goal(
    state: GoalState,
    total_payouts: float,
    profit_goal: float,
    reset_below_goal: bool = True,
) -> GoalTransition:
    """Apply the celebration transition.

    Args:
        state: Current celebration state.
        total_payouts: Payout total from the latest statistics.
        profit_goal: Payout goal.
        reset_below_goal: Return to NOT_CELEBRATED when payouts are below
            the goal again. Disable to make the celebration strictly once.

    Returns:
        GoalTransition with the new state.
    """
    if total_payouts >= profit_goal:
        if state is GoalState.NOT_CELEBRATED:
            return GoalTransition(state=GoalState.CELEBRATED, fired=True)
        return GoalTransition(state=state)

    if state is GoalState.CELEBRATED and reset_below_goal:
        return GoalTransition(state=GoalState.NOT_CELEBRATED, cleared=True)
    return GoalTransition(state=state)
