"""Coach analysis data models."""

import re
from typing import Any, Optional
from pydantic import BaseModel, Field, field_validator


class VibeReport(BaseModel):
    """Short, punchy read on the trader's current state."""

    stoke_meter: str = Field(..., alias="stokeMeter", description="Emoji + mood")
    mustang_progress: str = Field(
        ..., alias="mustangProgress", description="Journey-to-goal metaphor"
    )
    momentum_rating: Optional[int] = Field(
        ..., alias="momentumRating", description="Momentum from 1 to 10"
    )
    hype_line: str = Field(..., alias="hypeLine", description="Upbeat one-liner")
    reality_check: str = Field(..., alias="realityCheck", description="Honest one-liner")

    model_config = {"frozen": True, "populate_by_name": True}

    @field_validator("momentum_rating", mode="before")
    @classmethod
    def _parse_rating(cls, value: Any) -> Optional[int]:
        # Models sometimes answer "7/10" or "8 - strong"
        if value is None or isinstance(value, bool):
            return None
        if isinstance(value, (int, float)):
            rating = int(round(value))
        else:
            match = re.search(r"\d+(\.\d+)?", str(value))
            if not match:
                return None
            rating = int(round(float(match.group())))
        return max(1, min(10, rating))


class CoachAnalysis(BaseModel):
    """Narrative coaching payload produced for the journal."""

    vibe_report: VibeReport = Field(..., alias="vibeReport")
    coach_insights: str = Field(
        ..., alias="coachInsights", description="Patterns, risk and timeline"
    )
    next_focus: str = Field(..., alias="nextFocus", description="3-5 words for tomorrow")

    model_config = {"frozen": True, "populate_by_name": True}


FALLBACK_ANALYSIS = CoachAnalysis(
    vibe_report=VibeReport(
        stoke_meter="Neutral",
        mustang_progress="Idling",
        momentum_rating=None,
        hype_line="Ready to trade.",
        reality_check="Log your first trade to get coached.",
    ),
    coach_insights="Market is open. Discipline is key.",
    next_focus="Execution and Risk Management",
)
