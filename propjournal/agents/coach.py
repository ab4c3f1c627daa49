"""Coach Agent for narrative performance analysis.

This agent reads the recent journal and the current statistics and returns a
short structured coaching report. It is optional: without an API key the
journal works exactly the same, just without the report.
"""

import json
import re
from typing import Any, Optional, Sequence

from agents import Agent, set_default_openai_key
from pydantic import ValidationError

from propjournal.agents.base import create_agent, get_api_key, run_agent_async, run_agent_sync
from propjournal.journal.entries import serialize_entries
from propjournal.models import CoachAnalysis, JournalEntry, TradingStats
from propjournal.stats.engine import INITIAL_BALANCE, PROFIT_GOAL

# Number of most recent entries sent to the model
RECENT_ENTRIES = 10


COACH_AGENT_INSTRUCTIONS = """You are a professional Trading Performance Analyst and Money Coach for a ${initial_balance:,.0f} funded trading account.
Your goal is to help the user reach ${profit_goal:,.0f} in total payouts safely.

Tone: calm, professional fintech analysis with a chill, confident and honest vibe.

The user provides their trading journal. Analyze the data and answer with the requested JSON object.

Rules:
1. Be numbers-driven.
2. If performance is bad, be brutally honest but constructive.
3. If performance is good, be hyped but grounded.
4. "Mustang Progress" is a metaphor for their journey to the goal (e.g. "In the garage", "Cruising", "Redlining").
"""


class CoachUnavailableError(RuntimeError):
    """Raised when the coach is asked to run without an API key."""


def build_coach_prompt(
    entries: Sequence[JournalEntry],
    stats: TradingStats,
    recent: int = RECENT_ENTRIES,
) -> str:
    """Build the analysis request for the coach.

    Args:
        entries: Journal entries in insertion order.
        stats: Current statistics snapshot.
        recent: How many of the latest entries to include.

    Returns:
        Prompt text.
    """
    latest = list(entries)[-recent:] if recent > 0 else []

    return f"""Current Account Stats:
- Balance: ${stats.current_balance:,.2f}
- Cumulative P/L: ${stats.cumulative_pnl:,.2f}
- Total Payouts: ${stats.total_payouts:,.2f}
- Progress to Goal: {stats.profit_goal_progress:.1f}%
- Recent Win Rate: {stats.win_rate:.1f}%
- Best Streak: {stats.best_streak} | Worst Streak: {stats.worst_streak}

Recent Entries (Last {len(latest)}):
{serialize_entries(latest)}

Generate a JSON response with the following fields:
- vibeReport: object with 'stokeMeter' (emoji + text), 'mustangProgress' (text), 'momentumRating' (integer 1-10), 'hypeLine' (short sentence), 'realityCheck' (short sentence).
- coachInsights: a paragraph analyzing patterns, risk, and timeline.
- nextFocus: 3-5 words on what to focus on tomorrow."""


def parse_analysis(output: Any) -> CoachAnalysis:
    """Coerce raw agent output into a CoachAnalysis.

    Args:
        output: Structured output, a dict, or JSON text (optionally fenced).

    Returns:
        Parsed analysis.

    Raises:
        ValueError: If the output is empty or does not match the schema.
    """
    if isinstance(output, CoachAnalysis):
        return output

    if not output:
        raise ValueError("No response from coach")

    try:
        if isinstance(output, str):
            text = re.sub(r"^```(?:json)?\s*|\s*```$", "", output.strip())
            return CoachAnalysis.model_validate(json.loads(text))
        return CoachAnalysis.model_validate(output)
    except (json.JSONDecodeError, ValidationError) as e:
        raise ValueError(f"Malformed coach response: {e}") from e


class CoachAgent:
    """AI coach that turns journal data into a short performance report."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        initial_balance: float = INITIAL_BALANCE,
        profit_goal: float = PROFIT_GOAL,
    ):
        """Initialize the Coach Agent.

        Args:
            api_key: OpenAI key. Falls back to OPENAI_API_KEY.
            model: Optional model override.
            initial_balance: Account size mentioned to the model.
            profit_goal: Payout goal mentioned to the model.
        """
        self.api_key = get_api_key(api_key)
        self.model = model
        self.initial_balance = initial_balance
        self.profit_goal = profit_goal
        self._agent: Optional[Agent] = None

    @classmethod
    def from_config(cls, config) -> "CoachAgent":
        """Create a coach from a JournalConfig."""
        return cls(
            api_key=config.openai_api_key,
            model=config.openai_model,
            initial_balance=config.initial_balance,
            profit_goal=config.profit_goal,
        )

    def is_available(self) -> bool:
        """Whether an API key is configured."""
        return bool(self.api_key)

    def _get_agent(self) -> Agent:
        if not self.is_available():
            raise CoachUnavailableError("OpenAI API key not configured")

        if self._agent is None:
            set_default_openai_key(self.api_key)
            self._agent = create_agent(
                name="Coach Agent",
                instructions=COACH_AGENT_INSTRUCTIONS.format(
                    initial_balance=self.initial_balance,
                    profit_goal=self.profit_goal,
                ),
                model=self.model,
                output_type=CoachAnalysis,
            )
        return self._agent

    def analyze(
        self, entries: Sequence[JournalEntry], stats: TradingStats
    ) -> CoachAnalysis:
        """Generate a coaching report.

        Args:
            entries: Journal entries in insertion order.
            stats: Current statistics snapshot.

        Returns:
            Coach analysis.

        Raises:
            CoachUnavailableError: If no API key is configured.
            ValueError: If the response is empty or malformed.
        """
        agent = self._get_agent()
        output = run_agent_sync(agent, build_coach_prompt(entries, stats))
        return parse_analysis(output)

    async def analyze_async(
        self, entries: Sequence[JournalEntry], stats: TradingStats
    ) -> CoachAnalysis:
        """Async variant of analyze()."""
        agent = self._get_agent()
        output = await run_agent_async(agent, build_coach_prompt(entries, stats))
        return parse_analysis(output)
