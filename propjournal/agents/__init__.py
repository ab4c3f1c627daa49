"""AI agents for PropJournal.

- CoachAgent: narrative performance analysis of the journal
"""

from propjournal.agents.base import (
    create_agent,
    run_agent_sync,
    run_agent_async,
    get_model,
    get_api_key,
)
from propjournal.agents.coach import (
    CoachAgent,
    CoachUnavailableError,
    build_coach_prompt,
    parse_analysis,
)

__all__ = [
    # Base utilities
    "create_agent",
    "run_agent_sync",
    "run_agent_async",
    "get_model",
    "get_api_key",
    # Agents
    "CoachAgent",
    "CoachUnavailableError",
    # Utility functions
    "build_coach_prompt",
    "parse_analysis",
]
