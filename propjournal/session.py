"""Journal session: entry store, statistics, goal flag and coach analysis.

One session owns the entry collection for its lifetime. Every append
recomputes the statistics from the full collection, evaluates the payout
goal and, when a coach is available, asks it for a fresh analysis. The
coach is strictly optional and its failures never reach the caller.
"""

import logging
from typing import Optional, Protocol, Sequence

from pydantic import BaseModel, Field, ValidationError

from propjournal.config import JournalConfig
from propjournal.db.store import BaseStore, DataStore
from propjournal.journal.entries import EntryStore, build_entry
from propjournal.models import (
    FALLBACK_ANALYSIS,
    CoachAnalysis,
    EntryRequest,
    JournalEntry,
    TradingStats,
)
from propjournal.stats.engine import compute_stats
from propjournal.stats.goal import GoalState, GoalTransition, evaluate_goal

logger = logging.getLogger(__name__)

ANALYSIS_KEY = "trade_journal_analysis"
CELEBRATED_KEY = "celebrated"


class Coach(Protocol):
    """Anything that can produce a coach analysis."""

    def is_available(self) -> bool: ...

    def analyze(
        self, entries: Sequence[JournalEntry], stats: TradingStats
    ) -> CoachAnalysis: ...


class SessionUpdate(BaseModel):
    """What the presentation layer needs after an append."""

    entry: JournalEntry = Field(..., description="The entry just logged")
    entries: tuple[JournalEntry, ...] = Field(..., description="Full collection")
    stats: TradingStats = Field(..., description="Fresh statistics")
    celebrate: bool = Field(default=False, description="Goal reached on this append")
    analysis: Optional[CoachAnalysis] = Field(default=None, description="Latest analysis")

    model_config = {"frozen": True}


class JournalSession:
    """Stateful journal bound to a persistence backend."""

    def __init__(
        self,
        store: BaseStore,
        config: Optional[JournalConfig] = None,
        coach: Optional[Coach] = None,
    ):
        """Load the journal from persistence.

        Args:
            store: Persistence backend.
            config: Journal settings. Defaults are used if None.
            coach: Optional narrative generator.
        """
        self.config = config or JournalConfig()
        self.coach = coach
        self._store = store
        self._entries = EntryStore(store)
        self._stats = self._compute(self._entries.entries)
        self._goal_state = self._load_goal_state()
        self._analysis = self._load_analysis()

    # ==================== State ====================

    @property
    def entries(self) -> tuple[JournalEntry, ...]:
        return self._entries.entries

    @property
    def stats(self) -> TradingStats:
        return self._stats

    @property
    def goal_state(self) -> GoalState:
        return self._goal_state

    @property
    def analysis(self) -> Optional[CoachAnalysis]:
        return self._analysis

    @property
    def coach_available(self) -> bool:
        return self.coach is not None and self.coach.is_available()

    def _compute(self, entries: Sequence[JournalEntry]) -> TradingStats:
        return compute_stats(
            entries,
            initial_balance=self.config.initial_balance,
            profit_goal=self.config.profit_goal,
        )

    # ==================== Entries ====================

    def add_entry(self, request: EntryRequest, analyze: bool = True) -> SessionUpdate:
        """Log a new entry.

        Args:
            request: Validated entry request.
            analyze: Ask the coach for a new analysis afterwards.

        Returns:
            SessionUpdate with the new collection, stats and goal event.
        """
        entry = build_entry(request)
        entries = self._entries.append(entry)
        self._stats = self._compute(entries)

        transition = evaluate_goal(
            self._goal_state,
            self._stats.total_payouts,
            self.config.profit_goal,
            reset_below_goal=self.config.reset_below_goal,
        )
        self._apply_goal(transition)

        if analyze:
            self.update_analysis()

        return SessionUpdate(
            entry=entry,
            entries=entries,
            stats=self._stats,
            celebrate=transition.fired,
            analysis=self._analysis,
        )

    # ==================== Goal ====================

    def _load_goal_state(self) -> GoalState:
        if self._store.get(CELEBRATED_KEY) == "true":
            return GoalState.CELEBRATED
        return GoalState.NOT_CELEBRATED

    def _apply_goal(self, transition: GoalTransition) -> None:
        self._goal_state = transition.state
        if transition.fired:
            logger.info("Payout goal reached: %.2f", self._stats.total_payouts)
            self._store.set(CELEBRATED_KEY, "true")
        elif transition.cleared:
            logger.info("Payouts back below goal; celebration re-armed")
            self._store.remove(CELEBRATED_KEY)

    # ==================== Analysis ====================

    def _load_analysis(self) -> Optional[CoachAnalysis]:
        raw = self._store.get(ANALYSIS_KEY)
        if raw is None:
            return None
        try:
            return CoachAnalysis.model_validate_json(raw)
        except ValidationError:
            logger.warning("Ignoring malformed coach analysis under '%s'", ANALYSIS_KEY)
            return None

    def _save_analysis(self, analysis: CoachAnalysis) -> None:
        self._analysis = analysis
        self._store.set(ANALYSIS_KEY, analysis.model_dump_json(by_alias=True))

    def update_analysis(self) -> Optional[CoachAnalysis]:
        """Bring the analysis up to date after an append.

        Asks the coach when one is available. Without a coach, the first
        entry gets the placeholder analysis.

        Returns:
            The current analysis, which may be unchanged or None.
        """
        if self.coach_available:
            self.refresh_analysis()
        elif len(self.entries) == 1 and self._analysis is None:
            self._save_analysis(FALLBACK_ANALYSIS)
        return self._analysis

    def refresh_analysis(self) -> Optional[CoachAnalysis]:
        """Ask the coach for a new analysis of the current journal.

        Failures are logged and leave the previous analysis in place.

        Returns:
            The new analysis, or None if the coach is unavailable or failed.
        """
        if not self.coach_available:
            logger.info("Coach not configured; skipping analysis")
            return None

        try:
            analysis = self.coach.analyze(self.entries, self._stats)
        except Exception as e:
            logger.warning("Coach analysis failed: %s", e)
            return None

        self._save_analysis(analysis)
        return analysis


def open_session(config: JournalConfig, with_coach: bool = True) -> JournalSession:
    """Open the journal described by a config.

    Args:
        config: Journal settings.
        with_coach: Attach the AI coach (still inactive without an API key).

    Returns:
        JournalSession backed by the configured SQLite file.
    """
    store = DataStore(config.db_path)

    coach = None
    if with_coach:
        from propjournal.agents.coach import CoachAgent

        coach = CoachAgent.from_config(config)

    return JournalSession(store, config=config, coach=coach)
