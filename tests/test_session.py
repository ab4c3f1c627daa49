"""Tests for the journal session.

**Feature: prop-journal**
"""

import tempfile
from datetime import date
from pathlib import Path

import pytest

from propjournal.config import JournalConfig
from propjournal.db.store import DataStore
from propjournal.journal.entries import ENTRIES_KEY, EntryStore, make_request
from propjournal.models import FALLBACK_ANALYSIS, CoachAnalysis, JournalEntry, VibeReport
from propjournal.session import ANALYSIS_KEY, CELEBRATED_KEY, JournalSession
from propjournal.stats.goal import GoalState


def _analysis(focus: str = "Size down") -> CoachAnalysis:
    return CoachAnalysis(
        vibe_report=VibeReport(
            stoke_meter="🔥 Stoked",
            mustang_progress="Cruising",
            momentum_rating=8,
            hype_line="Green week.",
            reality_check="Friday was sloppy.",
        ),
        coach_insights="Consistent sizing is paying off.",
        next_focus=focus,
    )


class FakeCoach:
    """Coach double recording its calls."""

    def __init__(self, available=True, result=None, error=None):
        self.available = available
        self.result = result or _analysis()
        self.error = error
        self.calls = []

    def is_available(self) -> bool:
        return self.available

    def analyze(self, entries, stats):
        self.calls.append((entries, stats))
        if self.error:
            raise self.error
        return self.result


@pytest.fixture
def temp_store():
    """Create a temporary database for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield DataStore(Path(tmpdir) / "test.db")


def trade(amount, day="2024-01-02"):
    return make_request(amount, day)


def payout(amount, day="2024-01-02"):
    return make_request(amount, day, is_payout=True)


class TestAddEntry:
    """Appending recomputes everything from the full collection."""

    def test_stats_recomputed_on_append(self, temp_store):
        session = JournalSession(temp_store)

        session.add_entry(trade(100, "2024-01-01"))
        update = session.add_entry(trade(-40, "2024-01-02"))

        assert len(update.entries) == 2
        assert update.stats.cumulative_pnl == 60
        assert update.stats.best_streak == 1
        assert update.stats.worst_streak == -1
        assert session.stats == update.stats

    def test_config_constants_are_used(self, temp_store):
        config = JournalConfig(initial_balance=100000, profit_goal=5000)
        session = JournalSession(temp_store, config=config)

        update = session.add_entry(payout(2500))

        assert update.stats.current_balance == 97500
        assert update.stats.profit_goal_progress == 50

    def test_session_reloads_entries(self, temp_store):
        JournalSession(temp_store).add_entry(trade(250))

        reopened = JournalSession(temp_store)

        assert len(reopened.entries) == 1
        assert reopened.stats.cumulative_pnl == 250


class TestGoalCelebration:
    """
    **Feature: prop-journal, Property 13: Celebration Fires Once Per Crossing**
    """

    def test_fires_on_the_crossing_append_only(self, temp_store):
        session = JournalSession(temp_store)

        assert not session.add_entry(payout(19000)).celebrate
        crossing = session.add_entry(payout(2000))
        after = session.add_entry(payout(500))

        assert crossing.celebrate
        assert not after.celebrate
        assert session.goal_state is GoalState.CELEBRATED
        assert temp_store.get(CELEBRATED_KEY) == "true"

    def test_flag_survives_restart(self, temp_store):
        JournalSession(temp_store).add_entry(payout(20000))

        reopened = JournalSession(temp_store)

        assert reopened.goal_state is GoalState.CELEBRATED
        assert not reopened.add_entry(payout(100)).celebrate

    def test_flag_cleared_below_goal(self, temp_store):
        temp_store.set(CELEBRATED_KEY, "true")
        session = JournalSession(temp_store)

        session.add_entry(payout(100))

        assert session.goal_state is GoalState.NOT_CELEBRATED
        assert temp_store.get(CELEBRATED_KEY) is None

    def test_flag_kept_when_reset_disabled(self, temp_store):
        temp_store.set(CELEBRATED_KEY, "true")
        session = JournalSession(temp_store, config=JournalConfig(reset_below_goal=False))

        session.add_entry(payout(100))

        assert session.goal_state is GoalState.CELEBRATED
        assert temp_store.get(CELEBRATED_KEY) == "true"

    def test_trades_never_reach_goal(self, temp_store):
        session = JournalSession(temp_store)

        assert not session.add_entry(trade(50000)).celebrate


class TestCoachAnalysis:
    """
    **Feature: prop-journal, Property 14: Coach Is Optional**

    The journal works identically with a missing or failing coach.
    """

    def test_coach_receives_full_collection_and_fresh_stats(self, temp_store):
        coach = FakeCoach()
        session = JournalSession(temp_store, coach=coach)

        session.add_entry(trade(100, "2024-01-01"))
        update = session.add_entry(trade(200, "2024-01-02"))

        entries, stats = coach.calls[-1]
        assert len(entries) == 2
        assert stats.cumulative_pnl == 300
        assert update.analysis == coach.result

    def test_analysis_persisted(self, temp_store):
        coach = FakeCoach(result=_analysis("Patience"))
        JournalSession(temp_store, coach=coach).add_entry(trade(100))

        reopened = JournalSession(temp_store)

        assert reopened.analysis is not None
        assert reopened.analysis.next_focus == "Patience"

    def test_failure_keeps_previous_analysis(self, temp_store):
        coach = FakeCoach(result=_analysis("First"))
        session = JournalSession(temp_store, coach=coach)
        session.add_entry(trade(100))

        coach.error = RuntimeError("network down")
        update = session.add_entry(trade(50))

        assert update.analysis.next_focus == "First"
        assert update.stats.cumulative_pnl == 150

    def test_malformed_response_is_recovered(self, temp_store):
        coach = FakeCoach(error=ValueError("Malformed coach response"))
        session = JournalSession(temp_store, coach=coach)

        update = session.add_entry(trade(100))

        assert update.analysis is None
        assert len(update.entries) == 1

    def test_fallback_only_for_first_entry(self, temp_store):
        session = JournalSession(temp_store)

        first = session.add_entry(trade(100))
        assert first.analysis == FALLBACK_ANALYSIS

        temp_store.remove(ANALYSIS_KEY)
        second = JournalSession(temp_store).add_entry(trade(100))
        assert second.analysis is None

    def test_unavailable_coach_is_not_called(self, temp_store):
        coach = FakeCoach(available=False)
        session = JournalSession(temp_store, coach=coach)

        update = session.add_entry(trade(100))

        assert coach.calls == []
        assert update.analysis == FALLBACK_ANALYSIS

    def test_existing_analysis_not_replaced_by_fallback(self, temp_store):
        temp_store.set(ANALYSIS_KEY, _analysis("Keep me").model_dump_json(by_alias=True))
        session = JournalSession(temp_store)

        update = session.add_entry(trade(100))

        assert update.analysis.next_focus == "Keep me"

    def test_malformed_persisted_analysis_ignored(self, temp_store):
        temp_store.set(ANALYSIS_KEY, "{broken")

        assert JournalSession(temp_store).analysis is None

    def test_refresh_without_coach(self, temp_store):
        session = JournalSession(temp_store)
        assert session.refresh_analysis() is None

    def test_add_entry_without_analysis(self, temp_store):
        coach = FakeCoach()
        session = JournalSession(temp_store, coach=coach)

        session.add_entry(trade(100), analyze=False)

        assert coach.calls == []
        assert session.analysis is None


def test_entry_dates_preserved(temp_store):
    session = JournalSession(temp_store)
    update = session.add_entry(trade(10, "2023-12-29"))

    assert update.entry.date == date(2023, 12, 29)


class TestReopen:
    """A journal that was saved can always be opened again."""

    def test_overflowing_history(self, temp_store):
        entries = EntryStore(temp_store)
        entries.append(JournalEntry(id="t1", date=date(2024, 1, 1), pnl=100))
        for n in range(2):
            entries.append(JournalEntry(
                id=f"p{n}",
                date=date(2024, 1, 2 + n),
                is_payout=True,
                payout_amount=1e308,
            ))

        session = JournalSession(DataStore(temp_store.db_path))

        assert len(session.entries) == 3
        assert session.stats.projected_days_to_goal is None

    def test_unreadable_database_starts_empty(self, tmp_path: Path):
        db_path = tmp_path / "journal.db"
        db_path.write_bytes(b"\x00garbage" * 512)

        session = JournalSession(DataStore(db_path))
        update = session.add_entry(trade(250))

        assert update.entries == (update.entry,)
        assert DataStore(db_path).get(ENTRIES_KEY) is not None
