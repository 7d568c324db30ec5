"""Tests for streak calculations.

Covers:
- Empty history
- Runs anchored at today
- Gaps and 0% days breaking the run
- Cards supplied in any order
- Duplicate dates (caller contract violation)
- Longest streak across history
- Repository-backed streaks
"""

from __future__ import annotations

from datetime import date, timedelta

from habitflow.infra.repositories.habit import SQLModelDailyCardRepository
from habitflow.services.habits import compute_longest_streak, compute_streak
from tests.conftest import make_card

TODAY = date(2024, 3, 10)


def _day(offset: int) -> date:
    return TODAY - timedelta(days=offset)


class TestCurrentStreak:
    """Tests for the run of days ending today."""

    def test_no_cards_returns_zero(self):
        assert compute_streak([], today=TODAY) == 0

    def test_single_card_today_returns_one(self):
        assert compute_streak([make_card(TODAY, 40)], today=TODAY) == 1

    def test_three_consecutive_days_returns_three(self):
        cards = [make_card(_day(0), 100), make_card(_day(1), 20), make_card(_day(2), 75)]
        assert compute_streak(cards, today=TODAY) == 3

    def test_missing_today_returns_zero(self):
        """A long run ending yesterday does not count until today is carded."""
        cards = [make_card(_day(i), 100) for i in range(1, 8)]
        assert compute_streak(cards, today=TODAY) == 0

    def test_gap_stops_the_walk(self):
        cards = [make_card(_day(0), 50), make_card(_day(2), 80)]
        assert compute_streak(cards, today=TODAY) == 1

    def test_zero_percent_today_returns_zero(self):
        cards = [make_card(_day(0), 0), make_card(_day(1), 100)]
        assert compute_streak(cards, today=TODAY) == 0

    def test_zero_percent_day_breaks_run(self):
        cards = [make_card(_day(0), 100), make_card(_day(1), 0), make_card(_day(2), 100)]
        assert compute_streak(cards, today=TODAY) == 1

    def test_partial_completion_still_counts(self):
        cards = [make_card(_day(i), 1) for i in range(4)]
        assert compute_streak(cards, today=TODAY) == 4

    def test_order_of_input_is_irrelevant(self):
        cards = [make_card(_day(2), 10), make_card(_day(0), 10), make_card(_day(1), 10)]
        assert compute_streak(cards, today=TODAY) == 3

    def test_input_list_is_not_reordered(self):
        cards = [make_card(_day(2), 10), make_card(_day(0), 10)]
        original = [c.date for c in cards]
        compute_streak(cards, today=TODAY)
        assert [c.date for c in cards] == original

    def test_today_accepts_date_key(self):
        cards = [make_card(_day(0), 10), make_card(_day(1), 10)]
        assert compute_streak(cards, today="2024-03-10") == 2

    def test_run_crosses_month_boundary(self):
        anchor = date(2024, 3, 1)
        cards = [make_card("2024-03-01", 50), make_card("2024-02-29", 50), make_card("2024-02-28", 50)]
        assert compute_streak(cards, today=anchor) == 3

    def test_future_card_blocks_streak(self):
        """A card dated after today occupies the first slot and ends the walk."""
        cards = [make_card(TODAY + timedelta(days=1), 100), make_card(_day(0), 100)]
        assert compute_streak(cards, today=TODAY) == 0

    def test_duplicate_dates_stop_the_walk(self):
        """Duplicates are not merged; the second copy ends the run."""
        cards = [make_card(_day(0), 100), make_card(_day(0), 100), make_card(_day(1), 100)]
        assert compute_streak(cards, today=TODAY) == 1

    def test_defaults_to_current_day(self, run_of_days):
        cards = [make_card(key, 60) for key in run_of_days(date.today(), 5)]
        assert compute_streak(cards) == 5


class TestLongestStreak:
    """Tests for the longest historical run."""

    def test_no_cards_returns_zero(self):
        assert compute_longest_streak([]) == 0

    def test_single_card_returns_one(self):
        assert compute_longest_streak([make_card(TODAY, 10)]) == 1

    def test_multiple_runs_returns_longest(self):
        start1, start2, start3 = date(2024, 1, 1), date(2024, 1, 10), date(2024, 1, 20)
        cards = [make_card(start1 + timedelta(days=i), 100) for i in range(3)]
        cards += [make_card(start2 + timedelta(days=i), 100) for i in range(7)]
        cards += [make_card(start3 + timedelta(days=i), 100) for i in range(4)]
        assert compute_longest_streak(cards) == 7

    def test_zero_percent_days_split_runs(self):
        start = date(2024, 1, 1)
        cards = [make_card(start + timedelta(days=i), 0 if i == 2 else 100) for i in range(5)]
        assert compute_longest_streak(cards) == 2

    def test_longest_ignores_today_anchor(self):
        """A past run counts even when today has no card."""
        cards = [make_card(date(2023, 6, d), 30) for d in range(1, 11)]
        assert compute_longest_streak(cards) == 10

    def test_duplicate_dates_count_once(self):
        cards = [make_card(_day(0), 100), make_card(_day(0), 50), make_card(_day(1), 100)]
        assert compute_longest_streak(cards) == 2


class TestRepositoryStreaks:
    """Streaks read through the SQLModel daily card repository."""

    def test_no_cards_returns_zero(self, session_factory, user):
        repo = SQLModelDailyCardRepository(session_factory)
        assert repo.get_current_streak(user_id=user.username) == 0
        assert repo.get_longest_streak(user_id=user.username) == 0

    def test_consecutive_days_ending_today(self, session_factory, user, card_factory, run_of_days):
        for key in run_of_days(date.today(), 6):
            card_factory(key, 50)
        repo = SQLModelDailyCardRepository(session_factory)
        assert repo.get_current_streak(user_id=user.username) == 6
        assert repo.get_longest_streak(user_id=user.username) == 6

    def test_explicit_today(self, session_factory, user, card_factory):
        card_factory(_day(0), 100)
        card_factory(_day(1), 100)
        card_factory(_day(3), 100)
        repo = SQLModelDailyCardRepository(session_factory)
        assert repo.get_current_streak(user_id=user.username, today=TODAY) == 2

    def test_streak_scoped_to_user(self, session_factory, user, card_factory, db_session):
        from habitflow.models import User

        other = User(username="other", display_name="Other")
        db_session.add(other)
        db_session.commit()
        card_factory(_day(0), 100, owner=other)
        card_factory(_day(1), 100, owner=other)

        repo = SQLModelDailyCardRepository(session_factory)
        assert repo.get_current_streak(user_id=user.username, today=TODAY) == 0
        assert repo.get_current_streak(user_id="other", today=TODAY) == 2
