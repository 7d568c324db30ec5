"""Tests for daily card scoring and the upsert discipline."""

from __future__ import annotations

import pytest

from habitflow.infra.repositories.habit import SQLModelDailyCardRepository
from habitflow.services.habits import (
    build_card,
    completion_percentage,
    create_habit,
    find_card,
    parse_sleep_hours,
    upsert_daily_card,
)
from tests.conftest import make_card


@pytest.fixture
def three_habits():
    return [create_habit("Read"), create_habit("Walk"), create_habit("Pray", "spiritual")]


class TestBuildCard:
    def test_two_of_three_rounds_to_67(self, three_habits):
        h1, h2, h3 = three_habits
        card = build_card("2024-01-15", three_habits, {h1.id: True, h2.id: True, h3.id: False}, "7", "")

        assert card.completed_habits == 2
        assert card.total_habits == 3
        assert card.completion_pct == 67

    def test_zero_habits_is_zero_percent(self):
        card = build_card("2024-01-15", [], {}, 8, "rest day")

        assert card.completion_pct == 0
        assert card.total_habits == 0
        assert card.completed_habits == 0
        assert card.habit_checks == {}

    def test_missing_checks_count_as_unchecked(self, three_habits):
        h1 = three_habits[0]
        card = build_card("2024-01-15", three_habits, {h1.id: True}, None, "")

        assert card.completed_habits == 1
        assert card.completion_pct == 33
        assert card.habit_checks == {h.id: h is h1 for h in three_habits}

    def test_checks_for_unknown_habits_are_dropped(self, three_habits):
        card = build_card("2024-01-15", three_habits, {"deleted-habit": True}, None, "")

        assert card.completed_habits == 0
        assert "deleted-habit" not in card.habit_checks

    def test_all_checked_is_hundred(self, three_habits):
        checks = {h.id: True for h in three_habits}
        card = build_card("2024-01-15", three_habits, checks, "6.5", "good day", user_id="tester")

        assert card.completion_pct == 100
        assert card.sleep_hours == 6.5
        assert card.notes == "good day"
        assert card.user_id == "tester"
        assert card.date == "2024-01-15"

    def test_invalid_date_key_rejected(self, three_habits):
        with pytest.raises(ValueError):
            build_card("15/01/2024", three_habits, {}, None, "")

    def test_week_date_key_rejected(self, three_habits):
        # Same day as 2024-01-15; accepting it would allow two cards for one date.
        with pytest.raises(ValueError, match="Invalid date key"):
            build_card("2024-W03-1", three_habits, {}, None, "")


class TestCompletionPercentage:
    @pytest.mark.parametrize(
        ("completed", "total", "expected"),
        [(0, 0, 0), (0, 4, 0), (1, 2, 50), (1, 3, 33), (2, 3, 67), (1, 8, 13), (5, 5, 100)],
    )
    def test_rounds_half_up(self, completed, total, expected):
        assert completion_percentage(completed, total) == expected


class TestParseSleepHours:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("7.5", 7.5),
            ("8", 8.0),
            (6, 6.0),
            (6.25, 6.25),
            ("7.5h", 7.5),
            (" 9 ", 9.0),
            ("", 0.0),
            (None, 0.0),
            ("abc", 0.0),
            ("-3", 0.0),
            ("nan", 0.0),
            (float("inf"), 0.0),
            (True, 0.0),
            (10**400, 0.0),
        ],
    )
    def test_coerces_without_raising(self, raw, expected):
        assert parse_sleep_hours(raw) == expected


class TestUpsertDailyCard:
    def test_same_date_twice_keeps_second(self):
        history = [make_card("2024-01-14", 50)]
        history = upsert_daily_card(history, make_card("2024-01-15", 40, notes="first"))
        history = upsert_daily_card(history, make_card("2024-01-15", 90, notes="second"))

        same_day = [c for c in history if c.date == "2024-01-15"]
        assert len(same_day) == 1
        assert same_day[0].notes == "second"
        assert same_day[0].completion_pct == 90
        assert len(history) == 2

    def test_result_sorted_newest_first(self):
        history = [make_card("2024-01-10", 10), make_card("2024-01-12", 10)]
        history = upsert_daily_card(history, make_card("2024-01-11", 10))

        assert [c.date for c in history] == ["2024-01-12", "2024-01-11", "2024-01-10"]

    def test_input_history_not_mutated(self):
        history = [make_card("2024-01-10", 10)]
        upsert_daily_card(history, make_card("2024-01-10", 99))

        assert len(history) == 1
        assert history[0].completion_pct == 10

    def test_find_card(self):
        history = [make_card("2024-01-10", 10), make_card("2024-01-11", 20)]

        assert find_card(history, "2024-01-11").completion_pct == 20
        assert find_card(history, "2024-01-12") is None


class TestRepositoryUpsert:
    def test_upsert_creates_card(self, session_factory, user):
        repo = SQLModelDailyCardRepository(session_factory)
        saved = repo.upsert_card(make_card("2024-01-15", 50, user_id=""), user_id=user.username)

        assert saved.user_id == user.username
        assert repo.get("2024-01-15", user_id=user.username).completion_pct == 50

    def test_upsert_replaces_same_date(self, session_factory, user, habit_factory):
        habit = habit_factory(name="Read")
        repo = SQLModelDailyCardRepository(session_factory)
        first = build_card("2024-01-15", [habit], {}, "5", "draft")
        second = build_card("2024-01-15", [habit], {habit.id: True}, "7.5", "final")

        repo.upsert_card(first, user_id=user.username)
        repo.upsert_card(second, user_id=user.username)

        cards = repo.list_all(user_id=user.username)
        assert len(cards) == 1
        assert cards[0].notes == "final"
        assert cards[0].completion_pct == 100
        assert cards[0].habit_checks == {habit.id: True}
        assert cards[0].sleep_hours == 7.5

    def test_list_all_newest_first(self, session_factory, user, card_factory):
        for key in ("2024-01-02", "2024-01-05", "2024-01-03"):
            card_factory(key, 10)
        repo = SQLModelDailyCardRepository(session_factory)

        assert [c.date for c in repo.list_all(user_id=user.username)] == [
            "2024-01-05",
            "2024-01-03",
            "2024-01-02",
        ]

    def test_delete_card(self, session_factory, user, card_factory):
        card_factory("2024-01-02", 10)
        repo = SQLModelDailyCardRepository(session_factory)

        assert repo.delete("2024-01-02", user_id=user.username) is True
        assert repo.delete("2024-01-02", user_id=user.username) is False
        assert repo.get("2024-01-02", user_id=user.username) is None
