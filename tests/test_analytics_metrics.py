"""
Unit tests for analytics metric computations

Tests cover:
- Event dataframe preparation and windows
- Basic stats (accuracy, quality, streaks)
- Daily trends
- Memory distribution and learning efficiency
"""

from datetime import date, timedelta

import pytest

from srs_core.analytics.metrics import (
    compute_basic_stats,
    compute_current_streak,
    compute_learning_efficiency,
    compute_longest_streak,
    compute_memory_distribution,
    compute_quality_distribution,
    compute_trends,
)
from srs_core.analytics.queries import build_day_keys, load_review_events_df, window_bounds
from srs_core.scheduling import LearningState
from tests.conftest import NOW, build_card, build_review


class TestQueries:

    def test_window_starts_at_midnight(self):
        start, end = window_bounds(NOW, 30)

        assert start == NOW.replace(day=1, hour=0)
        assert end == NOW

    def test_day_keys(self):
        keys = build_day_keys(NOW, 30)

        assert len(keys) == 30
        assert keys[0] == "2024-03-01"
        assert keys[-1] == "2024-03-30"

    def test_events_sorted_and_clean(self):
        reviews = [
            build_review("b", NOW, quality=2, response_time=-10),
            build_review("a", NOW, quality=4),
            build_review("c", NOW - timedelta(days=1), quality=5),
        ]

        df = load_review_events_df(reviews)

        assert list(df["card_id"]) == ["c", "a", "b"]
        assert list(df["correct"]) == [True, True, False]
        assert df["response_time"].min() == 0.0

    def test_empty_events(self):
        df = load_review_events_df([])
        assert df.empty
        assert "quality" in df.columns


class TestStreaks:

    def test_current_streak_ending_today(self):
        today = date(2024, 3, 30)
        days = [date(2024, 3, 28), date(2024, 3, 29), today]
        assert compute_current_streak(days, today) == 3

    def test_current_streak_may_end_yesterday(self):
        today = date(2024, 3, 30)
        days = [date(2024, 3, 28), date(2024, 3, 29)]
        assert compute_current_streak(days, today) == 2

    def test_current_streak_broken(self):
        today = date(2024, 3, 30)
        assert compute_current_streak([date(2024, 3, 27)], today) == 0

    def test_longest_streak(self):
        days = [date(2024, 3, d) for d in (1, 2, 3, 10, 11, 20)]
        assert compute_longest_streak(days) == 3

    def test_longest_streak_empty(self):
        assert compute_longest_streak([]) == 0


class TestBasicStats:

    def test_all_correct(self):
        reviews = [build_review(quality=q, reviewed_at=NOW - timedelta(hours=h)) for q, h in [(3, 1), (4, 2), (5, 3)]]
        df = load_review_events_df(reviews)

        stats = compute_basic_stats([build_card()], df, NOW)

        assert stats.accuracy == 1.0
        assert stats.average_quality == 4.0
        assert stats.total_reviews == 3

    def test_all_incorrect(self):
        reviews = [build_review(quality=q, reviewed_at=NOW - timedelta(hours=h)) for q, h in [(0, 1), (2, 2)]]
        df = load_review_events_df(reviews)

        stats = compute_basic_stats([build_card()], df, NOW)

        assert stats.accuracy == 0.0
        assert stats.current_streak == 0

    def test_state_counts(self):
        cards = [
            build_card("a"),
            build_card("b", state=LearningState.LEARNING),
            build_card("c", state=LearningState.RELEARNING),
            build_card("d", state=LearningState.REVIEW),
        ]

        stats = compute_basic_stats(cards, load_review_events_df([]), NOW)

        assert stats.state_distribution == {"NEW": 1, "LEARNING": 1, "REVIEW": 1, "RELEARNING": 1}
        assert stats.new_cards == 1
        assert stats.learning_cards == 2
        assert stats.mastered_cards == 1

    def test_quality_buckets(self):
        df = load_review_events_df([
            build_review(quality=3.5),
            build_review(quality=3),
            build_review(quality=5),
        ])
        assert compute_quality_distribution(df) == {3: 2, 5: 1}

    def test_response_time_ignores_unmeasured(self):
        df = load_review_events_df([
            build_review(response_time=0),
            build_review(response_time=2000),
            build_review(response_time=4000),
        ])

        stats = compute_basic_stats([], df, NOW)

        assert stats.avg_response_time == 3000.0


class TestTrends:

    def test_reviews_on_two_days(self):
        keys = build_day_keys(NOW, 30)
        df = load_review_events_df([
            build_review(reviewed_at=NOW.replace(day=1, hour=9), quality=4),
            build_review(reviewed_at=NOW.replace(day=15, hour=9), quality=2),
            build_review(reviewed_at=NOW.replace(day=15, hour=18), quality=5),
        ])

        trends = compute_trends(df, keys)

        assert len(trends) == 30
        active = [point for point in trends if point.reviews > 0]
        assert [p.date for p in active] == ["2024-03-01", "2024-03-15"]
        assert trends[14].reviews == 2
        assert trends[14].accuracy == 0.5
        assert trends[14].quality == 3.5

    def test_empty_trends(self):
        trends = compute_trends(load_review_events_df([]), build_day_keys(NOW, 7))

        assert len(trends) == 7
        assert all(point.reviews == 0 for point in trends)


class TestMemoryDistribution:

    def test_buckets(self):
        cards = [
            build_card("critical", strength=0.1, last_reviewed=NOW),
            build_card("weak", strength=0.3, last_reviewed=NOW),
            build_card("good", strength=0.5),
            build_card("strong", strength=0.9, last_reviewed=NOW),
            build_card("suspended", strength=0.9, last_reviewed=NOW, suspended=True),
        ]

        distribution = compute_memory_distribution(cards, NOW)

        assert (distribution.critical, distribution.weak, distribution.good, distribution.strong) == (1, 1, 1, 1)


class TestLearningEfficiency:

    def test_efficiency(self):
        cards = [
            build_card("a", graduated=True, review_count=4, lapses=1),
            build_card("b", graduated=True, review_count=6),
            build_card("c"),
        ]
        df = load_review_events_df([
            build_review(reviewed_at=NOW - timedelta(minutes=i), response_time=6000) for i in range(10)
        ])

        efficiency = compute_learning_efficiency(cards, df)

        assert efficiency.avg_reviews_to_mastery == 5.0
        assert efficiency.lapse_rate == 0.5
        assert efficiency.answers_per_minute == 10.0
        assert efficiency.total_study_time_ms == 60000.0
        assert efficiency.mastery_rate == pytest.approx(120.0)

    def test_no_reviews(self):
        efficiency = compute_learning_efficiency([build_card()], load_review_events_df([]))

        assert efficiency.mastery_rate == 0.0
        assert efficiency.answers_per_minute == 0.0
        assert efficiency.lapse_rate == 0.0
