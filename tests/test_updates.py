"""
Unit tests for the pure update rules and the learning-state machine.
"""

import pytest

from srs_core.config import SchedulerParams
from srs_core.scheduling.constants import ItemDifficulty, LearningState
from srs_core.scheduling.transitions import is_graduated, next_learning_state
from srs_core.scheduling.updates import (
    classify_response_time,
    success_interval,
    update_ease,
    update_stability,
    update_strength,
)

PARAMS = SchedulerParams()


class TestUpdateStrength:

    def test_success_closes_part_of_gap(self):
        assert update_strength(0.5, 5, True, PARAMS) == pytest.approx(0.8)

    def test_failure_capped(self):
        assert update_strength(0.9, 1, False, PARAMS) == pytest.approx(0.3)

    def test_failure_halves_weak_strength(self):
        assert update_strength(0.2, 0, False, PARAMS) == pytest.approx(0.1)


class TestUpdateEase:

    @pytest.mark.parametrize("difficulty,expected", [
        (ItemDifficulty.EASY, 2.2),
        (ItemDifficulty.MEDIUM, 2.1),
        (ItemDifficulty.HARD, 2.0),
    ])
    def test_failure_penalty_scales_with_difficulty(self, difficulty, expected):
        assert update_ease(2.3, 1, False, difficulty, PARAMS) == pytest.approx(expected)

    def test_quality_three_gives_small_bonus(self):
        assert update_ease(2.5, 3, True, ItemDifficulty.MEDIUM, PARAMS) == pytest.approx(2.5 + 0.1 / 3)

    def test_clipped_to_maximum(self):
        assert update_ease(3.48, 5, True, ItemDifficulty.EASY, PARAMS) == pytest.approx(3.5)


class TestUpdateStability:

    def test_success_grows(self):
        assert update_stability(2.0, 5, True, PARAMS) == pytest.approx(2.3)

    def test_failure_decays_with_floor(self):
        assert update_stability(0.55, 0, False, PARAMS) == pytest.approx(0.5)


class TestClassifyResponseTime:

    @pytest.mark.parametrize("response_time,average,expected", [
        (1000, 4000, "fast"),
        (9000, 4000, "slow"),
        (4000, 4000, None),
        (0, 4000, None),
        (1000, 0, None),
    ])
    def test_classification(self, response_time, average, expected):
        assert classify_response_time(response_time, average) == expected


class TestSuccessInterval:

    def test_at_least_one_day(self):
        assert success_interval(10 / 1440, 2.5, 0, 0, None, PARAMS) == pytest.approx(1.0)

    def test_grows_by_ease(self):
        assert success_interval(4.0, 2.5, 0, 0, None, PARAMS) == pytest.approx(10.0)

    def test_lapse_penalty_is_capped(self):
        # 10 lapses would remove 100%; capped at 50% of the growth
        assert success_interval(4.0, 2.5, 0, 10, None, PARAMS) == pytest.approx(7.0)

    def test_streak_bonus_is_capped(self):
        assert success_interval(4.0, 2.5, 50, 0, None, PARAMS) == pytest.approx(13.0)

    def test_never_below_previous(self):
        assert success_interval(40.0, 1.3, 0, 5, None, PARAMS) >= 40.0


class TestTransitions:

    @pytest.mark.parametrize("state,passed,interval,expected", [
        (LearningState.NEW, True, 1.0, LearningState.LEARNING),
        (LearningState.NEW, False, 0.01, LearningState.LEARNING),
        (LearningState.LEARNING, True, 1.5, LearningState.LEARNING),
        (LearningState.LEARNING, True, 2.5, LearningState.REVIEW),
        (LearningState.LEARNING, False, 0.01, LearningState.RELEARNING),
        (LearningState.REVIEW, True, 30.0, LearningState.REVIEW),
        (LearningState.REVIEW, False, 0.01, LearningState.RELEARNING),
        (LearningState.RELEARNING, True, 1.0, LearningState.REVIEW),
        (LearningState.RELEARNING, False, 0.01, LearningState.RELEARNING),
    ])
    def test_next_learning_state(self, state, passed, interval, expected):
        assert next_learning_state(state, passed, interval, PARAMS) == expected

    def test_graduation_threshold(self):
        assert is_graduated(False, 14.0, PARAMS) is False
        assert is_graduated(False, 14.1, PARAMS) is True

    def test_graduation_is_sticky(self):
        assert is_graduated(True, 0.01, PARAMS) is True
