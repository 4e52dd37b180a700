"""Tests for the pure scoring rules."""
from datetime import date
from types import SimpleNamespace

import pytest

from skillpath.models import Profile
from skillpath.services.gamification import touch_activity
from skillpath.services.scoring import (
    advance_streak,
    badge_for_module,
    calculate_points_reward,
    classify_skill_level,
    compute_level,
    compute_quiz_score,
    earns_badge,
    effective_points_reward,
    is_passing,
    level_label,
    module_level,
    modules_needed_for_next_level,
    next_level_points,
    progress_percentage,
)

QUESTIONS = [
    {"id": "q1", "question": "2+2?", "options": ["3", "4"], "correct_answer": "4"},
    {"id": "q2", "question": "3+3?", "options": ["6", "7"], "correct_answer": "6"},
    {"id": "q3", "question": "1+1?", "options": ["2", "5"], "correct_answer": "2"},
    {"id": "q4", "question": "0+1?", "options": ["1", "0"], "correct_answer": "1"},
]


class TestPointsReward:
    @pytest.mark.parametrize(
        "duration, difficulty, expected",
        [
            (30, "beginner", 5),
            (45, "intermediate", 10),
            (60, "intermediate", 10),
            (120, "advanced", 25),
            (100, "beginner", 10),
            (0, "advanced", 5),
            (90, "unknown", 10),
        ],
    )
    def test_calculate_points_reward(self, duration, difficulty, expected):
        assert calculate_points_reward(duration, difficulty) == expected

    def test_reward_is_multiple_of_five(self):
        for duration in range(0, 300, 7):
            assert calculate_points_reward(duration, "intermediate") % 5 == 0

    def test_effective_reward_prefers_stored_value(self):
        module = SimpleNamespace(points_reward=40, estimated_duration=30, difficulty="beginner")
        assert effective_points_reward(module) == 40

    def test_effective_reward_computes_when_unset(self):
        module = SimpleNamespace(points_reward=0, estimated_duration=120, difficulty="advanced")
        assert effective_points_reward(module) == 25


class TestQuizScore:
    def test_all_correct(self):
        answers = {"q1": "4", "q2": "6", "q3": "2", "q4": "1"}
        assert compute_quiz_score(QUESTIONS, answers) == 100

    def test_partial_and_missing_answers(self):
        assert compute_quiz_score(QUESTIONS, {"q1": "4", "q2": "7"}) == 25

    def test_empty_quiz_scores_zero(self):
        assert compute_quiz_score([], {"q1": "4"}) == 0

    def test_pass_and_badge_thresholds(self):
        assert is_passing(70, 70)
        assert not is_passing(69.9, 70)
        assert earns_badge(85)
        assert not earns_badge(84.9)


class TestProgressPercentage:
    @pytest.mark.parametrize(
        "correct, total, expected",
        [(0, 3, 0), (1, 3, 33), (2, 3, 66), (3, 3, 100), (5, 3, 100), (0, 0, 0)],
    )
    def test_progress_percentage(self, correct, total, expected):
        assert progress_percentage(correct, total) == expected


class TestLevels:
    @pytest.mark.parametrize("points, level", [(0, 1), (99, 1), (100, 2), (250, 3), (1000, 11)])
    def test_compute_level(self, points, level):
        assert compute_level(points) == level

    @pytest.mark.parametrize(
        "level, label",
        [
            (1, "Beginner Level 1"),
            (3, "Beginner Level 3"),
            (4, "Intermediate Level 1"),
            (6, "Intermediate Level 3"),
            (7, "Advanced Level 1"),
            (10, "Advanced Level 4"),
        ],
    )
    def test_level_label(self, level, label):
        assert level_label(level) == label

    def test_next_level_points(self):
        assert next_level_points(0) == 100
        assert next_level_points(150) == 200


def test_badge_for_module():
    module = SimpleNamespace(difficulty="intermediate", title="Cells")
    assert badge_for_module(module) == {
        "name": "Intermediate Badge",
        "description": "Completed Cells",
        "icon": "star",
    }


@pytest.mark.parametrize("score, level", [(100, "advanced"), (80, "advanced"), (79, "intermediate"), (50, "intermediate"), (10, "beginner")])
def test_classify_skill_level(score, level):
    assert classify_skill_level(score) == level


class TestStreak:
    today = date(2025, 10, 3)

    def test_first_activity_starts_streak(self):
        assert advance_streak(None, 0, self.today) == 1

    def test_same_day_keeps_streak(self):
        assert advance_streak(self.today, 4, self.today) == 4

    def test_consecutive_day_extends(self):
        assert advance_streak(date(2025, 10, 2), 4, self.today) == 5

    def test_gap_restarts(self):
        assert advance_streak(date(2025, 9, 30), 4, self.today) == 1

    def test_touch_activity_updates_profile(self):
        profile = Profile(streak_days=2, last_active_date=date(2025, 10, 2))
        assert touch_activity(profile, today=self.today) == 3
        assert profile.last_active_date == self.today


class TestModuleProgression:
    @pytest.mark.parametrize("completed, level, needed", [(0, 1, 3), (2, 1, 3), (3, 2, 6), (7, 3, 9)])
    def test_module_level(self, completed, level, needed):
        assert module_level(completed) == level
        assert modules_needed_for_next_level(completed) == needed
