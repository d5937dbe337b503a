"""
Unit tests for the routine data model.

Durations are hand-computed from total = sets * length + (sets - 1) * rest.
"""

import pytest

from hiit_cli.core.models import Exercise, InvalidRoutine, Routine, format_duration


def _routine(*exercises: Exercise, reps: int = 1, difficulty: int = 1, name: str = "Test") -> Routine:
    return Routine(name=name, exercises=tuple(exercises), reps=reps, difficulty=difficulty)


class TestFormatDuration:
    """format_duration output shapes."""

    def test_minutes_and_seconds(self):
        assert format_duration(150) == "2m 30s"

    def test_whole_minutes(self):
        assert format_duration(120) == "2m"

    def test_seconds_only(self):
        assert format_duration(45) == "45s"

    def test_zero(self):
        assert format_duration(0) == "0s"


class TestExercise:
    """Exercise validity and timing."""

    def test_total_excludes_rest_after_final_set(self):
        """3 x 30s with 10s rest = 90 + 20."""
        assert Exercise("Squats", sets=3, length=30, rest=10).total_seconds() == 110

    def test_single_set_has_no_rest(self):
        assert Exercise("Plank", sets=1, length=60, rest=30).total_seconds() == 60

    def test_active_seconds(self):
        assert Exercise("Squats", sets=3, length=30, rest=10).active_seconds() == 90

    def test_formatted_total_time(self):
        assert Exercise("Burpees", sets=5, length=30, rest=0).formatted_total_time() == "2m 30s"

    @pytest.mark.parametrize(
        "kwargs",
        [
            dict(name="", sets=1, length=10),
            dict(name="   ", sets=1, length=10),
            dict(name="A", sets=0, length=10),
            dict(name="A", sets=1, length=0),
            dict(name="A", sets=1, length=10, rest=-1),
        ],
    )
    def test_invalid_exercises(self, kwargs):
        assert not Exercise(**kwargs).is_valid()

    def test_zero_rest_is_valid_no_rest(self):
        exercise = Exercise("A", sets=2, length=10, rest=0)
        assert exercise.is_valid()
        assert exercise.is_no_rest

    def test_str(self):
        text = str(Exercise("Squats", sets=2, length=30, rest=10))
        assert text == "Squats: 2 sets x 30s (rest: 10s) - Total: 1m 10s"


class TestRoutine:
    """Routine validation and aggregate timings."""

    def test_single_round_and_total(self):
        """Single round 110 + 40 = 150s; three reps = 450s."""
        routine = _routine(
            Exercise("A", sets=3, length=30, rest=10),
            Exercise("B", sets=2, length=20, rest=0),
            reps=3,
        )
        assert routine.single_round_seconds() == 150
        assert routine.total_seconds() == 450
        assert routine.formatted_total_time() == "7m 30s"

    def test_exercise_counts(self):
        routine = _routine(Exercise("A", 1, 10), Exercise("B", 1, 10), reps=3)
        assert routine.exercises_per_rep() == 2
        assert routine.total_exercises() == 6

    def test_active_time_and_sets_scale_with_reps(self):
        routine = _routine(Exercise("A", 2, 20, rest=10), Exercise("B", 1, 30), reps=2)
        assert routine.total_active_seconds() == (40 + 30) * 2
        assert routine.total_sets() == 6

    def test_no_rest_routine(self):
        assert _routine(Exercise("A", 1, 10), Exercise("B", 2, 10)).is_no_rest_routine()
        assert not _routine(Exercise("A", 1, 10), Exercise("B", 2, 10, rest=5)).is_no_rest_routine()

    def test_valid_routine(self):
        routine = _routine(Exercise("A", 1, 10), difficulty=5, reps=2)
        routine.validate()
        assert routine.is_valid()

    def test_empty_routine_invalid(self):
        with pytest.raises(InvalidRoutine, match="no exercises"):
            _routine().validate()

    def test_blank_name_invalid(self):
        with pytest.raises(InvalidRoutine, match="name"):
            _routine(Exercise("A", 1, 10), name=" ").validate()

    def test_invalid_exercise_is_named(self):
        routine = _routine(Exercise("A", 1, 10), Exercise("B", 0, 10))
        with pytest.raises(InvalidRoutine, match="exercise 2"):
            routine.validate()

    @pytest.mark.parametrize("difficulty", [0, 6])
    def test_difficulty_out_of_range(self, difficulty):
        assert not _routine(Exercise("A", 1, 10), difficulty=difficulty).is_valid()

    def test_zero_reps_invalid(self):
        assert not _routine(Exercise("A", 1, 10), reps=0).is_valid()

    def test_invalid_error_is_value_error(self):
        with pytest.raises(ValueError):
            _routine().validate()


class TestNextExercise:
    """next_exercise_name walks exercises, then wraps into the next rep."""

    def test_next_in_same_rep(self):
        routine = _routine(Exercise("A", 1, 10), Exercise("B", 1, 10), reps=2)
        assert routine.next_exercise_name(1, 1) == "B"

    def test_wraps_to_first_of_next_rep(self):
        routine = _routine(Exercise("A", 1, 10), Exercise("B", 1, 10), reps=2)
        assert routine.next_exercise_name(2, 1) == "A"

    def test_none_after_final_exercise(self):
        routine = _routine(Exercise("A", 1, 10), Exercise("B", 1, 10), reps=2)
        assert routine.next_exercise_name(2, 2) is None
