"""
Routine preview: the numbers a user sees before starting a workout.

Pure functions of the routine; no timer runs and nothing is mutated.
"""

from dataclasses import dataclass

from ..models import Routine, format_duration


@dataclass(frozen=True)
class ExercisePreviewRow:
    name: str
    sets: int
    length: int
    rest: int
    total_seconds: int

    @property
    def formatted_total(self) -> str:
        return format_duration(self.total_seconds)


@dataclass(frozen=True)
class RoutinePreview:
    """Per-exercise table plus routine-level totals."""

    name: str
    description: str | None
    rows: tuple[ExercisePreviewRow, ...]
    single_round_seconds: int
    total_seconds: int
    reps: int
    exercises_per_rep: int
    total_exercises: int
    no_rest: bool

    def summary_lines(self) -> list[str]:
        """
        Plain-text summary lines.

        Single-round time always; total routine time (with the rep count
        when reps > 1) and total exercise count only for multi-rep routines.
        """
        lines = [f"Single Round Time: {format_duration(self.single_round_seconds)}"]
        if self.reps > 1:
            lines.append(
                f"Total Routine Time: {format_duration(self.total_seconds)} ({self.reps} reps)"
            )
            lines.append(
                f"Total Exercises: {self.total_exercises} ({self.exercises_per_rep} per rep)"
            )
        else:
            lines.append(f"Total Routine Time: {format_duration(self.total_seconds)}")
        return lines

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "description": self.description,
            "exercises": [
                {
                    "name": r.name,
                    "sets": r.sets,
                    "length": r.length,
                    "rest": r.rest,
                    "total_seconds": r.total_seconds,
                }
                for r in self.rows
            ],
            "single_round_seconds": self.single_round_seconds,
            "total_seconds": self.total_seconds,
            "reps": self.reps,
            "exercises_per_rep": self.exercises_per_rep,
            "total_exercises": self.total_exercises,
            "no_rest": self.no_rest,
        }


def preview_routine(routine: Routine) -> RoutinePreview:
    """
    Build the preview report for a routine.

    Raises:
        InvalidRoutine: if the routine fails validation
    """
    routine.validate()
    rows = tuple(
        ExercisePreviewRow(
            name=e.name,
            sets=e.sets,
            length=e.length,
            rest=e.rest,
            total_seconds=e.total_seconds(),
        )
        for e in routine.exercises
    )
    return RoutinePreview(
        name=routine.name,
        description=routine.description,
        rows=rows,
        single_round_seconds=routine.single_round_seconds(),
        total_seconds=routine.total_seconds(),
        reps=routine.reps,
        exercises_per_rep=routine.exercises_per_rep(),
        total_exercises=routine.total_exercises(),
        no_rest=routine.is_no_rest_routine(),
    )
