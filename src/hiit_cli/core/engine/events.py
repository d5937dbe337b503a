"""
Progress events emitted by the countdown timer and the workout engine.

The engine never renders anything itself: every phase transition and
every timer tick becomes a ``ProgressEvent`` handed synchronously to an
injected sink (see cli/renderer.py for the console implementation).
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable

from ..models import Exercise


class Phase(str, Enum):
    PREPARING = "preparing"
    ACTIVE = "active"
    RESTING = "resting"
    REST_BETWEEN_EXERCISES = "rest_between_exercises"
    REST_BETWEEN_REPS = "rest_between_reps"
    COMPLETE = "complete"
    CANCELLED = "cancelled"


class EventKind(str, Enum):
    ROUTINE_START = "routine_start"
    REP_START = "rep_start"
    EXERCISE_START = "exercise_start"
    SET_READY = "set_ready"
    TIMER_START = "timer_start"
    TICK = "tick"
    TIMER_COMPLETE = "timer_complete"
    SET_COMPLETE = "set_complete"
    TRANSITION = "transition"  # fixed, non-displayed pause
    EXERCISE_COMPLETE = "exercise_complete"
    REP_COMPLETE = "rep_complete"
    ROUTINE_COMPLETE = "routine_complete"
    ROUTINE_CANCELLED = "routine_cancelled"


class Outcome(str, Enum):
    COMPLETED = "completed"
    CANCELLED = "cancelled"


@dataclass
class ExecutionProgress:
    """
    Position of a running execution within its routine.

    Owned by a single ``WorkoutEngine.execute`` call; events carry frozen
    copies (``snapshot``) so sinks never observe later mutation.
    All indices are 1-based; 0 means "not started yet".
    """

    total_reps: int = 1
    exercises_per_rep: int = 1
    rep: int = 0
    exercise_index: int = 0
    set_index: int = 0
    total_sets: int = 0
    remaining: int = 0
    phase: Phase = Phase.PREPARING

    @property
    def overall_fraction(self) -> float | None:
        """
        Fraction of all exercises (across reps) reached so far.

        Only meaningful when there is more than one exercise to go through.
        """
        if self.total_reps <= 1 and self.exercises_per_rep <= 1:
            return None
        if self.rep < 1 or self.exercise_index < 1:
            return 0.0
        done = (self.rep - 1) * self.exercises_per_rep + self.exercise_index
        return done / (self.exercises_per_rep * self.total_reps)

    @property
    def overall_position(self) -> tuple[int, int]:
        """(current exercise number, total exercises) across all reps."""
        current = max(0, self.rep - 1) * self.exercises_per_rep + self.exercise_index
        return current, self.exercises_per_rep * self.total_reps

    def snapshot(self) -> "ExecutionProgress":
        return replace(self)


@dataclass(frozen=True)
class CompletionSummary:
    """Statistics reported once a routine finishes."""

    routine_name: str
    total_active_seconds: int
    total_sets: int
    total_exercises: int
    reps: int
    no_rest: bool
    message: str = ""


@dataclass(frozen=True)
class ProgressEvent:
    """
    One notification from the engine or timer.

    ``remaining`` / ``duration`` / ``elapsed_fraction`` are set on timer
    events; ``emphasis`` is "urgent" or "warning" during the final seconds
    of an emphasized countdown.
    """

    kind: EventKind
    phase: Phase
    label: str = ""
    remaining: int | None = None
    duration: int | None = None
    elapsed_fraction: float | None = None
    emphasis: str | None = None
    overall_fraction: float | None = None
    progress: ExecutionProgress | None = None
    exercise: Exercise | None = None
    next_exercise: str | None = None
    message: str | None = None
    summary: CompletionSummary | None = None


EventSink = Callable[[ProgressEvent], None]
