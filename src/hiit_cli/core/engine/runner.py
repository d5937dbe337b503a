"""
Workout execution engine.

Walks a routine rep -> exercise -> set -> rest, running the countdown
timer for every active and rest interval and emitting progress events
at each phase transition.

Rest policy between exercises (not applied after the final exercise of
the final rep), in order of precedence:

1. No-rest routine (every exercise has rest == 0): fixed short transition.
2. The finished exercise has rest > 0: a full rest countdown.
3. Otherwise: a fixed preparation pause.

The no-rest-routine check wins over the exercise's own rest value.

Cancellation is polled at the top of every rep, exercise and set, and
before every timer tick, so a stop request takes effect within one
second.  Every step reports "still running?" as a bool; nothing is
raised for cancellation.
"""

import random
from dataclasses import dataclass, field
from typing import Callable, Sequence

from ..config import CompletionMessages, EngineTimings
from ..models import Exercise, Routine
from .events import (
    CompletionSummary,
    EventKind,
    EventSink,
    ExecutionProgress,
    Outcome,
    Phase,
    ProgressEvent,
)
from .timer import CancellationToken, CountdownTimer, Sleeper, interruptible_sleep

REST_LABEL = "Rest"
GET_READY_LABEL = "Get ready"


@dataclass
class MessageSource:
    """
    Supplies the completion message for a finished routine.

    ``choose`` picks one template from a list; inject a deterministic
    chooser to make output reproducible.
    """

    regular: Sequence[str] = field(default_factory=lambda: CompletionMessages().regular)
    no_rest: Sequence[str] = field(default_factory=lambda: CompletionMessages().no_rest)
    choose: Callable[[Sequence[str]], str] = random.choice

    @classmethod
    def from_messages(
        cls,
        messages: CompletionMessages,
        choose: Callable[[Sequence[str]], str] = random.choice,
    ) -> "MessageSource":
        return cls(regular=messages.regular, no_rest=messages.no_rest, choose=choose)

    def completion_message(self, no_rest: bool) -> str:
        pool = self.no_rest if no_rest else self.regular
        if not pool:
            return ""
        return self.choose(pool)


def active_label(exercise: Exercise) -> str:
    return f"GO! {exercise.name}"


class WorkoutEngine:
    """
    Executes routines against an event sink.

    One engine may run many routines, one at a time; all per-run state
    lives in the ``ExecutionProgress`` created by ``execute``.
    """

    def __init__(
        self,
        sink: EventSink,
        *,
        sleep: Sleeper = interruptible_sleep,
        timings: EngineTimings | None = None,
        messages: MessageSource | None = None,
    ):
        self.sink = sink
        self.sleep = sleep
        self.timings = timings or EngineTimings()
        self.messages = messages or MessageSource()
        self.timer = CountdownTimer(sink, sleep)

    # ----- Public API -----

    def execute(self, routine: Routine, token: CancellationToken) -> Outcome:
        """
        Run ``routine`` to completion or until ``token`` is cancelled.

        Raises:
            InvalidRoutine: before any event is emitted, if the routine is invalid
        """
        routine.validate()

        progress = ExecutionProgress(
            total_reps=routine.reps,
            exercises_per_rep=routine.exercises_per_rep(),
        )
        no_rest_routine = routine.is_no_rest_routine()

        self._emit(EventKind.ROUTINE_START, progress, label=routine.name)

        if self._run(routine, progress, token, no_rest_routine):
            return self._finish(routine, progress, no_rest_routine)

        progress.phase = Phase.CANCELLED
        self._emit(EventKind.ROUTINE_CANCELLED, progress, label=routine.name)
        return Outcome.CANCELLED

    # ----- Sequencing -----

    def _run(
        self,
        routine: Routine,
        progress: ExecutionProgress,
        token: CancellationToken,
        no_rest_routine: bool,
    ) -> bool:
        if self.timings.start_countdown > 0:
            if not self.timer.run(
                GET_READY_LABEL,
                self.timings.start_countdown,
                token,
                phase=Phase.PREPARING,
                emphasize_final=True,
                progress=progress,
            ):
                return False

        total = routine.exercises_per_rep()

        for rep in range(1, routine.reps + 1):
            if token.cancelled:
                return False

            progress.rep = rep
            progress.exercise_index = 0
            progress.set_index = 0

            if routine.reps > 1:
                self._emit(EventKind.REP_START, progress, label=f"Rep {rep} of {routine.reps}")
                if rep > 1 and not self._pause(
                    self.timings.inter_rep_prepare,
                    Phase.PREPARING,
                    "Take a moment to prepare for the next round...",
                    progress,
                    token,
                ):
                    return False

            for index, exercise in enumerate(routine.exercises, 1):
                if token.cancelled:
                    return False

                progress.exercise_index = index
                if not self._run_exercise(routine, exercise, progress, token):
                    return False

                last_of_last = index == total and rep == routine.reps
                if not last_of_last and not self._between_exercises(
                    exercise, no_rest_routine, progress, token
                ):
                    return False

            if routine.reps > 1 and rep < routine.reps:
                if token.cancelled:
                    return False
                self._emit(
                    EventKind.REP_COMPLETE,
                    progress,
                    label=f"Rep {rep} complete",
                    message=f"{routine.reps - rep} reps remaining",
                )
                if not self._pause(
                    self.timings.inter_rep_rest,
                    Phase.REST_BETWEEN_REPS,
                    "Rest between reps - catch your breath!",
                    progress,
                    token,
                ):
                    return False

        return not token.cancelled

    def _run_exercise(
        self,
        routine: Routine,
        exercise: Exercise,
        progress: ExecutionProgress,
        token: CancellationToken,
    ) -> bool:
        progress.set_index = 0
        progress.total_sets = exercise.sets
        progress.phase = Phase.ACTIVE
        self._emit(
            EventKind.EXERCISE_START,
            progress,
            label=exercise.name,
            message=exercise.description,
            exercise=exercise,
        )

        for set_number in range(1, exercise.sets + 1):
            if token.cancelled:
                return False

            progress.set_index = set_number
            progress.phase = Phase.ACTIVE
            self._emit(EventKind.SET_READY, progress, label=exercise.name)

            if not self.timer.run(
                active_label(exercise),
                exercise.length,
                token,
                phase=Phase.ACTIVE,
                emphasize_final=True,
                progress=progress,
            ):
                return False
            self._emit(EventKind.SET_COMPLETE, progress, label=exercise.name)

            if set_number < exercise.sets:
                if exercise.rest > 0:
                    if not self.timer.run(
                        REST_LABEL,
                        exercise.rest,
                        token,
                        phase=Phase.RESTING,
                        progress=progress,
                    ):
                        return False
                elif not self._pause(
                    self.timings.no_rest_transition,
                    Phase.RESTING,
                    "No rest! Keep going...",
                    progress,
                    token,
                ):
                    return False

        progress.phase = Phase.ACTIVE
        self._emit(
            EventKind.EXERCISE_COMPLETE,
            progress,
            label=exercise.name,
            next_exercise=routine.next_exercise_name(progress.exercise_index, progress.rep),
        )
        return True

    def _between_exercises(
        self,
        exercise: Exercise,
        no_rest_routine: bool,
        progress: ExecutionProgress,
        token: CancellationToken,
    ) -> bool:
        if token.cancelled:
            return False
        if no_rest_routine:
            return self._pause(
                self.timings.no_rest_transition,
                Phase.REST_BETWEEN_EXERCISES,
                "Moving to next exercise...",
                progress,
                token,
            )
        if exercise.rest > 0:
            return self.timer.run(
                REST_LABEL,
                exercise.rest,
                token,
                phase=Phase.REST_BETWEEN_EXERCISES,
                progress=progress,
            )
        return self._pause(
            self.timings.rest_prepare,
            Phase.REST_BETWEEN_EXERCISES,
            "Preparing for next exercise...",
            progress,
            token,
        )

    def _pause(
        self,
        seconds: int,
        phase: Phase,
        message: str,
        progress: ExecutionProgress,
        token: CancellationToken,
    ) -> bool:
        """Fixed pacing delay: one TRANSITION event, then a cancellable sleep."""
        if token.cancelled:
            return False
        progress.phase = phase
        progress.remaining = seconds
        self._emit(EventKind.TRANSITION, progress, duration=seconds, message=message)
        if seconds <= 0:
            return not token.cancelled
        return self.sleep(seconds, token)

    def _finish(
        self,
        routine: Routine,
        progress: ExecutionProgress,
        no_rest_routine: bool,
    ) -> Outcome:
        progress.phase = Phase.COMPLETE
        progress.remaining = 0
        summary = CompletionSummary(
            routine_name=routine.name,
            total_active_seconds=routine.total_active_seconds(),
            total_sets=routine.total_sets(),
            total_exercises=routine.total_exercises(),
            reps=routine.reps,
            no_rest=no_rest_routine,
            message=self.messages.completion_message(no_rest_routine),
        )
        self._emit(EventKind.ROUTINE_COMPLETE, progress, label=routine.name, summary=summary)
        return Outcome.COMPLETED

    def _emit(
        self,
        kind: EventKind,
        progress: ExecutionProgress,
        *,
        label: str = "",
        duration: int | None = None,
        message: str | None = None,
        exercise: Exercise | None = None,
        next_exercise: str | None = None,
        summary: CompletionSummary | None = None,
    ) -> None:
        self.sink(
            ProgressEvent(
                kind=kind,
                phase=progress.phase,
                label=label,
                remaining=duration,
                duration=duration,
                overall_fraction=progress.overall_fraction,
                progress=progress.snapshot(),
                exercise=exercise,
                next_exercise=next_exercise,
                message=message,
                summary=summary,
            )
        )
