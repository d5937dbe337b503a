"""
Workout execution engine for hiit-cli.

``WorkoutEngine.execute`` runs a routine against an event sink;
``preview_routine`` reports on one without running any timer.
"""

from .events import (
    CompletionSummary,
    EventKind,
    EventSink,
    ExecutionProgress,
    Outcome,
    Phase,
    ProgressEvent,
)
from .preview import ExercisePreviewRow, RoutinePreview, preview_routine
from .runner import MessageSource, WorkoutEngine
from .timer import CancellationToken, CountdownTimer, interruptible_sleep

__all__ = [
    "CancellationToken",
    "CompletionSummary",
    "CountdownTimer",
    "EventKind",
    "EventSink",
    "ExecutionProgress",
    "ExercisePreviewRow",
    "MessageSource",
    "Outcome",
    "Phase",
    "ProgressEvent",
    "RoutinePreview",
    "WorkoutEngine",
    "interruptible_sleep",
    "preview_routine",
]
