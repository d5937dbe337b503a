"""
Data models for hiit-cli.

Exercises and routines are loaded whole from JSON files and treated as
read-only afterwards.  Validation is explicit (``is_valid`` / ``validate``)
rather than enforced on construction so that a loaded-but-invalid routine
can still be reported on by name.
"""

from dataclasses import dataclass, field

from .config import MAX_DIFFICULTY, MIN_DIFFICULTY


class InvalidRoutine(ValueError):
    """Raised when a routine fails its validity rules."""


def format_duration(seconds: int) -> str:
    """
    Format a duration in seconds as a compact string.

    Examples: 150 -> "2m 30s", 120 -> "2m", 45 -> "45s".
    """
    minutes, secs = divmod(int(seconds), 60)
    if minutes > 0:
        return f"{minutes}m {secs}s" if secs > 0 else f"{minutes}m"
    return f"{secs}s"


@dataclass(frozen=True)
class Exercise:
    """
    A single timed exercise within a routine.

    ``length`` is the duration of one set in seconds; ``rest`` is the
    pause between sets (0 means no rest at all).
    """

    name: str
    sets: int
    length: int
    rest: int = 0
    description: str | None = None

    def is_valid(self) -> bool:
        """Return True if name is non-blank, sets/length positive and rest non-negative."""
        return bool(self.name and self.name.strip()) and self.sets > 0 and self.length > 0 and self.rest >= 0

    @property
    def is_no_rest(self) -> bool:
        return self.rest == 0

    def total_seconds(self) -> int:
        """
        Total time for all sets including rest.

        No rest is charged after the final set:
            total = sets * length + (sets - 1) * rest
        """
        return self.sets * self.length + max(0, self.sets - 1) * self.rest

    def active_seconds(self) -> int:
        """Time spent working, excluding rest."""
        return self.sets * self.length

    def formatted_total_time(self) -> str:
        return format_duration(self.total_seconds())

    def __str__(self) -> str:
        return (
            f"{self.name}: {self.sets} sets x {self.length}s "
            f"(rest: {self.rest}s) - Total: {self.formatted_total_time()}"
        )


@dataclass(frozen=True)
class Routine:
    """
    An ordered collection of exercises, optionally repeated ``reps`` times.

    One rep is a full pass through every exercise.
    """

    name: str
    exercises: tuple[Exercise, ...] = ()
    description: str | None = None
    difficulty: int = 1  # 1 (beginner) .. 5 (expert)
    reps: int = 1
    tags: tuple[str, ...] = field(default_factory=tuple)

    def validate(self) -> None:
        """
        Check the routine's validity rules.

        Raises:
            InvalidRoutine: naming the first rule that is violated
        """
        if not self.name or not self.name.strip():
            raise InvalidRoutine("Routine name must not be empty")
        if not self.exercises:
            raise InvalidRoutine(f"Routine '{self.name}' has no exercises")
        for i, exercise in enumerate(self.exercises, 1):
            if not exercise.is_valid():
                raise InvalidRoutine(
                    f"Routine '{self.name}': exercise {i} ({exercise.name or 'unnamed'}) is invalid "
                    "(needs a name, sets > 0, length > 0 and rest >= 0)"
                )
        if not MIN_DIFFICULTY <= self.difficulty <= MAX_DIFFICULTY:
            raise InvalidRoutine(
                f"Routine '{self.name}': difficulty must be between {MIN_DIFFICULTY} and {MAX_DIFFICULTY}, got {self.difficulty}"
            )
        if self.reps < 1:
            raise InvalidRoutine(f"Routine '{self.name}': reps must be at least 1, got {self.reps}")

    def is_valid(self) -> bool:
        try:
            self.validate()
        except InvalidRoutine:
            return False
        return True

    def exercises_per_rep(self) -> int:
        return len(self.exercises)

    def total_exercises(self) -> int:
        """Number of exercises across all reps."""
        return len(self.exercises) * self.reps

    def single_round_seconds(self) -> int:
        """Duration of one rep (one pass through every exercise)."""
        return sum(e.total_seconds() for e in self.exercises)

    def total_seconds(self) -> int:
        """Duration of the whole routine: single round x reps."""
        return self.single_round_seconds() * self.reps

    def formatted_total_time(self) -> str:
        return format_duration(self.total_seconds())

    def total_active_seconds(self) -> int:
        """Pure working time across all reps, rest excluded."""
        return sum(e.active_seconds() for e in self.exercises) * self.reps

    def total_sets(self) -> int:
        return sum(e.sets for e in self.exercises) * self.reps

    def is_no_rest_routine(self) -> bool:
        """True when every exercise has rest == 0."""
        return all(e.rest == 0 for e in self.exercises)

    def next_exercise_name(self, exercise_index: int, rep: int) -> str | None:
        """
        Name of the exercise that follows position (exercise_index, rep).

        Both arguments are 1-based.  Returns the next exercise in the same
        rep, else the first exercise of the next rep, else None.
        """
        if exercise_index < len(self.exercises):
            return self.exercises[exercise_index].name
        if rep < self.reps:
            return self.exercises[0].name
        return None

    def __str__(self) -> str:
        reps_text = f" x{self.reps} reps" if self.reps > 1 else ""
        return (
            f"{self.name} - {self.exercises_per_rep()} exercises{reps_text}, "
            f"{self.formatted_total_time()}, Difficulty: {self.difficulty}/5"
        )
