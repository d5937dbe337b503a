"""
JSON serialization for routine data.

Handles conversion between the model dataclasses and JSON-compatible
dicts.  Keys are matched case-insensitively so files written by other
tools ("Name", "Workouts", ...) load the same way.
"""

import json
from typing import Any

from ..core.models import Exercise, InvalidRoutine, Routine


class ValidationError(Exception):
    """Raised when routine data is malformed or fails validation."""

    pass


def _lower_keys(data: dict) -> dict:
    return {str(k).lower(): v for k, v in data.items()}


def _require(data: dict, key: str, context: str) -> Any:
    if key not in data:
        raise ValidationError(f"{context}: missing required field '{key}'")
    return data[key]


def _as_int(value: Any, name: str) -> int:
    """
    Coerce a JSON value to int.

    Raises:
        ValidationError: If the value is not a whole number
    """
    if isinstance(value, bool):
        raise ValidationError(f"{name} must be a whole number, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    raise ValidationError(f"{name} must be a whole number, got {value!r}")


def _optional_str(value: Any, name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{name} must be a string, got {value!r}")
    return value


def dict_to_exercise(data: dict, position: int = 1) -> Exercise:
    """
    Convert a dict to an Exercise.

    Args:
        data: Dictionary with exercise data
        position: 1-based index in the routine, for error messages

    Returns:
        Exercise instance (not yet checked with is_valid)

    Raises:
        ValidationError: If required fields are missing or mistyped
    """
    if not isinstance(data, dict):
        raise ValidationError(f"Exercise {position} must be an object, got {type(data).__name__}")
    d = _lower_keys(data)
    context = f"Exercise {position}"

    name = _require(d, "name", context)
    if not isinstance(name, str):
        raise ValidationError(f"{context}: name must be a string")

    return Exercise(
        name=name,
        sets=_as_int(_require(d, "sets", context), f"{context} sets"),
        length=_as_int(_require(d, "length", context), f"{context} length"),
        rest=_as_int(d.get("rest", 0), f"{context} rest"),
        description=_optional_str(d.get("description"), f"{context} description"),
    )


def exercise_to_dict(exercise: Exercise) -> dict:
    result: dict[str, Any] = {
        "name": exercise.name,
        "sets": exercise.sets,
        "length": exercise.length,
        "rest": exercise.rest,
    }
    if exercise.description is not None:
        result["description"] = exercise.description
    return result


def dict_to_routine(data: dict) -> Routine:
    """
    Convert a dict to a validated Routine.

    Args:
        data: Dictionary with routine data

    Returns:
        Routine instance that passed Routine.validate()

    Raises:
        ValidationError: If data is malformed or the routine is invalid
    """
    if not isinstance(data, dict):
        raise ValidationError(f"Routine must be a JSON object, got {type(data).__name__}")
    d = _lower_keys(data)

    name = _require(d, "name", "Routine")
    if not isinstance(name, str):
        raise ValidationError("Routine name must be a string")

    raw_workouts = d.get("workouts", [])
    if not isinstance(raw_workouts, list):
        raise ValidationError("Routine 'workouts' must be a list")

    raw_tags = d.get("tags") or []
    if not isinstance(raw_tags, list) or not all(isinstance(t, str) for t in raw_tags):
        raise ValidationError("Routine 'tags' must be a list of strings")

    routine = Routine(
        name=name,
        exercises=tuple(dict_to_exercise(w, i) for i, w in enumerate(raw_workouts, 1)),
        description=_optional_str(d.get("description"), "Routine description"),
        difficulty=_as_int(d.get("difficulty", 1), "Routine difficulty"),
        reps=_as_int(d.get("reps", 1), "Routine reps"),
        tags=tuple(raw_tags),
    )

    try:
        routine.validate()
    except InvalidRoutine as e:
        raise ValidationError(str(e)) from e

    return routine


def routine_to_dict(routine: Routine) -> dict:
    """Convert a Routine to a JSON-compatible dict."""
    return {
        "name": routine.name,
        "description": routine.description,
        "difficulty": routine.difficulty,
        "reps": routine.reps,
        "tags": list(routine.tags),
        "workouts": [exercise_to_dict(e) for e in routine.exercises],
    }


def routine_from_json(text: str) -> Routine:
    """
    Parse routine JSON text.

    Raises:
        ValidationError: On invalid JSON or invalid routine data
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValidationError(f"Invalid JSON: {e}") from e
    return dict_to_routine(data)


def routine_to_json(routine: Routine) -> str:
    return json.dumps(routine_to_dict(routine), indent=2)
