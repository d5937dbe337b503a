"""Workout commands: run, preview."""

import json
import signal
from contextlib import contextmanager
from typing import Annotated, Iterator

import typer

from ...core.config import Settings
from ...core.engine import (
    CancellationToken,
    MessageSource,
    Outcome,
    WorkoutEngine,
    preview_routine,
)
from ...core.models import InvalidRoutine, Routine
from ...io.routine_store import RoutineStore
from ...io.serializers import ValidationError
from .. import views
from ..app import DataDirOption, app, get_settings, get_store
from ..renderer import ConsoleRenderer

RoutineArgument = Annotated[
    str,
    typer.Argument(help="Routine name (file stem, with or without .json). See 'list'."),
]


@contextmanager
def cancel_on_interrupt(token: CancellationToken) -> Iterator[CancellationToken]:
    """
    Turn Ctrl+C into a cancellation request for the duration of the block.

    The previous SIGINT handler is restored on exit.  Outside the main
    thread no handler can be installed and the token is left to the caller.
    """

    def _handler(signum, frame):
        token.cancel()

    try:
        previous = signal.signal(signal.SIGINT, _handler)
    except ValueError:
        # signal.signal only works in the main thread
        previous = None
    try:
        yield token
    finally:
        if previous is not None:
            signal.signal(signal.SIGINT, previous)


def load_or_exit(store: RoutineStore, name: str) -> Routine:
    """Load a routine, printing the error and exiting with status 1 on failure."""
    try:
        return store.load_routine(name)
    except (FileNotFoundError, ValidationError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)


def run_workout(routine: Routine, settings: Settings) -> Outcome:
    """Show the header panel and execute the routine on the shared console."""
    renderer = ConsoleRenderer(views.console, settings.display)
    views.print_routine_header(routine, renderer.symbols)

    engine = WorkoutEngine(
        renderer,
        timings=settings.timings,
        messages=MessageSource.from_messages(settings.messages),
    )
    token = CancellationToken()
    try:
        with cancel_on_interrupt(token):
            return engine.execute(routine, token)
    finally:
        renderer.close()


@app.command()
def run(
    ctx: typer.Context,
    routine_name: RoutineArgument,
    data_dir: DataDirOption = None,
) -> None:
    """
    Run a workout routine. Press Ctrl+C to stop.
    """
    store = get_store(ctx, data_dir)
    routine = load_or_exit(store, routine_name)
    settings = get_settings(ctx, data_dir)

    try:
        outcome = run_workout(routine, settings)
    except InvalidRoutine as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if outcome is Outcome.CANCELLED:
        views.print_info("Run it again any time to finish the routine.")


@app.command()
def preview(
    ctx: typer.Context,
    routine_name: RoutineArgument,
    data_dir: DataDirOption = None,
    json_out: Annotated[
        bool,
        typer.Option("--json", "-j", help="Output as JSON for machine processing"),
    ] = False,
) -> None:
    """
    Show exercise-by-exercise timings for a routine without running it.
    """
    store = get_store(ctx, data_dir)
    routine = load_or_exit(store, routine_name)

    try:
        report = preview_routine(routine)
    except InvalidRoutine as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if json_out:
        print(json.dumps(report.to_dict(), indent=2))
        return

    views.print_preview(report)
