"""Routine library commands: list, data, init, import."""

import warnings
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.markup import escape

from ...io.routine_store import RoutineStore
from ...io.serializers import ValidationError, routine_from_json
from .. import views
from ..app import DataDirOption, app, get_store


def show_routines(store: RoutineStore) -> None:
    """Print the routine table, surfacing skipped files as warnings."""
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        entries = store.list_routines()

    views.print_routine_list(entries)
    for w in caught:
        views.print_warning(str(w.message))

    if not store.exists():
        views.console.print()
        views.print_info("Run 'init' to create your own routines directory.")


def init_data_dir(store: RoutineStore, copy_samples: bool = True) -> None:
    existed = store.exists()
    copied = store.init(copy_samples=copy_samples)

    if existed:
        views.print_info(f"Data directory already exists: {store.data_dir}")
    else:
        views.print_success(f"Created data directory: {store.data_dir}")

    if copied:
        views.print_success(f"Copied {len(copied)} sample routine(s): {', '.join(copied)}")
    views.console.print(f"Routines directory: [cyan]{store.routines_dir}[/cyan]")


@app.command("list")
def list_routines(
    ctx: typer.Context,
    data_dir: DataDirOption = None,
) -> None:
    """
    List available routines (bundled samples and your own).
    """
    show_routines(get_store(ctx, data_dir))


@app.command()
def data(
    ctx: typer.Context,
    data_dir: DataDirOption = None,
) -> None:
    """
    Show where routines and settings are stored.
    """
    views.print_data_dir(get_store(ctx, data_dir))


@app.command()
def init(
    ctx: typer.Context,
    data_dir: DataDirOption = None,
    samples: Annotated[
        bool,
        typer.Option("--samples/--no-samples", help="Copy the bundled sample routines"),
    ] = True,
) -> None:
    """
    Create the data directory and copy the sample routines into it.

    Existing routine files are never overwritten.
    """
    store = get_store(ctx, data_dir)
    try:
        init_data_dir(store, copy_samples=samples)
    except OSError as e:
        views.print_error(f"Could not initialise {store.data_dir}: {e}")
        raise typer.Exit(1)


@app.command("import")
def import_routine(
    ctx: typer.Context,
    file: Annotated[
        Path,
        typer.Argument(help="Routine JSON file to validate and add to your library"),
    ],
    name: Annotated[
        Optional[str],
        typer.Option("--name", "-n", help="File name to save as (default: from routine name)"),
    ] = None,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing routine without asking"),
    ] = False,
    data_dir: DataDirOption = None,
) -> None:
    """
    Validate a routine file and copy it into the routines directory.
    """
    store = get_store(ctx, data_dir)

    try:
        text = file.read_text(encoding="utf-8")
    except OSError as e:
        views.print_error(f"Cannot read {file}: {e}")
        raise typer.Exit(1)

    try:
        routine = routine_from_json(text)
    except ValidationError as e:
        views.print_error(f"{file} is not a valid routine: {e}")
        raise typer.Exit(1)

    try:
        target = store.target_path(routine, name)
    except ValueError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if target.exists() and not force:
        if not views.confirm_action(f"{escape(target.name)} already exists. Overwrite?"):
            views.print_info("Cancelled.")
            return

    try:
        path = store.save_routine(routine, name)
    except OSError as e:
        views.print_error(f"Could not write {target}: {e}")
        raise typer.Exit(1)
    views.print_success(f"Imported '{routine.name}' -> {path}")
    views.console.print(str(routine), style="dim", markup=False)
