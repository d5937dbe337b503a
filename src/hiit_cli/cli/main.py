"""
CLI entry point using Typer.

Provides commands for running and managing HIIT routines:
- run: Run a routine with live countdowns
- preview: Show a routine's timings without running it
- list: List available routines
- data: Show the data directory
- init: Create the data directory with sample routines
- import: Validate and add a routine file
"""

from pathlib import Path
from typing import Annotated, Optional

import typer

from ..core.engine import preview_routine
from ..core.models import InvalidRoutine
from . import views
from .app import CliState, app, get_settings, get_store
from .commands import library, workout


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    emoji: Annotated[
        Optional[bool],
        typer.Option("--emoji/--no-emoji", help="Force emoji symbols on or off"),
    ] = None,
    audio: Annotated[
        Optional[bool],
        typer.Option("--audio/--no-audio", help="Ring the terminal bell after each set"),
    ] = None,
    data_dir: Annotated[
        Optional[Path],
        typer.Option("--data-dir", "-d", help="Data directory (default: ~/.hiit-cli)"),
    ] = None,
) -> None:
    """
    HIIT workout runner. Run without a command for interactive mode.
    """
    ctx.obj = CliState(data_dir=data_dir, emoji=emoji, audio=audio)

    if ctx.invoked_subcommand is not None:
        return

    # ── Interactive main menu ───────────────────────────────────────────────
    views.console.print()
    views.console.print("[bold cyan]hiit[/bold cyan] - terminal HIIT workout runner")
    views.console.print()

    menu = {
        "1": ("run", "Start a workout"),
        "2": ("preview", "Preview a routine"),
        "3": ("list", "List routines"),
        "4": ("data", "Show data directory"),
        "i": ("init", "Set up data directory"),
        "0": ("quit", "Quit"),
    }

    for key, (_, desc) in menu.items():
        views.console.print(f"  \\[{key}] {desc}")

    views.console.print()
    choice = views.console.input("Choose [1]: ").strip() or "1"

    if choice == "0":
        raise typer.Exit(0)

    chosen = {k: v[0] for k, v in menu.items()}.get(choice)
    if chosen is None:
        views.print_error(f"Unknown choice: {choice}")
        raise typer.Exit(1)

    store = get_store(ctx)
    if chosen == "run":
        _menu_run(ctx)
    elif chosen == "preview":
        _menu_preview(ctx)
    elif chosen == "list":
        library.show_routines(store)
    elif chosen == "data":
        views.print_data_dir(store)
    elif chosen == "init":
        library.init_data_dir(store)


def _prompt_routine_name(ctx: typer.Context) -> str | None:
    """Number the available routines and let the user pick one."""
    store = get_store(ctx)
    names = store.available_routines()
    if not names:
        views.print_info("No routines found. Run 'init' or add JSON files to your routines directory.")
        return None

    for i, name in enumerate(names, 1):
        views.console.print(f"  \\[{i}] {name}")
    views.console.print()

    while True:
        raw = views.console.input("Routine # or name (Enter to cancel): ").strip()
        if not raw:
            views.print_info("Cancelled.")
            return None
        if raw.isdigit():
            index = int(raw)
            if 1 <= index <= len(names):
                return names[index - 1]
            views.print_error(f"Enter a number between 1 and {len(names)}")
            continue
        return raw


def _menu_run(ctx: typer.Context) -> None:
    """Interactive run helper called from the main menu."""
    name = _prompt_routine_name(ctx)
    if name is None:
        return

    routine = workout.load_or_exit(get_store(ctx), name)
    try:
        workout.run_workout(routine, get_settings(ctx))
    except InvalidRoutine as e:
        views.print_error(str(e))
        raise typer.Exit(1)


def _menu_preview(ctx: typer.Context) -> None:
    """Interactive preview helper called from the main menu."""
    name = _prompt_routine_name(ctx)
    if name is None:
        return

    routine = workout.load_or_exit(get_store(ctx), name)
    try:
        views.print_preview(preview_routine(routine))
    except InvalidRoutine as e:
        views.print_error(str(e))
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
