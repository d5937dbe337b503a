"""Shared Typer app object, shared option types, and store/settings utilities."""

from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, Optional

import typer

from ..core.config import Settings
from ..core.engine.config_loader import load_settings
from ..io.routine_store import RoutineStore, get_default_data_dir
from . import views

# Shared --data-dir option type used across all commands
DataDirOption = Annotated[
    Optional[Path],
    typer.Option(
        "--data-dir",
        "-d",
        help="Data directory holding routines/ and config.yaml (default: ~/.hiit-cli)",
    ),
]

app = typer.Typer(
    name="hiit",
    help="Terminal HIIT workout runner: timed sets, rests and reps from JSON routines.",
    no_args_is_help=False,
    invoke_without_command=True,
)


@dataclass
class CliState:
    """Global options collected by the main callback (ctx.obj)."""

    data_dir: Path | None = None
    emoji: bool | None = None
    audio: bool | None = None


def get_state(ctx: typer.Context) -> CliState:
    if isinstance(ctx.obj, CliState):
        return ctx.obj
    return CliState()


def resolve_data_dir(ctx: typer.Context, data_dir: Path | None = None) -> Path:
    """Command option, then global option, then $HIIT_CLI_DATA_DIR / ~/.hiit-cli."""
    if data_dir is not None:
        return data_dir
    state = get_state(ctx)
    if state.data_dir is not None:
        return state.data_dir
    return get_default_data_dir()


def get_store(ctx: typer.Context, data_dir: Path | None = None) -> RoutineStore:
    """Get routine store for the resolved data directory."""
    return RoutineStore(resolve_data_dir(ctx, data_dir))


def get_settings(ctx: typer.Context, data_dir: Path | None = None) -> Settings:
    """Load settings, honouring the global --emoji/--audio flags."""
    state = get_state(ctx)
    try:
        return load_settings(resolve_data_dir(ctx, data_dir), emoji=state.emoji, audio=state.audio)
    except ValueError as e:
        views.print_error(f"Invalid configuration: {e}")
        raise typer.Exit(1)
