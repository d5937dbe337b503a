"""
CLI view formatters using Rich for pretty console output.

Handles tables, panels and the display symbol sets.
"""

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ..core.engine.preview import RoutinePreview
from ..core.models import Routine
from ..io.routine_store import RoutineStore

console = Console()

EMOJI_SYMBOLS: dict[str, str] = {
    "fire": "\U0001F525",
    "lightning": "⚡",
    "muscle": "\U0001F4AA",
    "target": "\U0001F3AF",
    "rocket": "\U0001F680",
    "star": "⭐",
    "crown": "\U0001F451",
    "sword": "⚔️",
    "trophy": "\U0001F3C6",
    "runner": "\U0001F3C3",
    "explosion": "\U0001F4A5",
    "water": "\U0001F4A7",
    "meditation": "\U0001F9D8",
    "hundred": "\U0001F4AF",
    "party": "\U0001F389",
    "check": "✅",
    "eyes": "\U0001F440",
}

TEXT_SYMBOLS: dict[str, str] = {
    "fire": "*",
    "lightning": "!",
    "muscle": "+",
    "target": ">",
    "rocket": "^",
    "star": "*",
    "crown": "#",
    "sword": "X",
    "trophy": "!",
    "runner": ">",
    "explosion": "*",
    "water": "~",
    "meditation": "-",
    "hundred": "!",
    "party": "*",
    "check": "+",
    "eyes": "?",
}


class SymbolSet(dict):
    """Symbol lookup that renders unknown names as an empty string."""

    def __missing__(self, key: str) -> str:
        return ""


def get_symbols(emoji: bool) -> SymbolSet:
    return SymbolSet(EMOJI_SYMBOLS if emoji else TEXT_SYMBOLS)


def fill_symbols(template: str, symbols: SymbolSet) -> str:
    """Substitute {name} placeholders; malformed templates are returned as-is."""
    try:
        return template.format_map(symbols)
    except (ValueError, IndexError):
        return template


def format_preview_table(preview: RoutinePreview) -> Table:
    """
    Format the per-exercise preview as a Rich table.

    Args:
        preview: Preview report for one routine

    Returns:
        Rich Table object
    """
    table = Table()
    table.add_column("Exercise", style="bold")
    table.add_column("Sets", justify="right")
    table.add_column("Duration", justify="right")
    table.add_column("Rest", justify="right")
    table.add_column("Total Time", justify="right")

    for row in preview.rows:
        table.add_row(
            escape(row.name),
            str(row.sets),
            f"{row.length}s",
            f"{row.rest}s" if row.rest > 0 else "[red]none[/red]",
            row.formatted_total,
        )

    return table


def print_preview(preview: RoutinePreview) -> None:
    """Print the preview table followed by the summary lines."""
    console.print(f"[bold yellow]Preview: {escape(preview.name)}[/bold yellow]")
    if preview.description:
        console.print(f"[dim]{escape(preview.description)}[/dim]")
    console.print()
    console.print(format_preview_table(preview))
    console.print()
    for line in preview.summary_lines():
        label, _, value = line.partition(": ")
        console.print(f"[bold]{label}:[/bold] {value}")


def print_routine_header(routine: Routine, symbols: SymbolSet) -> None:
    """Print the panel shown before a workout starts."""
    reps_info = f"\n[blue]Reps:[/blue] {routine.reps} rounds" if routine.reps > 1 else ""
    tags = ", ".join(routine.tags) if routine.tags else "-"
    body = (
        f"[bold yellow]{escape(routine.name)}[/bold yellow]\n"
        f"[dim]{escape(routine.description or '')}[/dim]\n\n"
        f"[blue]Exercises:[/blue] {routine.exercises_per_rep()} per round\n"
        f"[blue]Total Time:[/blue] {routine.formatted_total_time()}\n"
        f"[blue]Difficulty:[/blue] {routine.difficulty}/5{reps_info}\n"
        f"[blue]Tags:[/blue] {escape(tags)}"
    )
    console.print(
        Panel(
            body,
            title=f"[bold]{symbols['runner']} Workout Starting[/bold]",
            border_style="blue",
            expand=False,
        )
    )
    console.print()


def print_routine_list(entries: list[tuple[str, Routine]]) -> None:
    """Print available routines with their one-line summaries."""
    if not entries:
        console.print("[dim]  No routines found[/dim]")
        return

    table = Table(title="Available Routines")
    table.add_column("File", style="cyan")
    table.add_column("Routine")
    table.add_column("Exercises", justify="right")
    table.add_column("Reps", justify="right")
    table.add_column("Time", justify="right")
    table.add_column("Difficulty", justify="right")
    table.add_column("Tags", style="dim")

    for name, routine in entries:
        table.add_row(
            escape(name),
            escape(routine.name),
            str(routine.exercises_per_rep()),
            str(routine.reps),
            routine.formatted_total_time(),
            f"{routine.difficulty}/5",
            escape(", ".join(routine.tags)),
        )

    console.print(table)


def print_data_dir(store: RoutineStore) -> None:
    """Print data directory locations and status."""
    console.print("[bold yellow]hiit-cli - Data Directory Information:[/bold yellow]")
    console.print()
    console.print(f"[bold]Data Directory:[/bold] [green]{store.data_dir}[/green]")
    console.print(f"[bold]Routines:[/bold] [cyan]{store.routines_dir}[/cyan]")
    if store.bundled_dir is not None:
        console.print(f"[bold]Bundled samples:[/bold] [cyan]{store.bundled_dir}[/cyan]")
    console.print()

    exists = "[green]EXISTS[/green]" if store.exists() else "[red]NOT FOUND[/red]"
    console.print("[bold]Status:[/bold]")
    console.print(f"  - Data directory: {exists}")
    console.print(f"  - Routine files: [cyan]{store.user_routine_count()}[/cyan] found")
    console.print(f"  - Available routines: [cyan]{len(store.available_routines())}[/cyan]")
    console.print()
    console.print(
        "[dim]Add JSON files to the routines directory to extend your workout library.[/dim]"
    )


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]{escape(message)}[/green]")


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]Error: {escape(message)}[/red]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]Warning: {escape(message)}[/yellow]")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]{escape(message)}[/blue]")


def confirm_action(message: str) -> bool:
    """
    Prompt user for confirmation.

    Args:
        message: Confirmation message

    Returns:
        True if confirmed, False otherwise
    """
    response = console.input(f"{message} \\[y/N]: ")
    return response.lower() in ("y", "yes")
