"""
Console rendering of workout progress events.

``ConsoleRenderer`` is the event sink handed to ``WorkoutEngine`` by the
``run`` command.  Countdowns are drawn as a transient Rich progress bar;
every other event prints a line (or a rule) on the shared console.
"""

from rich.console import Console
from rich.markup import escape
from rich.progress import BarColumn, Progress, TaskID, TextColumn

from ..core.config import DisplaySettings
from ..core.engine.events import EventKind, Phase, ProgressEvent
from ..core.models import format_duration
from .views import SymbolSet, fill_symbols, get_symbols

EMPHASIS_STYLES = {"urgent": "bold red", "warning": "bold yellow"}

PHASE_STYLES = {
    Phase.PREPARING: "cyan",
    Phase.ACTIVE: "bold green",
    Phase.RESTING: "blue",
    Phase.REST_BETWEEN_EXERCISES: "blue",
    Phase.REST_BETWEEN_REPS: "magenta",
}


class ConsoleRenderer:
    """Progress event sink that draws on a Rich console."""

    def __init__(self, console: Console, display: DisplaySettings):
        self.console = console
        self.display = display
        self.symbols: SymbolSet = get_symbols(display.emoji)
        self._progress: Progress | None = None
        self._task: TaskID | None = None

    def __call__(self, event: ProgressEvent) -> None:
        if event.kind not in (EventKind.TICK, EventKind.TIMER_COMPLETE):
            self.close()
        handler = getattr(self, f"_on_{event.kind.value}", None)
        if handler is not None:
            handler(event)

    def close(self) -> None:
        """Stop any live countdown bar."""
        if self._progress is not None:
            self._progress.stop()
            self._progress = None
            self._task = None

    # ----- Countdown -----

    def _on_timer_start(self, event: ProgressEvent) -> None:
        style = PHASE_STYLES.get(event.phase, "white")
        self._progress = Progress(
            TextColumn("{task.description}"),
            BarColumn(),
            TextColumn("{task.fields[remaining]}s"),
            console=self.console,
            transient=True,
        )
        self._task = self._progress.add_task(
            f"[{style}]{escape(event.label)}[/{style}]",
            total=event.duration,
            remaining=event.remaining,
        )
        self._progress.start()

    def _on_tick(self, event: ProgressEvent) -> None:
        if self._progress is None or self._task is None:
            return
        style = EMPHASIS_STYLES.get(event.emphasis or "", PHASE_STYLES.get(event.phase, "white"))
        self._progress.update(
            self._task,
            completed=(event.duration or 0) - (event.remaining or 0),
            remaining=event.remaining,
            description=f"[{style}]{escape(event.label)}[/{style}]",
        )

    def _on_timer_complete(self, event: ProgressEvent) -> None:
        self.close()
        if self.display.audio and event.phase is Phase.ACTIVE:
            self.console.bell()

    # ----- Structure -----

    def _on_routine_start(self, event: ProgressEvent) -> None:
        self.console.print(
            f"[bold cyan]{self.symbols['rocket']} Get ready! Starting "
            f"{escape(event.label)}...[/bold cyan]"
        )

    def _on_rep_start(self, event: ProgressEvent) -> None:
        self.console.rule(f"[bold magenta]{self.symbols['fire']} {escape(event.label)}[/bold magenta]")

    def _on_exercise_start(self, event: ProgressEvent) -> None:
        progress = event.progress
        exercise = event.exercise
        title = escape(event.label)
        if progress is not None:
            title = f"Exercise {progress.exercise_index}/{progress.exercises_per_rep}: {title}"
            if progress.total_reps > 1:
                title += f" (Rep {progress.rep}/{progress.total_reps})"
        self.console.print()
        self.console.rule(f"[bold yellow]{self.symbols['muscle']} {title}[/bold yellow]")

        if event.message:
            self.console.print(f"[dim]{escape(event.message)}[/dim]")
        if exercise is not None:
            rest = (
                f"{exercise.rest}s"
                if exercise.rest > 0
                else f"[bold red]NO REST {self.symbols['lightning']}[/bold red]"
            )
            self.console.print(
                f"Sets: [cyan]{exercise.sets}[/cyan] | "
                f"Duration: [cyan]{exercise.length}s[/cyan] | Rest: {rest}"
            )
        if progress is not None and event.overall_fraction is not None:
            current, total = progress.overall_position
            self.console.print(
                f"[dim]Overall Progress: {current}/{total} exercises "
                f"({event.overall_fraction:.0%} complete)[/dim]"
            )

    def _on_set_ready(self, event: ProgressEvent) -> None:
        progress = event.progress
        if progress is None:
            return
        self.console.print(
            f"[bold]Set {progress.set_index}/{progress.total_sets}[/bold] - "
            f"[bold green]GET READY! {self.symbols['target']}[/bold green]"
        )

    def _on_set_complete(self, event: ProgressEvent) -> None:
        progress = event.progress
        if progress is None:
            return
        self.console.print(
            f"[green]{self.symbols['check']} Set {progress.set_index}/{progress.total_sets} "
            f"complete[/green]"
        )

    def _on_transition(self, event: ProgressEvent) -> None:
        if event.message:
            self.console.print(f"[dim]{escape(event.message)}[/dim]")

    def _on_exercise_complete(self, event: ProgressEvent) -> None:
        self.console.print(f"[bold green]{escape(event.label)} done![/bold green]")
        if event.next_exercise:
            self.console.print(
                f"[cyan]{self.symbols['eyes']} Next exercise: "
                f"{escape(event.next_exercise)}[/cyan]"
            )

    def _on_rep_complete(self, event: ProgressEvent) -> None:
        self.console.print()
        self.console.print(
            f"[bold magenta]{self.symbols['party']} {escape(event.label)}! "
            f"{escape(event.message or '')}[/bold magenta]"
        )

    # ----- Outcome -----

    def _on_routine_complete(self, event: ProgressEvent) -> None:
        summary = event.summary
        self.console.print()
        self.console.rule(f"[bold green]{self.symbols['trophy']} WORKOUT CRUSHED[/bold green]")
        if summary is None:
            return

        if summary.message:
            self.console.print(f"[bold]{fill_symbols(summary.message, self.symbols)}[/bold]")
        self.console.print(
            f"Active time: [cyan]{format_duration(summary.total_active_seconds)}[/cyan] | "
            f"Sets: [cyan]{summary.total_sets}[/cyan] | "
            f"Exercises: [cyan]{summary.total_exercises}[/cyan]"
        )
        if summary.no_rest:
            self.console.print(
                f"[bold red]{self.symbols['explosion']} Intensity: MAXIMUM - "
                f"{summary.total_sets} sets without a single rest[/bold red]"
            )
        self.console.print(f"[blue]{self.symbols['water']} Remember to hydrate![/blue]")

    def _on_routine_cancelled(self, event: ProgressEvent) -> None:
        self.console.print()
        self.console.print(f"[yellow]Workout stopped: {escape(event.label)}[/yellow]")
