"""
One-second countdown clock with cooperative cancellation.

The timer suspends only inside the injected sleeper, so tests can drive
it with a fake clock and the CLI can interrupt it from a signal handler
by cancelling the shared token.
"""

import threading
from typing import Callable

from ..config import FINAL_SECONDS_URGENT, FINAL_SECONDS_WARNING, TICK_SECONDS
from .events import EventKind, EventSink, ExecutionProgress, Phase, ProgressEvent


class CancellationToken:
    """Polled stop flag shared between the caller and a running execution."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def wait(self, seconds: float) -> bool:
        """Block up to ``seconds``; return True if cancelled meanwhile."""
        return self._event.wait(seconds)


# sleeper(seconds, token) -> True if the full period elapsed, False if cancelled
Sleeper = Callable[[float, CancellationToken], bool]


def interruptible_sleep(seconds: float, token: CancellationToken) -> bool:
    """Sleep for ``seconds`` unless the token is cancelled first."""
    if seconds <= 0:
        return not token.cancelled
    return not token.wait(seconds)


def final_seconds_emphasis(remaining: int) -> str | None:
    """Emphasis level for an active countdown showing ``remaining`` seconds."""
    if 0 < remaining <= FINAL_SECONDS_URGENT:
        return "urgent"
    if 0 < remaining <= FINAL_SECONDS_WARNING:
        return "warning"
    return None


class CountdownTimer:
    """
    Counts a duration down in one-second ticks.

    For a duration D that is never cancelled the sink receives
    TIMER_START, exactly D TICK events (remaining D-1 ... 0) and one
    TIMER_COMPLETE.  Cancellation is checked before every tick and
    stops the countdown without a completion event.
    """

    def __init__(self, sink: EventSink, sleep: Sleeper = interruptible_sleep):
        self.sink = sink
        self.sleep = sleep

    def run(
        self,
        label: str,
        seconds: int,
        token: CancellationToken,
        *,
        phase: Phase = Phase.ACTIVE,
        emphasize_final: bool = False,
        progress: ExecutionProgress | None = None,
    ) -> bool:
        """
        Run one countdown.

        Args:
            label: Display text only; carries no behaviour
            seconds: Whole seconds to count down (>= 1)
            token: Cancellation token polled before every tick
            phase: Phase reported on every event
            emphasize_final: Mark the last seconds as "warning"/"urgent"
            progress: Execution position to update and attach to events

        Returns:
            True if the countdown reached zero, False if it was cancelled
        """
        if seconds < 1:
            raise ValueError(f"Countdown duration must be at least 1 second, got {seconds}")

        if progress is None:
            progress = ExecutionProgress()
        progress.phase = phase
        progress.remaining = seconds

        self._emit(EventKind.TIMER_START, label, seconds, seconds, emphasize_final, progress)

        for elapsed in range(1, seconds + 1):
            if token.cancelled:
                return False
            if not self.sleep(TICK_SECONDS, token):
                return False
            progress.remaining = seconds - elapsed
            self._emit(EventKind.TICK, label, seconds - elapsed, seconds, emphasize_final, progress)

        if token.cancelled:
            return False

        self._emit(EventKind.TIMER_COMPLETE, label, 0, seconds, emphasize_final, progress)
        return True

    def _emit(
        self,
        kind: EventKind,
        label: str,
        remaining: int,
        duration: int,
        emphasize_final: bool,
        progress: ExecutionProgress,
    ) -> None:
        emphasis = final_seconds_emphasis(remaining) if emphasize_final else None
        self.sink(
            ProgressEvent(
                kind=kind,
                phase=progress.phase,
                label=label,
                remaining=remaining,
                duration=duration,
                elapsed_fraction=(duration - remaining) / duration,
                emphasis=emphasis,
                overall_fraction=progress.overall_fraction,
                progress=progress.snapshot(),
            )
        )
