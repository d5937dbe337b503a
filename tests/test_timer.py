"""
Countdown timer tests.

A fake sleeper records the requested durations and never blocks, so the
tests run instantly; one test uses the real sleeper with a short
cancellation to check a stop request ends the countdown promptly.
"""

import threading
import time

import pytest

from hiit_cli.core.engine.events import EventKind, Phase
from hiit_cli.core.engine.timer import (
    CancellationToken,
    CountdownTimer,
    final_seconds_emphasis,
    interruptible_sleep,
)


class FakeSleeper:
    """Records sleep requests; reports cancellation like the real sleeper."""

    def __init__(self):
        self.calls: list[float] = []

    def __call__(self, seconds, token):
        self.calls.append(seconds)
        return not token.cancelled


class TestCountdown:
    """Tick sequence for an uncancelled countdown."""

    def test_start_ticks_complete(self):
        """D = 3 gives START, three TICKs (2, 1, 0) and COMPLETE."""
        events = []
        sleeper = FakeSleeper()
        timer = CountdownTimer(events.append, sleeper)

        assert timer.run("GO! Squats", 3, CancellationToken()) is True

        assert [e.kind for e in events] == [
            EventKind.TIMER_START,
            EventKind.TICK,
            EventKind.TICK,
            EventKind.TICK,
            EventKind.TIMER_COMPLETE,
        ]
        assert [e.remaining for e in events] == [3, 2, 1, 0, 0]
        assert sleeper.calls == [1, 1, 1]

    def test_elapsed_fraction(self):
        events = []
        CountdownTimer(events.append, FakeSleeper()).run("x", 4, CancellationToken())
        ticks = [e.elapsed_fraction for e in events if e.kind is EventKind.TICK]
        assert ticks == [0.25, 0.5, 0.75, 1.0]

    def test_phase_and_label_carried(self):
        events = []
        CountdownTimer(events.append, FakeSleeper()).run(
            "Rest", 2, CancellationToken(), phase=Phase.RESTING
        )
        assert {e.phase for e in events} == {Phase.RESTING}
        assert {e.label for e in events} == {"Rest"}

    @pytest.mark.parametrize("seconds", [0, -1])
    def test_rejects_non_positive_duration(self, seconds):
        with pytest.raises(ValueError):
            CountdownTimer(lambda e: None, FakeSleeper()).run("x", seconds, CancellationToken())


class TestEmphasis:
    """Final-seconds emphasis levels."""

    def test_levels(self):
        assert final_seconds_emphasis(6) is None
        assert final_seconds_emphasis(5) == "warning"
        assert final_seconds_emphasis(4) == "warning"
        assert final_seconds_emphasis(3) == "urgent"
        assert final_seconds_emphasis(1) == "urgent"
        assert final_seconds_emphasis(0) is None

    def test_emphasized_countdown(self):
        events = []
        CountdownTimer(events.append, FakeSleeper()).run(
            "GO! A", 6, CancellationToken(), emphasize_final=True
        )
        ticks = [e.emphasis for e in events if e.kind is EventKind.TICK]
        assert ticks == ["warning", "warning", "urgent", "urgent", "urgent", None]

    def test_rest_countdown_not_emphasized(self):
        events = []
        CountdownTimer(events.append, FakeSleeper()).run("Rest", 4, CancellationToken())
        assert all(e.emphasis is None for e in events)


class TestCancellation:
    """Cancellation stops the countdown without a completion event."""

    def test_cancel_mid_countdown(self):
        """Cancelling at remaining 2 of 5 ends after that tick."""
        token = CancellationToken()
        events = []

        def sink(event):
            events.append(event)
            if event.kind is EventKind.TICK and event.remaining == 2:
                token.cancel()

        assert CountdownTimer(sink, FakeSleeper()).run("x", 5, token) is False
        assert [e.remaining for e in events if e.kind is EventKind.TICK] == [4, 3, 2]
        assert EventKind.TIMER_COMPLETE not in [e.kind for e in events]

    def test_already_cancelled(self):
        token = CancellationToken()
        token.cancel()
        events = []
        sleeper = FakeSleeper()

        assert CountdownTimer(events.append, sleeper).run("x", 3, token) is False
        assert [e.kind for e in events] == [EventKind.TIMER_START]
        assert sleeper.calls == []

    def test_sleeper_reports_cancellation(self):
        """A sleeper returning False stops the countdown before the tick."""
        events = []
        timer = CountdownTimer(events.append, lambda seconds, token: False)
        assert timer.run("x", 3, CancellationToken()) is False
        assert [e.kind for e in events] == [EventKind.TIMER_START]

    def test_real_sleep_cancelled_promptly(self):
        """A 30 second countdown stops well within a second of cancel()."""
        token = CancellationToken()
        timer = CountdownTimer(lambda e: None, interruptible_sleep)
        threading.Timer(0.2, token.cancel).start()

        started = time.monotonic()
        assert timer.run("x", 30, token) is False
        assert time.monotonic() - started < 1.5


class TestInterruptibleSleep:
    """interruptible_sleep return values."""

    def test_zero_seconds(self):
        assert interruptible_sleep(0, CancellationToken()) is True

    def test_cancelled_token(self):
        token = CancellationToken()
        token.cancel()
        assert interruptible_sleep(5, token) is False
