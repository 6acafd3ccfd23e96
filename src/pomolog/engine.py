"""Interruptible countdown engine.

A single cooperative loop: each tick publishes the status line, polls the
keyboard once without blocking, then sleeps for one short tick interval.
Pauses extend the wall-clock deadline and are subtracted from the reported
duration.
"""

from __future__ import annotations

import logging
import sys
import time
from typing import Callable, TextIO

from .config import MAX_TICK_INTERVAL, MIN_TICK_INTERVAL
from .models import CountdownOutcome, StepKind
from .status import IDLE_STATUS, NullStatusSink, StatusSink
from .terminal import KeySource, NullKeys

logger = logging.getLogger(__name__)

KEY_PAUSE = "p"
KEY_SKIP = "s"
KEY_ABORT = "a"
KEY_QUIT = "q"

_ESC = "\x1b"

_ICONS = {
    StepKind.WORK: "🍅",
    StepKind.BREAK: "☕",
    StepKind.LONG_BREAK: "☕",
}


class _EscapeFilter:
    """Drops terminal escape sequences (arrow and function keys).

    An arrow key arrives as ``ESC [ A``; none of its bytes count as a key
    press.
    """

    def __init__(self) -> None:
        self._state = ""

    def feed(self, key: str) -> str:
        if not key:
            # Sequence bytes arrive together; a quiet tick ends any sequence
            self._state = ""
            return ""
        if self._state == "esc":
            self._state = "seq" if key in "[O" else ""
            return ""
        if self._state == "seq":
            # Parameter bytes continue, a byte in @..~ ends the sequence
            if "@" <= key <= "~":
                self._state = ""
            return ""
        if key == _ESC:
            self._state = "esc"
            return ""
        return key


def format_time(seconds: int) -> str:
    """Format seconds as M:SS, e.g. 65 -> '1:05', 3600 -> '60:00'."""
    mins, secs = divmod(max(0, int(seconds)), 60)
    return f"{mins}:{secs:02d}"


def format_clock(seconds: int) -> str:
    """Format seconds as zero-padded MM:SS."""
    mins, secs = divmod(max(0, int(seconds)), 60)
    return f"{mins:02d}:{secs:02d}"


def status_text(remaining: float, kind: StepKind, paused: bool = False) -> str:
    text = f"{_ICONS[kind]} {format_clock(int(remaining))}"
    if paused:
        text += " ⏸"
    return text


class CountdownEngine:
    """Runs one bounded countdown at a time and reports how it ended."""

    def __init__(
        self,
        keys: KeySource | None = None,
        status: StatusSink | None = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
        tick_interval: float = 0.5,
        out: TextIO | None = None,
    ):
        self.keys = keys or NullKeys()
        self.status = status or NullStatusSink()
        self.clock = clock
        self.sleep = sleep
        self.tick_interval = min(max(tick_interval, MIN_TICK_INTERVAL), MAX_TICK_INTERVAL)
        self.out = out or sys.stdout

    def run(self, planned_seconds: int, kind: StepKind) -> CountdownOutcome:
        """Count down ``planned_seconds`` of a ``kind`` step.

        Keys: ``p`` pauses/resumes, ``s`` skips a running break, ``a`` aborts,
        ``q`` quits. Ctrl-C is treated as quit.

        Returns:
            The single outcome of this countdown.
        """
        with self.keys:
            try:
                outcome = self._loop(planned_seconds, kind)
            except KeyboardInterrupt:
                logger.debug("Interrupted, treating as quit")
                outcome = CountdownOutcome.quit()

        self.status.write(IDLE_STATUS)
        self._finish_line(outcome)
        logger.info("%s countdown ended: %s", kind.value, outcome.kind.value)
        return outcome

    def _loop(self, planned: int, kind: StepKind) -> CountdownOutcome:
        start = self.clock()
        accumulated_pause = 0.0
        pause_start: float | None = None
        escapes = _EscapeFilter()

        while True:
            now = self.clock()
            paused = pause_start is not None
            # Remaining time is frozen while paused
            reference = pause_start if paused else now
            remaining = start + planned + accumulated_pause - reference
            self._publish(remaining, kind, paused)

            key = escapes.feed(self.keys.poll() or "").lower()
            if key == KEY_QUIT:
                return CountdownOutcome.quit()
            if key == KEY_ABORT:
                return CountdownOutcome.aborted()
            if key == KEY_SKIP and kind.is_break and not paused:
                return CountdownOutcome.skipped()
            if key == KEY_PAUSE:
                if paused:
                    accumulated_pause += now - pause_start
                    pause_start = None
                    logger.debug("Resumed after %.1fs total pause", accumulated_pause)
                else:
                    pause_start = now
                    logger.debug("Paused with %.1fs remaining", remaining)
                continue

            if not paused and now >= start + planned + accumulated_pause:
                actual = int(planned - accumulated_pause)
                return CountdownOutcome.completed(max(0, min(planned, actual)))

            self.sleep(self.tick_interval)

    def _publish(self, remaining: float, kind: StepKind, paused: bool) -> None:
        self.status.write(status_text(remaining, kind, paused))
        line = f"\r⏱️  {format_clock(int(remaining))} remaining"
        if paused:
            line += " (paused)"
        else:
            line += "         "
        self.out.write(line)
        self.out.flush()

    def _finish_line(self, outcome: CountdownOutcome) -> None:
        if outcome.is_completed:
            # Terminal bell
            self.out.write("\n\a")
        else:
            self.out.write(f"\nTimer {outcome.kind.value}.\n")
        self.out.flush()
