"""Data models for countdowns, schedules and session logs."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import date


class StepKind(enum.Enum):
    """Kind of a planned countdown."""

    WORK = "work"
    BREAK = "break"
    LONG_BREAK = "long_break"

    @property
    def is_break(self) -> bool:
        return self is not StepKind.WORK


class OutcomeKind(enum.Enum):
    COMPLETED = "completed"
    QUIT = "quit"
    SKIPPED = "skipped"
    ABORTED = "aborted"


@dataclass(frozen=True)
class CountdownOutcome:
    """Result of a single countdown.

    ``actual_seconds`` is only meaningful for COMPLETED outcomes and holds
    the net time (planned duration minus time spent paused).
    """

    kind: OutcomeKind
    actual_seconds: int = 0

    @classmethod
    def completed(cls, actual_seconds: int) -> CountdownOutcome:
        return cls(OutcomeKind.COMPLETED, actual_seconds)

    @classmethod
    def quit(cls) -> CountdownOutcome:
        return cls(OutcomeKind.QUIT)

    @classmethod
    def skipped(cls) -> CountdownOutcome:
        return cls(OutcomeKind.SKIPPED)

    @classmethod
    def aborted(cls) -> CountdownOutcome:
        return cls(OutcomeKind.ABORTED)

    @property
    def is_completed(self) -> bool:
        return self.kind is OutcomeKind.COMPLETED


@dataclass(frozen=True)
class ScheduleStep:
    """One planned countdown in a run."""

    kind: StepKind
    planned_seconds: int
    label: str = ""


@dataclass(frozen=True)
class SessionRecord:
    """A completed work session as stored in a day's log file."""

    date: date
    project: str
    session_number: int
    duration_seconds: int
    note: str = ""


@dataclass
class DailySummary:
    """Aggregated sessions for a single day."""

    date: date
    project: str
    session_count: int = 0
    total_minutes: float = 0.0
    average_minutes: float = 0.0
    updates: str = ""


@dataclass
class PublicSummary:
    """Shareable statistics; carries no project names or notes."""

    total_days: int = 0
    total_sessions: int = 0
    total_minutes: float = 0.0
    current_streak: int = 0
    weekly_average: float = 0.0
    recent_activity: list[tuple[date, int]] = field(default_factory=list)
    last_updated: date | None = None
