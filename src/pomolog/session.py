"""Sequence countdowns into a run and log completed work sessions."""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, TextIO

from .engine import CountdownEngine, format_time
from .models import OutcomeKind, ScheduleStep, SessionRecord
from .store import RecordStore
from .terminal import Prompter

logger = logging.getLogger(__name__)

CONTROLS_HELP = "Controls: [p] pause/resume  [s] skip break  [a] abort  [q] quit"


@dataclass
class SessionReport:
    """What a run logged."""

    project: str = ""
    records: list[SessionRecord] = field(default_factory=list)

    @property
    def completed_sessions(self) -> int:
        return len(self.records)

    @property
    def total_seconds(self) -> int:
        return sum(r.duration_seconds for r in self.records)

    def message(self) -> str:
        if not self.records:
            return "Nothing logged this run."
        minutes = round(self.total_seconds / 60, 1)
        return (
            f"Completed {self.completed_sessions} session(s) "
            f"({minutes} minutes) on {self.project}."
        )


class SessionOrchestrator:
    """Drives the countdown engine through a schedule."""

    def __init__(
        self,
        engine: CountdownEngine,
        store: RecordStore,
        prompter: Prompter,
        today: Callable[[], date] = date.today,
        out: TextIO | None = None,
    ):
        self.engine = engine
        self.store = store
        self.prompter = prompter
        self.today = today
        self.out = out or sys.stdout

    def run(
        self,
        schedule: Iterable[ScheduleStep],
        project: str = "",
        deep_work: bool = False,
    ) -> SessionReport:
        """Run ``schedule`` step by step until it ends or the user stops.

        Raises:
            StoreError: If a completed session cannot be written.
        """
        if not project:
            project = self.prompter.prompt("What are you working on? ") or "Untitled"
        report = SessionReport(project=project)

        self.store.ensure_file(self.today())
        self._say(CONTROLS_HELP)

        steps = iter(schedule)
        step = next(steps, None)
        last_work_completed = False

        while step is not None:
            self._say(f"\n{step.label}: {format_time(step.planned_seconds)}")
            outcome = self.engine.run(step.planned_seconds, step.kind)

            if not step.kind.is_break:
                if outcome.kind is OutcomeKind.COMPLETED:
                    report.records.append(self._log_session(project, outcome.actual_seconds))
                    last_work_completed = True
                    step = next(steps, None)
                    continue
                last_work_completed = False
                if outcome.kind is OutcomeKind.QUIT:
                    if not self._confirm("Timer stopped. Continue? (y/n) "):
                        break
                    # Retry the same work step
                    continue
                step = next(steps, None)
                # Nothing to continue with after the final step
                if step is None or not self._confirm("Session aborted. Continue? (y/n) "):
                    break
                continue

            if outcome.kind is OutcomeKind.QUIT or outcome.kind is OutcomeKind.ABORTED:
                question = (
                    "Break stopped. Continue? (y/n) "
                    if outcome.kind is OutcomeKind.QUIT
                    else "Break aborted. Continue? (y/n) "
                )
                step = next(steps, None)
                last_work_completed = False
                if step is None or not self._confirm(question):
                    break
                continue

            if (
                outcome.kind is OutcomeKind.COMPLETED
                and not deep_work
                and last_work_completed
                and not self._confirm("Continue with another session? (y/n) ")
            ):
                break

            last_work_completed = False
            step = next(steps, None)

        logger.info("Run finished: %d session(s) logged", report.completed_sessions)
        return report

    def _log_session(self, project: str, duration_seconds: int) -> SessionRecord:
        note = self.prompter.prompt("What did you accomplish? ")
        day = self.today()
        record = SessionRecord(
            date=day,
            project=project,
            session_number=self.store.next_session_number(day),
            duration_seconds=duration_seconds,
            note=note,
        )
        self.store.append(record)
        self._say(f"Session {record.session_number} logged ({format_time(duration_seconds)}).")
        return record

    def _confirm(self, question: str) -> bool:
        return self.prompter.prompt(question).strip().lower().startswith("y")

    def _say(self, text: str) -> None:
        print(text, file=self.out)
