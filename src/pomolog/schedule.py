"""Build the ordered countdown plan for a run."""

from __future__ import annotations

import itertools
from collections.abc import Iterator

from .config import Config, DeepWorkPlan
from .models import ScheduleStep, StepKind


def standard_schedule(
    work_seconds: int,
    break_seconds: int,
    long_break_seconds: int,
    sessions_before_long_break: int,
) -> Iterator[ScheduleStep]:
    """Yield work/break pairs forever; every Nth break is a long break."""
    for cycle in itertools.count(1):
        yield ScheduleStep(StepKind.WORK, work_seconds, f"Work session {cycle}")
        if cycle % sessions_before_long_break == 0:
            yield ScheduleStep(StepKind.LONG_BREAK, long_break_seconds, "Long break")
        else:
            yield ScheduleStep(StepKind.BREAK, break_seconds, "Short break")


def deep_work_schedule(plan: DeepWorkPlan) -> list[ScheduleStep]:
    """Fixed sets of work segments with a break after every segment but the last."""
    steps: list[ScheduleStep] = []
    for set_number in range(1, plan.sets + 1):
        for segment_number, minutes in enumerate(plan.segments, start=1):
            steps.append(
                ScheduleStep(
                    StepKind.WORK,
                    minutes * 60,
                    f"Set {set_number}/{plan.sets}, segment {segment_number} ({minutes} min)",
                )
            )
            steps.append(ScheduleStep(StepKind.BREAK, plan.break_minutes * 60, "Break"))

    # No break after the final segment
    steps.pop()
    return steps


def build_schedule(config: Config) -> Iterator[ScheduleStep] | list[ScheduleStep]:
    if config.deep_work:
        return deep_work_schedule(config.deep_work_plan)
    return standard_schedule(
        config.work_seconds,
        config.break_seconds,
        config.long_break_seconds,
        config.sessions_before_long_break,
    )
