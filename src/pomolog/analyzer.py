"""Aggregate per-day session logs into summaries and streak statistics."""

from __future__ import annotations

import csv
import logging
import re
from collections.abc import Iterable
from datetime import date, timedelta
from pathlib import Path

from .models import DailySummary, PublicSummary, SessionRecord
from .store import RecordFormatError, RecordStore

logger = logging.getLogger(__name__)

RECENT_DAYS = 14

_LOG_NAME_RE = re.compile(r"\d{4}-\d{2}-\d{2}")


class LogAnalyzer:
    """Reads the daily CSV logs in ``log_dir`` within an inclusive date range.

    ``start_date=None`` means no lower bound; ``end_date`` defaults to today.
    """

    def __init__(
        self,
        log_dir: Path,
        start_date: date | None = None,
        end_date: date | None = None,
        today: date | None = None,
    ):
        self.log_dir = log_dir
        self.today = today or date.today()
        self.start_date = start_date
        self.end_date = end_date or self.today
        self.store = RecordStore(log_dir)

    def log_files(self) -> list[tuple[date, Path]]:
        """Dated log files in range, oldest first."""
        if not self.log_dir.is_dir():
            logger.info("Log directory does not exist: %s", self.log_dir)
            return []

        found: list[tuple[date, Path]] = []
        for path in self.log_dir.glob("*.csv"):
            day = _date_from_filename(path)
            if day is None:
                logger.debug("Skipping (not a dated log): %s", path.name)
                continue
            if self.start_date and day < self.start_date:
                continue
            if day > self.end_date:
                continue
            found.append((day, path))

        found.sort()
        logger.info("Found %d log file(s) in %s", len(found), self.log_dir)
        return found

    def daily_records(self) -> list[tuple[date, list[SessionRecord]]]:
        """Records per day in range; empty and unreadable days are left out."""
        result = []
        for day, path in self.log_files():
            try:
                records = self.store.read_all(day)
            except (OSError, csv.Error, RecordFormatError) as e:
                logger.error("Error processing %s: %s", path, e)
                continue
            if not records:
                logger.debug("Skipping (no sessions): %s", path.name)
                continue
            result.append((day, records))
        return result

    def summarize(self) -> list[DailySummary]:
        return [_summarize_day(day, records) for day, records in self.daily_records()]

    def public_summary(self) -> PublicSummary:
        """Counts, durations and dates only; no project names or notes."""
        daily_counts: dict[date, int] = {}
        total_minutes = 0.0
        for day, records in self.daily_records():
            daily_counts[day] = len(records)
            total_minutes += round(sum(r.duration_seconds for r in records) / 60, 1)

        window_start = self.end_date - timedelta(days=RECENT_DAYS - 1)
        recent = [
            (day, daily_counts.get(day, 0))
            for day in (window_start + timedelta(days=i) for i in range(RECENT_DAYS))
        ]

        return PublicSummary(
            total_days=len(daily_counts),
            total_sessions=sum(daily_counts.values()),
            total_minutes=round(total_minutes, 1),
            current_streak=calculate_streak(daily_counts, self.today),
            weekly_average=calculate_weekly_average(daily_counts),
            recent_activity=recent,
            last_updated=self.today,
        )


def calculate_streak(dates: Iterable[date], today: date | None = None) -> int:
    """Consecutive days with sessions, ending at the most recent logged day.

    The streak is 0 when the most recent day is before yesterday.
    """
    days = set(dates)
    if not days:
        return 0

    today = today or date.today()
    current = max(days)
    if (today - current).days > 1:
        return 0

    streak = 1
    while current - timedelta(days=1) in days:
        streak += 1
        current -= timedelta(days=1)
    return streak


def calculate_weekly_average(daily_counts: dict[date, int]) -> float:
    """Mean sessions per Sunday-start week, over weeks that have data."""
    if not daily_counts:
        return 0.0

    weeks: dict[str, int] = {}
    for day, count in daily_counts.items():
        week = day.strftime("%Y-%U")
        weeks[week] = weeks.get(week, 0) + count

    return round(sum(weeks.values()) / len(weeks), 1)


def _summarize_day(day: date, records: list[SessionRecord]) -> DailySummary:
    count = len(records)
    total_seconds = sum(r.duration_seconds for r in records)
    updates = " | ".join(
        f"Session {i}: {r.note}" for i, r in enumerate(records, start=1)
    )
    return DailySummary(
        date=day,
        project=records[0].project,
        session_count=count,
        total_minutes=round(total_seconds / 60, 1),
        average_minutes=round(total_seconds / count / 60, 1),
        updates=updates,
    )


def _date_from_filename(path: Path) -> date | None:
    if not _LOG_NAME_RE.fullmatch(path.stem):
        return None
    try:
        return date.fromisoformat(path.stem)
    except ValueError:
        return None
