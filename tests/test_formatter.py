"""Tests for CSV and Markdown output."""

from __future__ import annotations

import csv
from datetime import date, timedelta
from pathlib import Path

from pomolog.formatter import (
    SUMMARY_HEADER,
    format_public_summary,
    format_totals,
    write_summary_csv,
)
from pomolog.models import DailySummary, PublicSummary


def _summary(day: date, sessions: int = 3) -> DailySummary:
    return DailySummary(
        date=day,
        project="Test Project",
        session_count=sessions,
        total_minutes=80.0,
        average_minutes=26.7,
        updates="Session 1: a | Session 2: b, c",
    )


def test_write_summary_csv(tmp_path: Path) -> None:
    out = tmp_path / "summary.csv"
    write_summary_csv([_summary(date(2026, 2, 10)), _summary(date(2026, 2, 11))], out)

    with out.open(newline="") as f:
        rows = list(csv.DictReader(f))

    assert list(rows[0].keys()) == SUMMARY_HEADER
    assert len(rows) == 2
    assert rows[0]["Date"] == "2026-02-10"
    assert rows[0]["Sessions"] == "3"
    assert rows[0]["Total Time (mins)"] == "80.0"
    assert rows[0]["Avg Session (mins)"] == "26.7"
    assert rows[0]["Updates"] == "Session 1: a | Session 2: b, c"


def test_write_summary_csv_empty(tmp_path: Path) -> None:
    out = tmp_path / "summary.csv"
    write_summary_csv([], out)
    assert out.read_text().strip() == ",".join(SUMMARY_HEADER)


def test_public_summary_sections() -> None:
    end = date(2026, 2, 11)
    recent = [(end - timedelta(days=13 - i), 0) for i in range(14)]
    recent[-1] = (end, 4)
    summary = PublicSummary(
        total_days=12,
        total_sessions=40,
        total_minutes=1000.0,
        current_streak=5,
        weekly_average=17.5,
        recent_activity=recent,
        last_updated=end,
    )

    md = format_public_summary(summary)

    assert md.startswith("# Pomodoro Challenge Stats")
    assert "## Summary" in md
    assert "- **Total Days**: 12" in md
    assert "- **Total Sessions**: 40" in md
    assert "- **Total Focus Time**: 1000 minutes (16.7 hours)" in md
    assert "- **Current Streak**: 5 days" in md
    assert "- **Weekly Average**: 17.5 sessions" in md
    assert "- **Last Updated**: 2026-02-11" in md
    assert "## Recent Activity" in md
    assert "Last 14 days of activity:" in md
    assert "2026-02-11: ████ (4)" in md
    assert "2026-01-29:  (0)" in md


def test_format_totals() -> None:
    text = format_totals([_summary(date(2026, 2, 10), 3), _summary(date(2026, 2, 11), 4)])
    assert "Total days: 2" in text
    assert "Total sessions: 7" in text
    assert "Total time: 160.0 minutes" in text
    assert "Average sessions per day: 3.5" in text


def test_format_totals_empty() -> None:
    text = format_totals([])
    assert "Total days: 0" in text
    assert "Average sessions per day" not in text
