"""Render analysis results as CSV, Markdown and console text."""

from __future__ import annotations

import csv
from pathlib import Path

from pomolog.models import DailySummary, PublicSummary

SUMMARY_HEADER = [
    "Date",
    "Project",
    "Sessions",
    "Total Time (mins)",
    "Avg Session (mins)",
    "Updates",
]

BAR_CHAR = "█"


def write_summary_csv(summaries: list[DailySummary], path: Path) -> None:
    """Write one row per day to ``path``, replacing any existing file."""
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(SUMMARY_HEADER)
        for s in summaries:
            writer.writerow(
                [
                    s.date.isoformat(),
                    s.project,
                    s.session_count,
                    s.total_minutes,
                    s.average_minutes,
                    s.updates,
                ]
            )


def format_public_summary(summary: PublicSummary) -> str:
    """Format a PublicSummary as shareable Markdown."""
    lines: list[str] = []
    hours = round(summary.total_minutes / 60, 1)
    last_updated = summary.last_updated.isoformat() if summary.last_updated else "-"

    lines.append("# Pomodoro Challenge Stats")
    lines.append("")

    lines.append("## Summary")
    lines.append(f"- **Total Days**: {summary.total_days}")
    lines.append(f"- **Total Sessions**: {summary.total_sessions}")
    lines.append(
        f"- **Total Focus Time**: {round(summary.total_minutes)} minutes ({hours} hours)"
    )
    lines.append(f"- **Current Streak**: {summary.current_streak} days")
    lines.append(f"- **Weekly Average**: {summary.weekly_average} sessions")
    lines.append(f"- **Last Updated**: {last_updated}")
    lines.append("")

    lines.append("## Recent Activity")
    lines.append("```")
    lines.append(f"Last {len(summary.recent_activity)} days of activity:")
    for day, count in summary.recent_activity:
        lines.append(f"{day.isoformat()}: {BAR_CHAR * count} ({count})")
    lines.append("```")
    lines.append("")

    return "\n".join(lines)


def format_totals(summaries: list[DailySummary]) -> str:
    """Short console overview of a summarize run."""
    total_sessions = sum(s.session_count for s in summaries)
    total_minutes = round(sum(s.total_minutes for s in summaries), 1)

    lines = [
        "Summary of analyzed data:",
        "------------------------",
        f"Total days: {len(summaries)}",
        f"Total sessions: {total_sessions}",
        f"Total time: {total_minutes} minutes",
    ]
    if summaries:
        lines.append(
            f"Average sessions per day: {round(total_sessions / len(summaries), 1)}"
        )
    return "\n".join(lines)
