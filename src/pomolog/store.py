"""Append-only per-day CSV session logs."""

from __future__ import annotations

import csv
import logging
import os
from datetime import date
from pathlib import Path

from .models import SessionRecord

logger = logging.getLogger(__name__)

HEADER = ["date", "project", "session", "duration", "update"]


class StoreError(Exception):
    """Raised when a session cannot be durably recorded."""


class RecordFormatError(ValueError):
    """Raised when a day's log file cannot be parsed."""


class RecordStore:
    """One CSV file per calendar day, named ``YYYY-MM-DD.csv``."""

    def __init__(self, log_dir: Path):
        self.log_dir = log_dir
        self._last_session: dict[date, int] = {}

    def path_for(self, day: date) -> Path:
        return self.log_dir / f"{day.isoformat()}.csv"

    def ensure_file(self, day: date) -> Path:
        """Create the day's file with its header row if it does not exist.

        Raises:
            StoreError: If the file cannot be created.
        """
        path = self.path_for(day)
        if path.exists():
            return path
        try:
            self.log_dir.mkdir(parents=True, exist_ok=True)
            with path.open("w", newline="", encoding="utf-8") as f:
                csv.writer(f).writerow(HEADER)
        except OSError as e:
            raise StoreError(f"Cannot create log file {path}: {e}") from e
        logger.debug("Created log file %s", path)
        return path

    def next_session_number(self, day: date) -> int:
        """Session number for the next record appended to ``day``'s file."""
        if day not in self._last_session:
            self._last_session[day] = self._count_rows(day)
        return self._last_session[day] + 1

    def append(self, record: SessionRecord) -> None:
        """Append one record and flush it to disk.

        Raises:
            StoreError: On I/O failure or an out-of-sequence session number.
        """
        expected = self.next_session_number(record.date)
        if record.session_number < expected:
            raise StoreError(
                f"Session {record.session_number} already logged for {record.date}"
            )
        if record.session_number > expected:
            raise StoreError(
                f"Session {record.session_number} out of sequence for {record.date}, "
                f"expected {expected}"
            )

        path = self.ensure_file(record.date)
        try:
            with path.open("a", newline="", encoding="utf-8") as f:
                csv.writer(f).writerow(
                    [
                        record.date.isoformat(),
                        record.project,
                        record.session_number,
                        record.duration_seconds,
                        record.note,
                    ]
                )
                f.flush()
                os.fsync(f.fileno())
        except OSError as e:
            raise StoreError(f"Cannot write to log file {path}: {e}") from e

        self._last_session[record.date] = record.session_number
        logger.info(
            "Logged session %d (%ds) to %s",
            record.session_number,
            record.duration_seconds,
            path,
        )

    def read_all(self, day: date) -> list[SessionRecord]:
        """Read every record of ``day`` in file order.

        Raises:
            OSError: If the file cannot be read.
            RecordFormatError: If the header or a row is malformed.
        """
        path = self.path_for(day)
        with path.open(newline="", encoding="utf-8") as f:
            try:
                return _parse_rows(csv.reader(f), path)
            except UnicodeDecodeError as e:
                raise RecordFormatError(f"{path.name}: not valid UTF-8 ({e})") from e

    def _count_rows(self, day: date) -> int:
        path = self.path_for(day)
        if not path.exists():
            return 0
        try:
            with path.open(newline="", encoding="utf-8") as f:
                rows = [row for row in csv.reader(f) if row]
        except (OSError, UnicodeDecodeError) as e:
            raise StoreError(f"Cannot read log file {path}: {e}") from e
        return max(0, len(rows) - 1)


def _parse_rows(reader, path: Path) -> list[SessionRecord]:
    header = next(reader, None)
    if header is None:
        return []
    if [h.strip() for h in header] != HEADER:
        raise RecordFormatError(f"{path.name}: unexpected header {header!r}")

    records: list[SessionRecord] = []
    for line_number, row in enumerate(reader, start=2):
        if not row:
            continue
        if len(row) != len(HEADER):
            raise RecordFormatError(
                f"{path.name}:{line_number}: expected {len(HEADER)} fields, got {len(row)}"
            )
        try:
            records.append(
                SessionRecord(
                    date=date.fromisoformat(row[0]),
                    project=row[1],
                    session_number=int(row[2]),
                    duration_seconds=int(row[3]),
                    note=row[4],
                )
            )
        except ValueError as e:
            raise RecordFormatError(f"{path.name}:{line_number}: {e}") from e
    return records
