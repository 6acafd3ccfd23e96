"""Status line publishing for external consumers (e.g. a tmux status bar)."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)

IDLE_STATUS = "No pomodoro"


class StatusSink(Protocol):
    def write(self, text: str) -> None: ...


class NullStatusSink:
    """Discards status updates."""

    def write(self, text: str) -> None:
        pass


class FileStatusSink:
    """Overwrites a small file with the current status line.

    Writes are best-effort: a failure is logged at debug level and the
    countdown carries on.
    """

    def __init__(self, path: Path):
        self.path = path

    def write(self, text: str) -> None:
        try:
            self.path.write_text(text, encoding="utf-8")
        except OSError as e:
            logger.debug("Could not write status file %s: %s", self.path, e)
