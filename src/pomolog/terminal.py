"""Keyboard and prompt ports backed by the controlling terminal."""

from __future__ import annotations

import logging
import os
import select
import sys
from typing import Protocol, TextIO

logger = logging.getLogger(__name__)


class KeySource(Protocol):
    """Non-blocking single-key input, active inside a ``with`` block."""

    def __enter__(self) -> KeySource: ...

    def __exit__(self, *exc: object) -> None: ...

    def poll(self) -> str | None: ...


class Prompter(Protocol):
    def prompt(self, text: str) -> str: ...


class NullKeys:
    """Key source for non-interactive use: never reports a key."""

    def __enter__(self) -> NullKeys:
        return self

    def __exit__(self, *exc: object) -> None:
        pass

    def poll(self) -> str | None:
        return None


class TerminalKeys:
    """Reads single keys from a TTY without blocking.

    While the ``with`` block is active the terminal is in cbreak mode so
    keys arrive without Enter. If stdin is not a terminal (or termios is
    unavailable) polling degrades to "no key" and only Ctrl-C can stop a
    countdown.
    """

    def __init__(self, stream: TextIO | None = None):
        self.stream = stream or sys.stdin
        self._saved_attrs = None
        self._enabled = False
        self._warned = False

    def __enter__(self) -> TerminalKeys:
        self._enabled = self._enter_cbreak()
        return self

    def __exit__(self, *exc: object) -> None:
        if self._saved_attrs is not None:
            import termios

            try:
                termios.tcsetattr(
                    self.stream.fileno(), termios.TCSADRAIN, self._saved_attrs
                )
            except (OSError, termios.error) as e:
                logger.warning("Could not restore terminal settings: %s", e)
            self._saved_attrs = None
        self._enabled = False

    def poll(self) -> str | None:
        if not self._enabled:
            return None
        try:
            ready, _, _ = select.select([self.stream], [], [], 0)
        except (OSError, ValueError) as e:
            self._degrade(f"key polling failed: {e}")
            return None
        if not ready:
            return None
        try:
            data = os.read(self.stream.fileno(), 1)
        except OSError as e:
            self._degrade(f"cannot read key: {e}")
            return None
        if not data:
            # EOF on stdin
            self._degrade("stdin closed")
            return None
        if data == b"\x1b":
            # Arrow and function keys: discard the rest of the sequence
            self._drain()
            return None
        return data.decode("utf-8", errors="ignore") or None

    def _drain(self) -> None:
        fd = self.stream.fileno()
        try:
            while select.select([self.stream], [], [], 0)[0]:
                if not os.read(fd, 32):
                    break
        except (OSError, ValueError) as e:
            logger.debug("Could not discard escape sequence: %s", e)

    def _enter_cbreak(self) -> bool:
        try:
            import termios
            import tty
        except ImportError:
            self._degrade("termios is not available on this platform")
            return False

        try:
            fd = self.stream.fileno()
            if not self.stream.isatty():
                self._degrade("stdin is not a terminal")
                return False
            self._saved_attrs = termios.tcgetattr(fd)
            tty.setcbreak(fd)
            # Drop anything typed before the countdown started
            termios.tcflush(fd, termios.TCIFLUSH)
        except (OSError, ValueError, termios.error) as e:
            self._degrade(f"cannot configure terminal: {e}")
            return False
        return True

    def _degrade(self, reason: str) -> None:
        self._enabled = False
        if not self._warned:
            logger.warning(
                "Keyboard controls disabled (%s); press Ctrl-C to stop", reason
            )
            self._warned = True


class ConsolePrompter:
    """Line-oriented prompts on stdin/stdout."""

    def prompt(self, text: str) -> str:
        try:
            return input(text).strip()
        except EOFError:
            return ""
