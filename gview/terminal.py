"""Terminal control helpers for the TUI session.

Owns raw-mode lifecycle and alternate-screen switching, and can step out of
TUI mode temporarily while an external program owns the terminal.
"""

from __future__ import annotations

import contextlib
import os
import termios
import tty
from collections.abc import Iterator


class TerminalController:
    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_tty_state = termios.tcgetattr(stdin_fd)

    def enable_tui_mode(self) -> None:
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        # Enter alternate screen, hide cursor, and clear.
        os.write(self.stdout_fd, b"\x1b[?1049h\x1b[?25l\x1b[2J")

    def disable_tui_mode(self) -> None:
        # Show cursor and restore the main screen buffer.
        os.write(self.stdout_fd, b"\x1b[?25h\x1b[?1049l")
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    @contextlib.contextmanager
    def raw_mode(self) -> Iterator[None]:
        try:
            self.enable_tui_mode()
            yield
        finally:
            self.disable_tui_mode()
