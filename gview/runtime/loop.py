"""Main interactive event loop for the terminal UI.

Each tick redraws when something changed, then drains the keys that
arrive before the tick ends into the dispatcher.
"""

from __future__ import annotations

import os
import shutil
import time
from collections.abc import Callable
from dataclasses import dataclass

from ..dispatcher import Dispatcher
from ..input import read_key
from ..terminal import TerminalController
from ..ui_theme import UITheme
from .screen import compose_frame


@dataclass(frozen=True)
class RuntimeLoopTiming:
    """Timing constants controlling interactive loop behavior."""

    tick_seconds: float


def run_main_loop(
    dispatcher: Dispatcher,
    terminal: TerminalController,
    stdin_fd: int,
    stdout_fd: int,
    timing: RuntimeLoopTiming,
    theme: UITheme,
    read_key_fn: Callable[..., str] = read_key,
) -> None:
    """Run until the dispatcher asks to exit."""
    last_size: tuple[int, int] | None = None
    last_status = ""
    dirty = True

    with terminal.raw_mode():
        while not dispatcher.should_exit:
            term = shutil.get_terminal_size((80, 24))
            size = (term.columns, term.lines)
            status = dispatcher.current_status_message()
            resized = size != last_size
            if resized or status != last_status:
                last_size = size
                last_status = status
                dirty = True
            if dirty:
                frame = compose_frame(dispatcher, term.columns, term.lines, theme)
                if resized:
                    os.write(stdout_fd, b"\x1b[2J")
                frame.flush(stdout_fd)
                dirty = False

            deadline = time.monotonic() + timing.tick_seconds
            while not dispatcher.should_exit:
                remaining_ms = int((deadline - time.monotonic()) * 1000)
                if remaining_ms <= 0:
                    break
                try:
                    key = read_key_fn(stdin_fd, timeout_ms=remaining_ms)
                except KeyboardInterrupt:
                    dispatcher.should_exit = True
                    break
                if key == "":
                    break
                dispatcher.handle_key(key)
                dirty = True
