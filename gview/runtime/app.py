"""Wires the repository, dispatcher, terminal, and loop into a running session."""

from __future__ import annotations

import os
import sys
from pathlib import Path

from ..config import GviewConfig
from ..dispatcher import Dispatcher
from ..editor import launch_viewer
from ..repository import RepositoryCursor, SharedRepository
from ..terminal import TerminalController
from ..ui_theme import resolve_theme
from .loop import RuntimeLoopTiming, run_main_loop


def run_browser(cursor: RepositoryCursor, config: GviewConfig) -> None:
    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    if not os.isatty(stdin_fd) or not os.isatty(stdout_fd):
        raise SystemExit("gview needs an interactive terminal.")

    terminal = TerminalController(stdin_fd, stdout_fd)

    def open_in_viewer(target: Path, line: int) -> str | None:
        return launch_viewer(target, line, terminal.disable_tui_mode, terminal.enable_tui_mode)

    dispatcher = Dispatcher(SharedRepository(cursor), config=config, launch_viewer=open_in_viewer)
    run_main_loop(
        dispatcher,
        terminal,
        stdin_fd,
        stdout_fd,
        timing=RuntimeLoopTiming(tick_seconds=config.tick_ms / 1000.0),
        theme=resolve_theme(config.theme),
    )
