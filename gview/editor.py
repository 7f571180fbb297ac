"""External viewer launch for the file under the content view.

Runs ``$GVIEW_VIEWER`` (falling back to ``$EDITOR`` then ``$VISUAL``) as
``<viewer> +<line> <path>`` while TUI mode is suspended. Returns an error
message string instead of raising for UI-friendly handling.
"""

from __future__ import annotations

import os
import shlex
import subprocess
from collections.abc import Callable
from pathlib import Path

VIEWER_ENV_VARS = ("GVIEW_VIEWER", "EDITOR", "VISUAL")


def viewer_command() -> list[str] | None:
    for name in VIEWER_ENV_VARS:
        value = os.environ.get(name, "").strip()
        if value:
            return shlex.split(value) or None
    return None


def launch_viewer(
    target: Path,
    line: int,
    disable_tui_mode: Callable[[], None],
    enable_tui_mode: Callable[[], None],
) -> str | None:
    cmd = viewer_command()
    if not cmd:
        return "Cannot open viewer: set $GVIEW_VIEWER or $EDITOR."
    if not target.is_file():
        return f"Cannot open viewer: {target} does not exist."

    disable_tui_mode()
    try:
        subprocess.run([*cmd, f"+{max(1, line)}", str(target)], check=False)
    except OSError as exc:
        return f"Failed to launch viewer: {exc}"
    finally:
        enable_tui_mode()
    return None
