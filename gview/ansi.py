"""ANSI-aware measurement and horizontal slicing of styled lines.

Escape sequences never count toward width, so highlighted content can be
scrolled sideways and clipped to a panel without breaking colours.
"""

from __future__ import annotations

import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
TAB_STOP = 8
RESET = "\033[0m"


def char_display_width(ch: str, col: int) -> int:
    """Return terminal column width for ``ch`` drawn at visual column ``col``."""
    if ch == "\t":
        return TAB_STOP - (col % TAB_STOP)
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def display_width(text: str) -> int:
    col = 0
    for ch in ANSI_ESCAPE_RE.sub("", text):
        col += char_display_width(ch, col)
    return col


def slice_ansi_line(text: str, start_cols: int, max_cols: int) -> str:
    """Return the ``max_cols`` wide window of ``text`` starting at ``start_cols``.

    When the window opens after a style sequence, the latest SGR sequence is
    re-emitted so visible text keeps its colour. Tabs expand to spaces.
    """
    if max_cols <= 0 or not text:
        return ""
    start_cols = max(0, start_cols)

    out: list[str] = []
    col = 0
    shown = 0
    i = 0
    n = len(text)
    pending_sgr = ""
    injected_style = False
    while i < n and shown < max_cols:
        if text[i] == "\x1b":
            match = ANSI_ESCAPE_RE.match(text, i)
            if match:
                seq = match.group(0)
                if seq.endswith("m"):
                    pending_sgr = seq
                    if col >= start_cols:
                        out.append(seq)
                        injected_style = True
                i = match.end()
                continue
        ch = text[i]
        w = char_display_width(ch, col)
        if col + w <= start_cols:
            col += w
            i += 1
            continue
        if not injected_style and pending_sgr:
            out.append(pending_sgr)
            injected_style = True
        if ch == "\t":
            fill = min(w, max_cols - shown)
            out.append(" " * fill)
            shown += fill
            col += w
            i += 1
            continue
        if shown + w > max_cols:
            break
        out.append(ch)
        shown += w
        col += w
        i += 1

    return "".join(out)


def fit_ansi_line(text: str, width: int, start_cols: int = 0) -> str:
    """Slice ``text`` to exactly ``width`` columns, padding with spaces."""
    if width <= 0:
        return ""
    visible = slice_ansi_line(text, start_cols, width)
    padding = width - display_width(visible)
    suffix = RESET if "\x1b" in visible else ""
    return f"{visible}{suffix}{' ' * max(0, padding)}"
