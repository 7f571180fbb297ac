"""Help modal content.

Key bindings are listed once here as ``(keys, description)`` rows grouped
by section and coloured with the active theme when rendered.
"""

from __future__ import annotations

from ..ui_theme import UITheme

HELP_SECTIONS: tuple[tuple[str, tuple[tuple[str, str], ...]], ...] = (
    (
        "GLOBAL",
        (
            ("Tab", "focus next panel"),
            ("< / >", "shrink / grow the left pane"),
            ("?", "toggle this help"),
            ("Ctrl+C", "quit"),
        ),
    ),
    (
        "FILTER",
        (
            ("Type/Backspace", "edit the query"),
            ("Left/Right", "move the cursor"),
            ("Up/Down", "cycle partial, fuzzy and regex modes"),
            ("Enter", "jump to the file list"),
        ),
    ),
    (
        "FILE LIST",
        (
            ("Up/Down, k/j", "select a file"),
            ("Enter", "jump to the content view"),
        ),
    ),
    (
        "CURRENT COMMIT",
        (
            ("p / Left", "parent commit"),
            ("n / Right", "next commit"),
            ("o", "open the commit history"),
        ),
    ),
    (
        "CONTENT VIEW",
        (
            ("Up/Down, k/j", "scroll vertically"),
            ("Left/Right, h/l", "scroll horizontally"),
            ("b", "toggle blame annotations"),
            ("n", "toggle line numbers"),
            ("g", "open this commit's copy in the external viewer"),
        ),
    ),
    (
        "COMMIT HISTORY",
        (
            ("Up/Down, k/j", "select a commit"),
            ("Enter", "show the selected commit"),
            ("Esc", "close"),
        ),
    ),
)


def help_lines(theme: UITheme) -> list[str]:
    """Return the help text as styled lines, one blank line between sections."""
    key_width = max(len(keys) for _title, rows in HELP_SECTIONS for keys, _desc in rows)
    lines: list[str] = []
    for title, rows in HELP_SECTIONS:
        if lines:
            lines.append("")
        lines.append(f"{theme.help_heading}{title}{theme.reset}")
        for keys, description in rows:
            lines.append(f"  {theme.help_key}{keys:<{key_width}}{theme.reset}  {description}")
    lines.append("")
    lines.append(f"{theme.help_dim}Up/Down scroll  Esc or ? close{theme.reset}")
    return lines
