"""Syntax highlighting and terminal sanitization for file content.

Pygments renders each file once per fetch; lexers are picked by filename
and fall back to plain text when no lexer matches.
"""

from __future__ import annotations

import re
from functools import lru_cache

from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers import TextLexer, get_lexer_for_filename
from pygments.styles import get_all_styles
from pygments.util import ClassNotFound

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")
DEFAULT_STYLE = "monokai"


def sanitize_terminal_text(source: str) -> str:
    """Escape terminal control bytes so file content cannot move the cursor or ring the bell."""
    if _CONTROL_RE.search(source) is None:
        return source
    return _CONTROL_RE.sub(lambda match: f"\\x{ord(match.group(0)):02x}", source)


def _escape_line(line: str) -> str:
    # Pygments treats a lone carriage return as a line break.
    return sanitize_terminal_text(line.replace("\r", "\\x0d"))


@lru_cache(maxsize=None)
def _formatter_for_style(style: str) -> TerminalFormatter:
    if style not in set(get_all_styles()):
        style = DEFAULT_STYLE
    return TerminalFormatter(style=style)


def highlight_lines(lines: list[str], path: str, style: str = DEFAULT_STYLE) -> list[str]:
    """Return ``lines`` colourized for ``path``, one output line per input line."""
    if not lines:
        return []
    escaped = [_escape_line(line) for line in lines]
    source = "\n".join(escaped) + "\n"
    try:
        lexer = get_lexer_for_filename(path, source, stripnl=False, ensurenl=False)
    except ClassNotFound:
        lexer = TextLexer(stripnl=False, ensurenl=False)
    rendered = highlight(source, lexer, _formatter_for_style(style)).split("\n")
    if len(rendered) < len(lines):
        return escaped
    return rendered[: len(lines)]
