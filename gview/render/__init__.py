"""Screen primitives: rectangles, an off-screen canvas, boxes, status line.

Panels draw into a ``Canvas`` inside the ``Rect`` they are given; the
canvas is serialized into one cursor-addressed ANSI write per frame.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from ..ansi import display_width, fit_ansi_line


@dataclass(frozen=True)
class Rect:
    x: int
    y: int
    width: int
    height: int

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def inner(self) -> Rect:
        """Area left inside a one-cell border."""
        return Rect(self.x + 1, self.y + 1, max(0, self.width - 2), max(0, self.height - 2))

    def centered(self, percent_x: int, percent_y: int) -> Rect:
        width = self.width * percent_x // 100
        height = self.height * percent_y // 100
        return Rect(self.x + (self.width - width) // 2, self.y + (self.height - height) // 2, width, height)

    def split_top(self, rows: int) -> tuple[Rect, Rect]:
        rows = max(0, min(rows, self.height))
        top = Rect(self.x, self.y, self.width, rows)
        rest = Rect(self.x, self.y + rows, self.width, self.height - rows)
        return top, rest

    def split_left(self, cols: int) -> tuple[Rect, Rect]:
        cols = max(0, min(cols, self.width))
        left = Rect(self.x, self.y, cols, self.height)
        rest = Rect(self.x + cols, self.y, self.width - cols, self.height)
        return left, rest


class Canvas:
    """Collects positioned row fragments for one frame."""

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self._ops: list[tuple[int, int, str]] = []

    def put(self, x: int, y: int, text: str) -> None:
        if 0 <= y < self.height and 0 <= x < self.width and text:
            self._ops.append((x, y, text))

    def fill(self, rect: Rect, lines: list[str], start_cols: int = 0) -> None:
        """Draw ``lines`` into ``rect``, padding every row to the full width."""
        if rect.is_empty:
            return
        for row in range(rect.height):
            text = lines[row] if row < len(lines) else ""
            self.put(rect.x, rect.y + row, fit_ansi_line(text, rect.width, start_cols))

    def box(self, rect: Rect, title: str, style: str, reset: str, title_style: str = "") -> None:
        """Draw a rounded border with ``title`` in the top edge."""
        if rect.width < 2 or rect.height < 2:
            return
        inner_w = rect.width - 2
        label = fit_ansi_line(f" {title} ", min(inner_w, display_width(title) + 2)) if title and inner_w > 2 else ""
        label_w = display_width(label)
        top = f"{style}╭{reset}{title_style}{label}{reset}{style}{'─' * (inner_w - label_w)}╮{reset}"
        self.put(rect.x, rect.y, top)
        for row in range(1, rect.height - 1):
            self.put(rect.x, rect.y + row, f"{style}│{reset}")
            self.put(rect.x + rect.width - 1, rect.y + row, f"{style}│{reset}")
        self.put(rect.x, rect.y + rect.height - 1, f"{style}╰{'─' * inner_w}╯{reset}")

    def to_bytes(self) -> bytes:
        out: list[str] = ["\033[H"]
        for x, y, text in self._ops:
            out.append(f"\033[{y + 1};{x + 1}H")
            out.append(text)
            out.append("\033[0m")
        return "".join(out).encode("utf-8", errors="replace")

    def flush(self, fd: int) -> None:
        os.write(fd, self.to_bytes())


def build_status_line(left_text: str, width: int, right_text: str = "│ ? Help") -> str:
    usable = max(1, width - 1)
    if usable <= len(right_text):
        return right_text[-usable:]
    left_limit = max(0, usable - len(right_text) - 1)
    left = left_text[:left_limit]
    gap = " " * (usable - len(left) - len(right_text))
    return f"{left}{gap}{right_text}"
