"""Single-line filter query editor with a cyclable match mode."""

from __future__ import annotations

from ..filtering import FilterMode
from ..messages import NO_ACTION, Filtering, JumpToFileList, Message, Once, Repeatable
from ..render import Canvas, Rect
from ..ui_theme import UITheme
from .base import Panel


def mode_style(mode: FilterMode, theme: UITheme) -> str:
    if mode is FilterMode.FUZZY:
        return theme.filter_fuzzy
    if mode is FilterMode.REGEX:
        return theme.filter_regex
    return theme.filter_partial


class FilterInput(Panel):
    def __init__(self) -> None:
        super().__init__()
        self.query = ""
        self.cursor = 0
        self.mode = FilterMode.PARTIAL

    def _filtering(self) -> Message:
        return Repeatable(Filtering(self.query, self.mode))

    def handle_input(self, key: str) -> Message:
        if key == "UP":
            self.mode = self.mode.next()
            return self._filtering()
        if key == "DOWN":
            self.mode = self.mode.previous()
            return self._filtering()
        if key == "LEFT":
            self.cursor = max(0, self.cursor - 1)
            return NO_ACTION
        if key == "RIGHT":
            self.cursor = min(len(self.query), self.cursor + 1)
            return NO_ACTION
        if key == "BACKSPACE":
            if self.cursor == 0:
                return NO_ACTION
            self.query = self.query[: self.cursor - 1] + self.query[self.cursor :]
            self.cursor -= 1
            return self._filtering()
        if key == "ENTER":
            return Once(JumpToFileList())
        if len(key) == 1 and key.isprintable():
            self.query = self.query[: self.cursor] + key + self.query[self.cursor :]
            self.cursor += 1
            return self._filtering()
        return NO_ACTION

    def render(self, canvas: Canvas, rect: Rect, theme: UITheme) -> None:
        if rect.is_empty:
            return
        style = mode_style(self.mode, theme) if self.focused else theme.border_unfocused
        canvas.box(rect, self.mode.title, style, theme.reset, title_style=style)
        inner = rect.inner()
        if inner.is_empty:
            return
        # Keep the cursor cell visible when the query is wider than the box.
        start = max(0, self.cursor - inner.width + 1)
        visible = self.query[start : start + inner.width]
        if self.focused:
            offset = self.cursor - start
            under = visible[offset] if offset < len(visible) else " "
            line = f"{visible[:offset]}{theme.reverse}{under}{theme.reset}{visible[offset + 1:]}"
        else:
            line = f"{theme.text_unfocused}{visible}{theme.reset}"
        canvas.fill(inner, [line])
