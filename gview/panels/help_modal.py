"""Scrollable key-binding reference overlay."""

from __future__ import annotations

from ..messages import NO_ACTION, CloseHelpModal, Message, Once, ShowHelpModal
from ..render import Canvas, Rect
from ..render.help import help_lines
from ..ui_theme import PLAIN_THEME, UITheme
from .base import ModalPanel

TITLE = "Help"


class HelpModal(ModalPanel):
    def __init__(self) -> None:
        super().__init__()
        self.scroll_offset = 0
        self.line_count = len(help_lines(PLAIN_THEME))
        self.visible_rows = 0

    def max_scroll(self) -> int:
        return max(0, self.line_count - self.visible_rows)

    def handle_message(self, message: Message) -> Message:
        if not isinstance(message, Once):
            return NO_ACTION
        if isinstance(message.operation, ShowHelpModal):
            self.is_open = True
            self.scroll_offset = 0
        elif isinstance(message.operation, CloseHelpModal):
            self.is_open = False
        return NO_ACTION

    def handle_input(self, key: str) -> Message:
        if not self.is_open:
            return NO_ACTION
        if key == "ESC":
            return Once(CloseHelpModal())
        if key in ("UP", "k"):
            self.scroll_offset = max(0, self.scroll_offset - 1)
        elif key in ("DOWN", "j"):
            self.scroll_offset = min(self.max_scroll(), self.scroll_offset + 1)
        return NO_ACTION

    def render(self, canvas: Canvas, rect: Rect, theme: UITheme) -> None:
        if not self.is_open:
            return
        area = self.modal_rect(rect)
        if area.is_empty:
            return
        lines = help_lines(theme)
        self.line_count = len(lines)
        canvas.box(area, TITLE, theme.modal_border, theme.reset, title_style=theme.title)
        inner = area.inner()
        self.visible_rows = inner.height
        self.scroll_offset = min(self.scroll_offset, self.max_scroll())
        canvas.fill(inner, [f" {line}" for line in lines[self.scroll_offset :]])
