"""Filtered list of text files in the current commit."""

from __future__ import annotations

import logging

from ..errors import GviewError, LockContention
from ..filtering import NOT_FOUND_SENTINEL, FilterMode, filter_items, pattern_error
from ..messages import (
    NO_ACTION,
    ChangeShowCommit,
    Error,
    Filtering,
    JumpToContentView,
    Message,
    Once,
    Repeatable,
    SetUp,
    ShowFile,
)
from ..render import Canvas, Rect
from ..repository import SharedRepository
from ..ui_theme import UITheme
from .base import Panel, scroll_to_show

logger = logging.getLogger(__name__)

SELECTED_MARKER = ">> "


class FileList(Panel):
    def __init__(self, repository: SharedRepository) -> None:
        super().__init__()
        self.repository = repository
        self.items: list[str] = []
        self.results: list[str] = []
        self.selected = 0
        self.top = 0
        self.query = ""
        self.mode = FilterMode.PARTIAL

    def selected_path(self) -> str | None:
        if not self.results:
            return None
        return self.results[self.selected]

    def _show_selected(self) -> Message:
        path = self.selected_path()
        if path is None:
            return NO_ACTION
        return Once(ShowFile(path))

    def _reload(self) -> Message:
        try:
            with self.repository.session() as repo:
                self.items = repo.enumerate_text_files()
        except LockContention:
            logger.debug("file list reload skipped: repository busy")
            return NO_ACTION
        except GviewError as exc:
            return Error(str(exc))
        return self._apply_filter()

    def _apply_filter(self) -> Message:
        if self.mode is FilterMode.REGEX:
            detail = pattern_error(self.query)
            if detail is not None:
                self.results = []
                self.selected = 0
                self.top = 0
                return Error(f"Invalid regular expression: {detail}")

        results = filter_items(self.items, self.query, self.mode)
        self.results = results or [NOT_FOUND_SENTINEL]
        self.selected = min(self.selected, len(self.results) - 1)
        return self._show_selected()

    def handle_message(self, message: Message) -> Message:
        if not isinstance(message, Repeatable):
            return NO_ACTION
        operation = message.operation
        if isinstance(operation, (SetUp, ChangeShowCommit)):
            return self._reload()
        if isinstance(operation, Filtering):
            self.query = operation.query
            self.mode = operation.mode
            return self._apply_filter()
        return NO_ACTION

    def handle_input(self, key: str) -> Message:
        if key == "ENTER":
            return Once(JumpToContentView())
        if not self.results:
            return NO_ACTION
        if key in ("UP", "k"):
            if self.selected == 0:
                return NO_ACTION
            self.selected -= 1
            return self._show_selected()
        if key in ("DOWN", "j"):
            if self.selected >= len(self.results) - 1:
                return NO_ACTION
            self.selected += 1
            return self._show_selected()
        return NO_ACTION

    def render(self, canvas: Canvas, rect: Rect, theme: UITheme) -> None:
        if rect.is_empty:
            return
        canvas.box(rect, "Files", self.border_style(theme), theme.reset, title_style=theme.title)
        inner = rect.inner()
        if inner.is_empty:
            return
        self.top = scroll_to_show(self.top, self.selected, inner.height)
        text_style = self.text_style(theme)
        indent = " " * len(SELECTED_MARKER)
        lines: list[str] = []
        for idx in range(self.top, min(len(self.results), self.top + inner.height)):
            path = self.results[idx]
            if idx == self.selected:
                lines.append(f"{theme.list_marker}{SELECTED_MARKER}{theme.reset}{theme.reverse}{path}{theme.reset}")
            else:
                lines.append(f"{indent}{text_style}{path}{theme.reset}")
        canvas.fill(inner, lines)
