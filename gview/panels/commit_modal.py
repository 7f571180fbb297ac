"""Commit history picker shown as a centered overlay."""

from __future__ import annotations

import logging

from ..errors import GviewError, LockContention
from ..messages import (
    NO_ACTION,
    CloseCommitModal,
    Error,
    Message,
    Once,
    OpenCommitModal,
    SetCommitById,
)
from ..render import Canvas, Rect
from ..repository import SharedRepository
from ..ui_theme import UITheme
from .base import ModalPanel, scroll_to_show

logger = logging.getLogger(__name__)

TITLE = "All Commit History (Enter to select, Esc to cancel)"
SHORT_ID_LENGTH = 8
SELECTED_MARKER = "→ "


class CommitModal(ModalPanel):
    def __init__(self, repository: SharedRepository) -> None:
        super().__init__()
        self.repository = repository
        self.commits: list[tuple[str, str]] = []
        self.selected = 0
        self.top = 0
        self.error_message = ""

    def _open(self) -> Message:
        try:
            with self.repository.session() as repo:
                commits = repo.commit_history()
                current = repo.current_commit_id
        except LockContention:
            logger.debug("commit history skipped: repository busy")
            return NO_ACTION
        except GviewError as exc:
            return Error(str(exc))
        self.commits = commits
        self.selected = next((idx for idx, (commit_id, _s) in enumerate(commits) if commit_id == current), 0)
        self.top = 0
        self.error_message = ""
        self.is_open = True
        return NO_ACTION

    def report_failure(self, message: str) -> None:
        self.error_message = message

    def handle_message(self, message: Message) -> Message:
        if not isinstance(message, Once):
            return NO_ACTION
        if isinstance(message.operation, OpenCommitModal):
            return self._open()
        if isinstance(message.operation, CloseCommitModal):
            self.is_open = False
            self.error_message = ""
        return NO_ACTION

    def handle_input(self, key: str) -> Message:
        if not self.is_open:
            return NO_ACTION
        if key == "ESC":
            return Once(CloseCommitModal())
        if key == "ENTER":
            if not self.commits:
                return NO_ACTION
            return Once(SetCommitById(self.commits[self.selected][0]))
        if key in ("UP", "k"):
            self.selected = max(0, self.selected - 1)
        elif key in ("DOWN", "j"):
            self.selected = min(max(0, len(self.commits) - 1), self.selected + 1)
        return NO_ACTION

    def render(self, canvas: Canvas, rect: Rect, theme: UITheme) -> None:
        if not self.is_open:
            return
        area = self.modal_rect(rect)
        if area.is_empty:
            return
        canvas.box(area, TITLE, theme.modal_border, theme.reset, title_style=theme.title)
        inner = area.inner()
        if inner.is_empty:
            return
        list_rect, error_rect = inner, Rect(inner.x, inner.y + inner.height, inner.width, 0)
        if self.error_message and inner.height > 1:
            list_rect, error_rect = inner.split_top(inner.height - 1)

        self.top = scroll_to_show(self.top, self.selected, list_rect.height)
        indent = " " * len(SELECTED_MARKER)
        lines: list[str] = []
        for idx in range(self.top, min(len(self.commits), self.top + list_rect.height)):
            commit_id, summary = self.commits[idx]
            entry = f"{theme.commit_id}{commit_id[:SHORT_ID_LENGTH]}{theme.reset} {summary}"
            if idx == self.selected:
                lines.append(f"{theme.list_marker}{SELECTED_MARKER}{theme.reset}{theme.reverse}{entry}{theme.reset}")
            else:
                lines.append(f"{indent}{entry}")
        canvas.fill(list_rect, lines)
        if not error_rect.is_empty:
            canvas.fill(error_rect, [f"{theme.status_error}{self.error_message}{theme.reset}"])
