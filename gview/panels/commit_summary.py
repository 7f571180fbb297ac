"""One-line summary of the commit under the cursor, with parent/next stepping."""

from __future__ import annotations

import logging
from collections.abc import Callable

from ..errors import GviewError, LockContention
from ..messages import (
    NO_ACTION,
    ChangeShowCommit,
    Error,
    Message,
    Once,
    OpenCommitModal,
    Repeatable,
    SetUp,
)
from ..render import Canvas, Rect
from ..repository import RepositoryCursor, SharedRepository
from ..ui_theme import UITheme
from .base import Panel

logger = logging.getLogger(__name__)


class CommitSummary(Panel):
    def __init__(self, repository: SharedRepository) -> None:
        super().__init__()
        self.repository = repository
        self.commit_id = ""
        self.message = ""

    @property
    def content(self) -> str:
        if not self.commit_id:
            return ""
        return f"{self.commit_id}: {self.message}"

    def _refresh(self) -> Message:
        try:
            with self.repository.session() as repo:
                self.commit_id, self.message = repo.current_commit()
        except LockContention:
            logger.debug("commit summary refresh skipped: repository busy")
            return NO_ACTION
        except GviewError as exc:
            return Error(str(exc))
        return NO_ACTION

    def _move(self, step: Callable[[RepositoryCursor], object]) -> Message:
        try:
            with self.repository.session() as repo:
                before = repo.current_commit_id
                step(repo)
                moved = repo.current_commit_id != before
        except LockContention:
            logger.debug("commit step skipped: repository busy")
            return NO_ACTION
        except GviewError as exc:
            return Error(str(exc))
        if not moved:
            return NO_ACTION
        return Repeatable(ChangeShowCommit())

    def handle_message(self, message: Message) -> Message:
        if isinstance(message, Repeatable) and isinstance(message.operation, (SetUp, ChangeShowCommit)):
            return self._refresh()
        return NO_ACTION

    def handle_input(self, key: str) -> Message:
        if key == "o":
            return Once(OpenCommitModal())
        if key in ("p", "LEFT"):
            return self._move(RepositoryCursor.set_parent_commit)
        if key in ("n", "RIGHT"):
            return self._move(RepositoryCursor.set_next_commit)
        return NO_ACTION

    def render(self, canvas: Canvas, rect: Rect, theme: UITheme) -> None:
        if rect.is_empty:
            return
        canvas.box(rect, "Current Commit", self.border_style(theme), theme.reset, title_style=theme.title)
        inner = rect.inner()
        if inner.is_empty or not self.commit_id:
            canvas.fill(inner, [])
            return
        subject = self.message.split("\n", 1)[0]
        line = f"{theme.commit_id}{self.commit_id}{theme.reset}: {self.text_style(theme)}{subject}{theme.reset}"
        canvas.fill(inner, [line])
