"""Scrollable view of one file at the current commit.

Content is fetched together with its blame attribution, so switching
between plain, numbered and annotated rendering never needs a second
kind of query. Highlighting happens once per fetch.
"""

from __future__ import annotations

import logging
import tempfile
from collections.abc import Callable
from enum import Enum
from pathlib import Path, PurePosixPath

from ..errors import GviewError, LockContention
from ..filtering import NOT_FOUND_SENTINEL
from ..highlight import DEFAULT_STYLE, highlight_lines
from ..messages import NO_ACTION, Error, Message, Once, ShowFile
from ..render import Canvas, Rect
from ..repository import BlameLine, SharedRepository
from ..ui_theme import UITheme
from .base import Panel

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Content Viewer"
HORIZONTAL_STEP = 4
SHORT_ID_LENGTH = 8
AUTHOR_WIDTH = 12

# Called with (exported file, 1-based line); returns an error text or None.
ViewerLauncher = Callable[[Path, int], "str | None"]


class RenderMode(Enum):
    PLAIN = "plain"
    LINE_NUMBERS = "line_numbers"
    BLAME = "blame"


class ContentViewer(Panel):
    def __init__(
        self,
        repository: SharedRepository,
        style: str = DEFAULT_STYLE,
        launch_viewer: ViewerLauncher | None = None,
    ) -> None:
        super().__init__()
        self.repository = repository
        self.style = style
        self.launch_viewer = launch_viewer
        self.title = DEFAULT_TITLE
        self.path: str | None = None
        self.lines: list[BlameLine] = []
        self.highlighted: list[str] = []
        self.mode = RenderMode.PLAIN
        self.scroll_position = 0
        self.horizontal_offset = 0
        self.context_size = 0
        self.viewport_height = 0

    def _fetch(self, path: str) -> Message:
        try:
            with self.repository.session() as repo:
                lines = repo.blame_lines(path)
        except LockContention:
            logger.debug("content fetch skipped: repository busy")
            return NO_ACTION
        except GviewError as exc:
            return Error(str(exc))
        self.path = path
        self.title = path
        self.lines = lines
        self.highlighted = highlight_lines([line.content for line in lines], path, self.style)
        self.context_size = len(lines)
        self.scroll_position = 0
        return NO_ACTION

    def max_scroll(self) -> int:
        return max(0, self.context_size - self.viewport_height)

    def _toggle(self, mode: RenderMode) -> Message:
        self.mode = RenderMode.PLAIN if self.mode is mode else mode
        if self.path is None:
            return NO_ACTION
        return self._fetch(self.path)

    def _open_external(self) -> Message:
        if self.path is None or self.path == NOT_FOUND_SENTINEL:
            return NO_ACTION
        if self.launch_viewer is None:
            return Error("No external viewer configured")
        line = self.lines[self.scroll_position].line_number if self.scroll_position < len(self.lines) else 1
        try:
            with self.repository.session() as repo:
                commit_id = repo.current_commit_id
                data = repo.read_file(self.path)
        except LockContention:
            logger.debug("external view skipped: repository busy")
            return NO_ACTION
        except GviewError as exc:
            return Error(str(exc))

        # The viewer sees the file as it is at the shown commit, not the working tree.
        with tempfile.TemporaryDirectory(prefix=f"gview-{commit_id[:SHORT_ID_LENGTH]}-") as tmp:
            target = Path(tmp) / PurePosixPath(self.path).name
            target.write_bytes(data)
            error = self.launch_viewer(target, line)
        if error:
            return Error(error)
        return NO_ACTION

    def handle_message(self, message: Message) -> Message:
        if isinstance(message, Once) and isinstance(message.operation, ShowFile):
            return self._fetch(message.operation.path)
        return NO_ACTION

    def handle_input(self, key: str) -> Message:
        if key in ("UP", "k"):
            self.scroll_position = max(0, self.scroll_position - 1)
        elif key in ("DOWN", "j"):
            self.scroll_position = min(self.scroll_position + 1, self.max_scroll())
        elif key in ("LEFT", "h"):
            self.horizontal_offset = max(0, self.horizontal_offset - HORIZONTAL_STEP)
        elif key in ("RIGHT", "l"):
            self.horizontal_offset += HORIZONTAL_STEP
        elif key == "b":
            return self._toggle(RenderMode.BLAME)
        elif key == "n":
            return self._toggle(RenderMode.LINE_NUMBERS)
        elif key == "g":
            return self._open_external()
        return NO_ACTION

    def _gutter(self, line: BlameLine, number_width: int, theme: UITheme) -> str:
        if self.mode is RenderMode.LINE_NUMBERS:
            return f"{theme.line_number}{line.line_number:>{number_width}}{theme.reset} │ "
        if self.mode is RenderMode.BLAME:
            author = line.author[:AUTHOR_WIDTH]
            return (
                f"{theme.commit_id}{line.commit_id[:SHORT_ID_LENGTH]}{theme.reset} "
                f"{theme.blame_author}{author:<{AUTHOR_WIDTH}}{theme.reset} "
                f"{theme.line_number}{line.line_number:>{number_width}}{theme.reset} │ "
            )
        return ""

    def gutter_width(self) -> int:
        number_width = len(str(len(self.lines))) if self.lines else 1
        if self.mode is RenderMode.LINE_NUMBERS:
            return number_width + 3
        if self.mode is RenderMode.BLAME:
            return SHORT_ID_LENGTH + 1 + AUTHOR_WIDTH + 1 + number_width + 3
        return 0

    def render(self, canvas: Canvas, rect: Rect, theme: UITheme) -> None:
        if rect.is_empty:
            return
        canvas.box(rect, self.title, self.border_style(theme), theme.reset, title_style=theme.title)
        inner = rect.inner()
        self.viewport_height = inner.height
        self.context_size = len(self.lines)
        self.scroll_position = min(self.scroll_position, self.max_scroll())
        if inner.is_empty:
            return

        number_width = len(str(len(self.lines))) if self.lines else 1
        gutter_width = min(self.gutter_width(), inner.width)
        text_rect = Rect(inner.x + gutter_width, inner.y, inner.width - gutter_width, inner.height)
        gutter_rect = Rect(inner.x, inner.y, gutter_width, inner.height)

        end = min(len(self.lines), self.scroll_position + inner.height)
        visible = range(self.scroll_position, end)
        if gutter_width:
            canvas.fill(gutter_rect, [self._gutter(self.lines[idx], number_width, theme) for idx in visible])
        canvas.fill(text_rect, [self.highlighted[idx] for idx in visible], start_cols=self.horizontal_offset)
