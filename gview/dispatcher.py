"""Central message dispatch and focus management.

Every input key becomes at most one originating message. ``broadcast``
delivers it to each panel in registration order and depth-first: a
non-``NoAction`` reply is fully propagated before the next panel sees the
original message. Propagation runs on an explicit work stack, and the
reply rules in ``gview.messages`` keep chains at most three hops long.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from enum import Enum

from .config import GviewConfig
from .errors import GviewError, LockContention, MessageProtocolError
from .messages import (
    ChangeShowCommit,
    CloseCommitModal,
    CloseHelpModal,
    Error,
    JumpToContentView,
    JumpToFileList,
    Message,
    NoAction,
    Once,
    Repeatable,
    SetCommitById,
    SetUp,
    ShowHelpModal,
    check_transition,
)
from .panels import (
    CommitModal,
    CommitSummary,
    ContentViewer,
    FileList,
    FilterInput,
    HelpModal,
    Panel,
)
from .panels.content_viewer import ViewerLauncher
from .repository import SharedRepository

logger = logging.getLogger(__name__)


class FocusState(Enum):
    FILTER = "filter"
    FILE_LIST = "file_list"
    COMMIT_SUMMARY = "commit_summary"
    CONTENT_VIEWER = "content_viewer"

    def next(self) -> FocusState:
        return _FOCUS_CYCLE[(_FOCUS_CYCLE.index(self) + 1) % len(_FOCUS_CYCLE)]


_FOCUS_CYCLE: tuple[FocusState, ...] = (
    FocusState.FILTER,
    FocusState.FILE_LIST,
    FocusState.COMMIT_SUMMARY,
    FocusState.CONTENT_VIEWER,
)


class Dispatcher:
    def __init__(
        self,
        repository: SharedRepository,
        config: GviewConfig | None = None,
        launch_viewer: ViewerLauncher | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.repository = repository
        self.config = config or GviewConfig()
        self.clock = clock

        self.file_list = FileList(repository)
        self.filter_input = FilterInput()
        self.content_viewer = ContentViewer(repository, style=self.config.style, launch_viewer=launch_viewer)
        self.commit_summary = CommitSummary(repository)
        self.commit_modal = CommitModal(repository)
        self.help_modal = HelpModal()
        # Delivery order for broadcasts.
        self.panels: tuple[Panel, ...] = (
            self.file_list,
            self.filter_input,
            self.content_viewer,
            self.commit_summary,
            self.commit_modal,
            self.help_modal,
        )
        self._focus_panels: dict[FocusState, Panel] = {
            FocusState.FILTER: self.filter_input,
            FocusState.FILE_LIST: self.file_list,
            FocusState.COMMIT_SUMMARY: self.commit_summary,
            FocusState.CONTENT_VIEWER: self.content_viewer,
        }
        self.max_stack_depth = 3 * len(self.panels)

        self.focus_state = FocusState.FILTER
        self.left_pane_percent = self.config.left_pane_percent
        self.should_exit = False
        self.status_message = ""
        self.status_message_until = 0.0

        self.focused_panel().on_focus()
        self.broadcast(Repeatable(SetUp()))

    def focused_panel(self) -> Panel:
        return self._focus_panels[self.focus_state]

    @property
    def modal_open(self) -> bool:
        return self.help_modal.is_open or self.commit_modal.is_open

    def focus(self, state: FocusState) -> None:
        if state is self.focus_state:
            return
        self.focused_panel().on_blur()
        self.focus_state = state
        self.focused_panel().on_focus()

    def advance_focus(self) -> None:
        self.focus(self.focus_state.next())

    def route_input(self, key: str) -> Message:
        """Ask the panel that owns input right now to turn ``key`` into a message."""
        if self.help_modal.is_open:
            return self.help_modal.handle_input(key)
        if self.commit_modal.is_open:
            return self.commit_modal.handle_input(key)
        return self.focused_panel().handle_input(key)

    def adjust_left_pane(self, delta: int) -> None:
        self.left_pane_percent = max(
            self.config.left_pane_min_percent,
            min(self.config.left_pane_max_percent, self.left_pane_percent + delta),
        )

    def toggle_help(self) -> None:
        self.broadcast(Once(CloseHelpModal() if self.help_modal.is_open else ShowHelpModal()))

    def handle_key(self, key: str) -> None:
        if key == "CTRL_C":
            self.should_exit = True
            return
        if key == "?":
            self.toggle_help()
            return
        if not self.modal_open:
            if key == "TAB":
                self.advance_focus()
                return
            if key == "<":
                self.adjust_left_pane(-self.config.left_pane_step_percent)
                return
            if key == ">":
                self.adjust_left_pane(self.config.left_pane_step_percent)
                return
        self.broadcast(self.route_input(key))

    def set_status_message(self, message: str) -> None:
        self.status_message = message
        self.status_message_until = self.clock() + self.config.status_message_seconds

    def current_status_message(self) -> str:
        if self.status_message and self.clock() < self.status_message_until:
            return self.status_message
        return ""

    def report_error(self, message: str) -> None:
        logger.warning("%s", message)
        self.set_status_message(message)

    def broadcast(self, message: Message) -> None:
        """Deliver ``message`` to every panel, propagating replies depth-first.

        A frame ``(message, index)`` means "deliver ``message`` starting at
        panel ``index``". Replies are pushed above the frame of the message
        they answer, so they finish before delivery resumes.
        """
        stack: list[tuple[Message, int]] = [(message, 0)]
        while stack:
            if len(stack) > self.max_stack_depth:
                raise MessageProtocolError(f"message propagation exceeded depth {self.max_stack_depth}")
            current, index = stack.pop()
            if isinstance(current, NoAction):
                continue
            if index == 0:
                if isinstance(current, Error):
                    self.report_error(current.message)
                if self._handle_before_panels(current, stack):
                    continue
            if index >= len(self.panels):
                continue
            stack.append((current, index + 1))
            reply = check_transition(current, self.panels[index].handle_message(current))
            if not isinstance(reply, NoAction):
                stack.append((reply, 0))

    def _handle_before_panels(self, message: Message, stack: list[tuple[Message, int]]) -> bool:
        """Act on dispatcher-level operations; return True when panels must not see ``message``."""
        if not isinstance(message, Once):
            return False
        operation = message.operation
        if isinstance(operation, JumpToContentView):
            self.focus(FocusState.CONTENT_VIEWER)
        elif isinstance(operation, JumpToFileList):
            self.focus(FocusState.FILE_LIST)
        elif isinstance(operation, SetCommitById):
            self._set_commit_by_id(operation.commit_id, stack)
            return True
        return False

    def _set_commit_by_id(self, commit_id: str, stack: list[tuple[Message, int]]) -> None:
        try:
            with self.repository.session() as repo:
                repo.set_commit_by_id(commit_id)
        except LockContention:
            logger.debug("commit selection skipped: repository busy")
            return
        except GviewError as exc:
            self.commit_modal.report_failure(str(exc))
            stack.append((Error(str(exc)), 0))
            return
        # Pushed last, popped first: the modal closes before panels refresh.
        stack.append((Repeatable(ChangeShowCommit()), 0))
        stack.append((Once(CloseCommitModal()), 0))
