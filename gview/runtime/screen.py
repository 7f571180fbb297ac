"""Frame composition: splits the terminal into panel rectangles and draws them."""

from __future__ import annotations

from dataclasses import dataclass

from ..dispatcher import Dispatcher, FocusState
from ..render import Canvas, Rect, build_status_line
from ..ui_theme import UITheme

HEADER_ROWS = 3

_FOCUS_LABELS: dict[FocusState, str] = {
    FocusState.FILTER: "filter",
    FocusState.FILE_LIST: "files",
    FocusState.COMMIT_SUMMARY: "commit",
    FocusState.CONTENT_VIEWER: "content",
}


@dataclass(frozen=True)
class ScreenLayout:
    filter_rect: Rect
    file_list_rect: Rect
    commit_rect: Rect
    content_rect: Rect
    body_rect: Rect
    status_row: int


def compute_layout(width: int, height: int, left_pane_percent: int) -> ScreenLayout:
    """Place the filter over the file list on the left and the commit over the content on the right."""
    body = Rect(0, 0, max(0, width), max(0, height - 1))
    left, right = body.split_left(body.width * left_pane_percent // 100)
    filter_rect, file_list_rect = left.split_top(HEADER_ROWS)
    commit_rect, content_rect = right.split_top(HEADER_ROWS)
    return ScreenLayout(
        filter_rect=filter_rect,
        file_list_rect=file_list_rect,
        commit_rect=commit_rect,
        content_rect=content_rect,
        body_rect=body,
        status_row=max(0, height - 1),
    )


def status_text(dispatcher: Dispatcher) -> str:
    message = dispatcher.current_status_message()
    if message:
        return f" {message}"
    return f" [{_FOCUS_LABELS[dispatcher.focus_state]}] Tab focus  Ctrl+C quit"


def compose_frame(dispatcher: Dispatcher, width: int, height: int, theme: UITheme) -> Canvas:
    canvas = Canvas(width, height)
    layout = compute_layout(width, height, dispatcher.left_pane_percent)
    dispatcher.filter_input.render(canvas, layout.filter_rect, theme)
    dispatcher.file_list.render(canvas, layout.file_list_rect, theme)
    dispatcher.commit_summary.render(canvas, layout.commit_rect, theme)
    dispatcher.content_viewer.render(canvas, layout.content_rect, theme)
    dispatcher.commit_modal.render(canvas, layout.body_rect, theme)
    dispatcher.help_modal.render(canvas, layout.body_rect, theme)

    line = build_status_line(status_text(dispatcher), width)
    if dispatcher.current_status_message():
        line = f"{theme.status_error}{line}{theme.reset}"
    canvas.fill(Rect(0, layout.status_row, width, 1), [line])
    return canvas
