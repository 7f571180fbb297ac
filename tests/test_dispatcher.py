"""Tests for message propagation, focus handling, and global keys.

Most tests go through ``Dispatcher.handle_key`` so the whole chain from a
keypress to panel state is exercised against an in-memory repository.
"""

from __future__ import annotations

import unittest

from fakes import C1, C2, C3, FakeCursor, make_dispatcher

from gview.config import GviewConfig
from gview.dispatcher import FocusState
from gview.errors import MessageProtocolError
from gview.filtering import FilterMode
from gview.messages import (
    NO_ACTION,
    ChangeShowCommit,
    CloseCommitModal,
    Error,
    Message,
    Once,
    Repeatable,
    SetCommitById,
    SetUp,
    ShowFile,
)
from gview.panels import Panel


class _RecordingPanel(Panel):
    def __init__(self, name: str, log: list[tuple[str, Message]], replies: dict | None = None) -> None:
        super().__init__()
        self.name = name
        self.log = log
        self.replies = replies or {}

    def handle_message(self, message: Message) -> Message:
        self.log.append((self.name, message))
        return self.replies.get(message, NO_ACTION)


def _record_deliveries(panel: Panel, name: str, log: list[tuple[str, Message]]) -> None:
    original = panel.handle_message

    def wrapper(message: Message) -> Message:
        log.append((name, message))
        return original(message)

    panel.handle_message = wrapper  # type: ignore[method-assign]


class StartupTests(unittest.TestCase):
    def test_setup_populates_every_panel(self) -> None:
        dispatcher, _cursor, _clock = make_dispatcher()
        self.assertEqual(dispatcher.file_list.results, ["a.txt", "b.txt", "readme.md"])
        self.assertEqual(dispatcher.content_viewer.path, "a.txt")
        self.assertEqual(dispatcher.commit_summary.content, f"{C3}: third")
        self.assertEqual(dispatcher.current_status_message(), "")

    def test_initial_focus_is_filter(self) -> None:
        dispatcher, _cursor, _clock = make_dispatcher()
        self.assertIs(dispatcher.focus_state, FocusState.FILTER)
        self.assertTrue(dispatcher.filter_input.focused)

    def test_startup_at_selected_commit(self) -> None:
        cursor = FakeCursor()
        cursor.set_commit_by_id(C1)
        dispatcher, _cursor, _clock = make_dispatcher(cursor)
        self.assertEqual(dispatcher.file_list.results, ["a.txt"])
        self.assertEqual(dispatcher.commit_summary.content, f"{C1}: first")


class FocusTests(unittest.TestCase):
    def test_tab_cycles_through_four_panels(self) -> None:
        dispatcher, _cursor, _clock = make_dispatcher()
        seen = []
        for _ in range(4):
            dispatcher.handle_key("TAB")
            seen.append(dispatcher.focus_state)
            focused = [panel for panel in dispatcher.panels if panel.focused]
            self.assertEqual(focused, [dispatcher.focused_panel()])
        self.assertEqual(
            seen,
            [FocusState.FILE_LIST, FocusState.COMMIT_SUMMARY, FocusState.CONTENT_VIEWER, FocusState.FILTER],
        )

    def test_enter_jumps_filter_to_list_to_content(self) -> None:
        dispatcher, _cursor, _clock = make_dispatcher()
        dispatcher.handle_key("ENTER")
        self.assertIs(dispatcher.focus_state, FocusState.FILE_LIST)
        self.assertFalse(dispatcher.filter_input.focused)
        dispatcher.handle_key("ENTER")
        self.assertIs(dispatcher.focus_state, FocusState.CONTENT_VIEWER)
        self.assertTrue(dispatcher.content_viewer.focused)

    def test_keys_go_to_focused_panel_only(self) -> None:
        dispatcher, _cursor, _clock = make_dispatcher()
        dispatcher.handle_key("j")
        self.assertEqual(dispatcher.filter_input.query, "j")
        self.assertEqual(dispatcher.file_list.selected, 0)


class FilterFlowTests(unittest.TestCase):
    def test_typing_filters_list_and_updates_content(self) -> None:
        dispatcher, _cursor, _clock = make_dispatcher()
        dispatcher.handle_key("r")
        self.assertEqual(dispatcher.file_list.results, ["readme.md"])
        self.assertEqual(dispatcher.content_viewer.path, "readme.md")

        dispatcher.handle_key("BACKSPACE")
        self.assertEqual(dispatcher.file_list.results, ["a.txt", "b.txt", "readme.md"])

    def test_no_match_clears_content(self) -> None:
        dispatcher, _cursor, _clock = make_dispatcher()
        for ch in "zzz":
            dispatcher.handle_key(ch)
        self.assertEqual(dispatcher.file_list.results, ["not found"])
        self.assertEqual(dispatcher.content_viewer.lines, [])

    def test_invalid_regex_reports_error_and_keeps_content(self) -> None:
        dispatcher, _cursor, _clock = make_dispatcher()
        dispatcher.handle_key("UP")
        dispatcher.handle_key("UP")
        self.assertIs(dispatcher.filter_input.mode, FilterMode.REGEX)
        dispatcher.handle_key("(")
        self.assertEqual(dispatcher.file_list.results, [])
        self.assertEqual(dispatcher.content_viewer.path, "a.txt")
        self.assertIn("Invalid regular expression", dispatcher.current_status_message())


class CommitNavigationTests(unittest.TestCase):
    def _focus_commit_summary(self, dispatcher) -> None:
        dispatcher.focus(FocusState.COMMIT_SUMMARY)

    def test_parent_commit_refreshes_every_panel(self) -> None:
        dispatcher, cursor, _clock = make_dispatcher()
        self._focus_commit_summary(dispatcher)
        dispatcher.handle_key("p")
        self.assertEqual(cursor.current_commit_id, C2)
        self.assertEqual(dispatcher.commit_summary.content, f"{C2}: second\n\nlonger body")
        self.assertEqual(dispatcher.file_list.results, ["a.txt", "notes.md"])
        self.assertEqual([line.content for line in dispatcher.content_viewer.lines], ["alpha", "beta"])

    def test_parent_of_root_is_silent(self) -> None:
        cursor = FakeCursor()
        cursor.set_commit_by_id(C1)
        dispatcher, _cursor, _clock = make_dispatcher(cursor)
        self._focus_commit_summary(dispatcher)
        dispatcher.handle_key("p")
        self.assertEqual(cursor.current_commit_id, C1)
        self.assertEqual(dispatcher.current_status_message(), "")

    def test_commit_modal_selection_moves_cursor(self) -> None:
        dispatcher, cursor, _clock = make_dispatcher()
        self._focus_commit_summary(dispatcher)
        dispatcher.handle_key("o")
        self.assertTrue(dispatcher.commit_modal.is_open)
        self.assertEqual(dispatcher.commit_modal.selected, 0)

        dispatcher.handle_key("DOWN")
        dispatcher.handle_key("DOWN")
        dispatcher.handle_key("ENTER")
        self.assertFalse(dispatcher.commit_modal.is_open)
        self.assertEqual(cursor.current_commit_id, C1)
        self.assertEqual(dispatcher.commit_summary.content, f"{C1}: first")
        self.assertEqual(dispatcher.file_list.results, ["a.txt"])

    def test_modal_closes_before_panels_refresh(self) -> None:
        dispatcher, _cursor, _clock = make_dispatcher()
        log: list[tuple[str, Message]] = []
        _record_deliveries(dispatcher.commit_modal, "modal", log)
        _record_deliveries(dispatcher.file_list, "files", log)

        dispatcher.broadcast(Once(SetCommitById(C2)))

        close_at = log.index(("modal", Once(CloseCommitModal())))
        refresh_at = log.index(("files", Repeatable(ChangeShowCommit())))
        self.assertLess(close_at, refresh_at)
        self.assertNotIn(("files", Once(SetCommitById(C2))), log)

    def test_failed_selection_keeps_modal_and_cursor(self) -> None:
        dispatcher, cursor, _clock = make_dispatcher()
        self._focus_commit_summary(dispatcher)
        dispatcher.handle_key("o")

        dispatcher.broadcast(Once(SetCommitById("2")))

        self.assertTrue(dispatcher.commit_modal.is_open)
        self.assertEqual(cursor.current_commit_id, C3)
        self.assertIn("Ambiguous commit id: 2", dispatcher.commit_modal.error_message)
        self.assertIn("Ambiguous commit id: 2", dispatcher.current_status_message())

    def test_modal_captures_input(self) -> None:
        dispatcher, _cursor, _clock = make_dispatcher()
        dispatcher.focus(FocusState.COMMIT_SUMMARY)
        dispatcher.handle_key("o")
        dispatcher.handle_key("TAB")
        self.assertIs(dispatcher.focus_state, FocusState.COMMIT_SUMMARY)
        dispatcher.handle_key("ESC")
        self.assertFalse(dispatcher.commit_modal.is_open)


class GlobalKeyTests(unittest.TestCase):
    def test_ctrl_c_requests_exit(self) -> None:
        dispatcher, _cursor, _clock = make_dispatcher()
        dispatcher.handle_key("CTRL_C")
        self.assertTrue(dispatcher.should_exit)

    def test_left_pane_resize_is_clamped(self) -> None:
        dispatcher, _cursor, _clock = make_dispatcher()
        self.assertEqual(dispatcher.left_pane_percent, 15)
        dispatcher.handle_key("<")
        self.assertEqual(dispatcher.left_pane_percent, 15)
        dispatcher.handle_key(">")
        self.assertEqual(dispatcher.left_pane_percent, 20)
        for _ in range(20):
            dispatcher.handle_key(">")
        self.assertEqual(dispatcher.left_pane_percent, 70)

    def test_left_pane_limits_come_from_config(self) -> None:
        config = GviewConfig(left_pane_percent=30, left_pane_min_percent=20, left_pane_max_percent=40)
        dispatcher, _cursor, _clock = make_dispatcher(config=config)
        for _ in range(5):
            dispatcher.handle_key("<")
        self.assertEqual(dispatcher.left_pane_percent, 20)

    def test_help_toggles_and_captures_input(self) -> None:
        dispatcher, _cursor, _clock = make_dispatcher()
        dispatcher.handle_key("?")
        self.assertTrue(dispatcher.help_modal.is_open)
        dispatcher.handle_key("j")
        self.assertEqual(dispatcher.help_modal.scroll_offset, 1)
        self.assertEqual(dispatcher.filter_input.query, "")
        dispatcher.handle_key("?")
        self.assertFalse(dispatcher.help_modal.is_open)

        dispatcher.handle_key("?")
        dispatcher.handle_key("ESC")
        self.assertFalse(dispatcher.help_modal.is_open)


class BroadcastTests(unittest.TestCase):
    def test_replies_propagate_depth_first(self) -> None:
        dispatcher, _cursor, _clock = make_dispatcher()
        log: list[tuple[str, Message]] = []
        first = _RecordingPanel("first", log, {Repeatable(SetUp()): Once(ShowFile("x"))})
        second = _RecordingPanel("second", log)
        dispatcher.panels = (first, second)

        dispatcher.broadcast(Repeatable(SetUp()))

        self.assertEqual(
            log,
            [
                ("first", Repeatable(SetUp())),
                ("first", Once(ShowFile("x"))),
                ("second", Once(ShowFile("x"))),
                ("second", Repeatable(SetUp())),
            ],
        )

    def test_error_reply_reaches_status_line_and_panels(self) -> None:
        dispatcher, _cursor, clock = make_dispatcher()
        log: list[tuple[str, Message]] = []
        first = _RecordingPanel("first", log, {Once(ShowFile("x")): Error("no such file")})
        second = _RecordingPanel("second", log)
        dispatcher.panels = (first, second)

        dispatcher.broadcast(Once(ShowFile("x")))

        self.assertIn(("second", Error("no such file")), log)
        self.assertEqual(dispatcher.current_status_message(), "no such file")
        clock.advance(dispatcher.config.status_message_seconds + 0.1)
        self.assertEqual(dispatcher.current_status_message(), "")

    def test_no_action_is_not_delivered(self) -> None:
        dispatcher, _cursor, _clock = make_dispatcher()
        log: list[tuple[str, Message]] = []
        dispatcher.panels = (_RecordingPanel("only", log),)
        dispatcher.broadcast(NO_ACTION)
        self.assertEqual(log, [])

    def test_illegal_reply_raises(self) -> None:
        dispatcher, _cursor, _clock = make_dispatcher()
        bad = _RecordingPanel("bad", [], {Once(ShowFile("x")): Repeatable(SetUp())})
        dispatcher.panels = (bad,)
        with self.assertRaises(MessageProtocolError):
            dispatcher.broadcast(Once(ShowFile("x")))

    def test_busy_repository_skips_refresh(self) -> None:
        dispatcher, cursor, _clock = make_dispatcher()
        cursor.set_parent_commit()
        with dispatcher.repository.session():
            dispatcher.broadcast(Repeatable(ChangeShowCommit()))
        self.assertEqual(dispatcher.commit_summary.content, f"{C3}: third")
        self.assertEqual(dispatcher.current_status_message(), "")


if __name__ == "__main__":
    unittest.main()
