"""Tests for message construction and the reply-transition rules."""

from __future__ import annotations

import unittest

from gview.errors import MessageProtocolError
from gview.filtering import FilterMode
from gview.messages import (
    NO_ACTION,
    ChangeShowCommit,
    Error,
    Filtering,
    JumpToFileList,
    NoAction,
    Once,
    Repeatable,
    SetUp,
    ShowFile,
    check_transition,
)


class MessageConstructionTests(unittest.TestCase):
    def test_once_rejects_repeatable_operation(self) -> None:
        with self.assertRaises(TypeError):
            Once(SetUp())  # type: ignore[arg-type]

    def test_repeatable_rejects_once_operation(self) -> None:
        with self.assertRaises(TypeError):
            Repeatable(ShowFile("a.txt"))  # type: ignore[arg-type]

    def test_messages_compare_by_value(self) -> None:
        self.assertEqual(Once(ShowFile("a.txt")), Once(ShowFile("a.txt")))
        self.assertEqual(Repeatable(Filtering("q", FilterMode.FUZZY)), Repeatable(Filtering("q", FilterMode.FUZZY)))
        self.assertNotEqual(Once(ShowFile("a.txt")), Once(ShowFile("b.txt")))
        self.assertEqual(NO_ACTION, NoAction())


class TransitionTests(unittest.TestCase):
    def test_allowed_replies(self) -> None:
        allowed = [
            (Repeatable(SetUp()), Once(ShowFile("a"))),
            (Repeatable(SetUp()), NO_ACTION),
            (Repeatable(ChangeShowCommit()), Error("boom")),
            (Once(ShowFile("a")), NO_ACTION),
            (Once(ShowFile("a")), Error("boom")),
            (Error("boom"), NO_ACTION),
        ]
        for received, reply in allowed:
            self.assertIs(check_transition(received, reply), reply)

    def test_forbidden_replies(self) -> None:
        forbidden = [
            (Repeatable(SetUp()), Repeatable(ChangeShowCommit())),
            (Once(ShowFile("a")), Once(JumpToFileList())),
            (Once(ShowFile("a")), Repeatable(SetUp())),
            (Error("boom"), Error("again")),
            (Error("boom"), Once(ShowFile("a"))),
        ]
        for received, reply in forbidden:
            with self.assertRaises(MessageProtocolError):
                check_transition(received, reply)

    def test_no_action_is_never_delivered(self) -> None:
        with self.assertRaises(MessageProtocolError):
            check_transition(NO_ACTION, NO_ACTION)


if __name__ == "__main__":
    unittest.main()
