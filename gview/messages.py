"""Typed messages exchanged between the dispatcher and panels.

A message is one of ``Once``, ``Repeatable``, ``NoAction`` or ``Error``.
Replies must step down a class: ``Repeatable`` may answer with ``Once``,
``Once`` only with ``NoAction``/``Error``, and ``Error`` only with
``NoAction``. ``check_transition`` enforces this for every reply, which
bounds a propagation chain to three hops.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .errors import MessageProtocolError
from .filtering import FilterMode


class OnceOperation:
    """Single-shot directive; acted on at most once per origination."""


class RepeatableOperation:
    """Idempotent state-sync notification, safe for every panel to receive."""


@dataclass(frozen=True)
class ShowFile(OnceOperation):
    path: str


@dataclass(frozen=True)
class JumpToContentView(OnceOperation):
    pass


@dataclass(frozen=True)
class JumpToFileList(OnceOperation):
    pass


@dataclass(frozen=True)
class OpenCommitModal(OnceOperation):
    pass


@dataclass(frozen=True)
class CloseCommitModal(OnceOperation):
    pass


@dataclass(frozen=True)
class SetCommitById(OnceOperation):
    commit_id: str


@dataclass(frozen=True)
class ShowHelpModal(OnceOperation):
    pass


@dataclass(frozen=True)
class CloseHelpModal(OnceOperation):
    pass


@dataclass(frozen=True)
class SetUp(RepeatableOperation):
    pass


@dataclass(frozen=True)
class ChangeShowCommit(RepeatableOperation):
    pass


@dataclass(frozen=True)
class Filtering(RepeatableOperation):
    query: str
    mode: FilterMode


@dataclass(frozen=True)
class Once:
    operation: OnceOperation

    def __post_init__(self) -> None:
        if not isinstance(self.operation, OnceOperation):
            raise TypeError(f"Once cannot carry {type(self.operation).__name__}")


@dataclass(frozen=True)
class Repeatable:
    operation: RepeatableOperation

    def __post_init__(self) -> None:
        if not isinstance(self.operation, RepeatableOperation):
            raise TypeError(f"Repeatable cannot carry {type(self.operation).__name__}")


@dataclass(frozen=True)
class NoAction:
    pass


@dataclass(frozen=True)
class Error:
    message: str


Message = Union[Once, Repeatable, NoAction, Error]

NO_ACTION = NoAction()

_ALLOWED_REPLIES: dict[type, tuple[type, ...]] = {
    Repeatable: (Once, NoAction, Error),
    Once: (NoAction, Error),
    Error: (NoAction,),
}


def check_transition(received: Message, reply: Message) -> Message:
    """Return ``reply`` if it is a legal answer to ``received``, else raise."""
    allowed = _ALLOWED_REPLIES.get(type(received))
    if allowed is None:
        raise MessageProtocolError(f"{type(received).__name__} must not be delivered to panels")
    if not isinstance(reply, allowed):
        raise MessageProtocolError(f"illegal reply {reply!r} to {received!r}")
    return reply
