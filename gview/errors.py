"""Exception hierarchy shared by the repository layer and the dispatcher.

Recoverable failures are turned into ``Error`` messages by panels; only
``RepositoryUnavailable`` is fatal, and only at startup.
"""

from __future__ import annotations


class GviewError(Exception):
    """Base class for every failure gview reports to the user."""


class RepositoryUnavailable(GviewError):
    """No repository (or no HEAD commit) could be found from the start path."""


class RepositoryError(GviewError):
    """The repository could not be read at the current cursor."""


class CommitResolutionError(GviewError):
    """A commit identifier could not be resolved to exactly one commit."""

    def __init__(self, commit_id: str, message: str) -> None:
        super().__init__(message)
        self.commit_id = commit_id


class AmbiguousCommit(CommitResolutionError):
    def __init__(self, commit_id: str, matches: list[str]) -> None:
        super().__init__(commit_id, f"Ambiguous commit id: {commit_id} ({len(matches)} matches)")
        self.matches = matches


class CommitNotFound(CommitResolutionError):
    def __init__(self, commit_id: str) -> None:
        super().__init__(commit_id, f"Commit not found: {commit_id}")


class ContentRetrievalError(GviewError):
    """File content or blame for a path could not be produced."""

    def __init__(self, path: str, message: str) -> None:
        super().__init__(message)
        self.path = path


class PathNotFound(ContentRetrievalError):
    def __init__(self, path: str, commit_id: str) -> None:
        super().__init__(path, f"{path} does not exist at {commit_id[:8]}")


class BlameUnavailable(ContentRetrievalError):
    def __init__(self, path: str, detail: str = "") -> None:
        message = f"failed to blame {path}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(path, message)


class LockContention(GviewError):
    """The shared repository is busy; the requesting action becomes a no-op."""


class MessageProtocolError(RuntimeError):
    """A panel broke the message transition rules (a programming defect)."""
