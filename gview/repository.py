"""Read-only commit cursor over a git repository.

Every query shells out to the ``git`` executable and converts failures into
``gview.errors`` exceptions at this boundary. The cursor only ever moves to
commits that have been verified to exist.
"""

from __future__ import annotations

import contextlib
import logging
import re
import subprocess
import threading
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from .errors import (
    AmbiguousCommit,
    BlameUnavailable,
    CommitNotFound,
    LockContention,
    PathNotFound,
    RepositoryError,
    RepositoryUnavailable,
)
from .filtering import NOT_FOUND_SENTINEL

logger = logging.getLogger(__name__)

MAX_FILE_SIZE = 16 * 1024
FULL_COMMIT_ID_RE = re.compile(r"[0-9a-fA-F]{40}")
_BLAME_HEADER_RE = re.compile(r"^([0-9a-f]{40}|[0-9a-f]{64}) (\d+) (\d+)(?: (\d+))?$")
NO_COMMIT_MESSAGE = "No commit message"
UNKNOWN_AUTHOR = "Unknown"


@dataclass(frozen=True)
class BlameLine:
    """One physical line of a file with the commit that last touched it."""

    line_number: int
    author: str
    commit_id: str
    content: str


def _run_git(repo_root: Path, args: list[str], input_bytes: bytes | None = None) -> subprocess.CompletedProcess[bytes]:
    logger.debug("git %s", " ".join(args))
    try:
        return subprocess.run(
            ["git", "-C", str(repo_root), *args],
            input=input_bytes,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            check=False,
        )
    except (OSError, subprocess.SubprocessError) as exc:
        raise RepositoryError(f"git {args[0]} failed: {exc}") from exc


def _stderr_text(proc: subprocess.CompletedProcess[bytes]) -> str:
    return proc.stderr.decode("utf-8", errors="replace").strip()


def _split_lines(text: str) -> list[str]:
    """Split on ``\\n`` like a line reader: no trailing empty line, ``\\r`` dropped."""
    if not text:
        return []
    lines = text.split("\n")
    if text.endswith("\n"):
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def _parse_ls_tree(output: bytes) -> list[tuple[str, str, int | None, str]]:
    """Parse ``git ls-tree -r -l -z`` records into ``(type, oid, size, path)``."""
    entries: list[tuple[str, str, int | None, str]] = []
    for record in output.split(b"\0"):
        if not record:
            continue
        meta, _, raw_path = record.partition(b"\t")
        fields = meta.split()
        if len(fields) < 4:
            continue
        _mode, kind, oid, size_text = fields[:4]
        size = int(size_text) if size_text.isdigit() else None
        entries.append((kind.decode("ascii"), oid.decode("ascii"), size, raw_path.decode("utf-8", errors="replace")))
    return entries


def _parse_cat_file_batch(output: bytes) -> dict[str, bytes]:
    """Parse ``git cat-file --batch`` output into ``oid -> content``."""
    contents: dict[str, bytes] = {}
    pos = 0
    while pos < len(output):
        header_end = output.find(b"\n", pos)
        if header_end < 0:
            break
        header = output[pos:header_end].split()
        pos = header_end + 1
        if len(header) != 3:
            # "<oid> missing" has no payload.
            continue
        oid, _kind, size_text = header
        size = int(size_text)
        contents[oid.decode("ascii")] = output[pos:pos + size]
        pos += size + 1
    return contents


def _parse_blame_porcelain(output: str) -> dict[int, tuple[str, str]]:
    """Map final line numbers to ``(commit_id, author)`` from porcelain blame."""
    authors: dict[str, str] = {}
    line_commits: dict[int, str] = {}
    current_commit: str | None = None
    for line in output.split("\n"):
        if line.startswith("\t"):
            continue
        match = _BLAME_HEADER_RE.match(line)
        if match is not None:
            current_commit = match.group(1)
            line_commits[int(match.group(3))] = current_commit
            continue
        if current_commit is not None and line.startswith("author "):
            authors.setdefault(current_commit, line[len("author "):])
    return {
        line_number: (commit_id, authors.get(commit_id) or UNKNOWN_AUTHOR)
        for line_number, commit_id in line_commits.items()
    }


class RepositoryCursor:
    """A repository handle plus the commit currently being browsed."""

    def __init__(self, root: Path, start_commit_id: str) -> None:
        self.root = root
        self.start_commit_id = start_commit_id
        self.current_commit_id = start_commit_id

    @classmethod
    def discover(cls, path: Path) -> RepositoryCursor:
        """Open the repository enclosing ``path`` positioned at its HEAD."""
        try:
            proc = _run_git(path, ["rev-parse", "--show-toplevel"])
        except RepositoryError as exc:
            raise RepositoryUnavailable(str(exc)) from exc
        if proc.returncode != 0:
            raise RepositoryUnavailable(f"no git repository at {path}")
        root = Path(proc.stdout.decode("utf-8", errors="replace").strip())

        head = _run_git(root, ["rev-parse", "--verify", "--quiet", "HEAD^{commit}"])
        if head.returncode != 0:
            raise RepositoryUnavailable(f"repository at {root} has no HEAD commit")
        start = head.stdout.decode("ascii").strip()
        logger.info("opened %s at %s", root, start)
        return cls(root, start)

    def _git(self, args: list[str], input_bytes: bytes | None = None) -> subprocess.CompletedProcess[bytes]:
        return _run_git(self.root, args, input_bytes=input_bytes)

    def _object_type(self, rev: str) -> str | None:
        proc = self._git(["cat-file", "-t", rev])
        if proc.returncode != 0:
            return None
        return proc.stdout.decode("ascii", errors="replace").strip()

    def _rev_list(self, args: list[str]) -> list[str]:
        proc = self._git(["rev-list", *args])
        if proc.returncode != 0:
            raise RepositoryError(f"git rev-list failed: {_stderr_text(proc)}")
        return proc.stdout.decode("ascii", errors="replace").split()

    def current_commit(self) -> tuple[str, str]:
        """Return ``(commit_id, message)`` for the cursor."""
        proc = self._git(["log", "-1", "--format=%B", self.current_commit_id, "--"])
        if proc.returncode != 0:
            raise RepositoryError(f"cannot read commit {self.current_commit_id}: {_stderr_text(proc)}")
        message = proc.stdout.decode("utf-8", errors="replace").rstrip("\n")
        return self.current_commit_id, message or NO_COMMIT_MESSAGE

    def set_parent_commit(self) -> None:
        """Move to the first parent; stay put on a root commit."""
        record = self._rev_list(["--parents", "-n", "1", self.current_commit_id])
        if len(record) > 1:
            self.current_commit_id = record[1]

    def set_next_commit(self) -> tuple[str, str]:
        """Move to the chronological successor on the starting HEAD's first-parent line.

        Scans the whole first-parent history on every call; there is no
        successor index.
        """
        history = self._rev_list(["--first-parent", "--reverse", self.start_commit_id])
        found = False
        for commit_id in history:
            if found:
                self.current_commit_id = commit_id
                break
            if commit_id == self.current_commit_id:
                found = True
        return self.current_commit()

    def _reachable_commit_ids(self) -> list[str]:
        return self._rev_list(["--all", self.start_commit_id])

    def set_commit_by_id(self, text: str) -> None:
        """Point the cursor at a full id or an unambiguous id prefix."""
        query = text.strip()
        if FULL_COMMIT_ID_RE.fullmatch(query):
            candidate = query.lower()
        else:
            if not query:
                raise CommitNotFound(text)
            prefix = query.lower()
            matches = [commit_id for commit_id in self._reachable_commit_ids() if commit_id.startswith(prefix)]
            if len(matches) > 1:
                raise AmbiguousCommit(text, matches)
            if not matches:
                raise CommitNotFound(text)
            candidate = matches[0]

        if self._object_type(candidate) != "commit":
            raise CommitNotFound(text)
        logger.info("cursor moved to %s", candidate)
        self.current_commit_id = candidate

    def commit_history(self) -> list[tuple[str, str]]:
        """Return ``(commit_id, summary)`` for every reachable commit, newest first."""
        proc = self._git(["log", "--all", "--format=%H%x00%s", self.start_commit_id, "--"])
        if proc.returncode != 0:
            raise RepositoryError(f"git log failed: {_stderr_text(proc)}")
        history: list[tuple[str, str]] = []
        for line in proc.stdout.decode("utf-8", errors="replace").splitlines():
            commit_id, _, summary = line.partition("\0")
            if commit_id:
                history.append((commit_id, summary))
        return history

    def enumerate_text_files(self) -> list[str]:
        """List small ASCII blobs of the current tree in pre-order walk order."""
        proc = self._git(["ls-tree", "-r", "-l", "-z", self.current_commit_id])
        if proc.returncode != 0:
            raise RepositoryError(f"cannot read tree of {self.current_commit_id}: {_stderr_text(proc)}")

        candidates = [
            (oid, path)
            for kind, oid, size, path in _parse_ls_tree(proc.stdout)
            if kind == "blob" and size is not None and size < MAX_FILE_SIZE
        ]
        if not candidates:
            return []

        batch_input = "".join(f"{oid}\n" for oid, _path in candidates).encode("ascii")
        batch = self._git(["cat-file", "--batch"], input_bytes=batch_input)
        if batch.returncode != 0:
            raise RepositoryError(f"git cat-file failed: {_stderr_text(batch)}")
        contents = _parse_cat_file_batch(batch.stdout)

        files: list[str] = []
        for oid, path in candidates:
            content = contents.get(oid)
            if content is not None and content.isascii():
                files.append(path)
        return files

    def read_file(self, path: str) -> bytes:
        """Return the bytes of ``path`` as stored in the current commit."""
        object_spec = f"{self.current_commit_id}:{path}"
        if self._object_type(object_spec) != "blob":
            raise PathNotFound(path, self.current_commit_id)
        blob = self._git(["cat-file", "blob", object_spec])
        if blob.returncode != 0:
            raise PathNotFound(path, self.current_commit_id)
        return blob.stdout

    def blame_lines(self, path: str) -> list[BlameLine]:
        """Return every line of ``path`` at the cursor with its blame attribution."""
        if path == NOT_FOUND_SENTINEL:
            return []

        content_bytes = self.read_file(path)

        blame = self._git(["blame", "--porcelain", self.current_commit_id, "--", path])
        if blame.returncode != 0:
            raise BlameUnavailable(path, _stderr_text(blame))
        attribution = _parse_blame_porcelain(blame.stdout.decode("utf-8", errors="replace"))

        lines: list[BlameLine] = []
        for line_number, content in enumerate(_split_lines(content_bytes.decode("utf-8", errors="replace")), start=1):
            origin = attribution.get(line_number)
            if origin is None:
                continue
            commit_id, author = origin
            lines.append(BlameLine(line_number=line_number, author=author, commit_id=commit_id, content=content))
        return lines


class SharedRepository:
    """Single owner of the cursor; hands it out one scoped session at a time."""

    def __init__(self, cursor: RepositoryCursor) -> None:
        self._cursor = cursor
        self._lock = threading.Lock()

    @contextlib.contextmanager
    def session(self) -> Iterator[RepositoryCursor]:
        if not self._lock.acquire(blocking=False):
            raise LockContention("repository is busy")
        try:
            yield self._cursor
        finally:
            self._lock.release()
