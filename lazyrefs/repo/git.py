"""Repository data source backed by the ``git`` command line.

HEAD is read synchronously; branches, tags, and per-ref commit histories are
loaded on daemon threads and published into snapshots guarded by one lock.
Every background load always completes: failures are logged and published
as an empty result so loading placeholders never stick.
"""

from __future__ import annotations

import logging
import subprocess
import threading
from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING

from ..errors import DataLoadError
from .types import Branch, Commit, Oid, Tag

if TYPE_CHECKING:
    from ..runtime.channels import Channels

logger = logging.getLogger(__name__)

GIT_TIMEOUT_SECONDS = 30.0
COMMIT_LOG_LIMIT = 5000
_FIELD_SEP = "\x00"
_RECORD_SEP = "\x1e"


def run_git(repo_root: Path, args: list[str], timeout_seconds: float | None = GIT_TIMEOUT_SECONDS) -> str:
    """Run ``git -C repo_root *args`` and return stdout.

    ``timeout_seconds=None`` waits for git however long it takes.

    Raises ``DataLoadError`` when git cannot be started, times out, or exits
    with a non-zero status.
    """
    try:
        proc = subprocess.run(
            ["git", "-C", str(repo_root), *args],
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
            timeout=timeout_seconds,
        )
    except (OSError, subprocess.SubprocessError) as exc:
        raise DataLoadError(f"git {' '.join(args)} failed: {exc}") from exc
    if proc.returncode != 0:
        detail = proc.stderr.strip() or f"exit status {proc.returncode}"
        raise DataLoadError(f"git {' '.join(args)} failed: {detail}")
    return proc.stdout


def discover_repo_root(path: Path) -> Path:
    """Return the work-tree root containing ``path`` or raise ``DataLoadError``."""
    output = run_git(path, ["rev-parse", "--show-toplevel"])
    return Path(output.strip()).resolve()


def parse_ref_records(output: str) -> list[tuple[str, Oid]]:
    """Parse ``for-each-ref`` output of ``name NUL objectname NUL peeled`` lines.

    Annotated tags carry a peeled commit id in the third field; it is used
    in preference to the tag object's own id.
    """
    records: list[tuple[str, Oid]] = []
    for line in output.splitlines():
        if not line:
            continue
        parts = line.split(_FIELD_SEP)
        if len(parts) < 2 or not parts[0] or not parts[1]:
            continue
        peeled = parts[2] if len(parts) > 2 else ""
        records.append((parts[0], Oid(peeled or parts[1])))
    return records


def parse_commit_records(output: str) -> list[Commit]:
    """Parse ``git log`` output written with ``_commit_log_format``."""
    commits: list[Commit] = []
    for record in output.split(_RECORD_SEP):
        record = record.strip("\n")
        if not record:
            continue
        parts = record.split(_FIELD_SEP)
        if len(parts) != 4:
            continue
        oid_text, author_name, author_date, summary = parts
        try:
            author_when = datetime.fromisoformat(author_date)
        except ValueError:
            logger.debug("Skipping commit %s with unparsable date %r", oid_text, author_date)
            continue
        commits.append(Commit(oid=Oid(oid_text), author_name=author_name, author_when=author_when, summary=summary))
    return commits


def _commit_log_format() -> str:
    return "%H%x00%an%x00%aI%x00%s%x1e"


class GitRepoData:
    """Thread-safe snapshots of HEAD, local refs, and commit histories.

    ``timeout_seconds`` bounds the synchronous HEAD lookup only.
    """

    def __init__(
        self,
        repo_root: Path,
        channels: Channels | None = None,
        timeout_seconds: float = GIT_TIMEOUT_SECONDS,
        commit_limit: int = COMMIT_LOG_LIMIT,
    ) -> None:
        self.repo_root = repo_root
        self.channels = channels
        self.timeout_seconds = timeout_seconds
        self.commit_limit = commit_limit
        self._lock = threading.Lock()
        self._head: Oid | None = None
        self._head_branch: Branch | None = None
        self._branches: list[Branch] = []
        self._branches_loading = True
        self._tags: list[Tag] = []
        self._tags_loading = True
        self._commits: dict[str, list[Commit]] = {}
        self._commits_loading: set[str] = set()

    def _git(self, args: list[str]) -> str:
        return run_git(self.repo_root, args, self.timeout_seconds)

    def _git_background(self, args: list[str]) -> str:
        # Background loads are never cancelled or timed out.
        return run_git(self.repo_root, args, None)

    def load_head(self) -> tuple[Oid, Branch | None]:
        """Resolve HEAD and, unless detached, the branch it points at."""
        logger.debug("Loading HEAD for %s", self.repo_root)
        head = Oid(self._git(["rev-parse", "--verify", "HEAD"]).strip())
        try:
            branch_name = self._git(["symbolic-ref", "--quiet", "--short", "HEAD"]).strip()
        except DataLoadError:
            branch_name = ""
        head_branch = Branch(name=branch_name, oid=head) if branch_name else None
        with self._lock:
            self._head = head
            self._head_branch = head_branch
        return head, head_branch

    def head(self) -> tuple[Oid | None, Branch | None]:
        with self._lock:
            return self._head, self._head_branch

    def local_branches(self) -> tuple[list[Branch], bool]:
        with self._lock:
            return list(self._branches), self._branches_loading

    def local_tags(self) -> tuple[list[Tag], bool]:
        with self._lock:
            return list(self._tags), self._tags_loading

    def commits(self, oid: Oid) -> tuple[list[Commit], bool]:
        with self._lock:
            return list(self._commits.get(oid.id, [])), oid.id in self._commits_loading

    def _start_worker(self, name: str, target: Callable[[], None]) -> None:
        try:
            worker = threading.Thread(target=target, name=name, daemon=True)
            worker.start()
        except RuntimeError as exc:
            raise DataLoadError(f"Unable to start {name}: {exc}") from exc

    def _read_refs(self, ref_prefix: str) -> list[tuple[str, Oid]]:
        output = self._git_background(
            [
                "for-each-ref",
                "--format=%(refname:short)%00%(objectname)%00%(*objectname)",
                ref_prefix,
            ]
        )
        return parse_ref_records(output)

    @staticmethod
    def _deliver(on_loaded: Callable[[list], None], loaded: list, what: str) -> None:
        try:
            on_loaded(loaded)
        except Exception:
            logger.exception("%s loaded callback failed", what)

    def load_local_branches(self, on_loaded: Callable[[list[Branch]], None]) -> None:
        """Load ``refs/heads`` in the background, then call ``on_loaded`` once."""

        def worker() -> None:
            try:
                branches = [Branch(name=name, oid=oid) for name, oid in self._read_refs("refs/heads")]
            except DataLoadError:
                logger.exception("Failed to load local branches")
                branches = []
            with self._lock:
                self._branches = branches
                self._branches_loading = False
            self._deliver(on_loaded, list(branches), "Branches")

        with self._lock:
            self._branches_loading = True
        self._start_worker("lazyrefs-load-branches", worker)

    def load_local_tags(self, on_loaded: Callable[[list[Tag]], None]) -> None:
        """Load ``refs/tags`` in the background, then call ``on_loaded`` once."""

        def worker() -> None:
            try:
                tags = [Tag(name=name, oid=oid) for name, oid in self._read_refs("refs/tags")]
            except DataLoadError:
                logger.exception("Failed to load local tags")
                tags = []
            with self._lock:
                self._tags = tags
                self._tags_loading = False
            self._deliver(on_loaded, list(tags), "Tags")

        with self._lock:
            self._tags_loading = True
        self._start_worker("lazyrefs-load-tags", worker)

    def load_commits(self, oid: Oid) -> None:
        """Load the history reachable from ``oid`` in the background."""

        def worker() -> None:
            try:
                output = self._git_background(
                    [
                        "log",
                        f"--max-count={self.commit_limit}",
                        f"--format={_commit_log_format()}",
                        oid.id,
                        "--",
                    ]
                )
                commits = parse_commit_records(output)
            except DataLoadError:
                logger.exception("Failed to load commits for %s", oid)
                commits = []
            with self._lock:
                self._commits[oid.id] = commits
                self._commits_loading.discard(oid.id)
            logger.debug("Loaded %d commits for %s", len(commits), oid)
            if self.channels is not None:
                self.channels.update_display()

        with self._lock:
            self._commits_loading.add(oid.id)
        self._start_worker(f"lazyrefs-load-commits-{oid.short()}", worker)


__all__ = [
    "GIT_TIMEOUT_SECONDS",
    "COMMIT_LOG_LIMIT",
    "run_git",
    "discover_repo_root",
    "parse_ref_records",
    "parse_commit_records",
    "GitRepoData",
]
