"""Commit view: history of the selected ref with a scroll position per ref.

Each ref identity (the full object id string) gets its own ``ViewIndex`` the
first time it is selected; switching back to a ref resumes where the user
left it. The window is only corrected to contain the active commit when
drawing, so moves never touch ``view_start_index``.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..actions import (
    ACTION_FIRST_LINE,
    ACTION_LAST_LINE,
    ACTION_NEXT_LINE,
    ACTION_PREV_LINE,
    VIEW_COMMIT,
)
from ..errors import ViewStateError
from ..repo.types import Commit, Oid
from ..ui_theme import CMP_COMMITVIEW_FOOTER, CMP_COMMITVIEW_ROW, CMP_COMMITVIEW_TITLE
from ..window import LineBuilder, RenderWindow

if TYPE_CHECKING:
    from ..repo.git import GitRepoData
    from ..runtime.channels import Channels

logger = logging.getLogger(__name__)

COMMIT_VIEW_TITLE = "Commits"
COMMIT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S %z"


@dataclass
class ViewIndex:
    active_index: int = 0
    view_start_index: int = 0


def format_commit_row(commit: Commit) -> str:
    when = commit.author_when.strftime(COMMIT_DATE_FORMAT)
    return f" {when} {commit.author_name} {commit.summary}"


class CommitView:
    """Paginated commit list for whichever ref was selected last."""

    def __init__(
        self,
        repo_data: GitRepoData,
        channels: Channels,
    ) -> None:
        self.repo_data = repo_data
        self.channels = channels
        self.active_oid: Oid | None = None
        self.active = False
        self.view_index: dict[str, ViewIndex] = {}
        self._lock = threading.Lock()
        self._handlers: dict[str, Callable[[], None]] = {
            ACTION_PREV_LINE: self._move_up_commit,
            ACTION_NEXT_LINE: self._move_down_commit,
            ACTION_FIRST_LINE: self._move_to_first_commit,
            ACTION_LAST_LINE: self._move_to_last_commit,
        }

    def view_id(self) -> str:
        return VIEW_COMMIT

    def initialise(self) -> None:
        logger.info("Initialising CommitView")

    def on_ref_select(self, ref_name: str, oid: Oid) -> None:
        """Make ``oid`` the active ref, loading its commits the first time only.

        ``DataLoadError`` from starting the load propagates and leaves the
        cache untouched.
        """
        logger.debug("CommitView selected ref %s at %s", ref_name, oid)
        with self._lock:
            if oid.id not in self.view_index:
                self.repo_data.load_commits(oid)
                self.view_index[oid.id] = ViewIndex()
            self.active_oid = oid
        self.channels.update_display()

    def _active_view_index(self) -> ViewIndex:
        view_index = self.view_index.get(self.active_oid.id) if self.active_oid is not None else None
        if view_index is None:
            raise ViewStateError(f"No ViewIndex exists for oid {self.active_oid}")
        return view_index

    def render(self, win: RenderWindow) -> None:
        logger.debug("Rendering CommitView")
        with self._lock:
            view_index = self._active_view_index()
            commits, loading = self.repo_data.commits(self.active_oid)
            rows = max(0, win.rows - 2)

            if rows > 0:
                row_diff = view_index.active_index - view_index.view_start_index
                if row_diff < 0:
                    view_index.view_start_index = view_index.active_index
                elif row_diff >= rows:
                    view_index.view_start_index += row_diff - rows + 1

            commit_index = view_index.view_start_index
            for row_index in range(rows):
                if commit_index >= len(commits):
                    break
                win.set_row(row_index + 1, 0, CMP_COMMITVIEW_ROW, format_commit_row(commits[commit_index]))
                commit_index += 1

            if rows > 0 and commits:
                win.set_selected_row(view_index.active_index - view_index.view_start_index + 1, self.active)

            win.draw_border()
            win.set_title(CMP_COMMITVIEW_TITLE, COMMIT_VIEW_TITLE)
            if loading:
                win.set_footer(CMP_COMMITVIEW_FOOTER, "Commits: Loading...")
            elif commits:
                win.set_footer(CMP_COMMITVIEW_FOOTER, f"Commit {view_index.active_index + 1} of {len(commits)}")
            else:
                win.set_footer(CMP_COMMITVIEW_FOOTER, "Commits: 0")

    def render_status_bar(self, line_builder: LineBuilder) -> None:
        return None

    def render_help_bar(self, line_builder: LineBuilder) -> None:
        return None

    def on_active_change(self, active: bool) -> None:
        logger.debug("CommitView active: %s", active)
        with self._lock:
            self.active = active

    def handle_key_press(self, key: str) -> None:
        logger.debug("CommitView handling key %r - NOP", key)

    def handle_action(self, action: str) -> None:
        """Move within the active ref's commits; no-op before any ref is selected."""
        logger.debug("CommitView handling action %s", action)
        with self._lock:
            handler = self._handlers.get(action)
            if handler is None or self.active_oid is None or self.active_oid.id not in self.view_index:
                return
            handler()

    def _commit_count(self) -> int:
        commits, _loading = self.repo_data.commits(self.active_oid)
        return len(commits)

    def _set_active_index(self, index: int) -> None:
        view_index = self.view_index[self.active_oid.id]
        if index == view_index.active_index:
            return
        view_index.active_index = index
        self.channels.update_display()

    def _move_up_commit(self) -> None:
        view_index = self.view_index[self.active_oid.id]
        if view_index.active_index > 0:
            self._set_active_index(view_index.active_index - 1)

    def _move_down_commit(self) -> None:
        view_index = self.view_index[self.active_oid.id]
        if view_index.active_index < self._commit_count() - 1:
            self._set_active_index(view_index.active_index + 1)

    def _move_to_first_commit(self) -> None:
        self._set_active_index(0)

    def _move_to_last_commit(self) -> None:
        commit_count = self._commit_count()
        if commit_count > 0:
            self._set_active_index(commit_count - 1)


__all__ = ["CommitView", "ViewIndex", "format_commit_row", "COMMIT_VIEW_TITLE"]
